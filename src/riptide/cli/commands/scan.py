"""List the resources a component would contribute, without generating code."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from riptide.cli.commands.assemble import build_registry
from riptide.config import Settings
from riptide.discovery import ResourceDiscoverer
from riptide.errors import ComponentNotFoundError


def register_scan_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `scan` subcommand and its CLI arguments."""
    parser = subparsers.add_parser(
        "scan",
        help="Show discovered routes, views, controllers, models and initializers.",
    )
    parser.add_argument("component", help="Component root directory.")
    parser.add_argument(
        "--handler",
        dest="handlers",
        action="append",
        default=[],
        help="Extra template handler as ext=module:attr, so its views are listed. Repeatable.",
    )


def run_scan_command(args: argparse.Namespace) -> int:
    """Print one line per discovered resource, grouped by kind."""
    component_dir = Path(args.component).expanduser().resolve()
    if not component_dir.is_dir():
        raise ComponentNotFoundError(str(component_dir))

    settings = Settings()
    discoverer = ResourceDiscoverer(
        str(component_dir),
        registry=build_registry(args.handlers),
        source_extension=settings.normalized_source_ext,
        controller_suffix=settings.controller_suffix,
    )
    print(f"[scan] root={discoverer.root_path}", file=sys.stderr, flush=True)

    for kind, resources in discoverer.discover_all().items():
        for resource in resources:
            print(f"{kind.value}\t{resource.logical_name}\t{resource.absolute_path}")

    return 0
