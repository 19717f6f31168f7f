"""Assemble a component folder into generated source."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from riptide.assembler import ComponentAssembler, ComponentDescriptor, Variant
from riptide.config import Settings
from riptide.errors import ComponentNotFoundError
from riptide.handlers import HandlerRegistry, create_default_registry
from riptide.loading import load_object, parse_handler_option
from riptide.tasks import TaskHandlerRegistry
from riptide.templates import PlainTemplateParser, TemplateParser


def register_assemble_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `assemble` subcommand and its CLI arguments."""
    parser = subparsers.add_parser("assemble", help="Generate the source unit for one component.")
    parser.add_argument("component", help="Component root directory.")
    parser.add_argument("--name", default=None, help="Component name (default: folder name).")

    variant_group = parser.add_mutually_exclusive_group()
    variant_group.add_argument(
        "--client",
        dest="variant",
        action="store_const",
        const=Variant.CLIENT,
        help="Routes and views only.",
    )
    variant_group.add_argument(
        "--server",
        dest="variant",
        action="store_const",
        const=Variant.SERVER,
        help="Full resource set (default).",
    )
    parser.set_defaults(variant=Variant.SERVER)

    parser.add_argument("--out", default=None, help="Write to file instead of stdout.")
    parser.add_argument(
        "--parser",
        dest="parser",
        default=None,
        help="Template parser as module:attr (default: RIPTIDE_TEMPLATE_PARSER or the plain parser).",
    )
    parser.add_argument(
        "--handler",
        dest="handlers",
        action="append",
        default=[],
        help="Extra template handler as ext=module:attr. Repeatable.",
    )
    parser.add_argument(
        "--task",
        dest="tasks",
        action="append",
        default=[],
        help="Qualified task class name, e.g. Admin::CleanupTask. Repeatable.",
    )


def build_registry(handler_options: list[str]) -> HandlerRegistry:
    """Default registry plus any --handler registrations, applied in order."""
    registry = create_default_registry()
    for raw_option in handler_options:
        extension, handler = parse_handler_option(raw_option)
        registry.register(extension, handler)
    return registry


def resolve_parser(cli_value: str | None, settings: Settings) -> TemplateParser:
    import_path = cli_value or settings.template_parser
    if not import_path:
        return PlainTemplateParser()
    return load_object(import_path)


def run_assemble_command(args: argparse.Namespace) -> int:
    """Run one assembly and write the result."""
    component_dir = Path(args.component).expanduser().resolve()
    if not component_dir.is_dir():
        raise ComponentNotFoundError(str(component_dir))

    settings = Settings()
    descriptor = ComponentDescriptor.for_path(str(component_dir), name=args.name, variant=args.variant)
    print(
        f"[assemble] component={descriptor.name} variant={descriptor.variant.value} root={component_dir}",
        file=sys.stderr,
        flush=True,
    )

    assembler = ComponentAssembler(
        registry=build_registry(args.handlers),
        parser=resolve_parser(args.parser, settings),
        tasks=TaskHandlerRegistry.from_names(args.tasks),
        settings=settings,
    )
    generated_source = assembler.assemble(descriptor)

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(generated_source, encoding="utf-8")
        print(f"[assemble] wrote {output_path}", file=sys.stderr, flush=True)
    else:
        print(generated_source, end="")

    return 0
