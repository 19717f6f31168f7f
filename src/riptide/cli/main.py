"""CLI entrypoint for assembling and inspecting components."""
from __future__ import annotations

import argparse
import sys

from riptide.cli.commands.assemble import register_assemble_command, run_assemble_command
from riptide.cli.commands.scan import register_scan_command, run_scan_command


def build_parser() -> argparse.ArgumentParser:
    """Create the root argparse parser and register subcommands."""
    parser = argparse.ArgumentParser(prog="riptide", description="Assemble component folders into generated source.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_assemble_command(subparsers)
    register_scan_command(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Dispatch the selected subcommand and normalize exit codes."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "assemble":
        try:
            return run_assemble_command(args)
        except Exception as exc:
            print(f"riptide: {exc}", file=sys.stderr)
            return 1
    if args.command == "scan":
        try:
            return run_scan_command(args)
        except Exception as exc:
            print(f"riptide: {exc}", file=sys.stderr)
            return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
