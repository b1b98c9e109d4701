"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys

from .codegen.cli_integration import create_codegen_subparser
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="idl-codegen",
        description="Generate source code from interface-definition models",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")

    subparsers = parser.add_subparsers(dest="command")
    create_codegen_subparser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv``.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    logger.debug("Running command %s", args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
