"""Entry point wiring parser, logging and commands."""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

from .cli_commands import cmd_add, cmd_auth, cmd_move, cmd_reorder
from .cli_parser import build_parser as build_cli_parser
from .constants import EXIT_USAGE, LOG_FORMAT, PACKAGE_NAME

__all__ = ["build_parser", "main", "cmd_add", "cmd_auth", "cmd_move", "cmd_reorder"]


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = build_cli_parser(commands=sys.modules[__name__])
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version(PACKAGE_NAME))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    configure_logging(getattr(args, "verbose", False))
    if not getattr(args, "command", None):
        parser.print_help()
        return EXIT_USAGE
    return args.func(args)

