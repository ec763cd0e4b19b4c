"""CLI interface for sysdump."""

from __future__ import annotations

import argparse
import logging
import sys

from .categories import Category
from .commands.process import cmd_process
from .commands.system import cmd_system
from .config import settings
from .errors import AppError
from .logging import configure_logging

log = logging.getLogger(__name__)


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _category(raw: str) -> Category:
    try:
        return Category(raw)
    except ValueError:
        choices = ", ".join(c.value for c in Category)
        raise argparse.ArgumentTypeError(
            f"unknown category {raw!r} (choose from {choices})"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="sysdump",
        description="Print a snapshot of the host or of one process as JSON",
    )

    # Global options
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON output",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages to stderr",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_interval_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--cpu-update-interval-ms",
            type=_non_negative_int,
            default=settings.cpu_update_interval_ms,
            metavar="N",
            help=f"CPU sampling window in ms (default: {settings.cpu_update_interval_ms})",
        )

    # system command
    p_system = subparsers.add_parser(
        "system",
        help="Snapshot system-wide metrics",
    )
    p_system.add_argument(
        "categories",
        nargs="*",
        type=_category,
        metavar="CATEGORY",
        help=f"Categories to include (default: all). One of: {', '.join(c.value for c in Category)}",
    )
    add_interval_arg(p_system)
    p_system.set_defaults(func=cmd_system)

    # process command
    p_process = subparsers.add_parser(
        "process",
        help="Report one process in detail (null if it does not exist)",
    )
    p_process.add_argument(
        "pid",
        type=_non_negative_int,
        help="Process ID to report",
    )
    add_interval_arg(p_process)
    p_process.set_defaults(func=cmd_process)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else None)

    if args.version:
        from . import __version__

        sys.stdout.write(f"sysdump version {__version__}\n")
        raise SystemExit(0)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    args.indent = 2 if args.pretty else settings.json_indent

    try:
        rc = int(args.func(args))
    except AppError as e:
        log.error(e.message, extra={"code": e.code})
        sys.stderr.write(f"sysdump: {e.message}\n")
        rc = e.exit_code

    raise SystemExit(rc)
