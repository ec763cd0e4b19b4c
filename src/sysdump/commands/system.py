"""System-mode command handler."""

from __future__ import annotations

import argparse

from ..core import collect_system
from ..formatters import JsonFormatter
from ..utils import output_text


def cmd_system(args: argparse.Namespace) -> int:
    """Print one snapshot of the selected categories."""
    document = collect_system(args.categories, interval_ms=args.cpu_update_interval_ms)
    output_text(JsonFormatter(args.indent).format(document))
    return 0
