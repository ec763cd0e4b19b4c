"""Process-mode command handler."""

from __future__ import annotations

import argparse

from ..core import collect_process
from ..formatters import JsonFormatter
from ..utils import output_text


def cmd_process(args: argparse.Namespace) -> int:
    """Print one process's detail, or ``null`` if it does not exist.

    A missing process is an expected race, not a failure: exit code stays 0.
    """
    detail = collect_process(args.pid, interval_ms=args.cpu_update_interval_ms)
    output_text(JsonFormatter(args.indent).format(detail))
    return 0
