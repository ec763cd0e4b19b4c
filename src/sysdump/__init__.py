"""
sysdump

Print a point-in-time snapshot of the host (or of one process) as JSON.
"""

from __future__ import annotations

from .core import Aggregator, collect_process, collect_system

__all__ = ["Aggregator", "__version__", "collect_process", "collect_system"]

__version__ = "0.1.0"
