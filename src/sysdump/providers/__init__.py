"""Snapshot providers, one per operating system family."""

from __future__ import annotations

import os
import sys

from .base import SnapshotProvider
from .psutil_provider import PsutilProvider

__all__ = ["PsutilProvider", "SnapshotProvider", "get_default_provider"]


def get_default_provider() -> SnapshotProvider:
    """Return the provider for the running platform."""
    if sys.platform.startswith("linux"):
        from .linux import LinuxProvider

        return LinuxProvider()

    if os.name == "posix":
        from .posix import PosixProvider

        return PosixProvider()

    return PsutilProvider()
