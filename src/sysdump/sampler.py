"""Two-point CPU usage sampling."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from .config import settings

if TYPE_CHECKING:
    from .providers.base import SnapshotProvider
    from .providers.records import CpuTicks, RawCpuSummary, RawProcess

log = logging.getLogger(__name__)


def busy_percent(before: CpuTicks, after: CpuTicks) -> float:
    """Share of time spent busy between two cumulative readings, in percent.

    Not clamped: accounting quirks on some platforms can push it past 100.
    """
    total = after.total - before.total
    if total <= 0:
        return 0.0
    return (after.busy - before.busy) / total * 100.0


class CpuSampler:
    """Blocking two-point sampler.

    Usage percentages only mean something as a delta over elapsed wall-clock
    time, so the wait is a plain ``sleep`` on the calling thread and always
    runs to completion.
    """

    def __init__(
        self,
        interval_ms: int | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval_ms is None:
            interval_ms = settings.cpu_update_interval_ms
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be >= 0, got {interval_ms}")
        self.interval_ms = interval_ms
        self._sleep = sleep

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    def wait(self) -> None:
        log.debug("cpu sampling window", extra={"interval_ms": self.interval_ms})
        self._sleep(self.interval_seconds)

    def sample(self, provider: SnapshotProvider) -> RawCpuSummary:
        provider.refresh_cpu()
        self.wait()
        provider.refresh_cpu()
        return provider.cpus()

    def sample_process(self, provider: SnapshotProvider, pid: int) -> RawProcess | None:
        """Measure one process over the window; None if it is gone."""
        if not provider.refresh_process(pid):
            return None
        self.wait()
        return provider.process(pid)
