"""Core snapshot aggregation logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .categories import Category, CategorySet
from .collectors import (
    CPUCollector,
    DiskCollector,
    LoadAvgCollector,
    MemoryCollector,
    NetworkCollector,
    ProcessCollector,
    SystemCollector,
    TemperatureCollector,
    UserCollector,
    normalize_process,
)
from .collectors.base import BaseCollector
from .errors import AppError
from .providers import SnapshotProvider, get_default_provider
from .sampler import CpuSampler

log = logging.getLogger(__name__)


class Aggregator:
    """Compose one document from a provider.

    The provider is owned by the aggregator for one invocation and is never
    shared.
    """

    def __init__(self, provider: SnapshotProvider, sampler: CpuSampler | None = None) -> None:
        self.provider = provider
        self.sampler = sampler or CpuSampler()

    def _collector(self, category: Category) -> BaseCollector:
        if category is Category.CPU:
            return CPUCollector(self.provider, self.sampler)
        collectors: dict[Category, type[BaseCollector]] = {
            Category.DISK: DiskCollector,
            Category.LOAD_AVG: LoadAvgCollector,
            Category.MEMORY: MemoryCollector,
            Category.NETWORK: NetworkCollector,
            Category.PROCESS: ProcessCollector,
            Category.SYSTEM: SystemCollector,
            Category.TEMPERATURE: TemperatureCollector,
            Category.USER: UserCollector,
        }
        return collectors[category](self.provider)

    def system(self, selection: CategorySet | None = None) -> dict[str, Any]:
        """Collect every selected category.

        A category that fails is rendered as ``null``; the rest still report.
        This includes cpu, memory and process when the full-system refresh
        they depend on fails.
        """
        if selection is None:
            selection = CategorySet.all()

        if selection.needs_full_refresh():
            try:
                self.provider.refresh_all()
            except Exception:
                log.warning("system refresh failed", exc_info=True)

        snapshot: dict[str, Any] = {}
        for category in selection:
            collector = self._collector(category)
            try:
                snapshot[collector.name] = collector.collect()
            except Exception:
                log.warning(
                    "category unavailable",
                    exc_info=True,
                    extra={"category": collector.name},
                )
                snapshot[collector.name] = None

        return snapshot

    def process(self, pid: int) -> dict[str, Any] | None:
        """Report one process, or None if it does not exist."""
        raw = self.sampler.sample_process(self.provider, pid)
        if raw is None:
            log.debug("process not found", extra={"pid": pid})
            return None
        return normalize_process(raw)


def _default_provider() -> SnapshotProvider:
    try:
        return get_default_provider()
    except Exception as e:
        raise AppError(
            exit_code=1,
            code="provider_unavailable",
            message=f"could not initialise the system provider: {e}",
        ) from e


def collect_system(
    tags: Iterable[str | Category] = (),
    *,
    interval_ms: int | None = None,
    provider: SnapshotProvider | None = None,
) -> dict[str, Any]:
    """Collect a system-mode document.

    Args:
        tags: Category tags to include; empty means all of them.
        interval_ms: CPU sampling window (default from settings).
        provider: Provider to read from (default: the platform's).

    Returns:
        Dictionary with one key per selected category.
    """
    aggregator = Aggregator(provider or _default_provider(), CpuSampler(interval_ms))
    return aggregator.system(CategorySet.from_tags(tags))


def collect_process(
    pid: int,
    *,
    interval_ms: int | None = None,
    provider: SnapshotProvider | None = None,
) -> dict[str, Any] | None:
    """Collect a process-mode document; None if *pid* does not exist."""
    aggregator = Aggregator(provider or _default_provider(), CpuSampler(interval_ms))
    return aggregator.process(pid)
