"""Abstract snapshot provider."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Self

from ..sampler import busy_percent
from .records import (
    CpuInfo,
    CpuTicks,
    LoadAverage,
    RawCpu,
    RawCpuSummary,
    RawDisk,
    RawIdentity,
    RawMemory,
    RawNetworkInterface,
    RawProcess,
    RawSensor,
    RawUser,
)

log = logging.getLogger(__name__)


class SnapshotProvider(ABC):
    """Boundary between the shaping logic and the operating system.

    ``cpus()``, ``memory()``, ``processes()`` and ``process_count()`` serve
    state captured by ``refresh_all()``/``refresh_cpu()``; every other
    accessor reads the OS when called. Constructing a provider must not
    touch the OS.
    """

    def __init__(self) -> None:
        self._cpu_previous: tuple[CpuTicks, list[CpuTicks]] | None = None
        self._cpu_current: tuple[CpuTicks, list[CpuTicks]] | None = None
        self._memory: RawMemory | None = None
        self._pids: list[int] | None = None

    # ── refresh ──────────────────────────────────────────────────────

    def refresh_all(self) -> Self:
        """Refresh CPU, memory and the process table.

        Each part is read on its own. One that fails is logged and left
        unset, so only its accessor raises afterwards.
        """
        parts = (
            ("cpu", self.refresh_cpu),
            ("memory", self._refresh_memory),
            ("process", self._refresh_pids),
        )
        for category, refresh in parts:
            try:
                refresh()
            except Exception:
                log.warning("refresh failed", exc_info=True, extra={"category": category})
        return self

    def _refresh_memory(self) -> None:
        self._memory = self.read_memory()

    def _refresh_pids(self) -> None:
        self._pids = self.read_pids()

    def refresh_cpu(self) -> Self:
        """Take a CPU reading; the one before it becomes the baseline."""
        reading = (self.read_cpu_ticks(), self.read_cpu_ticks_per_core())
        self._cpu_previous = self._cpu_current or reading
        self._cpu_current = reading
        return self

    @abstractmethod
    def refresh_process(self, pid: int) -> bool:
        """Record a per-process baseline; False if *pid* does not exist."""
        ...

    # ── captured state ───────────────────────────────────────────────

    def cpus(self) -> RawCpuSummary:
        if self._cpu_current is None or self._cpu_previous is None:
            raise RuntimeError("cpus() called before refresh_cpu()")
        before_total, before_cores = self._cpu_previous
        after_total, after_cores = self._cpu_current

        cores = []
        for index, info in enumerate(self.read_cpu_info()):
            usage = 0.0
            if index < len(before_cores) and index < len(after_cores):
                usage = busy_percent(before_cores[index], after_cores[index])
            cores.append(
                RawCpu(
                    name=info.name,
                    brand=info.brand,
                    vendor_id=info.vendor_id,
                    frequency=info.frequency,
                    cpu_usage=usage,
                )
            )

        return RawCpuSummary(
            physical_core_count=self.read_physical_core_count(),
            global_cpu_usage=busy_percent(before_total, after_total),
            cpus=tuple(cores),
        )

    def memory(self) -> RawMemory:
        if self._memory is None:
            raise RuntimeError("memory() called before refresh_all()")
        return self._memory

    def processes(self) -> list[int]:
        if self._pids is None:
            raise RuntimeError("processes() called before refresh_all()")
        return list(self._pids)

    def process_count(self) -> int:
        return len(self.processes())

    # ── on-demand reads ──────────────────────────────────────────────

    @abstractmethod
    def process(self, pid: int) -> RawProcess | None: ...

    @abstractmethod
    def disks(self) -> Sequence[RawDisk]: ...

    @abstractmethod
    def network_interfaces(self) -> Sequence[RawNetworkInterface]: ...

    @abstractmethod
    def sensors(self) -> Sequence[RawSensor]: ...

    @abstractmethod
    def users(self) -> Sequence[RawUser]: ...

    @abstractmethod
    def load_average(self) -> LoadAverage: ...

    @abstractmethod
    def system_identity(self) -> RawIdentity: ...

    # ── platform primitives ──────────────────────────────────────────

    @abstractmethod
    def read_cpu_ticks(self) -> CpuTicks: ...

    @abstractmethod
    def read_cpu_ticks_per_core(self) -> list[CpuTicks]: ...

    @abstractmethod
    def read_cpu_info(self) -> list[CpuInfo]: ...

    @abstractmethod
    def read_physical_core_count(self) -> int | None: ...

    @abstractmethod
    def read_memory(self) -> RawMemory: ...

    @abstractmethod
    def read_pids(self) -> list[int]: ...
