"""CPU collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.base import SnapshotProvider
from ..providers.records import RawCpu, RawCpuSummary
from ..sampler import CpuSampler
from ..utils import lossy_text
from .base import BaseCollector


def normalize_cpu(cpu: RawCpu) -> dict[str, Any]:
    return {
        "name": lossy_text(cpu.name),
        "brand": lossy_text(cpu.brand),
        "vendor_id": lossy_text(cpu.vendor_id),
        "frequency": cpu.frequency,
        "cpu_usage": cpu.cpu_usage,
    }


def normalize_cpu_summary(summary: RawCpuSummary) -> dict[str, Any]:
    return {
        "physical_core_count": summary.physical_core_count,
        "global_cpu_usage": summary.global_cpu_usage,
        "cpus": [normalize_cpu(cpu) for cpu in summary.cpus],
    }


class CPUCollector(BaseCollector):
    """Collect per-core and global CPU usage over one sampling window."""

    def __init__(self, provider: SnapshotProvider, sampler: CpuSampler) -> None:
        super().__init__(provider)
        self.sampler = sampler

    @property
    def name(self) -> str:
        return Category.CPU.value

    def collect(self) -> dict[str, Any]:
        return normalize_cpu_summary(self.sampler.sample(self.provider))
