"""Category collectors and the record normalizers they apply."""

from __future__ import annotations

from .base import BaseCollector, keyed
from .cpu import CPUCollector
from .disk import DiskCollector
from .load_avg import LoadAvgCollector
from .memory import MemoryCollector
from .network import NetworkCollector
from .process import ProcessCollector, normalize_process
from .system import SystemCollector
from .temperature import TemperatureCollector
from .user import UserCollector

__all__ = [
    "BaseCollector",
    "CPUCollector",
    "DiskCollector",
    "LoadAvgCollector",
    "MemoryCollector",
    "NetworkCollector",
    "ProcessCollector",
    "SystemCollector",
    "TemperatureCollector",
    "UserCollector",
    "keyed",
    "normalize_process",
]
