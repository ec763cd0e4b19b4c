"""Memory collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawMemory
from .base import BaseCollector


def normalize_memory(memory: RawMemory) -> dict[str, Any]:
    return {
        "total_memory": memory.total_memory,
        "available_memory": memory.available_memory,
        "used_memory": memory.used_memory,
        "total_swap": memory.total_swap,
        "used_swap": memory.used_swap,
    }


class MemoryCollector(BaseCollector):
    """Collect memory and swap counters from the refreshed snapshot."""

    @property
    def name(self) -> str:
        return Category.MEMORY.value

    def collect(self) -> dict[str, Any]:
        return normalize_memory(self.provider.memory())
