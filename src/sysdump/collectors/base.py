"""Base collector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from ..providers.base import SnapshotProvider

R = TypeVar("R")


def keyed(
    records: Iterable[R], normalize: Callable[[R], tuple[str, dict[str, Any]]]
) -> dict[str, dict[str, Any]]:
    """Build a key -> attributes mapping sorted by key.

    Records sharing a key overwrite each other in provider order.
    """
    mapping: dict[str, dict[str, Any]] = {}
    for record in records:
        key, attributes = normalize(record)
        mapping[key] = attributes
    return dict(sorted(mapping.items()))


class BaseCollector(ABC):
    """Abstract base class for all category collectors."""

    def __init__(self, provider: SnapshotProvider) -> None:
        self.provider = provider

    @property
    @abstractmethod
    def name(self) -> str:
        """Category tag used as key in the document."""
        ...

    @abstractmethod
    def collect(self) -> Any:
        """Read the provider and return the shaped section."""
        ...
