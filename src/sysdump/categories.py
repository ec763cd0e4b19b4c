"""Category selection for system mode."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    CPU = "cpu"
    DISK = "disk"
    LOAD_AVG = "load-avg"
    MEMORY = "memory"
    NETWORK = "network"
    PROCESS = "process"
    SYSTEM = "system"
    TEMPERATURE = "temperature"
    USER = "user"

    def __str__(self) -> str:
        return self.value


# Categories served from the full refresh rather than a dedicated read.
_FULL_REFRESH = frozenset({Category.CPU, Category.PROCESS, Category.MEMORY})


@dataclass(frozen=True, slots=True)
class CategorySet:
    """An explicit set of categories; built from an empty request it holds all of them."""

    members: frozenset[Category]

    @classmethod
    def all(cls) -> CategorySet:
        return cls(frozenset(Category))

    @classmethod
    def from_tags(cls, tags: Iterable[str | Category] = ()) -> CategorySet:
        """Build a selection from CLI tags.

        Raises:
            ValueError: on an unknown tag.
        """
        members = frozenset(Category(tag) for tag in tags)
        if not members:
            return cls.all()
        return cls(members)

    def includes(self, category: Category) -> bool:
        return category in self.members

    def needs_full_refresh(self) -> bool:
        return not self.members.isdisjoint(_FULL_REFRESH)

    def __iter__(self) -> Iterator[Category]:
        # Enum declaration order, independent of request order
        return (c for c in Category if c in self.members)

    def __len__(self) -> int:
        return len(self.members)
