"""Disk collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawDisk
from ..utils import lossy_text
from .base import BaseCollector, keyed


def normalize_disk(disk: RawDisk) -> tuple[str, dict[str, Any]]:
    return lossy_text(disk.mount_point) or "", {
        "name": lossy_text(disk.name),
        "kind": str(disk.kind),
        "file_system": lossy_text(disk.file_system),
        "total_space": disk.total_space,
        "available_space": disk.available_space,
        "is_removable": disk.is_removable,
    }


class DiskCollector(BaseCollector):
    """Collect mounted disks keyed by mount point."""

    @property
    def name(self) -> str:
        return Category.DISK.value

    def collect(self) -> dict[str, Any]:
        return keyed(self.provider.disks(), normalize_disk)
