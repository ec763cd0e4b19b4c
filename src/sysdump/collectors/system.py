"""System identity collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawIdentity
from ..utils import lossy_text
from .base import BaseCollector


def normalize_identity(identity: RawIdentity) -> dict[str, Any]:
    return {
        "name": lossy_text(identity.name),
        "kernel_version": lossy_text(identity.kernel_version),
        "os_version": lossy_text(identity.os_version),
        "long_os_version": lossy_text(identity.long_os_version),
        "host_name": lossy_text(identity.host_name),
        "cpu_arch": lossy_text(identity.cpu_arch),
        "distribution_id": lossy_text(identity.distribution_id),
        "boot_time": identity.boot_time,
        "uptime": identity.uptime,
    }


class SystemCollector(BaseCollector):
    """Collect OS identity, boot time and uptime."""

    @property
    def name(self) -> str:
        return Category.SYSTEM.value

    def collect(self) -> dict[str, Any]:
        return normalize_identity(self.provider.system_identity())
