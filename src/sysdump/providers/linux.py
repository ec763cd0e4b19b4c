"""Linux provider: reads /proc, /sys and os-release for what psutil leaves out."""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import Any

import psutil

from .posix import PosixProvider

log = logging.getLogger(__name__)

_PROC = Path("/proc")
_SYS_BLOCK = Path("/sys/block")
_SYS_CLASS_BLOCK = Path("/sys/class/block")

# kthreadd, the parent of every kernel thread
_KTHREADD_PID = 2


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text().strip()
    except OSError:
        return None


def parse_cpuinfo(text: str) -> tuple[dict[int, dict[str, str]], dict[str, str]]:
    """Split /proc/cpuinfo into per-processor fields and machine-wide fields.

    ARM kernels put the model name in a trailing block with no processor index.
    """
    processors: dict[int, dict[str, str]] = {}
    shared: dict[str, str] = {}
    for block in text.split("\n\n"):
        fields: dict[str, str] = {}
        for line in block.splitlines():
            key, sep, value = line.partition(":")
            if sep:
                fields[key.strip()] = value.strip()
        index = fields.get("processor", "")
        if index.isdigit():
            processors[int(index)] = fields
        else:
            shared.update(fields)
    return processors, shared


class LinuxProvider(PosixProvider):
    def cpu_brands(self, count: int) -> list[tuple[str, str]]:
        text = _read_text(_PROC / "cpuinfo")
        processors, shared = parse_cpuinfo(text) if text else ({}, {})

        brands: list[tuple[str, str]] = []
        for index in range(count):
            fields = processors.get(index, {})
            brand = fields.get("model name") or shared.get("Hardware") or shared.get("Model") or ""
            vendor = fields.get("vendor_id") or fields.get("CPU implementer") or ""
            brands.append((brand, vendor))
        return brands

    # ── disks ────────────────────────────────────────────────────────

    def _block_device(self, device: str) -> str | None:
        """Return the whole-disk block device name behind *device*."""
        name = os.path.basename(os.path.realpath(device))
        entry = _SYS_CLASS_BLOCK / name
        if not entry.exists():
            return None
        if (entry / "partition").exists():
            return entry.resolve().parent.name
        return name

    def disk_kind(self, device: str) -> str:
        block = self._block_device(device)
        if block is None:
            return "Unknown"
        rotational = _read_text(_SYS_BLOCK / block / "queue" / "rotational")
        return {"1": "HDD", "0": "SSD"}.get(rotational or "", "Unknown")

    def disk_removable(self, part: Any) -> bool:
        block = self._block_device(part.device)
        if block is None:
            return False
        return _read_text(_SYS_BLOCK / block / "removable") == "1"

    # ── processes ────────────────────────────────────────────────────

    def process_root(self, pid: int) -> str | None:
        try:
            return os.readlink(_PROC / str(pid) / "root")
        except OSError:
            return None

    def thread_kind(self, proc: psutil.Process) -> str | None:
        if proc.pid == _KTHREADD_PID:
            return "kernel"
        status = _read_text(_PROC / str(proc.pid) / "status")
        if status is None:
            return None
        fields = dict(
            (key.strip(), value.strip())
            for key, sep, value in (line.partition(":") for line in status.splitlines())
            if sep
        )
        if fields.get("PPid") == str(_KTHREADD_PID):
            return "kernel"
        tgid = fields.get("Tgid")
        if tgid is not None and tgid != str(proc.pid):
            return "userland"
        return None

    # ── identity ─────────────────────────────────────────────────────

    def os_release(self) -> tuple[str | None, str | None, str | None]:
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            log.debug("no os-release file; falling back to kernel identity")
            return super().os_release()
        return (
            release.get("NAME") or None,
            release.get("VERSION_ID") or None,
            release.get("ID") or None,
        )
