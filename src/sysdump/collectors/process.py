"""Process collectors: a count in system mode, full detail in process mode."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawProcess
from ..utils import lossy_text
from .base import BaseCollector


def normalize_process(proc: RawProcess) -> dict[str, Any]:
    """Shape one process record.

    ``cmd`` and ``environ`` keep their source order; ``tasks`` is a set and
    is emitted sorted.
    """
    return {
        "pid": proc.pid,
        "name": lossy_text(proc.name),
        "cmd": [lossy_text(arg) for arg in proc.cmd],
        "exe": lossy_text(proc.exe),
        "cwd": lossy_text(proc.cwd),
        "root": lossy_text(proc.root),
        "memory": proc.memory,
        "virtual_memory": proc.virtual_memory,
        "parent": proc.parent,
        "session_id": proc.session_id,
        "tasks": None if proc.tasks is None else sorted(proc.tasks),
        "user_id": proc.user_id,
        "effective_user_id": proc.effective_user_id,
        "group_id": proc.group_id,
        "effective_group_id": proc.effective_group_id,
        "status": None if proc.status is None else str(proc.status),
        "start_time": proc.start_time,
        "run_time": proc.run_time,
        "cpu_usage": proc.cpu_usage,
        "disk_usage": {
            "read_bytes": proc.disk_usage.read_bytes,
            "total_read_bytes": proc.disk_usage.total_read_bytes,
            "written_bytes": proc.disk_usage.written_bytes,
            "total_written_bytes": proc.disk_usage.total_written_bytes,
        },
        "thread_kind": proc.thread_kind,
        "environ": [lossy_text(var) for var in proc.environ],
    }


class ProcessCollector(BaseCollector):
    """Count live processes; per-process detail is only gathered in process mode."""

    @property
    def name(self) -> str:
        return Category.PROCESS.value

    def collect(self) -> dict[str, Any]:
        return {"count": self.provider.process_count()}
