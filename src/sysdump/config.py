from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # Shortest window that gives a meaningful CPU usage delta.
    cpu_update_interval_ms: int = field(
        default_factory=lambda: max(0, _get_int("CPU_UPDATE_INTERVAL_MS", 200))
    )
    # 0 means compact output
    json_indent: int = field(default_factory=lambda: max(0, _get_int("JSON_INDENT", 0)))
    log_level: str = field(default_factory=lambda: _get_str("LOG_LEVEL", "WARNING"))


settings = Settings()
