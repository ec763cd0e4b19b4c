"""Output formatters."""

from __future__ import annotations

from .base import BaseFormatter
from .json_fmt import JsonFormatter

__all__ = ["BaseFormatter", "JsonFormatter"]
