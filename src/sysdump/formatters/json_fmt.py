"""JSON formatter."""

from __future__ import annotations

import json
from typing import Any

from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Format a document as JSON; compact unless *indent* is positive."""

    def __init__(self, indent: int = 0) -> None:
        self.indent = indent

    def format(self, document: Any) -> str:
        if self.indent > 0:
            return json.dumps(document, ensure_ascii=False, indent=self.indent)
        return json.dumps(document, ensure_ascii=False, separators=(",", ":"))
