"""Load average collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import LoadAverage
from .base import BaseCollector


def normalize_load_average(load: LoadAverage) -> dict[str, Any]:
    return {"one": load.one, "five": load.five, "fifteen": load.fifteen}


class LoadAvgCollector(BaseCollector):
    @property
    def name(self) -> str:
        return Category.LOAD_AVG.value

    def collect(self) -> dict[str, Any]:
        return normalize_load_average(self.provider.load_average())
