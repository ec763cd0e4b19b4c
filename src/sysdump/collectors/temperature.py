"""Thermal sensor collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawSensor
from ..utils import lossy_text
from .base import BaseCollector, keyed


def normalize_sensor(sensor: RawSensor) -> tuple[str, dict[str, Any]]:
    return lossy_text(sensor.label) or "", {
        "temperature": sensor.temperature,
        "max": sensor.max,
        "critical": sensor.critical,
    }


class TemperatureCollector(BaseCollector):
    """Collect sensors keyed by label.

    Labels are not unique on every machine; a later sensor with the same
    label replaces an earlier one. ``max`` is the highest temperature the
    provider has read, so in a single run it equals the current reading.
    """

    @property
    def name(self) -> str:
        return Category.TEMPERATURE.value

    def collect(self) -> dict[str, Any]:
        return keyed(self.provider.sensors(), normalize_sensor)
