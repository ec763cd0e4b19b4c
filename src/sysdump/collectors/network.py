"""Network interface collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawNetworkInterface
from ..utils import lossy_text
from .base import BaseCollector, keyed


def normalize_network_interface(iface: RawNetworkInterface) -> tuple[str, dict[str, Any]]:
    return lossy_text(iface.name) or "", {
        "mac_address": lossy_text(iface.mac_address),
        "ip_networks": [lossy_text(network) for network in iface.ip_networks],
        "received": iface.received,
        "total_received": iface.total_received,
        "transmitted": iface.transmitted,
        "total_transmitted": iface.total_transmitted,
        "packets_received": iface.packets_received,
        "total_packets_received": iface.total_packets_received,
        "packets_transmitted": iface.packets_transmitted,
        "total_packets_transmitted": iface.total_packets_transmitted,
        "errors_on_received": iface.errors_on_received,
        "total_errors_on_received": iface.total_errors_on_received,
        "errors_on_transmitted": iface.errors_on_transmitted,
        "total_errors_on_transmitted": iface.total_errors_on_transmitted,
    }


class NetworkCollector(BaseCollector):
    """Collect network interfaces keyed by interface name."""

    @property
    def name(self) -> str:
        return Category.NETWORK.value

    def collect(self) -> dict[str, Any]:
        return keyed(self.provider.network_interfaces(), normalize_network_interface)
