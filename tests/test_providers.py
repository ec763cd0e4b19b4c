"""Tests for the psutil-backed providers."""

from __future__ import annotations

import os
from collections import namedtuple
from unittest.mock import patch

import psutil
import pytest

from sysdump.core import collect_process
from sysdump.providers import PsutilProvider, SnapshotProvider, get_default_provider
from sysdump.providers.psutil_provider import ZERO_MAC, cpu_ticks, ip_network, link_details

Addr = namedtuple("Addr", ["family", "address", "netmask", "broadcast", "ptp"])
NetIO = namedtuple(
    "NetIO",
    ["bytes_sent", "bytes_recv", "packets_sent", "packets_recv", "errin", "errout", "dropin", "dropout"],
)
Partition = namedtuple("Partition", ["device", "mountpoint", "fstype", "opts"])
Usage = namedtuple("Usage", ["total", "used", "free", "percent"])
Temp = namedtuple("Temp", ["label", "current", "high", "critical"])


class TestHelpers:
    def test_cpu_ticks_excludes_guest_and_counts_iowait_as_idle(self) -> None:
        Times = namedtuple(
            "Times", ["user", "nice", "system", "idle", "iowait", "irq", "softirq", "steal", "guest", "guest_nice"]
        )
        ticks = cpu_ticks(Times(10.0, 0.0, 5.0, 80.0, 5.0, 0.0, 0.0, 0.0, 2.0, 0.0))
        assert ticks.total == pytest.approx(100.0)
        assert ticks.busy == pytest.approx(15.0)

    def test_cpu_ticks_minimal_fields(self) -> None:
        Times = namedtuple("Times", ["user", "system", "idle"])
        ticks = cpu_ticks(Times(1.0, 1.0, 2.0))
        assert (ticks.busy, ticks.total) == (2.0, 4.0)

    @pytest.mark.parametrize(
        ("address", "netmask", "expected"),
        [
            ("192.168.1.5", "255.255.255.0", "192.168.1.5/24"),
            ("10.0.0.1", None, "10.0.0.1/32"),
            ("fe80::1%eth0", "ffff:ffff:ffff:ffff::", "fe80::1/64"),
            ("::1", "ffff:ffff:ffff:ffff:ffff:ffff:ffff:ffff", "::1/128"),
        ],
    )
    def test_ip_network(self, address: str, netmask: str | None, expected: str) -> None:
        assert ip_network(address, netmask) == expected

    def test_link_details(self) -> None:
        addrs = [
            Addr(psutil.AF_LINK, "AA-BB-CC-DD-EE-FF", None, None, None),
            Addr(2, "10.0.0.2", "255.0.0.0", None, None),
            Addr(2, "not-an-ip", None, None, None),
            Addr(2, "10.0.0.3", "255.255.0.0", None, None),
        ]
        mac, networks = link_details(addrs)
        assert mac == "aa:bb:cc:dd:ee:ff"
        assert networks == ("10.0.0.2/8", "10.0.0.3/16")

    def test_link_details_without_link_layer(self) -> None:
        assert link_details([]) == (ZERO_MAC, ())

    def test_parse_cpuinfo_x86(self) -> None:
        from sysdump.providers.linux import parse_cpuinfo

        text = (
            "processor\t: 0\nvendor_id\t: GenuineIntel\nmodel name\t: Intel(R) Core(TM) i7\n\n"
            "processor\t: 1\nvendor_id\t: GenuineIntel\nmodel name\t: Intel(R) Core(TM) i7\n"
        )
        processors, shared = parse_cpuinfo(text)
        assert processors[1]["vendor_id"] == "GenuineIntel"
        assert shared == {}

    def test_parse_cpuinfo_arm_shared_block(self) -> None:
        from sysdump.providers.linux import parse_cpuinfo

        text = "processor\t: 0\nCPU implementer\t: 0x41\n\nHardware\t: BCM2835\nModel\t: Raspberry Pi 4\n"
        processors, shared = parse_cpuinfo(text)
        assert processors[0]["CPU implementer"] == "0x41"
        assert shared["Model"] == "Raspberry Pi 4"


class TestPsutilProvider:
    def test_construction_does_not_read_state(self) -> None:
        provider = PsutilProvider()
        with pytest.raises(RuntimeError):
            provider.memory()

    def test_disk_unreadable_mount_skipped(self) -> None:
        partitions = [
            Partition("/dev/sda1", "/", "ext4", "rw"),
            Partition("/dev/sr0", "/media/cdrom", "iso9660", "ro,removable"),
            Partition("/dev/sdb1", "/secret", "ext4", "rw"),
        ]

        def usage(path: str) -> Usage:
            if path == "/secret":
                raise PermissionError(path)
            return Usage(100, 60, 40, 60.0)

        with (
            patch.object(psutil, "disk_partitions", return_value=partitions),
            patch.object(psutil, "disk_usage", side_effect=usage),
        ):
            disks = PsutilProvider().disks()

        assert [d.mount_point for d in disks] == ["/", "/media/cdrom"]
        assert disks[0].available_space == 40
        assert disks[0].kind == "Unknown"
        assert disks[1].is_removable is True

    def test_network_windowed_counters(self) -> None:
        first = {"eth0": NetIO(100, 1000, 1, 10, 0, 0, 0, 0)}
        second = {"eth0": NetIO(150, 1600, 2, 16, 1, 0, 0, 0)}
        provider = PsutilProvider()

        with (
            patch.object(psutil, "net_io_counters", side_effect=[first, second]),
            patch.object(psutil, "net_if_addrs", return_value={}),
        ):
            initial = provider.network_interfaces()[0]
            later = provider.network_interfaces()[0]

        assert initial.received == 0
        assert initial.total_received == 1000
        assert later.received == 600
        assert later.transmitted == 50
        assert later.packets_received == 6
        assert later.errors_on_received == 1
        assert later.total_received == 1600
        assert later.mac_address == ZERO_MAC

    def test_sensor_labels(self) -> None:
        readings = {
            "coretemp": [Temp("Core 0", 50.0, 80.0, 100.0), Temp("", 48.0, None, None)],
        }
        with patch.object(psutil, "sensors_temperatures", create=True, return_value=readings):
            sensors = PsutilProvider().sensors()
        assert [s.label for s in sensors] == ["coretemp Core 0", "coretemp"]
        assert sensors[0].max == 50.0
        assert sensors[1].max == 48.0

    def test_sensor_max_is_highest_reading_not_threshold(self) -> None:
        provider = PsutilProvider()
        hot = {"coretemp": [Temp("Core 0", 70.0, 80.0, 100.0)]}
        cool = {"coretemp": [Temp("Core 0", 55.0, 80.0, 100.0)]}
        with patch.object(psutil, "sensors_temperatures", create=True, return_value=hot):
            provider.sensors()
        with patch.object(psutil, "sensors_temperatures", create=True, return_value=cool):
            (sensor,) = provider.sensors()
        assert sensor.temperature == 55.0
        assert sensor.max == 70.0
        assert sensor.critical == 100.0

    def test_sensors_unsupported_platform(self) -> None:
        with patch.object(psutil, "sensors_temperatures", create=True, side_effect=AttributeError):
            assert PsutilProvider().sensors() == []

    def test_load_average_unsupported_is_zero_triple(self) -> None:
        with patch.object(os, "getloadavg", create=True, side_effect=OSError):
            load = PsutilProvider().load_average()
        assert (load.one, load.five, load.fifteen) == (0.0, 0.0, 0.0)

    def test_refresh_all_memory_invariants(self) -> None:
        provider = get_default_provider().refresh_all()
        memory = provider.memory()
        assert memory.total_memory > 0
        assert 0 <= memory.used_memory <= memory.total_memory
        assert memory.used_swap >= 0
        assert provider.process_count() > 0

    def test_current_process_detail(self) -> None:
        detail = collect_process(os.getpid(), interval_ms=0)
        assert detail is not None
        assert detail["pid"] == os.getpid()
        assert isinstance(detail["cmd"], list)
        assert detail["memory"] is None or detail["memory"] > 0

    def test_nonexistent_pid_is_null(self) -> None:
        for _ in range(2):
            assert collect_process(999999, interval_ms=0) is None

    def test_default_provider_type(self) -> None:
        assert isinstance(get_default_provider(), SnapshotProvider)


@pytest.mark.skipif(os.name != "posix", reason="needs the POSIX user database")
def test_posix_users_include_root() -> None:
    from sysdump.providers.posix import PosixProvider

    users = {u.name: dict(u.groups) for u in PosixProvider().users()}
    assert "root" in users
    assert 0 in users["root"].values()


@pytest.mark.skipif(not os.path.exists("/proc/self/status"), reason="needs procfs")
def test_linux_process_root_and_thread_kind() -> None:
    from sysdump.providers.linux import LinuxProvider

    provider = LinuxProvider()
    proc = psutil.Process(os.getpid())
    assert provider.process_root(os.getpid()) is not None
    assert provider.thread_kind(proc) is None
