"""Synthetic snapshot provider and builders shared by the tests."""

from __future__ import annotations

from collections.abc import Iterable

from sysdump.providers.base import SnapshotProvider
from sysdump.providers.records import (
    CpuInfo,
    CpuTicks,
    DiskUsage,
    LoadAverage,
    RawDisk,
    RawIdentity,
    RawMemory,
    RawNetworkInterface,
    RawProcess,
    RawSensor,
    RawUser,
)

GB = 1024**3


def make_interface(name: str, **overrides: object) -> RawNetworkInterface:
    fields: dict[str, object] = {
        "name": name,
        "mac_address": "00:00:00:00:00:00",
        "ip_networks": (),
        "received": 0,
        "total_received": 0,
        "transmitted": 0,
        "total_transmitted": 0,
        "packets_received": 0,
        "total_packets_received": 0,
        "packets_transmitted": 0,
        "total_packets_transmitted": 0,
        "errors_on_received": 0,
        "total_errors_on_received": 0,
        "errors_on_transmitted": 0,
        "total_errors_on_transmitted": 0,
    }
    fields.update(overrides)
    return RawNetworkInterface(**fields)  # type: ignore[arg-type]


class FakeProvider(SnapshotProvider):
    """In-memory provider that records calls and can be told to fail.

    CPU readings are consumed in order from *ticks* / *core_ticks*; the last
    one repeats once the list runs out.
    """

    def __init__(
        self,
        *,
        ticks: Iterable[CpuTicks] = (CpuTicks(0.0, 0.0),),
        core_ticks: Iterable[list[CpuTicks]] = ([CpuTicks(0.0, 0.0), CpuTicks(0.0, 0.0)],),
        fail: Iterable[str] = (),
        processes: dict[int, RawProcess] | None = None,
        vanishing: Iterable[int] = (),
    ) -> None:
        super().__init__()
        self.calls: list[str] = []
        self._ticks = list(ticks)
        self._core_ticks = list(core_ticks)
        self.fail = set(fail)
        self.procs = processes or {}
        self.vanishing = set(vanishing)

        self.disk_records = [
            RawDisk("/", "/dev/sda1", "SSD", "ext4", 100 * GB, 40 * GB, False),
            RawDisk("/boot", "/dev/sda2", "SSD", "vfat", GB, GB // 2, False),
        ]
        self.interface_records = [
            make_interface("lo", ip_networks=("127.0.0.1/8", "::1/128")),
            make_interface("eth0", mac_address="aa:bb:cc:dd:ee:ff", received=10, total_received=1000),
        ]
        self.sensor_records = [RawSensor("coretemp Package id 0", 45.0, 100.0, 105.0)]
        self.user_records = [
            RawUser("root", (("root", 0),)),
            RawUser("alice", (("alice", 1000), ("wheel", 10))),
        ]
        self.memory_record = RawMemory(16 * GB, 10 * GB, 6 * GB, 2 * GB, 0)
        self.pid_list = [1, 2, 42]

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail:
            raise OSError(f"{name} unavailable")

    def refresh_all(self) -> FakeProvider:
        self._record("refresh_all")
        return super().refresh_all()

    def refresh_cpu(self) -> FakeProvider:
        self.calls.append("refresh_cpu")
        return super().refresh_cpu()

    def refresh_process(self, pid: int) -> bool:
        self._record("refresh_process")
        return pid in self.procs

    def process(self, pid: int) -> RawProcess | None:
        self._record("process")
        if pid in self.vanishing:
            return None
        return self.procs.get(pid)

    def read_cpu_ticks(self) -> CpuTicks:
        return self._ticks.pop(0) if len(self._ticks) > 1 else self._ticks[0]

    def read_cpu_ticks_per_core(self) -> list[CpuTicks]:
        return self._core_ticks.pop(0) if len(self._core_ticks) > 1 else self._core_ticks[0]

    def read_cpu_info(self) -> list[CpuInfo]:
        return [
            CpuInfo("cpu0", "Fake CPU", "FakeVendor", 3_000_000_000),
            CpuInfo("cpu1", "Fake CPU", "FakeVendor", 3_000_000_000),
        ]

    def read_physical_core_count(self) -> int | None:
        return 1

    def read_memory(self) -> RawMemory:
        self._record("read_memory")
        return self.memory_record

    def read_pids(self) -> list[int]:
        return list(self.pid_list)

    def disks(self) -> list[RawDisk]:
        self._record("disks")
        return self.disk_records

    def network_interfaces(self) -> list[RawNetworkInterface]:
        self._record("network_interfaces")
        return self.interface_records

    def sensors(self) -> list[RawSensor]:
        self._record("sensors")
        return self.sensor_records

    def users(self) -> list[RawUser]:
        self._record("users")
        return self.user_records

    def load_average(self) -> LoadAverage:
        self._record("load_average")
        return LoadAverage(0.5, 0.25, 0.125)

    def system_identity(self) -> RawIdentity:
        self._record("system_identity")
        return RawIdentity(
            name="Fake Linux",
            kernel_version="6.1.0",
            os_version="12",
            long_os_version="Linux 12 Fake Linux",
            host_name="testhost",
            cpu_arch="x86_64",
            distribution_id="fake",
            boot_time=1_700_000_000,
            uptime=3600,
        )


def make_process(pid: int = 42, **overrides: object) -> RawProcess:
    fields: dict[str, object] = {
        "pid": pid,
        "name": "worker",
        "cmd": ("/usr/bin/worker", "--flag", "value"),
        "exe": "/usr/bin/worker",
        "cwd": "/srv",
        "root": "/",
        "memory": 1024,
        "virtual_memory": 4096,
        "parent": 1,
        "session_id": 42,
        "tasks": frozenset({44, 42, 43}),
        "user_id": 1000,
        "effective_user_id": 1000,
        "group_id": 1000,
        "effective_group_id": 1000,
        "status": "sleeping",
        "start_time": 1_700_000_100,
        "run_time": 60,
        "cpu_usage": 12.5,
        "disk_usage": DiskUsage(1, 10, 2, 20),
        "thread_kind": None,
        "environ": ("PATH=/usr/bin", "HOME=/srv"),
    }
    fields.update(overrides)
    return RawProcess(**fields)  # type: ignore[arg-type]


class RecordingSleep:
    def __init__(self, log: list[str] | None = None) -> None:
        self.durations: list[float] = []
        self.log = log

    def __call__(self, seconds: float) -> None:
        self.durations.append(seconds)
        if self.log is not None:
            self.log.append("sleep")

