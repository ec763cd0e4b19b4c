"""Raw OS records as returned by a snapshot provider."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CpuTicks:
    """Cumulative CPU time since boot, split into busy and total."""

    busy: float
    total: float


@dataclass(frozen=True, slots=True)
class CpuInfo:
    """Static description of one logical CPU."""

    name: str
    brand: str
    vendor_id: str
    frequency: int  # Hz


@dataclass(frozen=True, slots=True)
class RawCpu:
    name: str
    brand: str
    vendor_id: str
    frequency: int  # Hz
    cpu_usage: float


@dataclass(frozen=True, slots=True)
class RawCpuSummary:
    physical_core_count: int | None
    global_cpu_usage: float
    cpus: tuple[RawCpu, ...]


@dataclass(frozen=True, slots=True)
class RawMemory:
    total_memory: int
    available_memory: int
    used_memory: int
    total_swap: int
    used_swap: int


@dataclass(frozen=True, slots=True)
class RawDisk:
    mount_point: str | bytes
    name: str | bytes
    kind: str
    file_system: str | bytes
    total_space: int
    available_space: int
    is_removable: bool


@dataclass(frozen=True, slots=True)
class RawNetworkInterface:
    name: str
    mac_address: str
    ip_networks: tuple[str, ...]
    received: int
    total_received: int
    transmitted: int
    total_transmitted: int
    packets_received: int
    total_packets_received: int
    packets_transmitted: int
    total_packets_transmitted: int
    errors_on_received: int
    total_errors_on_received: int
    errors_on_transmitted: int
    total_errors_on_transmitted: int


@dataclass(frozen=True, slots=True)
class RawSensor:
    label: str
    temperature: float | None = None
    max: float | None = None
    critical: float | None = None


@dataclass(frozen=True, slots=True)
class RawUser:
    name: str | bytes
    groups: tuple[tuple[str, int], ...] = ()


@dataclass(frozen=True, slots=True)
class LoadAverage:
    one: float
    five: float
    fifteen: float


@dataclass(frozen=True, slots=True)
class RawIdentity:
    name: str | None = None
    kernel_version: str | None = None
    os_version: str | None = None
    long_os_version: str | None = None
    host_name: str | None = None
    cpu_arch: str | None = None
    distribution_id: str | None = None
    boot_time: int | None = None
    uptime: int | None = None


@dataclass(frozen=True, slots=True)
class DiskUsage:
    read_bytes: int = 0
    total_read_bytes: int = 0
    written_bytes: int = 0
    total_written_bytes: int = 0


@dataclass(frozen=True, slots=True)
class RawProcess:
    pid: int
    name: str | bytes
    cmd: tuple[str | bytes, ...] = ()
    exe: str | bytes | None = None
    cwd: str | bytes | None = None
    root: str | bytes | None = None
    memory: int | None = None
    virtual_memory: int | None = None
    parent: int | None = None
    session_id: int | None = None
    tasks: frozenset[int] | None = None
    user_id: int | None = None
    effective_user_id: int | None = None
    group_id: int | None = None
    effective_group_id: int | None = None
    status: str | None = None
    start_time: int | None = None
    run_time: int | None = None
    cpu_usage: float | None = None
    disk_usage: DiskUsage = field(default_factory=DiskUsage)
    thread_kind: str | None = None
    environ: tuple[str | bytes, ...] = ()
