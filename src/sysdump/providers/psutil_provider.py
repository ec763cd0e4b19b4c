"""Portable snapshot provider backed by psutil."""

from __future__ import annotations

import contextlib
import ipaddress
import logging
import os
import platform
import socket
import time
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import psutil

from .base import SnapshotProvider
from .records import (
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

log = logging.getLogger(__name__)

T = TypeVar("T")

ZERO_MAC = "00:00:00:00:00:00"

# "Not available here" as opposed to "the process is gone".
_UNSUPPORTED = (psutil.AccessDenied, NotImplementedError, AttributeError, OSError)


def _field(getter: Callable[[], T], default: T | None = None) -> T | None:
    """Read one process attribute; denied or unsupported becomes *default*.

    ``NoSuchProcess`` propagates so the caller can report the process as gone.
    """
    try:
        return getter()
    except psutil.ZombieProcess:
        return default
    except psutil.NoSuchProcess:
        raise
    except _UNSUPPORTED:
        return default


def cpu_ticks(times: Any) -> CpuTicks:
    """Convert a psutil ``scputimes`` tuple into busy/total seconds."""
    values = times._asdict()
    total = sum(values.values())
    # guest time is already counted in user time
    total -= values.get("guest", 0.0) + values.get("guest_nice", 0.0)
    idle = values.get("idle", 0.0) + values.get("iowait", 0.0)
    return CpuTicks(busy=total - idle, total=total)


def ip_network(address: str, netmask: str | None) -> str:
    """Render an address and netmask as ``address/prefix``.

    Raises:
        ValueError: if either part is not an IP address.
    """
    ip = ipaddress.ip_address(address.split("%", 1)[0])
    if netmask:
        mask = ipaddress.ip_address(netmask.split("%", 1)[0])
        prefix = bin(int(mask)).count("1")
    else:
        prefix = ip.max_prefixlen
    return f"{ip}/{prefix}"


def link_details(addrs: Iterable[Any]) -> tuple[str, tuple[str, ...]]:
    """Return the MAC address and ordered IP networks of one interface."""
    mac = ZERO_MAC
    networks: list[str] = []
    for addr in addrs:
        if addr.family == psutil.AF_LINK:
            if addr.address:
                mac = addr.address.replace("-", ":").lower()
        elif addr.family in (socket.AF_INET, socket.AF_INET6):
            try:
                networks.append(ip_network(addr.address, addr.netmask))
            except ValueError:
                log.debug("unparsable interface address %r", addr.address)
    return mac, tuple(networks)


def _mhz_to_hz(mhz: float | None) -> int:
    return int(round((mhz or 0.0) * 1_000_000))


def _delta(after: int, before: int) -> int:
    # counters can wrap or reset when an interface is re-created
    return max(0, after - before)


class PsutilProvider(SnapshotProvider):
    """Provider for any platform psutil supports.

    Subclasses fill in what psutil does not expose portably: the user
    database, disk kind, process root directory and so on.
    """

    def __init__(self) -> None:
        super().__init__()
        self._watched: dict[int, tuple[psutil.Process, Any]] = {}
        self._net_previous: dict[str, Any] = {}
        self._sensor_max: dict[str, float] = {}

    # ── CPU ──────────────────────────────────────────────────────────

    def read_cpu_ticks(self) -> CpuTicks:
        return cpu_ticks(psutil.cpu_times())

    def read_cpu_ticks_per_core(self) -> list[CpuTicks]:
        return [cpu_ticks(t) for t in psutil.cpu_times(percpu=True)]

    def read_cpu_info(self) -> list[CpuInfo]:
        count = psutil.cpu_count(logical=True) or len(psutil.cpu_times(percpu=True))
        brands = self.cpu_brands(count)
        frequencies = self.cpu_frequencies(count)
        return [
            CpuInfo(
                name=f"cpu{index}",
                brand=brands[index][0],
                vendor_id=brands[index][1],
                frequency=frequencies[index],
            )
            for index in range(count)
        ]

    def read_physical_core_count(self) -> int | None:
        return psutil.cpu_count(logical=False)

    def cpu_brands(self, count: int) -> list[tuple[str, str]]:
        """(brand, vendor id) per logical CPU."""
        return [(platform.processor(), "")] * count

    def cpu_frequencies(self, count: int) -> list[int]:
        with contextlib.suppress(AttributeError, NotImplementedError, OSError):
            per_core = psutil.cpu_freq(percpu=True) or []
            if len(per_core) == count:
                return [_mhz_to_hz(f.current) for f in per_core]
            overall = psutil.cpu_freq()
            if overall is not None:
                return [_mhz_to_hz(overall.current)] * count
        return [0] * count

    # ── memory / process table ───────────────────────────────────────

    def read_memory(self) -> RawMemory:
        vm = psutil.virtual_memory()
        swap = psutil.swap_memory()
        total = int(vm.total)
        available = min(int(vm.available), total)
        return RawMemory(
            total_memory=total,
            available_memory=available,
            used_memory=total - available,
            total_swap=int(swap.total),
            used_swap=int(swap.used),
        )

    def read_pids(self) -> list[int]:
        return psutil.pids()

    # ── single process ───────────────────────────────────────────────

    def refresh_process(self, pid: int) -> bool:
        try:
            proc = psutil.Process(pid)
            with proc.oneshot():
                _field(lambda: proc.cpu_percent(interval=None))
                io = _field(lambda: proc.io_counters())
        except (psutil.NoSuchProcess, ValueError):
            return False
        self._watched[pid] = (proc, io)
        return True

    def process(self, pid: int) -> RawProcess | None:
        try:
            if pid in self._watched:
                proc, io_before = self._watched[pid]
            else:
                proc, io_before = psutil.Process(pid), None
            # also catches pid reuse since refresh_process()
            if not proc.is_running():
                return None
            return self._read_process(proc, io_before)
        except (psutil.NoSuchProcess, ValueError):
            return None

    def _read_process(self, proc: psutil.Process, io_before: Any) -> RawProcess:
        with proc.oneshot():
            mem = _field(proc.memory_info)
            uids = _field(lambda: proc.uids())
            gids = _field(lambda: proc.gids())
            created = _field(proc.create_time)
            io = _field(lambda: proc.io_counters())
            threads = _field(proc.threads)
            ppid = _field(proc.ppid)
            environ = _field(proc.environ) or {}

            disk_usage = DiskUsage()
            if io is not None:
                before = io_before or io
                disk_usage = DiskUsage(
                    read_bytes=_delta(io.read_bytes, before.read_bytes),
                    total_read_bytes=int(io.read_bytes),
                    written_bytes=_delta(io.write_bytes, before.write_bytes),
                    total_written_bytes=int(io.write_bytes),
                )

            return RawProcess(
                pid=proc.pid,
                name=_field(proc.name, "") or "",
                cmd=tuple(_field(proc.cmdline) or ()),
                exe=_field(proc.exe) or None,
                cwd=_field(proc.cwd) or None,
                root=self.process_root(proc.pid),
                memory=None if mem is None else int(mem.rss),
                virtual_memory=None if mem is None else int(mem.vms),
                parent=ppid or None,
                session_id=self.session_id(proc.pid),
                tasks=None if threads is None else frozenset(t.id for t in threads),
                user_id=None if uids is None else uids.real,
                effective_user_id=None if uids is None else uids.effective,
                group_id=None if gids is None else gids.real,
                effective_group_id=None if gids is None else gids.effective,
                status=_field(proc.status),
                start_time=None if created is None else int(created),
                run_time=None if created is None else max(0, int(time.time() - created)),
                cpu_usage=_field(lambda: proc.cpu_percent(interval=None)),
                disk_usage=disk_usage,
                thread_kind=self.thread_kind(proc),
                environ=tuple(f"{key}={value}" for key, value in environ.items()),
            )

    def process_root(self, pid: int) -> str | None:
        return None

    def session_id(self, pid: int) -> int | None:
        return None

    def thread_kind(self, proc: psutil.Process) -> str | None:
        return None

    # ── disks ────────────────────────────────────────────────────────

    def disks(self) -> list[RawDisk]:
        records: list[RawDisk] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as e:
                log.debug("skipping unreadable mount %s: %s", part.mountpoint, e)
                continue
            records.append(
                RawDisk(
                    mount_point=part.mountpoint,
                    name=part.device,
                    kind=self.disk_kind(part.device),
                    file_system=part.fstype,
                    total_space=int(usage.total),
                    available_space=int(usage.free),
                    is_removable=self.disk_removable(part),
                )
            )
        return records

    def disk_kind(self, device: str) -> str:
        return "Unknown"

    def disk_removable(self, part: Any) -> bool:
        return "removable" in part.opts.split(",")

    # ── network ──────────────────────────────────────────────────────

    def network_interfaces(self) -> list[RawNetworkInterface]:
        counters = psutil.net_io_counters(pernic=True)
        addrs = psutil.net_if_addrs()

        records: list[RawNetworkInterface] = []
        for name, io in counters.items():
            before = self._net_previous.get(name, io)
            mac, networks = link_details(addrs.get(name, ()))
            records.append(
                RawNetworkInterface(
                    name=name,
                    mac_address=mac,
                    ip_networks=networks,
                    received=_delta(io.bytes_recv, before.bytes_recv),
                    total_received=io.bytes_recv,
                    transmitted=_delta(io.bytes_sent, before.bytes_sent),
                    total_transmitted=io.bytes_sent,
                    packets_received=_delta(io.packets_recv, before.packets_recv),
                    total_packets_received=io.packets_recv,
                    packets_transmitted=_delta(io.packets_sent, before.packets_sent),
                    total_packets_transmitted=io.packets_sent,
                    errors_on_received=_delta(io.errin, before.errin),
                    total_errors_on_received=io.errin,
                    errors_on_transmitted=_delta(io.errout, before.errout),
                    total_errors_on_transmitted=io.errout,
                )
            )
        self._net_previous = dict(counters)
        return records

    # ── sensors / users / load / identity ────────────────────────────

    def sensors(self) -> list[RawSensor]:
        try:
            readings = psutil.sensors_temperatures()
        except AttributeError:
            # not exposed on this platform
            return []

        records: list[RawSensor] = []
        for chip, entries in readings.items():
            for entry in entries:
                label = f"{chip} {entry.label}" if entry.label else chip
                # highest reading seen by this provider, not the alarm threshold
                highest = max(self._sensor_max.get(label, entry.current), entry.current)
                self._sensor_max[label] = highest
                records.append(
                    RawSensor(
                        label=label,
                        temperature=entry.current,
                        max=highest,
                        critical=entry.critical,
                    )
                )
        return records

    def users(self) -> list[RawUser]:
        # Without a user database only logged-in sessions are visible.
        return [RawUser(name=name) for name in sorted({u.name for u in psutil.users()})]

    def load_average(self) -> LoadAverage:
        try:
            one, five, fifteen = os.getloadavg()
        except (AttributeError, OSError):
            return LoadAverage(0.0, 0.0, 0.0)
        return LoadAverage(one, five, fifteen)

    def system_identity(self) -> RawIdentity:
        boot = _field(psutil.boot_time)
        name, os_version, distribution_id = self.os_release()
        system = platform.system()
        long_parts = [system, os_version]
        if name != system:
            long_parts.append(name)
        return RawIdentity(
            name=name,
            kernel_version=platform.release() or None,
            os_version=os_version,
            long_os_version=" ".join(p for p in long_parts if p) or None,
            host_name=socket.gethostname() or None,
            cpu_arch=platform.machine() or None,
            distribution_id=distribution_id,
            boot_time=None if boot is None else int(boot),
            uptime=None if boot is None else max(0, int(time.time() - boot)),
        )

    def os_release(self) -> tuple[str | None, str | None, str | None]:
        """(OS name, OS version, distribution id)."""
        system = platform.system()
        if system == "Darwin":
            version = platform.mac_ver()[0]
        elif system == "Windows":
            version = platform.version()
        else:
            version = platform.release()
        distribution = {"darwin": "macos"}.get(system.lower(), system.lower())
        return system or None, version or None, distribution or None
