from __future__ import annotations

import asyncio
import logging
import platform
import socket
import time
from pathlib import Path

import psutil

from pistatus.exceptions import SourceFailure
from pistatus.models import (
    CpuFacts,
    DiskSample,
    HostLoad,
    InterfaceInfo,
    MachineIdentity,
    MemorySample,
    UNKNOWN,
)

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")
GOVERNOR_PATH = Path("/sys/devices/system/cpu/cpu0/cpufreq/scaling_governor")

_SOURCE_ERRORS = (psutil.Error, OSError)
_CPUINFO_MODEL_KEYS = ("model name", "Model", "Hardware")


class SystemSource:
    """Single query surface over psutil and the procfs/sysfs bits it lacks.

    Every method is a coroutine; the blocking psutil calls run in worker
    threads so the assembler can gather them in one batch. Failures raise
    ``SourceFailure`` since none of these sources has a fallback value.
    """

    def __init__(
        self,
        disk_mount: str = "/",
        cpu_sample_interval: float = 0.2,
        cpuinfo_path: Path = CPUINFO_PATH,
        governor_path: Path = GOVERNOR_PATH,
    ) -> None:
        self.disk_mount = disk_mount
        self.cpu_sample_interval = cpu_sample_interval
        self._cpuinfo_path = cpuinfo_path
        self._governor_path = governor_path

    # ── identity ────────────────────────────────────────

    async def identity(self) -> MachineIdentity:
        """Machine identity; placeholders instead of errors."""
        try:
            return await asyncio.to_thread(self._identity)
        except _SOURCE_ERRORS:
            logger.exception("Could not determine machine identity")
            return MachineIdentity()

    def _identity(self) -> MachineIdentity:
        interfaces = self._interfaces()
        primary = next((i for i in interfaces if not i.internal and i.ipv4), None)
        if primary is None and interfaces:
            primary = interfaces[0]
        return MachineIdentity(
            os=os_description(),
            host=socket.gethostname() or UNKNOWN,
            ipv4=(primary.ipv4 if primary else None) or UNKNOWN,
            interface=primary.name if primary else UNKNOWN,
            mac=(primary.mac if primary else None) or UNKNOWN,
        )

    # ── live sources ────────────────────────────────────

    async def cpu(self) -> CpuFacts:
        return await self._run("cpu", self._cpu)

    async def cpu_load(self) -> float:
        return await self._run("cpu_load", psutil.cpu_percent, self.cpu_sample_interval)

    async def memory(self) -> MemorySample:
        return await self._run("memory", self._memory)

    async def disk(self) -> DiskSample:
        return await self._run("disk", self._disk)

    async def host_load(self) -> HostLoad:
        return await self._run("host_load", self._host_load)

    async def interfaces(self) -> list[InterfaceInfo]:
        return await self._run("interfaces", self._interfaces)

    # ── internals ───────────────────────────────────────

    async def _run(self, source: str, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except SourceFailure:
            raise
        except _SOURCE_ERRORS as exc:
            raise SourceFailure(source, str(exc)) from exc

    def _cpu(self) -> CpuFacts:
        freq = psutil.cpu_freq()
        return CpuFacts(
            model=self._cpu_model(),
            cores=psutil.cpu_count(logical=True) or 0,
            speed_ghz=(freq.current / 1000) if freq else 0.0,
            governor=self._governor(),
        )

    def _cpu_model(self) -> str:
        try:
            text = self._cpuinfo_path.read_text()
        except OSError:
            text = ""
        found: dict[str, str] = {}
        for line in text.splitlines():
            key, sep, value = line.partition(":")
            if sep and value.strip():
                found.setdefault(key.strip(), value.strip())
        for key in _CPUINFO_MODEL_KEYS:
            if key in found:
                return found[key]
        return platform.processor() or platform.machine() or UNKNOWN

    def _governor(self) -> str:
        try:
            return self._governor_path.read_text().strip() or "unknown"
        except OSError:
            return "unknown"

    @staticmethod
    def _memory() -> MemorySample:
        vm = psutil.virtual_memory()
        if vm.total <= 0:
            raise SourceFailure("memory", "total memory reported as zero")
        swap = psutil.swap_memory()
        return MemorySample(
            total=vm.total,
            # "active" is Linux-only; other platforms report "used"
            active=getattr(vm, "active", vm.used),
            swap_total=swap.total,
            swap_used=swap.used,
        )

    def _disk(self) -> DiskSample:
        partitions = psutil.disk_partitions(all=False)
        if not partitions:
            raise SourceFailure("disk", "no mounted filesystem")
        part = next((p for p in partitions if p.mountpoint == self.disk_mount), None)
        if part is None:
            raise SourceFailure("disk", f"no filesystem mounted at {self.disk_mount}")
        usage = psutil.disk_usage(part.mountpoint)
        if usage.total <= 0:
            raise SourceFailure("disk", f"zero-sized filesystem at {part.mountpoint}")
        return DiskSample(
            mount=part.mountpoint,
            total=usage.total,
            used=usage.used,
            # psutil rounds its own percent to one decimal
            percent=usage.used / usage.total * 100,
            read_only="ro" in part.opts.split(","),
        )

    @staticmethod
    def _host_load() -> HostLoad:
        load = psutil.getloadavg()
        return HostLoad(
            uptime_seconds=max(0.0, time.time() - psutil.boot_time()),
            loadavg=(load[0], load[1], load[2]),
            processes=len(psutil.pids()),
        )

    @staticmethod
    def _interfaces() -> list[InterfaceInfo]:
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
        result: list[InterfaceInfo] = []
        for name, entries in addrs.items():
            ipv4 = next((a.address for a in entries if a.family == socket.AF_INET), None)
            mac = next((a.address for a in entries if a.family == psutil.AF_LINK), None)
            st = stats.get(name)
            flags = getattr(st, "flags", "") if st else ""
            result.append(
                InterfaceInfo(
                    name=name,
                    internal=(
                        name == "lo"
                        or (ipv4 or "").startswith("127.")
                        or "loopback" in flags.split(",")
                    ),
                    is_up=bool(st and st.isup),
                    ipv4=ipv4,
                    mac=mac,
                    speed=(st.speed if st else 0) or 0,
                )
            )
        return result


def os_description() -> str:
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        return f"{platform.system()} {platform.release()}".strip() or UNKNOWN
    name = release.get("NAME", platform.system())
    version = release.get("VERSION_ID", "")
    return f"{name} {version}".strip()
