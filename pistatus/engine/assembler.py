from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Sequence
from zoneinfo import ZoneInfo

from pistatus.collectors.network import NetworkIdentity
from pistatus.collectors.system import SystemSource
from pistatus.collectors.vcgencmd import (
    Reading,
    VcgencmdAdapter,
    parse_clock_hz,
    parse_temperature,
    parse_throttled,
    parse_voltage,
)
from pistatus.config import Settings
from pistatus.engine.cache import StatusCache
from pistatus.engine.classifier import ClassifierInputs, classify
from pistatus.engine.throttle import decode
from pistatus.models import (
    SEVERITY_RANK,
    ClockInfo,
    CpuInfo,
    DiskInfo,
    LiveMetrics,
    MemoryInfo,
    PowerInfo,
    Severity,
    SwapInfo,
    SystemStatus,
    ThermalInfo,
)

logger = logging.getLogger(__name__)

# Timestamps are always shown in Korean time, whatever the host timezone.
REFERENCE_TZ = ZoneInfo("Asia/Seoul")
REFERENCE_TZ_LABEL = "KST"

GIB = 1024**3
MIB = 1024**2

WallClock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_uptime(seconds: float) -> str:
    """``694861`` -> ``"8d 1h 1m"``; zero parts are left out."""
    seconds = int(seconds)
    days, rest = divmod(seconds, 24 * 3600)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def format_loadavg(load: Sequence[float]) -> str:
    return ", ".join(f"{n:.2f}" for n in load)


def format_timestamp(moment: datetime) -> str:
    local = moment.astimezone(REFERENCE_TZ)
    return f"{local.strftime('%Y-%m-%d %H:%M:%S')} ({REFERENCE_TZ_LABEL})"


class StatusEngine:
    """Builds the health report from cached identity and live samples.

    On a live-cache miss every source is queried in one concurrent batch.
    Sources with a fallback (vcgencmd, network label) never fail the batch;
    any other failure aborts the report with a ``SourceFailure``.
    """

    def __init__(
        self,
        system: SystemSource,
        vcgencmd: VcgencmdAdapter,
        network: NetworkIdentity,
        cache: StatusCache | None = None,
        wall_clock: WallClock = _utcnow,
        version: str = "1.0.0",
    ) -> None:
        self.system = system
        self.vcgencmd = vcgencmd
        self.network = network
        self.cache = cache if cache is not None else StatusCache()
        self._wall_clock = wall_clock
        self.version = version

    @classmethod
    def from_settings(cls, settings: Settings) -> StatusEngine:
        system = SystemSource(
            disk_mount=settings.disk_mount,
            cpu_sample_interval=settings.cpu_sample_interval,
        )
        return cls(
            system=system,
            vcgencmd=VcgencmdAdapter(settings.vcgencmd_path, timeout=settings.command_timeout),
            network=NetworkIdentity(
                system.interfaces,
                ssid_command=settings.ssid_command,
                timeout=settings.command_timeout,
            ),
            cache=StatusCache(freshness_window=settings.cache_ttl),
            version=settings.version,
        )

    async def build_report(self) -> SystemStatus:
        identity = await self.cache.get_identity(self.system.identity)
        live = await self.cache.get_live(self.sample)
        return SystemStatus.merge(identity, live)

    async def sample(self) -> LiveMetrics:
        """Query every live source once and reduce the results."""
        cpu, cpu_load, mem, disk, host, readings, network = await asyncio.gather(
            self.system.cpu(),
            self.system.cpu_load(),
            self.system.memory(),
            self.system.disk(),
            self.system.host_load(),
            self.vcgencmd.read_all(),
            self.network.describe_network(),
        )

        fallbacks = [r.reading.value for r in readings.values() if r.fallback]
        if fallbacks:
            logger.info("Placeholder vcgencmd output for: %s", ", ".join(fallbacks))

        voltage = parse_voltage(readings[Reading.VOLTS].output)
        temperature = parse_temperature(readings[Reading.TEMP].output)
        clock_hz = parse_clock_hz(readings[Reading.CLOCK_ARM].output)
        flags = decode(parse_throttled(readings[Reading.THROTTLED].output))

        swap_percent = mem.swap_used / mem.swap_total * 100 if mem.swap_total > 0 else 0.0

        result = classify(
            ClassifierInputs(
                flags=flags,
                temperature=float(temperature),
                disk_percent=disk.percent,
                cpu_load=cpu_load,
                swap_total=mem.swap_total,
                swap_used=mem.swap_used,
                uptime_seconds=host.uptime_seconds,
            )
        )
        if SEVERITY_RANK[result.severity] >= SEVERITY_RANK[Severity.WARNING]:
            logger.warning("Status %s: %s", result.severity, result.message)
        elif result.messages:
            logger.info("Status %s: %s", result.severity, result.message)

        return LiveMetrics(
            uptime=format_uptime(host.uptime_seconds),
            uptime_seconds=host.uptime_seconds,
            datetime=format_timestamp(self._wall_clock()),
            network=network.label,
            network_speed=network.speed,
            cpu=CpuInfo(
                model=cpu.model,
                cores=cpu.cores,
                speed=format_amount(cpu.speed_ghz),
                usage=cpu_load,
            ),
            power=PowerInfo(
                voltage=voltage,
                under_voltage_now=flags.under_voltage_now,
                under_voltage_past=flags.under_voltage_past,
            ),
            temp=ThermalInfo(
                value=temperature,
                overheating_now=flags.overheating_now,
                overheating_past=flags.overheating_past,
            ),
            clock=ClockInfo(
                speed=format_amount(clock_hz / 1e9),
                governor=cpu.governor,
                throttling_now=flags.throttling_now,
                throttling_past=flags.throttling_past,
            ),
            loadavg=format_loadavg(host.loadavg),
            processes=host.processes,
            memory=MemoryInfo(
                used=format_amount(mem.active / GIB),
                total=format_amount(mem.total / GIB),
                percentage=mem.active / mem.total * 100,
            ),
            swap=SwapInfo(
                used=format_amount(mem.swap_used / MIB),
                total=format_amount(mem.swap_total / GIB),
                percentage=swap_percent,
            ),
            disk=DiskInfo(
                used=format_amount(disk.used / GIB),
                total=format_amount(disk.total / GIB),
                percentage=disk.percent,
                read_only=disk.read_only,
            ),
            status=result.severity,
            status_messages=list(result.messages),
            status_message=result.message,
            version=self.version,
        )
