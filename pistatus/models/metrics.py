from __future__ import annotations

from pydantic import BaseModel, Field

from pistatus.models.status import Severity

UNKNOWN = "Unknown"


class MachineIdentity(BaseModel):
    """Facts assumed constant for the lifetime of the process."""

    model_config = {"frozen": True}

    os: str = UNKNOWN
    host: str = UNKNOWN
    ipv4: str = UNKNOWN
    interface: str = UNKNOWN
    mac: str = UNKNOWN


class CpuInfo(BaseModel):
    model: str
    cores: int
    speed: str  # GHz
    usage: float  # %


class PowerInfo(BaseModel):
    voltage: str
    under_voltage_now: bool = False
    under_voltage_past: bool = False


class ThermalInfo(BaseModel):
    value: str  # degrees Celsius
    overheating_now: bool = False
    overheating_past: bool = False


class ClockInfo(BaseModel):
    speed: str  # GHz
    governor: str
    throttling_now: bool = False
    throttling_past: bool = False


class MemoryInfo(BaseModel):
    used: str  # GiB
    total: str  # GiB
    percentage: float


class SwapInfo(BaseModel):
    used: str  # MiB
    total: str  # GiB
    percentage: float


class DiskInfo(BaseModel):
    used: str  # GiB
    total: str  # GiB
    percentage: float
    read_only: bool = False


class LiveMetrics(BaseModel):
    """One consistent sample of everything that changes at runtime."""

    uptime: str
    uptime_seconds: float
    datetime: str
    network: str
    network_speed: int | None = None  # Mbps of the wired link, None otherwise
    cpu: CpuInfo
    power: PowerInfo
    temp: ThermalInfo
    clock: ClockInfo
    loadavg: str
    processes: int
    memory: MemoryInfo
    swap: SwapInfo
    disk: DiskInfo
    status: Severity
    status_messages: list[str] = Field(default_factory=list)
    status_message: str = ""
    version: str


class SystemStatus(MachineIdentity, LiveMetrics):
    """Flat report: identity fields merged with the live sample."""

    @classmethod
    def merge(cls, identity: MachineIdentity, live: LiveMetrics) -> SystemStatus:
        return cls(**identity.model_dump(), **live.model_dump())
