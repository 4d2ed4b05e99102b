from __future__ import annotations

from pydantic import BaseModel


class CpuFacts(BaseModel):
    model: str
    cores: int
    speed_ghz: float
    governor: str


class MemorySample(BaseModel):
    total: int
    active: int
    swap_total: int
    swap_used: int


class DiskSample(BaseModel):
    mount: str
    total: int
    used: int
    percent: float
    read_only: bool = False


class InterfaceInfo(BaseModel):
    name: str
    internal: bool = False
    is_up: bool = False
    ipv4: str | None = None
    mac: str | None = None
    speed: int = 0  # Mbps, 0 when unknown


class HostLoad(BaseModel):
    uptime_seconds: float
    loadavg: tuple[float, float, float]
    processes: int


class NetworkDescription(BaseModel):
    label: str
    speed: int | None = None
