from .metrics import (
    ClockInfo,
    CpuInfo,
    DiskInfo,
    LiveMetrics,
    MachineIdentity,
    MemoryInfo,
    PowerInfo,
    SwapInfo,
    SystemStatus,
    ThermalInfo,
    UNKNOWN,
)
from .sources import (
    CpuFacts,
    DiskSample,
    HostLoad,
    InterfaceInfo,
    MemorySample,
    NetworkDescription,
)
from .status import Classification, Severity, SEVERITY_RANK, ThrottleFlags

__all__ = [
    "Classification",
    "ClockInfo",
    "CpuFacts",
    "CpuInfo",
    "DiskInfo",
    "DiskSample",
    "HostLoad",
    "InterfaceInfo",
    "LiveMetrics",
    "MachineIdentity",
    "MemoryInfo",
    "MemorySample",
    "NetworkDescription",
    "PowerInfo",
    "SEVERITY_RANK",
    "Severity",
    "SwapInfo",
    "SystemStatus",
    "ThermalInfo",
    "ThrottleFlags",
    "UNKNOWN",
]
