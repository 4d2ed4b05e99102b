"""Shared fakes and fixtures for the pistatus test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pistatus.collectors.network import NetworkIdentity
from pistatus.collectors.system import SystemSource
from pistatus.collectors.vcgencmd import FALLBACK_OUTPUT, Reading, ToolReading, VcgencmdAdapter
from pistatus.engine.assembler import StatusEngine
from pistatus.engine.cache import StatusCache
from pistatus.exceptions import SourceFailure
from pistatus.models import (
    CpuFacts,
    DiskSample,
    HostLoad,
    InterfaceInfo,
    MachineIdentity,
    MemorySample,
    NetworkDescription,
)

GIB = 1024**3
MIB = 1024**2

MISSING_BINARY = "pistatus-test-no-such-binary"


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSystemSource(SystemSource):
    """SystemSource returning fixed values and counting live queries."""

    def __init__(self) -> None:
        super().__init__()
        self.cpu_facts = CpuFacts(model="Cortex-A72", cores=4, speed_ghz=1.8, governor="ondemand")
        self.load = 12.5
        self.mem = MemorySample(
            total=4 * GIB,
            active=1 * GIB,
            swap_total=1 * GIB,
            swap_used=100 * MIB,
        )
        self.disk_sample = DiskSample(mount="/", total=32 * GIB, used=8 * GIB, percent=25.0)
        self.host = HostLoad(uptime_seconds=3 * 3600 + 25 * 60, loadavg=(0.5, 0.25, 0.1), processes=142)
        self.machine = MachineIdentity(
            os="Ubuntu 24.04",
            host="raspberrypi",
            ipv4="192.168.1.20",
            interface="eth0",
            mac="dc:a6:32:00:00:01",
        )
        self.table = [
            InterfaceInfo(name="lo", internal=True, is_up=True, ipv4="127.0.0.1"),
            InterfaceInfo(name="eth0", is_up=True, ipv4="192.168.1.20", mac="dc:a6:32:00:00:01", speed=1000),
        ]
        self.failing: set[str] = set()
        self.identity_calls = 0
        self.cpu_calls = 0

    def _maybe_fail(self, source: str) -> None:
        if source in self.failing:
            raise SourceFailure(source, "simulated")

    async def identity(self) -> MachineIdentity:
        self.identity_calls += 1
        return self.machine

    async def cpu(self) -> CpuFacts:
        self.cpu_calls += 1
        self._maybe_fail("cpu")
        return self.cpu_facts

    async def cpu_load(self) -> float:
        self._maybe_fail("cpu_load")
        return self.load

    async def memory(self) -> MemorySample:
        self._maybe_fail("memory")
        return self.mem

    async def disk(self) -> DiskSample:
        self._maybe_fail("disk")
        return self.disk_sample

    async def host_load(self) -> HostLoad:
        self._maybe_fail("host_load")
        return self.host

    async def interfaces(self) -> list[InterfaceInfo]:
        self._maybe_fail("interfaces")
        return self.table


class FakeVcgencmd(VcgencmdAdapter):
    """Adapter answering from a dict instead of running vcgencmd.

    Readings listed in ``unavailable`` answer with the fallback output, as
    the real adapter does when the binary cannot run.
    """

    def __init__(self, outputs: dict[Reading, str] | None = None) -> None:
        super().__init__(executable=MISSING_BINARY)
        self.outputs = dict(FALLBACK_OUTPUT)
        if outputs:
            self.outputs.update(outputs)
        self.unavailable: set[Reading] = set()

    async def read(self, reading: Reading) -> ToolReading:
        if reading in self.unavailable:
            return ToolReading(reading=reading, output=FALLBACK_OUTPUT[reading], fallback=True)
        return ToolReading(reading=reading, output=self.outputs[reading])


class FakeNetworkIdentity(NetworkIdentity):
    def __init__(self, label: str = "WiFi: HomeNet", speed: int | None = None) -> None:
        super().__init__(interfaces=None)  # type: ignore[arg-type]
        self.label = label
        self.speed = speed

    async def describe_network(self) -> NetworkDescription:
        return NetworkDescription(label=self.label, speed=self.speed)


FIXED_NOW = datetime(2025, 1, 1, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def system() -> FakeSystemSource:
    return FakeSystemSource()


@pytest.fixture
def vcgencmd() -> FakeVcgencmd:
    return FakeVcgencmd()


@pytest.fixture
def engine(system: FakeSystemSource, vcgencmd: FakeVcgencmd, clock: FakeClock) -> StatusEngine:
    return StatusEngine(
        system=system,
        vcgencmd=vcgencmd,
        network=FakeNetworkIdentity(),
        cache=StatusCache(freshness_window=10.0, clock=clock),
        wall_clock=lambda: FIXED_NOW,
    )
