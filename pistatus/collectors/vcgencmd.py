from __future__ import annotations

import asyncio
import logging
import re
from enum import StrEnum

from pydantic import BaseModel

from pistatus.collectors.command import CommandError, run_command

logger = logging.getLogger(__name__)


class Reading(StrEnum):
    VOLTS = "measure_volts"
    TEMP = "measure_temp"
    CLOCK_ARM = "measure_clock arm"
    THROTTLED = "get_throttled"


# Output used when vcgencmd is unavailable (e.g. not running on a Pi).
FALLBACK_OUTPUT: dict[Reading, str] = {
    Reading.VOLTS: "volt=0.8500V",
    Reading.TEMP: "temp=45.0'C",
    Reading.CLOCK_ARM: "frequency(48)=1500000000",
    Reading.THROTTLED: "throttled=0x0",
}

DEFAULT_VOLTAGE = "0V"
DEFAULT_TEMPERATURE = "0"
DEFAULT_CLOCK_HZ = 0
DEFAULT_THROTTLED = "0x0"

_VOLT_RE = re.compile(r"volt=([0-9]+(?:\.[0-9]+)?V)")
_TEMP_RE = re.compile(r"temp=([0-9]+(?:\.[0-9]+)?)")
_CLOCK_RE = re.compile(r"frequency\(\d+\)=(\d+)")
_THROTTLED_RE = re.compile(r"throttled=(0x[0-9a-fA-F]+)")


class ToolReading(BaseModel):
    """Raw vcgencmd output for one reading, flagged when it is the fallback."""

    reading: Reading
    output: str
    fallback: bool = False


class VcgencmdAdapter:
    """Reads firmware values through ``vcgencmd``, never raising."""

    def __init__(self, executable: str = "vcgencmd", timeout: float = 2.0) -> None:
        self.executable = executable
        self.timeout = timeout

    async def read(self, reading: Reading) -> ToolReading:
        args = [self.executable, *reading.value.split()]
        try:
            output = await run_command(args, timeout=self.timeout)
        except CommandError as exc:
            logger.debug("vcgencmd %s unavailable, using fallback: %s", reading.value, exc)
            return ToolReading(reading=reading, output=FALLBACK_OUTPUT[reading], fallback=True)
        return ToolReading(reading=reading, output=output)

    async def read_all(self) -> dict[Reading, ToolReading]:
        results = await asyncio.gather(*(self.read(r) for r in Reading))
        return {r.reading: r for r in results}


# ── parsers ─────────────────────────────────────────


def _match(pattern: re.Pattern[str], text: str) -> str | None:
    m = pattern.search(text)
    return m.group(1) if m else None


def parse_voltage(output: str) -> str:
    """``volt=0.8500V`` -> ``0.8500V``."""
    return _match(_VOLT_RE, output) or DEFAULT_VOLTAGE


def parse_temperature(output: str) -> str:
    """``temp=45.0'C`` -> ``45.0``."""
    return _match(_TEMP_RE, output) or DEFAULT_TEMPERATURE


def parse_clock_hz(output: str) -> int:
    """``frequency(48)=1500000000`` -> ``1500000000``."""
    value = _match(_CLOCK_RE, output)
    return int(value) if value else DEFAULT_CLOCK_HZ


def parse_throttled(output: str) -> str:
    """``throttled=0x50005`` -> ``0x50005``."""
    return _match(_THROTTLED_RE, output) or DEFAULT_THROTTLED
