from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Severity(StrEnum):
    NOMINAL = "Nominal"
    NOMINAL_LONG_UPTIME = "NominalLongUptime"
    WARNING = "Warning"
    CRITICAL = "Critical"


SEVERITY_RANK: dict[Severity, int] = {
    Severity.NOMINAL: 0,
    Severity.NOMINAL_LONG_UPTIME: 1,
    Severity.WARNING: 2,
    Severity.CRITICAL: 3,
}


class ThrottleFlags(BaseModel):
    """Conditions packed into the firmware throttle word.

    The ``*_now`` flags describe the current state, the ``*_past`` flags
    latch once the condition has occurred since boot.
    """

    model_config = {"frozen": True}

    under_voltage_now: bool = False
    under_voltage_past: bool = False
    throttling_now: bool = False
    throttling_past: bool = False
    overheating_now: bool = False
    overheating_past: bool = False


class Classification(BaseModel):
    """Outcome of the severity rules for one sample."""

    model_config = {"frozen": True}

    severity: Severity = Severity.NOMINAL
    messages: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def message(self) -> str:
        return ", ".join(self.messages)
