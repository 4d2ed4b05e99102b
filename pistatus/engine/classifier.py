from __future__ import annotations

from typing import Callable, NamedTuple

from pydantic import BaseModel, Field

from pistatus.models import Classification, Severity, ThrottleFlags

LONG_UPTIME_SECONDS = 7 * 24 * 3600

TEMP_WARN_C = 60.0
TEMP_CRITICAL_C = 70.0
DISK_WARN_PERCENT = 70.0
DISK_CRITICAL_PERCENT = 90.0
CPU_WARN_PERCENT = 80.0
CPU_CRITICAL_PERCENT = 90.0
SWAP_WARN_PERCENT = 80.0
SWAP_CRITICAL_PERCENT = 90.0


class ClassifierInputs(BaseModel):
    """Raw values the severity rules look at."""

    model_config = {"frozen": True}

    flags: ThrottleFlags = Field(default_factory=ThrottleFlags)
    temperature: float = 0.0
    disk_percent: float = 0.0
    cpu_load: float = 0.0
    swap_total: int = 0
    swap_used: int = 0
    uptime_seconds: float = 0.0

    @property
    def swap_percent(self) -> float:
        if self.swap_total <= 0:
            return 0.0
        return self.swap_used / self.swap_total * 100


class Rule(NamedTuple):
    message: str
    check: Callable[[ClassifierInputs], bool]


WARNING_RULES: tuple[Rule, ...] = (
    Rule("throttled past", lambda i: i.flags.throttling_past),
    Rule("under voltage past", lambda i: i.flags.under_voltage_past),
    Rule("high temp", lambda i: i.temperature >= TEMP_WARN_C),
    Rule("high disk usage", lambda i: i.disk_percent >= DISK_WARN_PERCENT),
    Rule("high cpu load", lambda i: i.cpu_load >= CPU_WARN_PERCENT),
    Rule(
        "high swap usage",
        lambda i: i.swap_total > 0 and i.swap_percent >= SWAP_WARN_PERCENT,
    ),
)

CRITICAL_RULES: tuple[Rule, ...] = (
    Rule("throttled NOW", lambda i: i.flags.throttling_now),
    Rule("under voltage NOW", lambda i: i.flags.under_voltage_now),
    Rule("overheating NOW", lambda i: i.temperature >= TEMP_CRITICAL_C),
    Rule("CRITICAL disk usage", lambda i: i.disk_percent >= DISK_CRITICAL_PERCENT),
    Rule("CRITICAL cpu load", lambda i: i.cpu_load >= CPU_CRITICAL_PERCENT),
    Rule(
        "CRITICAL swap usage",
        lambda i: i.swap_total > 0 and i.swap_percent >= SWAP_CRITICAL_PERCENT,
    ),
)


def classify(inputs: ClassifierInputs) -> Classification:
    """Reduce one sample to a severity and its ordered condition messages.

    Warning-tier messages come first, then critical-tier ones. Any critical
    condition makes the whole sample Critical; the long-uptime level only
    applies when nothing else fired.
    """
    messages = [rule.message for rule in WARNING_RULES if rule.check(inputs)]
    critical = [rule.message for rule in CRITICAL_RULES if rule.check(inputs)]
    messages.extend(critical)

    if critical:
        severity = Severity.CRITICAL
    elif messages:
        severity = Severity.WARNING
    elif inputs.uptime_seconds >= LONG_UPTIME_SECONDS:
        severity = Severity.NOMINAL_LONG_UPTIME
    else:
        severity = Severity.NOMINAL

    return Classification(severity=severity, messages=tuple(messages))
