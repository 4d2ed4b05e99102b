from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from pistatus.exceptions import EngineError
from pistatus.models import SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()


def _flag_text(label: str, past: bool, now: bool) -> str:
    if not (past or now):
        return ""
    when = "/".join(name for name, on in (("Past", past), ("Now", now)) if on)
    return f" - {label} [{when}]"


def render_text(stats: SystemStatus) -> str:
    """Plain ``Key: value`` rendering of a report, one field per line."""
    lines = [
        f"OS: {stats.os}",
        f"Host: {stats.host}",
        f"Uptime: {stats.uptime}",
        f"Datetime: {stats.datetime}",
        f"IPv4: {stats.ipv4} ({stats.interface})",
        f"Network: {stats.network}",
        f"CPU: {stats.cpu.model} ({stats.cpu.cores}) @ {stats.cpu.speed}GHz - ({stats.cpu.usage:.0f}%)",
        f"Power: {stats.power.voltage}"
        + _flag_text("Under Voltage", stats.power.under_voltage_past, stats.power.under_voltage_now),
        f"Temp: {stats.temp.value}°C"
        + _flag_text("Overheating", stats.temp.overheating_past, stats.temp.overheating_now),
        f"Clock: {stats.clock.speed} GHz ({stats.clock.governor})"
        + _flag_text("Throttling", stats.clock.throttling_past, stats.clock.throttling_now),
        f"Loadavg: {stats.loadavg}",
        f"Processes: {stats.processes}",
        f"Memory: {stats.memory.used} GiB / {stats.memory.total} GiB ({stats.memory.percentage:.0f}%)",
        f"Swap: {stats.swap.used} MiB / {stats.swap.total} GiB ({stats.swap.percentage:.0f}%)",
        f"Disk: {stats.disk.used} GiB / {stats.disk.total} GiB ({stats.disk.percentage:.0f}%)"
        + (" - Read Only" if stats.disk.read_only else ""),
        f"Version: {stats.version}",
        f"Status: {stats.status}" + (f" ({stats.status_message})" if stats.status_message else ""),
    ]
    return "\n".join(lines)


async def _report(request: Request) -> SystemStatus:
    engine = request.app.state.engine
    try:
        return await engine.build_report()
    except EngineError as exc:
        logger.error("Status report failed: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc


# ── REST routes ───────────────────────────────────────


@router.get("/health")
async def health(request: Request) -> dict:
    cache = request.app.state.engine.cache
    return {
        "ok": True,
        "identity_cached": cache.identity_entry is not None,
        "live_cached": cache.live_entry is not None,
    }


@router.get("/api/json")
async def get_json(request: Request) -> dict:
    stats = await _report(request)
    return stats.model_dump(mode="json")


@router.get("/api/text", response_class=PlainTextResponse)
async def get_text(request: Request) -> str:
    stats = await _report(request)
    return render_text(stats)
