"""Tests for pistatus.api routes."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import FakeSystemSource, FakeVcgencmd
from pistatus.collectors.vcgencmd import Reading
from pistatus.engine.assembler import StatusEngine
from pistatus.main import app


# ── fixtures ───────────────────────────────────────────


@pytest.fixture
def _setup_app_state(engine: StatusEngine):
    """Inject a fake-backed engine so routes work without the lifespan."""
    app.state.engine = engine
    yield
    del app.state.engine


@pytest.fixture
async def client(_setup_app_state):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ── REST tests ─────────────────────────────────────────


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_ok(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "identity_cached": False, "live_cached": False}

    @pytest.mark.asyncio
    async def test_health_reports_cache_after_report(self, client: AsyncClient):
        await client.get("/api/json")
        resp = await client.get("/health")
        assert resp.json() == {"ok": True, "identity_cached": True, "live_cached": True}


class TestJson:
    @pytest.mark.asyncio
    async def test_report_shape(self, client: AsyncClient):
        resp = await client.get("/api/json")
        assert resp.status_code == 200
        data = resp.json()
        assert data["host"] == "raspberrypi"
        assert data["status"] == "Nominal"
        assert data["memory"] == {"used": "1.00", "total": "4.00", "percentage": 25.0}
        assert data["power"]["voltage"] == "0.8500V"
        assert data["power"]["under_voltage_now"] is False
        assert data["clock"]["speed"] == "1.50"
        assert isinstance(data["cpu"]["usage"], float)

    @pytest.mark.asyncio
    async def test_source_failure_is_503(self, client: AsyncClient, system: FakeSystemSource):
        system.failing.add("memory")
        resp = await client.get("/api/json")
        assert resp.status_code == 503
        assert "memory" in resp.json()["detail"]


class TestText:
    @pytest.mark.asyncio
    async def test_plain_text(self, client: AsyncClient):
        resp = await client.get("/api/text")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        lines = resp.text.splitlines()
        assert "Host: raspberrypi" in lines
        assert "Network: WiFi: HomeNet" in lines
        assert "Memory: 1.00 GiB / 4.00 GiB (25%)" in lines
        assert lines[-1] == "Status: Nominal"

    @pytest.mark.asyncio
    async def test_flags_rendered(self, client: AsyncClient, vcgencmd: FakeVcgencmd):
        vcgencmd.outputs[Reading.THROTTLED] = "throttled=0x10001"
        resp = await client.get("/api/text")
        assert "Power: 0.8500V - Under Voltage [Past/Now]" in resp.text
        assert "Status: Critical (under voltage past, under voltage NOW)" in resp.text
