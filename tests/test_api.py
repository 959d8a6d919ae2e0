"""Tests for sysmon.api routes."""

from __future__ import annotations

import json
from datetime import datetime
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from sysmon.main import app, build_monitor, lifespan
from sysmon.models import HealthStatus


# ── fixtures ───────────────────────────────────────────


@pytest.fixture
def _setup_app_state(monitor):
    """Inject a monitor so routes work without the full lifespan."""
    app.state.monitor = monitor
    yield
    del app.state.monitor


@pytest.fixture
async def client(_setup_app_state):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ── REST tests ─────────────────────────────────────────


class TestSystem:
    @pytest.mark.asyncio
    async def test_refreshes_on_demand(self, client: AsyncClient, sampler):
        resp = await client.get("/api/system")
        assert resp.status_code == 200
        data = resp.json()
        assert sampler.calls == 1
        assert data["memory"]["total_gb"] == 8.0
        assert data["memory"]["percent"] == 50.0
        assert data["os"]["hostname"] == "box"
        assert data["captured_at"] is not None

        resp = await client.get("/api/system")
        assert sampler.calls == 2
        assert resp.json()["cpu"]["load"] == 2.0

    @pytest.mark.asyncio
    async def test_failed_refresh_serves_previous_snapshot(self, client: AsyncClient, sampler):
        before = (await client.get("/api/system")).json()

        sampler.fail = True
        resp = await client.get("/api/system")

        assert resp.status_code == 200
        assert resp.json() == before

    @pytest.mark.asyncio
    async def test_failure_before_first_sample_returns_empty(self, client: AsyncClient, sampler):
        sampler.fail = True
        resp = await client.get("/api/system")

        assert resp.status_code == 200
        data = resp.json()
        assert data["memory"] is None
        assert data["os"] is None
        assert data["disks"] == []


class TestOpenClaw:
    @pytest.mark.asyncio
    async def test_online(self, client: AsyncClient, probe):
        resp = await client.get("/api/openclaw")
        assert resp.status_code == 200
        data = resp.json()
        assert probe.calls == 1
        assert data["status"] == "online"
        assert data["agents"] == [{"id": "main"}]
        assert data["last_update"] is not None

    @pytest.mark.asyncio
    async def test_offline_is_still_200(self, client: AsyncClient, probe):
        await client.get("/api/openclaw")

        probe.status = HealthStatus.OFFLINE
        resp = await client.get("/api/openclaw")

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "offline"
        assert data["agents"] == [{"id": "main"}]


class TestDashboard:
    @pytest.mark.asyncio
    async def test_combined(self, client: AsyncClient, sampler, probe):
        resp = await client.get("/api/dashboard")
        assert resp.status_code == 200
        data = resp.json()
        assert set(data) == {"system", "openclaw", "timestamp"}
        assert data["system"]["memory"]["used_gb"] == 4.0
        assert data["openclaw"]["status"] == "online"
        assert sampler.calls == 1
        assert probe.calls == 1

    @pytest.mark.asyncio
    async def test_everything_down(self, client: AsyncClient, sampler, probe):
        sampler.fail = True
        probe.status = HealthStatus.ERROR

        resp = await client.get("/api/dashboard")

        assert resp.status_code == 200
        data = resp.json()
        assert data["system"]["cpu"] is None
        assert data["openclaw"]["status"] == "error"
        assert data["openclaw"]["agents"] == []


class TestLiveness:
    @pytest.mark.asyncio
    async def test_shape(self, client: AsyncClient):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["uptime"] >= 0
        datetime.fromisoformat(data["time"])

    @pytest.mark.asyncio
    async def test_does_not_touch_cache_or_collectors(self, client: AsyncClient, monitor, sampler, probe):
        system_before = monitor.cache.system.get()
        health_before = monitor.cache.health.get()

        for _ in range(3):
            resp = await client.get("/api/health")
            assert resp.status_code == 200

        assert monitor.cache.system.get() is system_before
        assert monitor.cache.health.get() is health_before
        assert sampler.calls == 0
        assert probe.calls == 0


class TestRouting:
    @pytest.mark.asyncio
    async def test_unknown_api_path_is_404(self, client: AsyncClient):
        resp = await client.get("/api/nope")
        assert resp.status_code == 404


# ── app wiring ─────────────────────────────────────────


def _patched_settings(mock_settings, config_path, url="", host="127.0.0.1"):
    mock_settings.openclaw_config_path = str(config_path)
    mock_settings.openclaw_url = url
    mock_settings.openclaw_host = "localhost"
    mock_settings.openclaw_status_path = "/api/status"
    mock_settings.probe_timeout = 2.0
    mock_settings.cpu_sample_window = 0.05
    mock_settings.host = host
    mock_settings.system_interval = 60.0
    mock_settings.health_interval = 60.0
    mock_settings.app_name = "System Monitor"


class TestBuildMonitor:
    def test_url_derived_from_openclaw_config(self, tmp_path):
        config = tmp_path / "openclaw.json"
        config.write_text(json.dumps({"gateway": {"port": 19001}}))

        with patch("sysmon.main.settings") as mock_settings:
            _patched_settings(mock_settings, config)
            monitor = build_monitor()

        assert monitor._probe.url == "http://localhost:19001/api/status"
        assert monitor._probe.timeout == 2.0

    def test_explicit_url_wins(self, tmp_path):
        with patch("sysmon.main.settings") as mock_settings:
            _patched_settings(mock_settings, tmp_path / "absent.json", url="http://gw:1/s")
            monitor = build_monitor()

        assert monitor._probe.url == "http://gw:1/s"

    def test_missing_config_uses_default_port(self, tmp_path):
        with patch("sysmon.main.settings") as mock_settings:
            _patched_settings(mock_settings, tmp_path / "absent.json")
            monitor = build_monitor()

        assert monitor._probe.url == "http://localhost:18789/api/status"

    def test_unenforced_token_is_flagged_on_public_bind(self, tmp_path, caplog):
        config = tmp_path / "openclaw.json"
        config.write_text(json.dumps({"gateway": {"auth": {"token": "s3cret"}}}))

        with patch("sysmon.main.settings") as mock_settings:
            _patched_settings(mock_settings, config, host="0.0.0.0")
            build_monitor()

        assert "unauthenticated" in caplog.text


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_scheduler(tmp_path):
    with patch("sysmon.main.settings") as mock_settings:
        _patched_settings(mock_settings, tmp_path / "absent.json")
        async with lifespan(app):
            scheduler = app.state.scheduler
            assert scheduler.running is True
            assert app.state.monitor is not None

    assert scheduler.running is False
    del app.state.monitor
    del app.state.scheduler
