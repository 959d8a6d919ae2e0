from __future__ import annotations

import time

import psutil
from fastapi import APIRouter, Request

from sysmon.engine.monitor import Monitor
from sysmon.models import DashboardView, Liveness, ServiceHealth, SystemSnapshot

router = APIRouter()


def _monitor(request: Request) -> Monitor:
    return request.app.state.monitor


def process_uptime() -> float:
    """Seconds since this process was started."""
    return max(0.0, time.time() - psutil.Process().create_time())


# ── REST routes ───────────────────────────────────────


@router.get("/api/system")
async def get_system(request: Request) -> SystemSnapshot:
    return await _monitor(request).refresh_system()


@router.get("/api/openclaw")
async def get_openclaw(request: Request) -> ServiceHealth:
    return await _monitor(request).refresh_health()


@router.get("/api/dashboard")
async def get_dashboard(request: Request) -> DashboardView:
    system, health = await _monitor(request).refresh_all()
    return DashboardView(system=system, openclaw=health)


@router.get("/api/health")
async def get_health() -> Liveness:
    return Liveness(uptime=round(process_uptime(), 3))
