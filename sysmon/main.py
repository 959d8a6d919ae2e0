from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from sysmon import openclaw
from sysmon.api.routes import router
from sysmon.collectors import HealthProbe, MetricsSampler
from sysmon.config import settings
from sysmon.engine import Monitor, SampleCache, Scheduler

logger = logging.getLogger(__name__)

_PUBLIC_DIR = Path(settings.public_dir)
_LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}


def build_monitor() -> Monitor:
    config = openclaw.load_openclaw_config(settings.openclaw_config_path)
    url = settings.openclaw_url or openclaw.gateway_status_url(
        config,
        host=settings.openclaw_host,
        path=settings.openclaw_status_path,
    )

    if openclaw.gateway_token(config) and settings.host not in _LOOPBACK_HOSTS:
        logger.warning(
            "Gateway token configured but this API is unauthenticated and bound to %s",
            settings.host,
        )

    logger.info("Probing OpenClaw gateway at %s", url or "<none>")
    probe = HealthProbe(url, timeout=settings.probe_timeout)
    return Monitor(
        MetricsSampler(cpu_window=settings.cpu_sample_window),
        probe,
        SampleCache(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    monitor = build_monitor()
    scheduler = Scheduler(
        monitor,
        system_interval=settings.system_interval,
        health_interval=settings.health_interval,
    )
    await scheduler.start()

    # Store on app.state for route access
    app.state.monitor = monitor
    app.state.scheduler = scheduler

    logger.info("%s started", settings.app_name)

    yield

    # ── shutdown ──────────────────────────────────────
    await scheduler.stop()
    logger.info("%s shut down", settings.app_name)


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)

# Static front end. Mounted last so /api/* routes take precedence.
if _PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_PUBLIC_DIR), html=True), name="public")
