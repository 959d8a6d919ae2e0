from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from .health import ServiceHealth
from .system import SystemSnapshot


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DashboardView(BaseModel):
    """Combined response of ``/api/dashboard``."""

    system: SystemSnapshot
    openclaw: ServiceHealth
    timestamp: datetime = Field(default_factory=_utcnow)


class Liveness(BaseModel):
    """Liveness record of the API process itself."""

    status: Literal["ok"] = "ok"
    time: datetime = Field(default_factory=_utcnow)
    uptime: float = 0.0
