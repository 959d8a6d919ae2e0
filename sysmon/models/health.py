from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(StrEnum):
    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"
    ERROR = "error"


class ServiceHealth(BaseModel):
    """Last known status of the companion OpenClaw gateway.

    ``agents`` is passed through exactly as the gateway reports it.
    """

    model_config = ConfigDict(frozen=True)

    status: HealthStatus = HealthStatus.UNKNOWN
    agents: list[Any] = Field(default_factory=list)
    last_update: datetime | None = None
