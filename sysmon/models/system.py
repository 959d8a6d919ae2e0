from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CpuLoad(BaseModel):
    """Overall and per-core CPU load, in percent."""

    model_config = ConfigDict(frozen=True)

    load: float = 0.0
    cores: list[float] = Field(default_factory=list)


class MemoryUsage(BaseModel):
    """Physical memory in GB (1024-based)."""

    model_config = ConfigDict(frozen=True)

    total_gb: float = 0.0
    used_gb: float = 0.0
    free_gb: float = 0.0
    percent: float = 0.0


class DiskVolume(BaseModel):
    model_config = ConfigDict(frozen=True)

    mount: str
    size_gb: float = 0.0
    used_gb: float = 0.0
    use_percent: float = 0.0


class OsIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    platform: str = ""
    distro: str = ""
    release: str = ""
    hostname: str = ""


class SystemSnapshot(BaseModel):
    """Point-in-time snapshot of local system resources.

    The default instance is the empty snapshot held by the cache before the
    first successful capture: every section is ``None`` and there are no disks.
    """

    model_config = ConfigDict(frozen=True)

    cpu: CpuLoad | None = None
    memory: MemoryUsage | None = None
    disks: list[DiskVolume] = Field(default_factory=list)
    os: OsIdentity | None = None
    captured_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return self.captured_at is None
