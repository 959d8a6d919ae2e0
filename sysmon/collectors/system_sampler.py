from __future__ import annotations

import asyncio
import logging
import platform
import socket
import sys
from datetime import datetime, timezone

import psutil

from sysmon.collectors.errors import CollectionFailure
from sysmon.models.system import (
    CpuLoad,
    DiskVolume,
    MemoryUsage,
    OsIdentity,
    SystemSnapshot,
)

logger = logging.getLogger(__name__)

GB = 1024 ** 3


def bytes_to_gb(value: float) -> float:
    return round(value / GB, 1)


class MetricsSampler:
    """Captures CPU, memory, disk and OS identity into a ``SystemSnapshot``.

    psutil calls block (CPU load is measured over ``cpu_window`` seconds),
    so ``capture()`` runs them in a worker thread. Any failure is logged and
    raised as a single ``CollectionFailure``; deciding what to serve instead
    is up to the caller.
    """

    name = "system_sampler"

    def __init__(self, cpu_window: float = 0.2) -> None:
        self.cpu_window = cpu_window

    async def capture(self) -> SystemSnapshot:
        try:
            return await asyncio.to_thread(self._read_snapshot)
        except Exception as exc:
            logger.warning("Collector [%s] system info error: %s", self.name, exc)
            raise CollectionFailure(str(exc)) from exc

    # ── internals ───────────────────────────────────────

    def _read_snapshot(self) -> SystemSnapshot:
        return SystemSnapshot(
            cpu=self._read_cpu(),
            memory=self._read_memory(),
            disks=self._read_disks(),
            os=self._read_os(),
            captured_at=datetime.now(timezone.utc),
        )

    def _read_cpu(self) -> CpuLoad:
        # measured over cpu_window; the interval=None baseline is per thread
        cores = psutil.cpu_percent(interval=self.cpu_window, percpu=True)
        load = sum(cores) / len(cores) if cores else 0.0
        return CpuLoad(
            load=round(load, 1),
            cores=[round(c, 1) for c in cores],
        )

    @staticmethod
    def _read_memory() -> MemoryUsage:
        mem = psutil.virtual_memory()
        percent = (mem.used / mem.total) * 100 if mem.total else 0.0
        return MemoryUsage(
            total_gb=bytes_to_gb(mem.total),
            used_gb=bytes_to_gb(mem.used),
            free_gb=bytes_to_gb(mem.free),
            percent=round(percent, 1),
        )

    @staticmethod
    def _read_disks() -> list[DiskVolume]:
        volumes: list[DiskVolume] = []
        seen: set[str] = set()

        for part in psutil.disk_partitions(all=False):
            mount = part.mountpoint
            if mount in seen:
                continue
            try:
                usage = psutil.disk_usage(mount)
            except OSError:
                logger.debug("Cannot read disk usage for %s", mount)
                continue

            seen.add(mount)
            volumes.append(
                DiskVolume(
                    mount=mount,
                    size_gb=bytes_to_gb(usage.total),
                    used_gb=bytes_to_gb(usage.used),
                    use_percent=usage.percent,
                )
            )

        return volumes

    @staticmethod
    def _read_os() -> OsIdentity:
        return OsIdentity(
            platform=sys.platform,
            distro=_distro_name(),
            release=platform.release(),
            hostname=socket.gethostname(),
        )


def _distro_name() -> str:
    """Human-readable distribution name, falling back to the kernel name."""
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        return platform.system()
    return release.get("PRETTY_NAME") or release.get("NAME") or platform.system()
