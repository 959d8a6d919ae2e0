from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from sysmon.collectors.errors import CollectionFailure
from sysmon.engine.monitor import Monitor
from sysmon.models import (
    CpuLoad,
    HealthStatus,
    MemoryUsage,
    OsIdentity,
    ServiceHealth,
    SystemSnapshot,
)


def make_snapshot(load: float = 12.5) -> SystemSnapshot:
    return SystemSnapshot(
        cpu=CpuLoad(load=load, cores=[load, load]),
        memory=MemoryUsage(total_gb=8.0, used_gb=4.0, free_gb=2.0, percent=50.0),
        disks=[],
        os=OsIdentity(platform="linux", distro="Debian", release="6.1", hostname="box"),
        captured_at=datetime.now(timezone.utc),
    )


class StubSampler:
    """Sampler that returns queued snapshots, or fails when ``fail`` is set."""

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.fail = False
        self.calls = 0
        self.finished_at: float | None = None

    async def capture(self) -> SystemSnapshot:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        self.finished_at = asyncio.get_running_loop().time()
        if self.fail:
            raise CollectionFailure("sensors unavailable")
        return make_snapshot(load=float(self.calls))


class StubProbe:
    """Probe that reports a fixed status."""

    url = "http://gateway.test/api/status"

    def __init__(self, status: HealthStatus = HealthStatus.ONLINE, delay: float = 0.0) -> None:
        self.status = status
        self.delay = delay
        self.calls = 0

    async def check(self, previous: ServiceHealth | None = None) -> ServiceHealth:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        previous = previous or ServiceHealth()
        if self.status is HealthStatus.ONLINE:
            return ServiceHealth(
                status=HealthStatus.ONLINE,
                agents=[{"id": "main"}],
                last_update=datetime.now(timezone.utc),
            )
        return previous.model_copy(update={"status": self.status})


@pytest.fixture
def sampler() -> StubSampler:
    return StubSampler()


@pytest.fixture
def probe() -> StubProbe:
    return StubProbe()


@pytest.fixture
def monitor(sampler: StubSampler, probe: StubProbe) -> Monitor:
    return Monitor(sampler, probe)
