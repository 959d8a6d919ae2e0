from __future__ import annotations

import asyncio
import logging

from sysmon.collectors.errors import CollectionFailure
from sysmon.collectors.health_probe import HealthProbe
from sysmon.collectors.system_sampler import MetricsSampler
from sysmon.engine.cache import SampleCache
from sysmon.models.health import HealthStatus, ServiceHealth
from sysmon.models.system import SystemSnapshot

logger = logging.getLogger(__name__)


class Monitor:
    """Refreshes the ``SampleCache`` from the sampler and the probe.

    Shared by the scheduler and the API routes so both refresh paths behave
    the same. A failed system capture keeps the previously cached snapshot;
    a failed health check only changes the cached status.
    """

    def __init__(
        self,
        sampler: MetricsSampler,
        probe: HealthProbe,
        cache: SampleCache | None = None,
    ) -> None:
        self._sampler = sampler
        self._probe = probe
        self._cache = cache or SampleCache()

    @property
    def cache(self) -> SampleCache:
        return self._cache

    async def refresh_system(self) -> SystemSnapshot:
        try:
            snapshot = await self._sampler.capture()
        except CollectionFailure:
            logger.debug("Keeping previous system snapshot")
            return self._cache.system.get()
        self._cache.system.set(snapshot)
        return snapshot

    async def refresh_health(self) -> ServiceHealth:
        result = await self._probe.check()
        if result.status != HealthStatus.ONLINE:
            # merge against the cache as it is now; another refresh may have
            # landed newer agents while this check was waiting
            result = self._cache.health.get().model_copy(
                update={"status": result.status}
            )
        self._cache.health.set(result)
        return result

    async def refresh_all(self) -> tuple[SystemSnapshot, ServiceHealth]:
        system, health = await asyncio.gather(
            self.refresh_system(),
            self.refresh_health(),
        )
        return system, health
