from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from sysmon.collectors.errors import ProbeRejected, ProbeUnreachable
from sysmon.models.health import HealthStatus, ServiceHealth

logger = logging.getLogger(__name__)


class HealthProbe:
    """Checks the OpenClaw gateway status endpoint.

    Each ``check()`` performs exactly one GET request and classifies the
    outcome:

    - 2xx with a JSON body  -> ``online``, agents and ``last_update`` refreshed
    - any other response    -> ``error``
    - transport failure     -> ``offline``

    On ``error`` and ``offline`` the agents and ``last_update`` of
    ``previous`` are carried over unchanged. Without ``previous`` only the
    status is meaningful and the caller merges it into its own state.
    """

    name = "openclaw_probe"

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def check(self, previous: ServiceHealth | None = None) -> ServiceHealth:
        previous = previous or ServiceHealth()

        try:
            agents = await self._fetch_agents()
        except ProbeUnreachable as exc:
            logger.info("Collector [%s] OpenClaw not reachable: %s", self.name, exc)
            return previous.model_copy(update={"status": HealthStatus.OFFLINE})
        except ProbeRejected as exc:
            logger.warning(
                "Collector [%s] OpenClaw rejected status request (status=%s): %s",
                self.name,
                exc.status_code,
                exc,
            )
            return previous.model_copy(update={"status": HealthStatus.ERROR})

        return ServiceHealth(
            status=HealthStatus.ONLINE,
            agents=agents,
            last_update=datetime.now(timezone.utc),
        )

    async def _fetch_agents(self) -> list[Any]:
        if not self.url:
            raise ProbeUnreachable("no gateway URL configured")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(self.url)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise ProbeUnreachable(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            raise ProbeRejected(
                f"HTTP {resp.status_code} from {self.url}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise ProbeRejected(
                f"invalid JSON from {self.url}", status_code=resp.status_code
            ) from exc

        agents = body.get("agents") if isinstance(body, dict) else None
        return list(agents) if isinstance(agents, list) else []
