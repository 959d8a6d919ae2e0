from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from sysmon.engine.monitor import Monitor

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[Any]]


class PeriodicTask:
    """Runs ``action`` every ``interval`` seconds without overlapping itself.

    Each tick starts the action in the background and returns immediately.
    If the run started by an earlier tick has not finished yet, the tick is
    skipped rather than queued.
    """

    def __init__(self, name: str, action: Action, interval: float) -> None:
        self.name = name
        self.interval = interval
        self.skipped = 0
        self._action = action
        self._running = False
        self._in_flight = False
        self._task: asyncio.Task | None = None
        self._current: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Task [%s] started (interval=%.1fs)", self.name, self.interval)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        for task in (self._task, self._current):
            if task is None:
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._current = None
        self._in_flight = False
        logger.info("Task [%s] stopped", self.name)

    # ── ticks ───────────────────────────────────────────

    def tick(self) -> bool:
        """Start one run unless one is already in flight. Returns True if started."""
        if self._in_flight:
            self.skipped += 1
            logger.debug("Task [%s] still running, skipping tick", self.name)
            return False
        self._in_flight = True
        self._current = asyncio.create_task(self._run_once())
        return True

    async def _run_once(self) -> None:
        try:
            await self._action()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Task [%s] error during refresh", self.name)
        finally:
            self._in_flight = False

    async def _loop(self) -> None:
        while self._running:
            self.tick()
            await asyncio.sleep(self.interval)

    # ── introspection ───────────────────────────────────

    @property
    def running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> bool:
        return self._in_flight


class Scheduler:
    """Drives the two periodic refreshes of a ``Monitor``."""

    def __init__(
        self,
        monitor: Monitor,
        system_interval: float = 10.0,
        health_interval: float = 30.0,
    ) -> None:
        self.system = PeriodicTask("system", monitor.refresh_system, system_interval)
        self.health = PeriodicTask("health", monitor.refresh_health, health_interval)

    @property
    def tasks(self) -> list[PeriodicTask]:
        return [self.system, self.health]

    async def start(self) -> None:
        for task in self.tasks:
            await task.start()

    async def stop(self) -> None:
        for task in self.tasks:
            await task.stop()

    @property
    def running(self) -> bool:
        return any(task.running for task in self.tasks)
