"""Periodic scheduler that drives launcher health-check sweeps."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class HealthCheckScheduler:
    """Owns one cancellable task invoking a sweep callback every interval.

    The first sweep runs one full interval after start. A failing sweep is
    logged and the loop keeps its schedule.
    """

    def __init__(
        self,
        sweep: Callable[[], Awaitable[None]],
        interval_seconds: float,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize scheduler.

        Args:
            sweep: Coroutine function executed on every tick.
            interval_seconds: Delay between sweeps.
            sleep: Optional awaitable sleep used between ticks.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when interval is not positive.
        """

        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._sweep = sweep
        self._interval_seconds = interval_seconds
        self._sleep = sleep or asyncio.sleep
        self._task: asyncio.Task[None] | None = None
        self._stopped = False

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def scheduler_start(self) -> None:
        """Start the periodic loop on the running event loop.

        Returns:
            None: Creates the background task as side effect.

        Raises:
            RuntimeError: Raised when called after `scheduler_stop` or outside a running loop.
        """

        if self._stopped:
            raise RuntimeError("health check scheduler was stopped and cannot be restarted")
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._scheduler_run(), name="launcher-health-checks")

    async def scheduler_stop(self) -> None:
        """Cancel the loop and wait for it to finish; idempotent."""

        self._stopped = True
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _scheduler_run(self) -> None:
        while not self._stopped:
            await self._sleep(self._interval_seconds)
            if self._stopped:
                return
            try:
                await self._sweep()
            except Exception:  # pylint: disable=broad-except
                logger.exception("Scheduled health check sweep failed")
