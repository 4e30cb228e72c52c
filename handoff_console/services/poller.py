"""Periodic refresh of conversations and the open conversation's messages."""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional, Set

from ..utils.logger import get_logger
from .sync import Synchronizer

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_POLL_INTERVAL = 3.0


class PollerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class Poller:
    """
    Cancellable repeating refresh task.

    Each tick runs as its own task, so a slow response can overlap the next
    tick. stop() only cancels the schedule; ticks already in flight finish
    and apply their results.
    """

    def __init__(
        self,
        synchronizer: Synchronizer,
        interval: float = DEFAULT_POLL_INTERVAL,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize the poller.

        Args:
            synchronizer: Refresh operations to run on every tick
            interval: Seconds between ticks
            sleep: Coroutine used to wait between ticks (tests swap it out)
        """
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")

        self.synchronizer = synchronizer
        self.interval = interval
        self._sleep = sleep
        self._schedule_task: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        self.tick_count = 0

    @property
    def state(self) -> PollerState:
        if self._schedule_task is not None and not self._schedule_task.done():
            return PollerState.RUNNING
        return PollerState.IDLE

    def is_running(self) -> bool:
        return self.state is PollerState.RUNNING

    @property
    def in_flight(self) -> int:
        """Number of ticks dispatched and not yet finished."""
        return len(self._in_flight)

    def start(self) -> None:
        """Start ticking every ``interval`` seconds. Calling it while running is a no-op."""
        if self.is_running():
            logger.warning("Poller is already running")
            return

        self._schedule_task = asyncio.create_task(self._schedule_loop())
        logger.info(f"Poller started (interval: {self.interval}s)")

    def stop(self) -> None:
        """Cancel the schedule. Safe to call any number of times."""
        if self._schedule_task is None:
            return

        task, self._schedule_task = self._schedule_task, None
        if not task.done():
            task.cancel()
            logger.info("Poller stopped")

    async def drain(self) -> None:
        """Wait for ticks that were dispatched before stop() to finish."""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def tick(self) -> None:
        """Refresh conversations, then the selected conversation's messages."""
        self.tick_count += 1
        try:
            await self.synchronizer.refresh_conversations()
            await self.synchronizer.refresh_selection()
        except Exception:
            # Unexpected errors must not end the polling loop
            logger.exception("Unexpected error during poll tick")

    def _dispatch_tick(self) -> None:
        task = asyncio.create_task(self.tick())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _schedule_loop(self) -> None:
        try:
            while True:
                await self._sleep(self.interval)
                self._dispatch_tick()
        except asyncio.CancelledError:
            logger.debug("Poll schedule cancelled")
            raise
