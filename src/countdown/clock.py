"""Clock - the single time source for countdowns."""

import logging
from datetime import datetime
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

TICK_JOB_ID = "clock_tick"

TickListener = Callable[[datetime], None]


class Clock:
    """
    Emits the current time on a fixed interval.

    One instance per view. start() schedules ticks on the running asyncio
    loop; stop() cancels the schedule so nothing fires afterwards. `now`
    never moves backwards.
    """

    def __init__(
        self,
        interval: float = 1.0,
        now_func: Callable[[], datetime] = datetime.now,
    ):
        self.interval = interval
        self._now_func = now_func
        self._now = now_func()
        self._listeners: list[TickListener] = []
        self._scheduler: AsyncIOScheduler | None = None

    @property
    def now(self) -> datetime:
        return self._now

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def subscribe(self, listener: TickListener) -> Callable[[], None]:
        """Register a tick listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def tick(self) -> datetime:
        """Advance to the current time and notify listeners."""
        current = self._now_func()
        if current > self._now:
            self._now = current
        for listener in list(self._listeners):
            listener(self._now)
        return self._now

    async def _run_tick(self, scheduler: AsyncIOScheduler) -> None:
        # Coroutine jobs run on the event loop thread, not in an executor.
        # A job already handed to the loop can still run after stop().
        if self._scheduler is not scheduler:
            return
        self.tick()

    def start(self) -> None:
        """Start ticking. Must be called with an asyncio loop running."""
        if self._scheduler is not None:
            return

        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            self._run_tick,
            IntervalTrigger(seconds=self.interval),
            args=[scheduler],
            id=TICK_JOB_ID,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler = scheduler
        scheduler.start()
        logger.debug(f"Clock started ({self.interval}s interval)")

    def stop(self) -> None:
        """Cancel the schedule. Safe to call more than once."""
        if self._scheduler is None:
            return
        self._scheduler.remove_all_jobs()
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.debug("Clock stopped")

    def __enter__(self) -> "Clock":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
