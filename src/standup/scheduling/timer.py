"""Weekday once-a-minute timer driving the standup watcher."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime

from croniter import croniter

from standup.scheduling.matcher import WEEKDAYS

logger = logging.getLogger(__name__)

# Upper bound on a single sleep so clock jumps are noticed
MAX_SLEEP_SECONDS = 60.0


def cron_expression(second: int, weekdays: Iterable[int]) -> str:
    """Build the six-field cron expression for ticks at ``second`` past each
    minute on ``weekdays`` (Python numbering, Monday is 0).
    """
    # cron counts days of week from Sunday
    days = ",".join(str(day) for day in sorted((d + 1) % 7 for d in weekdays))
    return f"* * * * {days} {second}"


class WeekdayMinuteTimer:
    """Produces one tick per minute, at ``second`` past, on allowed weekdays.

    Example:
        timer = WeekdayMinuteTimer(second=1)
        while True:
            now = await timer.wait()
            await watcher.tick(now)
    """

    def __init__(
        self,
        second: int = 1,
        weekdays: Iterable[int] = WEEKDAYS,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not 0 <= second <= 59:
            raise ValueError("second must be 0-59")
        weekdays = frozenset(weekdays)
        if not weekdays:
            raise ValueError("At least one weekday is required")
        if not weekdays <= frozenset(range(7)):
            raise ValueError("weekdays must be 0-6")
        self._cron = cron_expression(second, weekdays)
        self._clock = clock
        self._sleep = sleep

    @property
    def cron(self) -> str:
        return self._cron

    def next_tick(self, after: datetime) -> datetime:
        """Return the first tick instant strictly after ``after``."""
        return croniter(self._cron, after).get_next(datetime)

    async def wait(self) -> datetime:
        """Sleep until the next tick and return the clock reading at wake."""
        target = self.next_tick(self._clock())
        logger.debug(f"Next standup tick at {target:%a %H:%M:%S}")
        while True:
            remaining = (target - self._clock()).total_seconds()
            if remaining <= 0:
                return self._clock()
            await self._sleep(min(remaining, MAX_SLEEP_SECONDS))
