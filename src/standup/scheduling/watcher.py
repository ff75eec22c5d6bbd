"""Standup watcher: evaluates every trigger once per weekday minute.

The watcher owns the polling loop. Trigger data lives in TriggerStore,
time comparison in the matcher and message delivery in the Dispatcher.
Each tick runs as its own task so a slow delivery never holds up the
next minute.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from enum import Enum

from standup.scheduling.dispatcher import Dispatcher
from standup.scheduling.matcher import WARNING_OFFSET, evaluate, is_weekday
from standup.scheduling.store import TriggerStore
from standup.scheduling.timer import WeekdayMinuteTimer
from standup.scheduling.types import NotificationKind, Trigger

logger = logging.getLogger(__name__)

# Seconds a single delivery may take before it is abandoned
DELIVERY_TIMEOUT = 30.0


class WatcherState(Enum):
    IDLE = "idle"
    EVALUATING = "evaluating"


class StandupWatcher:
    """Fires standup warnings and main messages for due triggers.

    Example:
        store = TriggerStore(JsonlTriggerPersistence(path))
        dispatcher = Dispatcher(provider.deliver)
        watcher = StandupWatcher(store, dispatcher)
        await watcher.start()
    """

    def __init__(
        self,
        store: TriggerStore,
        dispatcher: Dispatcher,
        timer: WeekdayMinuteTimer | None = None,
        warning_offset: timedelta = WARNING_OFFSET,
        delivery_timeout: float = DELIVERY_TIMEOUT,
    ):
        if warning_offset < timedelta(minutes=1):
            raise ValueError("warning_offset must be at least one minute")
        if delivery_timeout <= 0:
            raise ValueError("delivery_timeout must be positive")
        self._store = store
        self._dispatcher = dispatcher
        self._timer = timer or WeekdayMinuteTimer()
        self._warning_offset = warning_offset
        self._delivery_timeout = delivery_timeout
        self._state = WatcherState.IDLE
        self._running = False
        self._task: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()
        self._tick_count = 0

    @property
    def store(self) -> TriggerStore:
        return self._store

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        """Number of ticks still delivering."""
        return len(self._pending)

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        warning_minutes = int(self._warning_offset.total_seconds() // 60)
        logger.info(
            "standup_watcher_started",
            extra={"standup.warning_minutes": warning_minutes},
        )
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the loop, then give in-flight deliveries one timeout to finish."""
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._pending:
            _, unfinished = await asyncio.wait(
                set(self._pending), timeout=self._delivery_timeout
            )
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.wait(unfinished)
        logger.info("standup_watcher_stopped")

    async def _run(self) -> None:
        # Heartbeat every 60 ticks (~1 hour of weekday ticks)
        heartbeat_interval = 60
        while self._running:
            now = await self._timer.wait()
            self._tick_count += 1
            if self._tick_count % heartbeat_interval == 0:
                logger.info(
                    "standup_watcher_heartbeat",
                    extra={
                        "tick.count": self._tick_count,
                        "tick.pending": self.pending,
                    },
                )
            task = asyncio.create_task(self._safe_tick(now))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _safe_tick(self, now: datetime) -> None:
        try:
            await self.tick(now)
        except Exception as e:
            logger.error("standup_tick_error", extra={"error.message": str(e)})

    async def tick(self, now: datetime) -> list[tuple[str, NotificationKind]]:
        """Evaluate every trigger at ``now`` and dispatch matches concurrently.

        Weekend ticks are no-ops. Each delivery is bounded by the delivery
        timeout, and a failure for one trigger is logged without affecting
        the others.

        Returns:
            The (room, kind) pairs that were delivered, in trigger order.
        """
        if not is_weekday(now):
            logger.debug(f"Skipping tick at {now:%a %H:%M}: not a weekday")
            return []

        self._state = WatcherState.EVALUATING
        try:
            triggers = self._store.list_all()
            logger.debug(f"Tick at {now:%H:%M}: {len(triggers)} trigger(s)")
            due = [
                (trigger, kind)
                for trigger in triggers
                for kind in evaluate(now, trigger.time, self._warning_offset)
            ]
        finally:
            self._state = WatcherState.IDLE

        if not due:
            return []
        delivered = await asyncio.gather(
            *(self._fire(trigger, kind) for trigger, kind in due)
        )
        return [
            (trigger.room, kind)
            for (trigger, kind), ok in zip(due, delivered, strict=True)
            if ok
        ]

    async def _fire(self, trigger: Trigger, kind: NotificationKind) -> bool:
        try:
            await asyncio.wait_for(
                self._dispatcher.fire(trigger.room, kind),
                timeout=self._delivery_timeout,
            )
        except Exception as e:
            logger.error(
                "standup_delivery_failed",
                extra={
                    "standup.room": trigger.room,
                    "standup.time": trigger.time_label,
                    "standup.kind": kind.value,
                    "error.type": type(e).__name__,
                    "error.message": str(e),
                },
                exc_info=True,
            )
            return False
        return True
