"""Standup operations exposed to the command layer."""

from __future__ import annotations

import logging

from standup.scheduling.store import TriggerStore
from standup.scheduling.types import Trigger, parse_time

logger = logging.getLogger(__name__)


class StandupService:
    """Create, delete and list standups for rooms.

    Times are validated before the store is touched, so a malformed time
    never changes state.
    """

    def __init__(self, store: TriggerStore) -> None:
        self._store = store

    @property
    def store(self) -> TriggerStore:
        return self._store

    def create(self, room: str, time_string: str) -> Trigger:
        """Register a weekday standup for ``room``.

        Duplicate (room, time) pairs are allowed.

        Raises:
            TimeValidationError: If ``time_string`` is not a valid hh:mm.
        """
        trigger = Trigger(room=room, time=parse_time(time_string))
        self._store.add(trigger)
        logger.info(
            "standup_created",
            extra={"standup.room": room, "standup.time": trigger.time_label},
        )
        return trigger

    def delete_one(self, room: str, time_string: str) -> int:
        """Delete every standup for ``room`` at the given time.

        Raises:
            TimeValidationError: If ``time_string`` is not a valid hh:mm.
        """
        time = parse_time(time_string)
        removed = self._store.remove_one(room, time)
        logger.info(
            "standup_deleted",
            extra={
                "standup.room": room,
                "standup.time": str(time),
                "standup.removed": removed,
            },
        )
        return removed

    def delete_all(self, room: str) -> int:
        removed = self._store.remove_all_for(room)
        logger.info(
            "standups_cleared",
            extra={"standup.room": room, "standup.removed": removed},
        )
        return removed

    def list(self, room: str) -> list[Trigger]:
        return self._store.list_for(room)

    def list_all(self) -> list[Trigger]:
        return list(self._store.list_all())
