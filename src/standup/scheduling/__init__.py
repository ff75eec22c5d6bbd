"""Scheduling subsystem for weekday standup reminders.

Public API:
- TriggerStore: Snapshot-consistent storage for registered triggers
- StandupService: Create/delete/list operations for the command layer
- StandupWatcher: Once-a-minute loop that fires due notifications
- Dispatcher: Picks a message variant and delivers it to a room

Types:
- Trigger: A (room, time-of-day) pair
- TimeOfDay: Validated hour/minute
- NotificationKind: MAIN or WARNING
"""

from standup.scheduling.dispatcher import Dispatcher, MessageSet, pick_message
from standup.scheduling.matcher import (
    WARNING_OFFSET,
    evaluate,
    fires_main,
    fires_warning,
    is_weekday,
)
from standup.scheduling.service import StandupService
from standup.scheduling.store import (
    JsonlTriggerPersistence,
    MemoryTriggerPersistence,
    TriggerPersistence,
    TriggerStore,
)
from standup.scheduling.timer import WeekdayMinuteTimer
from standup.scheduling.types import (
    NotificationKind,
    TimeOfDay,
    TimeValidationError,
    Trigger,
    parse_time,
)
from standup.scheduling.watcher import StandupWatcher, WatcherState

__all__ = [
    "WARNING_OFFSET",
    "Dispatcher",
    "JsonlTriggerPersistence",
    "MemoryTriggerPersistence",
    "MessageSet",
    "NotificationKind",
    "StandupService",
    "StandupWatcher",
    "TimeOfDay",
    "TimeValidationError",
    "Trigger",
    "TriggerPersistence",
    "TriggerStore",
    "WatcherState",
    "WeekdayMinuteTimer",
    "evaluate",
    "fires_main",
    "fires_warning",
    "is_weekday",
    "parse_time",
    "pick_message",
]
