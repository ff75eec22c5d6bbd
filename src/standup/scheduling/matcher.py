"""Decide which notifications a trigger produces at a given instant.

All functions are pure. ``now`` is a local wall-clock datetime; only its
hour and minute are compared, after any offset has been added to the full
timestamp so hour and day rollover behave correctly.
"""

import logging
from datetime import datetime, timedelta

from standup.scheduling.types import (
    NotificationKind,
    TimeOfDay,
    TimeValidationError,
    parse_time,
)

logger = logging.getLogger(__name__)

WARNING_OFFSET = timedelta(minutes=10)

# Monday=0 .. Friday=4
WEEKDAYS = frozenset(range(5))


def is_weekday(now: datetime) -> bool:
    return now.weekday() in WEEKDAYS


def _coerce(time: TimeOfDay | str) -> TimeOfDay | None:
    if isinstance(time, TimeOfDay):
        return time
    try:
        return parse_time(time)
    except TimeValidationError:
        logger.debug(f"Unparseable trigger time {time!r}, never fires")
        return None


def fires_main(now: datetime, time: TimeOfDay | str) -> bool:
    """True when ``now`` falls in the trigger's minute."""
    target = _coerce(time)
    if target is None:
        return False
    return now.hour == target.hour and now.minute == target.minute


def fires_warning(
    now: datetime,
    time: TimeOfDay | str,
    offset: timedelta = WARNING_OFFSET,
) -> bool:
    """True when the trigger's minute is exactly ``offset`` from ``now``."""
    return fires_main(now + offset, time)


def evaluate(
    now: datetime,
    time: TimeOfDay | str,
    offset: timedelta = WARNING_OFFSET,
) -> list[NotificationKind]:
    """Return every notification kind that should fire for ``time`` at ``now``.

    Both checks run independently; with a nonzero offset at most one of
    them is true.
    """
    kinds: list[NotificationKind] = []
    if fires_main(now, time):
        kinds.append(NotificationKind.MAIN)
    if fires_warning(now, time, offset):
        kinds.append(NotificationKind.WARNING)
    return kinds
