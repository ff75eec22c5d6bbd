"""Standup types.

Public types:
- TimeOfDay: A validated wall-clock hour/minute pair
- Trigger: A registered (room, time) standup
- NotificationKind: Main event or warning event
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# 1-2 digits on each side, e.g. "9:30", "09:30", "9:5"
_TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{1,2})$")


class TimeValidationError(ValueError):
    """Raised when a time-of-day string is malformed or out of range."""

    def __init__(self, value: str, reason: str = "expected hh:mm") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid time {value!r}: {reason}")


class NotificationKind(Enum):
    """Which notification a trigger produces at a given tick."""

    MAIN = "main"
    WARNING = "warning"


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """A wall-clock time of day with minute resolution."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise TimeValidationError(str(self), "hour must be 0-23")
        if not 0 <= self.minute <= 59:
            raise TimeValidationError(str(self), "minute must be 0-59")

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def parse_time(text: str) -> TimeOfDay:
    """Parse an ``hh:mm`` string into a TimeOfDay.

    Hours and minutes may be one or two digits. Surrounding whitespace
    is ignored.

    Raises:
        TimeValidationError: If the string is not a valid 24h time.
    """
    match = _TIME_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise TimeValidationError(str(text))
    return TimeOfDay(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True)
class Trigger:
    """A recurring weekday standup for a room.

    ``time`` is normally a TimeOfDay. Entries loaded from disk whose time
    cannot be parsed keep the raw string so the rest of the file still
    loads; such triggers never fire.
    """

    room: str
    time: TimeOfDay | str

    @property
    def time_label(self) -> str:
        return str(self.time)

    def to_dict(self) -> dict[str, Any]:
        return {"room": self.room, "time": str(self.time)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trigger | None":
        """Build a trigger from a stored payload.

        Returns None when the payload has no room or no time.
        """
        room = data.get("room")
        raw_time = data.get("time")
        if not room or raw_time is None:
            return None

        try:
            time: TimeOfDay | str = parse_time(str(raw_time))
        except TimeValidationError:
            logger.warning(
                "stored_trigger_time_invalid",
                extra={"standup.room": room, "standup.time": raw_time},
            )
            time = str(raw_time)
        return cls(room=str(room), time=time)
