"""Chat commands for managing standups.

Commands (case-insensitive, bot mention already stripped by the provider):
- create standup hh:mm
- list standups
- list standups in every room
- delete hh:mm standup
- delete all standups
- standup help
"""

import logging
import re
from collections.abc import Callable

from standup.providers.base import IncomingMessage
from standup.scheduling.service import StandupService
from standup.scheduling.types import TimeValidationError

logger = logging.getLogger(__name__)

_TIME = r"(\S+)"

CREATE_PATTERN = re.compile(rf"^create standup {_TIME}$", re.IGNORECASE)
LIST_PATTERN = re.compile(r"^list standups$", re.IGNORECASE)
LIST_ALL_PATTERN = re.compile(r"^list standups in every room$", re.IGNORECASE)
DELETE_ONE_PATTERN = re.compile(rf"^delete {_TIME} standup$", re.IGNORECASE)
DELETE_ALL_PATTERN = re.compile(r"^delete all standups$", re.IGNORECASE)
HELP_PATTERN = re.compile(r"^standup help$", re.IGNORECASE)


def _invalid_time(value: str) -> str:
    return f"Sorry, '{value}' isn't a valid time. Use hh:mm (24h)."


class StandupCommands:
    """Turns chat text into StandupService calls and reply text."""

    def __init__(self, service: StandupService, bot_name: str = "standupbot"):
        self._service = service
        self._bot_name = bot_name
        self._routes: list[tuple[re.Pattern[str], Callable[..., str]]] = [
            (CREATE_PATTERN, self._create),
            (LIST_ALL_PATTERN, self._list_all),
            (LIST_PATTERN, self._list),
            (DELETE_ALL_PATTERN, self._delete_all),
            (DELETE_ONE_PATTERN, self._delete_one),
        ]

    def handle(
        self, room: str, text: str, bot_name: str | None = None
    ) -> str | None:
        """Run the command in ``text`` for ``room``.

        ``bot_name`` is how users address the bot on this transport; help
        falls back to the configured name without it.

        Returns:
            Reply text, or None if ``text`` is not a standup command.
        """
        text = " ".join(text.split())
        if HELP_PATTERN.match(text):
            return self._help(bot_name or self._bot_name)
        for pattern, command in self._routes:
            match = pattern.match(text)
            if match:
                logger.debug(f"Matched standup command {command.__name__}")
                return command(room, *match.groups())
        return None

    async def on_message(self, message: IncomingMessage) -> str | None:
        """MessageHandler adapter for providers."""
        return self.handle(
            message.room, message.text, bot_name=message.metadata.get("bot_name")
        )

    def _create(self, room: str, time_string: str) -> str:
        try:
            trigger = self._service.create(room, time_string)
        except TimeValidationError:
            return _invalid_time(time_string)
        return (
            "Ok, from now on I'll remind this room to do a standup "
            f"every weekday at {trigger.time_label}"
        )

    def _list(self, room: str) -> str:
        triggers = self._service.list(room)
        if not triggers:
            return "Well this is awkward. You haven't got any standups set :-/"
        lines = ["Here's your standups:"]
        lines.extend(t.time_label for t in triggers)
        return "\n".join(lines)

    def _list_all(self, room: str) -> str:
        triggers = self._service.list_all()
        if not triggers:
            return "No, because there aren't any."
        lines = ["Here's the standups for every room:"]
        lines.extend(f"Room: {t.room}, Time: {t.time_label}" for t in triggers)
        return "\n".join(lines)

    def _delete_one(self, room: str, time_string: str) -> str:
        try:
            removed = self._service.delete_one(room, time_string)
        except TimeValidationError:
            return _invalid_time(time_string)
        if removed == 0:
            return f"Nice try. You don't even have a standup at {time_string}"
        return f"Deleted your {time_string} standup."

    def _delete_all(self, room: str) -> str:
        removed = self._service.delete_all(room)
        plural = "" if removed == 1 else "s"
        return f"Deleted {removed} standup{plural}. No more standups for you."

    def _help(self, name: str) -> str:
        return "\n".join(
            [
                "I can remind you to do your daily standup!",
                "Use me to create a standup, and then I'll post in this room "
                "every weekday at the time you specify. Here's how:",
                "",
                f"{name} create standup hh:mm - I'll remind you to standup "
                "in this room at hh:mm every weekday.",
                f"{name} list standups - See all standups for this room.",
                f"{name} list standups in every room - Be nosey and see when "
                "other rooms have their standup.",
                f"{name} delete hh:mm standup - If you have a standup at "
                "hh:mm, I'll delete it.",
                f"{name} delete all standups - Deletes all standups for this room.",
            ]
        )
