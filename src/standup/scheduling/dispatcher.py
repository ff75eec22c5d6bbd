"""Pick standup messages and hand them to the delivery collaborator."""

import logging
import random
from dataclasses import dataclass

from standup.providers.base import Deliverer
from standup.scheduling.types import NotificationKind

logger = logging.getLogger(__name__)

DEFAULT_WARNINGS = [
    "@channel Get the kettle on, Standup in 10",
    "@channel This is your 10 minute standup warning",
    "@channel You've got a standup in 10 minutes",
    "@channel Time to put your day in order: Standup in 10 minutes",
    "@channel Grab a brew, standup soon",
]

DEFAULT_MESSAGES = [
    "@channel Standup time!",
    "@channel Time for standup, y'all.",
    "@channel It's standup time once again!",
    "@channel Get up, stand up (it's time for our standup)",
    "@channel Standup time. Get up, humans",
    "@channel Another day, another standup",
]


@dataclass(frozen=True)
class MessageSet:
    """Static message variants for each notification kind.

    When ``link`` is set it is appended to every main message.
    """

    main: tuple[str, ...] = tuple(DEFAULT_MESSAGES)
    warning: tuple[str, ...] = tuple(DEFAULT_WARNINGS)
    link: str | None = None

    def __post_init__(self) -> None:
        if not self.main:
            raise ValueError("At least one main message is required")
        if not self.warning:
            raise ValueError("At least one warning message is required")

    def variants(self, kind: NotificationKind) -> tuple[str, ...]:
        if kind is NotificationKind.MAIN:
            return self.main
        return self.warning


def pick_message(
    kind: NotificationKind,
    messages: MessageSet | None = None,
    rng: random.Random | None = None,
) -> str:
    """Choose one message for ``kind`` uniformly at random.

    Pass a seeded ``rng`` for deterministic selection.
    """
    messages = messages or MessageSet()
    rng = rng or random.Random()
    text = rng.choice(messages.variants(kind))
    if kind is NotificationKind.MAIN and messages.link:
        text = f"{text} {messages.link}"
    return text


class Dispatcher:
    """Sends the notification for a fired trigger to its room."""

    def __init__(
        self,
        deliver: Deliverer,
        messages: MessageSet | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._deliver = deliver
        self._messages = messages or MessageSet()
        self._rng = rng or random.Random()

    @property
    def messages(self) -> MessageSet:
        return self._messages

    def pick(self, kind: NotificationKind) -> str:
        return pick_message(kind, self._messages, self._rng)

    async def fire(self, room: str, kind: NotificationKind) -> str:
        """Deliver a randomly chosen message for ``kind`` to ``room``.

        Returns the text that was sent. Delivery errors propagate.
        """
        text = self.pick(kind)
        await self._deliver(room, text)
        logger.info(
            "standup_fired",
            extra={"standup.room": room, "standup.kind": kind.value},
        )
        return text
