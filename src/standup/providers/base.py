"""Abstract provider interface for chat transports."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol


class Deliverer(Protocol):
    """Sends text to a room. Raises on delivery failure."""

    async def __call__(self, room: str, text: str) -> None: ...


@dataclass
class IncomingMessage:
    """Message received from a provider.

    ``room`` is already normalized by the provider into the identifier
    that ``deliver`` accepts.
    """

    id: str
    room: str
    user_id: str
    text: str
    username: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None


# Handler returns the reply text, or None when the message was not a command
MessageHandler = Callable[[IncomingMessage], Awaitable[str | None]]


class Provider(ABC):
    """Abstract interface for chat transports.

    Providers receive messages from and deliver messages to external
    services like Telegram.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'telegram')."""
        ...

    @abstractmethod
    async def start(self, handler: MessageHandler) -> None:
        """Start the provider and begin receiving messages.

        Args:
            handler: Callback to handle incoming messages.
        """
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the provider and clean up resources."""
        ...

    @abstractmethod
    async def deliver(self, room: str, text: str) -> None:
        """Send ``text`` to ``room``.

        Raises:
            Exception: Any transport error; callers isolate failures.
        """
        ...
