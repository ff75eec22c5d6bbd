"""Chat transport providers."""

from standup.providers.base import (
    Deliverer,
    IncomingMessage,
    MessageHandler,
    Provider,
)

__all__ = [
    "Deliverer",
    "IncomingMessage",
    "MessageHandler",
    "Provider",
]
