"""Telegram provider."""

from standup.providers.telegram.provider import TelegramProvider

__all__ = [
    "TelegramProvider",
]
