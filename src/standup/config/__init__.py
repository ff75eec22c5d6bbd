"""Configuration loading and models."""

from standup.config.loader import get_default_config, load_config
from standup.config.models import (
    ConfigError,
    ReminderConfig,
    SentryConfig,
    StandupConfig,
    TelegramConfig,
)

__all__ = [
    "ConfigError",
    "ReminderConfig",
    "SentryConfig",
    "StandupConfig",
    "TelegramConfig",
    "get_default_config",
    "load_config",
]
