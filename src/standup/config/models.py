"""Configuration models using Pydantic."""

import logging
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, field_validator

from standup.config.paths import get_triggers_path
from standup.scheduling.dispatcher import (
    DEFAULT_MESSAGES,
    DEFAULT_WARNINGS,
    MessageSet,
)

logger = logging.getLogger(__name__)


class ReminderConfig(BaseModel):
    """Configuration for standup reminders.

    Message lists can be swapped freely; scheduling does not depend on
    their content.
    """

    warning_minutes: int = Field(default=10, ge=1, le=24 * 60 - 1)
    # Second past the minute at which each tick runs
    tick_second: int = Field(default=1, ge=0, le=59)
    # Deliveries still running after this many seconds are abandoned
    delivery_timeout: float = Field(default=30.0, gt=0, lt=60)
    # Appended to main messages, e.g. a video call URL
    link: str | None = None
    messages: list[str] = Field(default_factory=lambda: list(DEFAULT_MESSAGES))
    warnings: list[str] = Field(default_factory=lambda: list(DEFAULT_WARNINGS))

    @field_validator("messages", "warnings")
    @classmethod
    def _require_variants(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one message is required")
        return value

    @property
    def warning_offset(self) -> timedelta:
        return timedelta(minutes=self.warning_minutes)

    def message_set(self) -> MessageSet:
        return MessageSet(
            main=tuple(self.messages),
            warning=tuple(self.warnings),
            link=self.link,
        )


class TelegramConfig(BaseModel):
    """Configuration for Telegram provider."""

    bot_token: SecretStr | None = None
    allowed_users: list[str] = []


class SentryConfig(BaseModel):
    """Configuration for Sentry error reporting."""

    dsn: SecretStr | None = None
    environment: str = "production"
    release: str | None = None
    traces_sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    debug: bool = False


class ConfigError(Exception):
    """Configuration error."""

    pass


class StandupConfig(BaseModel):
    """Root configuration model."""

    bot_name: str = "standupbot"
    triggers_path: Path = Field(default_factory=get_triggers_path)
    reminders: ReminderConfig = Field(default_factory=ReminderConfig)
    telegram: TelegramConfig | None = None
    sentry: SentryConfig | None = None

    def require_telegram_token(self) -> str:
        """Return the Telegram bot token.

        Raises:
            ConfigError: If Telegram is not configured.
        """
        if self.telegram is None or self.telegram.bot_token is None:
            raise ConfigError(
                "Telegram bot token not configured. "
                "Set telegram.bot_token in config or TELEGRAM_BOT_TOKEN."
            )
        return self.telegram.bot_token.get_secret_value()
