"""Tests for configuration loading and models."""

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import SecretStr, ValidationError

from standup.config import (
    ConfigError,
    ReminderConfig,
    StandupConfig,
    TelegramConfig,
    get_default_config,
    load_config,
)
from standup.config.loader import _resolve_env_secrets
from standup.config.paths import get_config_path, get_standup_home, get_triggers_path
from standup.scheduling import NotificationKind, pick_message


class TestReminderConfig:
    """Tests for ReminderConfig model."""

    def test_defaults(self):
        config = ReminderConfig()
        assert config.warning_minutes == 10
        assert config.warning_offset == timedelta(minutes=10)
        assert config.tick_second == 1
        assert config.delivery_timeout == 30.0
        assert config.link is None
        assert len(config.messages) == 6
        assert len(config.warnings) == 5

    def test_rejects_zero_offset(self):
        with pytest.raises(ValidationError):
            ReminderConfig(warning_minutes=0)

    @pytest.mark.parametrize("timeout", [0, -1, 60, 90])
    def test_delivery_timeout_stays_under_a_minute(self, timeout):
        with pytest.raises(ValidationError):
            ReminderConfig(delivery_timeout=timeout)

    def test_rejects_empty_messages(self):
        with pytest.raises(ValidationError):
            ReminderConfig(messages=[])
        with pytest.raises(ValidationError):
            ReminderConfig(warnings=[])

    def test_message_set(self):
        config = ReminderConfig(messages=["go"], warnings=["soon"], link="https://x")
        messages = config.message_set()
        assert pick_message(NotificationKind.MAIN, messages) == "go https://x"
        assert pick_message(NotificationKind.WARNING, messages) == "soon"


class TestTelegramConfig:
    """Tests for TelegramConfig model."""

    def test_defaults(self):
        config = TelegramConfig()
        assert config.bot_token is None
        assert config.allowed_users == []


class TestStandupConfig:
    """Tests for the root config."""

    def test_defaults(self, standup_home: Path):
        config = StandupConfig()
        assert config.bot_name == "standupbot"
        assert config.triggers_path == standup_home.resolve() / "triggers.jsonl"
        assert config.telegram is None

    def test_require_telegram_token(self):
        config = StandupConfig(telegram=TelegramConfig(bot_token=SecretStr("abc")))
        assert config.require_telegram_token() == "abc"

    def test_require_telegram_token_missing(self):
        with pytest.raises(ConfigError):
            StandupConfig().require_telegram_token()


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_explicit_path(self, config_file: Path):
        config = load_config(config_file)

        assert config.bot_name == "kettle"
        assert config.reminders.warning_minutes == 5
        assert config.reminders.link == "https://meet.example.com/standup"
        assert config.telegram is not None
        assert config.telegram.allowed_users == ["@alice"]

    def test_searches_current_directory(self, config_file: Path):
        # conftest chdirs into tmp_path, where config_file lives
        assert load_config().bot_name == "kettle"

    def test_missing_explicit_path(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_no_config_anywhere(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(
            "standup.config.loader._get_default_config_paths",
            lambda: [tmp_path / "nope.toml"],
        )
        with pytest.raises(FileNotFoundError, match="No config file found"):
            load_config()

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "bad.toml"
        path.write_text("[reminders]\nwarning_minutes = 0\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_token_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")
        path = tmp_path / "minimal.toml"
        path.write_text('bot_name = "kettle"\n')

        config = load_config(path)

        assert config.require_telegram_token() == "from-env"

    def test_file_token_wins_over_env(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")
        config = load_config(config_file)
        assert config.require_telegram_token() != "from-env"


class TestResolveEnvSecrets:
    """Tests for _resolve_env_secrets."""

    def test_leaves_sections_absent_without_env(self):
        assert _resolve_env_secrets({}) == {}

    def test_sentry_dsn(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "https://key@example.com/1")
        resolved = _resolve_env_secrets({"sentry": {"environment": "dev"}})
        assert resolved["sentry"]["dsn"].get_secret_value() == (
            "https://key@example.com/1"
        )

    def test_default_config_uses_env(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "tok")
        assert get_default_config().require_telegram_token() == "tok"


class TestPaths:
    """Tests for path helpers."""

    def test_home_from_env(self, standup_home: Path):
        assert get_standup_home() == standup_home.resolve()
        assert get_config_path() == standup_home.resolve() / "config.toml"
        assert get_triggers_path() == standup_home.resolve() / "triggers.jsonl"
