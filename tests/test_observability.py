"""Tests for Sentry initialization."""

from unittest.mock import MagicMock

from pydantic import SecretStr

from standup.config import SentryConfig
from standup.observability import init_sentry


class TestInitSentry:
    """Tests for init_sentry."""

    def test_not_configured(self, monkeypatch):
        sentry_init = MagicMock()
        monkeypatch.setattr("standup.observability.sentry_sdk.init", sentry_init)

        assert init_sentry(None) is False
        assert init_sentry(SentryConfig()) is False
        sentry_init.assert_not_called()

    def test_initializes_with_dsn(self, monkeypatch):
        sentry_init = MagicMock()
        monkeypatch.setattr("standup.observability.sentry_sdk.init", sentry_init)

        config = SentryConfig(
            dsn=SecretStr("https://key@example.com/1"), environment="dev"
        )

        assert init_sentry(config) is True
        kwargs = sentry_init.call_args.kwargs
        assert kwargs["dsn"] == "https://key@example.com/1"
        assert kwargs["environment"] == "dev"
        assert len(kwargs["integrations"]) == 2
