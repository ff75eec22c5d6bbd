"""Shared test fixtures and factories."""

import random
from datetime import datetime
from pathlib import Path

import pytest

from standup.scheduling import (
    Dispatcher,
    MemoryTriggerPersistence,
    StandupService,
    StandupWatcher,
    TriggerStore,
)

# 2026-10-19 is a Monday, 2026-10-24 a Saturday
MONDAY = datetime(2026, 10, 19)
SATURDAY = datetime(2026, 10, 24)


def at(day: datetime, hour: int, minute: int, second: int = 1) -> datetime:
    """Build a local timestamp on ``day``."""
    return day.replace(hour=hour, minute=minute, second=second)


class RecordingDeliverer:
    """Deliverer that records messages and can fail for chosen rooms."""

    def __init__(self, failing_rooms: set[str] | None = None) -> None:
        self.sent: list[tuple[str, str]] = []
        self.failing_rooms = failing_rooms or set()

    async def __call__(self, room: str, text: str) -> None:
        if room in self.failing_rooms:
            raise ConnectionError(f"cannot reach {room}")
        self.sent.append((room, text))

    @property
    def rooms(self) -> list[str]:
        return [room for room, _ in self.sent]


# =============================================================================
# Scheduling Fixtures
# =============================================================================


@pytest.fixture
def persistence() -> MemoryTriggerPersistence:
    return MemoryTriggerPersistence()


@pytest.fixture
def store(persistence: MemoryTriggerPersistence) -> TriggerStore:
    return TriggerStore(persistence)


@pytest.fixture
def service(store: TriggerStore) -> StandupService:
    return StandupService(store)


@pytest.fixture
def deliverer() -> RecordingDeliverer:
    return RecordingDeliverer()


@pytest.fixture
def dispatcher(deliverer: RecordingDeliverer) -> Dispatcher:
    return Dispatcher(deliverer, rng=random.Random(42))


@pytest.fixture
def watcher(store: TriggerStore, dispatcher: Dispatcher) -> StandupWatcher:
    return StandupWatcher(store, dispatcher)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def standup_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point STANDUP_HOME at a temp dir so tests never touch ~/.standup."""
    from standup.config.paths import ENV_VAR, get_standup_home

    home = tmp_path / "standup-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.chdir(tmp_path)
    get_standup_home.cache_clear()
    yield home
    get_standup_home.cache_clear()


@pytest.fixture
def config_toml_content(tmp_path: Path) -> str:
    """Valid TOML config content."""
    triggers = tmp_path / "triggers.jsonl"
    return f"""
bot_name = "kettle"
triggers_path = "{triggers}"

[reminders]
warning_minutes = 5
link = "https://meet.example.com/standup"
messages = ["Standup now!"]
warnings = ["Standup soon"]

[telegram]
bot_token = "123456789:abcdefghijklmnopqrstuvwxyzABCDEFGH"
allowed_users = ["@alice"]
"""


@pytest.fixture
def config_file(tmp_path: Path, config_toml_content: str) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_toml_content)
    return config_path


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})
