"""Tests for CLI commands."""

from pathlib import Path

from standup.cli.app import app
from standup.scheduling import JsonlTriggerPersistence, TimeOfDay, Trigger


class TestConfigCommand:
    """Tests for 'standup config' command."""

    def test_config_show_displays_content(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["config", "show", "--path", str(config_file)])
        assert result.exit_code == 0
        assert "[reminders]" in result.stdout

    def test_config_show_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            app, ["config", "show", "--path", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_config_validate_success(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app, ["config", "validate", "--path", str(config_file)]
        )
        assert result.exit_code == 0
        assert "valid" in result.stdout.lower()

    def test_config_validate_invalid_config(self, cli_runner, tmp_path):
        invalid_config = tmp_path / "bad_config.toml"
        invalid_config.write_text("[reminders]\nwarning_minutes = 0\n")
        result = cli_runner.invoke(
            app, ["config", "validate", "--path", str(invalid_config)]
        )
        assert result.exit_code == 1
        assert "validation failed" in result.stdout.lower()

    def test_config_validate_invalid_toml(self, cli_runner, tmp_path):
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("not valid toml [[[")
        result = cli_runner.invoke(
            app, ["config", "validate", "--path", str(invalid_file)]
        )
        assert result.exit_code == 1

    def test_config_unknown_action(self, cli_runner):
        result = cli_runner.invoke(app, ["config", "unknown"])
        assert result.exit_code == 1
        assert "Unknown action" in result.stdout


class TestStandupsCommand:
    """Tests for 'standup standups' command."""

    def _triggers(self, config_file: Path) -> list[Trigger]:
        path = config_file.parent / "triggers.jsonl"
        return JsonlTriggerPersistence(path).load()

    def test_create_and_list(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app,
            ["standups", "create", "-r", "room1", "-t", "9:30"]
            + ["-c", str(config_file)],
        )
        assert result.exit_code == 0
        assert "09:30" in result.stdout
        assert self._triggers(config_file) == [Trigger("room1", TimeOfDay(9, 30))]

        result = cli_runner.invoke(app, ["standups", "list", "-c", str(config_file)])
        assert result.exit_code == 0
        assert "room1" in result.stdout
        assert "Total: 1 standup(s)" in result.stdout

    def test_create_invalid_time(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app,
            ["standups", "create", "-r", "room1", "-t", "25:99"]
            + ["-c", str(config_file)],
        )
        assert result.exit_code == 1
        assert self._triggers(config_file) == []

    def test_create_requires_room_and_time(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app, ["standups", "create", "-r", "room1", "-c", str(config_file)]
        )
        assert result.exit_code == 1
        assert "required" in result.stdout

    def test_delete(self, cli_runner, config_file):
        for time in ("09:30", "09:30", "11:00"):
            cli_runner.invoke(
                app,
                ["standups", "create", "-r", "room1", "-t", time]
                + ["-c", str(config_file)],
            )

        result = cli_runner.invoke(
            app,
            ["standups", "delete", "-r", "room1", "-t", "9:30", "-c", str(config_file)],
        )
        assert result.exit_code == 0
        assert "Deleted 2 standup(s)" in result.stdout

        result = cli_runner.invoke(
            app, ["standups", "delete", "-r", "room1", "--all", "-c", str(config_file)]
        )
        assert result.exit_code == 0
        assert self._triggers(config_file) == []

    def test_delete_requires_time_or_all(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app, ["standups", "delete", "-r", "room1", "-c", str(config_file)]
        )
        assert result.exit_code == 1

    def test_list_empty_uses_defaults(self, cli_runner):
        result = cli_runner.invoke(app, ["standups", "list"])
        assert result.exit_code == 0
        assert "No standups found" in result.stdout

    def test_unknown_action(self, cli_runner):
        result = cli_runner.invoke(app, ["standups", "unknown"])
        assert result.exit_code == 1
        assert "Unknown action" in result.stdout


class TestTickCommand:
    """Tests for 'standup tick' dry run."""

    def _seed(self, config_file: Path) -> None:
        JsonlTriggerPersistence(config_file.parent / "triggers.jsonl").save(
            [Trigger("room1", TimeOfDay(9, 30))]
        )

    def test_main(self, cli_runner, config_file):
        self._seed(config_file)
        result = cli_runner.invoke(
            app, ["tick", "--at", "2026-10-19 09:30", "-c", str(config_file)]
        )
        assert result.exit_code == 0
        assert "room1" in result.stdout
        assert "main" in result.stdout
        assert "Standup now! https://meet.example.com/standup" in result.stdout

    def test_warning_uses_configured_offset(self, cli_runner, config_file):
        self._seed(config_file)
        result = cli_runner.invoke(
            app, ["tick", "--at", "2026-10-19 09:25", "-c", str(config_file)]
        )
        assert result.exit_code == 0
        assert "warning" in result.stdout
        assert "Standup soon" in result.stdout

    def test_weekend(self, cli_runner, config_file):
        self._seed(config_file)
        result = cli_runner.invoke(
            app, ["tick", "--at", "2026-10-24 09:30", "-c", str(config_file)]
        )
        assert result.exit_code == 0
        assert "Nothing fires" in result.stdout

    def test_invalid_at(self, cli_runner):
        result = cli_runner.invoke(app, ["tick", "--at", "tomorrow"])
        assert result.exit_code == 1


class TestServeCommand:
    """Tests for 'standup serve'."""

    def test_requires_telegram_token(self, cli_runner, tmp_path, monkeypatch):
        monkeypatch.setattr("standup.logging.configure_logging", lambda **_: None)
        path = tmp_path / "no-telegram.toml"
        path.write_text('bot_name = "kettle"\n')

        result = cli_runner.invoke(app, ["serve", "-c", str(path)])

        assert result.exit_code == 1
        assert "Telegram bot token not configured" in result.stdout
