"""Dry-run a single watcher tick."""

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

from standup.cli.console import console, error, load_cli_config, warning


def register(app: typer.Typer) -> None:
    """Register the tick command."""

    @app.command()
    def tick(
        at: Annotated[
            str | None,
            typer.Option(
                "--at",
                help="Local time to evaluate, as 'YYYY-MM-DD HH:MM' (default: now)",
            ),
        ] = None,
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Show which standups would fire at a given time, without sending."""
        import asyncio

        from standup.scheduling import (
            Dispatcher,
            JsonlTriggerPersistence,
            StandupWatcher,
            TriggerStore,
        )

        if at is None:
            now = datetime.now()
        else:
            try:
                now = datetime.strptime(at, "%Y-%m-%d %H:%M")
            except ValueError:
                error(f"Invalid --at value: {at!r} (expected 'YYYY-MM-DD HH:MM')")
                raise typer.Exit(1) from None

        app_config = load_cli_config(config)
        outbox: list[tuple[str, str]] = []

        async def capture(room: str, text: str) -> None:
            outbox.append((room, text))

        store = TriggerStore(JsonlTriggerPersistence(app_config.triggers_path))
        watcher = StandupWatcher(
            store,
            Dispatcher(capture, app_config.reminders.message_set()),
            warning_offset=app_config.reminders.warning_offset,
            delivery_timeout=app_config.reminders.delivery_timeout,
        )
        fired = asyncio.run(watcher.tick(now))

        if not fired:
            warning(f"Nothing fires at {now:%a %Y-%m-%d %H:%M}")
            return

        for (room, kind), (_, text) in zip(fired, outbox, strict=True):
            console.print(f"[cyan]{room}[/cyan] [bold]{kind.value}[/bold]: {text}")
