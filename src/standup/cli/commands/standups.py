"""Standup management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from standup.cli.console import console, dim, error, load_cli_config, success, warning


def _open_service(config_path: Path | None):
    from standup.scheduling import (
        JsonlTriggerPersistence,
        StandupService,
        TriggerStore,
    )

    config = load_cli_config(config_path)
    store = TriggerStore(JsonlTriggerPersistence(config.triggers_path))
    return StandupService(store)


def register(app: typer.Typer) -> None:
    """Register the standups command."""

    @app.command()
    def standups(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: list, create, delete"),
        ] = None,
        room: Annotated[
            str | None,
            typer.Option("--room", "-r", help="Room (chat id) to act on"),
        ] = None,
        time: Annotated[
            str | None,
            typer.Option("--time", "-t", help="Time of day as hh:mm"),
        ] = None,
        delete_all: Annotated[
            bool,
            typer.Option("--all", help="Delete every standup for the room"),
        ] = False,
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Manage standups stored in the triggers file.

        Examples:
            standup standups list                          # Every room
            standup standups list --room 1234              # One room
            standup standups create --room 1234 -t 09:30
            standup standups delete --room 1234 -t 09:30
            standup standups delete --room 1234 --all
        """
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        if action == "list":
            _standups_list(config, room)

        elif action == "create":
            if room is None or time is None:
                error("--room and --time are required for create")
                raise typer.Exit(1)
            _standups_create(config, room, time)

        elif action == "delete":
            if room is None:
                error("--room is required for delete")
                raise typer.Exit(1)
            if time is None and not delete_all:
                error("--time or --all is required for delete")
                raise typer.Exit(1)
            _standups_delete(config, room, None if delete_all else time)

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: list, create, delete")
            raise typer.Exit(1)


def _standups_list(config_path: Path | None, room: str | None) -> None:
    """List standups for one room or every room."""
    from rich.table import Table

    service = _open_service(config_path)
    triggers = service.list(room) if room is not None else service.list_all()

    if not triggers:
        warning("No standups found")
        return

    table = Table(show_header=True)
    table.add_column("Room")
    table.add_column("Time")
    for trigger in sorted(triggers, key=lambda t: (t.room, t.time_label)):
        table.add_row(trigger.room, trigger.time_label)

    console.print(table)
    console.print(f"\n{dim(f'Total: {len(triggers)} standup(s)')}")


def _standups_create(config_path: Path | None, room: str, time: str) -> None:
    from standup.scheduling import TimeValidationError

    service = _open_service(config_path)
    try:
        trigger = service.create(room, time)
    except TimeValidationError as e:
        error(str(e))
        raise typer.Exit(1) from None
    success(f"Created standup for {trigger.room} at {trigger.time_label}")


def _standups_delete(config_path: Path | None, room: str, time: str | None) -> None:
    from standup.scheduling import TimeValidationError

    service = _open_service(config_path)
    if time is None:
        removed = service.delete_all(room)
    else:
        try:
            removed = service.delete_one(room, time)
        except TimeValidationError as e:
            error(str(e))
            raise typer.Exit(1) from None

    if removed == 0:
        warning("No matching standups")
        return
    success(f"Deleted {removed} standup(s)")
