"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from standup.cli.console import console, dim, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: $STANDUP_HOME/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Manage configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from pydantic import ValidationError
        from rich.syntax import Syntax
        from rich.table import Table

        from standup.config import load_config
        from standup.config.paths import get_config_path

        expanded_path = path.expanduser() if path else get_config_path()

        if action == "show":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                raise typer.Exit(1)

            content = expanded_path.read_text()
            syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
            console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
            console.print(syntax)

        elif action == "validate":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                raise typer.Exit(1)

            try:
                config_obj = load_config(expanded_path)
            except ValidationError as e:
                error("Configuration validation failed:")
                console.print()
                for err in e.errors():
                    loc = ".".join(str(x) for x in err["loc"])
                    console.print(f"  [yellow]{loc}[/yellow]: {err['msg']}")
                raise typer.Exit(1) from None
            except Exception as e:
                error(f"Error loading config: {e}")
                raise typer.Exit(1) from None

            reminders = config_obj.reminders
            table = Table(title="Configuration Summary")
            table.add_column("Setting", style="cyan")
            table.add_column("Value", style="green")
            table.add_row("Bot name", config_obj.bot_name)
            table.add_row("Triggers file", str(config_obj.triggers_path))
            table.add_row("Warning", f"{reminders.warning_minutes} minutes before")
            table.add_row(
                "Messages",
                f"{len(reminders.messages)} main, {len(reminders.warnings)} warning",
            )
            table.add_row("Link", reminders.link or dim("none"))
            table.add_row(
                "Telegram",
                "configured"
                if config_obj.telegram and config_obj.telegram.bot_token
                else dim("not configured"),
            )
            table.add_row(
                "Sentry",
                "configured"
                if config_obj.sentry and config_obj.sentry.dsn
                else dim("not configured"),
            )

            success("Configuration is valid!")
            console.print()
            console.print(table)

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, validate")
            raise typer.Exit(1)
