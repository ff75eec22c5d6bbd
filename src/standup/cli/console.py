"""Shared console utilities for CLI commands."""

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from standup.config import StandupConfig

# Shared console instance for all CLI commands
console = Console()


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{msg}[/red]")


def warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]{msg}[/yellow]")


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{msg}[/green]")


def dim(msg: str) -> str:
    """Wrap a message in dim markup."""
    return f"[dim]{msg}[/dim]"


def load_cli_config(path: Path | None = None) -> "StandupConfig":
    """Load config for a CLI command, exiting with an error on failure.

    An explicit ``path`` must exist. Without one, defaults are used when
    no config file is found.
    """
    import typer
    from pydantic import ValidationError

    from standup.config import get_default_config, load_config

    try:
        return load_config(path)
    except FileNotFoundError as e:
        if path is not None:
            error(str(e))
            raise typer.Exit(1) from None
        return get_default_config()
    except ValidationError as e:
        error(f"Invalid configuration: {e.error_count()} error(s)")
        raise typer.Exit(1) from None
    except ValueError as e:
        error(f"Error loading config: {e}")
        raise typer.Exit(1) from None
