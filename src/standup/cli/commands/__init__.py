"""CLI command modules."""

from standup.cli.commands import config, serve, standups, tick

__all__ = [
    "config",
    "serve",
    "standups",
    "tick",
]
