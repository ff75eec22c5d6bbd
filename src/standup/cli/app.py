"""Main CLI application."""

import typer

from standup.cli.commands import config, serve, standups, tick

app = typer.Typer(
    name="standup",
    help="Standup - weekday standup reminders for chat rooms",
    no_args_is_help=True,
)

config.register(app)
serve.register(app)
standups.register(app)
tick.register(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
