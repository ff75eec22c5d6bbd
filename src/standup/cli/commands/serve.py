"""Server command for running the standup bot."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
    ) -> None:
        """Start the Telegram bot and the standup watcher."""
        try:
            asyncio.run(_run_server(config))
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(config_path: Path | None = None) -> None:
    """Run the bot until SIGINT/SIGTERM."""
    import signal as signal_module

    from standup.logging import configure_logging

    configure_logging(use_rich=True, log_to_file=True)

    from standup.cli.console import console, error, load_cli_config
    from standup.commands import StandupCommands
    from standup.config import ConfigError
    from standup.observability import init_sentry
    from standup.providers.telegram import TelegramProvider
    from standup.scheduling import (
        Dispatcher,
        JsonlTriggerPersistence,
        StandupService,
        StandupWatcher,
        TriggerStore,
        WeekdayMinuteTimer,
    )

    console.print("[bold]Loading configuration...[/bold]")
    app_config = load_cli_config(config_path)

    if init_sentry(app_config.sentry):
        console.print("[dim]Sentry initialized[/dim]")

    try:
        bot_token = app_config.require_telegram_token()
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1) from None

    console.print(f"[bold]Loading standups from {app_config.triggers_path}[/bold]")
    store = TriggerStore(JsonlTriggerPersistence(app_config.triggers_path))
    service = StandupService(store)
    commands = StandupCommands(service, bot_name=app_config.bot_name)

    reminders = app_config.reminders
    telegram_provider = TelegramProvider(
        bot_token=bot_token,
        allowed_users=app_config.telegram.allowed_users if app_config.telegram else [],
    )
    watcher = StandupWatcher(
        store,
        Dispatcher(telegram_provider.deliver, reminders.message_set()),
        timer=WeekdayMinuteTimer(second=reminders.tick_second),
        warning_offset=reminders.warning_offset,
        delivery_timeout=reminders.delivery_timeout,
    )

    telegram_task: asyncio.Task | None = None
    loop = asyncio.get_running_loop()

    def handle_signal():
        if telegram_task and not telegram_task.done():
            telegram_task.cancel()

    for sig in (signal_module.SIGTERM, signal_module.SIGINT):
        loop.add_signal_handler(sig, handle_signal)

    try:
        await watcher.start()
        logger.info(
            "standup_server_started",
            extra={"standup.count": len(store.list_all())},
        )
        telegram_task = asyncio.create_task(
            telegram_provider.start(commands.on_message)
        )
        try:
            await telegram_task
        except asyncio.CancelledError:
            logger.info("Telegram polling cancelled")
    finally:
        await _cleanup_server(watcher, telegram_provider)


async def _cleanup_server(watcher, telegram_provider) -> None:
    """Stop the watcher and the provider, logging any errors."""
    for resource, method in [
        (watcher, "stop"),
        (telegram_provider, "stop"),
    ]:
        try:
            await getattr(resource, method)()
        except Exception as e:
            logger.warning(f"Error during {method}: {e}")
