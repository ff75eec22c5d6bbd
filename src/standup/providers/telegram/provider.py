"""Telegram provider using aiogram."""

from __future__ import annotations

import logging
import re

from aiogram import Bot, Dispatcher, F
from aiogram.types import Message as TelegramMessage

from standup.providers.base import IncomingMessage, MessageHandler, Provider

logger = logging.getLogger(__name__)

LOG_PREVIEW_MAX_LEN = 80


def _truncate(text: str, max_len: int = LOG_PREVIEW_MAX_LEN) -> str:
    """Truncate text for logging (first line only, max length)."""
    first_line, *rest = text.split("\n", 1)
    truncated = len(first_line) > max_len or bool(rest)
    return first_line[:max_len] + "..." if truncated else first_line


class TelegramProvider(Provider):
    """Telegram provider using aiogram 3.x.

    The room for every message is the Telegram chat id, so replies and
    scheduled notifications go back to the chat a standup was created in.
    In group chats only messages that mention the bot or reply to it are
    passed on.
    """

    def __init__(
        self,
        bot_token: str,
        allowed_users: list[str] | None = None,
    ):
        self._allowed_users = set(allowed_users or [])
        # Plain text: standup messages contain "@channel" and apostrophes
        self._bot = Bot(token=bot_token)
        self._dp = Dispatcher()
        self._handler: MessageHandler | None = None
        self._running = False
        self._bot_username: str | None = None
        self._bot_id: int | None = None

    @property
    def name(self) -> str:
        return "telegram"

    @property
    def bot(self) -> Bot:
        return self._bot

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dp

    @property
    def bot_username(self) -> str | None:
        return self._bot_username

    def _is_user_allowed(self, user_id: int, username: str | None) -> bool:
        if not self._allowed_users:
            return True
        return str(user_id) in self._allowed_users or (
            username is not None and f"@{username}" in self._allowed_users
        )

    def _is_mentioned(self, message: TelegramMessage) -> bool:
        if not self._bot_username:
            return False
        mention = f"@{self._bot_username}".lower()
        text = message.text or ""
        if mention in text.lower():
            return True
        for entity in message.entities or []:
            if entity.type == "mention":
                start = entity.offset
                if text[start : start + entity.length].lower() == mention:
                    return True
        return False

    def _is_reply_to_bot(self, message: TelegramMessage) -> bool:
        replied = message.reply_to_message
        if replied is None or replied.from_user is None or not self._bot_id:
            return False
        return replied.from_user.id == self._bot_id

    def _is_addressed(self, message: TelegramMessage) -> bool:
        """Private chats always address the bot; groups need a mention or reply."""
        if message.chat.type not in ("group", "supergroup"):
            return True
        return self._is_mentioned(message) or self._is_reply_to_bot(message)

    def _strip_mention(self, text: str) -> str:
        if not self._bot_username:
            return text
        pattern = rf"@{re.escape(self._bot_username)}\b"
        return re.sub(pattern, "", text, flags=re.IGNORECASE).strip()

    def to_incoming(self, message: TelegramMessage) -> IncomingMessage | None:
        """Convert an aiogram message, or None if it should be ignored."""
        if not message.text or not message.from_user:
            return None

        user = message.from_user
        if not self._is_user_allowed(user.id, user.username):
            logger.debug(
                "telegram_user_not_allowed",
                extra={"user.id": str(user.id), "user.username": user.username},
            )
            return None

        if not self._is_addressed(message):
            logger.debug(
                "telegram_group_message_skipped",
                extra={"messaging.room": str(message.chat.id)},
            )
            return None

        metadata = {}
        if self._bot_username:
            metadata["bot_name"] = f"@{self._bot_username}"

        return IncomingMessage(
            id=str(message.message_id),
            room=str(message.chat.id),
            user_id=str(user.id),
            text=self._strip_mention(message.text).lstrip("/"),
            username=user.username,
            metadata=metadata,
            timestamp=message.date,
        )

    async def start(self, handler: MessageHandler) -> None:
        """Start the Telegram bot and poll until stopped."""
        self._handler = handler
        self._setup_handlers()

        try:
            bot_info = await self._bot.get_me()
            self._bot_username = bot_info.username
            self._bot_id = bot_info.id
            logger.info(
                "bot_username_resolved",
                extra={"telegram.bot_username": self._bot_username},
            )
        except Exception as e:
            logger.warning("bot_info_failed", extra={"error.message": str(e)})

        self._running = True
        logger.info("telegram_bot_starting")
        await self._bot.delete_webhook(drop_pending_updates=False)
        # Disable aiogram's signal handling - let the app handle SIGINT/SIGTERM
        await self._dp.start_polling(
            self._bot,
            handle_signals=False,
            close_bot_session=False,
        )

    async def stop(self) -> None:
        """Stop the Telegram bot."""
        if not self._running:
            return
        self._running = False

        try:
            await self._dp.stop_polling()
        except Exception as e:
            logger.debug(f"Error stopping polling: {e}")

        try:
            await self._bot.session.close()
        except Exception as e:
            logger.debug(f"Error closing bot session: {e}")

        logger.info("telegram_bot_stopped")

    def _setup_handlers(self) -> None:
        """Set up message handlers on the dispatcher."""

        @self._dp.message(F.text)
        async def handle_message(message: TelegramMessage) -> None:
            incoming = self.to_incoming(message)
            if incoming is None or self._handler is None:
                return

            logger.info(
                "telegram_message_received",
                extra={
                    "messaging.room": incoming.room,
                    "user.username": incoming.username,
                    "message.preview": _truncate(incoming.text),
                },
            )
            reply = await self._handler(incoming)
            if reply:
                await message.answer(reply)

    async def deliver(self, room: str, text: str) -> None:
        """Send ``text`` to the chat identified by ``room``."""
        await self._bot.send_message(chat_id=int(room), text=text)
        logger.debug(
            "telegram_message_sent",
            extra={"messaging.room": room, "message.preview": _truncate(text)},
        )
