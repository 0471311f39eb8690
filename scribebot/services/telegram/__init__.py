"""Telegram transport package."""

from scribebot.services.telegram.adapter import message_from_update, telegram_chat_id
from scribebot.services.telegram.bot import TelegramBotAdapter

__all__ = ["message_from_update", "telegram_chat_id", "TelegramBotAdapter"]
