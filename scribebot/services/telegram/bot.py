"""Telegram bot adapter using python-telegram-bot.

The bot handles text, voice and audio messages. Every update is
normalized to an InboundMessage and handed to the registered handler
as a one-message batch; prefix parsing happens in the core, so no
Telegram CommandHandler is registered.

Implements the ChatTransport protocol (send_text, send_reaction,
download_audio).
"""

import logging
from typing import Awaitable, Callable, Optional, Sequence

from telegram import ReplyParameters, Update
from telegram.constants import ParseMode
from telegram.ext import (
    Application,
    ApplicationBuilder,
    ContextTypes,
    MessageHandler,
    filters,
)

from scribebot.lib.config import TelegramConfig
from scribebot.models.message import InboundMessage
from scribebot.services.telegram.adapter import message_from_update, telegram_chat_id

logger = logging.getLogger(__name__)

BatchHandler = Callable[[Sequence[InboundMessage]], Awaitable[None]]


class TelegramBotAdapter:
    """
    Telegram transport.

    Implements the adapter pattern to isolate Telegram protocol details.
    All Telegram updates are normalized to InboundMessage objects.
    """

    def __init__(self, config: TelegramConfig):
        """
        Initialize the Telegram bot adapter.

        Args:
            config: Telegram configuration with bot token and timeouts
        """
        self.config = config
        self._app: Optional[Application] = None
        self._handler: Optional[BatchHandler] = None
        self._bot_id: Optional[int] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def on_messages(self, handler: BatchHandler) -> None:
        """
        Register the message handler callback.

        Args:
            handler: Async function receiving a batch of InboundMessage
        """
        self._handler = handler

    async def start(self) -> None:
        """Connect to Telegram and start polling for updates."""
        if self._running:
            logger.warning("Bot already running")
            return

        logger.info("Initializing Telegram bot...")

        self._app = (
            ApplicationBuilder()
            .token(self.config.bot_token)
            .build()
        )

        self._app.add_handler(MessageHandler(
            filters.TEXT | filters.VOICE | filters.AUDIO,
            self._handle_update,
        ))

        await self._app.initialize()
        self._bot_id = self._app.bot.id

        await self._app.start()
        await self._app.updater.start_polling(drop_pending_updates=True)

        self._running = True
        logger.info(f"Telegram bot @{self._app.bot.username} started and listening for messages")

    async def stop(self) -> None:
        """Stop the bot gracefully, including a partially started one."""
        if not self._app:
            return

        logger.info("Stopping Telegram bot...")

        app = self._app
        try:
            if app.updater and app.updater.running:
                await app.updater.stop()
            if app.running:
                await app.stop()
            await app.shutdown()
        finally:
            self._app = None
            self._running = False

        logger.info("Telegram bot stopped")

    async def _handle_update(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Normalize an update and pass it on as a one-message batch."""
        message = message_from_update(update, bot_id=self._bot_id)
        if message is None:
            return
        await self._dispatch([message])

    async def _dispatch(self, batch: Sequence[InboundMessage]) -> None:
        """Dispatch a batch to the registered handler."""
        if self._handler:
            try:
                await self._handler(batch)
            except Exception as e:
                logger.exception(f"Error handling message: {e}")

    def _require_app(self) -> Application:
        if not self._app:
            raise RuntimeError("Bot not started")
        return self._app

    # ChatTransport

    async def send_text(
        self,
        chat_id: str,
        text: str,
        quote: Optional[InboundMessage] = None,
    ) -> None:
        """
        Send a text message.

        Args:
            chat_id: Qualified chat identifier
            text: Message text
            quote: Message to reply to, if any
        """
        app = self._require_app()

        reply_parameters = None
        if quote is not None:
            reply_parameters = ReplyParameters(
                message_id=int(quote.message_key),
                allow_sending_without_reply=True,
            )

        await app.bot.send_message(
            chat_id=telegram_chat_id(chat_id),
            text=text,
            parse_mode=ParseMode.HTML,
            reply_parameters=reply_parameters,
        )

    async def send_reaction(self, chat_id: str, emoji: str, message_key: int | str) -> None:
        """Set the bot's reaction on a message (replaces any previous one)."""
        app = self._require_app()

        await app.bot.set_message_reaction(
            chat_id=telegram_chat_id(chat_id),
            message_id=int(message_key),
            reaction=emoji,
        )

    async def download_audio(self, message: InboundMessage) -> bytes:
        """
        Download the voice/audio attachment of a message.

        Returns:
            Raw audio bytes
        """
        app = self._require_app()

        if not message.audio_ref:
            raise ValueError(f"Message {message.message_key} has no audio attachment")

        file = await app.bot.get_file(
            message.audio_ref,
            read_timeout=self.config.download_timeout,
        )
        data = await file.download_as_bytearray(read_timeout=self.config.download_timeout)
        return bytes(data)
