"""Message event router.

Top-level entry point for every inbound message:

    authorize ─┬─ prefixed text ──→ dispatcher ──→ quoted reply
               └─ chat enabled + audio ──→ working reaction
                                           ──→ workflow
                                           ──→ transcript + done
                                               | diagnostic + error

Unauthorized messages are dropped without a reply. No exception
escapes handle_message(): a failed message never stops the session.
"""

import logging
from typing import Optional, Sequence

from scribebot.lib import messages
from scribebot.lib.exceptions import serialize_error
from scribebot.models.message import InboundMessage
from scribebot.services.auth.service import AuthorizationService
from scribebot.services.commands.dispatcher import CommandDispatcher
from scribebot.services.settings.facade import ChatSettingsFacade
from scribebot.services.transcription.workflow import Reaction, TranscriptionWorkflow
from scribebot.services.transport import ChatTransport

logger = logging.getLogger(__name__)


class MessageRouter:
    """Gates inbound messages and fans out to commands and transcription."""

    def __init__(
        self,
        transport: ChatTransport,
        auth: AuthorizationService,
        settings: ChatSettingsFacade,
        dispatcher: CommandDispatcher,
        workflow: TranscriptionWorkflow,
        bot_prefix: str,
        reactions: dict[str, str],
    ):
        self.transport = transport
        self.auth = auth
        self.settings = settings
        self.dispatcher = dispatcher
        self.workflow = workflow
        self.bot_prefix = bot_prefix
        self.reactions = reactions

    async def handle_batch(self, batch: Sequence[InboundMessage]) -> None:
        """
        Handle a batch of messages delivered as one event.

        Only singleton batches are processed; larger batches are dropped
        whole rather than risk replying out of order.
        """
        if len(batch) != 1:
            logger.debug(f"Discarding batch of {len(batch)} messages")
            return
        await self.handle_message(batch[0])

    async def handle_message(self, message: InboundMessage) -> None:
        """Run the authorization gate, then command and audio handling."""
        try:
            authorized = self.auth.is_authorized_message(message)
        except Exception as e:
            logger.exception(f"Authorization lookup failed for {message.acting_identity}: {e}")
            return

        if not authorized:
            logger.debug(f"Dropping message from unauthorized {message.acting_identity}")
            return

        if message.text:
            await self._handle_text(message)

        if message.has_audio:
            await self._handle_audio(message)

    async def _handle_text(self, message: InboundMessage) -> None:
        try:
            prefix = self.settings.get_command_prefix()
            if not message.text.startswith(prefix):
                return
            is_admin = self.auth.is_admin_message(message)
            response = self.dispatcher.dispatch(message.text, message, is_admin)
        except Exception as e:
            logger.exception(f"Error processing command: {e}")
            response = messages.with_banner(
                self.bot_prefix,
                messages.render(messages.COMMAND_PROCESSING_ERROR, details=serialize_error(e)),
            )

        if response:
            await self._send(message.chat_id, response, quote=message)

    async def _handle_audio(self, message: InboundMessage) -> None:
        try:
            enabled = self.settings.is_chat_enabled(message.chat_id)
        except Exception as e:
            logger.exception(f"Could not read enabled flag for {message.chat_id}: {e}")
            return

        if not enabled:
            return

        await self._react(message, Reaction.WORKING)

        try:
            transcript = await self.workflow.transcribe(message, message.chat_id)
        except Exception as e:
            logger.exception(f"Transcription failed for message {message.message_key}: {e}")
            await self._send(
                message.chat_id,
                messages.with_banner(
                    self.bot_prefix,
                    messages.render(messages.TRANSCRIPTION_ERROR, details=serialize_error(e)),
                ),
                quote=message,
            )
            await self._react(message, Reaction.ERROR)
            return

        delivered = await self._send(
            message.chat_id,
            messages.with_banner(self.bot_prefix, messages.escape(transcript)),
            quote=message,
        )
        await self._react(message, Reaction.DONE if delivered else Reaction.ERROR)

    async def _send(self, chat_id: str, text: str, quote: Optional[InboundMessage] = None) -> bool:
        """Best-effort send; returns False if delivery failed."""
        try:
            await self.transport.send_text(chat_id, text, quote=quote)
            return True
        except Exception as e:
            logger.error(f"Failed to send message to {chat_id}: {e}")
            return False

    async def _react(self, message: InboundMessage, reaction: Reaction) -> None:
        """Fire-and-forget reaction; delivery failures are only logged."""
        emoji = self.reactions.get(reaction.value)
        if not emoji:
            return
        try:
            await self.transport.send_reaction(message.chat_id, emoji, message.message_key)
        except Exception as e:
            logger.warning(f"Failed to set {reaction.value} reaction on {message.message_key}: {e}")
