"""Audio transcription workflow.

Reaction protocol driven by the router around this workflow:

    received → working → done   (transcript delivered)
                       → error  (diagnostic delivered)

Transitions are one-shot; there is no retry and no fallback provider.
"""

import logging
from enum import Enum
from typing import Optional

from scribebot.lib.exceptions import TranscriptionError
from scribebot.models.message import InboundMessage
from scribebot.services.settings.facade import ChatSettingsFacade
from scribebot.services.transcription.base import TranscriptionOptions, TranscriptionProvider
from scribebot.services.transport import ChatTransport

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_FILENAME = "audio.ogg"


class Reaction(str, Enum):
    """Workflow states signalled with a reaction."""

    WORKING = "working"
    DONE = "done"
    ERROR = "error"


class TranscriptionWorkflow:
    """Download → per-chat options → provider → trimmed text."""

    def __init__(
        self,
        transport: ChatTransport,
        settings: ChatSettingsFacade,
        provider: TranscriptionProvider,
        model: str,
    ):
        self.transport = transport
        self.settings = settings
        self.provider = provider
        self.model = model

    def build_options(self, chat_id: str) -> TranscriptionOptions:
        """Read the chat-scoped options from the settings store."""
        return TranscriptionOptions(
            model=self.model,
            response_format="json",
            language=self.settings.get_language(chat_id),
            prompt=self.settings.get_transcription_prompt(chat_id),
            temperature=self.settings.get_temperature(chat_id),
        )

    async def transcribe(self, message: InboundMessage, chat_id: Optional[str] = None) -> str:
        """
        Transcribe the audio attached to a message.

        Args:
            message: Inbound message carrying an audio reference
            chat_id: Chat whose settings apply (default: the message's chat)

        Returns:
            Transcript with surrounding whitespace removed

        Raises:
            TranscriptionError: On download, settings or provider failure
        """
        chat_id = chat_id or message.chat_id

        try:
            audio = await self.transport.download_audio(message)
        except Exception as e:
            raise TranscriptionError(
                f"Failed to download audio: {e}", provider="transport", original_error=e
            ) from e

        try:
            options = self.build_options(chat_id)
        except Exception as e:
            raise TranscriptionError(
                f"Failed to read chat settings: {e}", provider="settings", original_error=e
            ) from e

        logger.info(
            f"Transcribing {len(audio)} bytes for {chat_id} "
            f"(language={options.language}, temperature={options.temperature})"
        )

        result = await self.provider.transcribe(
            audio,
            options,
            filename=message.audio_name or DEFAULT_AUDIO_FILENAME,
        )
        return result.text.strip()
