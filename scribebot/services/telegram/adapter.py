"""Telegram update normalization layer.

Converts python-telegram-bot Update objects into InboundMessage,
isolating Telegram protocol details from the rest of the application.
"""

import mimetypes
from typing import Optional

from telegram import Update
from telegram.constants import ChatType

from scribebot.lib.identity import normalize, qualify_chat, strip_domain
from scribebot.models.message import InboundMessage

VOICE_FILENAME = "voice.ogg"

# mimetypes has no entry for some audio types Telegram reports
AUDIO_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp4": ".m4a",
    "audio/x-m4a": ".m4a",
    "audio/ogg": ".ogg",
    "audio/opus": ".opus",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/flac": ".flac",
    "audio/webm": ".webm",
}


def message_from_update(update: Update, bot_id: Optional[int] = None) -> Optional[InboundMessage]:
    """
    Build an InboundMessage from a Telegram update.

    Args:
        update: Incoming Telegram update
        bot_id: The bot's own user id, to flag self-authored messages

    Returns:
        InboundMessage, or None for updates without a message or chat
    """
    msg = update.effective_message
    chat = update.effective_chat
    if msg is None or chat is None:
        return None

    is_group = chat.type != ChatType.PRIVATE
    chat_id = qualify_chat(chat.id, is_group)

    # Anonymous group admins and channel posts carry no user
    user = update.effective_user
    sender_id = normalize(str(user.id)) if user else chat_id

    audio = msg.voice or msg.audio
    audio_name = None
    if msg.voice:
        audio_name = VOICE_FILENAME
    elif msg.audio:
        audio_name = msg.audio.file_name or audio_filename_for(msg.audio.mime_type)

    return InboundMessage(
        message_key=msg.message_id,
        chat_id=chat_id,
        sender_id=sender_id,
        is_group_chat=is_group,
        text=msg.text,
        audio_ref=audio.file_id if audio else None,
        audio_name=audio_name,
        from_me=bool(user and bot_id and user.id == bot_id),
        raw=msg,
    )


def audio_filename_for(mime_type: Optional[str]) -> Optional[str]:
    """Derive an upload filename from a MIME type, or None when unknown."""
    if not mime_type:
        return None
    mime_type = mime_type.split(";")[0].strip().lower()
    extension = AUDIO_EXTENSIONS.get(mime_type) or mimetypes.guess_extension(mime_type)
    return f"audio{extension}" if extension else None


def telegram_chat_id(chat_id: str) -> int:
    """Recover the numeric Telegram chat id from a qualified identifier."""
    return int(strip_domain(chat_id))
