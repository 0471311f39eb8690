"""Unit tests for Telegram update normalization."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.constants import ChatType, ParseMode

from scribebot.lib.config import TelegramConfig
from scribebot.services.telegram import TelegramBotAdapter, message_from_update, telegram_chat_id

BOT_ID = 999


def make_update(
    text=None,
    chat_id=42,
    chat_type=ChatType.PRIVATE,
    user_id=42,
    voice=None,
    audio=None,
    message_id=7,
):
    update = MagicMock()
    update.effective_chat.id = chat_id
    update.effective_chat.type = chat_type

    if user_id is None:
        update.effective_user = None
    else:
        update.effective_user.id = user_id

    msg = update.effective_message
    msg.message_id = message_id
    msg.text = text
    msg.voice = voice
    msg.audio = audio
    return update


class TestMessageFromUpdate:
    """Tests for message_from_update()."""

    def test_private_text(self):
        message = message_from_update(make_update(text=".help"))

        assert message.chat_id == "42@user.telegram"
        assert message.sender_id == "42@user.telegram"
        assert message.is_group_chat is False
        assert message.text == ".help"
        assert message.message_key == 7
        assert not message.has_audio

    def test_group_message(self):
        update = make_update(text="hi", chat_id=-1005, chat_type=ChatType.SUPERGROUP, user_id=42)

        message = message_from_update(update)

        assert message.chat_id == "-1005@group.telegram"
        assert message.sender_id == "42@user.telegram"
        assert message.is_group_chat is True
        assert message.acting_identity == "42@user.telegram"

    def test_voice_note(self):
        voice = MagicMock(file_id="voice-file")

        message = message_from_update(make_update(voice=voice))

        assert message.has_audio
        assert message.audio_ref == "voice-file"
        assert message.audio_name == "voice.ogg"

    def test_audio_file_keeps_name(self):
        audio = MagicMock(file_id="audio-file", file_name="memo.m4a")

        message = message_from_update(make_update(audio=audio))

        assert message.audio_ref == "audio-file"
        assert message.audio_name == "memo.m4a"

    @pytest.mark.parametrize("mime_type,expected", [
        ("audio/mpeg", "audio.mp3"),
        ("audio/mp4", "audio.m4a"),
        ("audio/ogg; codecs=opus", "audio.ogg"),
    ])
    def test_unnamed_audio_uses_mime_type(self, mime_type, expected):
        audio = MagicMock(file_id="audio-file", file_name=None, mime_type=mime_type)

        message = message_from_update(make_update(audio=audio))

        assert message.audio_name == expected

    def test_unnamed_audio_without_mime_type(self):
        audio = MagicMock(file_id="audio-file", file_name=None, mime_type=None)

        message = message_from_update(make_update(audio=audio))

        assert message.audio_name is None

    def test_anonymous_sender_falls_back_to_chat(self):
        update = make_update(chat_id=-1005, chat_type=ChatType.GROUP, user_id=None)

        message = message_from_update(update)

        assert message.sender_id == "-1005@group.telegram"

    def test_self_authored(self):
        message = message_from_update(make_update(user_id=BOT_ID), bot_id=BOT_ID)

        assert message.from_me is True

    def test_update_without_message(self):
        update = make_update()
        update.effective_message = None

        assert message_from_update(update) is None


def test_telegram_chat_id():
    assert telegram_chat_id("-1005@group.telegram") == -1005
    assert telegram_chat_id("42@user.telegram") == 42


class TestTelegramBotAdapter:
    """Tests for the transport methods against a mocked Application."""

    @pytest.fixture
    def adapter(self):
        adapter = TelegramBotAdapter(TelegramConfig(TELEGRAM_BOT_TOKEN="123:abc", _env_file=None))
        adapter._app = MagicMock()
        adapter._app.bot.send_message = AsyncMock()
        adapter._app.bot.set_message_reaction = AsyncMock()
        return adapter

    @pytest.mark.asyncio
    async def test_send_text_quotes_message(self, adapter, make_message):
        quote = make_message("hi", chat_id="42@user.telegram")

        await adapter.send_text("42@user.telegram", "hello", quote=quote)

        kwargs = adapter._app.bot.send_message.call_args.kwargs
        assert kwargs["chat_id"] == 42
        assert kwargs["text"] == "hello"
        assert kwargs["parse_mode"] == ParseMode.HTML
        assert kwargs["reply_parameters"].message_id == quote.message_key

    @pytest.mark.asyncio
    async def test_send_reaction(self, adapter):
        await adapter.send_reaction("-1005@group.telegram", "👌", 7)

        adapter._app.bot.set_message_reaction.assert_awaited_once_with(
            chat_id=-1005, message_id=7, reaction="👌",
        )

    @pytest.mark.asyncio
    async def test_download_audio(self, adapter, make_message):
        file = MagicMock()
        file.download_as_bytearray = AsyncMock(return_value=bytearray(b"OggS"))
        adapter._app.bot.get_file = AsyncMock(return_value=file)

        data = await adapter.download_audio(make_message(audio_ref="file-1"))

        assert data == b"OggS"
        assert adapter._app.bot.get_file.call_args.args[0] == "file-1"

    @pytest.mark.asyncio
    async def test_dispatch_survives_handler_failure(self, adapter, make_message):
        handler = AsyncMock(side_effect=RuntimeError("boom"))
        adapter.on_messages(handler)

        # Should not raise
        await adapter._dispatch([make_message("x")])

        handler.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_send_before_start_fails(self):
        adapter = TelegramBotAdapter(TelegramConfig(TELEGRAM_BOT_TOKEN="123:abc", _env_file=None))

        with pytest.raises(RuntimeError):
            await adapter.send_text("42@user.telegram", "hello")
