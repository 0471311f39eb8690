"""Shared pytest fixtures for all test types."""

from typing import Optional

import pytest

from scribebot.lib.config import reset_all_configs
from scribebot.models.message import InboundMessage
from scribebot.services.auth import AuthorizationService
from scribebot.services.commands import CommandDispatcher
from scribebot.services.persistence import JsonSettingsStore
from scribebot.services.settings import ChatSettingsFacade

BANNER = "[BOT]"

ADMIN_ID = "1001@user.telegram"
USER_ID = "2002@user.telegram"
STRANGER_ID = "3003@user.telegram"
GROUP_ID = "-4004@group.telegram"

REACTIONS = {"working": "✍", "error": "👎", "done": "👌"}


class FakeTransport:
    """In-memory ChatTransport recording everything the bot sends."""

    def __init__(self, audio: bytes = b"OggS-fake-audio"):
        self.audio = audio
        self.sent: list[tuple[str, str, Optional[InboundMessage]]] = []
        self.reactions: list[tuple[str, str, object]] = []
        self.fail_send = False
        self.fail_reaction = False
        self.fail_download = False

    async def send_text(self, chat_id, text, quote=None):
        if self.fail_send:
            raise ConnectionError("send failed")
        self.sent.append((chat_id, text, quote))

    async def send_reaction(self, chat_id, emoji, message_key):
        if self.fail_reaction:
            raise ConnectionError("reaction failed")
        self.reactions.append((chat_id, emoji, message_key))

    async def download_audio(self, message):
        if self.fail_download:
            raise ConnectionError("download failed")
        return self.audio

    @property
    def texts(self) -> list[str]:
        return [text for _, text, _ in self.sent]

    @property
    def emojis(self) -> list[str]:
        return [emoji for _, emoji, _ in self.reactions]


@pytest.fixture(autouse=True)
def _reset_configs():
    """Config singletons never leak between tests."""
    reset_all_configs()
    yield
    reset_all_configs()


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "data" / "settings.json"


@pytest.fixture
def store(settings_path):
    """Empty JSON settings store in a temporary directory."""
    return JsonSettingsStore(settings_path)


@pytest.fixture
def settings(store):
    return ChatSettingsFacade(store, default_prefix=".")


@pytest.fixture
def auth(store):
    """Authorization service with one admin and one plain user."""
    service = AuthorizationService(store)
    service.add_admin(ADMIN_ID)
    service.add_to_whitelist(USER_ID)
    return service


@pytest.fixture
def dispatcher(settings, auth):
    return CommandDispatcher(settings, auth, BANNER)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def make_message():
    """Factory for inbound messages; private chat with the admin by default."""
    counter = iter(range(1, 10_000))

    def _make(
        text: Optional[str] = None,
        chat_id: str = ADMIN_ID,
        sender_id: Optional[str] = None,
        is_group_chat: bool = False,
        audio_ref: Optional[str] = None,
        audio_name: Optional[str] = None,
        from_me: bool = False,
    ) -> InboundMessage:
        return InboundMessage(
            message_key=next(counter),
            chat_id=chat_id,
            sender_id=sender_id or chat_id,
            is_group_chat=is_group_chat,
            text=text,
            audio_ref=audio_ref,
            audio_name=audio_name,
            from_me=from_me,
        )

    return _make
