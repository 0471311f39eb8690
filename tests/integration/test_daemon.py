"""Integration tests for daemon wiring and the reconnect supervision loop."""

import asyncio

import pytest
from telegram.error import InvalidToken, NetworkError, TimedOut

from conftest import FakeTransport
from scribebot.cli.daemon import (
    ReconnectExhaustedError,
    build_router,
    create_provider,
    run_with_reconnect,
    validate_configuration,
)
from scribebot.lib.config import BotConfig, TranscriptionConfig
from scribebot.services.auth import AuthorizationService
from scribebot.services.transcription import GroqTranscriptionProvider


class FlakySession:
    """Session factory failing a fixed number of times before succeeding."""

    def __init__(self, failures, error=NetworkError("connection reset")):
        self.failures = failures
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error


class TestRunWithReconnect:

    @pytest.mark.asyncio
    async def test_clean_session_runs_once(self):
        session = FlakySession(failures=0)

        await run_with_reconnect(session, asyncio.Event(), initial_delay=0)

        assert session.calls == 1

    @pytest.mark.asyncio
    async def test_restarts_after_network_errors(self):
        session = FlakySession(failures=2, error=TimedOut())

        await run_with_reconnect(session, asyncio.Event(), max_attempts=5, initial_delay=0)

        assert session.calls == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        session = FlakySession(failures=10)

        with pytest.raises(ReconnectExhaustedError) as exc_info:
            await run_with_reconnect(session, asyncio.Event(), max_attempts=3, initial_delay=0)

        assert session.calls == 3
        assert exc_info.value.attempts == 3

    @pytest.mark.asyncio
    async def test_zero_means_unbounded(self):
        session = FlakySession(failures=20)

        await run_with_reconnect(session, asyncio.Event(), max_attempts=0, initial_delay=0)

        assert session.calls == 21

    @pytest.mark.asyncio
    async def test_invalid_token_is_terminal(self):
        session = FlakySession(failures=1, error=InvalidToken())

        with pytest.raises(InvalidToken):
            await run_with_reconnect(session, asyncio.Event(), initial_delay=0)

        assert session.calls == 1

    @pytest.mark.asyncio
    async def test_stop_event_ends_backoff(self):
        stop_event = asyncio.Event()
        session = FlakySession(failures=100)

        async def stop_soon():
            await asyncio.sleep(0.05)
            stop_event.set()

        stopper = asyncio.create_task(stop_soon())
        await asyncio.wait_for(
            run_with_reconnect(session, stop_event, max_attempts=0, initial_delay=30),
            timeout=5,
        )
        await stopper

        assert session.calls == 1

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        session = FlakySession(failures=1, error=RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            await run_with_reconnect(session, asyncio.Event(), initial_delay=0)


class TestWiring:

    def test_build_router_seeds_admins(self, store):
        bot_config = BotConfig(ADMIN_USER_IDS="1001,2002", BOT_PREFIX="[BOT]", _env_file=None)

        router = build_router(FakeTransport(), store, provider=None, bot_config=bot_config, model="m")

        assert sorted(AuthorizationService(store).list_admins()) == [
            "1001@user.telegram", "2002@user.telegram",
        ]
        assert router.bot_prefix == "[BOT]"
        assert router.reactions == bot_config.reactions

    @pytest.mark.asyncio
    async def test_built_router_handles_commands(self, store, make_message):
        transport = FakeTransport()
        bot_config = BotConfig(ADMIN_USER_IDS="1001", BOT_PREFIX="[BOT]", _env_file=None)
        router = build_router(transport, store, provider=None, bot_config=bot_config, model="m")

        await router.handle_batch([make_message(".enable", chat_id="1001@user.telegram")])

        assert "Bot activated" in transport.texts[0]

    def test_create_groq_provider(self):
        config = TranscriptionConfig(
            TRANSCRIPTION_PROVIDER="groq", GROQ_API_KEY="gsk_test", _env_file=None,
        )

        provider = create_provider(config)

        assert isinstance(provider, GroqTranscriptionProvider)


class TestValidateConfiguration:

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        monkeypatch.setenv("GROQ_API_KEY", "gsk_test")

        assert validate_configuration() is False

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
        monkeypatch.setenv("TRANSCRIPTION_PROVIDER", "groq")
        monkeypatch.delenv("GROQ_API_KEY", raising=False)

        assert validate_configuration() is False

    def test_valid(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
        monkeypatch.setenv("TRANSCRIPTION_PROVIDER", "groq")
        monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
        monkeypatch.setenv("SETTINGS_PATH", str(tmp_path / "settings.json"))

        assert validate_configuration() is True
