"""Contract tests for the Groq transcription provider.

HTTP traffic is served by httpx.MockTransport; no network access.
"""

import httpx
import pytest

from scribebot.lib.exceptions import TranscriptionError
from scribebot.services.transcription import (
    GroqTranscriptionProvider,
    TranscriptionOptions,
    get_provider,
)

BASE_URL = "https://api.test/openai/v1"


def make_provider(handler, api_key="gsk_test"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GroqTranscriptionProvider(api_key=api_key, base_url=BASE_URL, client=client)


class TestGroqTranscription:
    """Request shape and response handling."""

    @pytest.mark.asyncio
    async def test_successful_transcription(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.read()
            return httpx.Response(200, json={"text": " Olá mundo "})

        provider = make_provider(handler)
        options = TranscriptionOptions(
            model="whisper-large-v3", language="pt", prompt="Ana", temperature=0.5,
        )

        result = await provider.transcribe(b"OggS-data", options, filename="voice.ogg")

        assert result.text == " Olá mundo "
        assert seen["url"] == f"{BASE_URL}/audio/transcriptions"
        assert seen["auth"] == "Bearer gsk_test"
        assert b'name="model"' in seen["body"]
        assert b"whisper-large-v3" in seen["body"]
        assert b'name="language"' in seen["body"]
        assert b'name="prompt"' in seen["body"]
        assert b'filename="voice.ogg"' in seen["body"]
        await provider.close()

    @pytest.mark.asyncio
    async def test_optional_fields_omitted(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.read()
            return httpx.Response(200, json={"text": "hi"})

        provider = make_provider(handler)

        await provider.transcribe(b"data", TranscriptionOptions(model="m"))

        assert b'name="language"' not in seen["body"]
        assert b'name="prompt"' not in seen["body"]

    @pytest.mark.asyncio
    async def test_api_error_message_surfaced(self):
        def handler(request):
            return httpx.Response(400, json={"error": {"message": "file is too short"}})

        provider = make_provider(handler)

        with pytest.raises(TranscriptionError) as exc_info:
            await provider.transcribe(b"data", TranscriptionOptions(model="m"))

        assert exc_info.value.provider == "groq"
        assert "file is too short" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_http_error_without_body(self):
        provider = make_provider(lambda request: httpx.Response(502, text="bad gateway"))

        with pytest.raises(TranscriptionError, match="HTTP 502"):
            await provider.transcribe(b"data", TranscriptionOptions(model="m"))

    @pytest.mark.asyncio
    async def test_missing_text(self):
        provider = make_provider(lambda request: httpx.Response(200, json={}))

        with pytest.raises(TranscriptionError, match="No text"):
            await provider.transcribe(b"data", TranscriptionOptions(model="m"))

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        provider = make_provider(handler)

        with pytest.raises(TranscriptionError, match="Network error"):
            await provider.transcribe(b"data", TranscriptionOptions(model="m"))

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow")

        provider = make_provider(handler)

        with pytest.raises(TranscriptionError, match="timed out"):
            await provider.transcribe(b"data", TranscriptionOptions(model="m"))

    @pytest.mark.asyncio
    async def test_empty_audio_rejected(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"text": "x"}))

        with pytest.raises(TranscriptionError, match="empty"):
            await provider.transcribe(b"", TranscriptionOptions(model="m"))

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"text": "x"}), api_key=None)

        with pytest.raises(TranscriptionError, match="GROQ_API_KEY"):
            await provider.transcribe(b"data", TranscriptionOptions(model="m"))


class TestProviderRegistry:
    def test_get_provider(self):
        provider = get_provider("groq", api_key="gsk_test")

        assert isinstance(provider, GroqTranscriptionProvider)
        assert provider.is_ready()

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_provider("carrier-pigeon")
