"""Groq (OpenAI-compatible) Whisper transcription provider using httpx."""

import logging
from typing import Optional

import httpx

from scribebot.lib.exceptions import TranscriptionError
from scribebot.services.transcription.base import (
    TranscriptionOptions,
    TranscriptionProvider,
    TranscriptionResult,
)

logger = logging.getLogger(__name__)


class GroqTranscriptionProvider(TranscriptionProvider):
    """
    Whisper transcription over the OpenAI-compatible audio API.

    Works against Groq by default; any server exposing
    POST {base_url}/audio/transcriptions can be used.

    Example:
        >>> provider = GroqTranscriptionProvider(api_key="gsk_...")
        >>> result = await provider.transcribe(audio, TranscriptionOptions(model="whisper-large-v3"))
        >>> print(result.text)
    """

    provider_name = "groq"

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
    DEFAULT_TIMEOUT = 120

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: API key sent as a bearer token
            base_url: API base URL (default: Groq's OpenAI-compatible endpoint)
            timeout: Request timeout in seconds (default: 120)
            client: Preconfigured httpx client (tests inject a MockTransport)
        """
        self._api_key = api_key
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._api_url = f"{self._base_url}/audio/transcriptions"
        self._client = client or httpx.AsyncClient(timeout=self._timeout)

    async def transcribe(
        self,
        audio: bytes,
        options: TranscriptionOptions,
        filename: str = "audio.ogg",
    ) -> TranscriptionResult:
        if not audio:
            raise TranscriptionError("Audio payload is empty", provider=self.provider_name)

        if not self._api_key:
            raise TranscriptionError("GROQ_API_KEY not set", provider=self.provider_name)

        headers = {"Authorization": f"Bearer {self._api_key}"}

        data = {
            "model": options.model,
            "response_format": options.response_format,
            "temperature": str(options.temperature),
        }
        if options.language:
            data["language"] = options.language
        if options.prompt:
            data["prompt"] = options.prompt

        files = {"file": (filename, audio, "application/octet-stream")}

        try:
            response = await self._client.post(
                self._api_url,
                headers=headers,
                data=data,
                files=files,
            )

            if response.status_code != 200:
                try:
                    error_data = response.json()
                except ValueError:
                    error_data = {}
                error_message = (error_data.get("error") or {}).get(
                    "message", f"HTTP {response.status_code}"
                )
                raise TranscriptionError(
                    f"API error: {error_message}", provider=self.provider_name
                )

            payload = response.json()
            text = payload.get("text")
            if text is None:
                raise TranscriptionError("No text in response", provider=self.provider_name)

            logger.debug(f"Transcribed {len(audio)} bytes into {len(text)} chars")
            return TranscriptionResult(text=text, language=payload.get("language"))

        except httpx.TimeoutException as e:
            raise TranscriptionError(
                f"Request timed out after {self._timeout}s",
                provider=self.provider_name,
                original_error=e,
            )
        except httpx.RequestError as e:
            raise TranscriptionError(
                f"Network error: {str(e)}",
                provider=self.provider_name,
                original_error=e,
            )
        except TranscriptionError:
            raise
        except Exception as e:
            raise TranscriptionError(
                f"Unexpected error: {str(e)}",
                provider=self.provider_name,
                original_error=e,
            )

    async def close(self) -> None:
        await self._client.aclose()
