"""Base interface for transcription providers.

This module defines the TranscriptionProvider abstract base class,
the per-request TranscriptionOptions and the TranscriptionResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from scribebot.lib.exceptions import TranscriptionError


@dataclass
class TranscriptionOptions:
    """
    Options for a single transcription request.

    Attributes:
        model: Provider model name
        response_format: Structured format requested from the provider
        language: ISO language hint, None for auto-detection
        prompt: Hint text (vocabulary, spelling), None for no hint
        temperature: Sampling temperature in [0.0, 1.0]
    """

    model: str
    response_format: str = "json"
    language: Optional[str] = None
    prompt: Optional[str] = None
    temperature: float = 0.0


@dataclass
class TranscriptionResult:
    """
    Result of a transcription request.

    Attributes:
        text: Transcribed text as returned by the provider
        language: Detected or requested language, if reported
    """

    text: str
    language: Optional[str] = None


class TranscriptionProvider(ABC):
    """
    Abstract base class for speech-to-text providers.

    Providers raise TranscriptionError on any failure; they never
    return an empty result in place of an error.
    """

    provider_name: str = "unknown"

    def is_ready(self) -> bool:
        """Check if the provider can accept requests."""
        return True

    def load(self) -> None:
        """Acquire heavy resources (models). Called once at startup."""

    @abstractmethod
    async def transcribe(
        self,
        audio: bytes,
        options: TranscriptionOptions,
        filename: str = "audio.ogg",
    ) -> TranscriptionResult:
        """
        Transcribe raw audio bytes.

        Args:
            audio: Encoded audio (ogg, mp3, m4a, wav, webm)
            options: Model and per-chat options
            filename: Name reported to the provider (format hint)

        Returns:
            TranscriptionResult with the transcribed text

        Raises:
            TranscriptionError: On network, HTTP or model failure
        """

    async def close(self) -> None:
        """Release connections and models. Called once at shutdown."""


class ModelLoadError(TranscriptionError):
    """Raised when a local model fails to load."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message, provider="whisper", original_error=original_error)
