"""Transcription package: providers and the audio workflow."""

from scribebot.services.transcription.base import (
    ModelLoadError,
    TranscriptionOptions,
    TranscriptionProvider,
    TranscriptionResult,
)
from scribebot.services.transcription.groq import GroqTranscriptionProvider
from scribebot.services.transcription.whisper import WhisperTranscriptionProvider
from scribebot.services.transcription.workflow import Reaction, TranscriptionWorkflow

_PROVIDERS: dict[str, type] = {
    "groq": GroqTranscriptionProvider,
    "whisper": WhisperTranscriptionProvider,
}


def get_provider(name: str, **kwargs) -> TranscriptionProvider:
    """
    Get a transcription provider instance by name.

    Args:
        name: Provider identifier ("groq", "whisper")
        **kwargs: Provider-specific configuration

    Raises:
        ValueError: If provider name is not registered
    """
    if name not in _PROVIDERS:
        available = ", ".join(_PROVIDERS.keys())
        raise ValueError(f"Unknown provider '{name}'. Available: {available}")

    return _PROVIDERS[name](**kwargs)


def register_provider(name: str, provider_class: type) -> None:
    """Register a new provider class."""
    _PROVIDERS[name] = provider_class


__all__ = [
    "ModelLoadError",
    "TranscriptionOptions",
    "TranscriptionProvider",
    "TranscriptionResult",
    "GroqTranscriptionProvider",
    "WhisperTranscriptionProvider",
    "Reaction",
    "TranscriptionWorkflow",
    "get_provider",
    "register_provider",
]
