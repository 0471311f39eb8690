"""Local Whisper transcription provider.

Runs OpenAI's Whisper model in-process. The model is loaded once at
startup and reused for all transcriptions; inference runs in a worker
thread so the event loop keeps serving other chats.

Requires the optional "local" extra (openai-whisper, torch).
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from scribebot.lib.config import TranscriptionConfig
from scribebot.lib.exceptions import TranscriptionError
from scribebot.services.transcription.base import (
    ModelLoadError,
    TranscriptionOptions,
    TranscriptionProvider,
    TranscriptionResult,
)

logger = logging.getLogger(__name__)


class WhisperTranscriptionProvider(TranscriptionProvider):
    """Whisper model running on this machine."""

    provider_name = "whisper"

    def __init__(self, config: TranscriptionConfig):
        """
        Initialize the provider.

        Args:
            config: Transcription configuration (model name, device, fp16)
        """
        self.config = config
        self._model = None

    def is_ready(self) -> bool:
        return self._model is not None

    def load(self) -> None:
        """
        Load the Whisper model into memory.

        Raises:
            ModelLoadError: If CUDA is requested but missing, or loading fails
        """
        try:
            import torch
            import whisper
        except ImportError as e:
            raise ModelLoadError(
                "Whisper not installed. Run: pip install 'scribebot[local]'",
                original_error=e,
            ) from e

        if self.config.device == "cuda" and not torch.cuda.is_available():
            raise ModelLoadError(
                "CUDA requested but not available. "
                "Install PyTorch with CUDA support or set WHISPER_DEVICE=cpu"
            )

        logger.info(f"Loading Whisper model: {self.config.model_name}")
        logger.info(f"Device: {self.config.device}, FP16: {self.config.fp16}")

        try:
            self._model = whisper.load_model(
                self.config.model_name,
                device=self.config.device,
                download_root=self.config.cache_dir,
            )
        except Exception as e:
            self._model = None
            raise ModelLoadError(f"Failed to load Whisper model: {e}", original_error=e) from e

        logger.info("Whisper model loaded successfully")

    def _run_model(self, audio_path: Path, options: TranscriptionOptions) -> dict:
        return self._model.transcribe(
            str(audio_path),
            fp16=self.config.fp16,
            language=options.language,
            initial_prompt=options.prompt,
            temperature=options.temperature,
        )

    async def transcribe(
        self,
        audio: bytes,
        options: TranscriptionOptions,
        filename: str = "audio.ogg",
    ) -> TranscriptionResult:
        if not self.is_ready():
            raise TranscriptionError("Model not loaded", provider=self.provider_name)

        suffix = Path(filename).suffix or ".ogg"
        fd, temp_path = tempfile.mkstemp(suffix=suffix, prefix="scribebot_")

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(audio)

            result = await asyncio.to_thread(self._run_model, Path(temp_path), options)

        except Exception as e:
            logger.exception(f"Local transcription failed: {e}")
            raise TranscriptionError(
                str(e), provider=self.provider_name, original_error=e
            ) from e

        finally:
            try:
                os.unlink(temp_path)
            except OSError:
                pass

        return TranscriptionResult(
            text=result.get("text", ""),
            language=result.get("language"),
        )

    async def close(self) -> None:
        """Release model from memory."""
        if self._model is None:
            return

        logger.info("Unloading Whisper model")
        self._model = None

        try:
            import gc
            import torch

            gc.collect()
            if torch.cuda.is_available():
                torch.cuda.empty_cache()

        except ImportError:
            pass

        logger.info("Whisper model unloaded")
