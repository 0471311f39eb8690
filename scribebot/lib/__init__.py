"""Shared utilities and configuration."""

from scribebot.lib.config import BotConfig, TelegramConfig, TranscriptionConfig, StoreConfig
from scribebot.lib.identity import normalize, strip_domain
from scribebot.lib.exceptions import (
    ScribeBotError,
    ConfigError,
    ValidationError,
    PersistenceError,
    RecordNotFoundError,
    TranscriptionError,
)

__all__ = [
    "BotConfig",
    "TelegramConfig",
    "TranscriptionConfig",
    "StoreConfig",
    "normalize",
    "strip_domain",
    "ScribeBotError",
    "ConfigError",
    "ValidationError",
    "PersistenceError",
    "RecordNotFoundError",
    "TranscriptionError",
]
