"""Persistence abstraction layer for whitelist and settings records."""

from pathlib import Path

from scribebot.services.persistence.base import SettingsStore, PersistenceError, RecordNotFoundError
from scribebot.services.persistence.json_store import JsonSettingsStore


def create_settings_store(path: str | Path) -> SettingsStore:
    """Create the default settings store implementation."""
    return JsonSettingsStore(Path(path))


__all__ = [
    "SettingsStore",
    "PersistenceError",
    "RecordNotFoundError",
    "JsonSettingsStore",
    "create_settings_store",
]
