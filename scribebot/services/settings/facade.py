"""Typed accessors over the settings store.

One getter/setter pair per chat setting key plus the global command
prefix. Getters return a default when no record exists; setters upsert.
"""

import logging
from typing import Optional

from scribebot.lib.identity import normalize
from scribebot.models.settings import CMD_PREFIX_KEY, ChatSettingKey
from scribebot.services.persistence.base import SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.0


class ChatSettingsFacade:
    """Per-chat and global settings with documented defaults."""

    def __init__(self, store: SettingsStore, default_prefix: str = "."):
        self.store = store
        self.default_prefix = default_prefix

    def _get(self, chat_id: str, key: ChatSettingKey) -> Optional[str]:
        setting = self.store.get_chat_setting(normalize(chat_id), key)
        return setting.value if setting else None

    def _set(self, chat_id: str, key: ChatSettingKey, value: str) -> None:
        self.store.upsert_chat_setting(normalize(chat_id), key, value)

    def _clear(self, chat_id: str, key: ChatSettingKey) -> bool:
        # Existence check first: clearing an unset value is a no-op
        chat_id = normalize(chat_id)
        if self.store.get_chat_setting(chat_id, key) is None:
            return False
        self.store.delete_chat_setting(chat_id, key)
        return True

    # Temperature

    def get_temperature(self, chat_id: str) -> float:
        value = self._get(chat_id, ChatSettingKey.TEMPERATURE)
        if value is None:
            return DEFAULT_TEMPERATURE
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Ignoring unparsable temperature {value!r} for {chat_id}")
            return DEFAULT_TEMPERATURE

    def set_temperature(self, chat_id: str, temperature: float) -> None:
        self._set(chat_id, ChatSettingKey.TEMPERATURE, repr(float(temperature)))

    # Language

    def get_language(self, chat_id: str) -> Optional[str]:
        return self._get(chat_id, ChatSettingKey.LANGUAGE)

    def set_language(self, chat_id: str, language: str) -> None:
        self._set(chat_id, ChatSettingKey.LANGUAGE, language)

    def clear_language(self, chat_id: str) -> bool:
        """Remove the language; returns False when none was set."""
        return self._clear(chat_id, ChatSettingKey.LANGUAGE)

    # Transcription prompt

    def get_transcription_prompt(self, chat_id: str) -> Optional[str]:
        return self._get(chat_id, ChatSettingKey.TRANSCRIPTION_PROMPT)

    def set_transcription_prompt(self, chat_id: str, prompt: str) -> None:
        self._set(chat_id, ChatSettingKey.TRANSCRIPTION_PROMPT, prompt)

    def clear_transcription_prompt(self, chat_id: str) -> bool:
        """Remove the prompt; returns False when none was set."""
        return self._clear(chat_id, ChatSettingKey.TRANSCRIPTION_PROMPT)

    # Enabled flag

    def is_chat_enabled(self, chat_id: str) -> bool:
        return self._get(chat_id, ChatSettingKey.ENABLED) == "true"

    def set_chat_enabled(self, chat_id: str, enabled: bool) -> None:
        self._set(chat_id, ChatSettingKey.ENABLED, "true" if enabled else "false")

    # Command prefix (global)

    def get_command_prefix(self) -> str:
        setting = self.store.get_global_setting(CMD_PREFIX_KEY)
        return setting.value if setting else self.default_prefix

    def set_command_prefix(self, prefix: str) -> None:
        self.store.upsert_global_setting(CMD_PREFIX_KEY, prefix)
