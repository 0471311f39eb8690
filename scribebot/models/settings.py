"""Persisted record shapes for the settings store.

Three record types are stored:
- WhitelistEntry: one per identifier, optionally flagged admin
- ChatSetting: unique on (chat_id, key)
- GlobalSetting: unique on key

All identifiers are stored in qualified form.
"""

from dataclasses import dataclass
from enum import Enum


class ChatSettingKey(str, Enum):
    """Per-chat setting keys."""

    TEMPERATURE = "temperature"
    LANGUAGE = "language"
    TRANSCRIPTION_PROMPT = "transcriptionPrompt"
    ENABLED = "enabled"


# Global setting keys
CMD_PREFIX_KEY = "cmd_prefix"


@dataclass
class WhitelistEntry:
    """
    An identifier allowed to talk to the bot.

    Attributes:
        user_id: Qualified identifier (unique)
        is_admin: Whether the identifier has admin privileges
    """

    user_id: str
    is_admin: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"userId": self.user_id, "isAdmin": self.is_admin}

    @classmethod
    def from_dict(cls, data: dict) -> "WhitelistEntry":
        """Create from dictionary (JSON deserialization)."""
        return cls(user_id=data["userId"], is_admin=bool(data.get("isAdmin", False)))


@dataclass
class ChatSetting:
    """A single per-chat setting value, stored as text."""

    chat_id: str
    key: ChatSettingKey
    value: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"chatId": self.chat_id, "key": self.key.value, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatSetting":
        """Create from dictionary (JSON deserialization)."""
        return cls(
            chat_id=data["chatId"],
            key=ChatSettingKey(data["key"]),
            value=data["value"],
        )


@dataclass
class GlobalSetting:
    """A process-wide setting value, stored as text."""

    key: str
    value: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "GlobalSetting":
        """Create from dictionary (JSON deserialization)."""
        return cls(key=data["key"], value=data["value"])
