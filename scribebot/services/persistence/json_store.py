"""Settings store with atomic JSON persistence.

All records live in a single JSON document:

    {
      "whitelist": [{"userId": ..., "isAdmin": ...}],
      "chatSettings": [{"chatId": ..., "key": ..., "value": ...}],
      "globalSettings": [{"key": ..., "value": ...}]
    }

The document is re-read on every operation so changes made out of band
(by the whitelist CLI) are visible to a running bot. Writes use the
temp file + os.replace pattern, so a crash leaves the old file intact.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from scribebot.lib.exceptions import PersistenceError, RecordNotFoundError
from scribebot.models.settings import ChatSetting, ChatSettingKey, GlobalSetting, WhitelistEntry

logger = logging.getLogger(__name__)

_EMPTY_DOCUMENT = {"whitelist": [], "chatSettings": [], "globalSettings": []}


class JsonSettingsStore:
    """
    File-backed implementation of the SettingsStore protocol.

    Last writer wins: there is no locking between concurrent writers.
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: JSON file location (parent directories are created)
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    # Document I/O

    def _read(self) -> dict:
        if not self.path.exists():
            return {name: [] for name in _EMPTY_DOCUMENT}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted settings file {self.path}: {e}")
            raise PersistenceError(
                f"Corrupted settings file: {e}", path=str(self.path), operation="read"
            ) from e
        except OSError as e:
            raise PersistenceError(
                f"Failed to read settings: {e}", path=str(self.path), operation="read"
            ) from e

        for name in _EMPTY_DOCUMENT:
            data.setdefault(name, [])
        return data

    def _write(self, data: dict) -> None:
        json_content = json.dumps(data, indent=2, ensure_ascii=False)

        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=".settings_",
            suffix=".tmp",
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(json_content)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, self.path)
            logger.debug(f"Saved settings to {self.path}")

        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise PersistenceError(
                f"Failed to save settings: {e}", path=str(self.path), operation="write"
            ) from e

    # Whitelist

    def get_whitelist_entry(self, user_id: str) -> Optional[WhitelistEntry]:
        for row in self._read()["whitelist"]:
            if row["userId"] == user_id:
                return WhitelistEntry.from_dict(row)
        return None

    def upsert_whitelist_entry(self, user_id: str, is_admin: Optional[bool] = None) -> WhitelistEntry:
        data = self._read()
        for row in data["whitelist"]:
            if row["userId"] == user_id:
                if is_admin is not None:
                    row["isAdmin"] = is_admin
                entry = WhitelistEntry.from_dict(row)
                break
        else:
            entry = WhitelistEntry(user_id=user_id, is_admin=bool(is_admin))
            data["whitelist"].append(entry.to_dict())

        self._write(data)
        return entry

    def update_whitelist_entry(self, user_id: str, is_admin: bool) -> WhitelistEntry:
        data = self._read()
        for row in data["whitelist"]:
            if row["userId"] == user_id:
                row["isAdmin"] = is_admin
                self._write(data)
                return WhitelistEntry.from_dict(row)
        raise RecordNotFoundError("whitelist", user_id, operation="update")

    def delete_whitelist_entry(self, user_id: str) -> None:
        data = self._read()
        remaining = [row for row in data["whitelist"] if row["userId"] != user_id]
        if len(remaining) == len(data["whitelist"]):
            raise RecordNotFoundError("whitelist", user_id, operation="delete")
        data["whitelist"] = remaining
        self._write(data)

    def list_whitelist_entries(self, admins_only: bool = False) -> list[WhitelistEntry]:
        entries = [WhitelistEntry.from_dict(row) for row in self._read()["whitelist"]]
        if admins_only:
            entries = [entry for entry in entries if entry.is_admin]
        return entries

    # Chat settings

    def get_chat_setting(self, chat_id: str, key: ChatSettingKey) -> Optional[ChatSetting]:
        for row in self._read()["chatSettings"]:
            if row["chatId"] == chat_id and row["key"] == key.value:
                return ChatSetting.from_dict(row)
        return None

    def upsert_chat_setting(self, chat_id: str, key: ChatSettingKey, value: str) -> ChatSetting:
        data = self._read()
        setting = ChatSetting(chat_id=chat_id, key=key, value=value)
        for row in data["chatSettings"]:
            if row["chatId"] == chat_id and row["key"] == key.value:
                row["value"] = value
                break
        else:
            data["chatSettings"].append(setting.to_dict())

        self._write(data)
        return setting

    def delete_chat_setting(self, chat_id: str, key: ChatSettingKey) -> None:
        data = self._read()
        remaining = [
            row for row in data["chatSettings"]
            if not (row["chatId"] == chat_id and row["key"] == key.value)
        ]
        if len(remaining) == len(data["chatSettings"]):
            raise RecordNotFoundError("chat_setting", f"{chat_id}/{key.value}", operation="delete")
        data["chatSettings"] = remaining
        self._write(data)

    # Global settings

    def get_global_setting(self, key: str) -> Optional[GlobalSetting]:
        for row in self._read()["globalSettings"]:
            if row["key"] == key:
                return GlobalSetting.from_dict(row)
        return None

    def upsert_global_setting(self, key: str, value: str) -> GlobalSetting:
        data = self._read()
        setting = GlobalSetting(key=key, value=value)
        for row in data["globalSettings"]:
            if row["key"] == key:
                row["value"] = value
                break
        else:
            data["globalSettings"].append(setting.to_dict())

        self._write(data)
        return setting

    def close(self) -> None:
        # Every write is already flushed and fsynced
        logger.debug(f"Closed settings store {self.path}")
