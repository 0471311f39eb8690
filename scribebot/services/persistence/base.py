"""Settings store Protocol definition."""

from typing import Optional, Protocol

from scribebot.lib.exceptions import PersistenceError, RecordNotFoundError
from scribebot.models.settings import ChatSetting, ChatSettingKey, GlobalSetting, WhitelistEntry


class SettingsStore(Protocol):
    """
    Contract for settings store implementations.

    Keyed upsert/find/delete over three record shapes: whitelist entries,
    per-chat settings and global settings. Identifiers passed in are
    already normalized; the store does not normalize.

    Errors:
        PersistenceError: store unreachable or unreadable
        RecordNotFoundError: update/delete of a record that does not exist
    """

    def get_whitelist_entry(self, user_id: str) -> Optional[WhitelistEntry]:
        """Return the entry for user_id, or None if absent."""
        ...

    def upsert_whitelist_entry(self, user_id: str, is_admin: Optional[bool] = None) -> WhitelistEntry:
        """
        Create the entry if absent, else update it.

        Args:
            user_id: Qualified identifier
            is_admin: New admin flag; None leaves an existing flag untouched
                (and creates a non-admin entry)

        Contract:
            - MUST NOT raise on first write
            - MUST persist before returning
        """
        ...

    def update_whitelist_entry(self, user_id: str, is_admin: bool) -> WhitelistEntry:
        """
        Set the admin flag of an existing entry.

        Raises:
            RecordNotFoundError: If no entry exists for user_id
        """
        ...

    def delete_whitelist_entry(self, user_id: str) -> None:
        """
        Delete an entry.

        Raises:
            RecordNotFoundError: If no entry exists for user_id
        """
        ...

    def list_whitelist_entries(self, admins_only: bool = False) -> list[WhitelistEntry]:
        """List entries in insertion order, optionally only admins."""
        ...

    def get_chat_setting(self, chat_id: str, key: ChatSettingKey) -> Optional[ChatSetting]:
        """Return the setting for (chat_id, key), or None if absent."""
        ...

    def upsert_chat_setting(self, chat_id: str, key: ChatSettingKey, value: str) -> ChatSetting:
        """Create or overwrite the setting for (chat_id, key)."""
        ...

    def delete_chat_setting(self, chat_id: str, key: ChatSettingKey) -> None:
        """
        Delete the setting for (chat_id, key).

        Raises:
            RecordNotFoundError: If the setting does not exist
        """
        ...

    def get_global_setting(self, key: str) -> Optional[GlobalSetting]:
        """Return the global setting, or None if absent."""
        ...

    def upsert_global_setting(self, key: str, value: str) -> GlobalSetting:
        """Create or overwrite a global setting."""
        ...

    def close(self) -> None:
        """Flush and release resources."""
        ...


__all__ = ["SettingsStore", "PersistenceError", "RecordNotFoundError"]
