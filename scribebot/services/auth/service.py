"""Whitelist and admin authorization.

The AuthorizationService is the only writer of whitelist entries.
Every identifier is normalized before it reaches the store.
"""

import logging
from typing import Iterable, Optional

from scribebot.lib.identity import normalize
from scribebot.models.message import InboundMessage
from scribebot.models.settings import WhitelistEntry
from scribebot.services.persistence.base import SettingsStore

logger = logging.getLogger(__name__)


class AuthorizationService:
    """
    Resolves whether an identifier is whitelisted and/or an admin.

    Resolution policy:
        - In a group chat the participant (sender) acts, not the chat.
        - In a one-to-one chat the chat identifier acts.
        - Authorized iff a whitelist entry exists; admin entries are
          whitelist entries, so admins are always authorized.
    """

    def __init__(self, store: SettingsStore, trust_self_messages: bool = False):
        """
        Initialize the service.

        Args:
            store: Settings store holding whitelist entries
            trust_self_messages: Treat messages authored by the bot's own
                account as admin. Known limitation for transports that
                cannot report the true sender; off by default.
        """
        self.store = store
        self.trust_self_messages = trust_self_messages

    def get_entry(self, user_id: Optional[str]) -> Optional[WhitelistEntry]:
        """Look up the whitelist entry of an identifier."""
        if not user_id:
            return None
        return self.store.get_whitelist_entry(normalize(user_id))

    def is_authorized(self, chat_id: str, sender_id: Optional[str], is_group_chat: bool) -> bool:
        """Check whether the acting identity of a message may use the bot."""
        acting = sender_id if is_group_chat else chat_id
        return self.get_entry(acting) is not None

    def is_admin_for(self, sender_id: Optional[str]) -> bool:
        """Check whether an identifier has admin privileges."""
        entry = self.get_entry(sender_id)
        return bool(entry and entry.is_admin)

    def acting_identity(self, message: InboundMessage) -> str:
        return normalize(message.acting_identity)

    def is_authorized_message(self, message: InboundMessage) -> bool:
        """Authorization check for a normalized inbound message."""
        return self.is_authorized(message.chat_id, message.sender_id, message.is_group_chat)

    def is_admin_message(self, message: InboundMessage) -> bool:
        """Admin check for the author of a normalized inbound message."""
        if self.is_admin_for(message.sender_id):
            return True
        if self.trust_self_messages and message.from_me:
            logger.debug(f"Treating self-authored message {message.message_key} as admin")
            return True
        return False

    # Whitelist mutation

    def add_to_whitelist(self, user_id: str) -> WhitelistEntry:
        """Whitelist an identifier (no-op if already present)."""
        entry = self.store.upsert_whitelist_entry(normalize(user_id))
        logger.info(f"Whitelisted {entry.user_id}")
        return entry

    def remove_from_whitelist(self, user_id: str) -> None:
        """
        Remove an identifier from the whitelist.

        Raises:
            RecordNotFoundError: If the identifier is not whitelisted
        """
        user_id = normalize(user_id)
        self.store.delete_whitelist_entry(user_id)
        logger.info(f"Removed {user_id} from whitelist")

    def list_whitelist(self) -> list[str]:
        """Return all whitelisted identifiers."""
        return [entry.user_id for entry in self.store.list_whitelist_entries()]

    # Admin mutation

    def add_admin(self, user_id: str) -> WhitelistEntry:
        """Grant admin, creating the whitelist entry if needed."""
        entry = self.store.upsert_whitelist_entry(normalize(user_id), is_admin=True)
        logger.info(f"Granted admin to {entry.user_id}")
        return entry

    def remove_admin(self, user_id: str) -> WhitelistEntry:
        """
        Revoke admin; the identifier stays whitelisted.

        Raises:
            RecordNotFoundError: If the identifier has no entry
        """
        entry = self.store.update_whitelist_entry(normalize(user_id), is_admin=False)
        logger.info(f"Revoked admin from {entry.user_id}")
        return entry

    def list_admins(self) -> list[str]:
        """Return all admin identifiers."""
        return [entry.user_id for entry in self.store.list_whitelist_entries(admins_only=True)]

    def ensure_admins(self, user_ids: Iterable[str]) -> list[str]:
        """Grant admin to each identifier (startup seeding)."""
        granted = []
        for user_id in user_ids:
            granted.append(self.add_admin(user_id).user_id)
        return granted
