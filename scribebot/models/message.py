"""Normalized inbound message.

The transport adapter converts platform updates into InboundMessage
so the core never touches platform objects.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class InboundMessage:
    """
    A message received from the chat transport.

    Attributes:
        message_key: Transport id of the message (used for quoting and reactions)
        chat_id: Qualified identifier of the chat
        sender_id: Qualified identifier of the author
        is_group_chat: Whether the chat is a group
        text: Text content, if any
        audio_ref: Transport reference to an audio attachment, if any
        audio_name: File name of the attachment (format hint for providers)
        from_me: Whether the bot's own account authored the message
        raw: Original platform object (opaque to the core)
    """

    message_key: int | str
    chat_id: str
    sender_id: str
    is_group_chat: bool = False
    text: Optional[str] = None
    audio_ref: Optional[str] = None
    audio_name: Optional[str] = None
    from_me: bool = False
    raw: Any = None

    @property
    def has_audio(self) -> bool:
        """Check if the message carries an audio attachment."""
        return bool(self.audio_ref)

    @property
    def acting_identity(self) -> str:
        """Identity that authorization applies to.

        In a group the participant acts, in a one-to-one chat the chat
        identifier itself.
        """
        return self.sender_id if self.is_group_chat else self.chat_id
