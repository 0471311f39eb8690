"""Chat transport Protocol consumed by the core."""

from typing import Optional, Protocol

from scribebot.models.message import InboundMessage


class ChatTransport(Protocol):
    """
    Contract for chat transports (Telegram today).

    The core only sends replies and reactions and downloads audio;
    connection lifecycle and credentials stay inside the transport.
    """

    async def send_text(
        self,
        chat_id: str,
        text: str,
        quote: Optional[InboundMessage] = None,
    ) -> None:
        """Send a text message, optionally quoting an inbound message."""
        ...

    async def send_reaction(self, chat_id: str, emoji: str, message_key: int | str) -> None:
        """Attach a reaction emoji to a message."""
        ...

    async def download_audio(self, message: InboundMessage) -> bytes:
        """Fetch the raw audio payload referenced by a message."""
        ...
