"""Command tokenization."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Command:
    """
    Ephemeral parse result of a prefixed text message.

    Attributes:
        token: First token, including the prefix (e.g. ".temp")
        name: First token without the prefix (e.g. "temp")
        args: Remaining tokens, in order
    """

    token: str
    name: str
    args: list[str] = field(default_factory=list)

    @property
    def joined_args(self) -> str:
        """Arguments re-joined with single spaces (multi-word values)."""
        return " ".join(self.args)


def parse_command(raw_text: str, prefix: str) -> Optional[Command]:
    """
    Split a prefixed message into verb and arguments.

    Splits on single spaces, so consecutive spaces yield empty tokens
    and multi-word values re-join exactly.

    Returns:
        Command, or None if the text does not start with the prefix
    """
    if not raw_text or not prefix or not raw_text.startswith(prefix):
        return None

    token, *args = raw_text.split(" ")
    return Command(token=token, name=token[len(prefix):], args=args)
