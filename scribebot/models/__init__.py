"""Domain models for the bot."""

from scribebot.models.message import InboundMessage
from scribebot.models.settings import (
    CMD_PREFIX_KEY,
    ChatSetting,
    ChatSettingKey,
    GlobalSetting,
    WhitelistEntry,
)

__all__ = [
    "InboundMessage",
    "CMD_PREFIX_KEY",
    "ChatSetting",
    "ChatSettingKey",
    "GlobalSetting",
    "WhitelistEntry",
]
