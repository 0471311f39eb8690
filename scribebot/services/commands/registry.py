"""Closed verb enumeration and the command registry.

Every Verb maps to exactly one CommandSpec declaring its handler, its
admin requirement and whether it bypasses the chat-enabled gate. The
help text is generated from the registry, so a command cannot exist
without documentation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from scribebot.lib import messages
from scribebot.services.commands import handlers
from scribebot.services.commands.handlers import CommandContext


class Verb(str, Enum):
    """Every command the bot understands."""

    HELP = "help"
    ENABLE = "enable"
    DISABLE = "disable"
    STATUS = "status"
    ID = "id"
    TEMP = "temp"
    LANG = "lang"
    PROMPT = "prompt"
    PREFIX = "prefix"
    USER = "user"
    USERS = "users"
    ADMIN = "admin"
    ADMINS = "admins"

    @classmethod
    def resolve(cls, name: str) -> Optional["Verb"]:
        """Look up a verb by name; None for unknown verbs."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class CommandSpec:
    """
    Declaration of a command.

    Attributes:
        verb: The verb this spec handles
        handler: Function producing the reply body
        usage: Usage line shown in help (without prefix)
        description: Help description
        admin_only: Whether the whole verb requires admin
        denied_action: Completes "Only administrators can ..." when denied
        bypasses_enabled_gate: Whether the verb works in a disabled chat
        alias_of: Verb this one aliases (hidden from the main help list)
    """

    verb: Verb
    handler: Callable[[CommandContext], str]
    usage: str
    description: str
    admin_only: bool = False
    denied_action: str = "use this command"
    bypasses_enabled_gate: bool = False
    alias_of: Optional[Verb] = None


_SPECS = [
    CommandSpec(
        verb=Verb.HELP,
        handler=handlers.handle_help,
        usage="help",
        description="Show this help message",
    ),
    CommandSpec(
        verb=Verb.ENABLE,
        handler=handlers.handle_enable,
        usage="enable",
        description="Enable the bot for this chat",
        admin_only=True,
        denied_action="enable the bot",
        bypasses_enabled_gate=True,
    ),
    CommandSpec(
        verb=Verb.DISABLE,
        handler=handlers.handle_disable,
        usage="disable",
        description="Disable the bot for this chat",
        admin_only=True,
        denied_action="disable the bot",
        bypasses_enabled_gate=True,
    ),
    CommandSpec(
        verb=Verb.STATUS,
        handler=handlers.handle_status,
        usage="status",
        description="Get bot status",
    ),
    CommandSpec(
        verb=Verb.ID,
        handler=handlers.handle_id,
        usage="id",
        description="Get current chat and user IDs",
    ),
    CommandSpec(
        verb=Verb.TEMP,
        handler=handlers.handle_temp,
        usage="temp <i>[value]</i>",
        description="Set or get temperature",
        admin_only=True,
        denied_action="manage temperature settings",
    ),
    CommandSpec(
        verb=Verb.LANG,
        handler=handlers.handle_lang,
        usage="lang &lt;rm&gt; <i>[language]</i>",
        description="Set or get the transcription language",
        admin_only=True,
        denied_action="manage language settings",
    ),
    CommandSpec(
        verb=Verb.PROMPT,
        handler=handlers.handle_prompt,
        usage="prompt &lt;rm&gt; <i>[prompt]</i>",
        description=(
            "Set or get the transcription prompt. "
            "Must be in the same language as the audio."
        ),
        admin_only=True,
        denied_action="manage transcription prompts",
    ),
    CommandSpec(
        verb=Verb.PREFIX,
        handler=handlers.handle_prefix,
        usage="prefix <i>[newPrefix]</i>",
        description="Set or get command prefix",
    ),
    CommandSpec(
        verb=Verb.USER,
        handler=handlers.handle_user,
        usage="user &lt;add|rm|list&gt; <i>[userId]</i>",
        description="Manage whitelisted users",
    ),
    CommandSpec(
        verb=Verb.USERS,
        handler=handlers.handle_user,
        usage="users",
        description="Alias for 'user list'",
        alias_of=Verb.USER,
    ),
    CommandSpec(
        verb=Verb.ADMIN,
        handler=handlers.handle_admin,
        usage="admin &lt;add|rm|list&gt; <i>[userId]</i>",
        description="Manage admins",
        admin_only=True,
    ),
    CommandSpec(
        verb=Verb.ADMINS,
        handler=handlers.handle_admin,
        usage="admins",
        description="Alias for 'admin list'",
        admin_only=True,
        alias_of=Verb.ADMIN,
    ),
]

COMMAND_REGISTRY: dict[Verb, CommandSpec] = {spec.verb: spec for spec in _SPECS}


def get_spec(name: str) -> Optional[CommandSpec]:
    """Find the spec for a verb name; None for unknown verbs."""
    verb = Verb.resolve(name)
    return COMMAND_REGISTRY.get(verb) if verb else None


def build_help(prefix: str) -> str:
    """Render the usage text for the active prefix."""
    lines = [messages.HELP_HEADER, ""]
    for spec in _SPECS:
        if spec.alias_of:
            continue
        description = spec.description
        if spec.admin_only:
            description += messages.ADMIN_ONLY_SUFFIX
        lines.append(messages.HELP_LINE.format(
            prefix=messages.escape(prefix), usage=spec.usage, description=description,
        ))
    lines.append("")
    lines.append(messages.render(messages.HELP_ALIASES, prefix=prefix))
    return "\n".join(lines)
