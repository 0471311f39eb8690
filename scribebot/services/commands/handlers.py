"""Command handlers.

Each handler takes a CommandContext and returns the reply body (without
the bot banner). Handlers may raise; the dispatcher converts failures
into an error reply.
"""

import math
from dataclasses import dataclass

from scribebot.lib import messages
from scribebot.lib.exceptions import ValidationError
from scribebot.lib.identity import is_username, normalize, strip_domain
from scribebot.models.message import InboundMessage
from scribebot.services.auth.service import AuthorizationService
from scribebot.services.commands.parser import Command
from scribebot.services.settings.facade import ChatSettingsFacade


@dataclass
class CommandContext:
    """Everything a handler needs to answer one command."""

    command: Command
    message: InboundMessage
    is_admin: bool
    prefix: str
    chat_enabled: bool
    settings: ChatSettingsFacade
    auth: AuthorizationService

    @property
    def chat_id(self) -> str:
        return self.message.chat_id

    @property
    def user_id(self) -> str:
        return self.message.acting_identity

    @property
    def args(self) -> list[str]:
        return self.command.args

    @property
    def subcommand(self) -> str | None:
        return self.args[0] if self.args else None


def access_denied(action: str) -> str:
    return messages.render(messages.ACCESS_DENIED, action=action)


def parse_temperature(value: str) -> float:
    """
    Parse a temperature argument.

    Raises:
        ValidationError: If not a finite number in [0.0, 1.0]
    """
    try:
        temperature = float(value)
    except ValueError:
        raise ValidationError(messages.TEMPERATURE_INVALID, field="temperature")

    if not math.isfinite(temperature) or temperature < 0.0 or temperature > 1.0:
        raise ValidationError(messages.TEMPERATURE_INVALID, field="temperature")

    return temperature


def parse_identifier(value: str) -> str:
    """
    Check a whitelist or admin target.

    Raises:
        ValidationError: If the value is an @username
    """
    if is_username(value):
        raise ValidationError(
            messages.render(messages.INVALID_IDENTIFIER, user_id=value), field="user_id",
        )
    return value


def _format_list(entries: list[str]) -> str:
    return "\n".join(entries)


# =============================================================================
# Handlers
# =============================================================================


def handle_help(ctx: CommandContext) -> str:
    from scribebot.services.commands.registry import build_help

    return build_help(ctx.prefix)


def handle_enable(ctx: CommandContext) -> str:
    ctx.settings.set_chat_enabled(ctx.chat_id, True)
    return messages.BOT_ENABLED


def handle_disable(ctx: CommandContext) -> str:
    ctx.settings.set_chat_enabled(ctx.chat_id, False)
    return messages.BOT_DISABLED


def handle_id(ctx: CommandContext) -> str:
    if ctx.message.is_group_chat:
        return messages.render(messages.ID_GROUP,
            chat_id=strip_domain(ctx.chat_id),
            user_id=strip_domain(ctx.user_id),
        )
    return messages.render(messages.ID_PRIVATE, chat_id=strip_domain(ctx.chat_id))


def handle_user(ctx: CommandContext) -> str:
    if ctx.command.name == "users" or ctx.subcommand == "list":
        return messages.render(messages.WHITELIST, entries=_format_list(ctx.auth.list_whitelist()))

    target = ctx.args[1] if len(ctx.args) > 1 and ctx.args[1] else ctx.user_id
    try:
        target = parse_identifier(target)
    except ValidationError as e:
        return e.message

    if ctx.subcommand == "add":
        if not ctx.is_admin:
            return access_denied("add users to the whitelist")
        ctx.auth.add_to_whitelist(target)
        return messages.render(messages.USER_ADDED, user_id=strip_domain(target))

    if ctx.subcommand == "rm":
        if not ctx.is_admin:
            return access_denied("remove users from the whitelist")
        ctx.auth.remove_from_whitelist(target)
        return messages.render(messages.USER_REMOVED, user_id=strip_domain(target))

    return messages.render(messages.INVALID_SUBCOMMAND, command="user")


def handle_temp(ctx: CommandContext) -> str:
    if not ctx.args:
        temperature = ctx.settings.get_temperature(ctx.chat_id)
        return messages.render(messages.TEMPERATURE_CURRENT, temperature=temperature)

    try:
        temperature = parse_temperature(ctx.args[0])
    except ValidationError as e:
        return e.message

    ctx.settings.set_temperature(ctx.chat_id, temperature)
    return messages.render(messages.TEMPERATURE_UPDATED, temperature=temperature)


def handle_lang(ctx: CommandContext) -> str:
    if not ctx.args:
        language = ctx.settings.get_language(ctx.chat_id) or messages.NOT_SET
        return messages.render(messages.LANGUAGE_CURRENT, language=language)

    if ctx.subcommand == "rm":
        if ctx.settings.clear_language(ctx.chat_id):
            return messages.LANGUAGE_REMOVED
        return messages.LANGUAGE_NOT_SET

    language = ctx.command.joined_args
    ctx.settings.set_language(ctx.chat_id, language)
    return messages.render(messages.LANGUAGE_UPDATED, language=language)


def handle_prompt(ctx: CommandContext) -> str:
    if not ctx.args:
        prompt = ctx.settings.get_transcription_prompt(ctx.chat_id) or messages.NOT_SET
        return messages.render(messages.PROMPT_CURRENT, prompt=prompt)

    if ctx.subcommand == "rm":
        if ctx.settings.clear_transcription_prompt(ctx.chat_id):
            return messages.PROMPT_REMOVED
        return messages.PROMPT_NOT_SET

    prompt = ctx.command.joined_args
    ctx.settings.set_transcription_prompt(ctx.chat_id, prompt)
    return messages.render(messages.PROMPT_UPDATED, prompt=prompt)


def handle_prefix(ctx: CommandContext) -> str:
    new_prefix = ctx.args[0] if ctx.args else ""
    if not new_prefix:
        return messages.render(messages.PREFIX_CURRENT, prefix=ctx.prefix)

    if not ctx.is_admin:
        return access_denied("change the command prefix")

    ctx.settings.set_command_prefix(new_prefix)
    return messages.render(messages.PREFIX_UPDATED, prefix=new_prefix)


def handle_admin(ctx: CommandContext) -> str:
    if ctx.command.name == "admins" or ctx.subcommand == "list":
        return messages.render(messages.ADMINS, entries=_format_list(ctx.auth.list_admins()))

    target = ctx.args[1] if len(ctx.args) > 1 else ""
    try:
        target = parse_identifier(target)
    except ValidationError as e:
        return e.message

    if ctx.subcommand == "add":
        if not target:
            return messages.render(messages.ADMIN_MISSING_ID, action="add as")
        ctx.auth.add_admin(target)
        return messages.render(messages.ADMIN_ADDED, user_id=strip_domain(target))

    if ctx.subcommand == "rm":
        if not target:
            return messages.render(messages.ADMIN_MISSING_ID, action="remove as")
        if normalize(target) == normalize(ctx.user_id):
            return messages.ADMIN_SELF_REMOVAL
        ctx.auth.remove_admin(target)
        return messages.render(messages.ADMIN_REMOVED, user_id=strip_domain(target))

    return messages.render(messages.INVALID_SUBCOMMAND, command="admin")


def handle_status(ctx: CommandContext) -> str:
    return messages.render(messages.STATUS,
        status="enabled" if ctx.chat_enabled else "disabled",
        temperature=ctx.settings.get_temperature(ctx.chat_id),
        language=ctx.settings.get_language(ctx.chat_id) or messages.NOT_SET,
        prompt=ctx.settings.get_transcription_prompt(ctx.chat_id) or messages.NOT_SET,
        prefix=ctx.settings.get_command_prefix(),
        chat_id=strip_domain(ctx.chat_id),
        user_id=strip_domain(ctx.user_id),
    )
