"""Authorization-gated command dispatcher."""

import logging
from typing import Optional

from scribebot.lib import messages
from scribebot.lib.exceptions import serialize_error
from scribebot.models.message import InboundMessage
from scribebot.services.auth.service import AuthorizationService
from scribebot.services.commands.handlers import CommandContext, access_denied
from scribebot.services.commands.parser import parse_command
from scribebot.services.commands.registry import get_spec
from scribebot.services.settings.facade import ChatSettingsFacade

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Parses prefixed text and routes it to a command handler.

    Gate order:
        1. enable/disable run regardless of the chat-enabled flag (admin only)
        2. any other command in a disabled chat gets the "inactive" reply
        3. unknown verbs get the "unknown command" reply
        4. admin-only verbs are denied to non-admins

    Never sends messages: the reply text is returned to the caller.
    No exception escapes dispatch(); failures become an error reply
    carrying a JSON diagnostic.
    """

    def __init__(
        self,
        settings: ChatSettingsFacade,
        auth: AuthorizationService,
        bot_prefix: str,
    ):
        self.settings = settings
        self.auth = auth
        self.bot_prefix = bot_prefix

    def _reply(self, body: str) -> str:
        return messages.with_banner(self.bot_prefix, body)

    def dispatch(self, raw_text: str, message: InboundMessage, is_admin: bool) -> Optional[str]:
        """
        Handle one command message.

        Args:
            raw_text: Message text, expected to start with the active prefix
            message: The inbound message (chat and sender identity)
            is_admin: Whether the sender is an admin

        Returns:
            Reply text, or None when the text is not a command
        """
        command_token = raw_text.split(" ")[0] if raw_text else ""
        try:
            prefix = self.settings.get_command_prefix()
            command = parse_command(raw_text, prefix)
            if command is None:
                return None

            logger.debug(f"Command {command.token!r} from {message.acting_identity}")

            spec = get_spec(command.name)
            chat_enabled = self.settings.is_chat_enabled(message.chat_id)

            if spec is None or not spec.bypasses_enabled_gate:
                if not chat_enabled:
                    return self._reply(messages.render(messages.BOT_INACTIVE, prefix=prefix))

            if spec is None:
                logger.info(f"Unknown command: {command.token}")
                return self._reply(messages.render(messages.UNKNOWN_COMMAND,
                    command=command.token, prefix=prefix,
                ))

            if spec.admin_only and not is_admin:
                logger.info(f"Denied {command.token} to non-admin {message.acting_identity}")
                return self._reply(access_denied(spec.denied_action))

            context = CommandContext(
                command=command,
                message=message,
                is_admin=is_admin,
                prefix=prefix,
                chat_enabled=chat_enabled,
                settings=self.settings,
                auth=self.auth,
            )
            return self._reply(spec.handler(context))

        except Exception as e:
            logger.exception(f"Error handling command {command_token}: {e}")
            return self._reply(messages.render(messages.COMMAND_ERROR, details=serialize_error(e)))
