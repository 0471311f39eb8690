"""Externalized message templates for bot replies.

Every reply is the bot banner, a blank line, then one of the bodies
below. Bodies are Telegram HTML; fill placeholders with render(), which
escapes the values.
"""

import html

# =============================================================================
# Gate Messages
# =============================================================================

ACCESS_DENIED = "⛔ <b>Access denied:</b> Only administrators can {action}."

BOT_INACTIVE = (
    "🔒 <b>Bot inactive:</b> The bot is currently disabled for this chat. "
    "An administrator can enable it using <code>{prefix}enable</code>."
)

BOT_ENABLED = "✅ <b>Bot activated:</b> The bot has been successfully enabled for this chat."

BOT_DISABLED = "🛑 <b>Bot deactivated:</b> The bot has been disabled for this chat."

# =============================================================================
# Identifier Messages
# =============================================================================

ID_GROUP = """🆔 <b>Identifier information:</b>
- Chat ID: <code>{chat_id}</code>
- User ID: <code>{user_id}</code>"""

ID_PRIVATE = """🆔 <b>Identifier information:</b>
- Chat/User ID: <code>{chat_id}</code>"""

# =============================================================================
# Whitelist / Admin Messages
# =============================================================================

WHITELIST = "👥 <b>Whitelist:</b>\n{entries}"

USER_ADDED = "✅ <b>User whitelisted:</b> {user_id} has been added to the whitelist."

USER_REMOVED = "🗑️ <b>User removed:</b> {user_id} has been removed from the whitelist."

ADMINS = "👑 <b>Administrators:</b>\n{entries}"

ADMIN_ADDED = "👑 <b>Administrator added:</b> {user_id} is now an administrator."

ADMIN_REMOVED = "🔽 <b>Administrator removed:</b> {user_id} is no longer an administrator."

ADMIN_MISSING_ID = (
    "❌ <b>Missing information:</b> Please provide a user ID to {action} an administrator."
)

ADMIN_SELF_REMOVAL = "❌ <b>Action denied:</b> You cannot remove yourself as an administrator."

INVALID_SUBCOMMAND = (
    "❓ <b>Invalid subcommand:</b> Please use <code>add</code>, <code>rm</code>, "
    "or <code>list</code> with the {command} command."
)

INVALID_IDENTIFIER = (
    "❌ <b>Invalid identifier:</b> {user_id} is a username. "
    "Use the numeric ID shown by the <code>id</code> command."
)

# =============================================================================
# Chat Setting Messages
# =============================================================================

TEMPERATURE_INVALID = "❌ <b>Invalid input:</b> Temperature must be a number between 0.0 and 1.0."

TEMPERATURE_UPDATED = "🌡️ <b>Temperature updated:</b> Set to {temperature} for this chat."

TEMPERATURE_CURRENT = "🌡️ <b>Current temperature:</b> {temperature} for this chat."

LANGUAGE_UPDATED = '🌐 <b>Language updated:</b> The transcription language has been set to "{language}".'

LANGUAGE_CURRENT = '🌐 <b>Current language:</b> The transcription language is set to "{language}".'

LANGUAGE_REMOVED = "🗑️ <b>Language removed:</b> The transcription language has been cleared for this chat."

LANGUAGE_NOT_SET = "ℹ️ <b>Nothing to remove:</b> No transcription language is set for this chat."

PROMPT_UPDATED = '📝 <b>Prompt updated:</b> The transcription prompt has been set to "{prompt}".'

PROMPT_CURRENT = '📝 <b>Current prompt:</b> The transcription prompt is set to "{prompt}".'

PROMPT_REMOVED = "🗑️ <b>Prompt removed:</b> The transcription prompt has been cleared for this chat."

PROMPT_NOT_SET = "ℹ️ <b>Nothing to remove:</b> No transcription prompt is set for this chat."

PREFIX_UPDATED = '✏️ <b>Prefix updated:</b> Command prefix set to "{prefix}".'

PREFIX_CURRENT = '🔤 <b>Current prefix:</b> The command prefix is "{prefix}".'

NOT_SET = "Not set"

STATUS = """📊 <b>Bot status:</b>

- Chat: <b>{status}</b>
- Temperature: <b>{temperature}</b>
- Language: <b>{language}</b>
- Prompt: <b>{prompt}</b>
- Command Prefix: <b>{prefix}</b>
- Chat ID: <code>{chat_id}</code>
- User ID: <code>{user_id}</code>"""

# =============================================================================
# Help
# =============================================================================

HELP_HEADER = "<b>Available commands:</b>"

# usage and description are trusted HTML from the command registry
HELP_LINE = "- <b>{prefix}{usage}</b> - {description}"

HELP_ALIASES = """<b>Aliases:</b>

- <b>{prefix}users</b> - Alias for '{prefix}user list'
- <b>{prefix}admins</b> - Alias for '{prefix}admin list'"""

ADMIN_ONLY_SUFFIX = " <i>(Admin only)</i>"

# =============================================================================
# Error Messages
# =============================================================================

UNKNOWN_COMMAND = (
    "❓ <b>Unknown command:</b> <code>{command}</code>. "
    "Type {prefix}help for available commands."
)

COMMAND_ERROR = (
    "🚫 <b>Error occurred:</b> An unexpected error happened while processing the command.\n"
    "Details:\n\n<code>{details}</code>"
)

COMMAND_PROCESSING_ERROR = (
    "🚫 <b>Command processing error:</b> An unexpected issue occurred while handling your request.\n"
    "Details:\n\n<code>{details}</code>"
)

TRANSCRIPTION_ERROR = (
    "🚫 <b>Transcription error:</b> An issue occurred while processing the audio message.\n"
    "Details:\n\n<code>{details}</code>"
)


def escape(value) -> str:
    """Escape a value for Telegram HTML (quotes are left alone)."""
    return html.escape(str(value), quote=False)


def render(template: str, **values) -> str:
    """Fill a template, escaping every value."""
    return template.format(**{name: escape(value) for name, value in values.items()})


def with_banner(bot_prefix: str, body: str) -> str:
    """Prepend the bot banner to a reply body."""
    return f"{bot_prefix}\n\n{body}"
