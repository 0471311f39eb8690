"""Identifier normalization.

Identifiers come in two forms: bare ("12345") and qualified
("12345@user.telegram"). Everything persisted is qualified.
"""

DOMAIN_SEPARATOR = "@"

# Canonical domain for personal accounts (and one-to-one chats)
USER_DOMAIN = "user.telegram"

# Domain for group chats
GROUP_DOMAIN = "group.telegram"


def normalize(identifier: str) -> str:
    """
    Return the qualified form of an identifier.

    Identifiers already containing the domain separator are returned
    unchanged; bare identifiers get the personal-account domain.
    Idempotent: normalize(normalize(x)) == normalize(x).
    """
    identifier = str(identifier).strip()
    if DOMAIN_SEPARATOR in identifier:
        return identifier
    return f"{identifier}{DOMAIN_SEPARATOR}{USER_DOMAIN}"


def strip_domain(identifier: str) -> str:
    """Return the bare part of an identifier, for display."""
    return str(identifier).split(DOMAIN_SEPARATOR)[0]


def qualify_chat(raw_id: int | str, is_group: bool) -> str:
    """Build the qualified identifier of a chat from a transport id."""
    domain = GROUP_DOMAIN if is_group else USER_DOMAIN
    return f"{raw_id}{DOMAIN_SEPARATOR}{domain}"


def is_group_identifier(identifier: str) -> bool:
    """Check whether a qualified identifier names a group chat."""
    return str(identifier).endswith(f"{DOMAIN_SEPARATOR}{GROUP_DOMAIN}")


def is_username(identifier: str) -> bool:
    """Check for a Telegram @username, which never matches a sender id."""
    return str(identifier).strip().startswith(DOMAIN_SEPARATOR)
