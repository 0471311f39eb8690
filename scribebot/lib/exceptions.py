"""Exception hierarchy for the bot.

All custom exceptions inherit from ScribeBotError to enable
selective catching at different levels.

Hierarchy:
    ScribeBotError (base)
    ├── ConfigError - Configuration issues (missing env vars)
    ├── ValidationError - User input validation failures
    ├── PersistenceError - Settings store read/write failures
    │   └── RecordNotFoundError - Update/delete of a missing record
    └── TranscriptionError - Audio download or provider failures
"""

import json


class ScribeBotError(Exception):
    """
    Base exception for all bot errors.

    Catching this will catch all custom exceptions from this module.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(ScribeBotError):
    """
    Configuration error.

    Raised when required configuration is missing or invalid.
    Examples: missing API key, missing bot token, unknown provider.

    CLI Exit Code: 2
    """

    pass


class ValidationError(ScribeBotError):
    """
    User input validation error.

    Raised when a command argument fails validation rules.
    Examples: non-numeric temperature, temperature out of range.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class PersistenceError(ScribeBotError):
    """
    Settings store read/write error.

    Raised when persistence operations fail.
    Examples: unreadable store file, permission denied, disk full.

    CLI Exit Code: 5

    Attributes:
        path: Path that caused the error
        operation: Operation that failed (read, write, delete)
    """

    def __init__(self, message: str, path: str | None = None, operation: str | None = None):
        self.path = path
        self.operation = operation
        super().__init__(message)


class RecordNotFoundError(PersistenceError):
    """
    Raised when an update or delete targets a record that does not exist.

    Attributes:
        record: Record type (whitelist, chat_setting, global_setting)
        key: Key of the missing record
    """

    def __init__(self, record: str, key: str, operation: str | None = None):
        self.record = record
        self.key = key
        super().__init__(f"No {record} record found for '{key}'", operation=operation)


class TranscriptionError(ScribeBotError):
    """
    Transcription workflow failure.

    Raised when the audio cannot be downloaded or the provider fails.
    Examples: network error, HTTP error, timeout, model not loaded.

    Attributes:
        provider: Name of the provider that failed
        original_error: Original exception if wrapping
    """

    def __init__(
        self, message: str, provider: str = "unknown", original_error: Exception | None = None
    ):
        self.provider = provider
        self.original_error = original_error
        super().__init__(f"[{provider}] {message}")


def serialize_error(error: BaseException) -> str:
    """Render an exception as a JSON diagnostic payload for chat replies."""
    payload = {
        "type": type(error).__name__,
        "message": getattr(error, "message", None) or str(error),
    }
    for attr in ("provider", "record", "key", "operation"):
        value = getattr(error, attr, None)
        if value:
            payload[attr] = value
    return json.dumps(payload, ensure_ascii=False)
