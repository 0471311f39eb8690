"""Voice transcription chat bot with per-chat settings and a whitelist."""

__version__ = "0.1.0"
