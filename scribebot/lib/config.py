"""Configuration management via environment variables and pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class BotConfig(BaseSettings):
    """Configuration for bot replies, reactions and the initial admin roster."""

    bot_prefix: str = Field(
        default="🤖 <b>[BOT]</b>",
        alias="BOT_PREFIX",
        description="Banner prepended to every bot reply",
    )

    cmd_prefix: str = Field(
        default=".",
        alias="CMD_PREFIX",
        description="Default command prefix when none is stored",
    )

    working_reaction: str = Field(
        default="✍",
        alias="WORKING_REACTION",
        description="Reaction set while an audio message is being transcribed",
    )

    error_reaction: str = Field(
        default="👎",
        alias="ERROR_REACTION",
        description="Reaction set when transcription fails",
    )

    done_reaction: str = Field(
        default="👌",
        alias="DONE_REACTION",
        description="Reaction set when the transcript has been delivered",
    )

    admin_user_ids: str = Field(
        default="",
        alias="ADMIN_USER_IDS",
        description="Comma-separated identifiers granted admin at startup",
    )

    # Known limitation: treats messages authored by the bot account as admin.
    trust_self_messages: bool = Field(
        default=False,
        alias="TRUST_SELF_MESSAGES",
        description="Treat messages sent from the bot's own account as admin",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def admin_ids(self) -> list[str]:
        """Get the initial admin identifiers as a list."""
        return [item.strip() for item in self.admin_user_ids.split(",") if item.strip()]

    @property
    def reactions(self) -> dict[str, str]:
        """Reaction emoji keyed by workflow state."""
        return {
            "working": self.working_reaction,
            "error": self.error_reaction,
            "done": self.done_reaction,
        }


class TelegramConfig(BaseSettings):
    """Configuration for the Telegram transport."""

    bot_token: str = Field(
        default="",
        alias="TELEGRAM_BOT_TOKEN",
        description="Telegram bot token from @BotFather",
    )

    download_timeout: int = Field(
        default=60,
        alias="TELEGRAM_DOWNLOAD_TIMEOUT",
        description="Timeout for audio file downloads in seconds",
    )

    reconnect_max_attempts: int = Field(
        default=10,
        alias="RECONNECT_MAX_ATTEMPTS",
        description="Consecutive session restarts before giving up (0 = unbounded)",
    )

    reconnect_initial_delay: float = Field(
        default=2.0,
        alias="RECONNECT_INITIAL_DELAY",
        description="Delay before the first restart in seconds",
    )

    reconnect_max_delay: float = Field(
        default=60.0,
        alias="RECONNECT_MAX_DELAY",
        description="Upper bound for the restart backoff in seconds",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def is_configured(self) -> bool:
        """Check if Telegram is properly configured."""
        return bool(self.bot_token)


class TranscriptionConfig(BaseSettings):
    """Configuration for the speech-to-text provider."""

    provider: str = Field(
        default="groq",
        alias="TRANSCRIPTION_PROVIDER",
        description="Transcription provider: groq (HTTP API) or whisper (local model)",
    )

    api_key: str | None = Field(
        default=None,
        alias="GROQ_API_KEY",
        description="API key for the HTTP transcription provider",
    )

    base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        alias="TRANSCRIPTION_BASE_URL",
        description="Base URL of an OpenAI-compatible transcription API",
    )

    model_name: str = Field(
        default="whisper-large-v3",
        alias="TRANSCRIPTION_MODEL",
        description="Model name sent to the provider (or local Whisper model)",
    )

    timeout: int = Field(
        default=120,
        alias="TRANSCRIPTION_TIMEOUT",
        description="Request timeout in seconds",
    )

    device: str = Field(
        default="cpu",
        alias="WHISPER_DEVICE",
        description="Device for local Whisper inference: cuda or cpu",
    )

    fp16: bool = Field(
        default=False,
        alias="WHISPER_FP16",
        description="Use FP16 precision for local Whisper (GPU only)",
    )

    cache_dir: str | None = Field(
        default=None,
        alias="WHISPER_CACHE_DIR",
        description="Directory for local Whisper model cache",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def validate_provider_config(self) -> None:
        """
        Validate that the selected provider has required configuration.

        Raises:
            ConfigError: If required configuration is missing
        """
        from scribebot.lib.exceptions import ConfigError

        if self.provider == "whisper":
            return  # Local model needs no credential

        if self.provider != "groq":
            raise ConfigError(
                f"Unknown transcription provider '{self.provider}'. "
                "Available: groq, whisper"
            )

        if not self.api_key:
            raise ConfigError(
                "Missing API key for provider 'groq'. "
                "Set the GROQ_API_KEY environment variable."
            )


class StoreConfig(BaseSettings):
    """Configuration for the settings store."""

    settings_path: str = Field(
        default="./data/settings.json",
        alias="SETTINGS_PATH",
        description="JSON file holding whitelist, chat and global settings",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def path(self) -> Path:
        """Get the settings file as Path."""
        return Path(self.settings_path)


# Config instances (lazy loaded)
_bot_config: BotConfig | None = None
_telegram_config: TelegramConfig | None = None
_transcription_config: TranscriptionConfig | None = None
_store_config: StoreConfig | None = None


def get_bot_config() -> BotConfig:
    """Get the bot configuration instance."""
    global _bot_config
    if _bot_config is None:
        _bot_config = BotConfig()
    return _bot_config


def get_telegram_config() -> TelegramConfig:
    """Get the Telegram configuration instance."""
    global _telegram_config
    if _telegram_config is None:
        _telegram_config = TelegramConfig()
    return _telegram_config


def get_transcription_config() -> TranscriptionConfig:
    """Get the transcription configuration instance."""
    global _transcription_config
    if _transcription_config is None:
        _transcription_config = TranscriptionConfig()
    return _transcription_config


def get_store_config() -> StoreConfig:
    """Get the settings store configuration instance."""
    global _store_config
    if _store_config is None:
        _store_config = StoreConfig()
    return _store_config


def reset_all_configs() -> None:
    """Reset all configuration instances (useful for testing)."""
    global _bot_config, _telegram_config, _transcription_config, _store_config
    _bot_config = None
    _telegram_config = None
    _transcription_config = None
    _store_config = None
