"""scribebot daemon entry point.

Connects to Telegram, answers prefixed commands from whitelisted
users and transcribes voice/audio messages in enabled chats.

Usage:
    scribebot
    scribebot --verbose
"""

import argparse
import asyncio
import logging
import signal
import sys
from typing import Awaitable, Callable, Optional

from telegram.error import InvalidToken, NetworkError

from scribebot import __version__
from scribebot.lib.config import (
    BotConfig,
    TranscriptionConfig,
    get_bot_config,
    get_store_config,
    get_telegram_config,
    get_transcription_config,
)
from scribebot.lib.exceptions import ConfigError, ScribeBotError
from scribebot.services.auth import AuthorizationService
from scribebot.services.commands import CommandDispatcher
from scribebot.services.persistence import SettingsStore, create_settings_store
from scribebot.services.router import MessageRouter
from scribebot.services.settings import ChatSettingsFacade
from scribebot.services.telegram import TelegramBotAdapter
from scribebot.services.transcription import (
    TranscriptionProvider,
    TranscriptionWorkflow,
    get_provider,
)
from scribebot.services.transport import ChatTransport

logger = logging.getLogger(__name__)

Session = Callable[[], Awaitable[None]]


class ReconnectExhaustedError(ScribeBotError):
    """The bot session kept failing and the restart budget ran out."""

    def __init__(self, attempts: int, last_error: BaseException):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Giving up after {attempts} failed session(s): {last_error}")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the daemon."""
    level = logging.DEBUG if verbose else logging.INFO
    format_str = "[%(asctime)s] %(levelname)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs every polling request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def validate_configuration() -> bool:
    """Validate all required configuration is present."""
    telegram_config = get_telegram_config()
    transcription_config = get_transcription_config()
    store_config = get_store_config()

    errors = []

    if not telegram_config.is_configured():
        errors.append("Telegram not configured. Set TELEGRAM_BOT_TOKEN in .env file.")

    try:
        transcription_config.validate_provider_config()
    except ConfigError as e:
        errors.append(e.message)

    if errors:
        for error in errors:
            logger.error(error)
        return False

    logger.info(
        f"Transcription: {transcription_config.provider} "
        f"(model {transcription_config.model_name})"
    )
    logger.info(f"Settings: {store_config.path.absolute()}")

    return True


def create_provider(config: TranscriptionConfig) -> TranscriptionProvider:
    """Instantiate and load the configured transcription provider."""
    if config.provider == "whisper":
        provider = get_provider("whisper", config=config)
    else:
        provider = get_provider(
            config.provider,
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    logger.info(f"Loading transcription provider '{provider.provider_name}'...")
    provider.load()
    return provider


def build_router(
    transport: ChatTransport,
    store: SettingsStore,
    provider: TranscriptionProvider,
    bot_config: BotConfig,
    model: str,
) -> MessageRouter:
    """
    Wire the core services around a transport.

    Seeds the admins listed in ADMIN_USER_IDS before returning.
    """
    auth = AuthorizationService(store, trust_self_messages=bot_config.trust_self_messages)
    if bot_config.admin_ids:
        seeded = auth.ensure_admins(bot_config.admin_ids)
        logger.info(f"Admins from configuration: {', '.join(seeded)}")

    settings = ChatSettingsFacade(store, default_prefix=bot_config.cmd_prefix)
    dispatcher = CommandDispatcher(settings, auth, bot_config.bot_prefix)
    workflow = TranscriptionWorkflow(transport, settings, provider, model)

    return MessageRouter(
        transport=transport,
        auth=auth,
        settings=settings,
        dispatcher=dispatcher,
        workflow=workflow,
        bot_prefix=bot_config.bot_prefix,
        reactions=bot_config.reactions,
    )


async def run_with_reconnect(
    session: Session,
    stop_event: asyncio.Event,
    max_attempts: int = 10,
    initial_delay: float = 2.0,
    max_delay: float = 60.0,
) -> None:
    """
    Run a bot session, restarting it after network failures.

    The delay doubles after every consecutive failure up to max_delay.
    An invalid token is never retried.

    Args:
        session: Coroutine factory running one session until it ends
        stop_event: Set to stop the loop (also interrupts the backoff wait)
        max_attempts: Consecutive failures tolerated (0 = unbounded)
        initial_delay: Delay before the first restart in seconds
        max_delay: Upper bound for the delay in seconds

    Raises:
        InvalidToken: If Telegram rejects the bot token
        ReconnectExhaustedError: If max_attempts consecutive sessions failed
    """
    failures = 0
    delay = initial_delay

    while not stop_event.is_set():
        try:
            await session()
            return
        except InvalidToken:
            logger.error("Telegram rejected the bot token; not reconnecting")
            raise
        except NetworkError as e:
            failures += 1
            if max_attempts and failures >= max_attempts:
                raise ReconnectExhaustedError(failures, e) from e

            logger.warning(
                f"Bot session failed ({e}); reconnecting in {delay:.1f}s "
                f"(attempt {failures}{f'/{max_attempts}' if max_attempts else ''})"
            )

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass

            delay = min(delay * 2, max_delay)


async def run_session(bot: TelegramBotAdapter, stop_event: asyncio.Event) -> None:
    """Start the bot, serve until stop_event is set, then stop it."""
    try:
        await bot.start()
        logger.info("Daemon running. Press Ctrl+C to stop.")
        await stop_event.wait()
    finally:
        try:
            await bot.stop()
        except Exception as e:
            logger.warning(f"Error while stopping bot: {e}")


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops; Ctrl+C still raises KeyboardInterrupt
            logger.debug(f"Signal handler for {sig.name} not supported")


async def run_daemon(stop_event: Optional[asyncio.Event] = None) -> None:
    """Main daemon loop."""
    logger.info("Starting scribebot daemon...")

    bot_config = get_bot_config()
    telegram_config = get_telegram_config()
    transcription_config = get_transcription_config()
    store_config = get_store_config()

    stop_event = stop_event or asyncio.Event()
    _install_signal_handlers(stop_event)

    store = create_settings_store(store_config.path)
    provider = create_provider(transcription_config)

    try:
        bot = TelegramBotAdapter(telegram_config)
        router = build_router(
            bot, store, provider, bot_config, transcription_config.model_name
        )
        bot.on_messages(router.handle_batch)

        await run_with_reconnect(
            lambda: run_session(bot, stop_event),
            stop_event,
            max_attempts=telegram_config.reconnect_max_attempts,
            initial_delay=telegram_config.reconnect_initial_delay,
            max_delay=telegram_config.reconnect_max_delay,
        )
    finally:
        await provider.close()
        store.close()
        logger.info("Daemon stopped.")


def main() -> int:
    """Entry point for the daemon."""
    parser = argparse.ArgumentParser(
        prog="scribebot",
        description="Telegram transcription bot daemon",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    logger.info("=" * 60)
    logger.info(f"scribebot {__version__}")
    logger.info("=" * 60)

    if not validate_configuration():
        logger.error("Configuration validation failed. Exiting.")
        return 1

    try:
        asyncio.run(run_daemon())
    except KeyboardInterrupt:
        logger.info("Daemon stopped by user.")
    except InvalidToken:
        return 1
    except ScribeBotError as e:
        logger.error(e.message)
        return 1
    except Exception as e:
        logger.exception(f"Daemon failed with error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
