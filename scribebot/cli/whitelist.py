"""Whitelist administration CLI.

Edits the settings store directly, out of band from the running bot.
The daemon re-reads the store on every message, so changes apply
immediately.

Usage:
    scribebot-whitelist add 123456789
    scribebot-whitelist remove 123456789@user.telegram
    scribebot-whitelist list
    scribebot-whitelist addadmin 123456789
    scribebot-whitelist removeadmin 123456789
"""

import argparse
import sys
from typing import Optional, Sequence

import pydantic

from scribebot import __version__
from scribebot.lib.config import get_store_config
from scribebot.lib.exceptions import ConfigError, PersistenceError, serialize_error
from scribebot.lib.identity import is_username
from scribebot.services.auth import AuthorizationService
from scribebot.services.persistence import create_settings_store


# Exit codes per CLI contract
EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_PERSISTENCE_ERROR = 5

COMMANDS_WITH_ID = ("add", "remove", "addadmin", "removeadmin")


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE_ERROR, f"{self.prog}: error: {message}\n")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = _Parser(
        prog="scribebot-whitelist",
        description="Manage the users allowed to talk to the bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  add <id>          Whitelist a user or chat
  remove <id>       Remove a whitelist entry
  list              Show whitelisted identifiers
  addadmin <id>     Whitelist an identifier with admin rights
  removeadmin <id>  Revoke admin rights (entry stays whitelisted)
  help              Show this message

Bare numeric ids are qualified as <id>@user.telegram.
        """,
    )

    parser.add_argument(
        "command",
        choices=[*COMMANDS_WITH_ID, "list", "help"],
        help="Operation to perform",
    )

    parser.add_argument(
        "user_id",
        nargs="?",
        default=None,
        help="Identifier for add/remove/addadmin/removeadmin",
    )

    parser.add_argument(
        "-s", "--settings",
        type=str,
        default=None,
        help="Settings file (default: SETTINGS_PATH or ./data/settings.json)",
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """
    Execute one whitelist command.

    Args:
        args: Parsed command line arguments
        parser: Parser, used to print help

    Returns:
        Exit code
    """
    if args.command == "help":
        parser.print_help()
        return EXIT_SUCCESS

    if args.command in COMMANDS_WITH_ID and not args.user_id:
        print(f"Error: An identifier is required for the {args.command} command", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if args.command in COMMANDS_WITH_ID and is_username(args.user_id):
        print(f"Error: {args.user_id} is a username; use the numeric Telegram ID", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        path = args.settings or get_store_config().settings_path
    except pydantic.ValidationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    store = create_settings_store(path)
    auth = AuthorizationService(store)

    try:
        if args.command == "add":
            entry = auth.add_to_whitelist(args.user_id)
            print(f"Added {entry.user_id} to whitelist.")
        elif args.command == "remove":
            auth.remove_from_whitelist(args.user_id)
            print(f"Removed {args.user_id} from whitelist.")
        elif args.command == "addadmin":
            entry = auth.add_admin(args.user_id)
            print(f"Granted admin to {entry.user_id}.")
        elif args.command == "removeadmin":
            entry = auth.remove_admin(args.user_id)
            print(f"Revoked admin from {entry.user_id}.")
        else:
            admins = set(auth.list_admins())
            print("Whitelisted identifiers:")
            for user_id in auth.list_whitelist():
                suffix = " (admin)" if user_id in admins else ""
                print(f"{user_id}{suffix}")
        return EXIT_SUCCESS

    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    except PersistenceError as e:
        print(f"Error: {serialize_error(e)}", file=sys.stderr)
        return EXIT_PERSISTENCE_ERROR

    finally:
        store.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    return run(args, parser)


if __name__ == "__main__":
    sys.exit(main())
