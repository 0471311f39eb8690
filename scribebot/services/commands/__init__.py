"""Command parsing and dispatch package."""

from scribebot.services.commands.parser import Command, parse_command
from scribebot.services.commands.registry import COMMAND_REGISTRY, CommandSpec, Verb, build_help
from scribebot.services.commands.dispatcher import CommandDispatcher

__all__ = [
    "Command",
    "parse_command",
    "COMMAND_REGISTRY",
    "CommandSpec",
    "Verb",
    "build_help",
    "CommandDispatcher",
]
