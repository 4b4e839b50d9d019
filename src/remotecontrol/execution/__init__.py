"""Command execution engine."""

from remotecontrol.execution.executor import NO_HELP, CommandExecutor
from remotecontrol.execution.parser import (
    command_tokens,
    is_flag,
    parse_arguments,
    wants_help,
)

__all__ = [
    "CommandExecutor",
    "NO_HELP",
    "command_tokens",
    "is_flag",
    "parse_arguments",
    "wants_help",
]
