"""Command-line token classification for node commands.

Tokens that start with ``-`` or ``--`` are flags. ``--name=value`` carries
its own value; otherwise a non-bool flag takes the following token when it
does not look like a flag. Declared bool flags never consume a token. A
bare ``--`` ends flag parsing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from remotecontrol.catalog import CommandSpec
from remotecontrol.errors import ExecutionError
from remotecontrol.types import CommandRequest, FlagKind

HELP_FLAGS = frozenset({"-h", "--help"})
HELP_FLAG_NAMES = frozenset({"h", "help"})


def is_flag(token: str) -> bool:
    return len(token) > 1 and token.startswith("-") and token != "--"


def wants_help(tokens: Sequence[str]) -> bool:
    return any(token in HELP_FLAGS for token in tokens)


def flags_want_help(flags: Mapping[str, Any]) -> bool:
    """Structured flags are keyed by bare name, e.g. ``h`` or ``help``."""
    return any(name.lstrip("-") in HELP_FLAG_NAMES for name in flags)


def command_tokens(req: CommandRequest) -> list[str]:
    """Command name followed by its argument tokens.

    ``rawCommand`` wins when present; otherwise ``commandPath`` plus
    ``args``.
    """
    if req.raw_command.strip():
        return req.raw_command.split()
    if not req.command_path:
        return []
    return [req.command_path, *req.args]


def _split_flag(token: str) -> tuple[str, str | None]:
    name = token.lstrip("-")
    if "=" in name:
        name, value = name.split("=", 1)
        return name, value
    return name, None


def parse_arguments(
    spec: CommandSpec,
    tokens: Sequence[str],
    extra_flags: Mapping[str, str] | None = None,
) -> tuple[tuple[str, ...], dict[str, Any]]:
    """Split ``tokens`` into positional args and typed flag values.

    ``extra_flags`` are structured flags sent alongside the tokens; tokens
    override them. Every flag ends up with a value, declared defaults fill
    the rest.

    Raises:
        ExecutionError: unknown flag, missing value or bad value.
    """
    raw: dict[str, str] = dict(extra_flags or {})
    args: list[str] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if token == "--":
            args.extend(tokens[i:])
            break
        if not is_flag(token):
            args.append(token)
            continue

        name, value = _split_flag(token)
        flag = spec.flag(name)
        if flag is None:
            raise ExecutionError(f"flag provided but not defined: -{name}")
        if value is None:
            if flag.kind is FlagKind.BOOL:
                value = "true"
            elif i < len(tokens) and not is_flag(tokens[i]):
                value = tokens[i]
                i += 1
            else:
                raise ExecutionError(f"flag needs an argument: -{name}")
        raw[name] = value

    values = spec.defaults()
    for name, value in raw.items():
        flag = spec.flag(name)
        if flag is None:
            raise ExecutionError(f"flag provided but not defined: -{name}")
        try:
            values[name] = flag.coerce(value)
        except ValueError as e:
            raise ExecutionError(str(e)) from e

    return tuple(args), values
