"""Command and flag descriptors with their server-side actions.

A ``CommandSpec`` pairs the wire descriptor (``CommandInfo``) with the
callable that runs it. Flags are tagged with an explicit ``FlagKind`` and
default, so help text and value parsing never inspect Python types at
runtime.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from remotecontrol.errors import CatalogError
from remotecontrol.types import CommandInfo, FlagInfo, FlagKind

_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}

_KIND_DEFAULTS: dict[FlagKind, Any] = {
    FlagKind.STRING: "",
    FlagKind.BOOL: False,
    FlagKind.INT: 0,
}

_KIND_TYPES: dict[FlagKind, type] = {
    FlagKind.STRING: str,
    FlagKind.BOOL: bool,
    FlagKind.INT: int,
}


@dataclass(frozen=True)
class FlagSpec:
    """One flag of a command."""

    name: str
    kind: FlagKind = FlagKind.STRING
    usage: str = ""
    default: Any = None
    required: bool = False

    def __post_init__(self) -> None:
        if self.default is None:
            object.__setattr__(self, "default", _KIND_DEFAULTS[self.kind])
        expected = _KIND_TYPES[self.kind]
        # bool is an int subclass; keep the kinds apart
        if type(self.default) is not expected:
            raise CatalogError(
                f"flag --{self.name}: default {self.default!r} is not a {self.kind.value}"
            )

    @property
    def default_text(self) -> str:
        if self.kind is FlagKind.BOOL:
            return "true" if self.default else "false"
        if self.kind is FlagKind.INT:
            return str(self.default) if self.default != 0 else ""
        return self.default

    def coerce(self, raw: str) -> Any:
        """Convert a raw token to this flag's kind.

        Raises:
            ValueError: when the token is not a valid value for the kind.
        """
        if self.kind is FlagKind.BOOL:
            word = raw.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            raise ValueError(f"invalid boolean value {raw!r} for flag -{self.name}")
        if self.kind is FlagKind.INT:
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"invalid value {raw!r} for flag -{self.name}") from None
        return raw

    def to_info(self) -> FlagInfo:
        return FlagInfo(
            name=self.name,
            usage=self.usage,
            default_text=self.default_text,
            required=self.required,
            kind=self.kind,
        )


@dataclass(frozen=True)
class Invocation:
    """Everything an action receives for one run."""

    node_type: str
    node_name: str
    args: tuple[str, ...] = ()
    flags: Mapping[str, Any] = field(default_factory=dict)

    def arg(self, index: int, default: str | None = None) -> str | None:
        if index < len(self.args):
            return self.args[index]
        return default

    def flag(self, name: str) -> Any:
        return self.flags[name]


Action = Callable[[Invocation], str]


@dataclass(frozen=True)
class CommandSpec:
    """A command descriptor paired with its action."""

    name: str
    usage: str
    action: Action
    description: str = ""
    args_usage: str = ""
    flags: tuple[FlagSpec, ...] = ()

    def __post_init__(self) -> None:
        names = [f.name for f in self.flags]
        if len(names) != len(set(names)):
            raise CatalogError(f"command {self.name}: duplicate flag names")

    def flag(self, name: str) -> FlagSpec | None:
        for spec in self.flags:
            if spec.name == name:
                return spec
        return None

    @property
    def bool_flags(self) -> frozenset[str]:
        return frozenset(f.name for f in self.flags if f.kind is FlagKind.BOOL)

    def defaults(self) -> dict[str, Any]:
        return {f.name: f.default for f in self.flags}

    def to_info(self) -> CommandInfo:
        return CommandInfo(
            name=self.name,
            usage=self.usage,
            description=self.description,
            args_usage=self.args_usage,
            flags=[f.to_info() for f in self.flags],
        )


def render_help(info: CommandInfo) -> str:
    """Generate help text for a command descriptor.

    Pure function of ``info``; never touches the command's action.
    """
    lines = [f"{info.name} {info.args_usage or '[command [command options]]'}", ""]

    if info.description:
        lines += [info.description, ""]

    if info.flags:
        lines.append("Options:")
        for flag in info.flags:
            line = f"   --{flag.name}:  {flag.usage}"
            if flag.default_text:
                line += f" (default: {flag.default_text})"
            lines.append(line)

    return "\n".join(lines) + "\n"
