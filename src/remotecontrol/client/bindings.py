"""Declarative command bindings for the interactive client.

Each context state maps to a full set of bindings. Switching state means
computing the new set and diffing it against what is bound, rather than
tracking which commands were added by which navigation step.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from remotecontrol.types import ClientContext, CommandInfo, ContextType


class BindingKind(str, Enum):
    BUILTIN = "builtin"  # handled locally
    NAVIGATION = "navigation"  # POST /api/context/navigate
    NODE = "node"  # POST /api/exec


@dataclass(frozen=True)
class Binding:
    """One command the REPL accepts in the current state."""

    name: str
    usage: str
    kind: BindingKind
    node_type: str = ""
    node_name: str = ""


Handler = Callable[[list[str]], Awaitable[None]]

_BUILTINS = (
    Binding("help", "Display available commands", BindingKind.BUILTIN),
    Binding("clear", "Clear the screen", BindingKind.BUILTIN),
    Binding("exit", "Exit the program", BindingKind.BUILTIN),
)
_CONNECT = Binding("connect", "Connect to a server [connect <url>]", BindingKind.NAVIGATION)
_BACK = Binding("back", "Go back to previous context", BindingKind.NAVIGATION)
_DISCONNECT = Binding("disconnect", "Disconnect from server", BindingKind.NAVIGATION)
_USE = Binding("use", "Select a context to use [use emulator | ue | gnb]", BindingKind.NAVIGATION)
_SELECT = Binding("select", "Select a node to interact with [select <node-name>]", BindingKind.NAVIGATION)


def desired_bindings(
    context: ClientContext,
    node_commands: list[CommandInfo] | None = None,
) -> dict[str, Binding]:
    """Every binding that should be live while ``context`` is current."""
    wanted = list(_BUILTINS)

    if context.type is ContextType.ROOT:
        wanted.append(_CONNECT)
    else:
        wanted += [_BACK, _DISCONNECT]

    if context.type is ContextType.SERVER:
        wanted.append(_USE)
    elif context.type is ContextType.CONTEXT_SET:
        wanted.append(_SELECT)
    elif context.type in (ContextType.NODE, ContextType.AMF):
        taken = {b.name for b in wanted}
        for info in node_commands or []:
            if info.name in taken:
                continue
            wanted.append(
                Binding(
                    name=info.name,
                    usage=info.usage,
                    kind=BindingKind.NODE,
                    node_type=context.node_type or context.name,
                    node_name=context.name,
                )
            )

    return {b.name: b for b in wanted}


class CommandRegistry:
    """Currently bound commands and their handlers."""

    def __init__(self, make_handler: Callable[[Binding], Handler]) -> None:
        self._make_handler = make_handler
        self._bindings: dict[str, Binding] = {}
        self._handlers: dict[str, Handler] = {}

    def bind(self, binding: Binding) -> None:
        self._bindings[binding.name] = binding
        self._handlers[binding.name] = self._make_handler(binding)

    def unbind(self, name: str) -> None:
        """Remove ``name``; unbinding something not bound does nothing."""
        self._bindings.pop(name, None)
        self._handlers.pop(name, None)

    def apply(self, desired: dict[str, Binding]) -> tuple[list[str], list[str]]:
        """Make the bound set equal ``desired``.

        Returns the names added and removed. Bindings present in both with
        identical content keep their existing handler.
        """
        removed = [
            name for name, current in self._bindings.items()
            if desired.get(name) != current
        ]
        for name in removed:
            self.unbind(name)

        added = [name for name in desired if name not in self._bindings]
        for name in added:
            self.bind(desired[name])

        return added, removed

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    def binding(self, name: str) -> Binding | None:
        return self._bindings.get(name)

    def bindings(self) -> list[Binding]:
        return list(self._bindings.values())

    def names(self) -> list[str]:
        return list(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings
