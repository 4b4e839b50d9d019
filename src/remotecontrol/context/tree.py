"""Server-side context hierarchy.

Root, server and one context set per node type are built at startup and
never removed. Node contexts are created lazily on first successful
``select`` and then live for the lifetime of the process.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from remotecontrol.catalog import CommandCatalog
from remotecontrol.logging import get_logger
from remotecontrol.types import ClientContext, CommandInfo, ContextType

log = get_logger("context.tree")

ROOT_NAME = "root"
SERVER_NAME = "server"

# Node types with exactly one object; `use` enters their node directly
SINGLETON_TYPES = frozenset({"emulator"})

_HELP = CommandInfo(
    name="help",
    usage="Display available commands",
    description="Show a list of all available commands in the current context",
)
_CLEAR = CommandInfo(name="clear", usage="Clear the screen", description="Clear the terminal screen")
_EXIT = CommandInfo(name="exit", usage="Exit the program", description="Exit the client application")
_CONNECT = CommandInfo(
    name="connect",
    usage="Connect to a server [connect <url>]",
    description="Connect to a remote-control server",
    args_usage="<url>",
)
_BACK = CommandInfo(
    name="back",
    usage="Go back to previous context",
    description="Navigate back to the parent context",
)
_DISCONNECT = CommandInfo(
    name="disconnect",
    usage="Disconnect from server",
    description="Disconnect from the current server and return to root context",
)
_USE = CommandInfo(
    name="use",
    usage="Select a context to use [use emulator | ue | gnb]",
    description="Navigate to a specific context type",
    args_usage="<context-type>",
)
_SELECT = CommandInfo(
    name="select",
    usage="Select a node to interact with [select <node-name>]",
    description="Navigate to a specific node in this context set",
    args_usage="<node-name>",
)

ROOT_COMMANDS = (_HELP, _CLEAR, _EXIT, _CONNECT)
SERVER_COMMANDS = (_HELP, _CLEAR, _EXIT, _BACK, _DISCONNECT, _USE)
CONTEXT_SET_COMMANDS = (_HELP, _CLEAR, _EXIT, _BACK, _DISCONNECT, _SELECT)


def context_key(context_type: ContextType, name: str, node_type: str = "") -> str:
    """Map-key of a context of the given type."""
    if context_type is ContextType.ROOT:
        return ROOT_NAME
    if context_type is ContextType.SERVER:
        return SERVER_NAME
    if context_type is ContextType.NODE:
        return f"{node_type or name}:{name}"
    return name


@dataclass
class Context:
    """One node of the context tree."""

    type: ContextType
    name: str
    description: str = ""
    node_type: str = ""
    commands: list[CommandInfo] = field(default_factory=list)
    parent: Context | None = field(default=None, repr=False)
    children: dict[str, Context] = field(default_factory=dict, repr=False)

    @property
    def key(self) -> str:
        return context_key(self.type, self.name, self.node_type)

    @property
    def prompt(self) -> str:
        if self.type in (ContextType.ROOT, ContextType.SERVER):
            return ">>> "
        return f"{self.name} >>> "

    def command_names(self) -> list[str]:
        return [cmd.name for cmd in self.commands]

    def to_client(self) -> ClientContext:
        return ClientContext(
            type=self.type,
            name=self.name,
            description=self.description,
            node_type=self.node_type,
            commands=self.command_names(),
        )


class ContextTree:
    """Owns every context and the node cache.

    Startup contexts are immutable after ``__init__``; the only mutation is
    node creation, which is an insert-if-absent under ``_lock`` so that two
    concurrent selects of the same node yield the same object.
    """

    def __init__(self, catalog: CommandCatalog, node_types: list[str] | None = None) -> None:
        self._catalog = catalog
        self._lock = threading.Lock()
        self._contexts: dict[str, Context] = {}

        self.root = self._add(
            Context(
                type=ContextType.ROOT,
                name=ROOT_NAME,
                description="Root context with basic commands",
                commands=list(ROOT_COMMANDS),
            )
        )
        self.server = self._add(
            Context(
                type=ContextType.SERVER,
                name=SERVER_NAME,
                description="Server connection context",
                commands=list(SERVER_COMMANDS),
            ),
            parent=self.root,
        )

        for node_type in node_types if node_types is not None else catalog.node_types():
            self._add(
                Context(
                    type=ContextType.CONTEXT_SET,
                    name=node_type,
                    description=f"{node_type.upper()} context set",
                    node_type=node_type,
                    commands=list(CONTEXT_SET_COMMANDS),
                ),
                parent=self.server,
            )
            if node_type in SINGLETON_TYPES:
                self.get_or_create_node(node_type, node_type)

    def _add(self, ctx: Context, parent: Context | None = None) -> Context:
        if parent is not None:
            ctx.parent = parent
            parent.children[ctx.name] = ctx
        self._contexts[ctx.key] = ctx
        return ctx

    def get(self, key: str) -> Context | None:
        return self._contexts.get(key)

    def context_set(self, node_type: str) -> Context | None:
        ctx = self._contexts.get(node_type)
        if ctx is not None and ctx.type is ContextType.CONTEXT_SET:
            return ctx
        return None

    def find_node(self, node_type: str, name: str) -> Context | None:
        return self._contexts.get(context_key(ContextType.NODE, name, node_type))

    def get_or_create_node(self, node_type: str, name: str) -> Context | None:
        """Return the node context for ``(node_type, name)``, creating it once.

        Returns None when ``node_type`` has no context set.
        """
        key = context_key(ContextType.NODE, name, node_type)
        with self._lock:
            existing = self._contexts.get(key)
            if existing is not None:
                return existing

            parent = self.context_set(node_type)
            if parent is None:
                return None

            description = (
                "Emulator control context"
                if node_type in SINGLETON_TYPES
                else f"{name} node of type {node_type}"
            )
            node = self._add(
                Context(
                    type=ContextType.NODE,
                    name=name,
                    description=description,
                    node_type=node_type,
                    commands=self._catalog.commands_for(node_type),
                ),
                parent=parent,
            )
            log.debug("Created node context %s", key)
            return node

    def resolve(
        self,
        name: str,
        node_type: str = "",
        context_type: ContextType | None = None,
    ) -> Context | None:
        """Find the context a client reports as current.

        With ``context_type`` the lookup is exact. Without it, a node key
        ``"<node_type>:<name>"`` is tried first when both are given and
        differ, then the bare name.
        """
        if not name or name == ROOT_NAME:
            if context_type in (None, ContextType.ROOT):
                return self.root

        if context_type is not None:
            if context_type is ContextType.AMF:
                return None
            return self._contexts.get(context_key(context_type, name, node_type))

        if node_type and node_type != name:
            ctx = self._contexts.get(f"{node_type}:{name}")
            if ctx is not None:
                return ctx
        return self._contexts.get(name)

    def navigational_parent(self, ctx: Context) -> Context | None:
        """Where ``back`` leads from ``ctx``.

        A singleton node is entered straight from the server context, so it
        goes back there rather than to its context set.
        """
        if ctx.type is ContextType.NODE and ctx.node_type in SINGLETON_TYPES:
            return self.server
        return ctx.parent
