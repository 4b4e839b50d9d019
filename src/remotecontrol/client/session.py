"""Client-side context stack mirroring the server path."""

from __future__ import annotations

from dataclasses import dataclass, field

from remotecontrol.errors import SessionError
from remotecontrol.types import (
    ROOT_CONTEXT,
    ClientContext,
    CommandInfo,
    ContextType,
    NavigationResponse,
)


@dataclass
class Frame:
    """One stack entry: a context snapshot and the commands it offers."""

    context: ClientContext
    commands: list[CommandInfo] = field(default_factory=list)


class ClientSession:
    """Ordered, never-empty stack of contexts; index 0 is root.

    Only ``connect``, ``use`` and ``select`` push. ``back`` pops one level
    and ``disconnect`` resets to root.
    """

    def __init__(self) -> None:
        self._stack: list[Frame] = [self._root_frame()]
        self.server_url = ""

    @staticmethod
    def _root_frame() -> Frame:
        return Frame(context=ROOT_CONTEXT.model_copy(deep=True))

    @property
    def current(self) -> ClientContext:
        return self._stack[-1].context

    @property
    def commands(self) -> list[CommandInfo]:
        return self._stack[-1].commands

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def stack(self) -> tuple[ClientContext, ...]:
        return tuple(frame.context for frame in self._stack)

    @property
    def connected(self) -> bool:
        return bool(self.server_url)

    @property
    def prompt(self) -> str:
        ctx = self.current
        if ctx.type in (ContextType.ROOT, ContextType.SERVER, ContextType.AMF):
            return ">>> "
        return f"{ctx.name} >>> "

    def push(self, context: ClientContext, commands: list[CommandInfo] | None = None) -> None:
        self._stack.append(Frame(context=context, commands=list(commands or [])))

    def pop(self) -> ClientContext:
        if len(self._stack) == 1:
            raise SessionError("Already at root context")
        frame = self._stack.pop()
        if len(self._stack) == 1:
            self.server_url = ""
        return frame.context

    def reset(self) -> None:
        self._stack = [self._root_frame()]
        self.server_url = ""

    def apply_navigation(
        self,
        command: str,
        response: NavigationResponse,
        server_url: str = "",
        node_type: str = "",
    ) -> None:
        """Mirror a successful navigation response onto the stack.

        Raises:
            SessionError: the response is an error or lacks a context.
        """
        if response.error is not None or response.context is None:
            raise SessionError(response.error or "navigation response has no context")

        if command == "back":
            self.pop()
            return
        if command == "disconnect":
            self.reset()
            return

        if command == "connect":
            self.server_url = server_url
        context = response.context.model_copy(
            update={
                "server_url": self.server_url,
                "node_type": response.context.node_type or node_type,
            }
        )
        self.push(context, response.commands)
