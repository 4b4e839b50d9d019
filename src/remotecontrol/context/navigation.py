"""Navigation state machine over the context tree."""

from __future__ import annotations

from remotecontrol.context.tree import SINGLETON_TYPES, Context, ContextTree
from remotecontrol.domain import EmulatorApi
from remotecontrol.errors import NavigationError
from remotecontrol.logging import get_logger
from remotecontrol.types import ContextType, NavigationRequest, NavigationResponse

log = get_logger("context.navigation")


class NavigationHandler:
    """Applies navigation commands (connect, back, disconnect, use, select).

    Every failure is raised as ``NavigationError``; the HTTP layer turns it
    into a ``NavigationResponse`` carrying only ``error``.
    """

    def __init__(self, tree: ContextTree, emulator: EmulatorApi) -> None:
        self.tree = tree
        self.emulator = emulator
        self._commands = {
            "connect": self._connect,
            "disconnect": self._disconnect,
            "back": self._back,
            "use": self._use,
            "select": self._select,
        }

    def objects_of_type(self, node_type: str) -> list[str]:
        """Names of the objects of ``node_type`` known to the emulator."""
        if node_type in SINGLETON_TYPES:
            return [node_type]
        try:
            if node_type == "ue":
                return self.emulator.list_ues()
            if node_type == "gnb":
                return self.emulator.list_gnbs()
        except Exception as e:
            log.exception("Listing %s objects failed", node_type)
            raise NavigationError(f"Failed to get objects: {e}", status_code=500) from e
        raise NavigationError(f"unknown node type: {node_type}", status_code=404)

    def navigate(self, req: NavigationRequest) -> NavigationResponse:
        handler = self._commands.get(req.command)
        if handler is None:
            raise NavigationError(f"Unknown navigation command: {req.command}")

        # disconnect is valid from anywhere, even a context the server lost
        current = None
        if req.command != "disconnect":
            current = self.tree.resolve(req.current_context, req.node_type, req.context_type)
            if current is None:
                raise NavigationError(f"Current context not found: {req.current_context}")

        target, message = handler(current, req)
        log.debug("Navigate %s: %s -> %s", req.command, req.current_context or "root", target.key)
        return NavigationResponse(
            context=target.to_client(),
            prompt=target.prompt,
            message=message,
            commands=[cmd.model_copy(deep=True) for cmd in target.commands],
        )

    def _connect(self, current: Context, req: NavigationRequest) -> tuple[Context, str]:
        if not req.args:
            raise NavigationError("URL is required for connect command")
        if current.type is not ContextType.ROOT:
            raise NavigationError("Already connected; disconnect first")
        return self.tree.server, f"Connected to server: {req.args[0]}, type help to see commands"

    def _disconnect(self, current: Context | None, req: NavigationRequest) -> tuple[Context, str]:
        return self.tree.root, "Disconnected from server"

    def _back(self, current: Context, req: NavigationRequest) -> tuple[Context, str]:
        parent = self.tree.navigational_parent(current)
        if parent is None:
            raise NavigationError("Already at root context")
        if parent.type is ContextType.SERVER:
            return parent, "Back to server context"
        return parent, f"Back to {parent.name} context"

    def _use(self, current: Context, req: NavigationRequest) -> tuple[Context, str]:
        if not req.args:
            raise NavigationError("Context type is required for use command")
        if current.type is not ContextType.SERVER:
            raise NavigationError("The use command is only available in the server context")

        node_type = req.args[0]
        context_set = self.tree.context_set(node_type)
        if context_set is None:
            raise NavigationError("Invalid context type. Use 'emulator', 'ue', or 'gnb'")

        if node_type in SINGLETON_TYPES:
            node = self.tree.get_or_create_node(node_type, node_type)
            return node, f"Switched to {node_type} context"

        objects = self.objects_of_type(node_type)
        message = f"Available {node_type} objects:\n" + "".join(f"  - {obj}\n" for obj in objects)
        return context_set, message

    def _select(self, current: Context, req: NavigationRequest) -> tuple[Context, str]:
        if not req.args:
            raise NavigationError("Node name is required for select command")
        if current.type is not ContextType.CONTEXT_SET:
            raise NavigationError("Can only select nodes from a context set")

        name = req.args[0]
        if name not in self.objects_of_type(current.node_type):
            raise NavigationError(f"Node '{name}' not found")

        node = self.tree.get_or_create_node(current.node_type, name)
        if node is None:
            raise NavigationError(f"Node '{name}' not found")
        return node, f"Selected node: {name}"
