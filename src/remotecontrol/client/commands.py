"""Command handlers for the interactive client."""

from __future__ import annotations

import shlex

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from remotecontrol.client.bindings import Binding, BindingKind, CommandRegistry, Handler, desired_bindings
from remotecontrol.client.session import ClientSession
from remotecontrol.client.transport import RemoteClient, normalize_url
from remotecontrol.errors import SessionError, TransportError
from remotecontrol.logging import get_logger
from remotecontrol.types import CommandRequest, ContextType, NavigationRequest, NavigationResponse

log = get_logger("client.commands")


class ClientCommands:
    """Dispatches REPL lines to the commands bound in the current context."""

    def __init__(
        self,
        session: ClientSession | None = None,
        client: RemoteClient | None = None,
        console: Console | None = None,
    ) -> None:
        self.session = session if session is not None else ClientSession()
        self.client = client if client is not None else RemoteClient()
        self.console = console if console is not None else Console()
        self.exit_requested = False

        self._builtins: dict[str, Handler] = {
            "help": self._cmd_help,
            "clear": self._cmd_clear,
            "exit": self._cmd_exit,
            "connect": self._cmd_connect,
            "back": self._cmd_back,
            "disconnect": self._cmd_disconnect,
            "use": self._cmd_use,
            "select": self._cmd_select,
        }
        self.registry = CommandRegistry(self._handler_for)
        self.rebind()

    def _handler_for(self, binding: Binding) -> Handler:
        if binding.kind is not BindingKind.NODE:
            return self._builtins[binding.name]

        node_type, node_name, name = binding.node_type, binding.node_name, binding.name

        async def run(args: list[str]) -> None:
            await self.run_node_command(node_type, node_name, name, args)

        return run

    def rebind(self) -> None:
        added, removed = self.registry.apply(
            desired_bindings(self.session.current, self.session.commands)
        )
        log.debug("Rebound commands: +%s -%s", added, removed)

    async def handle(self, line: str) -> None:
        """Handle one input line."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self._error(f"Cannot parse input: {e}")
            return
        if not parts:
            return

        name, args = parts[0], parts[1:]
        handler = self.registry.get(name)
        if handler is None:
            self.console.print(f"[red]Unknown command: {escape(name)}[/red]")
            self.console.print("Type [bold]help[/bold] for available commands.")
            return
        await handler(args)

    def _error(self, message: str) -> None:
        self.console.print(f"[red]Error: {escape(message)}[/red]")

    def _message(self, text: str) -> None:
        if text:
            self.console.print(escape(text.rstrip("\n")))

    async def _navigate(self, command: str, args: list[str], server_url: str) -> NavigationResponse | None:
        current = self.session.current
        req = NavigationRequest(
            current_context=current.name,
            command=command,
            args=args,
            server_url=server_url,
            node_type=current.node_type,
            context_type=current.type,
        )
        try:
            response = await self.client.navigate(server_url, req)
        except TransportError as e:
            self._error(str(e))
            return None

        if response.error is not None:
            self._error(response.error)
            return None

        node_type = args[0] if command == "use" and args else ""
        try:
            self.session.apply_navigation(command, response, server_url=server_url, node_type=node_type)
        except SessionError as e:
            self._error(str(e))
            return None

        await self._ensure_node_commands()
        self.rebind()
        self._message(response.message)
        return response

    async def _ensure_node_commands(self) -> None:
        ctx = self.session.current
        if ctx.type is not ContextType.NODE or self.session.commands:
            return
        try:
            commands = await self.client.node_commands(self.session.server_url, ctx.node_type, ctx.name)
        except TransportError as e:
            log.warning("Could not fetch commands for %s/%s: %s", ctx.node_type, ctx.name, e)
            return
        self.session.commands.extend(commands)

    async def _cmd_help(self, args: list[str]) -> None:
        """Show the commands bound in the current context."""
        table = Table(title="Available Commands")
        table.add_column("Command", style="bold")
        table.add_column("Description")

        node_bound = False
        for binding in self.registry.bindings():
            table.add_row(binding.name, binding.usage)
            node_bound = node_bound or binding.kind is BindingKind.NODE

        self.console.print(table)
        if node_bound:
            self.console.print("[dim]Use '<command> --help' for command options.[/dim]")

    async def _cmd_clear(self, args: list[str]) -> None:
        self.console.clear()

    async def _cmd_exit(self, args: list[str]) -> None:
        self.exit_requested = True

    async def _cmd_connect(self, args: list[str]) -> None:
        """Probe the server, then enter its top context."""
        if not args:
            self._error("URL is required for connect command")
            return
        url = normalize_url(args[0])

        try:
            personality = await self.client.probe(url)
        except TransportError as e:
            self._error(str(e))
            return
        log.info("Connecting to %s server at %s", personality, url)

        await self._navigate("connect", [url], url)

    async def _cmd_back(self, args: list[str]) -> None:
        await self._navigate("back", args, self.session.server_url)

    async def _cmd_disconnect(self, args: list[str]) -> None:
        await self._navigate("disconnect", args, self.session.server_url)

    async def _cmd_use(self, args: list[str]) -> None:
        await self._navigate("use", args, self.session.server_url)

    async def _cmd_select(self, args: list[str]) -> None:
        if not args:
            # No name: show what can be selected
            try:
                objects = await self.client.list_nodes(self.session.server_url, self.session.current.node_type)
            except TransportError as e:
                self._error(str(e))
                return
            self.console.print("Usage: select <node-name>")
            for obj in objects:
                self.console.print(f"  - {escape(obj)}")
            return
        await self._navigate("select", args, self.session.server_url)

    async def run_node_command(
        self, node_type: str, node_name: str, name: str, args: list[str]
    ) -> None:
        """Send one node command to the server and print its result."""
        req = CommandRequest(
            node_type=node_type,
            node_name=node_name,
            command_path=name,
            args=args,
        )
        try:
            response = await self.client.execute(self.session.server_url, req)
        except TransportError as e:
            self._error(str(e))
            return

        if response.error is not None:
            self._error(response.error)
        else:
            self._message(response.response or "")
