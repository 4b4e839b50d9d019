"""AMF personality: a flat, single-context listener.

Clients connect straight into an ``amf`` context; there is no tree below
it. ``disconnect`` and ``back`` both return the client to root.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from remotecontrol import __version__
from remotecontrol.catalog import AMF, CommandCatalog, build_amf_catalog
from remotecontrol.config.schema import DEFAULT_EXEC_TIMEOUT
from remotecontrol.context.tree import ROOT_COMMANDS
from remotecontrol.domain import AmfApi, StubAmf
from remotecontrol.errors import ExecutionError, NavigationError
from remotecontrol.execution import CommandExecutor
from remotecontrol.execution.parser import command_tokens
from remotecontrol.logging import get_logger
from remotecontrol.server.routes import install_error_handlers, model_response
from remotecontrol.types import (
    ROOT_CONTEXT,
    ClientContext,
    CommandInfo,
    CommandRequest,
    CommandResponse,
    ContextType,
    NavigationRequest,
    NavigationResponse,
)

log = get_logger("server.amf")

AMF_BASE_COMMANDS = (
    CommandInfo(name="clear", usage="Clear the screen", description="Clear the terminal screen"),
    CommandInfo(
        name="disconnect",
        usage="Disconnect from AMF",
        description="Disconnect from the AMF server and return to root context",
    ),
    CommandInfo(name="exit", usage="Exit the client", description="Exit the client application"),
    CommandInfo(
        name="help",
        usage="Display help",
        description="Show a list of all available AMF commands",
    ),
)

DISCONNECTED = "Disconnect AMF successfully."


class AmfHandler:
    """Navigation and execution for the AMF listener."""

    def __init__(
        self,
        amf: AmfApi | None = None,
        exec_timeout: float = DEFAULT_EXEC_TIMEOUT,
    ) -> None:
        self.catalog: CommandCatalog = build_amf_catalog(amf if amf is not None else StubAmf())
        self.executor = CommandExecutor(self.catalog, timeout=exec_timeout)
        self.commands = [*AMF_BASE_COMMANDS, *self.catalog.commands_for(AMF)]

    def context(self) -> ClientContext:
        return ClientContext(
            type=ContextType.AMF,
            name=AMF,
            node_type=AMF,
            commands=[cmd.name for cmd in self.commands],
        )

    def help_text(self) -> str:
        lines = ["", "Commands:"]
        lines += [f"  {cmd.name:<20} {cmd.usage}" for cmd in self.commands]
        return "\n".join(lines) + "\n"

    def connect(self, req: NavigationRequest) -> NavigationResponse:
        url = req.args[0] if req.args else req.server_url
        return NavigationResponse(
            context=self.context(),
            prompt=">>> ",
            message=f"Connected to AMF: {url}, type help to see commands",
            commands=[cmd.model_copy(deep=True) for cmd in self.commands],
        )

    def disconnect(self) -> NavigationResponse:
        return NavigationResponse(
            context=ROOT_CONTEXT.model_copy(deep=True),
            prompt=">>> ",
            message=DISCONNECTED,
            commands=list(ROOT_COMMANDS),
        )

    def navigate(self, req: NavigationRequest) -> NavigationResponse:
        if req.command == "connect":
            return self.connect(req)
        if req.command in ("disconnect", "back"):
            return self.disconnect()
        raise NavigationError(f"Unknown navigation command: {req.command}")

    async def execute(self, req: CommandRequest) -> CommandResponse:
        tokens = command_tokens(req)
        name = tokens[0] if tokens else ""

        if name == "help" and len(tokens) == 1:
            return CommandResponse.ok(self.help_text())
        if name in ("clear", "exit"):
            return CommandResponse.ok("")
        if name == "disconnect":
            return CommandResponse.ok(DISCONNECTED)

        return await self.executor.execute(req.model_copy(update={"node_type": AMF}))


def create_amf_app(handler: AmfHandler | None = None) -> FastAPI:
    """Create the FastAPI application for the AMF listener."""
    handler = handler if handler is not None else AmfHandler()

    app = FastAPI(
        title="remote-control AMF",
        description="Direct-connect AMF command server",
        version=__version__,
    )
    app.state.amf = handler
    install_error_handlers(app)

    @app.get("/api/status")
    def api_status() -> dict[str, str]:
        """Personality probe: identifies this listener as the AMF."""
        return {"status": "ok", "service": "amf"}

    @app.post("/api/context/navigate")
    def api_navigate(req: NavigationRequest) -> JSONResponse:
        try:
            response = handler.navigate(req)
        except NavigationError as e:
            return model_response(NavigationResponse.failure(e.message), e.status_code)
        return model_response(response)

    @app.post("/api/exec")
    async def api_exec(req: CommandRequest) -> JSONResponse:
        try:
            response = await handler.execute(req)
        except ExecutionError as e:
            log.debug("AMF command failed: %s", e)
            return model_response(CommandResponse.failure(e.message), e.status_code)
        return model_response(response)

    return app
