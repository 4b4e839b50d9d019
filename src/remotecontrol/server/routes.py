"""FastAPI routes for the context-tree personality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from remotecontrol import __version__
from remotecontrol.catalog import CommandCatalog, build_node_catalog
from remotecontrol.config.schema import DEFAULT_EXEC_TIMEOUT
from remotecontrol.context import ContextTree, NavigationHandler
from remotecontrol.domain import EmulatorApi, GnbApi, StubEmulator, StubGnb, StubUe, UeApi
from remotecontrol.errors import ExecutionError, NavigationError
from remotecontrol.execution import CommandExecutor
from remotecontrol.logging import get_logger
from remotecontrol.types import (
    CommandInfo,
    CommandRequest,
    CommandResponse,
    NavigationRequest,
    NavigationResponse,
)

log = get_logger("server.routes")


@dataclass
class ServerState:
    """Everything the tree personality's routes need."""

    catalog: CommandCatalog
    tree: ContextTree
    navigation: NavigationHandler
    executor: CommandExecutor

    @classmethod
    def build(
        cls,
        emulator: EmulatorApi | None = None,
        ue: UeApi | None = None,
        gnb: GnbApi | None = None,
        exec_timeout: float = DEFAULT_EXEC_TIMEOUT,
    ) -> ServerState:
        emulator = emulator if emulator is not None else StubEmulator()
        catalog = build_node_catalog(
            emulator,
            ue if ue is not None else StubUe(),
            gnb if gnb is not None else StubGnb(),
        )
        tree = ContextTree(catalog)
        return cls(
            catalog=catalog,
            tree=tree,
            navigation=NavigationHandler(tree, emulator),
            executor=CommandExecutor(catalog, timeout=exec_timeout),
        )


def model_response(model: BaseModel, status_code: int = 200) -> JSONResponse:
    """Serialize a wire record by alias, dropping unset optional fields."""
    return JSONResponse(
        model.model_dump(mode="json", by_alias=True, exclude_none=True),
        status_code=status_code,
    )


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def install_error_handlers(app: FastAPI) -> None:
    """Malformed bodies answer 400 with an ``error`` field."""

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        log.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(f"Invalid request format: {_describe_validation(exc)}", 400)


def create_app(state: ServerState | None = None) -> FastAPI:
    """Create the FastAPI application for the context tree."""
    state = state if state is not None else ServerState.build()

    app = FastAPI(
        title="remote-control",
        description="Context navigation and command execution server",
        version=__version__,
    )
    app.state.rc = state

    install_error_handlers(app)
    _register_routes(app, state)

    return app


def _register_routes(app: FastAPI, state: ServerState) -> None:
    """Register all API routes."""

    @app.get("/api/context")
    def api_context() -> dict[str, Any]:
        """Readiness probe used by the client before connecting."""
        return {"status": "ready", "message": "remote-control server is ready"}

    @app.get("/api/context/node/{node_type}")
    def api_node_objects(node_type: str) -> Any:
        """List the objects of one node type."""
        try:
            objects = state.navigation.objects_of_type(node_type)
        except NavigationError as e:
            return error_response(e.message, e.status_code)
        return {"type": node_type, "objects": objects}

    @app.get("/api/context/node/{node_type}/{node_name}/commands")
    def api_node_commands(node_type: str, node_name: str) -> Any:
        """Command descriptors for a node, cached or from the catalog."""
        node = state.tree.find_node(node_type, node_name)
        commands: list[CommandInfo]
        if node is not None:
            commands = node.commands
        else:
            commands = state.catalog.commands_for(node_type)
        if not commands:
            return error_response("Node context not found", 404)
        return [cmd.model_dump(mode="json", by_alias=True) for cmd in commands]

    @app.post("/api/context/navigate")
    def api_navigate(req: NavigationRequest) -> JSONResponse:
        """Apply a navigation command."""
        try:
            response = state.navigation.navigate(req)
        except NavigationError as e:
            log.debug("Navigation %s failed: %s", req.command, e)
            return model_response(NavigationResponse.failure(e.message), e.status_code)
        return model_response(response)

    @app.post("/api/exec")
    async def api_exec(req: CommandRequest) -> JSONResponse:
        """Run one node command."""
        try:
            response = await state.executor.execute(req)
        except ExecutionError as e:
            return model_response(CommandResponse.failure(e.message), e.status_code)
        return model_response(response)
