"""Runs catalog commands for ``/api/exec`` requests."""

from __future__ import annotations

import asyncio

from remotecontrol.catalog import CommandCatalog, Invocation, render_help
from remotecontrol.config.schema import DEFAULT_EXEC_TIMEOUT
from remotecontrol.errors import ExecutionError
from remotecontrol.execution.parser import (
    command_tokens,
    flags_want_help,
    parse_arguments,
    wants_help,
)
from remotecontrol.logging import get_logger
from remotecontrol.types import CommandRequest, CommandResponse

log = get_logger("execution")

NO_HELP = "No help available for this command"


class CommandExecutor:
    """Resolve, parse and run one command request.

    Actions are plain blocking callables. Each one runs in a worker thread
    and the caller waits at most ``timeout`` seconds for its result.
    """

    def __init__(self, catalog: CommandCatalog, timeout: float = DEFAULT_EXEC_TIMEOUT) -> None:
        self.catalog = catalog
        self.timeout = timeout

    def help_for(self, node_type: str, name: str) -> str:
        spec = self.catalog.lookup(node_type, name)
        if spec is None:
            return NO_HELP
        return render_help(spec.to_info())

    async def execute(self, req: CommandRequest) -> CommandResponse:
        """Execute ``req`` and return the action's text.

        Raises:
            ExecutionError: for routing and shape problems, with the HTTP
                status the server should answer with.
        """
        tokens = command_tokens(req)
        if not tokens:
            raise ExecutionError("command is required")
        name, rest = tokens[0], tokens[1:]

        if wants_help(rest) or flags_want_help(req.flags):
            return CommandResponse.ok(self.help_for(req.node_type, name))

        if not self.catalog.has_node_type(req.node_type):
            raise ExecutionError("invalid node type")

        spec = self.catalog.lookup(req.node_type, name)
        if spec is None:
            raise ExecutionError(f"command not found: {name}")

        args, flags = parse_arguments(spec, rest, req.flags)
        invocation = Invocation(
            node_type=req.node_type,
            node_name=req.node_name,
            args=args,
            flags=flags,
        )

        log.debug("Executing %s/%s %s %s", req.node_type, name, args, flags)
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(spec.action, invocation),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            log.warning("Command %s/%s timed out after %ss", req.node_type, name, self.timeout)
            raise ExecutionError(
                f"command timed out after {self.timeout:g}s", status_code=504
            ) from None
        except Exception as e:
            log.exception("Command %s/%s failed", req.node_type, name)
            raise ExecutionError(f"command failed: {e}", status_code=500) from e

        return CommandResponse.ok(text if text is not None else "")
