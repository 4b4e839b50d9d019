"""Server lifecycle: one uvicorn listener per personality in a shared loop."""

from __future__ import annotations

import asyncio

import uvicorn

from remotecontrol.config.schema import ServerConfig
from remotecontrol.logging import get_logger
from remotecontrol.server.amf import AmfHandler, create_amf_app
from remotecontrol.server.routes import ServerState, create_app

log = get_logger("server")


def build_servers(
    config: ServerConfig,
    state: ServerState | None = None,
    amf_handler: AmfHandler | None = None,
) -> list[uvicorn.Server]:
    """Create the uvicorn servers without starting them.

    The tree listener is always present; the AMF listener only when
    ``config.amf_port`` is set.
    """
    state = state if state is not None else ServerState.build(exec_timeout=config.exec_timeout)
    log_level = "debug" if config.debug else "warning"

    servers = [
        uvicorn.Server(
            uvicorn.Config(
                create_app(state),
                host=config.host,
                port=config.port,
                log_level=log_level,
                access_log=config.debug,
            )
        )
    ]

    if config.amf_port is not None:
        handler = (
            amf_handler if amf_handler is not None else AmfHandler(exec_timeout=config.exec_timeout)
        )
        servers.append(
            uvicorn.Server(
                uvicorn.Config(
                    create_amf_app(handler),
                    host=config.host,
                    port=config.amf_port,
                    log_level=log_level,
                    access_log=config.debug,
                )
            )
        )

    return servers


async def serve(config: ServerConfig) -> None:
    """Run every configured listener until all of them stop."""
    servers = build_servers(config)

    log.info("Context server listening on http://%s:%d", config.host, config.port)
    if config.amf_port is not None:
        log.info("AMF server listening on http://%s:%d", config.host, config.amf_port)

    await asyncio.gather(*(server.serve() for server in servers))
    log.info("Server stopped")
