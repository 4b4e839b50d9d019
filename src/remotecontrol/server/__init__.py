"""HTTP server for the context tree and the AMF personality."""

from remotecontrol.server.amf import AmfHandler, create_amf_app
from remotecontrol.server.routes import ServerState, create_app
from remotecontrol.server.server import build_servers, serve

__all__ = [
    "AmfHandler",
    "ServerState",
    "build_servers",
    "create_amf_app",
    "create_app",
    "serve",
]
