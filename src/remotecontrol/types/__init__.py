"""Wire records for the navigation and execution protocol."""

from remotecontrol.types.common import (
    ROOT_CONTEXT,
    ClientContext,
    CommandInfo,
    ContextType,
    FlagInfo,
    FlagKind,
    RcModel,
)
from remotecontrol.types.requests import CommandRequest, NavigationRequest
from remotecontrol.types.responses import CommandResponse, NavigationResponse

__all__ = [
    "RcModel",
    "ContextType",
    "FlagKind",
    "FlagInfo",
    "CommandInfo",
    "ClientContext",
    "ROOT_CONTEXT",
    "NavigationRequest",
    "NavigationResponse",
    "CommandRequest",
    "CommandResponse",
]
