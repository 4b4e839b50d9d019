"""Request records (client -> server)."""

from __future__ import annotations

from pydantic import Field

from remotecontrol.types.common import ContextType, RcModel


class NavigationRequest(RcModel):
    """Move from the current context to another one."""

    current_context: str = Field(default="", alias="currentContext")
    command: str
    args: list[str] = Field(default_factory=list)
    server_url: str = Field(default="", alias="serverURL")
    node_type: str = Field(default="", alias="nodeType")
    # Optional; makes the server-side lookup exact when identically named
    # contexts exist (e.g. the "emulator" context set and node)
    context_type: ContextType | None = Field(default=None, alias="contextType")


class CommandRequest(RcModel):
    """Run one command against one node."""

    node_type: str = Field(default="", alias="nodeType")
    node_name: str = Field(default="", alias="nodeName")
    command_path: str = Field(default="", alias="commandPath")
    raw_command: str = Field(default="", alias="rawCommand")
    args: list[str] = Field(default_factory=list)
    flags: dict[str, str] = Field(default_factory=dict)
