"""Wire types shared by requests and responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RcModel(BaseModel):
    """Base model for wire records: camelCase aliases, accepts field names too."""

    model_config = ConfigDict(populate_by_name=True)


class ContextType(str, Enum):
    """Kind of navigation context."""

    ROOT = "root"
    SERVER = "server"
    CONTEXT_SET = "context_set"
    NODE = "node"
    AMF = "amf"  # Direct-connect personality, never part of the tree


class FlagKind(str, Enum):
    """Value kind of a command flag."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"


class FlagInfo(RcModel):
    """Descriptor of one command flag."""

    name: str
    usage: str = ""
    default_text: str = Field(default="", alias="defaultText")
    required: bool = False
    kind: FlagKind = FlagKind.STRING


class CommandInfo(RcModel):
    """Descriptor of one invocable command. Carries no behavior."""

    name: str
    usage: str = ""
    description: str = ""
    args_usage: str = Field(default="", alias="argsUsage")
    flags: list[FlagInfo] = Field(default_factory=list)


class ClientContext(RcModel):
    """Context descriptor as seen by the client."""

    type: ContextType = ContextType.ROOT
    name: str = "root"
    server_url: str = Field(default="", alias="serverURL")
    description: str = ""
    node_type: str = Field(default="", alias="nodeType")
    commands: list[str] = Field(default_factory=list)


ROOT_CONTEXT = ClientContext(
    type=ContextType.ROOT,
    name="root",
    commands=["help", "clear", "exit", "connect"],
)
