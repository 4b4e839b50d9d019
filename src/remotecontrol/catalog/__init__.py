"""Command catalog: per node-type command descriptors and actions."""

from remotecontrol.catalog.amf import AMF, build_amf_catalog
from remotecontrol.catalog.builtin import EMULATOR, GNB, UE, build_node_catalog
from remotecontrol.catalog.catalog import CommandCatalog
from remotecontrol.catalog.spec import (
    Action,
    CommandSpec,
    FlagSpec,
    Invocation,
    render_help,
)

__all__ = [
    "Action",
    "CommandCatalog",
    "CommandSpec",
    "FlagSpec",
    "Invocation",
    "render_help",
    "build_node_catalog",
    "build_amf_catalog",
    "EMULATOR",
    "UE",
    "GNB",
    "AMF",
]
