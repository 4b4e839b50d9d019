"""Interactive client: transport, context stack, bindings and REPL."""

from remotecontrol.client.bindings import Binding, BindingKind, CommandRegistry, desired_bindings
from remotecontrol.client.commands import ClientCommands
from remotecontrol.client.session import ClientSession, Frame
from remotecontrol.client.transport import RemoteClient, normalize_url

__all__ = [
    "Binding",
    "BindingKind",
    "ClientCommands",
    "ClientSession",
    "CommandRegistry",
    "Frame",
    "RemoteClient",
    "desired_bindings",
    "normalize_url",
]
