"""Context tree and the navigation state machine."""

from remotecontrol.context.navigation import NavigationHandler
from remotecontrol.context.tree import (
    SINGLETON_TYPES,
    Context,
    ContextTree,
    context_key,
)

__all__ = [
    "Context",
    "ContextTree",
    "NavigationHandler",
    "SINGLETON_TYPES",
    "context_key",
]
