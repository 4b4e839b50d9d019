"""Exception types shared by the server and the client."""

from __future__ import annotations

from dataclasses import dataclass


class RemoteControlError(Exception):
    """Base class for remote-control errors."""


@dataclass
class NavigationError(RemoteControlError):
    """A navigation request could not be routed to a target context.

    Surfaced to the client through ``NavigationResponse.error``.
    """

    message: str
    status_code: int = 400

    def __str__(self) -> str:
        return self.message


@dataclass
class ExecutionError(RemoteControlError):
    """A command request could not be routed or completed.

    Domain-level failures never raise this; they come back as response text.
    """

    message: str
    status_code: int = 400

    def __str__(self) -> str:
        return self.message


class CatalogError(RemoteControlError):
    """Invalid command catalog definition (duplicate names, bad defaults)."""


class TransportError(RemoteControlError):
    """Client could not reach the server or could not decode its reply."""


class SessionError(RemoteControlError):
    """Invalid client-side stack operation (e.g. popping the root)."""
