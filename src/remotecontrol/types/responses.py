"""Response records (server -> client)."""

from __future__ import annotations

from pydantic import Field, model_validator

from remotecontrol.types.common import ClientContext, CommandInfo, RcModel


class NavigationResponse(RcModel):
    """Result of a navigation request.

    Either ``context`` (success) or ``error`` is set, never both.
    """

    context: ClientContext | None = None
    prompt: str = ""
    message: str = ""
    commands: list[CommandInfo] = Field(default_factory=list)
    error: str | None = None

    @model_validator(mode="after")
    def _context_xor_error(self) -> NavigationResponse:
        if self.error is not None and self.context is not None:
            raise ValueError("navigation response cannot carry both context and error")
        return self

    @classmethod
    def failure(cls, message: str) -> NavigationResponse:
        return cls(error=message)


class CommandResponse(RcModel):
    """Result of a command request: exactly one of ``response`` or ``error``."""

    response: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> CommandResponse:
        if (self.response is None) == (self.error is None):
            raise ValueError("command response needs exactly one of response or error")
        return self

    @classmethod
    def ok(cls, text: str) -> CommandResponse:
        return cls(response=text)

    @classmethod
    def failure(cls, message: str) -> CommandResponse:
        return cls(error=message)
