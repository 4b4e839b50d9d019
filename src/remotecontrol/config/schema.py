"""Configuration schema dataclasses for remote-control.

All fields carry defaults so partial YAML files merge cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4000
DEFAULT_EXEC_TIMEOUT = 5.0


@dataclass
class ServerConfig:
    """Server bootstrap configuration.

    Example config.yaml:
        server:
          host: 127.0.0.1
          port: 4000
          amf_port: 6000      # omit to disable the AMF listener
          exec_timeout: 5.0
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    amf_port: int | None = None  # None disables the AMF personality
    exec_timeout: float = DEFAULT_EXEC_TIMEOUT  # Seconds to wait for a command action
    debug: bool = False


@dataclass
class ClientConfig:
    """Interactive client configuration."""

    server_url: str | None = None  # Auto-connect on startup
    request_timeout: float = 5.0  # HTTP timeout in seconds
    history_file: str | None = None
    no_color: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    verbose: int | None = None  # 0-4, overrides level
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unknown top-level sections are kept here
    extra: dict[str, Any] = field(default_factory=dict)
