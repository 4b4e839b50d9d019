"""Configuration management for remote-control.

Hierarchical YAML configuration:
- System-level config (/etc/remote-control/ or %PROGRAMDATA%)
- User-level config (~/.config/remote-control/, ~/.rc/ or %APPDATA%)
- Explicit file passed with --config
- Environment variable overrides (highest priority)

Example usage:
    from remotecontrol.config import load_config

    config = load_config(config_path="remote-control.yaml")
    print(config.server.port)
"""

from remotecontrol.config.loader import (
    get_config,
    load_config,
    reset_config,
)
from remotecontrol.config.paths import (
    get_config_paths,
    get_system_config_path,
    get_user_config_path,
)
from remotecontrol.config.schema import (
    ClientConfig,
    Config,
    LoggingConfig,
    ServerConfig,
)

__all__ = [
    "Config",
    "load_config",
    "get_config",
    "reset_config",
    "ServerConfig",
    "ClientConfig",
    "LoggingConfig",
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
]
