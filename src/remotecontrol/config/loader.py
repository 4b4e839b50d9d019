"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Environment variable overrides
- Config caching with reset support
- Conversion from dict to typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from remotecontrol.config.merge import merge_configs
from remotecontrol.config.paths import get_config_paths
from remotecontrol.config.schema import (
    DEFAULT_EXEC_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ClientConfig,
    Config,
    LoggingConfig,
    ServerConfig,
)

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("remotecontrol.config")

_cached_config: Config | None = None

# (env var, section, key, converter)
_ENV_OVERRIDES: list[tuple[str, str, str, type]] = [
    ("RC_LOG", "logging", "file", str),
    ("RC_HOST", "server", "host", str),
    ("RC_PORT", "server", "port", int),
    ("RC_AMF_PORT", "server", "amf_port", int),
    ("RC_EXEC_TIMEOUT", "server", "exec_timeout", float),
    ("RC_SERVER_URL", "client", "server_url", str),
]


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build a config dict from RC_* environment variables."""
    overrides: dict[str, Any] = {}

    for var, section, key, convert in _ENV_OVERRIDES:
        raw = os.environ.get(var)
        if not raw:
            continue
        try:
            value = convert(raw)
        except ValueError:
            _log.warning("Ignoring %s=%r: not a valid %s", var, raw, convert.__name__)
            continue
        overrides.setdefault(section, {})[key] = value

    return overrides


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert a merged dict to the typed Config dataclass."""
    server_data = data.get("server") or {}
    server = ServerConfig(
        host=server_data.get("host", DEFAULT_HOST),
        port=int(server_data.get("port", DEFAULT_PORT)),
        amf_port=server_data.get("amf_port"),
        exec_timeout=float(server_data.get("exec_timeout", DEFAULT_EXEC_TIMEOUT)),
        debug=bool(server_data.get("debug", False)),
    )

    client_data = data.get("client") or {}
    client = ClientConfig(
        server_url=client_data.get("server_url"),
        request_timeout=float(client_data.get("request_timeout", 5.0)),
        history_file=client_data.get("history_file"),
        no_color=bool(client_data.get("no_color", False)),
    )

    log_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    known_keys = {"server", "client", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Config(server=server, client=client, logging=logging_config, extra=extra)


def load_config(config_path: str | Path | None = None, reload: bool = False) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Environment variables (RC_*)
    2. Explicit config file (``--config``)
    3. User config
    4. System config

    Args:
        config_path: Optional explicit YAML file.
        reload: Force reload even if cached.
    """
    global _cached_config

    if _cached_config is not None and not reload and config_path is None:
        return _cached_config

    configs: list[dict[str, Any]] = []

    for path in get_config_paths(config_path):
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    env_config = env_overrides()
    if env_config:
        configs.append(env_config)

    config = dict_to_config(merge_configs(*configs))

    # Cache only the default lookup
    if config_path is None:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it on first use."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config (tests, forced reload)."""
    global _cached_config
    _cached_config = None
