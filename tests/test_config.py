"""Tests for the configuration module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from remotecontrol.config import (
    Config,
    get_config,
    load_config,
    reset_config,
)
from remotecontrol.config.loader import dict_to_config, env_overrides, load_yaml_file
from remotecontrol.config.merge import deep_merge, merge_configs
from remotecontrol.config.paths import get_config_paths, get_user_config_path


class TestDeepMerge:
    """Test the deep merge algorithm."""

    def test_nested_merge(self) -> None:
        base = {"server": {"host": "0.0.0.0", "port": 4000}}
        override = {"server": {"port": 4100}}
        result = deep_merge(base, override)
        assert result == {"server": {"host": "0.0.0.0", "port": 4100}}

    def test_none_does_not_override(self) -> None:
        assert deep_merge({"a": 1}, {"a": None}) == {"a": 1}

    def test_inputs_untouched(self) -> None:
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}

    def test_merge_configs_order(self) -> None:
        assert merge_configs({"a": 1, "b": 2}, {"b": 3}, {}, {"c": 4}) == {"a": 1, "b": 3, "c": 4}


class TestConfigPaths:
    """Platform-aware path resolution."""

    def test_xdg_user_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_user_config_path() == tmp_path / "remote-control" / "config.yaml"

    def test_explicit_path_last(self, tmp_path: Path) -> None:
        explicit = tmp_path / "rc.yaml"
        assert get_config_paths(explicit)[-1] == explicit


class TestLoading:
    """YAML loading, env overrides and caching."""

    def test_defaults(self) -> None:
        config = load_config()
        assert isinstance(config, Config)
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 4000
        assert config.server.amf_port is None
        assert config.server.exec_timeout == 5.0
        assert config.client.server_url is None

    def test_missing_and_invalid_yaml(self, tmp_path: Path) -> None:
        assert load_yaml_file(tmp_path / "absent.yaml") == {}
        bad = tmp_path / "bad.yaml"
        bad.write_text("server: [unclosed", encoding="utf-8")
        assert load_yaml_file(bad) == {}

    def test_user_then_explicit(self, tmp_path: Path) -> None:
        user = tmp_path / "xdg" / "remote-control" / "config.yaml"
        user.parent.mkdir(parents=True)
        user.write_text("server:\n  port: 4100\n  host: 127.0.0.1\n", encoding="utf-8")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("server:\n  port: 4200\n  amf_port: 6200\n", encoding="utf-8")

        config = load_config(config_path=explicit)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 4200
        assert config.server.amf_port == 6200

    def test_env_overrides_win(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("server:\n  port: 4200\n", encoding="utf-8")
        monkeypatch.setenv("RC_PORT", "4300")
        monkeypatch.setenv("RC_EXEC_TIMEOUT", "2.5")
        monkeypatch.setenv("RC_SERVER_URL", "http://h:4300")

        config = load_config(config_path=explicit)

        assert config.server.port == 4300
        assert config.server.exec_timeout == 2.5
        assert config.client.server_url == "http://h:4300"

    def test_invalid_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RC_PORT", "not-a-port")
        assert env_overrides() == {}

    def test_unknown_sections_kept(self) -> None:
        config = dict_to_config({"plugins": {"x": 1}})
        assert config.extra == {"plugins": {"x": 1}}

    def test_cache_and_reset(self) -> None:
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first
