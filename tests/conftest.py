"""Root pytest configuration for all tests."""

from __future__ import annotations

import pytest

from remotecontrol.catalog import build_amf_catalog, build_node_catalog
from remotecontrol.config import reset_config
from remotecontrol.context import ContextTree, NavigationHandler
from remotecontrol.domain import StubAmf, StubEmulator, StubGnb, StubUe

# Configure pytest-asyncio to use auto mode
# This is redundant with pyproject.toml but ensures it's set
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep tests away from real config files and RC_* variables."""
    for var in ("RC_LOG", "RC_HOST", "RC_PORT", "RC_AMF_PORT", "RC_EXEC_TIMEOUT", "RC_SERVER_URL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def emulator() -> StubEmulator:
    return StubEmulator()


@pytest.fixture
def node_catalog(emulator: StubEmulator):
    return build_node_catalog(emulator, StubUe(), StubGnb())


@pytest.fixture
def amf_catalog():
    return build_amf_catalog(StubAmf())


@pytest.fixture
def tree(node_catalog) -> ContextTree:
    return ContextTree(node_catalog)


@pytest.fixture
def navigation(tree: ContextTree, emulator: StubEmulator) -> NavigationHandler:
    return NavigationHandler(tree, emulator)
