"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from nvim_bridge import mcp_server
from nvim_bridge.server import NeovimBridge
from tests.fixtures.fake_editor import FakeNeovimClient


@pytest.fixture
def fake_client() -> FakeNeovimClient:
    """Editor holding the lines a, b, c."""
    return FakeNeovimClient(["a", "b", "c"])


@pytest.fixture
def bridge(fake_client: FakeNeovimClient) -> NeovimBridge:
    return NeovimBridge(nvim_client=fake_client)


@pytest.fixture
def installed_bridge(bridge: NeovimBridge) -> Generator[NeovimBridge, None, None]:
    """Bridge installed as the one the MCP tools use."""
    mcp_server.set_bridge(bridge)
    yield bridge
    mcp_server.set_bridge(None)


@pytest.fixture
def config_dir(monkeypatch) -> Generator[Path, None, None]:
    """Empty working directory with bridge-related env vars cleared."""
    for var in ("NVIM_SOCKET_PATH", "NVIM", "NVIM_BRIDGE_CONFIG", "NVIM_BRIDGE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)
