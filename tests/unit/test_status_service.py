"""Unit tests for StatusService."""

from unittest.mock import AsyncMock

import pytest

from nvim_bridge.errors import EditorConnectionError
from nvim_bridge.models.responses import CursorPosition, StatusReport
from nvim_bridge.services.status import StatusService
from tests.fixtures.fake_editor import FakeNeovimClient


class TestStatusService:
    @pytest.mark.asyncio
    async def test_assembles_report(self, fake_client: FakeNeovimClient):
        fake_client.cursor = (2, 1)
        service = StatusService(nvim_client=fake_client)

        status = await service.get_neovim_status()

        assert isinstance(status, StatusReport)
        assert status.mode == "n"
        assert status.filename == "/tmp/example.txt"
        assert status.cursor == CursorPosition(line=2, column=1)
        assert status.file_info.line_count == 3
        assert status.file_info.modified is False
        assert status.file_info.modifiable is True
        assert status.window_layout.width == 80
        assert status.window_layout.window_count == 1
        assert status.cwd == "/tmp"
        assert status.tab == 1
        assert status.visual_selection is None

    @pytest.mark.asyncio
    async def test_dirty_flag_follows_edits(self, fake_client: FakeNeovimClient):
        service = StatusService(nvim_client=fake_client)

        await fake_client.set_lines(0, 0, ["new"])
        status = await service.get_neovim_status()

        assert status.file_info.modified is True
        assert status.file_info.line_count == 4

    @pytest.mark.asyncio
    async def test_visual_selection(self, fake_client: FakeNeovimClient):
        fake_client.mode = "v"
        fake_client.selection = ((1, 0), (2, 3))
        service = StatusService(nvim_client=fake_client)

        status = await service.get_neovim_status()

        assert status.visual_selection.start == CursorPosition(line=1, column=0)
        assert status.visual_selection.end == CursorPosition(line=2, column=3)

    @pytest.mark.asyncio
    async def test_failed_subquery_propagates(self, fake_client: FakeNeovimClient):
        fake_client.get_window_layout = AsyncMock(
            side_effect=EditorConnectionError("/tmp/nvim", "channel failed: EOF")
        )
        service = StatusService(nvim_client=fake_client)

        with pytest.raises(EditorConnectionError, match="channel failed"):
            await service.get_neovim_status()

    @pytest.mark.asyncio
    async def test_unreachable_editor(self, fake_client: FakeNeovimClient):
        fake_client.reachable = False
        service = StatusService(nvim_client=fake_client)

        with pytest.raises(EditorConnectionError):
            await service.get_neovim_status()
