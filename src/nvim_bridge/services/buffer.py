"""Buffer reading service."""

from __future__ import annotations

from ..models.responses import BufferSnapshot
from ..neovim.client import NeovimClient


class BufferService:
    """Reads the active buffer. Nothing is cached; Neovim is the source of truth."""

    def __init__(self, nvim_client: NeovimClient):
        self.nvim_client = nvim_client

    async def get_buffer_contents(self) -> BufferSnapshot:
        """Snapshot every line of the active buffer.

        Returns:
            BufferSnapshot numbered from 1. An empty buffer gives {1: ""}.

        Raises:
            EditorConnectionError: If the channel is unavailable
        """
        lines, name = await self.nvim_client.read_buffer()
        return BufferSnapshot.from_lines(lines, buffer_name=name)
