from __future__ import annotations

import logging
from typing import Optional

from .config import BridgeConfig
from .models.requests import BufferRequest, CommandRequest, EditRequest, StatusRequest
from .models.responses import BufferSnapshot, StatusReport
from .neovim.client import NeovimClient
from .services.buffer import BufferService
from .services.commands import CommandService
from .services.editing import EditingService
from .services.status import StatusService

logger = logging.getLogger(__name__)


class NeovimBridge:
    """Server facade delegating requests to service layers.

    Owns the one NeovimClient of the process and hands it to every service.
    """

    def __init__(
        self,
        nvim_client: Optional[NeovimClient] = None,
        config: Optional[BridgeConfig] = None,
    ) -> None:
        self.nvim_client = nvim_client or NeovimClient(config=config)

        self.buffer = BufferService(nvim_client=self.nvim_client)
        self.commands = CommandService(nvim_client=self.nvim_client)
        self.editing = EditingService(nvim_client=self.nvim_client)
        self.status = StatusService(nvim_client=self.nvim_client)

    async def close(self) -> None:
        """Detach from the editor."""
        await self.nvim_client.close()

    def close_sync(self) -> None:
        """Detach from the editor without an event loop."""
        self.nvim_client.close_sync()

    async def get_buffer_contents(
        self, request: Optional[BufferRequest] = None
    ) -> BufferSnapshot:
        if request and request.filename:
            logger.debug("Ignoring filename hint %r; reading active buffer", request.filename)
        return await self.buffer.get_buffer_contents()

    async def send_command(self, request: CommandRequest) -> str:
        return await self.commands.send_command(request.command)

    async def get_neovim_status(
        self, request: Optional[StatusRequest] = None
    ) -> StatusReport:
        if request and request.filename:
            logger.debug("Ignoring filename hint %r; reporting active buffer", request.filename)
        return await self.status.get_neovim_status()

    async def edit_lines(self, request: EditRequest) -> str:
        return await self.editing.edit_lines(request.start_line, request.mode, request.lines)


__all__ = ["NeovimBridge"]
