"""Raw command service.

Commands are fed to Neovim exactly as written. Neovim's key notation already
covers sequencing and mode changes (<Esc>, <CR>, :w<CR>...), so nothing here
parses or splits the string.
"""

from __future__ import annotations

import logging

from ..errors import EditorRejectedInputError
from ..neovim.client import NeovimClient

logger = logging.getLogger(__name__)


class CommandService:
    """Service for sending literal input to the editor."""

    def __init__(self, nvim_client: NeovimClient):
        self.nvim_client = nvim_client

    async def send_command(self, command: str) -> str:
        """Feed command to Neovim and describe the resulting state.

        Args:
            command: Keys in Neovim notation, e.g. "ggdd" or ":%s/a/b/g<CR>"

        Returns:
            Summary with the command, current mode and cursor position

        Raises:
            EditorConnectionError: If the channel is unavailable
            EditorRejectedInputError: If Neovim reports an error for the input
        """
        await self.nvim_client.feed_input(command)

        error = await self.nvim_client.take_error_message()
        if error:
            logger.info("Neovim rejected %r: %s", command, error)
            raise EditorRejectedInputError(command, error)

        mode = await self.nvim_client.get_mode()
        line, column = await self.nvim_client.get_cursor()
        return f"Executed: {command}\nMode: {mode}\nCursor: {line}:{column}"
