"""Editor status service."""

from __future__ import annotations

import asyncio

from ..models.responses import (
    CursorPosition,
    FileInfo,
    StatusReport,
    VisualSelection,
    WindowLayout,
)
from ..neovim.client import NeovimClient


class StatusService:
    """Assembles a StatusReport from independent editor queries."""

    def __init__(self, nvim_client: NeovimClient):
        self.nvim_client = nvim_client

    async def get_neovim_status(self) -> StatusReport:
        """Query mode, cursor, file metadata and window layout.

        If any query fails its error propagates; a partial report is never
        returned.

        Raises:
            EditorConnectionError: If the channel is unavailable
        """
        client = self.nvim_client
        mode, cursor, info, layout, cwd, tab, selection = await asyncio.gather(
            client.get_mode(),
            client.get_cursor(),
            client.get_file_info(),
            client.get_window_layout(),
            client.get_cwd(),
            client.get_tabpage(),
            client.get_visual_selection(),
        )

        visual_selection = None
        if selection is not None:
            (start_line, start_col), (end_line, end_col) = selection
            visual_selection = VisualSelection(
                start=CursorPosition(line=start_line, column=start_col),
                end=CursorPosition(line=end_line, column=end_col),
            )

        return StatusReport(
            mode=mode,
            filename=info["name"],
            cursor=CursorPosition(line=cursor[0], column=cursor[1]),
            file_info=FileInfo(
                line_count=info["line_count"],
                size_bytes=info["size_bytes"],
                modified=info["modified"],
                modifiable=info["modifiable"],
                readonly=info["readonly"],
                filetype=info["filetype"],
            ),
            window_layout=WindowLayout(
                width=layout["width"],
                height=layout["height"],
                window_count=layout["window_count"],
                layout=layout["layout"],
            ),
            cwd=cwd,
            tab=tab,
            visual_selection=visual_selection,
        )
