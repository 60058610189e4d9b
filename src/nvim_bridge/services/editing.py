"""Buffer editing service.

This service translates 1-based, mode-qualified line edits into Neovim's
0-based, end-exclusive nvim_buf_set_lines ranges.
"""

from __future__ import annotations

import logging
from typing import List, Union

from ..errors import InvalidRangeError
from ..models.requests import EditMode
from ..neovim.client import NeovimClient

logger = logging.getLogger(__name__)


def split_payload(text: str) -> List[str]:
    """Split an edit payload into buffer lines.

    \\r\\n and lone \\r count as \\n. One trailing newline terminates the last
    line rather than adding an empty one; empty lines in the middle are kept.

    Examples:
        >>> split_payload("x\\ny")
        ['x', 'y']
        >>> split_payload("x\\r\\ny\\n")
        ['x', 'y']
        >>> split_payload("a\\n\\nb")
        ['a', '', 'b']
        >>> split_payload("")
        []
    """
    if not text:
        return []
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines = lines[:-1]
    return lines


def _plural(count: int) -> str:
    return f"{count} line" if count == 1 else f"{count} lines"


class EditingService:
    """Service for structured line edits."""

    def __init__(self, nvim_client: NeovimClient):
        self.nvim_client = nvim_client

    async def edit_lines(
        self, start_line: int, mode: Union[EditMode, str], lines: str
    ) -> str:
        """Insert or replace lines in the active buffer.

        Args:
            start_line: 1-based line number
            mode: "insert" puts the lines before start_line (line count + 1
                appends). "replace" removes start_line through the last line
                and puts the lines in their place, whatever their number.
            lines: Newline-separated text

        Returns:
            Confirmation naming the mode and the affected range

        Raises:
            InvalidRangeError: If start_line is outside the span mode accepts.
                Raised before the buffer is touched.
            EditorConnectionError: If the channel is unavailable

        Example:
            >>> # buffer: a, b, c
            >>> await service.edit_lines(2, "insert", "x\\ny")
            'Inserted 2 lines at lines 2-3'
            >>> # buffer: a, x, y, b, c
        """
        mode = EditMode(mode)
        new_lines = split_payload(lines)
        line_count = await self.nvim_client.line_count()

        if mode is EditMode.INSERT:
            if not 1 <= start_line <= line_count + 1:
                raise InvalidRangeError(start_line, mode.value, line_count)

            # Zero-width range at start_line - 1 splices without removing
            index = start_line - 1
            await self.nvim_client.set_lines(index, index, new_lines)
            logger.info("Inserted %d line(s) at line %d", len(new_lines), start_line)

            if not new_lines:
                return f"Inserted 0 lines at line {start_line} (buffer unchanged)"
            end_line = start_line + len(new_lines) - 1
            where = (
                f"line {start_line}" if start_line == end_line else f"lines {start_line}-{end_line}"
            )
            suffix = " (appended)" if start_line == line_count + 1 else ""
            return f"Inserted {_plural(len(new_lines))} at {where}{suffix}"

        if not 1 <= start_line <= line_count:
            raise InvalidRangeError(start_line, mode.value, line_count)

        # End -1 means "past the last line", so the tail is replaced even if
        # the buffer grew since line_count was read
        await self.nvim_client.set_lines(start_line - 1, -1, new_lines)
        logger.info(
            "Replaced lines %d-%d with %d line(s)", start_line, line_count, len(new_lines)
        )
        return (
            f"Replaced lines {start_line}-{line_count} "
            f"with {_plural(len(new_lines))}"
        )
