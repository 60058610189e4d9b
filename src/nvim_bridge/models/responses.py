from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# Buffer
@dataclass
class BufferSnapshot:
    """Full contents of the active buffer at one point in time.

    Line numbers are 1-based and contiguous. Neovim never has a zero-length
    buffer, so an empty buffer is a single empty line.
    """

    lines: Dict[int, str]
    buffer_name: str = ""

    @classmethod
    def from_lines(cls, lines: List[str], buffer_name: str = "") -> "BufferSnapshot":
        if not lines:
            lines = [""]
        return cls(
            lines={number: text for number, text in enumerate(lines, start=1)},
            buffer_name=buffer_name,
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def render(self) -> str:
        """Render as newline-joined "N: text" pairs."""
        return "\n".join(f"{number}: {text}" for number, text in self.lines.items())


# Status
@dataclass
class CursorPosition:
    line: int  # 1-based
    column: int  # 0-based byte offset, as Neovim reports it


@dataclass
class FileInfo:
    line_count: int
    size_bytes: int
    modified: bool
    modifiable: bool
    readonly: bool
    filetype: str = ""


@dataclass
class WindowLayout:
    width: int
    height: int
    window_count: int
    layout: List[Any] = field(default_factory=list)  # winlayout() tree


@dataclass
class VisualSelection:
    start: CursorPosition
    end: CursorPosition


@dataclass
class StatusReport:
    mode: str
    filename: str
    cursor: CursorPosition
    file_info: FileInfo
    window_layout: WindowLayout
    cwd: str = ""
    tab: int = 1
    visual_selection: Optional[VisualSelection] = None
