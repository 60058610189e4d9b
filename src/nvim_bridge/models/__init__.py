"""Typed requests and dataclass responses."""

from .requests import BufferRequest, CommandRequest, EditMode, EditRequest, StatusRequest
from .responses import (
    BufferSnapshot,
    CursorPosition,
    FileInfo,
    StatusReport,
    VisualSelection,
    WindowLayout,
)

__all__ = [
    "BufferRequest",
    "BufferSnapshot",
    "CommandRequest",
    "CursorPosition",
    "EditMode",
    "EditRequest",
    "FileInfo",
    "StatusReport",
    "StatusRequest",
    "VisualSelection",
    "WindowLayout",
]
