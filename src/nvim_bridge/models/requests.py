"""Typed tool requests.

Tool arguments arrive as loosely typed JSON. Each operation gets its own
request type, built with ``from_arguments`` so shape problems are rejected
here with MalformedRequestError, before the translation layer runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import MalformedRequestError


class EditMode(str, Enum):
    INSERT = "insert"
    REPLACE = "replace"


def _optional_filename(operation: str, arguments: Dict[str, Any]) -> Optional[str]:
    filename = arguments.get("filename")
    if filename is not None and not isinstance(filename, str):
        raise MalformedRequestError(operation, "filename must be a string")
    return filename or None


@dataclass(frozen=True)
class BufferRequest:
    filename: Optional[str] = None  # Hint only; the active buffer is read

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "BufferRequest":
        return cls(filename=_optional_filename("buffer", arguments))


@dataclass(frozen=True)
class StatusRequest:
    filename: Optional[str] = None  # Hint only

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "StatusRequest":
        return cls(filename=_optional_filename("status", arguments))


@dataclass(frozen=True)
class CommandRequest:
    command: str

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "CommandRequest":
        command = arguments.get("command")
        if not isinstance(command, str):
            raise MalformedRequestError("command", "command must be a string")
        if command == "":
            raise MalformedRequestError("command", "command must not be empty")
        return cls(command=command)


@dataclass(frozen=True)
class EditRequest:
    """A line-addressed edit.

    start_line is 1-based. In insert mode the lines go before start_line;
    in replace mode everything from start_line to the end is replaced.
    """

    start_line: int
    mode: EditMode
    lines: str

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "EditRequest":
        start_line = arguments.get("startLine", arguments.get("start_line"))
        # JSON numbers may arrive as 3.0
        if isinstance(start_line, float) and start_line.is_integer():
            start_line = int(start_line)
        # bool is an int subclass but never a line number
        if not isinstance(start_line, int) or isinstance(start_line, bool):
            raise MalformedRequestError("edit", "startLine must be an integer")

        mode = arguments.get("mode")
        try:
            edit_mode = EditMode(mode)
        except ValueError:
            raise MalformedRequestError(
                "edit", f"mode must be 'insert' or 'replace', got {mode!r}"
            ) from None

        lines = arguments.get("lines")
        if not isinstance(lines, str):
            raise MalformedRequestError("edit", "lines must be a string")

        return cls(start_line=start_line, mode=edit_mode, lines=lines)
