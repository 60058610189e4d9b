"""Exceptions raised by the Neovim bridge.

Every failure reaching an agent is one of these, so callers can tell a dead
channel apart from a bad line number or a key sequence Neovim refused.
"""

from __future__ import annotations

from typing import Optional


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    pass


class EditorConnectionError(BridgeError, ConnectionError):
    """Raised when the Neovim control channel is unreachable or broken."""

    def __init__(self, address: Optional[str], reason: Optional[str] = None):
        self.address = address
        self.reason = reason
        msg = f"Could not reach Neovim at {address}" if address else "Could not reach Neovim"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvalidRangeError(BridgeError, ValueError):
    """Raised when a start line falls outside the span an edit mode accepts."""

    def __init__(self, start_line: int, mode: str, line_count: int):
        self.start_line = start_line
        self.mode = mode
        self.line_count = line_count
        upper = line_count + 1 if mode == "insert" else line_count
        super().__init__(
            f"Invalid start line {start_line} for {mode}: "
            f"must be between 1 and {upper} (buffer has {line_count} lines)"
        )


class EditorRejectedInputError(BridgeError):
    """Raised when Neovim refuses a raw key sequence.

    The editor's own message is kept verbatim in ``editor_message``.
    """

    def __init__(self, command: str, editor_message: str):
        self.command = command
        self.editor_message = editor_message
        super().__init__(editor_message)


class MalformedRequestError(BridgeError, ValueError):
    """Raised when tool arguments do not have the expected shape."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Malformed {operation} request: {reason}")


__all__ = [
    "BridgeError",
    "EditorConnectionError",
    "InvalidRangeError",
    "EditorRejectedInputError",
    "MalformedRequestError",
]
