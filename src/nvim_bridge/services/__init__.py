"""Service layer: one service per bridge operation."""

from .buffer import BufferService
from .commands import CommandService
from .editing import EditingService
from .status import StatusService

__all__ = ["BufferService", "CommandService", "EditingService", "StatusService"]
