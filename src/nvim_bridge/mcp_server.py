"""MCP Server for the Neovim bridge.

Exposes a running Neovim to agents as MCP tools using FastMCP.
"""

from __future__ import annotations

import atexit
import dataclasses
import json
import logging
import signal
import sys
from typing import Literal, Optional

from mcp.server import FastMCP

from .config import BridgeConfig, load_config
from .models.requests import BufferRequest, CommandRequest, EditRequest, StatusRequest
from .server import NeovimBridge

logger = logging.getLogger(__name__)

# The one bridge of this process, created by main() before serving
_bridge: Optional[NeovimBridge] = None

mcp = FastMCP("mcp-neovim-server")


def set_bridge(bridge: Optional[NeovimBridge]) -> None:
    """Install the bridge every tool uses."""
    global _bridge
    _bridge = bridge


def get_bridge() -> NeovimBridge:
    """Get the bridge, creating one from on-disk config if main() did not."""
    global _bridge
    if _bridge is None:
        _bridge = NeovimBridge(config=load_config())
    return _bridge


def _cleanup_bridge() -> None:
    """Detach from Neovim on exit (an embedded editor is stopped)."""
    global _bridge
    if _bridge is None:
        return
    bridge, _bridge = _bridge, None
    # Signal handlers run on the loop thread while the loop is busy, so no
    # coroutine is driven here
    try:
        bridge.close_sync()
    except Exception as e:
        logger.warning("Error while closing Neovim connection: %s", e)


def _setup_cleanup_handlers() -> None:
    """Set up signal handlers and atexit hooks for cleanup."""
    atexit.register(_cleanup_bridge)

    def signal_handler(signum, frame):
        _cleanup_bridge()
        # Re-raise the signal to allow normal termination
        signal.signal(signum, signal.SIG_DFL)
        signal.raise_signal(signum)

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


# ============================================================================
# Resources
# ============================================================================


@mcp.resource(
    "nvim://session",
    name="Current neovim session",
    description="Current neovim text editor session",
    mime_type="text/plain",
)
async def session_resource() -> str:
    """The active buffer, one "N: text" pair per line."""
    snapshot = await get_bridge().get_buffer_contents()
    return snapshot.render()


# ============================================================================
# Tools
# ============================================================================


@mcp.tool()
async def vim_buffer(filename: str | None = None) -> str:
    """Current VIM text editor buffer with line numbers shown.

    Args:
        filename: File name to edit (can be empty, assume buffer is already open)

    Returns:
        Every line of the active buffer as "N: text", numbered from 1
    """
    request = BufferRequest.from_arguments({"filename": filename})
    logger.info("vim_buffer")
    snapshot = await get_bridge().get_buffer_contents(request)
    return snapshot.render()


@mcp.tool()
async def vim_command(command: str) -> str:
    """Send a command to VIM for navigation, spot editing, and line deletion.

    Args:
        command: Neovim command to enter for navigation and spot editing.
            Insert <esc> to return to NORMAL mode. It is possible to send
            multiple commands separated with <cr>.

    Returns:
        The command, the resulting mode and the cursor as line:column

    Example:
        Delete line 3 and save:
        {
          "command": "3Gdd:w<cr>"
        }
    """
    request = CommandRequest.from_arguments({"command": command})
    logger.info("Executing command: %s", request.command)
    return await get_bridge().send_command(request)


@mcp.tool()
async def vim_status(filename: str | None = None) -> str:
    """Get the status of the VIM editor.

    Args:
        filename: File name to get status for (can be empty, assume buffer is already open)

    Returns:
        JSON object with mode, filename, cursor, file_info, window_layout,
        cwd, tab and visual_selection
    """
    request = StatusRequest.from_arguments({"filename": filename})
    logger.info("vim_status")
    status = await get_bridge().get_neovim_status(request)
    return json.dumps(dataclasses.asdict(status))


@mcp.tool()
async def vim_edit(startLine: int, mode: Literal["insert", "replace"], lines: str) -> str:
    """Edit lines using insert or replace in the VIM editor.

    Args:
        startLine: Line number to start editing (1-indexed)
        mode: Mode for editing lines. insert will insert lines at startLine.
            replace will replace lines starting at the startLine to the end
            of the buffer.
        lines: Lines of strings to insert or replace

    Returns:
        Confirmation naming the mode and the affected lines. Read the buffer
        again to see the result.

    Example:
        Replace everything from line 10 on:
        {
          "startLine": 10,
          "mode": "replace",
          "lines": "def main():\\n    pass"
        }
    """
    request = EditRequest.from_arguments(
        {"startLine": startLine, "mode": mode, "lines": lines}
    )
    logger.info("Editing lines: %d, %s, %r", request.start_line, request.mode.value, request.lines)
    return await get_bridge().edit_lines(request)


# ============================================================================
# Entry Point
# ============================================================================


def configure_logging(config: BridgeConfig) -> None:
    """Send logs to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        stream=sys.stderr,
        level=config.resolve_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    """Run the MCP server over stdio.

    The editor address can be set via:
    1. [neovim] address in .nvim-bridge.toml
    2. NVIM_SOCKET_PATH or NVIM environment variable
    3. /tmp/nvim (default)

    Example:
        NVIM_SOCKET_PATH=/tmp/nvim nvim-bridge
    """
    config = load_config()
    configure_logging(config)

    # Set up cleanup handlers FIRST to ensure proper shutdown
    _setup_cleanup_handlers()

    bridge = NeovimBridge(config=config)
    set_bridge(bridge)

    print("Starting Neovim MCP bridge", file=sys.stderr)
    print(f"Editor: {bridge.nvim_client.target}", file=sys.stderr)
    if config.source:
        print(f"Config: {config.source}", file=sys.stderr)
    print("", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
