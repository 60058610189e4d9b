from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

import pynvim  # type: ignore
from pynvim.api import NvimError  # type: ignore

from ..config import BridgeConfig, load_config
from ..errors import EditorConnectionError, EditorRejectedInputError
from ..utils.dependencies import (
    DependencyError,
    check_dependencies_or_raise,
    get_command_version,
    neovim_dependency,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

VISUAL_MODES = ("v", "V", "\x16")


def split_tcp_address(address: str) -> Optional[Tuple[str, int]]:
    """Return (host, port) for "host:port" addresses, None for socket paths."""
    if "/" in address or "\\" in address:
        return None
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        return None
    return host, int(port)


class NeovimClient:
    """Async wrapper over a single pynvim connection.

    The connection is attached lazily on first use and then kept for the
    life of the process. Every RPC call runs on one dedicated worker thread,
    so pynvim is never touched concurrently and the event loop stays free
    while Neovim works.
    """

    def __init__(
        self, address: Optional[str] = None, config: Optional[BridgeConfig] = None
    ) -> None:
        """Initialize the Neovim client.

        Args:
            address: Socket path or host:port of a running Neovim. Overrides
                the configured address.
            config: Bridge configuration (loaded from disk if omitted)
        """
        self.config = config or load_config()
        self.embedded = self.config.neovim.embed and address is None
        self.address = None if self.embedded else (address or self.config.resolve_address())
        self.nvim: Optional[pynvim.Nvim] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="nvim-rpc")
        self._closed = False

    @property
    def target(self) -> str:
        """Human-readable description of what this client talks to."""
        if self.embedded:
            return f"embedded {self.config.neovim.nvim_path}"
        return str(self.address)

    def is_connected(self) -> bool:
        return self.nvim is not None

    async def connect(self) -> pynvim.Nvim:
        """Return the live Neovim handle, attaching on first call.

        Raises:
            EditorConnectionError: If no editor is reachable
        """
        if self.nvim is not None:
            return self.nvim

        loop = asyncio.get_running_loop()
        try:
            # Attach on the RPC thread so the session lives where it is used
            return await loop.run_in_executor(self._executor, self._attach)
        except (DependencyError, OSError, EOFError) as e:
            raise EditorConnectionError(self.target, str(e)) from e

    def _attach(self) -> pynvim.Nvim:
        # Runs on the RPC thread. The handle is stored here, not on the event
        # loop, so attach jobs queued behind this one see it and reuse it
        if self.nvim is None:
            self.nvim = self._open_session()
        return self.nvim

    def _open_session(self) -> pynvim.Nvim:
        if self.embedded:
            nvim_path = self.config.neovim.nvim_path
            check_dependencies_or_raise([neovim_dependency(nvim_path)])
            argv = [nvim_path, "--embed", *self.config.neovim.embed_args]
            logger.info(
                "Spawning embedded editor: %s (%s)",
                " ".join(argv),
                get_command_version(nvim_path) or "unknown version",
            )
            return pynvim.attach("child", argv=argv)

        tcp = split_tcp_address(self.address)
        if tcp:
            host, port = tcp
            logger.info("Attaching to Neovim over TCP at %s:%d", host, port)
            return pynvim.attach("tcp", address=host, port=port)

        logger.info("Attaching to Neovim socket %s", self.address)
        return pynvim.attach("socket", path=self.address)

    async def _run(self, fn: Callable[[pynvim.Nvim], T]) -> T:
        """Run fn(nvim) on the RPC thread, mapping channel failures."""
        nvim = await self.connect()
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, fn, nvim)
        except (OSError, EOFError) as e:
            raise EditorConnectionError(self.target, f"channel failed: {e}") from e

    def _detach(self) -> None:
        # Runs on the RPC thread
        nvim, self.nvim = self.nvim, None
        if nvim is None:
            return
        try:
            if self.embedded:
                # Notification only; the child exits without answering
                nvim.command("qa!", async_=True)
            nvim.close()
        except (OSError, EOFError) as e:
            logger.debug("Error while detaching from Neovim: %s", e)

    async def close(self) -> None:
        """Detach from Neovim. An embedded editor is told to quit first."""
        if self._closed:
            return
        self._closed = True
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, self._detach)
        self._executor.shutdown(wait=False)

    def close_sync(self) -> None:
        """Blocking close for atexit and signal handlers.

        Needs no event loop, so it also works while the server's loop is
        running in the same thread.
        """
        if self._closed:
            return
        self._closed = True
        self._executor.submit(self._detach).result()
        self._executor.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Buffer primitives
    # ------------------------------------------------------------------

    async def read_buffer(self) -> Tuple[List[str], str]:
        """Read every line of the active buffer.

        Returns:
            (lines, buffer name) from a single RPC round
        """

        def _read(nvim: pynvim.Nvim) -> Tuple[List[str], str]:
            buf = nvim.current.buffer
            return buf[:], buf.name

        return await self._run(_read)

    async def line_count(self) -> int:
        """Number of lines in the active buffer (never less than 1)."""
        return await self._run(lambda nvim: len(nvim.current.buffer))

    async def set_lines(self, start: int, end: int, lines: List[str]) -> None:
        """Replace the 0-based, end-exclusive range [start, end) with lines.

        Issued as one nvim_buf_set_lines call with strict indexing, so Neovim
        sees a single change.
        """
        logger.debug("nvim_buf_set_lines(%d, %d, %d lines)", start, end, len(lines))
        await self._run(
            lambda nvim: nvim.current.buffer.api.set_lines(start, end, True, lines)
        )

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    async def feed_input(self, keys: str) -> None:
        """Queue keys as if typed, in Neovim's key notation (<Esc>, <CR>, ...).

        v:errmsg is cleared first so take_error_message() reports only errors
        raised by these keys.

        Raises:
            EditorRejectedInputError: If Neovim refuses the input call
        """

        def _feed(nvim: pynvim.Nvim) -> None:
            nvim.vvars["errmsg"] = ""
            nvim.input(keys)

        try:
            await self._run(_feed)
        except NvimError as e:
            raise EditorRejectedInputError(keys, str(e)) from e

    async def take_error_message(self) -> str:
        """Return and clear v:errmsg."""

        def _take(nvim: pynvim.Nvim) -> str:
            message = nvim.vvars["errmsg"]
            if message:
                nvim.vvars["errmsg"] = ""
            return message

        return await self._run(_take)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    async def get_mode(self) -> str:
        """Current mode short name as reported by nvim_get_mode ("n", "i", ...)."""
        result = await self._run(lambda nvim: nvim.api.get_mode())
        return result["mode"]

    async def get_cursor(self) -> Tuple[int, int]:
        """Cursor of the current window as (1-based line, 0-based column)."""
        row, col = await self._run(lambda nvim: nvim.current.window.cursor)
        return row, col

    async def get_file_info(self) -> Dict[str, Any]:
        """Metadata of the active buffer.

        Returns:
            Dictionary with name, line_count, size_bytes, modified,
            modifiable, readonly and filetype
        """

        def _info(nvim: pynvim.Nvim) -> Dict[str, Any]:
            buf = nvim.current.buffer
            return {
                "name": buf.name,
                "line_count": len(buf),
                "size_bytes": nvim.call("wordcount")["bytes"],
                "modified": bool(buf.options["modified"]),
                "modifiable": bool(buf.options["modifiable"]),
                "readonly": bool(buf.options["readonly"]),
                "filetype": buf.options["filetype"],
            }

        return await self._run(_info)

    async def get_window_layout(self) -> Dict[str, Any]:
        """Size of the current window and the split tree of the current tab."""

        def _layout(nvim: pynvim.Nvim) -> Dict[str, Any]:
            win = nvim.current.window
            return {
                "width": win.width,
                "height": win.height,
                "window_count": len(nvim.current.tabpage.windows),
                "layout": nvim.call("winlayout"),
            }

        return await self._run(_layout)

    async def get_cwd(self) -> str:
        return await self._run(lambda nvim: nvim.call("getcwd"))

    async def get_tabpage(self) -> int:
        return await self._run(lambda nvim: nvim.current.tabpage.number)

    async def get_visual_selection(self) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
        """Visual selection as ((line, col), (line, col)), or None outside visual mode.

        Columns are 0-based like get_cursor(); the first position is the
        anchor ("v"), the second the cursor (".").
        """

        def _selection(nvim: pynvim.Nvim):
            if nvim.api.get_mode()["mode"] not in VISUAL_MODES:
                return None
            _, start_line, start_col, _ = nvim.call("getpos", "v")
            _, end_line, end_col, _ = nvim.call("getpos", ".")
            return (start_line, start_col - 1), (end_line, end_col - 1)

        return await self._run(_selection)

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
