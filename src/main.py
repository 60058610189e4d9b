"""Main entry point for the Neovim MCP bridge."""

from nvim_bridge.mcp_server import main, mcp

# Expose mcp object for MCP inspector
__all__ = ["mcp", "main"]

if __name__ == "__main__":
    main()
