"""Bridge between MCP tool calls and a running Neovim instance."""

__version__ = "0.1.0"
