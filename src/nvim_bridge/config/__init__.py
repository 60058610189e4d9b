"""Configuration management for the Neovim bridge."""

from .parser import (
    BridgeConfig,
    LoggingConfig,
    NeovimConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "BridgeConfig",
    "LoggingConfig",
    "NeovimConfig",
    "find_config_file",
    "load_config",
]
