"""Configuration file parser for the Neovim bridge."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".nvim-bridge.toml"
DEFAULT_ADDRESS = "/tmp/nvim"


@dataclass
class NeovimConfig:
    """How to reach the editor."""

    address: Optional[str] = None
    embed: bool = False  # Spawn `nvim --embed` instead of attaching
    nvim_path: str = "nvim"
    embed_args: List[str] = field(default_factory=lambda: ["--headless"])


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class BridgeConfig:
    """Complete bridge configuration."""

    neovim: NeovimConfig = field(default_factory=NeovimConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Where the config was loaded from (None when using defaults)
    source: Optional[Path] = None

    def resolve_address(self) -> str:
        """Resolve the control channel address.

        Precedence:
            [neovim] address in the config file
            $NVIM_SOCKET_PATH
            $NVIM (exported by Neovim into its :terminal jobs)
            /tmp/nvim
        """
        if self.neovim.address:
            return self.neovim.address
        for var in ("NVIM_SOCKET_PATH", "NVIM"):
            value = os.getenv(var)
            if value:
                return value
        return DEFAULT_ADDRESS

    def resolve_log_level(self) -> str:
        """Log level, with NVIM_BRIDGE_LOG_LEVEL taking precedence."""
        return (os.getenv("NVIM_BRIDGE_LOG_LEVEL") or self.logging.level).upper()


def find_config_file(search_path: Optional[Path] = None) -> Optional[Path]:
    """Find the bridge config file.

    Args:
        search_path: Directory to look in (defaults to the working directory)

    Returns:
        Path from $NVIM_BRIDGE_CONFIG if set and existing, else
        .nvim-bridge.toml in search_path if it exists, else None
    """
    explicit = os.getenv("NVIM_BRIDGE_CONFIG")
    if explicit:
        explicit_path = Path(explicit).expanduser()
        if explicit_path.exists():
            return explicit_path
        logger.warning("NVIM_BRIDGE_CONFIG points to missing file: %s", explicit_path)

    config_file = (search_path or Path.cwd()) / CONFIG_FILENAME
    if config_file.exists():
        return config_file
    return None


def load_config(search_path: Optional[Path] = None) -> BridgeConfig:
    """Load configuration from .nvim-bridge.toml or use defaults.

    Args:
        search_path: Directory to look for the config file in

    Returns:
        BridgeConfig with loaded or default configuration
    """
    config = BridgeConfig()

    config_file = find_config_file(search_path)
    if not config_file:
        return config

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # If TOML parsing fails, return defaults
        logger.warning("Ignoring unreadable config %s: %s", config_file, e)
        return config

    config.source = config_file

    if "neovim" in data:
        nvim_data = data["neovim"]
        config.neovim.address = nvim_data.get("address")
        config.neovim.embed = nvim_data.get("embed", False)
        config.neovim.nvim_path = nvim_data.get("nvim_path", "nvim")
        config.neovim.embed_args = nvim_data.get("embed_args", ["--headless"])

    if "logging" in data:
        config.logging.level = data["logging"].get("level", "INFO")

    return config
