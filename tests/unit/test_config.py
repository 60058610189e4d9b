"""Unit tests for configuration system."""

from pathlib import Path

from nvim_bridge.config import BridgeConfig, find_config_file, load_config


class TestConfigParsing:
    """Test TOML configuration parsing."""

    def test_find_config_file_exists(self, config_dir: Path):
        """Test finding .nvim-bridge.toml when it exists."""
        config_file = config_dir / ".nvim-bridge.toml"
        config_file.write_text("[neovim]\naddress = '/tmp/x'\n")

        assert find_config_file(config_dir) == config_file

    def test_find_config_file_missing(self, config_dir: Path):
        assert find_config_file(config_dir) is None

    def test_find_config_file_from_env(self, config_dir: Path, monkeypatch):
        """Test NVIM_BRIDGE_CONFIG wins over the working directory."""
        explicit = config_dir / "custom.toml"
        explicit.write_text("")
        (config_dir / ".nvim-bridge.toml").write_text("")
        monkeypatch.setenv("NVIM_BRIDGE_CONFIG", str(explicit))

        assert find_config_file(config_dir) == explicit

    def test_load_config_defaults(self, config_dir: Path):
        """Test loading config uses defaults when no file exists."""
        config = load_config(config_dir)

        assert config.neovim.address is None
        assert config.neovim.embed is False
        assert config.neovim.nvim_path == "nvim"
        assert config.logging.level == "INFO"
        assert config.source is None

    def test_load_config_basic(self, config_dir: Path):
        config_file = config_dir / ".nvim-bridge.toml"
        config_file.write_text("""
[neovim]
address = "127.0.0.1:6666"
embed = true
nvim_path = "/opt/nvim/bin/nvim"
embed_args = ["--headless", "--clean"]

[logging]
level = "debug"
""")

        config = load_config(config_dir)

        assert config.neovim.address == "127.0.0.1:6666"
        assert config.neovim.embed is True
        assert config.neovim.nvim_path == "/opt/nvim/bin/nvim"
        assert config.neovim.embed_args == ["--headless", "--clean"]
        assert config.logging.level == "debug"
        assert config.resolve_log_level() == "DEBUG"
        assert config.source == config_file

    def test_load_config_invalid_toml(self, config_dir: Path):
        """Test that an unparseable file falls back to defaults."""
        (config_dir / ".nvim-bridge.toml").write_text("[neovim\naddress = ")

        config = load_config(config_dir)

        assert config.neovim.address is None
        assert config.source is None


class TestAddressResolution:
    def test_default_address(self, config_dir: Path):
        assert BridgeConfig().resolve_address() == "/tmp/nvim"

    def test_socket_path_env(self, config_dir: Path, monkeypatch):
        monkeypatch.setenv("NVIM_SOCKET_PATH", "/run/user/1000/nvim.sock")
        monkeypatch.setenv("NVIM", "/tmp/other")
        assert BridgeConfig().resolve_address() == "/run/user/1000/nvim.sock"

    def test_nvim_env(self, config_dir: Path, monkeypatch):
        monkeypatch.setenv("NVIM", "/tmp/nvimXYZ/0")
        assert BridgeConfig().resolve_address() == "/tmp/nvimXYZ/0"

    def test_config_file_wins(self, config_dir: Path, monkeypatch):
        monkeypatch.setenv("NVIM_SOCKET_PATH", "/tmp/env")
        (config_dir / ".nvim-bridge.toml").write_text("[neovim]\naddress = '/tmp/file'\n")

        assert load_config(config_dir).resolve_address() == "/tmp/file"

    def test_log_level_env_override(self, config_dir: Path, monkeypatch):
        monkeypatch.setenv("NVIM_BRIDGE_LOG_LEVEL", "warning")
        assert BridgeConfig().resolve_log_level() == "WARNING"
