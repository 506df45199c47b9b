"""Tests for configuration loading."""

import pytest
from mcp_bitcoin_outputs import config as config_module
from mcp_bitcoin_outputs.config import (
    Config,
    load_config,
    find_config,
    DEFAULT_CONFIG,
)
from mcp_bitcoin_outputs.envelope import MAX_INSCRIPTION_SIZE


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_max_inscription_size(self):
        """Default cap is the protocol maximum."""
        config = Config()
        assert config.max_inscription_size == MAX_INSCRIPTION_SIZE

    def test_default_log_level(self):
        assert Config().log_level == "WARNING"

    def test_default_config_constant(self):
        assert DEFAULT_CONFIG == Config()


class TestConfigValidation:
    """Test configuration value handling."""

    def test_cap_clamped_to_protocol_maximum(self):
        """A looser cap cannot exceed the protocol maximum."""
        config = Config(max_inscription_size=MAX_INSCRIPTION_SIZE * 10)
        assert config.max_inscription_size == MAX_INSCRIPTION_SIZE

    def test_non_positive_cap_rejected(self):
        with pytest.raises(ValueError, match="must be positive"):
            Config(max_inscription_size=0)

    def test_log_level_normalized(self):
        assert Config(log_level="debug").log_level == "DEBUG"


class TestConfigLoading:
    """Test configuration file loading."""

    def test_load_from_toml_string(self, tmp_path):
        """Load configuration from TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('''
[inscription]
max_size = 50000

[logging]
level = "info"
''')

        config = load_config(config_file)

        assert config.max_inscription_size == 50000
        assert config.log_level == "INFO"

    def test_load_missing_file_uses_defaults(self, tmp_path):
        """Missing config file should use defaults."""
        config = load_config(tmp_path / "nonexistent.toml")

        assert config.max_inscription_size == MAX_INSCRIPTION_SIZE
        assert config.log_level == "WARNING"

    def test_partial_config_merges_with_defaults(self, tmp_path):
        """Partial config should merge with defaults."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('''
[logging]
level = "DEBUG"
''')

        config = load_config(config_file)

        assert config.log_level == "DEBUG"
        assert config.max_inscription_size == MAX_INSCRIPTION_SIZE  # default


    @pytest.mark.parametrize("value", ['"big"', "true", "1.5"])
    def test_non_integer_max_size_rejected(self, tmp_path, value):
        """Wrongly typed values name the offending key."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(f"[inscription]\nmax_size = {value}\n")

        with pytest.raises(ValueError, match="inscription.max_size"):
            load_config(config_file)

    def test_non_string_level_rejected(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[logging]\nlevel = 10\n")

        with pytest.raises(ValueError, match="logging.level"):
            load_config(config_file)


class TestFindConfig:
    """Test standard location lookup."""

    def test_first_existing_path_wins(self, tmp_path, monkeypatch):
        missing = tmp_path / "missing.toml"
        present = tmp_path / "present.toml"
        present.write_text('[inscription]\nmax_size = 1234\n')
        monkeypatch.setattr(config_module, "CONFIG_PATHS", [missing, present])

        assert find_config().max_inscription_size == 1234

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module, "CONFIG_PATHS", [tmp_path / "missing.toml"])

        assert find_config() == Config()
