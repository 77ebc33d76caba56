#!/usr/bin/env python3
"""
Tests for configuration management module.
"""

import json
import pytest
from unittest.mock import patch

from neuroshell.config import DEFAULTS, Config, ConfigManager, get_config, get_config_manager
from neuroshell.config.config import coerce_value


# ============================================================================
# Config Model Tests
# ============================================================================

class TestConfig:
    """Tests for Config model."""

    def test_create_empty_config(self):
        """Test creating config with all defaults."""
        cfg = Config()
        assert cfg.max_stack_depth is None
        assert cfg.interpolation_max_passes is None
        assert cfg.default_command is None
        assert cfg.echo_commands is None
        assert cfg.simple is None
        assert cfg.rc_file is None
        assert cfg.log_level is None

    def test_create_config_with_values(self):
        """Test creating config with specific values."""
        cfg = Config(max_stack_depth=50, default_command="get", echo_commands=True)
        assert cfg.max_stack_depth == 50
        assert cfg.default_command == "get"
        assert cfg.echo_commands is True

    def test_get_with_value(self):
        cfg = Config(max_stack_depth=50)
        assert cfg.get("max_stack_depth") == 50
        assert cfg.get("max_stack_depth", 7) == 50

    def test_get_with_none(self):
        """Test get method when value is None falls back to DEFAULTS."""
        cfg = Config()
        assert cfg.get("max_stack_depth") == DEFAULTS["max_stack_depth"] == 1000
        assert cfg.get("default_command") == "echo"
        # Explicit default is ignored when DEFAULTS has the key
        assert cfg.get("max_stack_depth", 7) == 1000

    def test_get_unknown_key(self):
        cfg = Config()
        assert cfg.get("unknown_key") is None
        assert cfg.get("unknown_key", "default") == "default"

    def test_extra_keys_ignored(self):
        cfg = Config.model_validate({"_comment": "hello", "max_stack_depth": 5})
        assert cfg.max_stack_depth == 5


class TestCoerceValue:
    """Tests for command-line value conversion."""

    def test_int_key(self):
        assert coerce_value("max_stack_depth", " 200 ") == 200

    def test_int_key_invalid(self):
        with pytest.raises(ValueError):
            coerce_value("max_stack_depth", "lots")

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("YES", True), ("1", True), ("false", False), ("nah", False),
    ])
    def test_bool_key(self, value, expected):
        assert coerce_value("echo_commands", value) is expected

    def test_string_key(self):
        assert coerce_value("default_command", "get") == "get"


# ============================================================================
# ConfigManager Tests
# ============================================================================

class TestConfigManager:
    """Tests for ConfigManager."""

    @pytest.fixture
    def temp_config_dir(self, tmp_path):
        """Create temporary config directory."""
        config_dir = tmp_path / ".neuro"
        config_dir.mkdir()
        return config_dir

    def test_load_nonexistent_config(self, temp_config_dir):
        """Test loading config when file doesn't exist (without creating)."""
        config_file = temp_config_dir / "config.json"
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                cfg = mgr.load(create_if_missing=False)
                assert cfg.max_stack_depth is None
                assert not config_file.exists()

    def test_load_creates_default_config(self, temp_config_dir):
        """Test that load creates default config file if missing."""
        config_file = temp_config_dir / "config.json"
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                mgr.load(create_if_missing=True)
                assert config_file.exists()
                data = json.loads(config_file.read_text())
                assert data["max_stack_depth"] == 1000
                assert data["rc_file"] is None
                assert "_comment" in data

                # The written defaults load back as values
                loaded = ConfigManager().load()
                assert loaded.max_stack_depth == 1000

    def test_save_and_load_config(self, temp_config_dir):
        """Test saving and loading config."""
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                mgr.save(Config(max_stack_depth=250, default_command="get"))

                loaded = ConfigManager().load()
                assert loaded.max_stack_depth == 250
                assert loaded.default_command == "get"

    def test_save_only_non_none_values(self, temp_config_dir):
        """Test that save only writes non-None values."""
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                ConfigManager().save(Config(max_stack_depth=250))

                data = json.loads(config_file.read_text())
                assert data == {"max_stack_depth": 250}

    def test_save_preserves_unknown_keys(self, temp_config_dir):
        config_file = temp_config_dir / "config.json"
        config_file.write_text('{"_comment": "mine"}')

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                ConfigManager().save(Config(echo_commands=True))

                data = json.loads(config_file.read_text())
                assert data == {"_comment": "mine", "echo_commands": True}

    def test_set_preserves_other_values(self, temp_config_dir):
        """Test that setting one value preserves other existing values."""
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                ConfigManager().set("max_stack_depth", 300)
                ConfigManager().set("echo_commands", True)
                ConfigManager().set("default_command", "get")

                final = ConfigManager().load(create_if_missing=False)
                assert final.max_stack_depth == 300
                assert final.echo_commands is True
                assert final.default_command == "get"

    def test_set_unknown_key_raises(self, temp_config_dir):
        """Test that setting unknown key raises ValueError."""
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', temp_config_dir / "config.json"):
                mgr = ConfigManager()
                with pytest.raises(ValueError, match="Unknown config key"):
                    mgr.set("unknown_key", "value")

    def test_set_wrong_type_raises(self, temp_config_dir):
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', temp_config_dir / "config.json"):
                with pytest.raises(ValueError):
                    ConfigManager().set("max_stack_depth", "lots")

    def test_unset_value(self, temp_config_dir):
        """Test unsetting a config value."""
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                mgr.set("max_stack_depth", 300)
                mgr.set("default_command", "get")

                mgr.unset("max_stack_depth")

                loaded = ConfigManager().load()
                assert loaded.max_stack_depth is None
                assert loaded.get("max_stack_depth") == 1000
                assert loaded.default_command == "get"

    def test_unset_unknown_key_raises(self, temp_config_dir):
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', temp_config_dir / "config.json"):
                with pytest.raises(ValueError, match="Unknown config key"):
                    ConfigManager().unset("unknown_key")

    def test_get_value(self, temp_config_dir):
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                mgr.set("max_stack_depth", 300)

                assert mgr.get("max_stack_depth") == 300
                assert mgr.get("interpolation_max_passes") == DEFAULTS["interpolation_max_passes"]

    def test_list_settings(self, temp_config_dir):
        """Test listing non-default settings."""
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                mgr.set("max_stack_depth", 300)
                mgr.set("echo_commands", True)

                assert mgr.list_settings() == {"max_stack_depth": 300, "echo_commands": True}

    def test_list_settings_empty(self, temp_config_dir):
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', temp_config_dir / "config.json"):
                assert ConfigManager().list_settings() == {}

    def test_history_file(self, temp_config_dir):
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', temp_config_dir / "config.json"):
                mgr = ConfigManager()
                assert mgr.history_file == temp_config_dir / "history"

                mgr.set("history_file", str(temp_config_dir / "hist.txt"))
                assert mgr.history_file == temp_config_dir / "hist.txt"

    def test_reset(self, temp_config_dir):
        """Test resetting config to defaults."""
        config_file = temp_config_dir / "config.json"

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                mgr.set("max_stack_depth", 300)
                assert config_file.exists()

                mgr.reset()
                assert not config_file.exists()
                assert mgr.load(create_if_missing=False).max_stack_depth is None

    def test_load_invalid_json(self, temp_config_dir):
        """Test loading invalid JSON returns defaults."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text("not valid json")

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                cfg = ConfigManager().load()
                assert cfg.max_stack_depth is None

    def test_load_invalid_schema(self, temp_config_dir):
        """Test loading invalid schema returns defaults."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text('{"max_stack_depth": "not a number"}')

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                cfg = ConfigManager().load()
                assert cfg.max_stack_depth is None


# ============================================================================
# Singleton Tests
# ============================================================================

class TestSingleton:
    """Tests for singleton functions."""

    def test_get_config_manager_returns_same_instance(self, tmp_path):
        import neuroshell.config.config as config_module

        config_module._manager = None

        with patch.object(ConfigManager, 'CONFIG_DIR', tmp_path):
            with patch.object(ConfigManager, 'CONFIG_FILE', tmp_path / "config.json"):
                assert get_config_manager() is get_config_manager()

        config_module._manager = None

    def test_get_config_returns_config(self, tmp_path):
        import neuroshell.config.config as config_module

        config_module._manager = None

        with patch.object(ConfigManager, 'CONFIG_DIR', tmp_path):
            with patch.object(ConfigManager, 'CONFIG_FILE', tmp_path / "config.json"):
                assert isinstance(get_config(), Config)

        config_module._manager = None


# ============================================================================
# Test Runner
# ============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
