"""
Configuration management for neuroshell.

Provides a configuration file at ~/.neuro/config.json for default settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Default values - single source of truth
DEFAULTS = {
    "max_stack_depth": 1000,
    "interpolation_max_passes": 10,
    "default_command": "echo",
    "echo_commands": False,
    "simple": False,
    "log_level": "WARNING",
    "test_mode": False,
    "no_rc": False,
}

INT_KEYS = ("max_stack_depth", "interpolation_max_passes")
BOOL_KEYS = ("echo_commands", "simple", "test_mode", "no_rc")


class Config(BaseModel):
    """Configuration settings for neuroshell.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore"}  # Ignore unknown fields like _comment

    # Runtime settings
    max_stack_depth: Optional[int] = Field(
        default=None,
        description="Ceiling for the execution stack (written to _max_stack_depth)"
    )
    interpolation_max_passes: Optional[int] = Field(
        default=None,
        description="Maximum ${...} expansion passes per string"
    )
    default_command: Optional[str] = Field(
        default=None,
        description="Directive used for lines without a leading backslash"
    )
    echo_commands: Optional[bool] = Field(
        default=None,
        description="Echo each directive before running it"
    )
    test_mode: Optional[bool] = Field(
        default=None,
        description="Freeze time-based variables for reproducible output"
    )

    # REPL settings
    simple: Optional[bool] = Field(
        default=None,
        description="Use simple REPL (no prompt_toolkit)"
    )
    history_file: Optional[str] = Field(
        default=None,
        description="REPL history file (default: ~/.neuro/history)"
    )
    rc_file: Optional[str] = Field(
        default=None,
        description="Startup script run before the interactive prompt"
    )
    no_rc: Optional[bool] = Field(
        default=None,
        description="Skip the startup script"
    )

    # Logging
    log_level: Optional[str] = Field(
        default=None,
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        return DEFAULTS.get(key, default)


def coerce_value(key: str, value: str) -> Any:
    """Convert a `key=value` string from the command line to the key's type.

    Raises:
        ValueError: If an integer key gets a non-integer value.
    """
    value = value.strip()
    if key in INT_KEYS:
        return int(value)
    if key in BOOL_KEYS:
        return value.lower() in ("true", "1", "yes", "on")
    return value


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_DIR = Path.home() / ".neuro"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        self._config: Optional[Config] = None

    def _ensure_dir(self) -> None:
        self.CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    @property
    def history_file(self) -> Path:
        configured = self.config.get("history_file")
        if configured:
            return Path(configured).expanduser()
        return self.CONFIG_DIR / "history"

    def load(self, create_if_missing: bool = True) -> Config:
        """Load configuration from file.

        Args:
            create_if_missing: If True, create default config file if it doesn't exist.

        Returns:
            Config object with loaded settings, or defaults if the file is
            missing or invalid.
        """
        if not self.CONFIG_FILE.exists():
            if create_if_missing:
                try:
                    self._create_default_config()
                except OSError as e:
                    logger.warning(f"Could not create config file {self.CONFIG_FILE}: {e}")
            return Config()

        try:
            data = json.loads(self.CONFIG_FILE.read_text())
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Invalid config file ({e}), using defaults")
            return Config()

    def _create_default_config(self) -> None:
        """Create default config file with actual default values."""
        self._ensure_dir()
        default_config = {"_comment": "neuroshell configuration file"}
        default_config.update(DEFAULTS)
        default_config.update({"rc_file": None, "history_file": None})
        self.CONFIG_FILE.write_text(json.dumps(default_config, indent=2) + "\n")

    def _read_raw(self) -> dict[str, Any]:
        if not self.CONFIG_FILE.exists():
            return {}
        try:
            return json.loads(self.CONFIG_FILE.read_text())
        except json.JSONDecodeError:
            return {}

    def save(self, config: Optional[Config] = None) -> Path:
        """Save configuration to file, preserving keys it does not model.

        Returns:
            Path to saved config file.
        """
        self._ensure_dir()
        if config is not None:
            self._config = config
        if self._config is None:
            self._config = Config()

        data = self._read_raw()
        for key, value in self._config.model_dump().items():
            if value is not None:
                data[key] = value

        self.CONFIG_FILE.write_text(json.dumps(data, indent=2) + "\n")
        return self.CONFIG_FILE

    def set(self, key: str, value: Any) -> None:
        """Set a config value and save.

        Raises:
            ValueError: If the key is unknown or the value has the wrong type.
        """
        self._config = self.load(create_if_missing=True)
        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        data = self._config.model_dump()
        data[key] = value
        self._config = Config.model_validate(data)
        self.save()

    def unset(self, key: str) -> None:
        """Reset a config value to its default.

        Raises:
            ValueError: If the key is unknown.
        """
        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        self._config = self.load(create_if_missing=True)
        setattr(self._config, key, None)

        data = self._read_raw()
        if key in data:
            data[key] = None
        self._ensure_dir()
        self.CONFIG_FILE.write_text(json.dumps(data, indent=2) + "\n")

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def list_settings(self) -> dict[str, Any]:
        """List user-customized settings (values that differ from defaults)."""
        result = {}
        for k, v in self.config.model_dump().items():
            if v is None:
                continue
            if k not in DEFAULTS or v != DEFAULTS[k]:
                result[k] = v
        return result

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = Config()
        if self.CONFIG_FILE.exists():
            self.CONFIG_FILE.unlink()


# Singleton instance
_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def get_config() -> Config:
    """Get the current configuration."""
    return get_config_manager().config
