"""Configuration management for TimeCard."""

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]
from jsonschema import ValidationError, validate  # type: ignore[import-untyped]

from timecard.core.periods import PERIOD_TOKENS

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manage application configuration."""

    DEFAULT_CONFIG = {
        "version": "1.0",
        "general": {
            "data_file": "~/.timecard/timecard.json",
            "backup_on_save": False,
        },
        "report": {
            "default_period": "today",
            "csv_dir": ".",
        },
        "display": {
            "datetime_format": "%Y-%m-%d %H:%M:%S",
        },
        "advanced": {
            "log_level": "WARNING",
            "log_file": None,
        },
    }

    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "general": {
                "type": "object",
                "properties": {
                    "data_file": {"type": "string", "minLength": 1},
                    "backup_on_save": {"type": "boolean"},
                },
            },
            "report": {
                "type": "object",
                "properties": {
                    "default_period": {
                        "type": "string",
                        "enum": PERIOD_TOKENS + ["this-week", "this-month"],
                    },
                    "csv_dir": {"type": "string"},
                },
            },
            "display": {
                "type": "object",
                "properties": {
                    "datetime_format": {"type": "string", "minLength": 1},
                },
            },
            "advanced": {
                "type": "object",
                "properties": {
                    "log_level": {
                        "type": "string",
                        "enum": ["DEBUG", "INFO", "WARNING", "ERROR"],
                    },
                    "log_file": {"type": ["string", "null"]},
                },
            },
        },
        "required": ["version"],
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. Defaults to ~/.timecard/config.yml
        """
        if config_path is None:
            config_path = Path.home() / ".timecard" / "config.yml"
        self.config_path = Path(config_path)
        self._config: dict[str, Any] = {}
        self._load_or_create()

    def _load_or_create(self) -> None:
        """Load existing config or create default."""
        if self.config_path.exists():
            try:
                loaded_config = self._read_config_file()
                # Merge with defaults to ensure all keys exist
                self._config = self._merge_with_defaults(loaded_config)
                self.validate()
            except ValueError as e:
                # Back up the unusable config and use defaults
                backup_path = self.config_path.with_suffix(".yml.backup")
                self.config_path.replace(backup_path)
                self._config = copy.deepcopy(self.DEFAULT_CONFIG)
                self.save()
                logger.warning(f"Invalid config moved to {backup_path}")
                raise ValueError(
                    f"Config validation failed, backed up to {backup_path}. "
                    f"Using defaults. Error: {e}"
                )
        else:
            self._config = copy.deepcopy(self.DEFAULT_CONFIG)
            self.save()
            logger.debug(f"Created default config at {self.config_path}")

    def _read_config_file(self) -> dict[str, Any]:
        """Parse the config file.

        Raises:
            ValueError: If the file is not valid YAML or not a mapping
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}")

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError("Invalid configuration: top level must be a mapping")
        return loaded

    def _merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge config with defaults to ensure all keys exist."""
        result = copy.deepcopy(self.DEFAULT_CONFIG)
        self._deep_merge(result, config)
        return result

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge override into base dictionary (in-place)."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'general.data_file')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('report.default_period')
            'today'
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Raises:
            ValueError: If configuration is invalid after setting. The
                previous configuration is kept.
        """
        previous = copy.deepcopy(self._config)
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

        try:
            self.validate()
        except ValueError:
            self._config = previous
            raise
        self.save()

    def validate(self) -> bool:
        """Validate configuration against schema.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            validate(instance=self._config, schema=self.CONFIG_SCHEMA)
            return True
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e.message}")

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self._config, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def reset(self) -> None:
        """Reset to default configuration."""
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save()

    def to_dict(self) -> dict[str, Any]:
        """Get full configuration as dictionary."""
        return copy.deepcopy(self._config)

    @property
    def data_file(self) -> Path:
        """Configured data file with '~' expanded."""
        return Path(self.get("general.data_file")).expanduser()
