"""Configuration loader for YAML files.

This module provides configuration loading with nested dot-notation access,
defaults, and merging of a user file over the bundled defaults.

Typical usage example:
    from movingmap.core.config import ConfigLoader

    config = ConfigLoader.load("config/movingmap.yaml")
    corridor_km = config.get("navaid_cache.corridor_km", default=80.0)
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Examples:
        >>> config = ConfigLoader.load("config/movingmap.yaml")
        >>> radius = config.get("navaid_cache.airport_radius_nm", default=50)
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary (empty if None).
        """
        self._data = data if data is not None else {}

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If the file is missing, unreadable, or not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    @classmethod
    def load_layered(cls, defaults: str | Path, override: str | Path | None = None) -> "ConfigLoader":
        """Load the bundled defaults and merge an optional user file over them.

        Args:
            defaults: Path to the defaults file. A missing defaults file yields
                an empty configuration.
            override: Optional user configuration path; must exist if given.

        Returns:
            Merged configuration.

        Raises:
            ConfigError: If the override file cannot be loaded.
        """
        defaults = Path(defaults)
        config = cls.load(defaults) if defaults.exists() else cls()
        if override is not None:
            config.merge(cls.load(override))
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key, e.g. "navaid_cache.corridor_km".
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        value: Any = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation, creating sections as needed."""
        keys = key.split(".")
        data = self._data

        for k in keys[:-1]:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]

        data[keys[-1]] = value

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Other config values override existing ones; nested sections merge.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result
