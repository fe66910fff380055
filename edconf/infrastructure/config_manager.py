#!/usr/bin/env python3
"""Hierarchical configuration manager for edconf.

This module provides configuration management with:
- 6-level precedence hierarchy
- YAML configuration files
- Environment variable overrides (EDCONF_*)
- Validation of the ``edconf`` section
- Thread-safe reads and writes
- Deep merging of nested sections

Configuration is read once during startup. There is no hot-reload: the
auto-mode rule table built from it must not change after the first file
event has been dispatched.

Example:
    >>> config = ConfigManager()
    >>> config.load_file("edconf.yaml")
    >>> config.get("edconf.settings.history_length", default=1000)
"""

import copy
import os
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from edconf.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from edconf.core.validators import ValidationError, validate_config

ENV_PREFIX = "EDCONF_"
ENV_NESTING = "__"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    CLI_ARGS = 5
    RUNTIME = 6  # Highest precedence


@dataclass
class ConfigValue:
    """Configuration value with metadata."""

    value: Any
    source: ConfigSource


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. System config (/etc/edconf/config.yaml)
    3. User config (~/.config/edconf/config.yaml)
    4. Environment variables (EDCONF_*)
    5. CLI arguments
    6. Runtime updates (highest)
    """

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Read EDCONF_* environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._loaded_files: List[str] = []

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.PERMISSION_DENIED)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        with self._lock:
            self._config[source] = config_data
            if str(path) not in self._loaded_files:
                self._loaded_files.append(str(path))

    def load_dict(
        self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME
    ) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables use the form EDCONF_KEY=value, with a double
        underscore separating nested keys.
        Example: EDCONF_SETTINGS__HISTORY_LENGTH=500
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split(ENV_NESTING)
            if not all(parts):
                continue

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
                if not isinstance(current, dict):
                    break
            else:
                current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ConfigKey.SECTION: env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (bool, int, float, or str)
        """
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "edconf.settings.encoding")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._get_nested(self.get_all(), key)
        return default if value is None else value

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-separated key path

        Returns:
            Value or None if not found
        """
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def get_value(self, key: str) -> Optional[ConfigValue]:
        """Get a value together with the source that provided it.

        Returns:
            ConfigValue from the highest-precedence source, or None
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return ConfigValue(value=value, source=source)
        return None

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})
            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def section(self) -> Dict[str, Any]:
        """Return the merged ``edconf`` section."""
        return self.get_all().get(ConfigKey.SECTION) or {}

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def validate(self) -> bool:
        """Validate the merged ``edconf`` section.

        Returns:
            True if valid

        Raises:
            ConfigError: If validation fails
        """
        try:
            return validate_config(self.section())
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", e.error_code)

    def loaded_files(self) -> List[str]:
        """Return the resolved paths of every file loaded so far, in load order."""
        with self._lock:
            return list(self._loaded_files)

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create global configuration manager.

    Args:
        config_file: Optional config file to load

    Returns:
        Global configuration manager
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: ConfigManager) -> None:
    """Set the global configuration manager."""
    global _global_config
    _global_config = config
