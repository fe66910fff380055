"""
edconf Foundation: Constants and Type Definitions

This module provides system-wide constants, error codes, and the default
configuration tree shared by the bootstrap, the CLI and the tests.
"""
from enum import IntEnum
from typing import Callable, TypeAlias

# Version information
EDCONF_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for edconf operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad pattern, invalid configuration
    NOT_FOUND = 2  # File, mode or subsystem doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Duplicate mode name
    INTERNAL_ERROR = 5  # Action or subsystem raised unexpectedly


# Rule actions receive the enable flag
ModeAction: TypeAlias = Callable[[int], object]


# Defaults for the location registry and baseline settings
class Defaults:
    """Default values used when configuration is silent."""

    ROOT_DIR = "~/.emacs.d/"
    ROOT_ENV_VAR = "EDCONF_ROOT"

    ENCODING = "utf-8"
    HISTORY_LENGTH = 1000
    KEPT_NEW_VERSIONS = 5
    KEPT_OLD_VERSIONS = 2

    # Garbage collector generation-0 threshold while starting up
    STARTUP_GC_THRESHOLD = 100_000


# Configuration keys
class ConfigKey:
    """Configuration key constants (relative to the ``edconf`` section)."""

    SECTION = "edconf"

    ROOT = "root"
    HOST = "host"
    ENSURE_DIRECTORIES = "ensure_directories"

    SETTINGS = "settings"
    MODES = "modes"
    AUTO_MODES = "auto_modes"
    SUBSYSTEMS = "subsystems"
    GC = "gc"
    LOGGING = "logging"

    # auto_modes entries
    RULE_NAME = "name"
    RULE_PATTERN = "pattern"
    RULE_MODE = "mode"
    RULE_PREPEND = "prepend"

    # gc section
    GC_STARTUP_THRESHOLD = "startup_threshold"
    GC_RUNTIME_THRESHOLD = "runtime_threshold"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.SECTION: {
        ConfigKey.ROOT: None,
        ConfigKey.HOST: None,
        ConfigKey.ENSURE_DIRECTORIES: False,
        ConfigKey.SETTINGS: {
            "encoding": Defaults.ENCODING,
            "history_length": Defaults.HISTORY_LENGTH,
            "make_backups": False,
            "version_control": True,
            "kept_new_versions": Defaults.KEPT_NEW_VERSIONS,
            "kept_old_versions": Defaults.KEPT_OLD_VERSIONS,
            "create_lockfiles": False,
        },
        ConfigKey.MODES: [],
        ConfigKey.AUTO_MODES: [],
        ConfigKey.SUBSYSTEMS: [],
        ConfigKey.GC: {
            ConfigKey.GC_STARTUP_THRESHOLD: Defaults.STARTUP_GC_THRESHOLD,
            ConfigKey.GC_RUNTIME_THRESHOLD: None,
        },
        ConfigKey.LOGGING: {
            "level": "INFO",
            "file": None,
        },
    }
}
