"""
edconf Foundation: Input Validators.

This module provides validation functions for the ``edconf`` configuration
section: auto-mode rules, mode names, baseline settings, subsystem lists
and garbage-collector tuning.
"""
import codecs
import re
from typing import Any, Dict, List, Pattern

from edconf.core.constants import ConfigKey, ErrorCode

_IDENTIFIER = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
_MODULE_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*$")
_HOST_NAME = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9._-]*$")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate the ``edconf`` configuration section.

    Args:
        config: Contents of the ``edconf`` section

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    host = config.get(ConfigKey.HOST)
    if host is not None:
        validate_host_name(host)

    if config.get(ConfigKey.SETTINGS) is not None:
        validate_settings_config(config[ConfigKey.SETTINGS])

    modes = config.get(ConfigKey.MODES) or []
    if not isinstance(modes, list):
        raise ValidationError("Modes must be a list")
    for i, name in enumerate(modes):
        try:
            validate_mode_name(name)
        except ValidationError as e:
            raise ValidationError(f"Invalid mode at index {i}: {e}")

    rules = config.get(ConfigKey.AUTO_MODES) or []
    if not isinstance(rules, list):
        raise ValidationError("Auto modes must be a list")
    for i, rule in enumerate(rules):
        try:
            validate_auto_mode_config(rule)
        except ValidationError as e:
            raise ValidationError(f"Invalid auto mode configuration at index {i}: {e}")

    validate_subsystems(config.get(ConfigKey.SUBSYSTEMS) or [])

    if config.get(ConfigKey.GC) is not None:
        validate_gc_config(config[ConfigKey.GC])

    return True


def validate_auto_mode_config(rule: Dict[str, Any]) -> bool:
    """Validate a single auto-mode rule entry.

    Args:
        rule: Rule dictionary with ``pattern`` and ``mode`` fields

    Returns:
        True if valid

    Raises:
        ValidationError: If rule is invalid
    """
    if not isinstance(rule, dict):
        raise ValidationError("Auto mode rule must be a dictionary")

    if ConfigKey.RULE_PATTERN not in rule:
        raise ValidationError("Auto mode rule must have 'pattern' field")
    # Empty or null patterns make inert rules
    if rule[ConfigKey.RULE_PATTERN] not in ("", None):
        validate_regex(rule[ConfigKey.RULE_PATTERN])

    if ConfigKey.RULE_MODE not in rule:
        raise ValidationError("Auto mode rule must have 'mode' field")
    validate_mode_name(rule[ConfigKey.RULE_MODE])

    if ConfigKey.RULE_PREPEND in rule:
        prepend = rule[ConfigKey.RULE_PREPEND]
        if not isinstance(prepend, bool):
            raise ValidationError(f"Auto mode prepend must be boolean: {prepend}")

    return True


def validate_settings_config(settings: Dict[str, Any]) -> bool:
    """Validate baseline settings.

    Args:
        settings: Settings dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If settings are invalid
    """
    if not isinstance(settings, dict):
        raise ValidationError("Settings must be a dictionary")

    valid_fields = {
        "encoding",
        "history_length",
        "make_backups",
        "version_control",
        "kept_new_versions",
        "kept_old_versions",
        "create_lockfiles",
    }
    unknown_fields = set(settings.keys()) - valid_fields
    if unknown_fields:
        raise ValidationError(f"Unknown settings fields: {', '.join(sorted(unknown_fields))}")

    if "encoding" in settings:
        validate_encoding(settings["encoding"])

    for key in ("history_length", "kept_new_versions", "kept_old_versions"):
        if key in settings:
            value = settings[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(f"Setting {key} must be non-negative integer: {value}")

    for key in ("make_backups", "version_control", "create_lockfiles"):
        if key in settings and not isinstance(settings[key], bool):
            raise ValidationError(f"Setting {key} must be boolean: {settings[key]}")

    return True


def validate_gc_config(gc_config: Dict[str, Any]) -> bool:
    """Validate garbage-collector tuning.

    Raises:
        ValidationError: If a threshold is not a positive integer
    """
    if not isinstance(gc_config, dict):
        raise ValidationError("GC configuration must be a dictionary")

    for key in (ConfigKey.GC_STARTUP_THRESHOLD, ConfigKey.GC_RUNTIME_THRESHOLD):
        value = gc_config.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError(f"GC {key} must be positive integer: {value}")

    return True


def validate_subsystems(subsystems: List[str]) -> bool:
    """Validate the ordered list of subsystem module names.

    Raises:
        ValidationError: If the list or a module name is invalid
    """
    if not isinstance(subsystems, list):
        raise ValidationError("Subsystems must be a list")

    for name in subsystems:
        if not isinstance(name, str) or not _MODULE_NAME.match(name):
            raise ValidationError(f"Invalid subsystem module name: {name}")

    return True


def validate_mode_name(name: str) -> bool:
    """Validate minor mode name.

    Args:
        name: Mode name to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError("Mode name cannot be empty")

    if not isinstance(name, str):
        raise ValidationError(f"Mode name must be string, got {type(name)}")

    if not _IDENTIFIER.match(name):
        raise ValidationError(
            "Invalid mode name: must start with letter and contain only letters, "
            "numbers, underscore, and hyphen"
        )

    return True


def validate_host_name(host: str) -> bool:
    """Validate a host identifier used in host-namespaced directories.

    Raises:
        ValidationError: If host is empty or contains path separators
    """
    if not host or not isinstance(host, str):
        raise ValidationError("Host name must be a non-empty string")

    if not _HOST_NAME.match(host):
        raise ValidationError(f"Invalid host name: {host}")

    return True


def validate_encoding(encoding: str) -> bool:
    """Validate that an encoding name is known to the codecs registry.

    Raises:
        ValidationError: If encoding is unknown
    """
    if not encoding or not isinstance(encoding, str):
        raise ValidationError("Encoding must be a non-empty string")

    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ValidationError(f"Unknown encoding: {encoding}")

    return True


def validate_regex(pattern: str) -> Pattern[str]:
    """Validate and compile a regex pattern.

    Args:
        pattern: Regex pattern string

    Returns:
        Compiled regex pattern

    Raises:
        ValidationError: If pattern is invalid
    """
    if not pattern:
        raise ValidationError("Regex pattern cannot be empty")

    if not isinstance(pattern, str):
        raise ValidationError(f"Regex pattern must be string, got {type(pattern)}")

    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(f"Failed to compile regex pattern: {e}")
