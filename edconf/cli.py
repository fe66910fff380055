#!/usr/bin/env python3
"""Command-line interface for edconf.

This module provides the CLI for inspecting a configuration tree:
- Argument parsing and validation
- Configuration file loading
- Location listing
- Dry-run dispatch of a file-open event
- Configuration checking

Example:
    >>> from edconf.cli import parse_arguments
    >>> args = parse_arguments(['--host', 'alpha', 'locations'])
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from edconf.core.constants import EDCONF_VERSION, ConfigKey
from edconf.core.validators import ValidationError
from edconf.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from edconf.infrastructure.logger import Logger
from edconf.locations import resolve_locations

VERSION = EDCONF_VERSION
DESCRIPTION = "edconf - editor distribution bootstrap and auto minor-mode dispatch"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If a referenced file does not exist
    """
    parser = argparse.ArgumentParser(
        prog="edconf",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show where state is kept on this machine
  edconf locations

  # Show locations for another host sharing the same tree
  edconf --root ~/.emacs.d --host beta locations

  # Which modes would a file get?
  edconf --config edconf.yaml dispatch /home/me/notes.txt.~3~

  # Remote file
  edconf -c edconf.yaml dispatch /ssh:alpha:/etc/hosts --remote-marker /ssh:alpha:
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument("--root", metavar="DIR", type=str, help="Distribution root directory")
    parser.add_argument("--host", metavar="NAME", type=str, help="Host name for volatile state")

    log_group = parser.add_argument_group("logging options")
    log_group.add_argument("--debug", action="store_true", help="Enable debug logging")
    log_group.add_argument("--log-file", metavar="FILE", type=str, help="Also log to this file")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    commands.add_parser("locations", help="Print resolved locations")

    dispatch = commands.add_parser("dispatch", help="Dispatch a file-open event and report modes")
    dispatch.add_argument("path", metavar="PATH", help="Path of the opened file")
    dispatch.add_argument(
        "--remote-marker",
        metavar="PREFIX",
        default=None,
        help="Remote-authority prefix of PATH (e.g. /ssh:host:)",
    )

    commands.add_parser("check", help="Validate configuration and list auto-mode rules")

    parsed = parser.parse_args(args)
    _validate_arguments(parsed)
    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        CLIError: If validation fails
    """
    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")


def build_config_from_args(args: argparse.Namespace) -> Dict:
    """
    Build configuration dictionary from command-line arguments.

    Only options actually given are included, so they override file
    configuration without masking it.
    """
    section: Dict = {}
    if args.root:
        section[ConfigKey.ROOT] = args.root
    if args.host:
        section[ConfigKey.HOST] = args.host

    logging_config = {}
    if args.debug:
        logging_config["level"] = "DEBUG"
    if args.log_file:
        logging_config["file"] = args.log_file
    if logging_config:
        section[ConfigKey.LOGGING] = logging_config

    return {ConfigKey.SECTION: section}


def load_config(args: argparse.Namespace) -> ConfigManager:
    """
    Assemble the layered configuration for a CLI invocation.

    Raises:
        ConfigError: If the configuration file cannot be loaded
    """
    config = ConfigManager(args.config)
    config.load_dict(build_config_from_args(args), source=ConfigSource.CLI_ARGS)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Returns:
        Configured logger instance
    """
    logging_config = config.section().get(ConfigKey.LOGGING) or {}
    logger = Logger("edconf", level=logging_config.get("level", "INFO"))

    log_file = logging_config.get("file")
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))
        logger.debug(f"Logging to file: {log_file}")

    return logger


def cmd_locations(config: ConfigManager, out=None) -> int:
    """Print resolved locations, one ``name: path`` per line."""
    out = out or sys.stdout
    section = config.section()
    locations = resolve_locations(root=section.get(ConfigKey.ROOT), host=section.get(ConfigKey.HOST))
    for key, value in locations.as_dict().items():
        print(f"{key}: {value}", file=out)
    return 0


def cmd_dispatch(args: argparse.Namespace, config: ConfigManager, logger: Logger, out=None) -> int:
    """Bootstrap, emit one file-open event and report the outcome."""
    from edconf.main import run_edconf

    out = out or sys.stdout
    context = run_edconf(config, logger, environ={})
    for result in context.events.emit(args.path, remote_marker=args.remote_marker):
        print(f"path: {result.normalized_path}", file=out)
        for rule in result.activated:
            print(f"activated: {rule.describe()}", file=out)
        for error in result.failures:
            print(f"failed: {error.rule.describe()}: {error.cause}", file=out)
    return 0


def cmd_check(config: ConfigManager, logger: Logger, out=None) -> int:
    """Validate configuration, report where it came from and list its rules."""
    from edconf.main import run_edconf

    out = out or sys.stdout
    config.validate()
    context = run_edconf(config, logger, environ={})
    for path in config.loaded_files():
        print(f"config: {path}", file=out)
    for key in (ConfigKey.ROOT, ConfigKey.HOST):
        value = config.get_value(f"{ConfigKey.SECTION}.{key}")
        if value is not None:
            print(f"{key}: {value.value} ({value.source.name.lower()})", file=out)
    for rule in context.rule_table:
        print(f"rule: {rule.describe()}", file=out)
    for name, error in context.failed_subsystems:
        print(f"subsystem failed: {name}: {error}", file=out)
    return 1 if context.failed_subsystems or context.skipped_rules else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        args = parse_arguments(argv)
        config = load_config(args)
        logger = setup_logging(config)

        if args.command == "locations":
            return cmd_locations(config)
        if args.command == "dispatch":
            return cmd_dispatch(args, config, logger)
        return cmd_check(config, logger)

    except (CLIError, ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
