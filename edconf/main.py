#!/usr/bin/env python3
"""Startup sequencing for edconf.

This module handles:
- Garbage-collector tuning for the duration of startup
- Location resolution and baseline settings
- Minor-mode definitions and the auto-mode rule table
- Ordered loading of subordinate subsystems
- Wiring the dispatcher to the file-opened event source

Example:
    >>> from edconf.main import run_edconf
    >>> context = run_edconf(config, logger)
    >>> context.events.emit("/home/me/notes.txt")
"""

import gc
import importlib
import sys
from dataclasses import dataclass, field
from typing import List, MutableMapping, Optional, Tuple

from edconf.core.constants import ConfigKey, Defaults
from edconf.core.validators import validate_gc_config
from edconf.events import FileOpenedEvents
from edconf.infrastructure.config_manager import ConfigManager
from edconf.infrastructure.logger import Logger
from edconf.locations import Locations, resolve_locations
from edconf.modes import ModeRegistry, UnknownModeError
from edconf.rules.dispatcher import AutoModeDispatcher
from edconf.rules.table import PatternError, RuleTable
from edconf.settings import Settings


@dataclass
class BootContext:
    """Everything produced by startup, handed to subsystems and callers."""

    config: ConfigManager
    logger: Logger
    locations: Optional[Locations] = None
    settings: Optional[Settings] = None
    modes: ModeRegistry = field(default_factory=ModeRegistry)
    rule_table: RuleTable = field(default_factory=RuleTable)
    dispatcher: Optional[AutoModeDispatcher] = None
    events: FileOpenedEvents = field(default_factory=FileOpenedEvents)
    loaded_subsystems: List[str] = field(default_factory=list)
    failed_subsystems: List[Tuple[str, Exception]] = field(default_factory=list)
    skipped_rules: List[Tuple[int, Exception]] = field(default_factory=list)


class Bootstrap:
    """
    Runs the startup sequence.

    Configuration is complete when ``run`` returns: the rule table is not
    modified afterwards, and the dispatcher is subscribed to the events.
    """

    def __init__(
        self,
        config: ConfigManager,
        logger: Logger,
        environ: Optional[MutableMapping[str, str]] = None,
    ):
        """
        Initialize bootstrap.

        Args:
            config: Configuration manager
            logger: Logger instance
            environ: Environment receiving exported settings (os.environ)
        """
        self.config = config
        self.logger = logger
        self.environ = environ
        self._saved_gc_threshold: Optional[Tuple[int, int, int]] = None

    def check_gc_config(self) -> None:
        """Validate GC tuning before any threshold is changed.

        Raises:
            ValidationError: If a threshold is not a positive integer
        """
        validate_gc_config(self.config.section().get(ConfigKey.GC) or {})

    def tune_gc(self) -> None:
        """Raise the generation-0 GC threshold for the duration of startup."""
        startup = self.config.get(
            f"{ConfigKey.SECTION}.{ConfigKey.GC}.{ConfigKey.GC_STARTUP_THRESHOLD}",
            Defaults.STARTUP_GC_THRESHOLD,
        )
        self._saved_gc_threshold = gc.get_threshold()
        _, gen1, gen2 = self._saved_gc_threshold
        gc.set_threshold(startup, gen1, gen2)
        self.logger.debug("Raised GC threshold for startup", threshold=startup)

    def restore_gc(self) -> None:
        """Set the runtime GC threshold, or put back the pre-startup one."""
        if self._saved_gc_threshold is None:
            return
        threshold, gen1, gen2 = self._saved_gc_threshold
        runtime = self.config.get(
            f"{ConfigKey.SECTION}.{ConfigKey.GC}.{ConfigKey.GC_RUNTIME_THRESHOLD}"
        )
        gc.set_threshold(runtime or threshold, gen1, gen2)
        self._saved_gc_threshold = None
        self.logger.debug("Restored GC threshold", threshold=runtime or threshold)

    def resolve_locations(self, context: BootContext) -> None:
        """Resolve root and host-namespaced directories."""
        section = self.config.section()
        context.locations = resolve_locations(
            root=section.get(ConfigKey.ROOT), host=section.get(ConfigKey.HOST)
        )
        if section.get(ConfigKey.ENSURE_DIRECTORIES):
            context.locations.ensure()
        self.logger.info(
            "Resolved locations",
            root=context.locations.root,
            host=context.locations.host,
        )

    def apply_settings(self, context: BootContext) -> None:
        """Build and apply baseline settings."""
        context.settings = Settings.from_config(
            self.config.section().get(ConfigKey.SETTINGS), context.locations
        )
        applied = context.settings.apply(self.environ)
        self.logger.debug("Applied baseline settings", **applied)

    def define_modes(self, context: BootContext) -> None:
        """Define the minor modes named in configuration."""
        for name in self.config.section().get(ConfigKey.MODES) or []:
            if name in context.modes:
                continue
            context.modes.define(name)
        self.logger.debug("Defined minor modes", count=len(context.modes))

    def register_rules(self, context: BootContext) -> None:
        """Create the dispatcher and register configured auto-mode rules.

        Entries with an invalid pattern or an unknown mode are logged and
        skipped; the remaining rules are still registered.
        """
        context.dispatcher = AutoModeDispatcher(context.rule_table, self.logger)

        entries = self.config.section().get(ConfigKey.AUTO_MODES) or []
        for index, entry in enumerate(entries):
            try:
                context.dispatcher.register(
                    entry.get(ConfigKey.RULE_PATTERN),
                    context.modes.action(entry[ConfigKey.RULE_MODE]),
                    name=entry.get(ConfigKey.RULE_NAME, entry[ConfigKey.RULE_MODE]),
                    prepend=bool(entry.get(ConfigKey.RULE_PREPEND, False)),
                )
            except (PatternError, UnknownModeError, KeyError, AttributeError) as e:
                context.skipped_rules.append((index, e))
                self.logger.warning(f"Skipped auto-mode rule: {e}", index=index)

        self.logger.info("Registered auto-mode rules", count=len(context.rule_table))

    def load_subsystems(self, context: BootContext) -> None:
        """Import subsystems in order and call their ``setup(context)``.

        A failing subsystem is logged and recorded; later ones still load.
        """
        for name in self.config.section().get(ConfigKey.SUBSYSTEMS) or []:
            try:
                module = importlib.import_module(name)
                setup = getattr(module, "setup", None)
                if callable(setup):
                    setup(context)
            except Exception as e:
                context.failed_subsystems.append((name, e))
                self.logger.exception("Failed to load subsystem", e, subsystem=name)
                continue
            context.loaded_subsystems.append(name)
            self.logger.debug("Loaded subsystem", subsystem=name)

    def connect_events(self, context: BootContext) -> None:
        """Subscribe the dispatcher to file-open notifications."""
        context.events.subscribe(context.dispatcher)

    def run(self) -> BootContext:
        """
        Run the startup sequence.

        Returns:
            Populated BootContext

        Raises:
            ValidationError: If GC tuning, locations or settings are invalid
        """
        context = BootContext(config=self.config, logger=self.logger)
        self.logger.info("Starting up...")

        self.check_gc_config()
        self.tune_gc()
        try:
            self.resolve_locations(context)
            self.apply_settings(context)
            self.define_modes(context)
            self.register_rules(context)
            self.load_subsystems(context)
            self.connect_events(context)
        finally:
            self.restore_gc()

        self.logger.info(
            "Startup complete",
            rules=len(context.rule_table),
            subsystems=len(context.loaded_subsystems),
            failed=len(context.failed_subsystems),
        )
        return context


def run_edconf(
    config: ConfigManager,
    logger: Logger,
    environ: Optional[MutableMapping[str, str]] = None,
) -> BootContext:
    """
    Main entry point for running the startup sequence.

    Args:
        config: Configuration manager
        logger: Logger instance
        environ: Environment receiving exported settings (os.environ)

    Returns:
        Populated BootContext
    """
    return Bootstrap(config, logger, environ=environ).run()


def main():
    """
    Entry point when run as standalone script.

    Typically called via cli.py, but can be run directly for testing.
    """
    from edconf.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
