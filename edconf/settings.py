#!/usr/bin/env python3
"""Baseline environment settings: encoding, history and backup policy.

Backups follow the numbered-version convention stripped by path
normalization (``foo.txt.~3~``), and are written to a directory under the
host-namespaced cache so shared trees never mix backups between machines.
"""

import codecs
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, MutableMapping, Optional

from edconf.core.constants import Defaults
from edconf.core.validators import validate_settings_config
from edconf.locations import Locations


@dataclass(frozen=True)
class Settings:
    """Immutable baseline settings."""

    encoding: str = Defaults.ENCODING
    history_length: int = Defaults.HISTORY_LENGTH
    make_backups: bool = False
    version_control: bool = True
    kept_new_versions: int = Defaults.KEPT_NEW_VERSIONS
    kept_old_versions: int = Defaults.KEPT_OLD_VERSIONS
    create_lockfiles: bool = False
    backup_directory: Optional[str] = None
    auto_save_directory: Optional[str] = None

    @classmethod
    def from_config(cls, settings: Optional[Dict[str, Any]], locations: Locations) -> "Settings":
        """Build settings from the ``edconf.settings`` section.

        Args:
            settings: Settings dictionary (may be None or partial)
            locations: Resolved locations for derived directories

        Returns:
            Settings instance

        Raises:
            ValidationError: If a value is invalid
        """
        settings = dict(settings or {})
        validate_settings_config(settings)
        return cls(
            backup_directory=locations.cache_dir + "backup/",
            auto_save_directory=locations.cache_dir + "autosave/",
            **settings,
        )

    def apply(self, environ: Optional[MutableMapping[str, str]] = None) -> Dict[str, str]:
        """Export the preferred encoding to child processes.

        ``PYTHONIOENCODING`` is always set. For UTF-8, ``LANG`` and
        ``LC_CTYPE`` are set to ``C.UTF-8`` when unset.

        Args:
            environ: Mapping to update (defaults to os.environ)

        Returns:
            The variables that were set
        """
        if environ is None:
            environ = os.environ

        applied = {"PYTHONIOENCODING": self.encoding}
        if codecs.lookup(self.encoding).name == "utf-8":
            for var in ("LANG", "LC_CTYPE"):
                if not environ.get(var):
                    applied[var] = "C.UTF-8"

        environ.update(applied)
        return applied

    def backup_name(self, path: str, version: int) -> str:
        """Numbered backup file name for path."""
        return f"{path}.~{version}~"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
