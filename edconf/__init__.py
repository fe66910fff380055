"""edconf - editor distribution bootstrap and auto minor-mode dispatch."""

from edconf.core.constants import EDCONF_VERSION as __version__
from edconf.events import FileEvent, FileOpenedEvents
from edconf.locations import Locations, resolve_locations
from edconf.modes import MinorMode, ModeRegistry
from edconf.rules import AutoModeDispatcher, PatternError, RuleTable

__all__ = [
    "__version__",
    "FileEvent",
    "FileOpenedEvents",
    "Locations",
    "resolve_locations",
    "MinorMode",
    "ModeRegistry",
    "AutoModeDispatcher",
    "PatternError",
    "RuleTable",
]
