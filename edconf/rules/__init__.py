"""edconf auto minor-mode rules.

This package provides the rule table and the dispatcher that evaluates it:
- PathNormalizer: version-suffix and remote-prefix stripping
- RuleTable: ordered pattern → action rules
- AutoModeDispatcher: activates every matching mode for an opened file
"""

from .dispatcher import ENABLE, ActionError, AutoModeDispatcher, DispatchResult
from .patterns import VERSION_SUFFIX, PathNormalizer, normalize_path
from .table import PatternError, Rule, RuleTable, compile_pattern

__all__ = [
    # Normalization
    "VERSION_SUFFIX",
    "PathNormalizer",
    "normalize_path",
    # Rule table
    "PatternError",
    "Rule",
    "RuleTable",
    "compile_pattern",
    # Dispatch
    "ENABLE",
    "ActionError",
    "AutoModeDispatcher",
    "DispatchResult",
]
