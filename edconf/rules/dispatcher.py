#!/usr/bin/env python3
r"""Automatic minor-mode dispatch.

On every file-open event the dispatcher normalizes the file's path and
invokes the action of every rule whose pattern matches it:
- Version suffixes and remote prefixes are stripped first
- Rules are evaluated in table order
- All matching rules fire, there is no first-match-wins
- A failing action is reported and does not stop later rules

Example:
    >>> dispatcher = AutoModeDispatcher(RuleTable(), logger)
    >>> dispatcher.register(r"\.txt$", modes.action("whitespace"))
    >>> dispatcher.register("foo", modes.action("lint"))
    >>> result = dispatcher.dispatch(FileEvent("/a/foo.txt"))
    >>> [rule.describe() for rule in result.activated]
    ['\\.txt$', 'foo']
"""

from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Union

from edconf.core.constants import ErrorCode, ModeAction
from edconf.events import FileEvent
from edconf.infrastructure.logger import Logger, get_logger
from edconf.rules.patterns import PathNormalizer
from edconf.rules.table import Rule, RuleTable

# Flag passed to every action; activating an enabled mode is a no-op.
ENABLE = 1


class ActionError(Exception):
    """An action raised while being activated for a file."""

    def __init__(self, rule: Rule, path: str, cause: Exception):
        self.rule = rule
        self.path = path
        self.cause = cause
        self.error_code = ErrorCode.INTERNAL_ERROR
        super().__init__(
            f"Auto-mode action for {rule.describe()!r} failed on {path}: "
            f"{type(cause).__name__}: {cause}"
        )
        self.__cause__ = cause


@dataclass
class DispatchResult:
    """Outcome of a single dispatch call."""

    path: str
    normalized_path: str
    matched: List[Rule] = field(default_factory=list)
    activated: List[Rule] = field(default_factory=list)
    failures: List[ActionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no action failed."""
        return not self.failures


class AutoModeDispatcher:
    """Activates minor modes for opened files according to a rule table.

    The dispatcher is callable with a FileEvent so it can be subscribed to
    a ``FileOpenedEvents`` source directly. It never raises from dispatch.
    """

    def __init__(
        self,
        rule_table: Optional[RuleTable] = None,
        logger: Optional[Logger] = None,
        normalizer: Optional[PathNormalizer] = None,
    ):
        """Initialize dispatcher.

        Args:
            rule_table: Table to evaluate; owned by the caller
            logger: Diagnostic sink for activations and failures
            normalizer: Path normalizer (default version-suffix convention)
        """
        self.rule_table = rule_table if rule_table is not None else RuleTable()
        self.logger = logger or get_logger()
        self.normalizer = normalizer or PathNormalizer()

    def register(
        self,
        pattern: Union[str, Pattern[str], None],
        action: Optional[ModeAction],
        name: Optional[str] = None,
        prepend: bool = False,
    ) -> Rule:
        """Add a rule to the table.

        Raises:
            PatternError: If pattern does not compile
        """
        rule = self.rule_table.add(pattern, action, name=name, prepend=prepend)
        self.logger.debug("Registered auto-mode rule", rule=rule.describe(), prepend=prepend)
        return rule

    def dispatch(self, event: FileEvent) -> DispatchResult:
        """Activate every mode whose rule matches the event's path.

        Args:
            event: File-open event

        Returns:
            DispatchResult listing fired rules and isolated failures
        """
        if not event.path:
            return DispatchResult(path="", normalized_path="")

        normalized = self.normalizer.normalize(event.path, event.remote_marker)
        result = DispatchResult(path=event.path, normalized_path=normalized)

        with self.logger.add_context(path=normalized):
            for rule in self.rule_table:
                if not rule.matches(normalized):
                    continue
                result.matched.append(rule)
                try:
                    rule.action(ENABLE)
                except Exception as exc:
                    error = ActionError(rule, normalized, exc)
                    result.failures.append(error)
                    self.logger.exception(
                        "Auto-mode action failed", exc, rule=rule.describe()
                    )
                    continue
                result.activated.append(rule)
                self.logger.debug("Activated auto mode", rule=rule.describe())

        return result

    __call__ = dispatch
