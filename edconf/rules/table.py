#!/usr/bin/env python3
r"""Ordered rule table for automatic minor-mode activation.

A rule pairs a compiled regular expression with an action, a callable
taking a single enable flag. The table keeps rules in registration order;
order decides evaluation order only, every matching rule fires.

Example:
    >>> table = RuleTable()
    >>> table.add(r"\.txt$", modes.action("whitespace"))
    >>> table.add("foo", modes.action("lint"), name="foo-lint")
    >>> [rule.name for rule in table]
    [None, 'foo-lint']
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Pattern, Union

from edconf.core.constants import ErrorCode, ModeAction


class PatternError(Exception):
    """Raised when a rule pattern is not a string or fails to compile."""

    def __init__(self, pattern: object, message: str):
        self.pattern = pattern
        self.error_code = ErrorCode.INVALID_INPUT
        super().__init__(f"Invalid auto-mode pattern {pattern!r}: {message}")


@dataclass(frozen=True)
class Rule:
    """A pattern → action pair.

    A rule without a pattern or without an action is inert: it is kept in
    the table but never matches and is never invoked.
    """

    pattern: Optional[Pattern[str]]
    action: Optional[ModeAction]
    name: Optional[str] = None

    @property
    def inert(self) -> bool:
        """True if the rule can never fire."""
        return self.pattern is None or self.action is None

    def matches(self, path: str) -> bool:
        """Check if the rule's pattern occurs anywhere in path."""
        if self.inert:
            return False
        return self.pattern.search(path) is not None

    def describe(self) -> str:
        """Human readable label for diagnostics."""
        if self.name:
            return self.name
        if self.pattern is not None:
            return self.pattern.pattern
        return "<inert>"


def compile_pattern(pattern: Union[str, Pattern[str], None]) -> Optional[Pattern[str]]:
    """Compile a rule pattern.

    Args:
        pattern: Regex source, precompiled pattern, or None for an inert rule.
            An empty pattern is treated like None.

    Returns:
        Compiled pattern, or None

    Raises:
        PatternError: If pattern is not a string or does not compile
    """
    if pattern is None:
        return None

    if isinstance(pattern, re.Pattern):
        return pattern if pattern.pattern else None

    if not isinstance(pattern, str):
        raise PatternError(pattern, f"expected string, got {type(pattern).__name__}")

    if not pattern:
        return None

    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e))


class RuleTable:
    """Ordered, append-mostly sequence of rules.

    The table is populated while configuration loads and read-only once
    file events are served. It offers no removal.
    """

    def __init__(self) -> None:
        self._rules: List[Rule] = []

    def add(
        self,
        pattern: Union[str, Pattern[str], None],
        action: Optional[ModeAction],
        name: Optional[str] = None,
        prepend: bool = False,
    ) -> Rule:
        """Compile pattern and store a new rule.

        Args:
            pattern: Regular expression over normalized paths
            action: Callable invoked with ``1`` when the rule matches
            name: Optional label used in diagnostics
            prepend: Insert at the front instead of appending

        Returns:
            The stored rule

        Raises:
            PatternError: If pattern is invalid; the table is left unchanged
        """
        if action is not None and not callable(action):
            raise TypeError(f"Rule action must be callable, got {type(action).__name__}")

        rule = Rule(pattern=compile_pattern(pattern), action=action, name=name)
        if prepend:
            self._rules.insert(0, rule)
        else:
            self._rules.append(rule)
        return rule

    def matching(self, path: str) -> List[Rule]:
        """Return every rule matching path, in table order."""
        return [rule for rule in self._rules if rule.matches(path)]

    def get_rules(self) -> List[Rule]:
        """Return a copy of the rules in table order."""
        return self._rules.copy()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.copy())

    def __len__(self) -> int:
        """Return number of rules, inert ones included."""
        return len(self._rules)
