#!/usr/bin/env python3
"""Tests for Rule and RuleTable."""

import re

import pytest

from edconf.core.constants import ErrorCode
from edconf.rules.table import PatternError, Rule, RuleTable, compile_pattern


def noop(flag):
    return flag


class TestCompilePattern:
    """Tests for compile_pattern."""

    def test_compiles_string(self):
        """String patterns are compiled."""
        assert compile_pattern(r"\.txt$").search("/a/foo.txt")

    def test_none_is_inert(self):
        """None yields no pattern."""
        assert compile_pattern(None) is None

    def test_precompiled_passthrough(self):
        """Compiled patterns are kept as-is."""
        pattern = re.compile("foo")
        assert compile_pattern(pattern) is pattern

    @pytest.mark.parametrize("empty", ["", re.compile("")])
    def test_empty_is_inert(self, empty):
        """Empty patterns yield no pattern, like None."""
        assert compile_pattern(empty) is None

    @pytest.mark.parametrize("bad", ["(unclosed", "[a-", "*"])
    def test_invalid_pattern(self, bad):
        """Malformed patterns raise PatternError."""
        with pytest.raises(PatternError) as exc_info:
            compile_pattern(bad)
        assert exc_info.value.pattern == bad
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_non_string(self):
        """Non-string patterns raise PatternError."""
        with pytest.raises(PatternError):
            compile_pattern(42)


class TestRule:
    """Tests for Rule."""

    def test_matches_substring(self):
        """Patterns are searched, not anchored to the whole path."""
        rule = Rule(pattern=re.compile("foo"), action=noop)
        assert rule.matches("/a/foo.md")
        assert not rule.matches("/a/bar.md")

    def test_inert_without_pattern(self):
        """Rules without a pattern never match."""
        rule = Rule(pattern=None, action=noop)
        assert rule.inert
        assert not rule.matches("/a/foo.txt")

    def test_inert_without_action(self):
        """Rules without an action never match."""
        rule = Rule(pattern=re.compile("foo"), action=None)
        assert rule.inert
        assert not rule.matches("/a/foo.txt")

    def test_describe(self):
        """Rules describe themselves by name, then pattern."""
        assert Rule(pattern=re.compile("foo"), action=noop, name="lint").describe() == "lint"
        assert Rule(pattern=re.compile("foo"), action=noop).describe() == "foo"
        assert Rule(pattern=None, action=None).describe() == "<inert>"


class TestRuleTable:
    """Tests for RuleTable."""

    def test_empty(self):
        """New tables are empty."""
        assert len(RuleTable()) == 0

    def test_add_appends(self):
        """Rules are kept in registration order."""
        table = RuleTable()
        table.add("a", noop, name="first")
        table.add("b", noop, name="second")
        assert [r.name for r in table] == ["first", "second"]

    def test_add_prepend(self):
        """prepend=True inserts at the front."""
        table = RuleTable()
        table.add("a", noop, name="first")
        table.add("b", noop, name="early", prepend=True)
        assert [r.name for r in table] == ["early", "first"]

    def test_invalid_pattern_leaves_table_unchanged(self):
        """A rejected registration does not modify the table."""
        table = RuleTable()
        table.add("a", noop)
        with pytest.raises(PatternError):
            table.add("(", noop)
        assert len(table) == 1

    def test_inert_rules_are_stored(self):
        """Inert rules count but never match."""
        table = RuleTable()
        table.add(None, noop)
        table.add("foo", None)
        assert len(table) == 2
        assert table.matching("/a/foo") == []

    def test_non_callable_action(self):
        """Non-callable actions are rejected."""
        with pytest.raises(TypeError):
            RuleTable().add("foo", "lint-mode")

    def test_matching_order(self):
        """matching returns every match in table order."""
        table = RuleTable()
        txt = table.add(r"\.txt$", noop)
        foo = table.add("foo", noop)
        assert table.matching("/a/foo.txt") == [txt, foo]
        assert table.matching("/a/bar.txt") == [txt]
        assert table.matching("/a/foo.md") == [foo]

    def test_get_rules_is_copy(self):
        """get_rules returns a copy."""
        table = RuleTable()
        table.add("a", noop)
        table.get_rules().clear()
        assert len(table) == 1
