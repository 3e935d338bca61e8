"""Tests for engine.parser.rule: Rule value and its combinator methods."""

from __future__ import annotations

import pytest

from ruleparse.diagnostics import ParseError
from ruleparse.engine.parser.primitives import regex, tag
from ruleparse.engine.parser.rule import ANONYMOUS_LABEL, Rule
from ruleparse.engine.source import Source

# ============================================================================
# CONSTRUCTION AND NAMING
# ============================================================================


class TestRuleNaming:
    """Test names, labels and the ignored flag."""

    def test_wraps_callable(self) -> None:
        """A Rule calls its function with the cursor."""
        rule: Rule[int] = Rule(lambda source: source.pos)

        assert rule(Source("abc", 2)) == 2

    def test_unnamed_label(self) -> None:
        """Unnamed rules are labelled <anonymous>."""
        rule: Rule[int] = Rule(lambda source: 0)

        assert rule.name is None
        assert rule.label == ANONYMOUS_LABEL

    def test_named_returns_copy(self) -> None:
        """named() leaves the original untouched."""
        original = regex("[0-9]+")
        renamed = original.named("number")

        assert renamed.label == "number"
        assert original.label == "[0-9]+"

    def test_ignore_returns_copy(self) -> None:
        """ignore() sets the flag on a copy."""
        original = tag("a")
        ignored = original.ignore()

        assert ignored.ignored
        assert not original.ignored
        assert ignored.name == "a"

    def test_rule_is_frozen(self) -> None:
        """Rules are immutable values."""
        rule = tag("a")

        with pytest.raises(AttributeError):
            rule.name = "b"  # type: ignore[misc]


# ============================================================================
# MAP
# ============================================================================


class TestRuleMap:
    """Test value transformation."""

    def test_map_transforms_value(self) -> None:
        """map() applies the function to the success value."""
        number = regex("[0-9]+").map(lambda loc: int(loc.lexeme))

        assert number(Source("17")) == 17

    def test_map_keeps_name_and_flag(self) -> None:
        """Name and ignored flag survive map()."""
        rule = tag("x").ignore().map(lambda loc: loc.lexeme)

        assert rule.name == "x"
        assert rule.ignored

    def test_map_passes_failure_through(self) -> None:
        """map() never sees failed matches."""
        calls: list[object] = []
        rule = tag("a").map(calls.append)

        with pytest.raises(ParseError):
            rule(Source("b"))

        assert calls == []


# ============================================================================
# SEQUENCING METHODS
# ============================================================================


class TestRuleSequencing:
    """Test then, then_ignore and rthen."""

    def test_then_produces_pair(self) -> None:
        """then() keeps both values."""
        left, right = tag("a").then(tag("b"))(Source("ab"))

        assert (left.lexeme, right.lexeme) == ("a", "b")

    def test_then_ignore_keeps_left(self) -> None:
        """then_ignore() keeps only the first value."""
        source = Source("a;")

        loc = tag("a").then_ignore(tag(";"))(source)

        assert loc.lexeme == "a"
        assert source.pos == 2

    def test_rthen_keeps_right(self) -> None:
        """rthen() keeps only the second value."""
        loc = tag("-").rthen(regex("[0-9]+"))(Source("-5"))

        assert loc.lexeme == "5"

    def test_second_failure_does_not_roll_back(self) -> None:
        """Sequencing leaves the cursor where the failing rule stopped."""
        source = Source("ax")

        with pytest.raises(ParseError):
            tag("a").then(tag("b"))(source)

        assert source.pos == 1

    def test_first_failure_skips_second(self) -> None:
        """The second rule is not run when the first fails."""
        calls: list[object] = []
        second: Rule[None] = Rule(calls.append)

        with pytest.raises(ParseError):
            tag("a").then(second)(Source("b"))

        assert calls == []


# ============================================================================
# RECOVERY
# ============================================================================


class TestRuleRecovery:
    """Test catch() and optional()."""

    def test_catch_success_passes_value(self) -> None:
        """The handler is not called on success."""
        rule = tag("a").map(lambda _: "matched").catch(lambda _error: "recovered")

        assert rule(Source("a")) == "matched"

    def test_catch_receives_error(self) -> None:
        """The handler gets the ParseError."""
        rule = tag("ab").map(lambda loc: loc.lexeme).catch(lambda error: error.message)

        assert rule(Source("ac")) == "expected ab found a"

    def test_catch_restores_cursor(self) -> None:
        """Partial input consumed before the failure is rolled back."""
        source = Source("ac")

        tag("ab").catch(lambda _error: None)(source)

        assert source.pos == 0

    def test_catch_keeps_name(self) -> None:
        """catch() keeps the rule's name."""
        assert tag("a").catch(lambda _error: None).name == "a"

    def test_optional_default_none(self) -> None:
        """optional() produces None when the rule fails."""
        assert tag("a").optional()(Source("b")) is None

    def test_optional_custom_default(self) -> None:
        """optional(default) produces the given value."""
        sign = tag("-").map(lambda _: -1).optional(1)

        assert sign(Source("5")) == 1
        assert sign(Source("-5")) == -1

    def test_optional_consumes_nothing_on_failure(self) -> None:
        """A failed optional leaves the cursor where it was."""
        source = Source("xy")

        tag("xz").optional()(source)

        assert source.pos == 0
