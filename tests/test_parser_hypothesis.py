"""Hypothesis property-based tests for the rule engine.

Tests cursor arithmetic, primitive consumption bounds, backtracking
guarantees and end-to-end evaluation on generated input.
Complements the example-based tests with property-based testing.
"""

from __future__ import annotations

import pytest
from hypothesis import assume, event, example, given, settings
from hypothesis import strategies as st

from ruleparse import Grammar, ParseError, Rule, syntax
from ruleparse.engine.location import Location
from ruleparse.engine.parser.combinators import choices, many
from ruleparse.engine.parser.primitives import regex, tag
from ruleparse.engine.source import Source

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================


source_text = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"]),
    min_size=0,
    max_size=100,
)

literals = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"]),
    min_size=1,
    max_size=10,
)


def _sum_grammar(g: Grammar) -> Rule[int]:
    g.whitespace()
    # Whitespace inside a token is skipped, so "1 2" reads as 12
    number = g.regex("[0-9]+").map(lambda loc: int("".join(loc.lexeme.split())))
    rest = g.many(g.tag("+").rthen(number))
    return number.then(rest).map(lambda parts: parts[0] + sum(parts[1])).then_ignore(g.eof())


_SUM = syntax(_sum_grammar)


# ============================================================================
# PROPERTY TESTS - SOURCE
# ============================================================================


class TestSourceProperties:
    """Cursor arithmetic properties."""

    @given(text=source_text, data=st.data())
    @settings(max_examples=200)
    def test_line_counts_preceding_newlines(self, text: str, data: st.DataObject) -> None:
        """PROPERTY: line() is the number of newlines before pos."""
        pos = data.draw(st.integers(min_value=0, max_value=len(text)))
        source = Source(text, pos)

        assert source.line() == text[:pos].count("\n")
        assert source.column() >= 1

    @given(text=source_text, data=st.data())
    @settings(max_examples=200)
    def test_current_line_is_one_of_lines(self, text: str, data: st.DataObject) -> None:
        """PROPERTY: current_line() is the line indexed by line()."""
        pos = data.draw(st.integers(min_value=0, max_value=len(text)))
        loc = Source(text, pos).location(Source(text, len(text)))

        assert loc.current_line() == text.split("\n")[text[:pos].count("\n")]

    @given(text=source_text)
    @settings(max_examples=100)
    def test_peek_never_returns_whitespace(self, text: str) -> None:
        """PROPERTY: peek() only ever yields non-whitespace characters."""
        source = Source(text, whitespace={" ", "\n"})

        seen = []
        while (char := source.peek()) is not None:
            seen.append(char)
            source.advance(1)

        assert seen == [c for c in text if c not in {" ", "\n"}]


# ============================================================================
# PROPERTY TESTS - PRIMITIVES
# ============================================================================


class TestPrimitiveProperties:
    """Consumption bounds of tag() and regex()."""

    @given(literal=literals)
    @settings(max_examples=200)
    def test_tag_matches_itself(self, literal: str) -> None:
        """PROPERTY: tag(s) on s consumes all of s."""
        source = Source(literal)

        loc = tag(literal)(source)

        assert loc.lexeme == literal
        assert source.pos == len(literal)

    @given(literal=literals, text=source_text)
    @settings(max_examples=300)
    def test_tag_never_reads_past_literal(self, literal: str, text: str) -> None:
        """PROPERTY: tag() touches at most len(literal) characters."""
        source = Source(text)
        try:
            tag(literal)(source)
        except ParseError as e:
            event("outcome=failure")
            assert e.location.end <= len(literal)
        else:
            event("outcome=success")
            assert text.startswith(literal)
            assert source.pos == len(literal)

    @given(digits=st.text(alphabet="0123456789", min_size=1, max_size=20), tail=source_text)
    @example(digits="0", tail="")
    @settings(max_examples=200)
    def test_regex_takes_longest_digit_run(self, digits: str, tail: str) -> None:
        """PROPERTY: [0-9]+ stops exactly at the first non-digit."""
        assume(tail[:1] not in set("0123456789"))

        loc = regex("[0-9]+")(Source(digits + tail))

        assert loc.lexeme == digits


# ============================================================================
# PROPERTY TESTS - BACKTRACKING
# ============================================================================


class TestBacktrackingProperties:
    """Rollback guarantees of choices(), many() and optional()."""

    @given(first=literals, second=literals, text=source_text)
    @settings(max_examples=300)
    def test_choices_failure_restores(self, first: str, second: str, text: str) -> None:
        """PROPERTY: failed choices() leaves the cursor where it started."""
        source = Source(text)
        try:
            choices(tag(first), tag(second))(source)
        except ParseError:
            assert source.pos == 0
        else:
            assert source.pos in (len(first), len(second))

    @given(count=st.integers(min_value=0, max_value=50), tail=source_text)
    @settings(max_examples=200)
    def test_many_counts_repetitions(self, count: int, tail: str) -> None:
        """PROPERTY: many(tag("ab")) matches every leading "ab"."""
        assume(not tail.startswith("ab"))
        source = Source("ab" * count + tail)

        values = many(tag("ab"))(source)

        assert len(values) == count
        assert source.pos == 2 * count

    @given(literal=literals, text=source_text)
    @settings(max_examples=200)
    def test_optional_never_fails(self, literal: str, text: str) -> None:
        """PROPERTY: optional() absorbs every ParseError without consuming."""
        source = Source(text)

        value: Location | None = tag(literal).optional()(source)

        if value is None:
            assert source.pos == 0


# ============================================================================
# PROPERTY TESTS - END TO END
# ============================================================================


class TestEndToEndProperties:
    """Generated sums parse to their value."""

    @given(numbers=st.lists(st.integers(min_value=0, max_value=10**6), min_size=1, max_size=20))
    @settings(max_examples=200)
    def test_sum_evaluates(self, numbers: list[int]) -> None:
        """PROPERTY: "a + b + ..." evaluates to sum(numbers)."""
        text = " + ".join(str(n) for n in numbers)

        assert _SUM.parse(text) == sum(numbers)

    @pytest.mark.fuzz
    @given(text=st.text(alphabet="0123456789+ \n()x", max_size=200))
    @settings(max_examples=2000, deadline=None)
    def test_arbitrary_input_only_raises_parse_error(self, text: str) -> None:
        """PROPERTY: parsing never fails with anything but ParseError."""
        value, error = _SUM.parse_as_pair(text)

        event(f"outcome={'success' if error is None else error.code.name}")
        assert (value is None) != (error is None)
        if error is not None:
            assert str(error).startswith("Error at ")
