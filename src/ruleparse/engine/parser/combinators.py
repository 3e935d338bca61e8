"""Combinators building rules from rules.

None of these read characters themselves. The backtracking combinators
(choices, many) only move the cursor through Source.save()/restore().

Recursion:
    rec() allows a rule to refer to itself. Left recursion (a rule that
    invokes itself before consuming anything) recurses until Python raises
    RecursionError, which is never converted into a ParseError. Use
    right recursion or many() instead.
"""

from collections.abc import Callable
from typing import Any

from ruleparse.diagnostics import ErrorTemplate, GrammarError, ParseError
from ruleparse.engine.source import Source

from .rule import Rule

__all__ = ["choices", "many", "rec", "seq"]


def choices[T](*alternatives: Rule[T], name: str | None = None) -> Rule[T]:
    """Ordered choice: the first alternative that matches wins.

    Every alternative, including the first, starts from the same
    checkpoint, so input consumed by a failed alternative never leaks into
    the next one. There is no longest-match policy.

    On total failure the cursor is restored to the checkpoint and a
    ParseError "no match: expected one of ..." is raised, spanning from the
    checkpoint to the furthest position any alternative reached. Each
    alternative's own message is attached as a note.

    Args:
        *alternatives: Rules to try, in order
        name: Diagnostic label of the resulting rule

    Returns:
        Rule producing the value of the first matching alternative

    Raises:
        GrammarError: If no alternatives are given
    """
    if not alternatives:
        raise GrammarError(ErrorTemplate.no_alternatives())
    labels = [alternative.label for alternative in alternatives]

    def _choices(source: Source) -> T:
        checkpoint = source.save()
        furthest = source.save()
        failures: list[ParseError] = []
        for alternative in alternatives:
            source.restore(checkpoint)
            try:
                return alternative(source)
            except ParseError as e:
                failures.append(e)
                if source.pos > furthest.pos:
                    furthest.restore(source)

        source.restore(checkpoint)
        error = ParseError(ErrorTemplate.no_match(labels), checkpoint.location(furthest))
        for label, failure in zip(labels, failures, strict=True):
            error.add_note(f"{label}: {failure.message}")
        raise error

    return Rule(_choices, name)


def many[T](
    rule: Rule[T],
    min_count: int = 0,
    max_count: int | None = None,
) -> Rule[list[T]]:
    """Repeat a rule as often as it matches.

    Each attempt starts from its own checkpoint; the failing attempt that
    ends the loop is rolled back, so it consumes nothing. An attempt that
    matches without moving the cursor is kept and ends the loop.

    The count is checked after the loop: matching more than max_count times
    is a failure, not a reason to stop early.

    Examples:
        many(tag("a"), min_count=2) on "a"   -> ParseError "expected 2..* found 1"
        many(tag("a"), min_count=2) on "aaa" -> three Locations, cursor at end

    Args:
        rule: Rule to repeat
        min_count: Minimum number of matches
        max_count: Maximum number of matches (None for unbounded)

    Returns:
        Rule producing the list of matched values, in order

    Raises:
        GrammarError: If a bound is negative or max_count < min_count
    """
    if min_count < 0 or (max_count is not None and max_count < min_count):
        raise GrammarError(ErrorTemplate.invalid_bounds(min_count, max_count))

    def _many(source: Source) -> list[T]:
        start = source.save()
        values: list[T] = []
        while True:
            attempt = source.save()
            try:
                value = rule(source)
            except ParseError:
                source.restore(attempt)
                break
            values.append(value)
            if source.pos == attempt.pos:
                break

        count = len(values)
        if count < min_count or (max_count is not None and count > max_count):
            raise ParseError(
                ErrorTemplate.count_mismatch(min_count, max_count, count),
                start.location(source),
            )
        return values

    return Rule(_many, rule.name)


def seq(*rules: Rule[Any]) -> Rule[list[Any]]:
    """Match rules one after another.

    No checkpoint is taken: the first failure propagates immediately and
    leaves the cursor where that rule stopped. Values of rules marked with
    ignore() are left out of the result, but those rules still have to
    match.

    Args:
        *rules: Rules to match, in order

    Returns:
        Rule producing the list of kept values
    """

    def _seq(source: Source) -> list[Any]:
        values: list[Any] = []
        for rule in rules:
            value = rule(source)
            if not rule.ignored:
                values.append(value)
        return values

    return Rule(_seq)


class _Slot[T]:
    """Late-bound target of a recursive placeholder."""

    __slots__ = ("name", "rule")

    def __init__(self, name: str | None) -> None:
        self.name = name
        self.rule: Rule[T] | None = None

    def __call__(self, source: Source) -> T:
        if self.rule is None:
            raise GrammarError(ErrorTemplate.unbound_rule(self.name))
        return self.rule(source)


def rec[T](build: Callable[[Rule[T]], Rule[T]], name: str | None = None) -> Rule[T]:
    """Define a self-referential rule.

    A placeholder rule is created first and handed to build(), which may
    embed it anywhere in the definition it returns. The placeholder then
    forwards to that definition.

    Example:
        >>> parens = rec(lambda inner: tag("(").rthen(inner.optional()).then_ignore(tag(")")))

    Args:
        build: Receives the placeholder, returns the real definition
        name: Diagnostic label for both placeholder and definition

    Returns:
        The rule returned by build (renamed if name is given)
    """
    slot: _Slot[T] = _Slot(name)
    placeholder: Rule[T] = Rule(slot, name)
    definition = build(placeholder)
    if name is not None:
        definition = definition.named(name)
    slot.rule = definition
    return definition
