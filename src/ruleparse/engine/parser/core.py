"""Grammar construction and the Parse entry point.

This module ties rules to input text. syntax() builds the rule graph once
through a Grammar construction context and returns a Parse object; each
call to one of its parse methods creates a fresh Source and runs the top
rule against it.

Architecture:
    Grammar  - construction context handed to the builder function:
               whitespace registration plus every primitive and combinator
               as a method, so grammars read the same whether written
               against the context or the module-level functions.
    Parse[T] - immutable driver around a top rule. Derived drivers from
               map()/map_error() transform values or errors without
               changing what is parsed.

Security:
    Includes configurable input size limit (max_source_size), checked
    before the top rule runs. No recursion depth limit is enforced;
    left-recursive or very deep grammars end in RecursionError.

See Also:
    - :mod:`ruleparse.engine.parser.primitives` - tag, regex, eof
    - :mod:`ruleparse.engine.parser.combinators` - choices, many, seq, rec
    - :mod:`ruleparse.engine.parser.rule` - Rule value and its methods
"""

import logging
import re
from collections.abc import Callable
from typing import Any

from ruleparse.constants import DEFAULT_WHITESPACE, MAX_SOURCE_SIZE
from ruleparse.diagnostics import ParseError
from ruleparse.engine.location import Location
from ruleparse.engine.source import Source, validate_whitespace

from . import combinators, primitives
from .rule import Rule

__all__ = ["Grammar", "Parse", "syntax"]

logger = logging.getLogger(__name__)

type LocatedRun[T] = Callable[[str], tuple[T, Location]]


class Grammar:
    """Construction context passed to the builder function of syntax().

    Example:
        >>> def arithmetic(g: Grammar) -> Rule[int]:
        ...     g.whitespace(" ")
        ...     number = g.regex("[0-9]+").map(lambda loc: int(loc.lexeme))
        ...     return g.seq(number, g.tag("+").ignore(), number).map(sum)
        >>> syntax(arithmetic).parse("1 + 2")
        3
    """

    __slots__ = ("_whitespace",)

    def __init__(self) -> None:
        """Initialize an empty grammar with no whitespace characters."""
        self._whitespace: set[str] = set()

    @property
    def whitespace_chars(self) -> frozenset[str]:
        """Characters every parse will skip transparently."""
        return frozenset(self._whitespace)

    def whitespace(self, *chars: str) -> None:
        """Register whitespace characters.

        Nothing is registered if any argument is invalid.

        Args:
            *chars: Single characters to skip; none registers
                    space, tab, carriage return and newline

        Raises:
            GrammarError: If an argument is not a single character
        """
        self._whitespace.update(validate_whitespace(chars or sorted(DEFAULT_WHITESPACE)))

    def new_source(self, text: str) -> Source:
        """Create the cursor for one parse of text."""
        return Source(text, 0, set(self._whitespace))

    # Primitives and combinators, mirrored for use inside builders.

    def tag(self, literal: str) -> Rule[Location]:
        """See :func:`ruleparse.engine.parser.primitives.tag`."""
        return primitives.tag(literal)

    def regex(
        self, pattern: str | re.Pattern[str], flags: int | re.RegexFlag = 0
    ) -> Rule[Location]:
        """See :func:`ruleparse.engine.parser.primitives.regex`."""
        return primitives.regex(pattern, flags)

    def eof(self) -> Rule[Location]:
        """See :func:`ruleparse.engine.parser.primitives.eof`."""
        return primitives.eof()

    def choices[T](self, *alternatives: Rule[T], name: str | None = None) -> Rule[T]:
        """See :func:`ruleparse.engine.parser.combinators.choices`."""
        return combinators.choices(*alternatives, name=name)

    def many[T](
        self, rule: Rule[T], min_count: int = 0, max_count: int | None = None
    ) -> Rule[list[T]]:
        """See :func:`ruleparse.engine.parser.combinators.many`."""
        return combinators.many(rule, min_count, max_count)

    def seq(self, *rules: Rule[Any]) -> Rule[list[Any]]:
        """See :func:`ruleparse.engine.parser.combinators.seq`."""
        return combinators.seq(*rules)

    def rec[T](
        self, build: Callable[[Rule[T]], Rule[T]], name: str | None = None
    ) -> Rule[T]:
        """See :func:`ruleparse.engine.parser.combinators.rec`."""
        return combinators.rec(build, name)


class Parse[T]:
    """Parser entry point for one grammar.

    Immutable after construction and safe to share: all per-parse state
    lives in the Source created for each call.

    Attributes:
        max_source_size: Maximum accepted input length (0 disables the check)
    """

    __slots__ = ("_max_source_size", "_run")

    def __init__(self, run: LocatedRun[T], *, max_source_size: int = MAX_SOURCE_SIZE) -> None:
        """Initialize from a located run function.

        Use syntax() instead of calling this directly.

        Args:
            run: Parses text into (value, whole-input location), raising
                 ParseError on failure
            max_source_size: Maximum accepted input length
        """
        self._run = run
        self._max_source_size = max_source_size

    @property
    def max_source_size(self) -> int:
        """Maximum accepted input length in characters."""
        return self._max_source_size

    def _located(self, text: str) -> tuple[T, Location]:
        # Validate input size (DoS prevention)
        if self._max_source_size > 0 and len(text) > self._max_source_size:
            logger.warning(
                "Rejected input of %d characters (limit %d)", len(text), self._max_source_size
            )
            msg = (
                f"Source size ({len(text):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Pass max_source_size to syntax() to increase the limit."
            )
            raise ValueError(msg)
        return self._run(text)

    def parse(self, text: str) -> T:
        """Parse text with the top rule.

        The top rule does not have to consume all of text; end a grammar
        with then_ignore(eof()) to require that.

        Raises:
            ParseError: If the input does not match
            ValueError: If text exceeds max_source_size
        """
        value, _location = self._located(text)
        return value

    def parse_or_none(self, text: str) -> T | None:
        """Parse text, returning None instead of raising ParseError."""
        try:
            value, _location = self._located(text)
        except ParseError as e:
            logger.debug("Parse failed: %s", e.message)
            return None
        return value

    def parse_with_location(self, text: str) -> tuple[T | None, Location]:
        """Parse text and report where.

        Returns:
            (value, location of the whole input) on success,
            (None, location of the failure) on failure
        """
        try:
            return self._located(text)
        except ParseError as e:
            logger.debug("Parse failed: %s", e.message)
            return None, e.location

    def parse_as_pair(self, text: str) -> tuple[T | None, ParseError | None]:
        """Parse text into a (value, error) pair; exactly one is not None."""
        try:
            value, _location = self._located(text)
        except ParseError as e:
            logger.debug("Parse failed: %s", e.message)
            return None, e
        return value, None

    def map[R](self, transform: Callable[[T], R]) -> "Parse[R]":
        """Derive a Parse whose successful values go through transform."""
        run = self._run

        def _run(text: str) -> tuple[R, Location]:
            value, location = run(text)
            return transform(value), location

        return Parse(_run, max_source_size=self._max_source_size)

    def map_error(self, transform: Callable[[ParseError], ParseError]) -> "Parse[T]":
        """Derive a Parse whose ParseErrors go through transform.

        The transformed error is raised (or returned by parse_as_pair)
        chained to the original.
        """
        run = self._run

        def _run(text: str) -> tuple[T, Location]:
            try:
                return run(text)
            except ParseError as e:
                raise transform(e) from e

        return Parse(_run, max_source_size=self._max_source_size)


def syntax[T](
    build: Callable[[Grammar], Rule[T]],
    *,
    max_source_size: int | None = None,
) -> Parse[T]:
    """Build a grammar once and return its Parse entry point.

    Args:
        build: Receives the Grammar context, returns the top rule
        max_source_size: Input length limit (default: MAX_SOURCE_SIZE,
                         0 disables the limit)

    Returns:
        Parse object running the top rule on fresh cursors

    Example:
        >>> parser = syntax(lambda g: g.regex("[0-9]+").map(lambda loc: int(loc.lexeme)))
        >>> parser.parse("42")
        42
    """
    grammar = Grammar()
    top = build(grammar)
    logger.debug(
        "Built grammar (top rule %s, whitespace %r)",
        top.label,
        "".join(sorted(grammar.whitespace_chars)),
    )

    def _run(text: str) -> tuple[T, Location]:
        source = grammar.new_source(text)
        value = top(source)
        whole = Source(text, 0, source.whitespace).location(Source(text, len(text)))
        return value, whole

    return Parse(
        _run,
        max_source_size=max_source_size if max_source_size is not None else MAX_SOURCE_SIZE,
    )
