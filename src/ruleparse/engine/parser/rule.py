"""Rule values.

A Rule wraps a callable that reads from a Source and either returns a value
(having advanced the cursor) or raises ParseError. Rules are immutable;
every combinator method returns a new Rule.

Failure contract:
    A rule that raises ParseError may leave the cursor anywhere. Only
    choices(), the per-attempt checkpoints of many(), catch() and
    optional() restore it. Sequencing (then, then_ignore, rthen, seq) and
    map() forward failures unchanged.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from ruleparse.diagnostics import ParseError
from ruleparse.engine.source import Source

__all__ = ["ANONYMOUS_LABEL", "Rule"]

# Label used in "no match" messages for rules without a name.
ANONYMOUS_LABEL: str = "<anonymous>"


@dataclass(frozen=True, slots=True)
class Rule[T]:
    """Composable parsing rule.

    Type Parameters:
        T: Type of the value produced on success

    Example:
        >>> number = regex("[0-9]+").named("number").map(lambda loc: int(loc.lexeme))
        >>> pair = number.then_ignore(tag(",")).then(number)
        >>> pair(Source("1,2"))
        (1, 2)

    Attributes:
        func: Callable doing the actual matching
        name: Diagnostic label shown in choices() failure messages
        ignored: Whether seq() drops this rule's value from its output
    """

    func: Callable[[Source], T]
    name: str | None = None
    ignored: bool = False

    def __call__(self, source: Source) -> T:
        """Run the rule against source.

        Raises:
            ParseError: If the input does not match
        """
        return self.func(source)

    @property
    def label(self) -> str:
        """Name for diagnostics, or a placeholder if the rule is unnamed."""
        return self.name if self.name is not None else ANONYMOUS_LABEL

    def named(self, name: str) -> "Rule[T]":
        """Copy of this rule with a diagnostic label."""
        return replace(self, name=name)

    def ignore(self) -> "Rule[T]":
        """Copy of this rule whose value seq() leaves out.

        The rule still has to match and still consumes input.
        """
        return replace(self, ignored=True)

    def map[R](self, transform: Callable[[T], R]) -> "Rule[R]":
        """Transform the success value.

        Failures pass through untouched. Name and ignored flag carry over.
        """
        func = self.func

        def _map(source: Source) -> R:
            return transform(func(source))

        return Rule(_map, self.name, self.ignored)

    def then[R](self, other: "Rule[R]") -> "Rule[tuple[T, R]]":
        """Match this rule, then other; produce both values as a pair."""
        first = self.func

        def _then(source: Source) -> tuple[T, R]:
            left = first(source)
            return left, other(source)

        return Rule(_then)

    def then_ignore[R](self, other: "Rule[R]") -> "Rule[T]":
        """Match this rule, then other; keep only this rule's value."""
        first = self.func

        def _then_ignore(source: Source) -> T:
            value = first(source)
            other(source)
            return value

        return Rule(_then_ignore)

    def rthen[R](self, other: "Rule[R]") -> "Rule[R]":
        """Match this rule, then other; keep only other's value."""
        first = self.func

        def _rthen(source: Source) -> R:
            first(source)
            return other(source)

        return Rule(_rthen)

    def or_(self, other: "Rule[T]") -> "Rule[T]":
        """Ordered choice between this rule and other (see choices())."""
        from .combinators import choices  # noqa: PLC0415 - circular

        return choices(self, other)

    def __or__(self, other: "Rule[T]") -> "Rule[T]":
        return self.or_(other)

    def catch(self, handler: Callable[[ParseError], T]) -> "Rule[T]":
        """Recover from failure with a substitute value.

        On ParseError the cursor is restored to where this rule started,
        then handler(error) provides the value.
        """
        func = self.func

        def _catch(source: Source) -> T:
            checkpoint = source.save()
            try:
                return func(source)
            except ParseError as error:
                source.restore(checkpoint)
                return handler(error)

        return Rule(_catch, self.name, self.ignored)

    def optional(self, default: T | None = None) -> "Rule[T | None]":
        """Match this rule or produce default without consuming input."""
        return self.catch(lambda _error: default)  # type: ignore[arg-type,return-value]
