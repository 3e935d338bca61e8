"""Source spans and locations.

A Location is what every primitive rule returns on success and what every
ParseError points at: the consumed character range, the matched text with
skipped whitespace trimmed off, and the cursor snapshot it was cut from.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .source import Source

__all__ = ["Location", "Span"]


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)``.

    Note:
        Positions are character offsets (Unicode code points), not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate Span invariants.

        Raises:
            ValueError: If start is negative or end precedes start.
        """
        if self.start < 0:
            msg = f"Span.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, int) and self.start <= pos < self.end


@dataclass(frozen=True, slots=True)
class Location:
    """Matched region of the source.

    Example:
        >>> source = Source(" if ", whitespace={" "})
        >>> loc = tag("if")(source)
        >>> loc.span
        Span(start=0, end=4)
        >>> loc.lexeme
        'if'

    Attributes:
        span: Consumed range, including skipped whitespace
        lexeme: Text of the range with whitespace characters stripped
        source: Cursor snapshot positioned at span.start
    """

    span: Span
    lexeme: str
    source: "Source" = field(repr=False, compare=False)

    @property
    def start(self) -> int:
        """Start offset of the span."""
        return self.span.start

    @property
    def end(self) -> int:
        """End offset of the span (exclusive)."""
        return self.span.end

    def current_line(self) -> str:
        """Text of the source line the location starts on (without newline)."""
        return self.source.lines()[self.source.line()]
