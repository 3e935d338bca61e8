"""Text cursor for rule-based parsing.

Source pairs an immutable content string with a mutable scan position and a
set of whitespace characters that peek() and advance() step over
transparently.

Design Philosophy:
    - One Source per parse call, passed explicitly to every rule
    - Checkpoints are copies (save()) that share content and whitespace
      set but own their position; restore() moves back to one
    - EOF is a state (is_eof), peek()/advance() return None at EOF
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    \\n is the line delimiter. CRLF input works, with the \\r left at the end
    of each line's text. CR-only input is reported as a single line.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ruleparse.diagnostics import ErrorTemplate, GrammarError

from .location import Location, Span

__all__ = ["Source", "validate_whitespace"]


def validate_whitespace(chars: Iterable[str]) -> list[str]:
    """Check that every item is exactly one character.

    Returns:
        The characters, in order

    Raises:
        GrammarError: On the first item that is not a single character
    """
    validated = list(chars)
    for char in validated:
        if not isinstance(char, str) or len(char) != 1:
            raise GrammarError(ErrorTemplate.invalid_whitespace(char))
    return validated


@dataclass(slots=True)
class Source:
    """Scan position over source text.

    Mutability Note:
        Intentionally mutable (not frozen=True). Every rule of one parse
        advances the same Source, and backtracking combinators rewind it
        with restore(). Checkpoints from save() are never mutated by the
        combinators, so a Location's snapshot stays put.

    Example:
        >>> source = Source("a b", whitespace={" "})
        >>> source.peek()
        'a'
        >>> source.advance(1)
        'b'
        >>> source.pos  # The space was skipped
        2
        >>> checkpoint = source.save()
        >>> source.advance(1) is None
        True
        >>> source.restore(checkpoint)
        >>> source.pos
        2

    Attributes:
        content: Full input text
        pos: Current character offset, 0 <= pos <= len(content)
        whitespace: Characters skipped by peek() and advance(), shared
            by reference with every checkpoint
    """

    content: str
    pos: int = 0
    whitespace: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        """Validate the position.

        Raises:
            ValueError: If pos lies outside the content.
        """
        if not 0 <= self.pos <= len(self.content):
            msg = f"Source.pos must be within 0..{len(self.content)}, got {self.pos}"
            raise ValueError(msg)

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Returns:
            True if position >= content length

        Note: Does not skip whitespace. A cursor followed only by
              whitespace is not at EOF until peek() has stepped over it.
        """
        return self.pos >= len(self.content)

    def peek(self) -> str | None:
        """Return the next non-whitespace character.

        Whitespace characters at the current position are consumed (the
        position moves past them) but the character returned is not.

        Returns:
            The character at the new position, or None at end of input
        """
        content = self.content
        whitespace = self.whitespace
        pos = self.pos
        end = len(content)
        while pos < end and content[pos] in whitespace:
            pos += 1
        self.pos = pos
        if pos >= end:
            return None
        return content[pos]

    def advance(self, count: int = 1) -> str | None:
        """Move forward count raw characters, then skip whitespace.

        Args:
            count: Number of characters to move (clamped to the content end)

        Returns:
            The next non-whitespace character, or None at end of input
        """
        self.pos = min(self.pos + count, len(self.content))
        return self.peek()

    def save(self) -> "Source":
        """Take a checkpoint at the current position.

        Returns:
            New Source sharing content and whitespace set
        """
        return Source(self.content, self.pos, self.whitespace)

    def copy(self) -> "Source":
        """Alias of save()."""
        return self.save()

    def restore(self, checkpoint: "Source") -> None:
        """Move back (or forward) to a checkpoint's position.

        Args:
            checkpoint: Cursor previously obtained from save()
        """
        self.pos = checkpoint.pos

    def location(self, other: "Source") -> Location:
        """Build the Location from this cursor's position to other's.

        Args:
            other: Cursor at or after this one, over the same content

        Returns:
            Location with whitespace-trimmed lexeme and a snapshot of self

        Raises:
            ValueError: If other lies before self
        """
        start, end = self.pos, other.pos
        lexeme = self.content[start:end].strip("".join(self.whitespace))
        return Location(Span(start, end), lexeme, self.save())

    def lines(self) -> list[str]:
        """Split the content on newline characters."""
        return self.content.split("\n")

    def line(self) -> int:
        """Zero-based line number of the current position.

        Performance:
            O(n) where n = current position. Diagnostics only.
        """
        return self.content.count("\n", 0, self.pos)

    def column(self) -> int:
        """Column of the current position, counted from the last newline.

        The first character of a line is column 1.
        """
        # rfind returns -1 on the first line, which makes pos + 1
        return self.pos - self.content.rfind("\n", 0, self.pos)

    def add_whitespace(self, char: str) -> None:
        """Register a character to be skipped by peek() and advance().

        The set is shared, so every checkpoint of this cursor sees it.

        Raises:
            GrammarError: If char is not exactly one character
        """
        self.whitespace.update(validate_whitespace((char,)))

    def add_whitespace_chars(self, chars: Iterable[str]) -> None:
        """Register several whitespace characters, all or none."""
        self.whitespace.update(validate_whitespace(chars))
