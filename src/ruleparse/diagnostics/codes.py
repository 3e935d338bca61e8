"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Parse errors (input does not match the grammar)
        2000-2999: Grammar errors (rules constructed incorrectly)
    """

    # Parse errors (1000-1999)
    EXPECTED_LITERAL = 1001
    EXPECTED_PATTERN = 1002
    UNEXPECTED_EOF = 1003
    NO_MATCH = 1004
    COUNT_MISMATCH = 1005
    EXPECTED_EOF = 1006

    # Grammar errors (2000-2999)
    EMPTY_LITERAL = 2001
    INVALID_PATTERN = 2002
    NO_ALTERNATIVES = 2003
    INVALID_BOUNDS = 2004
    UNBOUND_RULE = 2005
    INVALID_WHITESPACE = 2006


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error (grammar errors only)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message
