"""ruleparse exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic, DiagnosticCode

if TYPE_CHECKING:
    from ruleparse.engine.location import Location, Span

__all__ = ["GrammarError", "ParseError", "RuleError"]


class RuleError(Exception):
    """Base exception for all ruleparse errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize RuleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseError(RuleError):
    """Input did not match a rule.

    This is the only failure kind rules raise. Whether it is recoverable
    depends on the combinator wrapping the failing rule (choices, many,
    catch, optional), never on the error itself.

    str(error) is the caret rendering produced by DiagnosticFormatter:

        Error at 0:1: expected if found eof
        i
        ^

    Attributes:
        diagnostic: Code and message of the failure
        location: Where the failing rule started and how far it got
        problem: Character range underlined in the rendering
    """

    diagnostic: Diagnostic

    def __init__(
        self,
        diagnostic: Diagnostic,
        location: "Location",
        problem: "Span | None" = None,
    ) -> None:
        """Initialize ParseError.

        Args:
            diagnostic: Code and message of the failure
            location: Location of the failure
            problem: Range to underline (defaults to the location's span)
        """
        super().__init__(diagnostic)
        self.location = location
        self.problem = problem if problem is not None else location.span

    @property
    def message(self) -> str:
        """The bare failure message, without position or source context."""
        return self.diagnostic.message

    @property
    def code(self) -> DiagnosticCode:
        """Diagnostic code of the failure."""
        return self.diagnostic.code

    def __str__(self) -> str:
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)

    def __repr__(self) -> str:
        return (
            f"ParseError({self.code.name}, {self.message!r}, "
            f"problem={self.problem.start}..{self.problem.end})"
        )


class GrammarError(RuleError, ValueError):
    """A rule or grammar was constructed incorrectly.

    Raised while building rules (empty literal, invalid regex, no
    alternatives, impossible repetition bounds, invalid whitespace) and when
    a recursive placeholder is invoked before rec() has bound it. Never
    raised because of parse input.
    """
