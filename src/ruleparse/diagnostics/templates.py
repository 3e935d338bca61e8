"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from ruleparse.constants import EOF_DISPLAY, UNBOUNDED_DISPLAY

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Parse error messages are part of the rendered error text, so their exact
    wording is stable and covered by tests.
    """

    # ------------------------------------------------------------------
    # Parse errors
    # ------------------------------------------------------------------

    @staticmethod
    def expected_literal(literal: str, found: str) -> Diagnostic:
        """Literal did not match the input.

        Args:
            literal: The literal the rule was looking for
            found: Lexeme consumed before the mismatch

        Returns:
            Diagnostic for EXPECTED_LITERAL
        """
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_LITERAL,
            message=f"expected {literal} found {found}",
        )

    @staticmethod
    def expected_literal_eof(literal: str) -> Diagnostic:
        """Input ended before the literal was complete.

        Args:
            literal: The literal the rule was looking for

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"expected {literal} found {EOF_DISPLAY}",
        )

    @staticmethod
    def expected_pattern(pattern: str, found: str) -> Diagnostic:
        """Regex did not match the candidate text.

        Args:
            pattern: The regex source
            found: The candidate that failed to match

        Returns:
            Diagnostic for EXPECTED_PATTERN
        """
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_PATTERN,
            message=f"expected {pattern} found {found}",
        )

    @staticmethod
    def expected_pattern_eof(pattern: str) -> Diagnostic:
        """Regex invoked at end of input.

        Args:
            pattern: The regex source

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"expected {pattern} found {EOF_DISPLAY}",
        )

    @staticmethod
    def expected_eof(found: str) -> Diagnostic:
        """Input continues where the grammar expects it to end.

        Args:
            found: The first unconsumed character

        Returns:
            Diagnostic for EXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_EOF,
            message=f"expected {EOF_DISPLAY} found {found}",
        )

    @staticmethod
    def no_match(names: list[str]) -> Diagnostic:
        """No alternative of a choice matched.

        Args:
            names: Diagnostic labels of the alternatives, in order

        Returns:
            Diagnostic for NO_MATCH
        """
        return Diagnostic(
            code=DiagnosticCode.NO_MATCH,
            message=f"no match: expected one of {', '.join(names)}",
        )

    @staticmethod
    def count_mismatch(min_count: int, max_count: int | None, found: int) -> Diagnostic:
        """Repetition matched too few or too many times.

        Args:
            min_count: Lower bound
            max_count: Upper bound (None when unbounded)
            found: Number of successful repetitions

        Returns:
            Diagnostic for COUNT_MISMATCH
        """
        upper = UNBOUNDED_DISPLAY if max_count is None else str(max_count)
        return Diagnostic(
            code=DiagnosticCode.COUNT_MISMATCH,
            message=f"expected {min_count}..{upper} found {found}",
        )

    # ------------------------------------------------------------------
    # Grammar errors
    # ------------------------------------------------------------------

    @staticmethod
    def empty_literal() -> Diagnostic:
        """tag() called with an empty string.

        Returns:
            Diagnostic for EMPTY_LITERAL
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_LITERAL,
            message="Literal must contain at least one character",
            hint="Use optional() or many() to express an empty match",
        )

    @staticmethod
    def invalid_pattern(pattern: str, reason: str) -> Diagnostic:
        """regex() called with a pattern that does not compile.

        Args:
            pattern: The regex source
            reason: Message from the re module

        Returns:
            Diagnostic for INVALID_PATTERN
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_PATTERN,
            message=f"Invalid pattern '{pattern}': {reason}",
        )

    @staticmethod
    def no_alternatives() -> Diagnostic:
        """choices() called without rules.

        Returns:
            Diagnostic for NO_ALTERNATIVES
        """
        return Diagnostic(
            code=DiagnosticCode.NO_ALTERNATIVES,
            message="choices() requires at least one alternative",
        )

    @staticmethod
    def invalid_bounds(min_count: int, max_count: int | None) -> Diagnostic:
        """many() called with impossible bounds.

        Args:
            min_count: Lower bound
            max_count: Upper bound (None when unbounded)

        Returns:
            Diagnostic for INVALID_BOUNDS
        """
        upper = UNBOUNDED_DISPLAY if max_count is None else str(max_count)
        return Diagnostic(
            code=DiagnosticCode.INVALID_BOUNDS,
            message=f"Invalid repetition bounds {min_count}..{upper}",
            hint="Bounds must be non-negative and max_count must not be below min_count",
        )

    @staticmethod
    def unbound_rule(name: str | None) -> Diagnostic:
        """Recursive placeholder invoked before rec() finished building it.

        Args:
            name: Name given to rec(), if any

        Returns:
            Diagnostic for UNBOUND_RULE
        """
        label = f"'{name}'" if name else "placeholder"
        return Diagnostic(
            code=DiagnosticCode.UNBOUND_RULE,
            message=f"Recursive rule {label} invoked before its definition was bound",
            hint="Only invoke the placeholder from inside a parse, not while building the grammar",
        )

    @staticmethod
    def invalid_whitespace(value: str) -> Diagnostic:
        """Whitespace registration with something other than one character.

        Args:
            value: The rejected value

        Returns:
            Diagnostic for INVALID_WHITESPACE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_WHITESPACE,
            message=f"Whitespace must be a single character, got {value!r}",
        )
