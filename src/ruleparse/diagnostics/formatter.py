"""Diagnostic formatting service.

Centralizes parse error output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import ParseError

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    CARET = "caret"  # Source line with caret underline (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Parse error formatting service.

    The CARET format is the canonical rendering of a ParseError and must
    stay byte-for-byte stable:

        Error at {line}:{column}: {message}
        {source line text}
        {problem.start spaces}{problem length carets}

    Line and column come from the cursor snapshot the error location was
    cut from (line is zero-based, column counts from the last newline).

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(error))
        Error at 0:1: expected if found eof
        i
        ^

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(error))
        0:1: expected if found eof

    Attributes:
        output_format: Output style (caret, simple, json)
    """

    output_format: OutputFormat = OutputFormat.CARET

    def format(self, error: "ParseError") -> str:
        """Format a single parse error.

        Args:
            error: ParseError to format

        Returns:
            Formatted error string
        """
        match self.output_format:
            case OutputFormat.CARET:
                return self._format_caret(error)
            case OutputFormat.SIMPLE:
                return self._format_simple(error)
            case OutputFormat.JSON:
                return self._format_json(error)

    def format_all(self, errors: Iterable["ParseError"]) -> str:
        """Format multiple parse errors.

        Args:
            errors: Iterable of errors to format

        Returns:
            Formatted string with all errors separated by blank lines
        """
        return "\n\n".join(self.format(e) for e in errors)

    def _format_caret(self, error: "ParseError") -> str:
        source = error.location.source
        problem = error.problem
        header = f"Error at {source.line()}:{source.column()}: {error.message}"
        underline = " " * problem.start + "^" * (problem.end - problem.start)
        return f"{header}\n{error.location.current_line()}\n{underline}"

    def _format_simple(self, error: "ParseError") -> str:
        source = error.location.source
        return f"{source.line()}:{source.column()}: {error.message}"

    def _format_json(self, error: "ParseError") -> str:
        source = error.location.source
        data: dict[str, str | int] = {
            "code": error.code.name,
            "code_value": error.code.value,
            "message": error.message,
            "line": source.line(),
            "column": source.column(),
            "start": error.problem.start,
            "end": error.problem.end,
            "lexeme": error.location.lexeme,
        }
        return json.dumps(data, ensure_ascii=False)
