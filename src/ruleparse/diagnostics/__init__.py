"""Diagnostic system for ruleparse errors.

Provides structured error diagnostics with codes, locations and a fixed
caret rendering.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import GrammarError, ParseError, RuleError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GrammarError",
    "OutputFormat",
    "ParseError",
    "RuleError",
]
