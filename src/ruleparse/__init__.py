"""ruleparse - parser combinators over a whitespace-aware text cursor.

Grammars are assembled from small rule values: literal and regex
primitives, ordered choice, repetition, sequencing, recursion, mapping and
recovery. Parsing produces typed values or ParseErrors pinned to a source
location with a caret rendering.

Public API:
    syntax - Build a grammar once, get a Parse entry point
    Parse - parse / parse_or_none / parse_with_location / parse_as_pair
    Rule - Composable rule value
    tag, regex, eof - Primitive rules
    choices, many, seq, rec - Combinators
    Source, Location, Span - Cursor and location model

Exceptions:
    RuleError - Base exception class
    ParseError - Input does not match the grammar
    GrammarError - Rules constructed incorrectly

Submodules:
    ruleparse.engine - Cursor, locations and parser
    ruleparse.diagnostics - Error types, codes, templates and formatting
    ruleparse.constants - Configuration constants
"""

from .diagnostics import GrammarError, ParseError, RuleError
from .engine import (
    Grammar,
    Location,
    Parse,
    Rule,
    Source,
    Span,
    choices,
    eof,
    many,
    rec,
    regex,
    seq,
    syntax,
    tag,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ruleparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Grammar",
    "GrammarError",
    "Location",
    "Parse",
    "ParseError",
    "Rule",
    "RuleError",
    "Source",
    "Span",
    "__version__",
    "choices",
    "eof",
    "many",
    "rec",
    "regex",
    "seq",
    "syntax",
    "tag",
]
