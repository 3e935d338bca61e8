"""Engine package: cursor, locations and the rule-based parser.

Python 3.13+.
"""

from .location import Location, Span
from .parser import (
    Grammar,
    Parse,
    Rule,
    choices,
    eof,
    many,
    rec,
    regex,
    seq,
    syntax,
    tag,
)
from .source import Source

__all__ = [
    "Grammar",
    "Location",
    "Parse",
    "Rule",
    "Source",
    "Span",
    "choices",
    "eof",
    "many",
    "rec",
    "regex",
    "seq",
    "syntax",
    "tag",
]
