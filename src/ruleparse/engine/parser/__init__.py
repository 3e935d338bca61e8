"""Rule-based parser module.

This module provides the Rule value, the primitive rules and the combinator
algebra, organized into focused submodules.

Module Organization:
- rule.py: Rule value and its methods (map, then, then_ignore, rthen, or_,
  catch, optional, named, ignore)
- primitives.py: Rules reading the cursor directly (tag, regex, eof)
- combinators.py: Rules built from rules (choices, many, seq, rec)
- core.py: Grammar construction context, Parse entry point, syntax()

Public API:
    syntax: Build a grammar and get its Parse entry point
    Rule, Grammar, Parse: Types behind the above
"""

from ruleparse.engine.parser.combinators import choices, many, rec, seq
from ruleparse.engine.parser.core import Grammar, Parse, syntax
from ruleparse.engine.parser.primitives import eof, regex, tag
from ruleparse.engine.parser.rule import Rule

__all__ = [
    "Grammar",
    "Parse",
    "Rule",
    "choices",
    "eof",
    "many",
    "rec",
    "regex",
    "seq",
    "syntax",
    "tag",
]
