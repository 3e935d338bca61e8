"""Primitive rules.

The only rules that read characters from the cursor directly. Everything
else in the combinator algebra is built from these and only moves the
cursor through save()/restore().

Whitespace:
    Characters come from Source.peek()/advance(), so whitespace registered
    on the cursor is skipped before, inside and after a match. The returned
    Location spans the skipped characters; its lexeme does not include
    them at either end.

Error Context:
    Failures raise ParseError whose location runs from the rule's starting
    checkpoint to where matching stopped. The cursor is NOT restored;
    backtracking is the enclosing combinator's job.
"""

import re

from ruleparse.diagnostics import ErrorTemplate, GrammarError, ParseError
from ruleparse.engine.location import Location
from ruleparse.engine.source import Source

from .rule import Rule

__all__ = ["eof", "regex", "tag"]


def tag(literal: str) -> Rule[Location]:
    """Match an exact literal, one character at a time.

    Examples:
        tag("if") on "ifx" -> lexeme "if", cursor left before "x"
        tag("if") on "i"   -> ParseError "expected if found eof"
        tag("if") on "ix"  -> ParseError "expected if found i"

    Args:
        literal: Text to match (non-empty)

    Returns:
        Rule producing the Location of the match, named after the literal

    Raises:
        GrammarError: If literal is empty
    """
    if not literal:
        raise GrammarError(ErrorTemplate.empty_literal())

    def _tag(source: Source) -> Location:
        checkpoint = source.save()
        for expected in literal:
            found = source.peek()
            if found is None:
                loc = checkpoint.location(source)
                raise ParseError(ErrorTemplate.expected_literal_eof(literal), loc)
            if found != expected:
                loc = checkpoint.location(source)
                raise ParseError(ErrorTemplate.expected_literal(literal, loc.lexeme), loc)
            source.advance(1)
        return checkpoint.location(source)

    return Rule(_tag, literal)


def regex(pattern: str | re.Pattern[str], flags: int | re.RegexFlag = 0) -> Rule[Location]:
    """Match a token by greedy whole-string growth.

    Starting from the next non-whitespace character, the candidate text
    grows one character at a time for as long as the pattern matches the
    WHOLE candidate (re.fullmatch). The token is the last candidate that
    matched. If the very first character does not match on its own, the
    rule fails: patterns describe exact tokens, not prefixes.

    Examples:
        regex("[0-9]+") on "123abc" -> lexeme "123"
        regex("[0-9]+") on "abc"    -> ParseError "expected [0-9]+ found a"
        regex("[0-9]+") on ""       -> ParseError "expected [0-9]+ found eof"

    Performance:
        O(n^2) in the token length (one fullmatch per grown character).

    Args:
        pattern: Regex source or compiled pattern
        flags: re flags, only used when pattern is a string

    Returns:
        Rule producing the Location of the token, named after the pattern

    Raises:
        GrammarError: If the pattern does not compile
    """
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern, flags)
        except re.error as e:
            raise GrammarError(ErrorTemplate.invalid_pattern(pattern, str(e))) from e
    text = compiled.pattern

    def _regex(source: Source) -> Location:
        checkpoint = source.save()
        scan = source.save()
        found = scan.peek()
        if found is None:
            raise ParseError(ErrorTemplate.expected_pattern_eof(text), checkpoint.location(scan))

        candidate = found
        matched_end: int | None = None
        while True:
            if compiled.fullmatch(candidate) is None:
                if matched_end is not None:
                    break
                raise ParseError(
                    ErrorTemplate.expected_pattern(text, candidate),
                    checkpoint.location(scan),
                )
            found = scan.advance(1)
            matched_end = scan.pos
            if found is None:
                break
            candidate += found

        source.pos = matched_end
        return checkpoint.location(source)

    return Rule(_regex, text)


def eof() -> Rule[Location]:
    """Match the end of input, ignoring trailing whitespace.

    Append to a top-level rule with then_ignore(eof()) to reject input the
    grammar does not fully consume.

    Returns:
        Rule producing the (empty-lexeme) Location of the trailing region
    """

    def _eof(source: Source) -> Location:
        checkpoint = source.save()
        found = source.peek()
        if found is not None:
            loc = checkpoint.location(source)
            raise ParseError(ErrorTemplate.expected_eof(found), loc)
        return checkpoint.location(source)

    return Rule(_eof, "eof")
