"""Arithmetic Example - A Calculator Grammar in ruleparse.

Demonstrates building a complete grammar with syntax():

1. Whitespace registration
2. Tokens with regex() and tag(), turned into values with map()
3. Operator precedence with many() and choices()
4. Parenthesised sub-expressions with rec()
5. Error reporting with caret rendering
6. The parse_or_none / parse_as_pair / parse_with_location variants

Run with:
    python examples/arithmetic.py
    python examples/arithmetic.py "2 * (3 + 4)"

Python 3.13+.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from ruleparse import Grammar, Location, ParseError, Rule, syntax

_OPERATORS: dict[str, Callable[[int, int], int]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a // b,
}


def fold(parts: tuple[int, list[tuple[Location, int]]]) -> int:
    """Apply (operator, operand) pairs left to right."""
    value, rest = parts
    for operator, operand in rest:
        value = _OPERATORS[operator.lexeme](value, operand)
    return value


def calculator(g: Grammar) -> Rule[int]:
    """Integer arithmetic: + - * / with the usual precedence and parentheses."""
    g.whitespace("\n", " ", "\t", "\r")

    # Whitespace inside a token is skipped, so "1 2" reads as 12
    number = g.regex("[0-9]+").map(lambda loc: int("".join(loc.lexeme.split()))).named("number")

    def expression(expr: Rule[int]) -> Rule[int]:
        group = g.tag("(").rthen(expr).then_ignore(g.tag(")")).named("group")
        factor = g.choices(number, group, name="factor")
        multiplicative = g.choices(g.tag("*"), g.tag("/"), name="operator")
        additive = g.choices(g.tag("+"), g.tag("-"), name="operator")
        term = factor.then(g.many(multiplicative.then(factor))).map(fold)
        return term.then(g.many(additive.then(term))).map(fold)

    return g.rec(expression, name="expression").then_ignore(g.eof())


def example_1_evaluate() -> None:
    """Evaluate a few expressions."""
    print("=" * 60)
    print("Example 1: Evaluation")
    print("=" * 60)

    parser = syntax(calculator)
    for text in ("10 + 22 * 9", "91 + 3 * 4 / 2 - 72", "(1 + 2) * (3 + 4)"):
        print(f"{text} = {parser.parse(text)}")
    print()


def example_2_errors() -> None:
    """Show caret-rendered parse errors."""
    print("=" * 60)
    print("Example 2: Error Reporting")
    print("=" * 60)

    parser = syntax(calculator)
    for text in ("1 +", "(1 + 2", "1 + 2\n* x"):
        try:
            parser.parse(text)
        except ParseError as e:
            print(e)
            for note in getattr(e, "__notes__", []):
                print(f"  note: {note}")
            print()


def example_3_variants() -> None:
    """Non-raising parse entry points."""
    print("=" * 60)
    print("Example 3: Parse Variants")
    print("=" * 60)

    parser = syntax(calculator)
    print(f"parse_or_none('2 *')      -> {parser.parse_or_none('2 *')}")

    value, error = parser.parse_as_pair("2 * 21")
    print(f"parse_as_pair('2 * 21')   -> value={value}, error={error!r}")

    value, location = parser.parse_with_location(" 6 * 7 ")
    print(f"parse_with_location(...)  -> value={value}, span={location.span}")

    as_text = parser.map(lambda n: f"result: {n}")
    print(f"map(...).parse('3 - 5')   -> {as_text.parse('3 - 5')}")
    print()


def main() -> None:
    """Run all examples, or evaluate the expression given on the command line."""
    if len(sys.argv) > 1:
        value, error = syntax(calculator).parse_as_pair(" ".join(sys.argv[1:]))
        if error is not None:
            print(error, file=sys.stderr)
            sys.exit(1)
        print(value)
        return

    example_1_evaluate()
    example_2_errors()
    example_3_variants()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
