#!/usr/bin/env python3
# FUZZ_PLUGIN_HEADER_START
# FUZZ_PLUGIN: grammar - Rule Engine Backtracking & Error Rendering
# Intentional: This header is intentionally placed for dynamic plugin discovery.
# CRITICAL: DO NOT REMOVE THIS HEADER - REQUIRED FOR FUZZ_ATHERIS.SH
# FUZZ_PLUGIN_HEADER_END
"""Rule Engine Fuzzer (Atheris).

Targets: ruleparse.engine (Source, tag, regex, choices, many, seq, rec,
         catch/optional) via syntax()

Concern boundary: This fuzzer feeds arbitrary text to a fixed set of
grammars and checks the engine contracts that must hold for every input:
parse_as_pair returns exactly one of value/error, failures are always
ParseError (never IndexError, ValueError or other leaks from the cursor),
every error location lies inside the input, caret rendering never fails,
and choices()/optional() restore the cursor after failure.

Metrics:
- Pattern coverage (one pattern per grammar)
- Performance profiling (mean/p95/max)
- Real memory usage (RSS via psutil)
- Error distribution by DiagnosticCode

Requires Python 3.13+ (uses PEP 695 type aliases).
"""

from __future__ import annotations

import argparse
import atexit
import json
import logging
import os
import statistics
import sys
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

# --- Dependency Checks ---
_psutil_mod: Any = None
_atheris_mod: Any = None

try:  # noqa: SIM105 - need module ref for check_dependencies
    import psutil as _psutil_mod  # type: ignore[no-redef]
except ImportError:
    pass

try:  # noqa: SIM105 - need module ref for check_dependencies
    import atheris as _atheris_mod  # type: ignore[no-redef]
except ImportError:
    pass


def check_dependencies(dep_names: list[str], dep_modules: list[Any]) -> None:
    """Verify fuzzing dependencies are importable, exit with instructions if not."""
    missing = [name for name, mod in zip(dep_names, dep_modules, strict=True) if mod is None]
    if missing:
        print("-" * 80, file=sys.stderr)
        print("ERROR: Missing required dependencies for fuzzing:", file=sys.stderr)
        for dep in missing:
            print(f"  - {dep}", file=sys.stderr)
        print("", file=sys.stderr)
        print("Install with: pip install -e '.[atheris]'", file=sys.stderr)
        print("-" * 80, file=sys.stderr)
        sys.exit(1)


check_dependencies(["psutil", "atheris"], [_psutil_mod, _atheris_mod])

import atheris  # noqa: E402  # pylint: disable=C0412,C0413
import psutil  # noqa: E402  # pylint: disable=C0412,C0413

# --- Type Aliases (PEP 695) ---

type FuzzStats = dict[str, int | str | float | dict[str, int]]


# --- Observability State ---


@dataclass
class FuzzerState:
    """Observability state for the grammar fuzzer."""

    iterations: int = 0
    findings: int = 0
    status: str = "incomplete"
    checkpoint_interval: int = 500

    performance_history: deque[float] = field(default_factory=lambda: deque(maxlen=10000))
    memory_history: deque[float] = field(default_factory=lambda: deque(maxlen=1000))
    initial_memory_mb: float = 0.0

    pattern_coverage: dict[str, int] = field(default_factory=dict)
    error_codes: dict[str, int] = field(default_factory=dict)


_state = FuzzerState()
_process: psutil.Process | None = None


def _get_process() -> psutil.Process:
    """Lazy-initialize psutil process handle."""
    global _process  # noqa: PLW0603  # pylint: disable=global-statement
    if _process is None:
        _process = psutil.Process(os.getpid())
    return _process


# --- Suppress logging and instrument imports ---
logging.getLogger("ruleparse").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["ruleparse"]):
    from ruleparse import Grammar, Location, Parse, ParseError, Rule, syntax
    from ruleparse.engine.parser.combinators import choices
    from ruleparse.engine.parser.primitives import regex, tag
    from ruleparse.engine.source import Source


class GrammarFuzzError(Exception):
    """Raised when an engine invariant is violated."""


# --- Grammars under test ---


def _arithmetic(g: Grammar) -> Rule[int]:
    g.whitespace()
    number = g.regex("[0-9]+").map(lambda loc: len(loc.lexeme)).named("number")

    def expression(expr: Rule[int]) -> Rule[int]:
        group = g.tag("(").rthen(expr).then_ignore(g.tag(")"))
        factor = g.choices(number, group, name="factor")
        operator = g.choices(g.tag("+"), g.tag("-"), g.tag("*"), g.tag("/"))
        return factor.then(g.many(operator.then(factor))).map(lambda parts: parts[0])

    return g.rec(expression, name="expression").then_ignore(g.eof())


def _keywords(g: Grammar) -> Rule[list[Any]]:
    g.whitespace(" ", "\n")
    ident = g.regex("[a-z_][a-z0-9_]*").named("ident")
    keyword = g.choices(g.tag("if"), g.tag("iff"), g.tag("else"), name="keyword")
    statement = g.seq(keyword, ident.optional(), g.tag(";").ignore())
    return g.many(statement, 0, 50).then_ignore(g.eof())


def _nested(g: Grammar) -> Rule[int]:
    return g.rec(
        lambda inner: g.choices(
            g.tag("[").rthen(g.many(inner)).then_ignore(g.tag("]")).map(len),
            g.tag("x").map(lambda _: 0),
        ),
        name="list",
    )


_PARSERS: dict[str, Parse[Any]] = {
    "arithmetic": syntax(_arithmetic),
    "keywords": syntax(_keywords),
    "nested": syntax(_nested, max_source_size=4096),
}


# --- Invariant checks ---


def _check_parse(name: str, parser: Parse[Any], text: str) -> None:
    value, error = parser.parse_as_pair(text)
    if (value is None) == (error is None):
        msg = f"{name}: parse_as_pair must return exactly one of value and error"
        raise GrammarFuzzError(msg)
    if error is None:
        return

    key = error.code.name
    _state.error_codes[key] = _state.error_codes.get(key, 0) + 1

    location: Location = error.location
    if not 0 <= location.start <= location.end <= len(text):
        msg = f"{name}: error location {location.span} outside input of {len(text)} chars"
        raise GrammarFuzzError(msg)
    if not str(error).startswith("Error at "):
        msg = f"{name}: malformed caret rendering {str(error)!r}"
        raise GrammarFuzzError(msg)


def _check_rollback(fdp: Any, text: str) -> None:
    first = fdp.ConsumeUnicodeNoSurrogates(4) or "a"
    second = fdp.ConsumeUnicodeNoSurrogates(4) or "b"

    source = Source(text)
    try:
        choices(tag(first), tag(second), regex("[0-9]+"))(source)
    except ParseError:
        if source.pos != 0:
            msg = f"choices() left cursor at {source.pos} after failure"
            raise GrammarFuzzError(msg) from None

    source = Source(text)
    if tag(first).optional()(source) is None and source.pos != 0:
        msg = f"optional() consumed {source.pos} chars without matching"
        raise GrammarFuzzError(msg)


_CHECKS: dict[str, Callable[[Any], None]] = {
    "arithmetic": lambda fdp: _check_parse(
        "arithmetic", _PARSERS["arithmetic"], fdp.ConsumeUnicodeNoSurrogates(256)
    ),
    "keywords": lambda fdp: _check_parse(
        "keywords", _PARSERS["keywords"], fdp.ConsumeUnicodeNoSurrogates(256)
    ),
    "nested": lambda fdp: _check_parse(
        "nested", _PARSERS["nested"], fdp.ConsumeUnicodeNoSurrogates(512)
    ),
    "rollback": lambda fdp: _check_rollback(fdp, fdp.ConsumeUnicodeNoSurrogates(64)),
}
_PATTERNS: tuple[str, ...] = tuple(_CHECKS)


# --- Reporting ---


def _build_stats() -> FuzzStats:
    stats: FuzzStats = {
        "status": _state.status,
        "iterations": _state.iterations,
        "findings": _state.findings,
        "pattern_coverage": dict(_state.pattern_coverage),
        "error_codes": dict(_state.error_codes),
    }
    if _state.performance_history:
        history = sorted(_state.performance_history)
        stats["perf_mean_ms"] = round(statistics.mean(history), 3)
        stats["perf_p95_ms"] = round(history[min(len(history) - 1, int(len(history) * 0.95))], 3)
        stats["perf_max_ms"] = round(history[-1], 3)
    if _state.memory_history:
        stats["memory_peak_mb"] = round(max(_state.memory_history), 2)
        stats["memory_delta_mb"] = round(_state.memory_history[-1] - _state.initial_memory_mb, 2)
    return stats


def _emit_report() -> None:
    """Emit JSON report to stderr (also registered with atexit)."""
    report = json.dumps(_build_stats(), sort_keys=True)
    print(f"\n[SUMMARY-JSON-BEGIN]{report}[SUMMARY-JSON-END]", file=sys.stderr, flush=True)


atexit.register(_emit_report)


# --- Entry point ---


def test_one_input(data: bytes) -> None:
    """Atheris entry point: run one invariant check on fuzzed text."""
    if _state.iterations == 0:
        _state.initial_memory_mb = _get_process().memory_info().rss / (1024 * 1024)

    _state.iterations += 1
    _state.status = "running"

    if _state.iterations % _state.checkpoint_interval == 0:
        _emit_report()

    fdp = atheris.FuzzedDataProvider(data)
    pattern = _PATTERNS[fdp.ConsumeIntInRange(0, len(_PATTERNS) - 1)]
    _state.pattern_coverage[pattern] = _state.pattern_coverage.get(pattern, 0) + 1

    start_time = time.perf_counter()
    try:
        _CHECKS[pattern](fdp)
    except GrammarFuzzError:
        _state.findings += 1
        raise
    except RecursionError:
        # Deep nesting in the "nested" grammar is a known limit, not a finding
        pass
    except Exception:  # pylint: disable=broad-exception-caught
        _state.findings += 1
        raise
    finally:
        _state.performance_history.append((time.perf_counter() - start_time) * 1000)
        if _state.iterations % 100 == 0:
            _state.memory_history.append(_get_process().memory_info().rss / (1024 * 1024))


def main() -> None:
    """Run the grammar fuzzer with CLI support."""
    parser = argparse.ArgumentParser(
        description="Rule engine fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    parser.add_argument(
        "--checkpoint-interval",
        type=int,
        default=500,
        help="Emit report every N iterations (default: 500)",
    )

    args, remaining = parser.parse_known_args()
    _state.checkpoint_interval = args.checkpoint_interval

    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=2048")

    sys.argv = [sys.argv[0], *remaining]

    print()
    print("=" * 80)
    print("Rule Engine Fuzzer (Atheris)")
    print("=" * 80)
    print(f"Target:     ruleparse.engine via syntax() ({len(_PATTERNS)} patterns)")
    print(f"Checkpoint: Every {_state.checkpoint_interval} iterations")
    print("Stopping:   Press Ctrl+C (report emitted at exit)")
    print("=" * 80)
    print()

    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
