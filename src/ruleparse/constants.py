"""Shared constants for ruleparse.

This module provides centralized configuration constants used across
the engine and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "DEFAULT_WHITESPACE",
    "EOF_DISPLAY",
    "MAX_SOURCE_SIZE",
    "UNBOUNDED_DISPLAY",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source length (in characters) accepted by Parse.parse().
# Grammars can override it with syntax(..., max_source_size=N); 0 disables it.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# WHITESPACE
# ============================================================================

# Registered by Grammar.whitespace() when called without arguments.
DEFAULT_WHITESPACE: frozenset[str] = frozenset({" ", "\t", "\r", "\n"})

# ============================================================================
# DIAGNOSTIC TEXT
# ============================================================================

# Shown in place of a character when the cursor is at end of input.
EOF_DISPLAY: str = "eof"

# Shown as the upper bound of an unbounded repetition.
UNBOUNDED_DISPLAY: str = "*"
