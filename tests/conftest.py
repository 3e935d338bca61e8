"""Pytest configuration for the ruleparse test suite.

Hypothesis profiles:
- dev: local runs, 200 examples per property
- ci: CI runs, 50 derandomized examples
- verbose: 100 examples with progress output
- fuzz: 2000 examples, no deadline; selected automatically by ``-m fuzz``

The property tests drive regex() growth, which is quadratic in token
length, and deep rec() grammars, so per-example timings vary more than a
plain unit test's. Every profile therefore uses a generous deadline and
ignores the too_slow health check.

Profile selection (first match wins):
1. ``-m fuzz`` on the command line -> "fuzz"
2. HYPOTHESIS_PROFILE environment variable -> that profile
3. CI=true -> "ci"
4. otherwise -> "dev"

Tests marked ``@pytest.mark.fuzz`` are skipped unless ``-m fuzz`` is given.
"""

import os
from datetime import timedelta

import pytest
from hypothesis import HealthCheck, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_SLOW_PROPERTY_DEADLINE = timedelta(milliseconds=500)

_PROFILES: dict[str, dict[str, object]] = {
    "dev": {"max_examples": 200},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "verbosity": Verbosity.verbose},
    "fuzz": {"max_examples": 2000, "deadline": None},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(
        _name,
        **{
            "deadline": _SLOW_PROPERTY_DEADLINE,
            "suppress_health_check": [HealthCheck.too_slow],
            **_options,
        },
    )


def _requested_fuzz(config: pytest.Config) -> bool:
    return "fuzz" in str(config.getoption("-m", default=""))


def _detect_profile(config: pytest.Config) -> str:
    if _requested_fuzz(config):
        return "fuzz"
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in _PROFILES:
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


# =============================================================================
# PYTEST HOOKS
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the fuzz marker and load the Hypothesis profile."""
    config.addinivalue_line(
        "markers",
        "fuzz: long-running grammar property tests (skipped unless -m fuzz)",
    )
    settings.load_profile(_detect_profile(config))


def pytest_report_header(config: pytest.Config) -> str:
    """Show the active Hypothesis profile in the session header."""
    return f"hypothesis profile: {_detect_profile(config)}"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested."""
    if _requested_fuzz(config):
        return

    skip_fuzz = pytest.mark.skip(reason="grammar fuzz property - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
