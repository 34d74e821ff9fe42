"""case-combinator - exhaustive test-case generation.

Describe each independent axis of variation once and get every
combination as a test case, each with a readable description and a flag
saying whether the test expects it to succeed.

Quick Start:
    from case_combinator import Axis, TestCaseCombinator

    cases = TestCaseCombinator(
        (0, 0),
        [
            Axis([0, 1, 2], lambda pair, v: (v, pair[1])),
            Axis([0, 1, 2], lambda pair, v: (pair[0], v)),
        ],
    )
    cases.mark_successful_where(lambda pair: pair[1] == 1)

    for case in cases.test_cases:
        print(case.description, case.is_successful)
"""

from __future__ import annotations

from case_combinator.combinator import (
    DESCRIPTION_SEPARATOR,
    Axis,
    Combination,
    TestCase,
    TestCaseCombinator,
)
from case_combinator.config import CombinatorConfig, load_config
from case_combinator.errors import (
    CombinatorError,
    ConfigLoadError,
    ConfigValidationError,
    ErrorCode,
    ErrorContext,
    TargetLoadError,
    UnhashableValueError,
)
from case_combinator.reporting import (
    CaseSummary,
    CaseTableReporter,
    render_json,
    render_markdown,
    summarize,
)

__version__ = "0.3.0"

__all__ = [
    # Core
    "Axis",
    "Combination",
    "TestCase",
    "TestCaseCombinator",
    "DESCRIPTION_SEPARATOR",
    # Config
    "CombinatorConfig",
    "load_config",
    # Errors
    "CombinatorError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ErrorCode",
    "ErrorContext",
    "TargetLoadError",
    "UnhashableValueError",
    # Reporting
    "CaseSummary",
    "CaseTableReporter",
    "render_json",
    "render_markdown",
    "summarize",
]
