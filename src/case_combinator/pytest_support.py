"""pytest integration: one parametrized test per generated case.

Example::

    from case_combinator.pytest_support import parametrize

    monkey_cases = TestCaseCombinator(...).with_successful(...)

    @parametrize(monkey_cases)
    def test_monkey_eats(test_input, expected):
        monkey = Monkey(stomach_full=test_input.stomach_full)
        assert monkey.should_eat(test_input.food) is expected

Each test id is the case description, e.g. ``test_monkey_eats[False | Food.BANANA]``.
"""

from __future__ import annotations

from typing import Any

import pytest

from case_combinator.combinator import TestCaseCombinator
from case_combinator.reporting import BASE_CASE_LABEL, sorted_cases

DEFAULT_ARGNAMES = "test_input,expected"


def pytest_params(combinator: TestCaseCombinator[Any]) -> list[Any]:
    """Build ``pytest.param(input, is_successful, id=description)`` for every case.

    Params are sorted by description so test ids keep a stable order.
    """
    return [
        pytest.param(
            case.input,
            case.is_successful,
            id=case.description or BASE_CASE_LABEL,
        )
        for case in sorted_cases(combinator)
    ]


def parametrize(
    combinator: TestCaseCombinator[Any],
    argnames: str = DEFAULT_ARGNAMES,
) -> pytest.MarkDecorator:
    """``pytest.mark.parametrize`` over the combinator's current cases.

    Success marks must be in place before the decorator is applied; later
    marks are not seen by the collected tests.
    """
    return pytest.mark.parametrize(argnames, pytest_params(combinator))
