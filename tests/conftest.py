"""Pytest fixtures for case_combinator tests."""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import NamedTuple

import pytest

from case_combinator import Axis, TestCaseCombinator


class Food(Enum):
    """Food that can be given to a monkey."""

    APPLE = "apple"
    BANANA = "banana"
    YOGHURT = "yoghurt"


class Meal(NamedTuple):
    stomach_full: bool
    food: Food


class Monkey:
    """Monkey that only eats bananas, and only when hungry."""

    def __init__(self, stomach_full: bool = False) -> None:
        self.stomach_full = stomach_full

    def should_eat(self, food: Food) -> bool:
        if self.stomach_full:
            return False
        return food is Food.BANANA


def pair_axes() -> list[Axis[tuple[int, int]]]:
    """Two axes over integer pairs, each setting one slot from {0, 1, 2}."""
    return [
        Axis([0, 1, 2], lambda pair, v: (v, pair[1]), name="first"),
        Axis([0, 1, 2], lambda pair, v: (pair[0], v), name="second"),
    ]


def build_monkey_cases() -> TestCaseCombinator[Meal]:
    return TestCaseCombinator(
        Meal(stomach_full=False, food=Food.APPLE),
        [
            Axis([True, False], lambda meal, v: meal._replace(stomach_full=v), name="stomach_full"),
            Axis(list(Food), lambda meal, v: meal._replace(food=v), name="food"),
        ],
    ).with_successful(Meal(stomach_full=False, food=Food.BANANA))


@pytest.fixture
def pair_combinator() -> TestCaseCombinator[tuple[int, int]]:
    """The 3x3 integer pair combinator starting from (0, 0)."""
    return TestCaseCombinator((0, 0), pair_axes())


@pytest.fixture
def monkey_cases() -> TestCaseCombinator[Meal]:
    return build_monkey_cases()


@pytest.fixture
def target_module(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[str, str], str]:
    """Write an importable module into a temp dir and chdir there.

    Returns a factory taking (module_name, source) and returning the
    module name, ready to be used in a ``module:attribute`` target.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "path", list(sys.path))

    def _write(name: str, source: str) -> str:
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        monkeypatch.delitem(sys.modules, name, raising=False)
        return name

    return _write
