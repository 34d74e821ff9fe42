"""Exhaustive test-case generation from independent axes of variation.

A TestCaseCombinator starts from a base input value and a list of axes.
Each axis knows the candidate values it can take and how to apply one of
them onto a copy of the input. The combinator expands the full Cartesian
product up front, describes every combination as the ``" | "``-joined
candidate values, and lets the test author mark which combinations are
expected to succeed.

Example:
    >>> from enum import Enum
    >>> from typing import NamedTuple
    >>>
    >>> class Food(Enum):
    ...     APPLE = "apple"
    ...     BANANA = "banana"
    ...     YOGHURT = "yoghurt"
    >>>
    >>> class Meal(NamedTuple):
    ...     stomach_full: bool
    ...     food: Food
    >>>
    >>> cases = TestCaseCombinator(
    ...     Meal(stomach_full=False, food=Food.APPLE),
    ...     [
    ...         Axis([True, False], lambda meal, v: meal._replace(stomach_full=v)),
    ...         Axis(list(Food), lambda meal, v: meal._replace(food=v)),
    ...     ],
    ... ).with_successful(Meal(stomach_full=False, food=Food.BANANA))
    >>> len(cases)
    6
    >>> [case.description for case in cases.successful_cases]
    ['False | Food.BANANA']

The generated set is deduplicated by input value, so two candidate tuples
that assemble the same input collapse into a single test case. Iteration
order of ``test_cases`` is not guaranteed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from case_combinator.errors import ErrorContext, UnhashableValueError

logger = logging.getLogger(__name__)

DESCRIPTION_SEPARATOR = " | "

T = TypeVar("T")

# Receives the current input and one candidate value, returns a new input.
Applicator = Callable[[T, Any], T]
Predicate = Callable[[T], bool]
KeyFunc = Callable[[T], Hashable]


@dataclass(frozen=True)
class Axis(Generic[T]):
    """One independent dimension of variation.

    Attributes:
        values: Candidate values, in the order they are expanded. Any
            iterable is accepted and stored as a tuple.
        apply: Pure function returning a new input with one candidate
            value substituted in. Must not mutate its arguments.
        name: Optional label, only used as a column header by reporters.
    """

    values: Sequence[Any]
    apply: Applicator
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def size(self) -> int:
        """Number of candidate values on this axis."""
        return len(self.values)

    @classmethod
    def coerce(cls, axis: AxisLike) -> Axis[T]:
        """Accept an Axis or a plain ``(values, apply)`` pair."""
        if isinstance(axis, Axis):
            return axis
        values, apply = axis
        return cls(values, apply)

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"Axis({label}values={list(self.values)})"


AxisLike = Union[Axis, tuple[Iterable[Any], Callable[[Any, Any], Any]]]


@dataclass(frozen=True)
class Combination(Generic[T]):
    """A fully assembled input and the description of how it was built."""

    value: T
    description: str


@dataclass(frozen=True)
class TestCase(Generic[T]):
    """Caller-facing view of one combination.

    Attributes:
        input: The assembled input value.
        description: ``" | "``-joined text of the chosen candidate values.
        is_successful: Whether the input was marked as an expected success
            at the time the view was read.
    """

    __test__ = False

    input: T
    description: str
    is_successful: bool


class TestCaseCombinator(Generic[T]):
    """Builds test cases covering every combination of the given axes.

    The full combination set is computed once, in the constructor, and never
    changes afterwards. The success set starts empty and only grows through
    mark_successful() and mark_successful_where(). ``test_cases`` joins the
    two on every read.

    Args:
        initial_value: Base input every combination starts from.
        axes: Axis objects or ``(values, apply)`` pairs, in application
            order. The last axis varies fastest.
        key: Optional function mapping an input to a hashable identity.
            Needed when inputs are unhashable (lists, dicts, mutable
            dataclasses); identity and equality then follow the key.

    Raises:
        UnhashableValueError: If an input cannot be hashed and no key
            function was given.
    """

    __test__ = False

    def __init__(
        self,
        initial_value: T,
        axes: Iterable[AxisLike],
        *,
        key: KeyFunc | None = None,
    ) -> None:
        self.initial_value = initial_value
        self.axes: tuple[Axis[T], ...] = tuple(Axis.coerce(axis) for axis in axes)
        self._key = key
        self._combinations: dict[Hashable, Combination[T]] = {}
        self._successful: set[Hashable] = set()

        emitted = 0
        for combination in self._expand(initial_value, 0, []):
            emitted += 1
            identity = self._identity(combination.value)
            if identity in self._combinations:
                logger.debug(
                    f"Combination '{combination.description}' collapses onto "
                    f"'{self._combinations[identity].description}'"
                )
                continue
            self._combinations[identity] = combination

        logger.debug(
            f"Generated {len(self._combinations)} combinations from "
            f"{len(self.axes)} axes ({emitted} emitted)"
        )

    def _expand(
        self,
        working: T,
        position: int,
        fragments: list[str],
    ) -> Iterator[Combination[T]]:
        """Depth-first backtracking over the axes starting at ``position``."""
        if position == len(self.axes):
            yield Combination(working, DESCRIPTION_SEPARATOR.join(fragments))
            return

        axis = self.axes[position]
        for candidate in axis.values:
            updated = axis.apply(working, candidate)
            fragments.append(str(candidate))
            yield from self._expand(updated, position + 1, fragments)
            fragments.pop()

    def _identity(self, value: T) -> Hashable:
        identity = self._key(value) if self._key is not None else value
        try:
            hash(identity)
        except TypeError as e:
            raise UnhashableValueError(
                f"Input of type {type(value).__name__} is not hashable",
                context=ErrorContext(value=repr(value)),
                cause=e,
            ) from e
        return identity

    def mark_successful(self, value: T) -> None:
        """Mark ``value`` as a case the test expects to succeed.

        Marking a value that was never generated is allowed and has no
        visible effect.
        """
        self._successful.add(self._identity(value))

    def mark_successful_where(
        self,
        predicate: Predicate,
        *,
        replace: bool = False,
    ) -> None:
        """Mark every generated input matching ``predicate`` as successful.

        Calls accumulate: a later call never un-marks inputs marked by an
        earlier one. For example, marking ``lambda v: v[0]`` and then
        ``lambda v: v[1]`` over two boolean axes leaves three of the four
        cases successful, not one.

        Args:
            predicate: Called with each generated input. Exceptions it
                raises propagate to the caller.
            replace: Clear the success set first, so that exactly the
                matching inputs end up marked.
        """
        matched = [
            identity
            for identity, combination in self._combinations.items()
            if predicate(combination.value)
        ]
        if replace:
            self._successful.clear()
        self._successful.update(matched)
        logger.debug(f"Predicate matched {len(matched)} of {len(self)} combinations")

    def with_successful(self, *values: T) -> TestCaseCombinator[T]:
        """Chaining form of mark_successful(); returns ``self``."""
        for value in values:
            self.mark_successful(value)
        return self

    def with_successful_where(
        self,
        predicate: Predicate,
        *,
        replace: bool = False,
    ) -> TestCaseCombinator[T]:
        """Chaining form of mark_successful_where(); returns ``self``."""
        self.mark_successful_where(predicate, replace=replace)
        return self

    @property
    def test_cases(self) -> Iterator[TestCase[T]]:
        """All test cases with their current success flag.

        Recomputed on every access. Order is not guaranteed.
        """
        return (
            TestCase(
                input=combination.value,
                description=combination.description,
                is_successful=identity in self._successful,
            )
            for identity, combination in self._combinations.items()
        )

    @property
    def combinations(self) -> tuple[Combination[T], ...]:
        """The generated combinations, without success information."""
        return tuple(self._combinations.values())

    @property
    def successful_cases(self) -> list[TestCase[T]]:
        """Test cases currently marked as successful."""
        return [case for case in self.test_cases if case.is_successful]

    def __len__(self) -> int:
        return len(self._combinations)

    def __iter__(self) -> Iterator[TestCase[T]]:
        return self.test_cases

    def __repr__(self) -> str:
        return (
            f"TestCaseCombinator(axes={len(self.axes)}, "
            f"combinations={len(self)}, successful={len(self.successful_cases)})"
        )
