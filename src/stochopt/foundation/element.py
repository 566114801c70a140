"""
Candidate solutions.

An :class:`Element` is a fixed-length vector of reals plus a cached
evaluation. It knows nothing about the problem domain by itself: its shape
and bounds come from the problem's :class:`~stochopt.foundation.problem.base.ElementSpec`,
its evaluation from :meth:`Problem.evaluation`, and its randomness from the
generator the problem owns. Mappings translate the abstract vector into the
domain representation (strings, permutations, scaled reals).
"""

from __future__ import annotations

import inspect
import json
import math
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Sequence

import numpy as np

from .exceptions import InvalidValueError, ProblemDimensionError

if TYPE_CHECKING:
    from .problem.base import ElementSpec, Problem


# ---------------------------------------------------------------------------
# Distance metrics
# ---------------------------------------------------------------------------
# Sequences of different lengths are compared over their common prefix.


def _common_prefix(array1: Sequence[Any], array2: Sequence[Any]) -> tuple[Sequence[Any], Sequence[Any]]:
    n = min(len(array1), len(array2))
    return array1[:n], array2[:n]


def hamming_distance(array1: Sequence[Any], array2: Sequence[Any]) -> int:
    """Number of positions at which the sequences differ."""
    a, b = _common_prefix(array1, array2)
    return sum(1 for x, y in zip(a, b) if x != y)


def manhattan_distance(array1: Sequence[float], array2: Sequence[float]) -> float:
    """Sum of the absolute differences of corresponding positions."""
    a, b = _common_prefix(array1, array2)
    return float(np.sum(np.abs(np.asarray(a, dtype=float) - np.asarray(b, dtype=float))))


def euclidean_distance(array1: Sequence[float], array2: Sequence[float]) -> float:
    a, b = _common_prefix(array1, array2)
    diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.sqrt(np.sum(diff * diff)))


def root_mean_squared_error(f: Callable[..., float], data: Iterable[Sequence[float]]) -> float:
    """
    RMSE of ``f`` over ``data``.

    Each datum is ``(expected, *arguments)``; ``f(*arguments)`` is compared
    against ``expected``. Empty data gives 0.
    """
    count = 0
    error = 0.0
    for datum in data:
        count += 1
        error += (datum[0] - f(*datum[1:])) ** 2
    return math.sqrt(error / count) if count else 0.0


class Element:
    """A candidate solution: a read-only vector of reals and its evaluation.

    Parameters
    ----------
    problem : Problem
        The problem this element is a candidate solution for. Shape, bounds,
        evaluation and the random generator are taken from it.
    values : sequence of float, optional
        Initial values. They are always copied. Random values within bounds
        are sampled when omitted.
    evaluation : float
        Known evaluation, ``nan`` (unevaluated) by default.

    Raises
    ------
    ProblemDimensionError
        If the number of values differs from the problem's element length.
    InvalidValueError
        If a value is NaN or lies outside the element bounds.
    """

    # Evaluations closer than this compare as equal.
    resolution: float = 2.0**-52

    hamming_distance = staticmethod(hamming_distance)
    manhattan_distance = staticmethod(manhattan_distance)
    euclidean_distance = staticmethod(euclidean_distance)
    root_mean_squared_error = staticmethod(root_mean_squared_error)

    def __init__(
        self,
        problem: "Problem",
        values: Sequence[float] | np.ndarray | None = None,
        evaluation: float = math.nan,
    ) -> None:
        self.problem = problem
        spec = problem.representation
        if values is None:
            array = spec.random_values(problem.random)
        else:
            array = np.array(values, dtype=float)
        if array.ndim != 1 or array.shape[0] != spec.length:
            raise ProblemDimensionError(
                f"Element of {type(problem).__name__} expects {spec.length} values, got shape {array.shape}.",
                length=spec.length,
            )
        invalid = spec.first_invalid(array)
        if invalid is not None:
            raise InvalidValueError(float(array[invalid]), invalid, spec.minimum_value, spec.maximum_value)
        array.flags.writeable = False
        self._values = array
        self._hash: int | None = None
        self.evaluation = float(evaluation)

    # ------------------------------------------------------------------
    # Basic properties
    # ------------------------------------------------------------------

    @property
    def values(self) -> np.ndarray:
        """The element's values (read-only array)."""
        return self._values

    @property
    def spec(self) -> "ElementSpec":
        return self.problem.representation

    @property
    def random(self) -> np.random.Generator:
        return self.problem.random

    @property
    def minimum_value(self) -> float:
        return self.spec.minimum_value

    @property
    def maximum_value(self) -> float:
        return self.spec.maximum_value

    @property
    def evaluated(self) -> bool:
        return not math.isnan(self.evaluation)

    def __len__(self) -> int:
        return self._values.shape[0]

    def random_value(self) -> float:
        """A uniform random value within the element's bounds."""
        return self.spec.random_value(self.random)

    def random_values(self) -> np.ndarray:
        return self.spec.random_values(self.random)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self) -> float | Awaitable[float]:
        """Compute and cache this element's evaluation.

        Returns the evaluation directly when the problem computes it
        synchronously, or an awaitable resolving to it when the problem's
        evaluation is asynchronous. Already evaluated elements return their
        cached evaluation without calling the problem again.
        """
        if not math.isnan(self.evaluation):
            return self.evaluation
        result = self.problem.evaluation(self)
        if inspect.isawaitable(result):
            return self._resolve_evaluation(result)
        self.evaluation = float(result)
        return self.evaluation

    async def _resolve_evaluation(self, pending: Awaitable[float]) -> float:
        self.evaluation = float(await pending)
        return self.evaluation

    def suffices(self) -> bool:
        """Goal test for this element alone."""
        return bool(self.problem.sufficient_element(self))

    def is_better_than(self, other: "Element") -> bool:
        return self.problem.compare(self, other) < 0

    # ------------------------------------------------------------------
    # Expansions
    # ------------------------------------------------------------------

    def successors(self) -> list["Element"]:
        """Elements adjacent to this one, as defined by the problem."""
        return list(self.problem.successors(self))

    def neighbourhood(self, radius: float | None = None) -> list["Element"]:
        """All single-dimension ``+radius``/``-radius`` perturbations within bounds.

        Perturbations that would leave the bounds are omitted. The default
        radius is 1% of the value span.
        """
        spec = self.spec
        radius = spec.span / 100.0 if radius is None else abs(float(radius))
        neighbours: list[Element] = []
        for i, value in enumerate(self._values.tolist()):
            up = value + radius
            if up <= spec.maximum_value:
                neighbours.append(self.modification(i, up))
            down = value - radius
            if down >= spec.minimum_value:
                neighbours.append(self.modification(i, down))
        return neighbours

    def modification(self, *changes: float) -> "Element":
        """New unevaluated copy with ``index, value, index, value, ...`` applied.

        Raises
        ------
        InvalidValueError
            If any new value is NaN or outside the element bounds.
        """
        if len(changes) % 2:
            raise ValueError("modification() expects index/value pairs.")
        spec = self.spec
        values = self._values.copy()
        for index, value in zip(changes[0::2], changes[1::2]):
            index = int(index)
            value = float(value)
            if not spec.contains(value):
                raise InvalidValueError(value, index, spec.minimum_value, spec.maximum_value)
            values[index] = value
        return type(self)(self.problem, values)

    def clone(self) -> "Element":
        """Copy of this element, evaluation included."""
        return type(self)(self.problem, self._values, self.evaluation)

    # ------------------------------------------------------------------
    # Mappings
    # ------------------------------------------------------------------

    def mapping(self) -> Any:
        """Domain representation of this element, as defined by the problem."""
        return self.problem.mapping(self)

    def emblem(self) -> str:
        """Short display string of this element's mapping."""
        mapped = self.mapping()
        if isinstance(mapped, np.ndarray):
            mapped = mapped.tolist()
        try:
            return json.dumps(mapped)
        except TypeError:
            return str(mapped)

    def normalized_values(self) -> np.ndarray:
        """Values rescaled from the element bounds to ``[0, 1]``."""
        spec = self.spec
        if spec.span == 0:
            return np.zeros_like(self._values)
        return np.clip((self._values - spec.minimum_value) / spec.span, 0.0, 1.0)

    def range_mapping(self, *ranges: Sequence[float]) -> list[float]:
        """Translate each value to the i-th ``(low, high)`` range.

        If fewer ranges than values are given the last range is used for the
        rest. Results are clamped to their range.
        """
        if not ranges:
            raise ValueError("Element.range_mapping() expects at least one range.")
        result = []
        for i, v in enumerate(self.normalized_values().tolist()):
            low, high = ranges[i] if i < len(ranges) else ranges[-1]
            mapped = v * (high - low) + low
            result.append(min(max(mapped, low), high))
        return result

    def array_mapping(self, *item_lists: Sequence[Any]) -> list[Any]:
        """Use each value to pick from the i-th list of items.

        If fewer lists than values are given the last list is used for the
        rest.
        """
        if not item_lists:
            raise ValueError("Element.array_mapping() expects at least one list of items.")
        result = []
        for i, v in enumerate(self.normalized_values().tolist()):
            items = item_lists[i] if i < len(item_lists) else item_lists[-1]
            index = min(int(v * len(items)), len(items) - 1)
            result.append(items[index])
        return result

    def set_mapping(self, items: Sequence[Any]) -> list[Any]:
        """Use each value to pick one of the remaining items; no item repeats."""
        if not isinstance(items, (list, tuple, range)):
            raise ValueError("Element.set_mapping() expects a sequence of items.")
        remaining = list(items)
        result = []
        for v in self.normalized_values().tolist():
            if not remaining:
                raise ValueError(f"Element.set_mapping() needs at least {len(self)} items, got {len(items)}.")
            index = min(int(v * len(remaining)), len(remaining) - 1)
            result.append(remaining.pop(index))
        return result

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def equals(self, other: object) -> bool:
        """Same class and exactly the same values."""
        return type(self) is type(other) and np.array_equal(self._values, other._values)  # type: ignore[attr-defined]

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((type(self), tuple(self._values.tolist())))
        return self._hash

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values.tolist()}, {self.evaluation})"


__all__ = [
    "Element",
    "hamming_distance",
    "manhattan_distance",
    "euclidean_distance",
    "root_mean_squared_error",
]
