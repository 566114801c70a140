"""
Search and optimization problems.

A :class:`Problem` owns everything a metaheuristic needs to know about the
domain: the shape and bounds of candidate solutions (:class:`ElementSpec`),
how to evaluate and compare them, when the search can stop, and the random
generator shared by the whole run.

Example::

    import numpy as np
    from stochopt import ElementSpec, Problem

    class Sphere(Problem):
        def __init__(self, length=3, random=None):
            super().__init__(ElementSpec(length, -5.0, 5.0), random=random)

        def evaluation(self, element):
            return float(np.sum(element.values ** 2))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

import numpy as np

from ..exceptions import BoundsError, ProblemDimensionError

if TYPE_CHECKING:
    from ..element import Element

Comparator = Callable[["Element", "Element"], float]


@dataclass(frozen=True)
class ElementSpec:
    """Shape and bounds shared by every element of a problem."""

    length: int = 10
    minimum_value: float = 0.0
    maximum_value: float = 1.0

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or int(self.length) != self.length or self.length < 1:
            raise ProblemDimensionError(f"Invalid element length {self.length!r}.", length=self.length)
        low, high = float(self.minimum_value), float(self.maximum_value)
        if not (math.isfinite(low) and math.isfinite(high)):
            raise BoundsError(f"Element bounds must be finite, got [{low}, {high}].")
        if low > high:
            raise BoundsError(f"minimum_value {low} is greater than maximum_value {high}.")
        object.__setattr__(self, "length", int(self.length))
        object.__setattr__(self, "minimum_value", low)
        object.__setattr__(self, "maximum_value", high)

    @property
    def span(self) -> float:
        return self.maximum_value - self.minimum_value

    def contains(self, value: float) -> bool:
        return not math.isnan(value) and self.minimum_value <= value <= self.maximum_value

    def first_invalid(self, values: np.ndarray) -> int | None:
        """Index of the first NaN or out of bounds value, if any."""
        bad = np.isnan(values) | (values < self.minimum_value) | (values > self.maximum_value)
        if not bad.any():
            return None
        return int(np.flatnonzero(bad)[0])

    def clip(self, values: Sequence[float] | np.ndarray) -> np.ndarray:
        return np.clip(np.asarray(values, dtype=float), self.minimum_value, self.maximum_value)

    def random_value(self, rng: np.random.Generator) -> float:
        return float(rng.uniform(self.minimum_value, self.maximum_value))

    def random_values(self, rng: np.random.Generator) -> np.ndarray:
        return rng.random(self.length) * self.span + self.minimum_value


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------
# A comparator returns a positive number when element2 is better than
# element1, a negative one when it is worse, and zero when their evaluations
# differ by less than the element resolution. NaN evaluations sort last.


def _nan_order(e1: float, e2: float) -> float:
    if math.isnan(e1) and math.isnan(e2):
        return 0.0
    return math.inf if math.isnan(e1) else -math.inf


def _within_resolution(d: float, element: "Element") -> float:
    return 0.0 if abs(d) < element.resolution else d


def _ordered(d: float, e1: float, e2: float, element: "Element") -> float:
    # inf - inf is NaN; equal infinities tie
    if math.isnan(d):
        return _nan_order(e1, e2) if math.isnan(e1) or math.isnan(e2) else 0.0
    return _within_resolution(d, element)


def minimization(element1: "Element", element2: "Element") -> float:
    """Ascending evaluation order."""
    e1, e2 = element1.evaluation, element2.evaluation
    return _ordered(e1 - e2, e1, e2, element1)


def maximization(element1: "Element", element2: "Element") -> float:
    """Descending evaluation order."""
    e1, e2 = element1.evaluation, element2.evaluation
    return _ordered(e2 - e1, e1, e2, element1)


def approximation(target: float) -> Comparator:
    """Comparator by ascending distance of the evaluation to ``target``."""
    target = float(target)

    def compare(element1: "Element", element2: "Element") -> float:
        e1, e2 = element1.evaluation, element2.evaluation
        return _ordered(abs(e1 - target) - abs(e2 - target), e1, e2, element1)

    compare.__name__ = f"approximation({target})"
    return compare


def comparator_for(objective: float) -> Comparator:
    """``-inf`` minimizes, ``+inf`` maximizes, anything else approximates."""
    objective = float(objective)
    if objective == -math.inf:
        return minimization
    if objective == math.inf:
        return maximization
    return approximation(objective)


class Problem:
    """Base class for problems.

    Parameters
    ----------
    representation : ElementSpec, optional
        Shape and bounds of the elements; ten values in ``[0, 1]`` by default.
    objective : float
        Direction of the optimization: ``-inf`` (minimization, default),
        ``+inf`` (maximization) or a target evaluation to approximate.
    random : numpy.random.Generator or int, optional
        Random generator for the run, or a seed for ``numpy.random.default_rng``.
        Every element and metaheuristic working on this problem shares it.

    Subclasses usually override :meth:`evaluation`, and optionally
    :meth:`mapping`, :meth:`successors` and :meth:`sufficient_element`.
    """

    title: str = ""
    description: str = ""

    def __init__(
        self,
        representation: ElementSpec | None = None,
        *,
        objective: float = -math.inf,
        random: np.random.Generator | int | None = None,
        title: str | None = None,
        description: str | None = None,
    ) -> None:
        self.representation = representation if representation is not None else ElementSpec()
        self.objective = float(objective)
        self._comparator = comparator_for(self.objective)
        self.random = random if isinstance(random, np.random.Generator) else np.random.default_rng(random)
        if title is not None:
            self.title = str(title)
        if description is not None:
            self.description = str(description)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def new_element(self, values: Sequence[float] | np.ndarray | None = None, evaluation: float = math.nan) -> "Element":
        from ..element import Element

        return Element(self, values, evaluation)

    def evaluation(self, element: "Element") -> float | Awaitable[float]:
        """Evaluation of one element; may return an awaitable.

        Defaults to the sum of the element's values, only useful for testing.
        """
        return float(np.sum(element.values))

    def mapping(self, element: "Element") -> Any:
        return element.values

    def successors(self, element: "Element") -> list["Element"]:
        return element.neighbourhood()

    def sufficient_element(self, element: "Element") -> bool:
        return False

    def suffices(self, elements: Sequence["Element"]) -> bool:
        """Whether the search can stop, given elements sorted best-first."""
        if not elements:
            return False
        return elements[0].suffices()

    # ------------------------------------------------------------------
    # Optimization modes
    # ------------------------------------------------------------------

    def compare(self, element1: "Element", element2: "Element") -> float:
        """Positive if ``element2`` is better than ``element1``, negative if worse, else zero."""
        return self._comparator(element1, element2)

    @property
    def sort_key(self) -> Callable[[Any], Any]:
        """Key function ordering elements best first, for ``sorted``, ``min`` and friends."""
        return cmp_to_key(self.compare)

    def sort(self, elements: list["Element"]) -> list["Element"]:
        """Sort ``elements`` in place, best first."""
        elements.sort(key=self.sort_key)
        return elements

    def loss(self, evaluation: float) -> float:
        """Number that decreases as the evaluation improves under ``objective``."""
        if self.objective == -math.inf:
            return evaluation
        if self.objective == math.inf:
            return -evaluation
        return abs(evaluation - self.objective)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.title!r}>"


__all__ = [
    "Comparator",
    "ElementSpec",
    "Problem",
    "minimization",
    "maximization",
    "approximation",
    "comparator_for",
]
