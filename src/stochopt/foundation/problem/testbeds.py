"""
Synthetic test functions for benchmarking metaheuristics.

See https://www.sfu.ca/~ssurjano/optimization.html for definitions.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from .base import ElementSpec, Problem

TestFunction = Callable[[np.ndarray], float]


class TestbedProblem(Problem):
    """Problem defined by a vectorized function of the element's values.

    When ``optimum_value`` is known the search stops as soon as the best
    element's evaluation is within ``tolerance`` of it.
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        function: TestFunction,
        representation: ElementSpec,
        *,
        objective: float = -math.inf,
        optimum_value: float | None = None,
        tolerance: float = 2.0**-52,
        random: np.random.Generator | int | None = None,
        title: str = "",
        description: str = "",
    ) -> None:
        super().__init__(representation, objective=objective, random=random, title=title, description=description)
        self.function = function
        self.optimum_value = optimum_value
        self.tolerance = float(tolerance)

    def evaluation(self, element) -> float:
        return float(self.function(element.values))

    def sufficient_element(self, element) -> bool:
        if self.optimum_value is None or not element.evaluated:
            return False
        return abs(element.evaluation - self.optimum_value) < self.tolerance


def testbed(
    title: str,
    function: TestFunction,
    *,
    length: int = 2,
    minimum_value: float = -1e6,
    maximum_value: float = 1e6,
    objective: float = -math.inf,
    optimum_value: float | None = None,
    random: np.random.Generator | int | None = None,
    description: str = "",
) -> TestbedProblem:
    """Shortcut to define a test problem from a function of the values."""
    return TestbedProblem(
        function,
        ElementSpec(length, minimum_value, maximum_value),
        objective=objective,
        optimum_value=optimum_value,
        random=random,
        title=title,
        description=description,
    )


testbed.__test__ = False  # type: ignore[attr-defined]


def sphere(length: int = 2, *, random: np.random.Generator | int | None = None) -> TestbedProblem:
    """Sum of squares; a single global minimum of 0 at the origin."""
    return testbed(
        "Sphere",
        lambda x: float(np.sum(x * x)),
        length=length,
        minimum_value=-5.12,
        maximum_value=5.12,
        optimum_value=0.0,
        random=random,
    )


def ackley(
    length: int = 2,
    a: float = 20.0,
    b: float = 0.2,
    c: float = 2 * math.pi,
    *,
    random: np.random.Generator | int | None = None,
) -> TestbedProblem:
    """Nearly flat outer region with many local minima around a global minimum of 0."""

    def function(x: np.ndarray) -> float:
        d = x.shape[0]
        term1 = -a * math.exp(-b * math.sqrt(float(np.sum(x * x)) / d))
        term2 = -math.exp(float(np.sum(np.cos(c * x))) / d)
        return term1 + term2 + a + math.e

    return testbed(
        "Ackley",
        function,
        length=length,
        minimum_value=-32.768,
        maximum_value=32.768,
        optimum_value=0.0,
        random=random,
    )


def rastrigin(length: int = 2, *, random: np.random.Generator | int | None = None) -> TestbedProblem:
    """Highly multimodal, with regularly distributed local minima."""
    return testbed(
        "Rastrigin",
        lambda x: float(10 * x.shape[0] + np.sum(x * x - 10 * np.cos(2 * math.pi * x))),
        length=length,
        minimum_value=-5.12,
        maximum_value=5.12,
        optimum_value=0.0,
        random=random,
    )


def rosenbrock(
    length: int = 2,
    a: float = 1.0,
    b: float = 100.0,
    *,
    random: np.random.Generator | int | None = None,
) -> TestbedProblem:
    """Global minimum of 0 inside a long, narrow, parabolic valley."""

    def function(x: np.ndarray) -> float:
        return float(np.sum(b * (x[:-1] ** 2 - x[1:]) ** 2 + (x[:-1] - a) ** 2))

    return testbed(
        "Rosenbrock",
        function,
        length=length,
        minimum_value=-2.048,
        maximum_value=2.048,
        optimum_value=0.0,
        random=random,
    )


def griewank(length: int = 2, *, random: np.random.Generator | int | None = None) -> TestbedProblem:
    """Many regularly distributed local minima."""

    def function(x: np.ndarray) -> float:
        i = np.arange(1, x.shape[0] + 1)
        return float(np.sum(x * x) / 4000.0 - np.prod(np.cos(x / np.sqrt(i))) + 1.0)

    return testbed(
        "Griewank",
        function,
        length=length,
        minimum_value=-600.0,
        maximum_value=600.0,
        optimum_value=0.0,
        random=random,
    )


__all__ = ["TestbedProblem", "testbed", "sphere", "ackley", "rastrigin", "rosenbrock", "griewank"]
