"""
Problem registry.

Maps problem names to factories so run specifications can name a problem
instead of constructing it. Factories accept keyword parameters (including
``random``, a generator or seed) and return a :class:`Problem`.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from ..exceptions import InvalidProblemError
from ..registry import Registry
from .base import Problem
from .hello_world import HelloWorld
from .knapsack import KnapsackProblem
from .n_queens import NQueensPuzzle
from .sum_optimization import SumOptimization
from .testbeds import ackley, griewank, rastrigin, rosenbrock, sphere

ProblemFactory = Callable[..., Problem]

PROBLEMS: Registry[ProblemFactory] = Registry("problems")
PROBLEMS.register("sum_optimization", SumOptimization)
PROBLEMS.register("hello_world", HelloWorld)
PROBLEMS.register("n_queens", NQueensPuzzle)
PROBLEMS.register("knapsack", KnapsackProblem)
PROBLEMS.register("sphere", sphere)
PROBLEMS.register("ackley", ackley)
PROBLEMS.register("rastrigin", rastrigin)
PROBLEMS.register("rosenbrock", rosenbrock)
PROBLEMS.register("griewank", griewank)


def available_problems() -> list[str]:
    return PROBLEMS.list()


def make_problem(name: str, *, random: np.random.Generator | int | None = None, **params: Any) -> Problem:
    """Build a registered problem by name.

    Raises
    ------
    InvalidProblemError
        If no problem is registered under ``name``.
    """
    factory = PROBLEMS.get(name, None)
    if factory is None:
        raise InvalidProblemError(name, PROBLEMS.suggest(name) or available_problems())
    return factory(random=random, **params)


__all__ = ["PROBLEMS", "ProblemFactory", "available_problems", "make_problem"]
