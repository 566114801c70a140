from .base import (
    Comparator,
    ElementSpec,
    Problem,
    approximation,
    comparator_for,
    maximization,
    minimization,
)
from .hello_world import HelloWorld
from .knapsack import KnapsackItem, KnapsackProblem
from .n_queens import NQueensPuzzle
from .registry import PROBLEMS, available_problems, make_problem
from .sum_optimization import SumOptimization
from .testbeds import TestbedProblem, ackley, griewank, rastrigin, rosenbrock, sphere, testbed

__all__ = [
    "Comparator",
    "ElementSpec",
    "Problem",
    "approximation",
    "comparator_for",
    "maximization",
    "minimization",
    "HelloWorld",
    "KnapsackItem",
    "KnapsackProblem",
    "NQueensPuzzle",
    "SumOptimization",
    "TestbedProblem",
    "testbed",
    "sphere",
    "ackley",
    "rastrigin",
    "rosenbrock",
    "griewank",
    "PROBLEMS",
    "available_problems",
    "make_problem",
]
