"""Genetic algorithm, the base of many evolutionary computing variants."""

from __future__ import annotations

import math
from typing import Any, Callable

from stochopt.foundation.element import Element
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic
from ..operators.genetic import CROSSOVERS, MUTATIONS, SELECTIONS, resolve_operator
from ._validation import require_range


class GeneticAlgorithm(Metaheuristic):
    """
    Expands the state with the (possibly mutated) offspring of selected parents.

    Operators are given either by their registered name or as callables with
    the signatures documented in :mod:`stochopt.engine.operators.genetic`.

    Parameters
    ----------
    expansion_rate : float
        Amount of offspring per step, as a ratio of ``size`` (rounded up to even).
    mutation_rate : float
        Chance of each child being mutated, in ``[0, 1]``.
    selection, crossover, mutation : str or callable
        Genetic operators; ``"rank"``, ``"single_point"`` and
        ``"single_point_uniform"`` by default.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        expansion_rate: float = 0.5,
        mutation_rate: float = 0.2,
        selection: str | Callable = "rank",
        crossover: str | Callable = "single_point",
        mutation: str | Callable = "single_point_uniform",
        **kwargs: Any,
    ) -> None:
        name = type(self).__name__
        super().__init__(problem, expansion_rate=require_range(name, "expansion_rate", expansion_rate, 0), **kwargs)
        self.mutation_rate = require_range(name, "mutation_rate", mutation_rate, 0, 1)
        self.selection = resolve_operator("selection", SELECTIONS, selection)
        self.crossover = resolve_operator("crossover", CROSSOVERS, crossover)
        self.mutation = resolve_operator("mutation", MUTATIONS, mutation)

    def expansion(self, size: int | None = None) -> list[Element]:
        count = math.floor(self.expansion_rate * self.size) if size is None else int(size)
        count += count % 2
        offspring: list[Element] = []
        for _ in range(0, count, 2):
            parents = self.selection(self, 2)
            for child in self.crossover(self, parents):
                if self.random.random() < self.mutation_rate:
                    child = self.mutation(self, child)
                offspring.append(child)
        return offspring


__all__ = ["GeneticAlgorithm"]
