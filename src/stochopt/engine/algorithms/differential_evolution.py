"""Differential evolution.

Reference:
    Storn, R. and Price, K. (1997). Differential evolution - a simple and
    efficient heuristic for global optimization over continuous spaces.
    Journal of Global Optimization 11, pp. 341-359.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from stochopt.foundation.element import Element
from stochopt.foundation.exceptions import ConfigurationError
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic
from ._validation import require_range


class DifferentialEvolution(Metaheuristic):
    """
    For each element ``x`` build a trial element from three other random
    members ``a``, ``b`` and ``c``.

    Each value is ``a[i] + F * (b[i] - c[i])`` (clipped to the bounds) with
    probability ``crossover_probability``, and always at one random index;
    the rest are copied from ``x``.

    Parameters
    ----------
    differential_weight : float
        The coefficient ``F``, in ``[0, 2]``.
    crossover_probability : float
        Chance of each value coming from the differential formula.
    size : int
        Population size; at least 4.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        differential_weight: float = 1.0,
        crossover_probability: float = 0.3,
        size: int = 100,
        **kwargs: Any,
    ) -> None:
        if int(size) < 4:
            raise ConfigurationError(
                f"DifferentialEvolution needs a population of at least 4, got {size!r}.",
                "Increase 'size' to 4 or more",
                {"size": size},
            )
        super().__init__(problem, size=size, **kwargs)
        name = type(self).__name__
        self.differential_weight = require_range(name, "differential_weight", differential_weight, 0, 2)
        self.crossover_probability = require_range(name, "crossover_probability", crossover_probability, 0, 1)

    def expansion(self, size: int | None = None) -> list[Element]:
        state = self.state
        if len(state) < 4:
            return super().expansion(size)
        rng = self.random
        spec = self.problem.representation
        trials = []
        for index, element in enumerate(state):
            peers = [i for i in range(len(state)) if i != index]
            a, b, c = (state[i].values for i in rng.choice(peers, size=3, replace=False))
            mask = rng.random(spec.length) < self.crossover_probability
            mask[rng.integers(spec.length)] = True
            mutant = spec.clip(a + self.differential_weight * (b - c))
            trials.append(self.problem.new_element(np.where(mask, mutant, element.values)))
        return trials


__all__ = ["DifferentialEvolution"]
