"""Sum optimization: the simplest possible problem, used for testing."""

from __future__ import annotations

import math

import numpy as np

from .base import ElementSpec, Problem


class SumOptimization(Problem):
    """Optimize the sum of the element's values.

    ``target`` sets the direction: ``-inf`` minimizes the sum, ``+inf``
    maximizes it, and any other number is approximated. The search is
    sufficient once the best element's values add up exactly to ``target``.
    """

    title = "Sum optimization"
    description = "Very simple problem based on optimizing the elements' values sum."

    def __init__(
        self,
        length: int = 10,
        target: float = -math.inf,
        *,
        minimum_value: float = 0.0,
        maximum_value: float = 1.0,
        random: np.random.Generator | int | None = None,
    ) -> None:
        super().__init__(
            ElementSpec(length, minimum_value, maximum_value),
            objective=target,
            random=random,
        )
        self.target = float(target)

    def evaluation(self, element) -> float:
        return float(np.sum(element.values))

    def sufficient_element(self, element) -> bool:
        return float(np.sum(element.values)) == self.target
