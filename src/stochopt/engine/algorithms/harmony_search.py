"""Harmony search.

Reference:
    Geem, Z.W., Kim, J.H. and Loganathan, G.V. (2001). A new heuristic
    optimization algorithm: harmony search. Simulation 76(2), pp. 60-68.
"""

from __future__ import annotations

from typing import Any

from stochopt.foundation.element import Element
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic
from ._validation import require_range


class HarmonySearch(Metaheuristic):
    """
    Improvises exactly one new element per step.

    Each value is copied from a random state member (the "harmony memory")
    with probability ``harmony_probability``, then nudged by ``delta`` up or
    down with probability ``adjust_probability``; otherwise it is drawn
    uniformly. Values are clamped to the bounds.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        harmony_probability: float = 0.9,
        adjust_probability: float = 0.5,
        delta: float = 1.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(problem, **kwargs)
        name = type(self).__name__
        self.harmony_probability = require_range(name, "harmony_probability", harmony_probability, 0, 1)
        self.adjust_probability = require_range(name, "adjust_probability", adjust_probability, 0, 1)
        self.delta = float(delta)

    def expansion(self, size: int | None = None) -> list[Element]:
        rng = self.random
        spec = self.problem.representation
        values = []
        for i in range(spec.length):
            if self.state and rng.random() < self.harmony_probability:
                value = float(self.state[int(rng.integers(len(self.state)))].values[i])
                if rng.random() < self.adjust_probability:
                    value += self.delta if rng.random() < 0.5 else -self.delta
                    value = min(spec.maximum_value, max(spec.minimum_value, value))
            else:
                value = spec.random_value(rng)
            values.append(value)
        return [self.problem.new_element(values)]


__all__ = ["HarmonySearch"]
