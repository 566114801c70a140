"""Evolution strategy: random deviations replacing their parents when better."""

from __future__ import annotations

from typing import Any

from stochopt.foundation.element import Element
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic
from ._validation import require_range


class EvolutionStrategy(Metaheuristic):
    """
    Adds ``mutant_count`` mutants of every element per step.

    Mutants deviate in every dimension by a triangular distributed amount
    (the difference of two uniform draws, scaled to the value span), clipped
    to the bounds.
    """

    def __init__(self, problem: Problem, *, mutant_count: int = 1, size: int = 1, **kwargs: Any) -> None:
        super().__init__(problem, size=size, **kwargs)
        self.mutant_count = int(require_range(type(self).__name__, "mutant_count", mutant_count, 1))

    def mutant(self, element: Element) -> Element:
        rng = self.random
        spec = element.spec
        deviation = (rng.random(spec.length) - rng.random(spec.length)) * spec.span
        return self.problem.new_element(spec.clip(element.values + deviation))

    def mutants(self, element: Element, count: int | None = None) -> list[Element]:
        count = self.mutant_count if count is None else int(count)
        return [self.mutant(element) for _ in range(count)]

    def expansion(self, size: int | None = None) -> list[Element]:
        return [mutant for element in self.state for mutant in self.mutants(element)]


__all__ = ["EvolutionStrategy"]
