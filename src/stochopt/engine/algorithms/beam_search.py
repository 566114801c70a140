"""Beam search: parallel best-first search with limited memory."""

from __future__ import annotations

from typing import Any

from stochopt.foundation.element import Element
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic


class BeamSearch(Metaheuristic):
    """
    Expands the state with the successors of all its elements.

    After evaluation and sieving only the best ``size`` remain. Successors are
    the problem's (``Problem.successors``) unless ``delta`` is given, in which
    case the neighbourhood of that radius is used.
    """

    def __init__(self, problem: Problem, *, delta: float | None = None, **kwargs: Any) -> None:
        super().__init__(problem, **kwargs)
        self.delta = None if delta is None else float(delta)

    def successors(self, element: Element) -> list[Element]:
        if self.delta is not None:
            return element.neighbourhood(self.delta)
        return element.successors()

    def expansion(self, size: int | None = None) -> list[Element]:
        return [successor for element in self.state for successor in self.successors(element)]


__all__ = ["BeamSearch"]
