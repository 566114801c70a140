"""Gradient descent with finite difference gradient estimates.

The gradient of the problem's loss (see :meth:`Problem.loss`) is estimated
at every element by central differences, after Kiefer and Wolfowitz, and the
element moves against it. Rate and estimator width shrink as the run goes:
``rate = 1 / step`` and ``width = step ** (-1/3) * delta``.

Reference:
    Kiefer, J. and Wolfowitz, J. (1952). Stochastic estimation of the maximum
    of a regression function. Ann. Math. Statist. 23(3), pp. 462-466.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from stochopt.foundation.element import Element
from stochopt.foundation.observer import LifecycleEvent
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic
from ._validation import require_range


class GradientDescent(Metaheuristic):
    """
    Moves every element of the state in its direction of steepest descent.

    Parameters
    ----------
    delta : float
        Maximum distance used by the gradient estimator.
    size : int
        Parallel descents; 1 by default.
    """

    def __init__(self, problem: Problem, *, delta: float = 1.0, size: int = 1, **kwargs: Any) -> None:
        super().__init__(problem, size=size, **kwargs)
        self.delta = require_range(type(self).__name__, "delta", delta, 0)

    def rate(self, step: int | None = None) -> float:
        step = self.step if step is None else int(step)
        return 1.0 / max(1, step)

    def estimator_width(self, step: int | None = None, delta: float | None = None) -> float:
        step = self.step if step is None else int(step)
        delta = self.delta if delta is None else float(delta)
        return max(1, step) ** (-1 / 3) * delta

    def _probes(self, element: Element, width: float) -> list[tuple[Element, Element]]:
        spec = element.spec
        probes = []
        for i, value in enumerate(element.values.tolist()):
            left = element.modification(i, max(spec.minimum_value, value - width))
            right = element.modification(i, min(spec.maximum_value, value + width))
            probes.append((left, right))
        return probes

    def _estimate(self, probes: Sequence[tuple[Element, Element]]) -> np.ndarray:
        loss = self.problem.loss
        gradient = np.zeros(len(probes))
        for i, (left, right) in enumerate(probes):
            run = float(right.values[i] - left.values[i])
            if run > 0:
                gradient[i] = (loss(right.evaluation) - loss(left.evaluation)) / run
        return gradient

    async def gradients(self, elements: Sequence[Element], width: float | None = None) -> list[np.ndarray]:
        """Loss gradient estimates at each of ``elements``, from one evaluation batch."""
        width = self.estimator_width() if width is None else float(width)
        probes = [self._probes(element, width) for element in elements]
        await self.evaluate([probe for pairs in probes for pair in pairs for probe in pair])
        return [self._estimate(pairs) for pairs in probes]

    async def gradient(self, element: Element, width: float | None = None) -> np.ndarray:
        return (await self.gradients([element], width))[0]

    async def update(self) -> None:
        rate = self.rate()
        spec = self.problem.representation
        gradients = await self.gradients(self.state)
        moved = [
            self.problem.new_element(spec.clip(element.values - gradient * rate))
            for element, gradient in zip(self.state, gradients)
        ]
        await self.evaluate(moved)
        self.state[:] = moved
        self.notify(LifecycleEvent.UPDATED)


__all__ = ["GradientDescent"]
