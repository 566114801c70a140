"""Estimation of distribution with one independent histogram per dimension."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from stochopt.foundation.element import Element
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic
from ._validation import require_range


class DistributionEstimation(Metaheuristic):
    """
    Samples new elements from histograms of the current state.

    Every dimension's value range is split in ``histogram_width`` bars. New
    values pick a bar with probability equal to its frequency in the state
    and a uniform position inside it.
    """

    def __init__(self, problem: Problem, *, histogram_width: int = 10, **kwargs: Any) -> None:
        super().__init__(problem, **kwargs)
        self.histogram_width = int(require_range(type(self).__name__, "histogram_width", histogram_width, 1))

    def histograms(self, state: Sequence[Element] | None = None) -> np.ndarray:
        """Frequencies per dimension and bar, shaped ``(length, histogram_width)``."""
        state = self.state if state is None else state
        width = self.histogram_width
        length = self.problem.representation.length
        if not state:
            return np.full((length, width), 1.0 / width)
        normalized = np.array([element.normalized_values() for element in state])
        bars = np.minimum(width - 1, np.floor(normalized * width).astype(int))
        counts = np.array([np.bincount(bars[:, i], minlength=width) for i in range(length)], dtype=float)
        return counts / len(state)

    def element_from_histograms(self, histograms: np.ndarray) -> Element:
        rng = self.random
        spec = self.problem.representation
        width = histograms.shape[1]
        values = np.empty(histograms.shape[0])
        for i, histogram in enumerate(histograms):
            bar = min(width - 1, int(np.searchsorted(np.cumsum(histogram), rng.random(), side="right")))
            position = min(1.0, max(0.0, (bar + rng.random()) / width))
            values[i] = spec.minimum_value + position * spec.span
        return self.problem.new_element(spec.clip(values))

    def expansion(self, size: int | None = None) -> list[Element]:
        size = math.floor(self.expansion_rate * self.size) if size is None else int(size)
        histograms = self.histograms()
        return [self.element_from_histograms(histograms) for _ in range(size)]


__all__ = ["DistributionEstimation"]
