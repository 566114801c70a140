"""
Run statistics.

Metaheuristics record numbers (evaluations, timings, acceptance
probabilities, temperatures) under a key and, optionally, a step. Each
``(key, step)`` pair accumulates into one :class:`Stat`; ``step=None`` is the
run-wide accumulator for a key.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Iterable


@dataclass
class Stat:
    """Running aggregate of a stream of numbers."""

    key: str
    step: int | None = None
    count: int = 0
    _sum: float = 0.0
    _sum_squares: float = 0.0
    _minimum: float = math.inf
    _maximum: float = -math.inf

    def add(self, value: float) -> "Stat":
        value = float(value)
        if math.isnan(value):
            return self
        self.count += 1
        self._sum += value
        self._sum_squares += value * value
        if value < self._minimum:
            self._minimum = value
        if value > self._maximum:
            self._maximum = value
        return self

    def sum(self) -> float:
        return self._sum

    def minimum(self) -> float:
        return self._minimum if self.count else math.nan

    def maximum(self) -> float:
        return self._maximum if self.count else math.nan

    def average(self) -> float:
        return self._sum / self.count if self.count else math.nan

    def variance(self) -> float:
        if not self.count:
            return math.nan
        mean = self._sum / self.count
        return max(0.0, self._sum_squares / self.count - mean * mean)

    def standard_deviation(self) -> float:
        return math.sqrt(self.variance())

    def as_dict(self) -> dict[str, float]:
        return {
            "count": self.count,
            "minimum": self.minimum(),
            "maximum": self.maximum(),
            "sum": self.sum(),
            "average": self.average(),
            "standard_deviation": self.standard_deviation(),
        }


class RunStatistics:
    """Keyed collection of :class:`Stat` accumulators."""

    def __init__(self) -> None:
        self._stats: dict[tuple[str, Hashable], Stat] = {}

    def stat(self, key: str, step: int | None = None) -> Stat:
        """Accumulator for ``(key, step)``, created empty on first access."""
        stat = self._stats.get((key, step))
        if stat is None:
            stat = self._stats[(key, step)] = Stat(key=key, step=step)
        return stat

    def add(self, key: str, value: float, step: int | None = None) -> Stat:
        return self.stat(key, step).add(value)

    def add_all(self, key: str, values: Iterable[float], step: int | None = None) -> Stat:
        stat = self.stat(key, step)
        for value in values:
            stat.add(value)
        return stat

    def history(self, key: str) -> dict[int, Stat]:
        """Per-step accumulators of ``key``, ordered by step."""
        steps = {step: stat for (k, step), stat in self._stats.items() if k == key and step is not None}
        return dict(sorted(steps.items()))

    def keys(self) -> list[str]:
        return sorted({key for key, _ in self._stats})

    def reset(self) -> None:
        self._stats.clear()

    def __len__(self) -> int:
        return len(self._stats)


class NullStatistics(RunStatistics):
    """Statistics sink that records nothing."""

    def stat(self, key: str, step: int | None = None) -> Stat:
        return Stat(key=key, step=step)


__all__ = ["Stat", "RunStatistics", "NullStatistics"]
