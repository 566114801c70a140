"""Generic metaheuristic engine.

A run keeps a population (``state``) of elements and repeats::

    initiate -> evaluate                       (first advance)
    expand -> evaluate -> sieve                (every later advance)
    analyze                                    (after every advance)

until :meth:`Metaheuristic.finished`. Concrete algorithms override only the
hooks that define them (``expansion``, ``update``, ``initiate``,
``finished``); deduplication, sorting, truncation, statistics, events and the
default termination criteria are shared.

Evaluation may be asynchronous, so the methods that can evaluate elements
(``evaluate``, ``update``, ``advance`` and ``run``) are coroutines. Their only
suspension point is the join over a batch of pending evaluations inside
:meth:`Metaheuristic.evaluate`.

Example::

    from stochopt import Metaheuristic, SumOptimization

    mh = Metaheuristic(SumOptimization(length=4, random=7), size=5, steps=3)
    best = mh.run_sync()
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
import time
from typing import Iterable, Sequence

import numpy as np

from stochopt.foundation.element import Element
from stochopt.foundation.observer import LifecycleEvent, MetaheuristicListener
from stochopt.foundation.problem.base import Problem
from stochopt.foundation.statistics import RunStatistics, Stat


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class Metaheuristic:
    """Base class of all metaheuristics; on its own it performs a random search.

    Parameters
    ----------
    problem : Problem
        Problem to solve. Not owned: the same problem may serve many runs,
        though not concurrently, since they would share its generator.
    size : int
        Population cap; ``sieve()`` truncates the state to this many elements.
    steps : int
        Maximum number of iterations after initiation.
    expansion_rate : float
        Elements produced by the default ``expansion()``, as a ratio of ``size``.
    statistics : RunStatistics, optional
        Accumulator for evaluations and timings; a fresh one by default.
    listeners : iterable of MetaheuristicListener, optional
        Observers notified of every lifecycle event.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        size: int = 100,
        steps: int = 100,
        expansion_rate: float = 0.5,
        statistics: RunStatistics | None = None,
        listeners: Iterable[MetaheuristicListener] | None = None,
    ) -> None:
        if int(size) < 1:
            raise ValueError(f"size must be a positive integer, got {size!r}.")
        if int(steps) < 0:
            raise ValueError(f"steps must be a non-negative integer, got {steps!r}.")
        self.problem = problem
        self.size = int(size)
        self.steps = int(steps)
        self.expansion_rate = float(expansion_rate)
        self.statistics = statistics if statistics is not None else RunStatistics()
        self.listeners: list[MetaheuristicListener] = list(listeners or ())
        self.state: list[Element] = []
        self.step = -1

    @property
    def random(self) -> np.random.Generator:
        """The run's random generator, owned by the problem."""
        return self.problem.random

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def add_listener(self, listener: MetaheuristicListener) -> None:
        self.listeners.append(listener)

    def remove_listener(self, listener: MetaheuristicListener) -> None:
        self.listeners.remove(listener)

    def notify(self, event: LifecycleEvent) -> None:
        _logger().debug("%s %s (step %d, %d elements)", type(self).__name__, event.value, self.step, len(self.state))
        for listener in self.listeners:
            listener.on_event(event, self)

    # -------------------------------------------------------------------------
    # Basic workflow
    # -------------------------------------------------------------------------

    def initiate(self, size: int | None = None) -> None:
        """Replace the state with ``size`` new random elements."""
        size = self.size if size is None else int(size)
        self.state = [self.problem.new_element() for _ in range(size)]
        self.notify(LifecycleEvent.INITIATED)

    def expansion(self, size: int | None = None) -> list[Element]:
        """New candidate elements to merge into the state; random by default."""
        size = math.floor(self.expansion_rate * self.size) if size is None else int(size)
        return [self.problem.new_element() for _ in range(size)]

    def expand(self, expansion: Sequence[Element] | None = None) -> None:
        """Merge ``expansion`` (or ``self.expansion()``) into the state.

        Exact duplicates are dropped, keeping the earliest occurrence, so
        current state members win over equal newcomers.
        """
        if expansion is None:
            expansion = self.expansion()
        if len(expansion) < 1:
            _logger().warning("%s: expansion is empty at step %d.", type(self).__name__, self.step)
        else:
            self.state[:] = dict.fromkeys([*self.state, *expansion])
        self.notify(LifecycleEvent.EXPANDED)

    async def evaluate(self, elements: list[Element] | None = None) -> list[Element]:
        """Evaluate every unevaluated element, then sort ``elements`` best-first.

        All pending evaluations are issued first and awaited together; the
        list is sorted only after the whole batch has completed. Errors raised
        by any evaluation propagate to the caller.
        """
        if elements is None:
            elements = self.state
        started = time.perf_counter()
        pending = {id(element): element for element in elements if math.isnan(element.evaluation)}
        awaitables = []
        try:
            for element in pending.values():
                result = element.evaluate()
                if inspect.isawaitable(result):
                    awaitables.append(result)
        except Exception:
            # join what was already issued before propagating
            await asyncio.gather(*awaitables, return_exceptions=True)
            raise
        if awaitables:
            await asyncio.gather(*awaitables)
        self.problem.sort(elements)
        self.statistics.add("evaluation_time", time.perf_counter() - started)
        _logger().debug("Evaluated %d and sorted %d elements.", len(pending), len(elements))
        self.notify(LifecycleEvent.EVALUATED)
        return elements

    def sieve(self, size: int | None = None) -> None:
        """Truncate the (sorted) state to its best ``size`` elements."""
        size = self.size if size is None else int(size)
        if len(self.state) > size:
            del self.state[size:]
        self.notify(LifecycleEvent.SIEVED)

    async def update(self) -> None:
        """One iteration over an initiated state: expand, evaluate, sieve."""
        self.expand()
        await self.evaluate()
        self.sieve()
        self.notify(LifecycleEvent.UPDATED)

    def finished(self) -> bool:
        """Termination criteria: the step budget is spent or the problem is solved."""
        return self.step >= self.steps or self.problem.suffices(self.state)

    def analyze(self) -> Stat:
        """Record the distribution of the state's evaluations for this step."""
        stat = self.statistics.add_all("evaluation", (element.evaluation for element in self.state), step=self.step)
        self.notify(LifecycleEvent.ANALYZED)
        return stat

    async def advance(self) -> "Metaheuristic":
        """Perform one step: initiation on the first call, an update afterwards."""
        started = time.perf_counter()
        if self.step < 0:
            self.statistics.reset()
            self.initiate()
            await self.evaluate()
            self.step = 0
        else:
            await self.update()
            self.step += 1
        self.analyze()
        self.statistics.add("step_time", time.perf_counter() - started)
        self.notify(LifecycleEvent.ADVANCED)
        return self

    async def run(self) -> Element:
        """Advance until finished; returns the best element of the final state."""
        while not self.finished():
            await self.advance()
        self.notify(LifecycleEvent.FINISHED)
        return self.state[0]

    def run_sync(self) -> Element:
        """Blocking :meth:`run` for callers without a running event loop."""
        return asyncio.run(self.run())

    def reset(self) -> None:
        """Start over on the next advance."""
        self.step = -1
        self.statistics.reset()

    # -------------------------------------------------------------------------
    # State control
    # -------------------------------------------------------------------------

    def nub(self, precision: float = 1e-15) -> int:
        """Drop state elements equal to an earlier one within ``precision``.

        Quadratic in the state size. Returns the new state length.
        """
        kept: list[Element] = []
        for element in self.state:
            if not any(
                type(other) is type(element) and np.all(np.abs(other.values - element.values) <= precision)
                for other in kept
            ):
                kept.append(element)
        self.state[:] = kept
        return len(self.state)

    # -------------------------------------------------------------------------
    # Helpers for subclasses
    # -------------------------------------------------------------------------

    def _replace_state(self, elements: list[Element]) -> None:
        """Install ``elements`` as the new state, sorted best-first."""
        self.state[:] = self.problem.sort(elements)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(problem={self.problem!r}, size={self.size}, steps={self.steps}, step={self.step})"


__all__ = ["Metaheuristic"]
