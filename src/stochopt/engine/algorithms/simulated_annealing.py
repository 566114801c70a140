"""Simulated annealing.

Each element of the state moves to one random neighbour per step, always if
the neighbour is better and with a temperature dependent probability
otherwise. The temperature decreases over the run following a cooling
schedule registered in :data:`COOLING_SCHEDULES`.

Reference:
    Kirkpatrick, S., Gelatt, C.D. and Vecchi, M.P. (1983). Optimization by
    simulated annealing. Science 220(4598), pp. 671-680.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from stochopt.foundation.element import Element
from stochopt.foundation.exceptions import InvalidOperatorError
from stochopt.foundation.observer import LifecycleEvent
from stochopt.foundation.problem.base import Problem
from stochopt.foundation.registry import Registry

from ..metaheuristic import Metaheuristic

COOLING_SCHEDULES: Registry[Callable[..., float]] = Registry("cooling_schedules")


def _progress(mh: "SimulatedAnnealing", step: int) -> float:
    if mh.steps <= 0:
        return 1.0
    return min(1.0, max(0, step) / mh.steps)


@COOLING_SCHEDULES.register("linear")
def linear_cooling(mh: "SimulatedAnnealing", step: int) -> float:
    """Straight line from the maximum temperature at step 0 to the minimum at the last step."""
    return (1 - _progress(mh, step)) * (mh.maximum_temperature - mh.minimum_temperature) + mh.minimum_temperature


@COOLING_SCHEDULES.register("exponential")
def exponential_cooling(mh: "SimulatedAnnealing", step: int) -> float:
    """Geometric decay from maximum to minimum; linear when the minimum is not positive."""
    if mh.minimum_temperature <= 0 or mh.maximum_temperature <= 0:
        return linear_cooling(mh, step)
    ratio = mh.minimum_temperature / mh.maximum_temperature
    return mh.maximum_temperature * ratio ** _progress(mh, step)


class SimulatedAnnealing(Metaheuristic):
    """
    Simulated annealing metaheuristic.

    Parameters
    ----------
    maximum_temperature : float
        Temperature at the start of the run.
    minimum_temperature : float
        Temperature at the end of the run.
    delta : float
        Radius of the random neighbour chosen for each element.
    cooling : str or callable
        Name of a registered cooling schedule, or ``f(metaheuristic, step)``.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        maximum_temperature: float = 1.0,
        minimum_temperature: float = 0.0,
        delta: float = 0.01,
        size: int = 1,
        cooling: str | Callable[..., float] = "linear",
        **kwargs: Any,
    ) -> None:
        super().__init__(problem, size=size, **kwargs)
        self.maximum_temperature = float(maximum_temperature)
        self.minimum_temperature = float(minimum_temperature)
        self.delta = float(delta)
        if callable(cooling):
            self.cooling = cooling
        else:
            schedule = COOLING_SCHEDULES.get(str(cooling), None)
            if schedule is None:
                raise InvalidOperatorError("cooling", str(cooling), COOLING_SCHEDULES.list())
            self.cooling = schedule

    def temperature(self, step: int | None = None) -> float:
        return float(self.cooling(self, self.step if step is None else step))

    def random_neighbour(self, element: Element, radius: float | None = None) -> Element:
        """One neighbour of ``element``: a single value moved up or down by ``radius``, clamped."""
        radius = self.delta if radius is None else float(radius)
        spec = element.spec
        index = int(self.random.integers(len(element)))
        value = float(element.values[index])
        if self.random.random() < 0.5:
            value = min(spec.maximum_value, value + radius)
        else:
            value = max(spec.minimum_value, value - radius)
        return element.modification(index, value)

    def acceptance(self, current: Element, neighbour: Element, temperature: float | None = None) -> float:
        """Probability of moving from ``current`` to ``neighbour``.

        A strictly better neighbour is always accepted. Otherwise the chance is
        ``exp(-|delta| / temperature)``; at zero temperature only neighbours
        with the same evaluation are accepted.
        """
        temperature = self.temperature() if temperature is None else float(temperature)
        if self.problem.compare(current, neighbour) > 0:
            return 1.0
        difference = abs(neighbour.evaluation - current.evaluation)
        if math.isnan(difference):
            return 0.0
        if temperature <= 0:
            return 1.0 if difference == 0 else 0.0
        return max(0.0, min(1.0, math.exp(-difference / temperature)))

    async def update(self) -> None:
        temperature = self.temperature()
        self.statistics.add("temperature", temperature, step=self.step)
        neighbours = [self.random_neighbour(element) for element in self.state]
        await self.evaluate(list(neighbours))
        accepted = []
        for element, neighbour in zip(self.state, neighbours):
            probability = self.acceptance(element, neighbour, temperature)
            self.statistics.add("acceptance", probability, step=self.step)
            accepted.append(neighbour if self.random.random() < probability else element)
        self._replace_state(accepted)
        self.notify(LifecycleEvent.UPDATED)


__all__ = ["COOLING_SCHEDULES", "SimulatedAnnealing", "exponential_cooling", "linear_cooling"]
