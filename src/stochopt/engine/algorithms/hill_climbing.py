"""Hill climbing: iterative local search over the neighbourhood of each element."""

from __future__ import annotations

from typing import Any

from stochopt.foundation.observer import LifecycleEvent
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic


class HillClimbing(Metaheuristic):
    """
    Replace each element by the best of itself and its neighbourhood.

    Every element of the state climbs independently (``size=1`` by default,
    larger states give parallel climbings). The run also ends when no element
    moved in the last update, since all of them sit on a local optimum.

    Parameters
    ----------
    delta : float
        Radius of the neighbourhood checked in every dimension.
    """

    def __init__(self, problem: Problem, *, delta: float = 0.01, size: int = 1, **kwargs: Any) -> None:
        super().__init__(problem, size=size, **kwargs)
        self.delta = float(delta)
        self._local_optima: int | None = None

    def initiate(self, size: int | None = None) -> None:
        self._local_optima = None
        super().initiate(size)

    async def update(self) -> None:
        # The element goes first in its range so it wins ties against its neighbours.
        ranges = [[element, *element.neighbourhood(self.delta)] for element in self.state]
        await self.evaluate([candidate for candidates in ranges for candidate in candidates])
        local_optima = 0
        climbed = []
        for element, *neighbours in ranges:
            best = min([element, *neighbours], key=self.problem.sort_key)
            if best is element:
                local_optima += 1
            climbed.append(best)
        self._local_optima = local_optima
        self._replace_state(climbed)
        self.notify(LifecycleEvent.UPDATED)

    def at_local_optima(self) -> bool:
        """Whether no element improved in the last update."""
        return self._local_optima is not None and self._local_optima >= len(self.state)

    def finished(self) -> bool:
        return super().finished() or self.at_local_optima()
