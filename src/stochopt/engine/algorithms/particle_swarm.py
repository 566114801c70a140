"""Particle swarm optimization.

Every candidate is a particle with a position (its values) and a velocity.
On each step the velocities are pulled towards the particle's own best
position and the swarm's best position so far, and every particle moves.

Reference:
    Kennedy, J. and Eberhart, R. (1995). Particle swarm optimization.
    Proceedings of ICNN'95, vol. 4, pp. 1942-1948.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from stochopt.foundation.element import Element
from stochopt.foundation.observer import LifecycleEvent
from stochopt.foundation.problem.base import Problem

from ..metaheuristic import Metaheuristic


class Particle(Element):
    """Element carrying a velocity and the best position it has visited."""

    def __init__(
        self,
        problem: Problem,
        values: Sequence[float] | np.ndarray | None = None,
        evaluation: float = math.nan,
        velocity: Sequence[float] | np.ndarray | None = None,
        personal_best: Element | None = None,
    ) -> None:
        super().__init__(problem, values, evaluation)
        self.velocity = np.zeros(len(self)) if velocity is None else np.array(velocity, dtype=float)
        self.personal_best: Element = self if personal_best is None else personal_best

    def clone(self) -> "Particle":
        return Particle(self.problem, self.values, self.evaluation, self.velocity, self.personal_best)


class ParticleSwarm(Metaheuristic):
    """
    Particle swarm metaheuristic.

    Positions are clipped to the element bounds after every move.

    Parameters
    ----------
    inertia : float
        Weight of the current velocity in the velocity update.
    local_acceleration : float
        Weight of the pull towards the particle's own best position.
    global_acceleration : float
        Weight of the pull towards the swarm's best position.
    """

    def __init__(
        self,
        problem: Problem,
        *,
        inertia: float = 1.0,
        local_acceleration: float = 0.5,
        global_acceleration: float = 0.3,
        **kwargs: Any,
    ) -> None:
        super().__init__(problem, **kwargs)
        self.inertia = float(inertia)
        self.local_acceleration = float(local_acceleration)
        self.global_acceleration = float(global_acceleration)
        self.global_best: Element | None = None

    def initiate(self, size: int | None = None) -> None:
        size = self.size if size is None else int(size)
        spec = self.problem.representation
        self.global_best = None
        self.state = [
            Particle(self.problem, velocity=self.random.uniform(-1.0, 1.0, spec.length) * spec.span)
            for _ in range(size)
        ]
        self.notify(LifecycleEvent.INITIATED)

    def next_velocity(self, particle: Particle, global_best: Element) -> np.ndarray:
        local_coefficient = self.random.random() * self.local_acceleration
        global_coefficient = self.random.random() * self.global_acceleration
        position = particle.values
        return (
            particle.velocity * self.inertia
            + local_coefficient * (particle.personal_best.values - position)
            + global_coefficient * (global_best.values - position)
        )

    def next_particle(self, particle: Particle, global_best: Element) -> Particle:
        """The particle's next position, unevaluated."""
        velocity = self.next_velocity(particle, global_best)
        position = self.problem.representation.clip(particle.values + velocity)
        return Particle(self.problem, position, velocity=velocity)

    async def update(self) -> None:
        if self.global_best is None:
            self.global_best = self.state[0]
        global_best = self.global_best
        moved = [self.next_particle(particle, global_best) for particle in self.state]
        await self.evaluate(list(moved))
        for previous, particle in zip(self.state, moved):
            best = getattr(previous, "personal_best", previous)
            particle.personal_best = particle if self.problem.compare(best, particle) > 0 else best
        self._replace_state(moved)
        if self.problem.compare(self.global_best, self.state[0]) > 0:
            self.global_best = self.state[0]
        self.notify(LifecycleEvent.UPDATED)


__all__ = ["Particle", "ParticleSwarm"]
