"""
Metaheuristic registry.

Maps metaheuristic names to their classes so run specifications and
:func:`stochopt.optimize` can name a strategy instead of importing it.
"""

from __future__ import annotations

from typing import Any

from stochopt.foundation.exceptions import InvalidMetaheuristicError
from stochopt.foundation.problem.base import Problem
from stochopt.foundation.registry import Registry

from .algorithms import (
    BeamSearch,
    DifferentialEvolution,
    DistributionEstimation,
    EvolutionStrategy,
    GeneticAlgorithm,
    GradientDescent,
    HarmonySearch,
    HillClimbing,
    ParticleSwarm,
    SimulatedAnnealing,
)
from .metaheuristic import Metaheuristic

_METAHEURISTICS: Registry[type[Metaheuristic]] | None = None


def _register_metaheuristics(registry: Registry[type[Metaheuristic]]) -> None:
    registry.register("random_search", Metaheuristic)
    registry.register("hill_climbing", HillClimbing)
    registry.register("genetic_algorithm", GeneticAlgorithm)
    registry.register("beam_search", BeamSearch)
    registry.register("simulated_annealing", SimulatedAnnealing)
    registry.register("particle_swarm", ParticleSwarm)
    registry.register("differential_evolution", DifferentialEvolution)
    registry.register("evolution_strategy", EvolutionStrategy)
    registry.register("harmony_search", HarmonySearch)
    registry.register("distribution_estimation", DistributionEstimation)
    registry.register("gradient_descent", GradientDescent)


def get_metaheuristics_registry() -> Registry[type[Metaheuristic]]:
    global _METAHEURISTICS
    if _METAHEURISTICS is None:
        registry: Registry[type[Metaheuristic]] = Registry("Metaheuristics")
        _register_metaheuristics(registry)
        _METAHEURISTICS = registry
    return _METAHEURISTICS


def available_metaheuristics() -> tuple[str, ...]:
    """Return the registered metaheuristic names, sorted."""
    return tuple(get_metaheuristics_registry().list())


def resolve_metaheuristic(name: str) -> type[Metaheuristic]:
    registry = get_metaheuristics_registry()
    try:
        return registry[name]
    except KeyError as exc:
        raise InvalidMetaheuristicError(name, registry.list(), registry.suggest(name)) from exc


def build_metaheuristic(name: str, problem: Problem, **params: Any) -> Metaheuristic:
    """Instantiate the metaheuristic registered as ``name`` on ``problem``.

    ``params`` are passed as keyword arguments (``size``, ``steps``,
    ``listeners``, and the strategy's own parameters).
    """
    return resolve_metaheuristic(name)(problem, **params)


__all__ = [
    "available_metaheuristics",
    "build_metaheuristic",
    "get_metaheuristics_registry",
    "resolve_metaheuristic",
]
