"""Strategy variants of the generic :class:`~stochopt.engine.metaheuristic.Metaheuristic`."""

from .beam_search import BeamSearch
from .differential_evolution import DifferentialEvolution
from .distribution_estimation import DistributionEstimation
from .evolution_strategy import EvolutionStrategy
from .genetic_algorithm import GeneticAlgorithm
from .gradient_descent import GradientDescent
from .harmony_search import HarmonySearch
from .hill_climbing import HillClimbing
from .particle_swarm import Particle, ParticleSwarm
from .simulated_annealing import COOLING_SCHEDULES, SimulatedAnnealing

__all__ = [
    "BeamSearch",
    "COOLING_SCHEDULES",
    "DifferentialEvolution",
    "DistributionEstimation",
    "EvolutionStrategy",
    "GeneticAlgorithm",
    "GradientDescent",
    "HarmonySearch",
    "HillClimbing",
    "Particle",
    "ParticleSwarm",
    "SimulatedAnnealing",
]
