"""
stochopt: population based stochastic optimization.

A generic metaheuristic engine (initiate, expand, evaluate, sieve, repeat)
with hill climbing, genetic algorithms, beam search, simulated annealing,
particle swarm, differential evolution, evolution strategies, harmony search,
distribution estimation and gradient descent as strategy variants.

Example::

    from stochopt import optimize, sphere

    result = optimize(sphere(length=3, random=7), algorithm="hill_climbing", steps=50, delta=0.1)
    result.best.evaluation
"""

from .engine.algorithms import (
    BeamSearch,
    DifferentialEvolution,
    DistributionEstimation,
    EvolutionStrategy,
    GeneticAlgorithm,
    GradientDescent,
    HarmonySearch,
    HillClimbing,
    Particle,
    ParticleSwarm,
    SimulatedAnnealing,
)
from .engine.config import MetaheuristicConfig, MetaheuristicConfigData, load_run_spec
from .engine.metaheuristic import Metaheuristic
from .engine.registry import available_metaheuristics, build_metaheuristic
from .foundation.element import Element
from .foundation.exceptions import StochOptError
from .foundation.logging import configure_stochopt_logging
from .foundation.observer import EventRecorder, LifecycleEvent, LoggingListener, MetaheuristicListener
from .foundation.problem import (
    ElementSpec,
    HelloWorld,
    KnapsackProblem,
    NQueensPuzzle,
    Problem,
    SumOptimization,
    ackley,
    available_problems,
    griewank,
    make_problem,
    rastrigin,
    rosenbrock,
    sphere,
    testbed,
)
from .foundation.statistics import NullStatistics, RunStatistics, Stat
from .optimize import OptimizationResult, optimize, optimize_async, run_from_spec

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Element",
    "ElementSpec",
    "Problem",
    "Metaheuristic",
    # Strategies
    "BeamSearch",
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
    # Problems
    "SumOptimization",
    "HelloWorld",
    "KnapsackProblem",
    "NQueensPuzzle",
    "testbed",
    "sphere",
    "ackley",
    "rastrigin",
    "rosenbrock",
    "griewank",
    "available_problems",
    "make_problem",
    # Configuration and entrypoints
    "MetaheuristicConfig",
    "MetaheuristicConfigData",
    "load_run_spec",
    "available_metaheuristics",
    "build_metaheuristic",
    "OptimizationResult",
    "optimize",
    "optimize_async",
    "run_from_spec",
    # Observability
    "LifecycleEvent",
    "MetaheuristicListener",
    "LoggingListener",
    "EventRecorder",
    "RunStatistics",
    "NullStatistics",
    "Stat",
    "configure_stochopt_logging",
    "StochOptError",
]
