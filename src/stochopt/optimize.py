"""
Single-call entrypoints: build a metaheuristic for a problem, run it, and
collect the outcome.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import numpy as np

from stochopt.engine.config.loader import load_run_spec
from stochopt.engine.config.metaheuristic import MetaheuristicConfigData
from stochopt.engine.metaheuristic import Metaheuristic
from stochopt.engine.registry import build_metaheuristic
from stochopt.foundation.element import Element
from stochopt.foundation.observer import MetaheuristicListener
from stochopt.foundation.problem.base import Problem
from stochopt.foundation.problem.registry import make_problem
from stochopt.foundation.statistics import RunStatistics


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class OptimizationResult:
    """Outcome of :func:`optimize`."""

    best: Element
    state: list[Element]
    steps: int
    statistics: RunStatistics
    metaheuristic: Metaheuristic

    @property
    def evaluation(self) -> float:
        return self.best.evaluation

    def mapping(self) -> Any:
        return self.best.mapping()


def _resolve_config(
    config: MetaheuristicConfigData | dict[str, Any] | None,
    algorithm: str | None,
    size: int | None,
    steps: int | None,
    seed: int | None,
    params: dict[str, Any],
) -> MetaheuristicConfigData:
    if config is None:
        data: dict[str, Any] = {"algorithm": algorithm or "random_search"}
    elif isinstance(config, MetaheuristicConfigData):
        data = config.to_dict()
    else:
        data = dict(config)
    if algorithm is not None:
        data["algorithm"] = algorithm
    for name, value in (("size", size), ("steps", steps), ("seed", seed)):
        if value is not None:
            data[name] = value
    data["params"] = {**dict(data.get("params") or {}), **params}
    return MetaheuristicConfigData.from_dict(data)


def prepare(
    problem: Problem | str,
    config: MetaheuristicConfigData | dict[str, Any] | None = None,
    *,
    algorithm: str | None = None,
    size: int | None = None,
    steps: int | None = None,
    seed: int | None = None,
    listeners: Iterable[MetaheuristicListener] | None = None,
    **params: Any,
) -> Metaheuristic:
    """Build the metaheuristic :func:`optimize` would run, without running it.

    ``problem`` is a :class:`Problem` or a registered problem name. A ``seed``
    (given directly or in the config) runs a shallow copy of a given problem
    with a fresh generator; the caller's problem is left untouched.
    """
    cfg = _resolve_config(config, algorithm, size, steps, seed, params)
    if isinstance(problem, str):
        problem = make_problem(problem, random=cfg.seed)
    elif cfg.seed is not None:
        problem = copy.copy(problem)
        problem.random = np.random.default_rng(cfg.seed)
    kwargs = cfg.metaheuristic_kwargs()
    if listeners is not None:
        kwargs["listeners"] = list(listeners)
    return build_metaheuristic(cfg.algorithm, problem, **kwargs)


def _result(metaheuristic: Metaheuristic, best: Element) -> OptimizationResult:
    _logger().info(
        "%s finished after %d steps; best evaluation %s",
        type(metaheuristic).__name__,
        metaheuristic.step,
        best.evaluation,
    )
    return OptimizationResult(
        best=best,
        state=list(metaheuristic.state),
        steps=metaheuristic.step,
        statistics=metaheuristic.statistics,
        metaheuristic=metaheuristic,
    )


async def optimize_async(problem: Problem | str, config: Any = None, **kwargs: Any) -> OptimizationResult:
    """Coroutine form of :func:`optimize`, for callers inside an event loop."""
    metaheuristic = prepare(problem, config, **kwargs)
    best = await metaheuristic.run()
    return _result(metaheuristic, best)


def optimize(
    problem: Problem | str,
    config: MetaheuristicConfigData | dict[str, Any] | None = None,
    *,
    algorithm: str | None = None,
    size: int | None = None,
    steps: int | None = None,
    seed: int | None = None,
    listeners: Iterable[MetaheuristicListener] | None = None,
    **params: Any,
) -> OptimizationResult:
    """
    Run one metaheuristic on a problem until it finishes.

    Args:
        problem: A Problem instance, or the name of a registered problem.
        config: Config data (``MetaheuristicConfig().....fixed()``) or a mapping
            with the same keys. Explicit keyword arguments override it.
        algorithm: Registered metaheuristic name; random search by default.
        size: Population cap.
        steps: Maximum number of steps after initiation.
        seed: Seed for the problem's random generator.
        listeners: Lifecycle listeners attached to the run.
        **params: Strategy parameters (e.g. ``delta=0.1``).

    Returns:
        OptimizationResult with the best element, the final state and statistics.
    """
    metaheuristic = prepare(
        problem,
        config,
        algorithm=algorithm,
        size=size,
        steps=steps,
        seed=seed,
        listeners=listeners,
        **params,
    )
    best = metaheuristic.run_sync()
    return _result(metaheuristic, best)


def run_from_spec(path: str | Path, *, listeners: Iterable[MetaheuristicListener] | None = None) -> OptimizationResult:
    """Load a YAML/JSON run specification (see :func:`load_run_spec`) and run it."""
    spec = load_run_spec(path)
    problem_params = dict(spec["problem"])
    name = problem_params.pop("name")
    seed = spec.get("seed")
    problem = make_problem(name, random=seed, **problem_params)
    config = {key: value for key, value in spec.items() if key != "problem"}
    return optimize(problem, config, listeners=listeners)


__all__ = ["OptimizationResult", "optimize", "optimize_async", "prepare", "run_from_spec"]
