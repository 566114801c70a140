"""
Genetic operators for :class:`~stochopt.engine.algorithms.GeneticAlgorithm`.

Each operator is a plain function registered by name:

- selections ``(metaheuristic, count) -> list[Element]`` pick parents from the
  (sorted) state;
- crossovers ``(metaheuristic, parents) -> list[Element]`` build new
  unevaluated children;
- mutations ``(metaheuristic, element) -> Element`` return a changed copy.

All randomness comes from ``metaheuristic.random``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

import numpy as np

from stochopt.foundation.element import Element
from stochopt.foundation.exceptions import InvalidOperatorError
from stochopt.foundation.registry import Registry

if TYPE_CHECKING:
    from stochopt.engine.metaheuristic import Metaheuristic

Selection = Callable[["Metaheuristic", int], list[Element]]
Crossover = Callable[["Metaheuristic", Sequence[Element]], list[Element]]
Mutation = Callable[["Metaheuristic", Element], Element]

SELECTIONS: Registry[Selection] = Registry("selections")
CROSSOVERS: Registry[Crossover] = Registry("crossovers")
MUTATIONS: Registry[Mutation] = Registry("mutations")


# =============================================================================
# Selection
# =============================================================================


def _loss_weights(metaheuristic: "Metaheuristic") -> np.ndarray:
    """Selection weights ``loss(worst) - loss(e)``; uniform if they are all zero."""
    problem = metaheuristic.problem
    losses = np.array([problem.loss(element.evaluation) for element in metaheuristic.state], dtype=float)
    finite = np.isfinite(losses)
    if not finite.any():
        return np.ones(len(losses))
    weights = np.where(finite, losses[finite].max() - losses, 0.0)
    if weights.sum() <= 0:
        return np.ones(len(losses))
    return weights


@SELECTIONS.register("rank")
def rank_selection(metaheuristic: "Metaheuristic", count: int = 2) -> list[Element]:
    """Selection with probability proportional to the position in the state.

    With ``n`` elements the best one weighs ``n`` and the worst one weighs 1.
    """
    state = metaheuristic.state
    weights = np.arange(len(state), 0, -1, dtype=float)
    indices = metaheuristic.random.choice(len(state), size=count, p=weights / weights.sum())
    return [state[i] for i in indices]


@SELECTIONS.register("roulette")
def roulette_selection(metaheuristic: "Metaheuristic", count: int = 2) -> list[Element]:
    """Selection with probability proportional to how much better than the worst each element is."""
    state = metaheuristic.state
    weights = _loss_weights(metaheuristic)
    indices = metaheuristic.random.choice(len(state), size=count, p=weights / weights.sum())
    return [state[i] for i in indices]


@SELECTIONS.register("stochastic_universal_sampling")
def stochastic_universal_sampling(metaheuristic: "Metaheuristic", count: int = 2) -> list[Element]:
    """Roulette weights sampled with ``count`` evenly spaced pointers from one random start."""
    state = metaheuristic.state
    cumulative = np.cumsum(_loss_weights(metaheuristic))
    total = cumulative[-1]
    spacing = total / count
    pointers = metaheuristic.random.random() * spacing + spacing * np.arange(count)
    indices = np.minimum(np.searchsorted(cumulative, pointers, side="right"), len(state) - 1)
    return [state[i] for i in indices]


# =============================================================================
# Crossover
# =============================================================================


def _children(problem, values0: np.ndarray, values1: np.ndarray) -> list[Element]:
    return [problem.new_element(values0), problem.new_element(values1)]


def _require_two(parents: Sequence[Element]) -> tuple[np.ndarray, np.ndarray]:
    if len(parents) < 2:
        raise ValueError("A crossover needs at least two parents.")
    return parents[0].values, parents[1].values


@CROSSOVERS.register("single_point")
def single_point_crossover(metaheuristic: "Metaheuristic", parents: Sequence[Element]) -> list[Element]:
    """Two children, each with a prefix of one parent and the suffix of the other."""
    values0, values1 = _require_two(parents)
    length = len(values0)
    if length < 2:
        return _children(metaheuristic.problem, values0, values1)
    cut = int(metaheuristic.random.integers(1, length))
    return _children(
        metaheuristic.problem,
        np.concatenate((values0[:cut], values1[cut:])),
        np.concatenate((values1[:cut], values0[cut:])),
    )


@CROSSOVERS.register("two_point")
def two_point_crossover(metaheuristic: "Metaheuristic", parents: Sequence[Element]) -> list[Element]:
    """Two children swapping the segment between two random cut points."""
    values0, values1 = _require_two(parents)
    length = len(values0)
    if length < 3:
        return single_point_crossover(metaheuristic, parents)
    cut1, cut2 = sorted(int(i) for i in metaheuristic.random.choice(np.arange(1, length), size=2, replace=False))
    child0 = values0.copy()
    child1 = values1.copy()
    child0[cut1:cut2] = values1[cut1:cut2]
    child1[cut1:cut2] = values0[cut1:cut2]
    return _children(metaheuristic.problem, child0, child1)


@CROSSOVERS.register("uniform")
def uniform_crossover(metaheuristic: "Metaheuristic", parents: Sequence[Element]) -> list[Element]:
    """Two complementary children taking each value from either parent with even odds."""
    values0, values1 = _require_two(parents)
    mask = metaheuristic.random.random(len(values0)) < 0.5
    return _children(
        metaheuristic.problem,
        np.where(mask, values0, values1),
        np.where(mask, values1, values0),
    )


# =============================================================================
# Mutation
# =============================================================================


@MUTATIONS.register("single_point_uniform")
def single_point_uniform_mutation(metaheuristic: "Metaheuristic", element: Element) -> Element:
    """Set one random value to a uniform random value."""
    index = int(metaheuristic.random.integers(len(element)))
    return element.modification(index, element.random_value())


@MUTATIONS.register("single_point_biased")
def single_point_biased_mutation(metaheuristic: "Metaheuristic", element: Element) -> Element:
    """Move one random value by a triangular deviation, clamped to the bounds."""
    rng = metaheuristic.random
    spec = element.spec
    index = int(rng.integers(len(element)))
    deviation = (rng.random() - rng.random()) * spec.span
    value = min(spec.maximum_value, max(spec.minimum_value, float(element.values[index]) + deviation))
    return element.modification(index, value)


@MUTATIONS.register("recombination")
def recombination_mutation(metaheuristic: "Metaheuristic", element: Element) -> Element:
    """Copy one random value from the same position of a random state member."""
    rng = metaheuristic.random
    if not metaheuristic.state:
        return single_point_uniform_mutation(metaheuristic, element)
    donor = metaheuristic.state[int(rng.integers(len(metaheuristic.state)))]
    index = int(rng.integers(len(element)))
    return element.modification(index, float(donor.values[index]))


def resolve_operator(operator_type: str, registry: Registry, operator: str | Callable) -> Callable:
    """Return ``operator`` if callable, else look it up by name in ``registry``.

    Raises
    ------
    InvalidOperatorError
        If the name is not registered.
    """
    if callable(operator):
        return operator
    found = registry.get(str(operator), None)
    if found is None:
        raise InvalidOperatorError(operator_type, str(operator), registry.suggest(str(operator)) or registry.list())
    return found


__all__ = [
    "SELECTIONS",
    "CROSSOVERS",
    "MUTATIONS",
    "Selection",
    "Crossover",
    "Mutation",
    "rank_selection",
    "roulette_selection",
    "stochastic_universal_sampling",
    "single_point_crossover",
    "two_point_crossover",
    "uniform_crossover",
    "single_point_uniform_mutation",
    "single_point_biased_mutation",
    "recombination_mutation",
    "resolve_operator",
]
