from __future__ import annotations

import pytest

from stochopt.engine.algorithms import HillClimbing
from stochopt.engine.metaheuristic import Metaheuristic
from stochopt.engine.registry import (
    available_metaheuristics,
    build_metaheuristic,
    get_metaheuristics_registry,
    resolve_metaheuristic,
)
from stochopt.foundation.exceptions import InvalidMetaheuristicError
from stochopt.foundation.problem import sphere


def test_available_metaheuristics_are_sorted():
    names = available_metaheuristics()
    assert isinstance(names, tuple)
    assert list(names) == sorted(names)
    assert {"random_search", "hill_climbing", "genetic_algorithm", "gradient_descent"} <= set(names)
    assert len(names) == 11


def test_registry_is_built_once():
    assert get_metaheuristics_registry() is get_metaheuristics_registry()


def test_resolve_is_case_insensitive():
    assert resolve_metaheuristic("Hill_Climbing") is HillClimbing
    assert resolve_metaheuristic("random_search") is Metaheuristic


def test_build_passes_parameters():
    mh = build_metaheuristic("hill_climbing", sphere(2), delta=0.5, steps=7)
    assert isinstance(mh, HillClimbing)
    assert mh.delta == 0.5
    assert mh.steps == 7


def test_unknown_name_suggests_close_match():
    with pytest.raises(InvalidMetaheuristicError) as info:
        resolve_metaheuristic("hill_climbin")
    message = str(info.value)
    assert "Did you mean" in message
    assert "'hill_climbing'" in message
    assert info.value.details["name"] == "hill_climbin"
