"""Tests for simulated annealing."""

from __future__ import annotations

import math

import numpy as np
import pytest

from stochopt.engine.algorithms import COOLING_SCHEDULES, SimulatedAnnealing
from stochopt.foundation.element import Element
from stochopt.foundation.exceptions import InvalidOperatorError
from stochopt.foundation.problem import SumOptimization


def _pair(problem, current, neighbour):
    return (
        Element(problem, [0.5, 0.5], evaluation=current),
        Element(problem, [0.5, 0.25], evaluation=neighbour),
    )


class TestAcceptance:
    def test_better_neighbour_is_always_accepted(self):
        problem = SumOptimization(length=2)
        mh = SimulatedAnnealing(problem)
        current, neighbour = _pair(problem, 1.0, 0.5)
        assert mh.acceptance(current, neighbour, 0.0) == 1.0
        assert mh.acceptance(current, neighbour, 10.0) == 1.0

    def test_worse_neighbour_probability(self):
        problem = SumOptimization(length=2)
        mh = SimulatedAnnealing(problem)
        current, neighbour = _pair(problem, 1.0, 2.0)
        assert mh.acceptance(current, neighbour, 2.0) == pytest.approx(math.exp(-0.5))
        assert mh.acceptance(current, neighbour, 1e9) == pytest.approx(1.0)

    def test_zero_temperature(self):
        problem = SumOptimization(length=2)
        mh = SimulatedAnnealing(problem)
        assert mh.acceptance(*_pair(problem, 1.0, 2.0), 0.0) == 0.0
        assert mh.acceptance(*_pair(problem, 1.0, 1.0), 0.0) == 1.0

    def test_maximization_direction(self):
        problem = SumOptimization(length=2, target=math.inf)
        mh = SimulatedAnnealing(problem)
        assert mh.acceptance(*_pair(problem, 1.0, 2.0), 0.5) == 1.0
        assert mh.acceptance(*_pair(problem, 2.0, 1.0), 0.5) == pytest.approx(math.exp(-2.0))


class TestCooling:
    def test_linear_schedule(self):
        mh = SimulatedAnnealing(SumOptimization(length=2), steps=10, maximum_temperature=1.0, minimum_temperature=0.0)
        assert mh.temperature(0) == pytest.approx(1.0)
        assert mh.temperature(5) == pytest.approx(0.5)
        assert mh.temperature(10) == pytest.approx(0.0)
        assert mh.temperature(-1) == pytest.approx(1.0)

    def test_exponential_schedule(self):
        mh = SimulatedAnnealing(
            SumOptimization(length=2), steps=10, minimum_temperature=0.01, cooling="exponential"
        )
        assert mh.temperature(0) == pytest.approx(1.0)
        assert mh.temperature(5) == pytest.approx(0.1)
        assert mh.temperature(10) == pytest.approx(0.01)

    def test_exponential_falls_back_to_linear(self):
        mh = SimulatedAnnealing(SumOptimization(length=2), steps=10, cooling="exponential")
        assert mh.temperature(5) == pytest.approx(0.5)

    def test_custom_and_unknown_schedules(self):
        mh = SimulatedAnnealing(SumOptimization(length=2), cooling=lambda mh, step: 3.0)
        assert mh.temperature() == 3.0
        with pytest.raises(InvalidOperatorError):
            SimulatedAnnealing(SumOptimization(length=2), cooling="quadratic")
        assert "linear" in COOLING_SCHEDULES


def test_random_neighbour_changes_one_value_within_bounds():
    problem = SumOptimization(length=3, random=4)
    mh = SimulatedAnnealing(problem, delta=0.3)
    element = Element(problem, [0.0, 0.5, 1.0])
    for _ in range(30):
        neighbour = mh.random_neighbour(element)
        changed = np.flatnonzero(neighbour.values != element.values)
        assert len(changed) <= 1
        assert np.all((neighbour.values >= 0.0) & (neighbour.values <= 1.0))


@pytest.mark.smoke
def test_run_records_temperature_and_acceptance():
    mh = SimulatedAnnealing(SumOptimization(length=3, random=2), steps=20)
    best = mh.run_sync()
    assert mh.step == 20
    assert len(mh.state) == 1
    assert best is mh.state[0]
    temperatures = mh.statistics.history("temperature")
    assert len(temperatures) == 20
    assert temperatures[0].maximum() == pytest.approx(1.0)
    assert mh.statistics.history("acceptance")[3].count == 1
