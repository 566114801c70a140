"""Tests for hill climbing."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from stochopt.engine.algorithms import HillClimbing
from stochopt.foundation.element import Element
from stochopt.foundation.problem import testbed


def _parabola(seed=3, length=2):
    return testbed(
        "Parabola",
        lambda x: float(np.sum((x - 0.5) ** 2)),
        length=length,
        minimum_value=0.0,
        maximum_value=1.0,
        random=seed,
    )


@pytest.mark.smoke
@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_stops_early_at_local_optimum_of_convex_function(seed):
    mh = HillClimbing(_parabola(seed), delta=0.1, size=1, steps=50)
    best = mh.run_sync()
    assert mh.step < 50
    assert mh.at_local_optima()
    assert np.all(np.abs(best.values - 0.5) <= 0.1 + 1e-9)


def test_defaults():
    mh = HillClimbing(_parabola())
    assert mh.delta == 0.01
    assert mh.size == 1
    assert not mh.at_local_optima()


def test_update_moves_to_best_neighbour():
    problem = _parabola()
    mh = HillClimbing(problem, delta=0.1)
    start = Element(problem, [0.1, 0.5])
    mh.state = [start]
    asyncio.run(mh.evaluate())
    asyncio.run(mh.update())
    assert mh.state[0].values.tolist() == pytest.approx([0.2, 0.5])
    assert not mh.at_local_optima()


def test_element_is_kept_when_no_neighbour_is_better():
    problem = _parabola()
    mh = HillClimbing(problem, delta=0.1)
    start = Element(problem, [0.5, 0.5])
    mh.state = [start]
    asyncio.run(mh.evaluate())
    asyncio.run(mh.update())
    assert mh.state[0] is start
    assert mh.at_local_optima()
    mh.step = 0
    assert mh.finished()


def test_parallel_climbs_keep_state_size_and_order():
    mh = HillClimbing(_parabola(seed=9), delta=0.05, size=4, steps=5)
    mh.run_sync()
    assert len(mh.state) == 4
    assert all(mh.problem.compare(a, b) <= 0 for a, b in zip(mh.state, mh.state[1:]))
