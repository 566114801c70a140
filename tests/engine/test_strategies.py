"""Tests for the population strategies built on the generic engine."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from stochopt.engine.algorithms import (
    BeamSearch,
    DifferentialEvolution,
    DistributionEstimation,
    EvolutionStrategy,
    GradientDescent,
    HarmonySearch,
    Particle,
    ParticleSwarm,
)
from stochopt.engine.registry import available_metaheuristics, build_metaheuristic
from stochopt.foundation.element import Element
from stochopt.foundation.exceptions import ConfigurationError
from stochopt.foundation.problem import SumOptimization, sphere, testbed


def _parabola(length=1, seed=0):
    return testbed(
        "Parabola",
        lambda x: float(np.sum((x - 0.5) ** 2)),
        length=length,
        minimum_value=0.0,
        maximum_value=1.0,
        random=seed,
    )


def _within_bounds(element):
    spec = element.spec
    return bool(np.all((element.values >= spec.minimum_value) & (element.values <= spec.maximum_value)))


@pytest.mark.smoke
@pytest.mark.parametrize("name", available_metaheuristics())
def test_every_registered_strategy_runs(name):
    problem = sphere(3, random=21)
    mh = build_metaheuristic(name, problem, size=8, steps=5)
    best = mh.run_sync()
    assert best is mh.state[0]
    assert 1 <= len(mh.state) <= 8
    assert all(_within_bounds(element) for element in mh.state)
    assert all(problem.compare(a, b) <= 0 for a, b in zip(mh.state, mh.state[1:]))


class TestBeamSearch:
    def test_expansion_uses_neighbourhood_of_delta(self):
        problem = _parabola(length=2)
        mh = BeamSearch(problem, delta=0.1, size=3)
        mh.state = [Element(problem, [0.5, 0.5])]
        expansion = mh.expansion()
        assert len(expansion) == 4
        assert sorted(tuple(round(v, 9) for v in e.values) for e in expansion) == [
            (0.4, 0.5),
            (0.5, 0.4),
            (0.5, 0.6),
            (0.6, 0.5),
        ]

    def test_default_successors_come_from_problem(self):
        problem = _parabola(length=2)
        mh = BeamSearch(problem)
        element = Element(problem, [0.5, 0.5])
        assert mh.successors(element) == element.successors()

    def test_sieves_to_size(self):
        mh = BeamSearch(_parabola(length=2, seed=4), delta=0.05, size=3, steps=4)
        mh.run_sync()
        assert len(mh.state) == 3


class TestParticleSwarm:
    def test_initiate_builds_particles(self):
        mh = ParticleSwarm(_parabola(length=3, seed=2), size=5)
        mh.initiate()
        assert len(mh.state) == 5
        assert all(isinstance(p, Particle) and p.personal_best is p for p in mh.state)
        assert all(np.all(np.abs(p.velocity) <= 1.0) for p in mh.state)

    def test_next_particle_stays_within_bounds(self):
        problem = _parabola(length=2)
        mh = ParticleSwarm(problem)
        particle = Particle(problem, [0.9, 0.1], velocity=[5.0, -5.0])
        moved = mh.next_particle(particle, particle)
        assert moved.values.tolist() == [1.0, 0.0]
        assert not moved.evaluated

    def test_bests_are_never_worse_than_current(self):
        problem = _parabola(length=2, seed=6)
        mh = ParticleSwarm(problem, size=6, steps=8)
        mh.run_sync()
        assert problem.compare(mh.global_best, mh.state[0]) <= 0
        for particle in mh.state:
            assert problem.compare(particle.personal_best, particle) <= 0

    def test_clone_keeps_velocity(self):
        problem = _parabola(length=2)
        particle = Particle(problem, [0.2, 0.3], velocity=[0.1, -0.1])
        clone = particle.clone()
        assert clone.velocity.tolist() == [0.1, -0.1]
        assert clone.personal_best is particle


class TestDifferentialEvolution:
    def test_needs_four_elements(self):
        with pytest.raises(ConfigurationError):
            DifferentialEvolution(_parabola(), size=3)

    @pytest.mark.parametrize("weight", [-0.1, 2.5])
    def test_differential_weight_range(self, weight):
        with pytest.raises(ConfigurationError):
            DifferentialEvolution(_parabola(), differential_weight=weight)

    def test_one_trial_per_element(self):
        mh = DifferentialEvolution(_parabola(length=4, seed=3), size=6)
        mh.initiate()
        trials = mh.expansion()
        assert len(trials) == 6
        assert all(_within_bounds(trial) for trial in trials)

    def test_small_state_falls_back_to_random_expansion(self):
        mh = DifferentialEvolution(_parabola(length=4, seed=3), size=6)
        mh.initiate()
        mh.state = mh.state[:2]
        assert len(mh.expansion()) == 3


class TestEvolutionStrategy:
    def test_mutants(self):
        problem = _parabola(length=3, seed=5)
        mh = EvolutionStrategy(problem, mutant_count=6)
        mh.initiate()
        assert mh.size == 1
        assert len(mh.expansion()) == 6
        assert all(_within_bounds(m) for m in mh.mutants(mh.state[0], 10))

    def test_invalid_mutant_count(self):
        with pytest.raises(ConfigurationError):
            EvolutionStrategy(_parabola(), mutant_count=0)

    def test_best_never_gets_worse(self):
        mh = EvolutionStrategy(_parabola(length=3, seed=5), mutant_count=4, steps=10)
        mh.run_sync()
        history = mh.statistics.history("evaluation")
        bests = [history[step].minimum() for step in sorted(history)]
        assert all(later <= earlier for earlier, later in zip(bests, bests[1:]))


class TestHarmonySearch:
    def test_defaults(self):
        mh = HarmonySearch(_parabola())
        assert (mh.harmony_probability, mh.adjust_probability, mh.delta) == (0.9, 0.5, 1.0)

    def test_improvises_one_element(self):
        mh = HarmonySearch(_parabola(length=5, seed=1), size=4)
        mh.initiate()
        expansion = mh.expansion()
        assert len(expansion) == 1
        assert _within_bounds(expansion[0])

    def test_values_come_from_memory_without_adjustment(self):
        mh = HarmonySearch(_parabola(length=5, seed=1), size=4, harmony_probability=1.0, adjust_probability=0.0)
        mh.initiate()
        for _ in range(10):
            (harmony,) = mh.expansion()
            for i, value in enumerate(harmony.values):
                assert any(value == member.values[i] for member in mh.state)

    def test_invalid_probability(self):
        with pytest.raises(ConfigurationError):
            HarmonySearch(_parabola(), harmony_probability=1.2)


class TestDistributionEstimation:
    def test_histograms(self):
        problem = _parabola(length=3)
        mh = DistributionEstimation(problem, histogram_width=10)
        mh.state = [Element(problem, [0.05, 0.55, 1.0]), Element(problem, [0.05, 0.15, 1.0])]
        histograms = mh.histograms()
        assert histograms.shape == (3, 10)
        assert histograms.sum(axis=1) == pytest.approx([1.0, 1.0, 1.0])
        assert histograms[0, 0] == 1.0
        assert histograms[1, 1] == 0.5 and histograms[1, 5] == 0.5
        assert histograms[2, 9] == 1.0

    def test_empty_state_is_uniform(self):
        mh = DistributionEstimation(_parabola(length=2), histogram_width=4)
        assert mh.histograms([]) == pytest.approx(np.full((2, 4), 0.25))

    def test_sampled_values_fall_in_their_bar(self):
        problem = _parabola(length=3)
        mh = DistributionEstimation(problem, histogram_width=10)
        mh.state = [Element(problem, [0.05, 0.05, 0.05])]
        for element in mh.expansion(20):
            assert np.all((element.values >= 0.0) & (element.values <= 0.1))


class TestGradientDescent:
    def test_defaults(self):
        mh = GradientDescent(_parabola())
        assert mh.delta == 1.0
        assert mh.size == 1
        assert mh.estimator_width(1) == 1.0

    def test_rate_and_width_shrink(self):
        mh = GradientDescent(_parabola(), delta=0.08)
        assert mh.rate(0) == 1.0
        assert mh.rate(4) == 0.25
        assert mh.estimator_width(1) == pytest.approx(0.08)
        assert mh.estimator_width(8) == pytest.approx(0.04)

    def test_gradient_of_parabola(self):
        problem = _parabola(length=2)
        mh = GradientDescent(problem)
        gradient = asyncio.run(mh.gradient(Element(problem, [0.2, 0.9]), 0.01))
        assert gradient == pytest.approx([-0.6, 0.8])

    def test_gradient_follows_loss_for_maximization(self):
        problem = SumOptimization(length=2, target=float("inf"))
        mh = GradientDescent(problem)
        gradient = asyncio.run(mh.gradient(Element(problem, [0.5, 0.5]), 0.01))
        assert gradient == pytest.approx([-1.0, -1.0])

    def test_descends(self):
        mh = GradientDescent(_parabola(length=2, seed=9), steps=20)
        start = None

        class First:
            def on_event(self, event, metaheuristic):
                nonlocal start
                if start is None and event.value == "evaluated":
                    start = metaheuristic.state[0].evaluation

        mh.add_listener(First())
        best = mh.run_sync()
        assert best.evaluation <= start
