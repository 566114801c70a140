"""Tests for ElementSpec, comparators and Problem defaults."""

from __future__ import annotations

import math

import numpy as np
import pytest

from stochopt.foundation.element import Element
from stochopt.foundation.exceptions import BoundsError, ProblemDimensionError
from stochopt.foundation.problem import (
    ElementSpec,
    Problem,
    approximation,
    comparator_for,
    maximization,
    minimization,
)


def _elements(problem, evaluations):
    return [Element(problem, [0.5] * problem.representation.length, evaluation=e) for e in evaluations]


class TestElementSpec:
    def test_defaults(self):
        spec = ElementSpec()
        assert spec.length == 10
        assert spec.minimum_value == 0.0
        assert spec.maximum_value == 1.0
        assert spec.span == 1.0

    @pytest.mark.parametrize("length", [0, -1, 2.5])
    def test_invalid_length(self, length):
        with pytest.raises(ProblemDimensionError):
            ElementSpec(length)

    def test_inverted_bounds(self):
        with pytest.raises(BoundsError):
            ElementSpec(3, 1.0, 0.0)

    def test_infinite_bounds(self):
        with pytest.raises(BoundsError):
            ElementSpec(3, 0.0, math.inf)

    def test_clip_and_contains(self):
        spec = ElementSpec(3, -1.0, 1.0)
        assert spec.clip([-2.0, 0.5, 3.0]).tolist() == [-1.0, 0.5, 1.0]
        assert spec.contains(1.0)
        assert not spec.contains(1.0001)
        assert not spec.contains(math.nan)

    def test_random_values_use_given_generator(self):
        spec = ElementSpec(5, 2.0, 4.0)
        first = spec.random_values(np.random.default_rng(3))
        second = spec.random_values(np.random.default_rng(3))
        assert first.tolist() == second.tolist()
        assert np.all((first >= 2.0) & (first <= 4.0))


class TestComparators:
    def test_minimization_sorts_ascending(self):
        problem = Problem(ElementSpec(2))
        elements = _elements(problem, [3.0, 1.0, 2.0])
        problem.sort(elements)
        assert [e.evaluation for e in elements] == [1.0, 2.0, 3.0]

    def test_maximization_sorts_descending(self):
        problem = Problem(ElementSpec(2), objective=math.inf)
        elements = _elements(problem, [3.0, 1.0, 2.0])
        problem.sort(elements)
        assert [e.evaluation for e in elements] == [3.0, 2.0, 1.0]

    def test_approximation_sorts_by_distance_to_target(self):
        problem = Problem(ElementSpec(2), objective=5.0)
        elements = _elements(problem, [0.0, 9.0, 4.0, 5.5])
        problem.sort(elements)
        assert [e.evaluation for e in elements] == [5.5, 4.0, 9.0, 0.0]

    def test_nan_evaluations_sort_last(self):
        for objective in (-math.inf, math.inf, 0.5):
            problem = Problem(ElementSpec(2), objective=objective)
            elements = _elements(problem, [math.nan, 1.0, math.nan, 0.0])
            problem.sort(elements)
            assert not math.isnan(elements[0].evaluation)
            assert not math.isnan(elements[1].evaluation)
            assert math.isnan(elements[2].evaluation)
            assert math.isnan(elements[3].evaluation)

    @pytest.mark.parametrize("comparator", [minimization, maximization, approximation(3.0)])
    def test_infinite_evaluations(self, comparator):
        problem = Problem(ElementSpec(2))
        top, also_top, bottom, missing = _elements(problem, [math.inf, math.inf, -math.inf, math.nan])
        assert comparator(top, also_top) == 0.0
        assert comparator(top, missing) < 0
        assert comparator(missing, top) > 0
        assert not math.isnan(comparator(top, bottom))

    def test_infinite_evaluations_sort_without_nan(self):
        problem = Problem(ElementSpec(2))
        elements = _elements(problem, [math.inf, math.nan, 1.0, math.inf, -math.inf])
        problem.sort(elements)
        assert [e.evaluation for e in elements[:4]] == [-math.inf, 1.0, math.inf, math.inf]
        assert math.isnan(elements[4].evaluation)

    def test_differences_below_resolution_are_ties(self):
        problem = Problem(ElementSpec(2))
        e1, e2 = _elements(problem, [1.0, 1.0 + 2**-60])
        assert minimization(e1, e2) == 0
        assert maximization(e1, e2) == 0

    def test_sign_convention(self):
        problem = Problem(ElementSpec(2))
        worse, better = _elements(problem, [2.0, 1.0])
        assert minimization(worse, better) > 0
        assert minimization(better, worse) < 0
        assert better.is_better_than(worse)
        assert not worse.is_better_than(better)

    def test_comparator_for(self):
        assert comparator_for(-math.inf) is minimization
        assert comparator_for(math.inf) is maximization
        assert comparator_for(3.0).__name__ == approximation(3.0).__name__


class TestProblem:
    def test_loss_follows_objective(self):
        assert Problem(objective=-math.inf).loss(2.0) == 2.0
        assert Problem(objective=math.inf).loss(2.0) == -2.0
        assert Problem(objective=5.0).loss(2.0) == 3.0

    def test_seed_and_generator(self):
        rng = np.random.default_rng(1)
        assert Problem(random=rng).random is rng
        a = Problem(ElementSpec(3), random=9).new_element()
        b = Problem(ElementSpec(3), random=9).new_element()
        assert a == b

    def test_suffices_empty_and_default(self):
        problem = Problem(ElementSpec(2))
        assert not problem.suffices([])
        assert not problem.suffices(_elements(problem, [0.0]))

    def test_successors_default_to_neighbourhood(self):
        problem = Problem(ElementSpec(2))
        element = Element(problem, [0.5, 0.5])
        assert problem.successors(element) == element.neighbourhood()

    def test_mapping_default_is_values(self):
        problem = Problem(ElementSpec(2))
        element = Element(problem, [0.25, 0.75])
        assert element.mapping().tolist() == [0.25, 0.75]
