"""Tests for run statistics accumulators."""

from __future__ import annotations

import math

import pytest

from stochopt.foundation.statistics import NullStatistics, RunStatistics, Stat


class TestStat:
    def test_aggregates(self):
        stat = Stat("x")
        for value in (1.0, 2.0, 3.0, 4.0):
            stat.add(value)
        assert stat.count == 4
        assert stat.sum() == 10.0
        assert stat.minimum() == 1.0
        assert stat.maximum() == 4.0
        assert stat.average() == 2.5
        assert stat.variance() == pytest.approx(1.25)
        assert stat.standard_deviation() == pytest.approx(math.sqrt(1.25))

    def test_empty(self):
        stat = Stat("x")
        assert stat.count == 0
        assert stat.sum() == 0.0
        assert math.isnan(stat.minimum())
        assert math.isnan(stat.average())

    def test_nan_is_ignored(self):
        stat = Stat("x").add(math.nan).add(1.0)
        assert stat.count == 1
        assert stat.as_dict()["average"] == 1.0


class TestRunStatistics:
    def test_keyed_by_step(self):
        stats = RunStatistics()
        stats.add_all("evaluation", [3.0, 1.0], step=0)
        stats.add_all("evaluation", [2.0], step=1)
        stats.add("evaluation_time", 0.5)
        history = stats.history("evaluation")
        assert list(history) == [0, 1]
        assert history[0].minimum() == 1.0
        assert history[1].count == 1
        assert stats.stat("evaluation_time").sum() == 0.5
        assert stats.keys() == ["evaluation", "evaluation_time"]

    def test_reset(self):
        stats = RunStatistics()
        stats.add("a", 1.0)
        stats.reset()
        assert len(stats) == 0
        assert stats.stat("a").count == 0

    def test_null_statistics_records_nothing(self):
        stats = NullStatistics()
        stats.add("a", 1.0)
        stats.add_all("a", [1.0, 2.0], step=0)
        assert len(stats) == 0
        assert stats.stat("a").count == 0
