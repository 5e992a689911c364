"""
Tests for the Poisson match model: expected goals, clamping, sampling.
"""
from __future__ import annotations

import statistics

import pytest

from league_sim.simulation.match_model import (
    MatchModelParams,
    MatchOutcomeModel,
    clamp,
    sample_poisson,
)
from league_sim.simulation.rng import SeededRNG


class TestExpectedGoals:
    def test_equal_power_gets_home_advantage_only(self):
        model = MatchOutcomeModel(rng=SeededRNG(1))
        home, away = model.expected_goals(50, 50)
        # diff = (55 - 50) / 100 = 0.05
        assert home == pytest.approx(1.45)
        assert away == pytest.approx(1.075)

    def test_zero_power_is_baseline(self):
        home, away = MatchOutcomeModel().expected_goals(0, 0)
        assert home == pytest.approx(1.4)
        assert away == pytest.approx(1.1)

    def test_extreme_gap_is_clamped(self):
        model = MatchOutcomeModel()
        home, away = model.expected_goals(100, 0)
        # diff = 1.1 -> home 2.5 (inside cap), away 0.55
        assert home == pytest.approx(2.5)
        assert away == pytest.approx(0.55)
        home, away = model.expected_goals(0, 100)
        # diff = -1.0 -> home 0.4, away 1.6
        assert home == pytest.approx(0.4)
        assert away == pytest.approx(1.6)

    def test_custom_params_hit_clamps(self):
        params = MatchModelParams(base_home_goals=5.0, base_away_goals=-1.0)
        home, away = MatchOutcomeModel(params).expected_goals(50, 50)
        assert home == params.max_home_goals
        assert away == params.min_away_goals

    @pytest.mark.parametrize("home_power,away_power", [(0, 100), (100, 0), (37, 82), (100, 100)])
    def test_bounds_hold(self, home_power, away_power):
        home, away = MatchOutcomeModel().expected_goals(home_power, away_power)
        assert 0.2 <= home <= 3.5
        assert 0.2 <= away <= 3.0


def test_clamp():
    assert clamp(5.0, 0.2, 3.5) == 3.5
    assert clamp(-1.0, 0.2, 3.5) == 0.2
    assert clamp(1.0, 0.2, 3.5) == 1.0


def test_sample_poisson_mean_and_variance():
    rng = SeededRNG(2024)
    lam = 1.45
    samples = [sample_poisson(lam, rng) for _ in range(10_000)]
    assert min(samples) >= 0
    assert statistics.fmean(samples) == pytest.approx(lam, abs=0.06)
    assert statistics.pvariance(samples) == pytest.approx(lam, abs=0.12)


def test_simulate_home_mean_matches_expected_goals():
    model = MatchOutcomeModel(rng=SeededRNG(99))
    expected_home, expected_away = model.expected_goals(70, 70)
    scores = [model.simulate(70, 70) for _ in range(10_000)]
    assert all(s.home_goals >= 0 and s.away_goals >= 0 for s in scores)
    assert all(isinstance(s.home_goals, int) and isinstance(s.away_goals, int) for s in scores)
    assert statistics.fmean(s.home_goals for s in scores) == pytest.approx(expected_home, abs=0.06)
    assert statistics.fmean(s.away_goals for s in scores) == pytest.approx(expected_away, abs=0.06)


def test_simulate_is_deterministic_for_seed():
    a = MatchOutcomeModel(rng=SeededRNG(5))
    b = MatchOutcomeModel(rng=SeededRNG(5))
    assert [a.simulate(80, 60) for _ in range(50)] == [b.simulate(80, 60) for _ in range(50)]
