"""
Match outcome model: a plausible integer scoreline from two power ratings.

Home rating gets a multiplier for home advantage; the rating gap shifts the
baseline expected goals of each side, which are clamped and then used as the
rates of two independent Poisson draws.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .rng import SeededRNG


@dataclass(frozen=True)
class MatchModelParams:
    home_advantage: float = 1.10
    base_home_goals: float = 1.4
    base_away_goals: float = 1.1
    min_home_goals: float = 0.2
    max_home_goals: float = 3.5
    min_away_goals: float = 0.2
    max_away_goals: float = 3.0


@dataclass(frozen=True)
class MatchScore:
    home_goals: int
    away_goals: int


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def sample_poisson(lam: float, rng: SeededRNG) -> int:
    """
    Knuth's product-of-uniforms sampler. Fine for the small rates used here
    (lam <= 3.5); cost grows linearly with lam.
    """
    threshold = math.exp(-lam)
    k = 0
    p = rng.random()
    while p > threshold:
        k += 1
        p *= rng.random()
    return k


class MatchOutcomeModel:
    """Home-advantage adjusted Poisson goal model."""

    def __init__(self, params: MatchModelParams | None = None, rng: SeededRNG | None = None) -> None:
        self.params = params or MatchModelParams()
        self.rng = rng or SeededRNG()

    def expected_goals(self, home_power: int, away_power: int) -> tuple[float, float]:
        """(home_lambda, away_lambda) after home advantage and clamping."""
        p = self.params
        home_rating = home_power * p.home_advantage
        diff = (home_rating - away_power) / 100.0
        home_lambda = clamp(p.base_home_goals + diff, p.min_home_goals, p.max_home_goals)
        away_lambda = clamp(p.base_away_goals - diff / 2, p.min_away_goals, p.max_away_goals)
        return home_lambda, away_lambda

    def simulate(self, home_power: int, away_power: int) -> MatchScore:
        home_lambda, away_lambda = self.expected_goals(home_power, away_power)
        return MatchScore(
            home_goals=sample_poisson(home_lambda, self.rng),
            away_goals=sample_poisson(away_lambda, self.rng),
        )
