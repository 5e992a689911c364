"""
Pure week simulation: no persistence.
Returns the scores to write; league_service decides when and how to store them.
"""
from __future__ import annotations

from typing import Mapping, Sequence

from league_sim.models import Game, GameResult, Team
from league_sim.simulation.match_model import MatchOutcomeModel


def simulate_games(
    games: Sequence[Game],
    teams_by_id: Mapping[int, Team],
    model: MatchOutcomeModel,
) -> list[GameResult]:
    """Simulate every unplayed game in games; played games are left alone."""
    results: list[GameResult] = []
    for g in games:
        if g.is_played:
            continue
        score = model.simulate(teams_by_id[g.home_team_id].power, teams_by_id[g.away_team_id].power)
        results.append(GameResult(game_id=g.id, home_goals=score.home_goals, away_goals=score.away_goals))
    return results


def simulate_week(
    games: Sequence[Game],
    teams_by_id: Mapping[int, Team],
    model: MatchOutcomeModel,
    week: int,
) -> list[GameResult]:
    """Results for the unplayed games of one week."""
    return simulate_games([g for g in games if g.week == week], teams_by_id, model)
