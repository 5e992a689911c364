"""
Monte-Carlo championship prediction.

Each trial keeps every recorded result, simulates every unplayed game with the
match model, folds the season with the standings rules and takes the
top-ranked team as that trial's champion. A team's probability is the share
of trials it won, in percent with one decimal. Shares are not renormalized, so
the total can drift slightly from 100 after rounding.

Predictions are only produced in the last prediction_window weeks of the
season; earlier the result is an empty list.
"""
from __future__ import annotations

from typing import Sequence

from league_sim.config import LeagueConfig
from league_sim.logging_config import get_logger
from league_sim.models import Game, PredictionRow, Team
from league_sim.services.ranking import top_ranked
from league_sim.services.standings import StatsTable, apply_result, empty_table, fold_results
from league_sim.simulation.match_model import MatchOutcomeModel

log = get_logger(__name__)


def current_week(games: Sequence[Game], total_weeks: int) -> int:
    """Week after the highest week with a played game, capped at total_weeks; 1 if none played."""
    played_weeks = [g.week for g in games if g.is_played]
    if not played_weeks:
        return 1
    return min(max(played_weeks) + 1, total_weeks)


def is_window_open(week: int, config: LeagueConfig) -> bool:
    return week > config.total_weeks - config.prediction_window


class PredictionEngine:
    """Runs the trials for one snapshot of teams and games."""

    def __init__(self, config: LeagueConfig | None = None, model: MatchOutcomeModel | None = None) -> None:
        self.config = config or LeagueConfig()
        self.model = model or MatchOutcomeModel()

    def champion_counts(self, teams: Sequence[Team], games: Sequence[Game], trials: int) -> dict[int, int]:
        """team_id -> number of trials it finished top."""
        power = {t.id: t.power for t in teams}
        # Recorded results are the same in every trial; entries are immutable
        # so each trial can start from a shallow copy.
        base: StatsTable = fold_results(empty_table(teams), games)
        pending = [g for g in games if not g.is_played]

        wins = {t.id: 0 for t in teams}
        for _ in range(trials):
            table = dict(base)
            for g in pending:
                score = self.model.simulate(power[g.home_team_id], power[g.away_team_id])
                apply_result(table, g.home_team_id, g.away_team_id, score.home_goals, score.away_goals)
            champion = top_ranked(table.values())
            if champion is not None:
                wins[champion.team_id] += 1
        return wins

    def predict(
        self,
        teams: Sequence[Team],
        games: Sequence[Game],
        trials: int | None = None,
    ) -> list[PredictionRow]:
        """
        Championship probabilities, highest first (ties by name).
        Empty outside the prediction window.
        """
        week = current_week(games, self.config.total_weeks)
        if not is_window_open(week, self.config):
            log.debug("prediction_window_closed", current_week=week,
                      first_prediction_week=self.config.first_prediction_week)
            return []

        trials = self.config.simulation_count if trials is None else trials
        wins = self.champion_counts(teams, games, trials)
        rows = [
            PredictionRow(
                team_id=t.id,
                team_name=t.name,
                probability=round(wins[t.id] / trials * 100.0, 1) if trials > 0 else 0.0,
            )
            for t in teams
        ]
        rows.sort(key=lambda r: (-r.probability, r.team_name))
        log.info("prediction_computed", current_week=week, trials=trials,
                 leader=rows[0].team_name if rows else None)
        return rows
