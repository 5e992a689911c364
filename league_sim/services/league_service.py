"""
League service: fixtures, results, week sequencing, standings and predictions.
Domain computations live in scheduling / standings / prediction /
simulation_service; this class loads the snapshot from the repositories and
writes results back inside one transaction per operation.
"""
from __future__ import annotations

import sqlite3
from typing import Any

from league_sim.config import LeagueConfig
from league_sim.logging_config import get_logger
from league_sim.models import Game, PredictionRow, StandingsRow, Team
from league_sim.persistence.db import transaction
from league_sim.persistence.repositories import GameRepository, TeamRepository
from league_sim.services.errors import (
    GameNotFoundError,
    TeamNotFoundError,
    ValidationError,
)
from league_sim.services.prediction import PredictionEngine, current_week
from league_sim.services.scheduling import generate_fixtures
from league_sim.services.simulation_service import simulate_games, simulate_week
from league_sim.services.standings import compute_standings
from league_sim.simulation.match_model import MatchOutcomeModel
from league_sim.simulation.rng import SeededRNG

log = get_logger(__name__)


def validate_goals(value: Any, side: str) -> int:
    """Goals must be a non-negative int; bool is rejected even though it subclasses int."""
    if value is None:
        raise ValidationError(f"{side} goals are required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{side} goals must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{side} goals cannot be negative, got {value}")
    return value


def validate_power(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"power must be an integer, got {value!r}")
    if not 0 <= value <= 100:
        raise ValidationError(f"power must be between 0 and 100, got {value}")
    return value


# ---------- LeagueService ----------


class LeagueService:
    """
    One group stage. Configuration and randomness are injected; the same
    rng feeds fixture draws and match simulation so a seeded service
    replays identically.
    """

    def __init__(
        self,
        config: LeagueConfig | None = None,
        rng: SeededRNG | None = None,
        model: MatchOutcomeModel | None = None,
    ) -> None:
        self.config = config or LeagueConfig()
        self.rng = rng or SeededRNG()
        self.model = model or MatchOutcomeModel(rng=self.rng)
        self._team_repo = TeamRepository()
        self._game_repo = GameRepository()

    # ---------- Teams ----------

    def list_teams(self, conn: sqlite3.Connection) -> list[Team]:
        return self._team_repo.list_by_name(conn)

    def update_team_power(self, conn: sqlite3.Connection, team_id: int, power: Any) -> Team:
        power = validate_power(power)
        if self._team_repo.get(conn, team_id) is None:
            raise TeamNotFoundError(f"Team not found: {team_id}")
        with transaction(conn):
            self._team_repo.update_power(conn, team_id, power)
        log.info("team_power_updated", team_id=team_id, power=power)
        return self._team_repo.get(conn, team_id)

    # ---------- Fixtures ----------

    def has_fixtures(self, conn: sqlite3.Connection) -> bool:
        return self._game_repo.exists(conn)

    def list_games(self, conn: sqlite3.Connection) -> list[Game]:
        return self._game_repo.list_all(conn)

    def fixtures_by_week(self, conn: sqlite3.Connection) -> dict[int, list[Game]]:
        grouped: dict[int, list[Game]] = {}
        for g in self._game_repo.list_all(conn):
            grouped.setdefault(g.week, []).append(g)
        return grouped

    def generate_fixtures(self, conn: sqlite3.Connection) -> list[Game]:
        """
        Replace the whole schedule (and any results) with a freshly drawn one.
        The new calendar is built before anything is deleted; a
        ConfigurationError leaves the old schedule in place.
        """
        teams = self._team_repo.list_by_power(conn)
        fixtures = generate_fixtures(teams, self.config, self.rng)
        with transaction(conn):
            self._game_repo.delete_all(conn)
            self._game_repo.create_many(conn, fixtures)
        log.info("fixtures_generated", teams=len(teams), games=len(fixtures), weeks=self.config.total_weeks)
        return self._game_repo.list_all(conn)

    def clear_fixtures(self, conn: sqlite3.Connection) -> None:
        """Remove every game; the roster stays."""
        with transaction(conn):
            self._game_repo.delete_all(conn)
        log.info("fixtures_cleared")

    # ---------- Results ----------

    def record_result(self, conn: sqlite3.Connection, game_id: int, home_goals: Any, away_goals: Any) -> Game:
        """Manual score entry. Validated before any write."""
        home_goals = validate_goals(home_goals, "home")
        away_goals = validate_goals(away_goals, "away")
        if self._game_repo.get(conn, game_id) is None:
            raise GameNotFoundError(f"Game not found: {game_id}")
        with transaction(conn):
            self._game_repo.update_result(conn, game_id, home_goals, away_goals)
        log.info("result_recorded", game_id=game_id, home_goals=home_goals, away_goals=away_goals)
        return self._game_repo.get(conn, game_id)

    def get_current_week(self, conn: sqlite3.Connection) -> int:
        return current_week(self._game_repo.list_all(conn), self.config.total_weeks)

    def play_week(self, conn: sqlite3.Connection, week: int) -> int:
        """Simulate the unplayed games of one week. Returns how many were played."""
        teams_by_id = {t.id: t for t in self._team_repo.list_all(conn)}
        results = simulate_week(self._game_repo.games_for_week(conn, week), teams_by_id, self.model, week)
        if results:
            with transaction(conn):
                self._game_repo.update_results(conn, results)
        log.info("week_played", week=week, games=len(results))
        return len(results)

    def play_next_week(self, conn: sqlite3.Connection) -> int:
        """
        Play the current week. If that week has nothing left (e.g. a manual
        result was entered further ahead), play the earliest unplayed week
        instead. No-op once every game has a result.
        """
        unplayed = self._game_repo.unplayed_games(conn)
        if not unplayed:
            return 0
        week = self.get_current_week(conn)
        if not any(g.week == week for g in unplayed):
            week = unplayed[0].week
        return self.play_week(conn, week)

    def play_all_remaining(self, conn: sqlite3.Connection) -> int:
        """Simulate every unplayed game of the season in one transaction."""
        teams_by_id = {t.id: t for t in self._team_repo.list_all(conn)}
        results = simulate_games(self._game_repo.unplayed_games(conn), teams_by_id, self.model)
        if results:
            with transaction(conn):
                self._game_repo.update_results(conn, results)
        log.info("season_completed", games=len(results))
        return len(results)

    def reset_results(self, conn: sqlite3.Connection) -> None:
        """Clear every score and played flag; the schedule is kept."""
        with transaction(conn):
            self._game_repo.reset_all(conn)
        log.info("results_reset")

    # ---------- Tables ----------

    def get_standings(self, conn: sqlite3.Connection) -> list[StandingsRow]:
        return compute_standings(self._team_repo.list_all(conn), self._game_repo.list_all(conn))

    def prediction_window(self) -> int:
        return self.config.prediction_window

    def get_championship_probabilities(
        self, conn: sqlite3.Connection, trials: int | None = None
    ) -> list[PredictionRow]:
        engine = PredictionEngine(self.config, self.model)
        return engine.predict(self._team_repo.list_all(conn), self._game_repo.list_all(conn), trials)
