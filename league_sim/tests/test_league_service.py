"""
Tests for the league service: fixture regeneration, result entry, week
sequencing, reset, standings and predictions against a temporary SQLite DB.
"""
from __future__ import annotations

from collections import Counter

import pytest

from league_sim.config import LeagueConfig
from league_sim.persistence.db import get_connection, init_db
from league_sim.persistence.repositories import GameRepository, TeamRepository
from league_sim.services.errors import (
    ConfigurationError,
    GameNotFoundError,
    TeamNotFoundError,
    ValidationError,
)
from league_sim.services.league_service import LeagueService
from league_sim.simulation.rng import SeededRNG


@pytest.fixture
def db_conn(tmp_path):
    """Temporary DB with schema and the default 4-team roster."""
    db_path = tmp_path / "league_test.db"
    init_db(db_path=db_path)
    conn = get_connection(db_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def empty_db_conn(tmp_path):
    db_path = tmp_path / "empty.db"
    init_db(db_path=db_path, seed_teams=False)
    conn = get_connection(db_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def league_service():
    return LeagueService(LeagueConfig(), rng=SeededRNG(1234))


@pytest.fixture
def scheduled(db_conn, league_service):
    league_service.generate_fixtures(db_conn)
    return db_conn


def _fixture_signature(games):
    return [(g.week, g.home_team_id, g.away_team_id) for g in games]


# ---------- Fixtures ----------


def test_default_roster_seeded_once(tmp_path):
    db_path = tmp_path / "seed.db"
    init_db(db_path=db_path)
    init_db(db_path=db_path)
    conn = get_connection(db_path)
    try:
        names = sorted(t.name for t in TeamRepository().list_all(conn))
    finally:
        conn.close()
    assert names == ["Arsenal", "Chelsea", "Liverpool", "Manchester City"]


def test_generate_fixtures_balanced(scheduled, league_service):
    games = league_service.list_games(scheduled)
    assert len(games) == 12
    teams = league_service.list_teams(scheduled)
    for t in teams:
        mine = [g for g in games if t.id in (g.home_team_id, g.away_team_id)]
        assert len(mine) == 6
        assert sum(1 for g in mine if g.home_team_id == t.id) == 3
    assert sorted({g.week for g in games}) == [1, 2, 3, 4, 5, 6]
    assert all(not g.is_played and g.home_goals is None for g in games)


def test_fixtures_by_week(scheduled, league_service):
    grouped = league_service.fixtures_by_week(scheduled)
    assert sorted(grouped) == [1, 2, 3, 4, 5, 6]
    assert all(len(games) == 2 for games in grouped.values())


def test_regenerate_replaces_schedule_and_results(scheduled, league_service):
    league_service.play_all_remaining(scheduled)
    games = league_service.generate_fixtures(scheduled)
    assert len(games) == 12
    assert all(not g.is_played for g in games)
    assert len(GameRepository().list_all(scheduled)) == 12


def test_generate_with_wrong_roster_leaves_state_untouched(scheduled, league_service):
    before = _fixture_signature(league_service.list_games(scheduled))
    TeamRepository().create(scheduled, "Tottenham", 65)
    with pytest.raises(ConfigurationError):
        league_service.generate_fixtures(scheduled)
    assert _fixture_signature(league_service.list_games(scheduled)) == before


def test_failed_insert_rolls_back_regeneration(scheduled, league_service, monkeypatch):
    league_service.play_week(scheduled, 1)
    before = [g.to_dict() for g in league_service.list_games(scheduled)]

    def broken_insert(self, conn, fixtures):
        raise RuntimeError("disk full")

    monkeypatch.setattr(GameRepository, "create_many", broken_insert)
    with pytest.raises(RuntimeError):
        league_service.generate_fixtures(scheduled)
    assert [g.to_dict() for g in league_service.list_games(scheduled)] == before
    assert league_service.get_current_week(scheduled) == 2


def test_generate_without_teams_is_configuration_error(empty_db_conn, league_service):
    with pytest.raises(ConfigurationError):
        league_service.generate_fixtures(empty_db_conn)
    assert league_service.has_fixtures(empty_db_conn) is False


def test_clear_fixtures(scheduled, league_service):
    assert league_service.has_fixtures(scheduled) is True
    league_service.clear_fixtures(scheduled)
    assert league_service.has_fixtures(scheduled) is False
    assert len(league_service.list_teams(scheduled)) == 4


# ---------- Results ----------


def test_record_result(scheduled, league_service):
    game = league_service.list_games(scheduled)[0]
    updated = league_service.record_result(scheduled, game.id, 2, 1)
    assert (updated.home_goals, updated.away_goals, updated.is_played) == (2, 1, True)
    rows = league_service.get_standings(scheduled)
    assert rows[0].team_id == game.home_team_id
    assert rows[0].points == 3


@pytest.mark.parametrize("home,away", [(None, 1), (1, None), (-1, 0), (0, -3), (1.5, 0), ("2", 1), (True, 0)])
def test_record_result_rejects_invalid_scores(scheduled, league_service, home, away):
    game = league_service.list_games(scheduled)[0]
    with pytest.raises(ValidationError):
        league_service.record_result(scheduled, game.id, home, away)
    stored = GameRepository().get(scheduled, game.id)
    assert stored.is_played is False
    assert stored.home_goals is None


def test_record_result_unknown_game(scheduled, league_service):
    with pytest.raises(GameNotFoundError):
        league_service.record_result(scheduled, 9999, 1, 0)


def test_update_team_power(db_conn, league_service):
    team = league_service.list_teams(db_conn)[0]
    updated = league_service.update_team_power(db_conn, team.id, 99)
    assert updated.power == 99
    with pytest.raises(ValidationError):
        league_service.update_team_power(db_conn, team.id, 101)
    with pytest.raises(TeamNotFoundError):
        league_service.update_team_power(db_conn, 9999, 50)


# ---------- Week sequencing ----------


def test_current_week_advances(scheduled, league_service):
    assert league_service.get_current_week(scheduled) == 1
    assert league_service.play_next_week(scheduled) == 2
    assert league_service.get_current_week(scheduled) == 2
    league_service.play_next_week(scheduled)
    assert league_service.get_current_week(scheduled) == 3


def test_play_next_week_after_manual_last_week_result(scheduled, league_service):
    last = next(g for g in league_service.list_games(scheduled) if g.week == 6)
    league_service.record_result(scheduled, last.id, 1, 1)
    assert league_service.get_current_week(scheduled) == 6
    # Week 6 still has one open game; after that the earlier weeks follow.
    assert league_service.play_next_week(scheduled) == 1
    for _ in range(5):
        assert league_service.play_next_week(scheduled) == 2
    assert all(g.is_played for g in league_service.list_games(scheduled))
    assert league_service.play_next_week(scheduled) == 0
    stored = GameRepository().get(scheduled, last.id)
    assert (stored.home_goals, stored.away_goals) == (1, 1)


def test_play_week_only_touches_that_week(scheduled, league_service):
    assert league_service.play_week(scheduled, 2) == 2
    played = Counter(g.week for g in league_service.list_games(scheduled) if g.is_played)
    assert played == Counter({2: 2})
    # Already played: nothing left in week 2
    assert league_service.play_week(scheduled, 2) == 0


def test_play_week_keeps_manual_results(scheduled, league_service):
    game = next(g for g in league_service.list_games(scheduled) if g.week == 1)
    league_service.record_result(scheduled, game.id, 7, 0)
    league_service.play_week(scheduled, 1)
    stored = GameRepository().get(scheduled, game.id)
    assert (stored.home_goals, stored.away_goals) == (7, 0)


def test_play_all_remaining(scheduled, league_service):
    league_service.play_next_week(scheduled)
    assert league_service.play_all_remaining(scheduled) == 10
    games = league_service.list_games(scheduled)
    assert all(g.is_played and g.home_goals >= 0 and g.away_goals >= 0 for g in games)
    assert league_service.get_current_week(scheduled) == 6
    assert league_service.play_next_week(scheduled) == 0
    rows = league_service.get_standings(scheduled)
    assert all(r.played == 6 for r in rows)
    assert sum(r.wins for r in rows) == sum(r.losses for r in rows)


def test_reset_results_keeps_schedule(scheduled, league_service):
    before = _fixture_signature(league_service.list_games(scheduled))
    league_service.play_all_remaining(scheduled)
    league_service.reset_results(scheduled)
    games = league_service.list_games(scheduled)
    assert _fixture_signature(games) == before
    assert all(not g.is_played and g.home_goals is None and g.away_goals is None for g in games)
    rows = league_service.get_standings(scheduled)
    assert all(r.played == 0 and r.points == 0 and r.goal_diff == 0 for r in rows)
    assert [r.team_name for r in rows] == sorted(r.team_name for r in rows)
    assert league_service.get_current_week(scheduled) == 1


# ---------- Predictions ----------


def test_no_predictions_before_window(scheduled, league_service):
    assert league_service.get_championship_probabilities(scheduled) == []
    league_service.play_week(scheduled, 1)
    league_service.play_week(scheduled, 2)
    assert league_service.get_championship_probabilities(scheduled) == []


def test_predictions_inside_window(scheduled, league_service):
    for week in (1, 2, 3):
        league_service.play_week(scheduled, week)
    rows = league_service.get_championship_probabilities(scheduled)
    assert len(rows) == 4
    total = sum(r.probability for r in rows)
    assert 99.0 <= total <= 101.0
    # Prediction never writes results
    assert sum(1 for g in league_service.list_games(scheduled) if g.is_played) == 6


def test_prediction_window_exposed(league_service):
    assert league_service.prediction_window() == 3
