"""
Repositories for teams and games.
No business logic — only read/write operations. Writes do not commit on
their own; callers group them with db.transaction().
"""
from __future__ import annotations

import sqlite3
from typing import Iterable

from league_sim.models import FixtureSpec, Game, GameResult, Team

_GAME_COLS = "id, week, home_team_id, away_team_id, home_goals, away_goals, is_played"


def _row_to_game(row: sqlite3.Row) -> Game:
    return Game(
        id=row["id"],
        week=row["week"],
        home_team_id=row["home_team_id"],
        away_team_id=row["away_team_id"],
        home_goals=row["home_goals"],
        away_goals=row["away_goals"],
        is_played=bool(row["is_played"]),
    )


def _row_to_team(row: sqlite3.Row) -> Team:
    return Team(id=row["id"], name=row["name"], power=row["power"])


# ---------- TeamRepository ----------


class TeamRepository:
    """CRUD for teams."""

    def create(self, conn: sqlite3.Connection, name: str, power: int) -> Team:
        cur = conn.execute("INSERT INTO teams (name, power) VALUES (?, ?)", (name, power))
        return Team(id=cur.lastrowid, name=name, power=power)

    def get(self, conn: sqlite3.Connection, team_id: int) -> Team | None:
        row = conn.execute("SELECT id, name, power FROM teams WHERE id = ?", (team_id,)).fetchone()
        return _row_to_team(row) if row is not None else None

    def list_all(self, conn: sqlite3.Connection) -> list[Team]:
        """Ordered by id for deterministic iteration."""
        rows = conn.execute("SELECT id, name, power FROM teams ORDER BY id").fetchall()
        return [_row_to_team(r) for r in rows]

    def list_by_name(self, conn: sqlite3.Connection) -> list[Team]:
        rows = conn.execute("SELECT id, name, power FROM teams ORDER BY name").fetchall()
        return [_row_to_team(r) for r in rows]

    def list_by_power(self, conn: sqlite3.Connection) -> list[Team]:
        """Strongest first."""
        rows = conn.execute("SELECT id, name, power FROM teams ORDER BY power DESC, id").fetchall()
        return [_row_to_team(r) for r in rows]

    def update_power(self, conn: sqlite3.Connection, team_id: int, power: int) -> None:
        conn.execute("UPDATE teams SET power = ? WHERE id = ?", (power, team_id))


# ---------- GameRepository ----------


class GameRepository:
    """CRUD for games (fixtures and their results)."""

    def create_many(self, conn: sqlite3.Connection, fixtures: Iterable[FixtureSpec]) -> None:
        conn.executemany(
            "INSERT INTO games (week, home_team_id, away_team_id, home_goals, away_goals, is_played) VALUES (?, ?, ?, NULL, NULL, 0)",
            [(f.week, f.home_team_id, f.away_team_id) for f in fixtures],
        )

    def get(self, conn: sqlite3.Connection, game_id: int) -> Game | None:
        row = conn.execute(f"SELECT {_GAME_COLS} FROM games WHERE id = ?", (game_id,)).fetchone()
        return _row_to_game(row) if row is not None else None

    def list_all(self, conn: sqlite3.Connection) -> list[Game]:
        rows = conn.execute(f"SELECT {_GAME_COLS} FROM games ORDER BY week, id").fetchall()
        return [_row_to_game(r) for r in rows]

    def games_for_week(self, conn: sqlite3.Connection, week: int) -> list[Game]:
        rows = conn.execute(
            f"SELECT {_GAME_COLS} FROM games WHERE week = ? ORDER BY id", (week,)
        ).fetchall()
        return [_row_to_game(r) for r in rows]

    def unplayed_games(self, conn: sqlite3.Connection) -> list[Game]:
        rows = conn.execute(
            f"SELECT {_GAME_COLS} FROM games WHERE is_played = 0 ORDER BY week, id"
        ).fetchall()
        return [_row_to_game(r) for r in rows]

    def exists(self, conn: sqlite3.Connection) -> bool:
        return conn.execute("SELECT 1 FROM games LIMIT 1").fetchone() is not None

    def update_result(self, conn: sqlite3.Connection, game_id: int, home_goals: int, away_goals: int) -> None:
        conn.execute(
            "UPDATE games SET home_goals = ?, away_goals = ?, is_played = 1 WHERE id = ?",
            (home_goals, away_goals, game_id),
        )

    def update_results(self, conn: sqlite3.Connection, results: Iterable[GameResult]) -> None:
        conn.executemany(
            "UPDATE games SET home_goals = ?, away_goals = ?, is_played = 1 WHERE id = ?",
            [(r.home_goals, r.away_goals, r.game_id) for r in results],
        )

    def reset_all(self, conn: sqlite3.Connection) -> None:
        conn.execute("UPDATE games SET home_goals = NULL, away_goals = NULL, is_played = 0")

    def delete_all(self, conn: sqlite3.Connection) -> None:
        conn.execute("DELETE FROM games")
