"""
SQLite schema for teams and games.
Each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def teams_schema() -> str:
    """power: 0-100 strength rating used by the match model."""
    return """
    CREATE TABLE IF NOT EXISTS teams (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        power INTEGER NOT NULL CHECK (power BETWEEN 0 AND 100)
    );
    """


def games_schema() -> str:
    """One row per fixture. Goals NULL until played; week groups the matchday."""
    return """
    CREATE TABLE IF NOT EXISTS games (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        week INTEGER NOT NULL,
        home_team_id INTEGER NOT NULL,
        away_team_id INTEGER NOT NULL,
        home_goals INTEGER CHECK (home_goals IS NULL OR home_goals >= 0),
        away_goals INTEGER CHECK (away_goals IS NULL OR away_goals >= 0),
        is_played INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY (home_team_id) REFERENCES teams(id) ON DELETE CASCADE,
        FOREIGN KEY (away_team_id) REFERENCES teams(id) ON DELETE CASCADE,
        CHECK (home_team_id <> away_team_id)
    );
    CREATE INDEX IF NOT EXISTS ix_games_week ON games(week);
    CREATE INDEX IF NOT EXISTS ix_games_played ON games(is_played);
    """


def all_schema_sql() -> str:
    return teams_schema() + games_schema()
