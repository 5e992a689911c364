"""
Database connection, transactions and initialization.
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from league_sim.config import get_settings

from .schema import all_schema_sql

# Canonical roster for a fresh database.
DEFAULT_TEAMS: list[tuple[str, int]] = [
    ("Chelsea", 60),
    ("Arsenal", 75),
    ("Manchester City", 90),
    ("Liverpool", 50),
]


_db_path: Path | None = None


def set_db_path(path: str | Path) -> None:
    """Set the database path. Call before first get_connection if not using the configured one."""
    global _db_path
    _db_path = Path(path)


def get_db_path() -> Path:
    """Return the current database path (settings value unless overridden)."""
    if _db_path is not None:
        return _db_path
    return get_settings().database_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """
    Return a new SQLite connection.
    Ensure close() is called. Transactions are explicit (see transaction()).
    """
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), isolation_level=None, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    BEGIN ... COMMIT around the block; ROLLBACK and re-raise on error.
    Readers never see a half-applied block.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")


def seed_default_teams(conn: sqlite3.Connection, teams: list[tuple[str, int]] | None = None) -> None:
    """Insert the default roster; existing names are left untouched."""
    with transaction(conn):
        conn.executemany(
            "INSERT OR IGNORE INTO teams (name, power) VALUES (?, ?)",
            teams if teams is not None else DEFAULT_TEAMS,
        )


def init_db(db_path: str | Path | None = None, seed_teams: bool = True) -> None:
    """Create tables if missing and optionally seed the default roster."""
    conn = get_connection(db_path)
    try:
        conn.executescript(all_schema_sql())
        if seed_teams:
            seed_default_teams(conn)
    finally:
        conn.close()
