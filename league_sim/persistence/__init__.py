"""
Persistence layer for teams and games.
No business logic, no simulation — only read/write interfaces.
"""
from .db import (
    DEFAULT_TEAMS,
    get_connection,
    get_db_path,
    init_db,
    seed_default_teams,
    set_db_path,
    transaction,
)
from .repositories import GameRepository, TeamRepository

__all__ = [
    "DEFAULT_TEAMS",
    "get_connection",
    "get_db_path",
    "set_db_path",
    "init_db",
    "seed_default_teams",
    "transaction",
    "GameRepository",
    "TeamRepository",
]
