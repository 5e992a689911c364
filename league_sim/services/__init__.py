"""
Service layer: ranking, scheduling, standings, prediction and week simulation.
Pure computations; league_service orchestrates persistence.
"""
from .errors import ConfigurationError, GameNotFoundError, TeamNotFoundError, ValidationError
from .ranking import compare_rows, ranking_key, sort_rows, top_ranked
from .scheduling import FIXTURE_TEMPLATE, build_template, generate_fixtures
from .standings import compute_standings
from .prediction import PredictionEngine, current_week, is_window_open
from .simulation_service import simulate_games, simulate_week
from .league_service import LeagueService

__all__ = [
    "ConfigurationError",
    "GameNotFoundError",
    "TeamNotFoundError",
    "ValidationError",
    "compare_rows",
    "ranking_key",
    "sort_rows",
    "top_ranked",
    "FIXTURE_TEMPLATE",
    "build_template",
    "generate_fixtures",
    "compute_standings",
    "PredictionEngine",
    "current_week",
    "is_window_open",
    "simulate_games",
    "simulate_week",
    "LeagueService",
]
