"""
REST API for the group stage simulator.
Thin wrappers around LeagueService and persistence.
"""
from __future__ import annotations

from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, StrictInt

from league_sim.config import get_settings
from league_sim.logging_config import get_logger, setup_logging
from league_sim.models import Game, Team
from league_sim.persistence import get_connection, init_db
from league_sim.services import (
    ConfigurationError,
    GameNotFoundError,
    LeagueService,
    TeamNotFoundError,
    ValidationError,
)
from league_sim.simulation.rng import SeededRNG

log = get_logger(__name__)


@contextmanager
def db_conn() -> Generator:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


_service: LeagueService | None = None


def get_service() -> LeagueService:
    """Process-wide service built from settings; override in tests via dependency_overrides."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = LeagueService(config=settings.league_config(), rng=SeededRNG(settings.random_seed))
    return _service


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_format == "json")
    init_db()
    log.info("api_started", team_count=settings.team_count, total_weeks=settings.total_weeks)
    yield


app = FastAPI(
    title="Group Stage Simulator API",
    description="Fixtures, match simulation, standings and championship predictions",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------- Request models ----------


class UpdateScoreRequest(BaseModel):
    home_goals: StrictInt = Field(..., ge=0)
    away_goals: StrictInt = Field(..., ge=0)


class UpdateTeamRequest(BaseModel):
    power: StrictInt = Field(..., ge=0, le=100, description="Strength rating 0-100")


# ---------- Payload helpers ----------


def _game_payload(game: Game, teams_by_id: dict[int, Team]) -> dict[str, Any]:
    d = game.to_dict()
    d["home_team"] = teams_by_id[game.home_team_id].name
    d["away_team"] = teams_by_id[game.away_team_id].name
    return d


def _fixtures_payload(service: LeagueService, conn) -> dict[str, list[dict[str, Any]]]:
    """Week number (as string key, JSON-style) -> games with team names."""
    teams_by_id = {t.id: t for t in service.list_teams(conn)}
    return {
        str(week): [_game_payload(g, teams_by_id) for g in games]
        for week, games in service.fixtures_by_week(conn).items()
    }


# ---------- Endpoints: tournament setup ----------


@app.get("/tournament/teams")
def get_teams(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    """Roster plus a read-only fixture preview."""
    with db_conn() as conn:
        fixtures = _fixtures_payload(service, conn)
        return {
            "teams": [t.to_dict() for t in service.list_teams(conn)],
            "fixtures_by_week": fixtures,
            "weeks": [int(w) for w in fixtures],
            "has_fixtures": bool(fixtures),
        }


@app.patch("/tournament/teams/{team_id}")
def update_team(
    team_id: int, req: UpdateTeamRequest, service: LeagueService = Depends(get_service)
) -> dict[str, Any]:
    with db_conn() as conn:
        try:
            team = service.update_team_power(conn, team_id, req.power)
        except TeamNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return team.to_dict()


@app.post("/tournament/fixtures/generate")
def generate_fixtures(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    """Draw a new schedule. Existing fixtures and results are replaced."""
    with db_conn() as conn:
        try:
            games = service.generate_fixtures(conn)
        except ConfigurationError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return {"message": "Fixtures generated successfully.", "games": len(games)}


@app.post("/tournament/fixtures/clear")
def clear_fixtures(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    with db_conn() as conn:
        service.clear_fixtures(conn)
        return {"message": "Fixtures cleared successfully."}


# ---------- Endpoints: simulation ----------


@app.get("/tournament/simulation")
def simulation_dashboard(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    """Standings, fixtures by week, current week and championship probabilities."""
    with db_conn() as conn:
        fixtures = _fixtures_payload(service, conn)
        return {
            "standings": [r.to_dict() for r in service.get_standings(conn)],
            "weeks": [int(w) for w in fixtures],
            "fixtures_by_week": fixtures,
            "current_week": service.get_current_week(conn),
            "total_weeks": service.config.total_weeks,
            "prediction_window": service.prediction_window(),
            "predictions": [p.to_dict() for p in service.get_championship_probabilities(conn)],
        }


@app.get("/tournament/standings")
def get_standings(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    with db_conn() as conn:
        return {"standings": [r.to_dict() for r in service.get_standings(conn)]}


@app.get("/tournament/predictions")
def get_predictions(
    trials: int | None = Query(default=None, ge=1, le=10000),
    service: LeagueService = Depends(get_service),
) -> dict[str, Any]:
    """Empty list until the prediction window opens."""
    with db_conn() as conn:
        rows = service.get_championship_probabilities(conn, trials=trials)
        return {
            "current_week": service.get_current_week(conn),
            "prediction_window": service.prediction_window(),
            "predictions": [p.to_dict() for p in rows],
        }


@app.post("/tournament/simulation/play-next-week")
def play_next_week(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    with db_conn() as conn:
        played = service.play_next_week(conn)
        return {"played": played, "current_week": service.get_current_week(conn)}


@app.post("/tournament/simulation/play-week/{week}")
def play_week(week: int, service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    if not 1 <= week <= service.config.total_weeks:
        raise HTTPException(
            status_code=400,
            detail=f"week must be between 1 and {service.config.total_weeks}",
        )
    with db_conn() as conn:
        played = service.play_week(conn, week)
        return {"played": played, "current_week": service.get_current_week(conn)}


@app.post("/tournament/simulation/play-all")
def play_all(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    with db_conn() as conn:
        played = service.play_all_remaining(conn)
        return {"played": played, "current_week": service.get_current_week(conn)}


@app.post("/tournament/simulation/reset")
def reset(service: LeagueService = Depends(get_service)) -> dict[str, Any]:
    with db_conn() as conn:
        service.reset_results(conn)
        return {"message": "Results reset.", "current_week": service.get_current_week(conn)}


@app.patch("/tournament/simulation/games/{game_id}")
def update_game_score(
    game_id: int, req: UpdateScoreRequest, service: LeagueService = Depends(get_service)
) -> dict[str, Any]:
    """Manually override a single game's score; marks it played."""
    with db_conn() as conn:
        try:
            game = service.record_result(conn, game_id, req.home_goals, req.away_goals)
        except GameNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return game.to_dict()
