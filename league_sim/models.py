"""
Data models for the group stage simulator.
Domain objects only — no persistence or API logic.

Teams and games are stored; standings and prediction rows are derived on every
read and never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


# ---------- Team ----------
@dataclass(frozen=True)
class Team:
    """
    A team in the group. power is a 0-100 strength rating that drives
    expected goals in the match model.
    """
    id: int
    name: str
    power: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "power": self.power}


# ---------- Game (fixture) ----------
@dataclass
class Game:
    """
    One fixture of the calendar. Goals are None until the game is played
    (simulated or entered manually).
    """
    id: int
    week: int
    home_team_id: int
    away_team_id: int
    home_goals: int | None = None
    away_goals: int | None = None
    is_played: bool = False

    @property
    def has_result(self) -> bool:
        """Played and both goal counts recorded."""
        return self.is_played and self.home_goals is not None and self.away_goals is not None

    @property
    def is_draw(self) -> bool:
        return self.has_result and self.home_goals == self.away_goals

    @property
    def winner_id(self) -> int | None:
        """Winning team id; None if draw or not played."""
        if not self.has_result or self.is_draw:
            return None
        return self.home_team_id if self.home_goals > self.away_goals else self.away_team_id

    @property
    def loser_id(self) -> int | None:
        if not self.has_result or self.is_draw:
            return None
        return self.away_team_id if self.home_goals > self.away_goals else self.home_team_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week": self.week,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
            "is_played": self.is_played,
        }


# ---------- Aggregates ----------
@dataclass(frozen=True)
class TeamStats:
    """
    Per-team accumulator used while folding results.
    Frozen: a fold replaces the entry in its team_id -> TeamStats mapping.
    """
    team_id: int
    team_name: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_diff(self) -> int:
        return self.goals_for - self.goals_against

    def with_result(self, scored: int, conceded: int) -> TeamStats:
        """Return a copy with one more game (win=3, draw=1, loss=0)."""
        if scored > conceded:
            wins, draws, losses, points = self.wins + 1, self.draws, self.losses, self.points + 3
        elif scored < conceded:
            wins, draws, losses, points = self.wins, self.draws, self.losses + 1, self.points
        else:
            wins, draws, losses, points = self.wins, self.draws + 1, self.losses, self.points + 1
        return replace(
            self,
            played=self.played + 1,
            wins=wins,
            draws=draws,
            losses=losses,
            goals_for=self.goals_for + scored,
            goals_against=self.goals_against + conceded,
            points=points,
        )


@dataclass(frozen=True)
class StandingsRow:
    """One line of the league table. position is 1-based and assigned after sorting."""
    team_id: int
    team_name: str
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    goal_diff: int
    points: int
    position: int

    @classmethod
    def from_stats(cls, stats: TeamStats, position: int) -> StandingsRow:
        return cls(
            team_id=stats.team_id,
            team_name=stats.team_name,
            played=stats.played,
            wins=stats.wins,
            draws=stats.draws,
            losses=stats.losses,
            goals_for=stats.goals_for,
            goals_against=stats.goals_against,
            goal_diff=stats.goal_diff,
            points=stats.points,
            position=position,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "played": self.played,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_diff": self.goal_diff,
            "points": self.points,
            "position": self.position,
        }


@dataclass(frozen=True)
class PredictionRow:
    """Championship probability for one team, percent rounded to one decimal."""
    team_id: int
    team_name: str
    probability: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "probability": self.probability,
        }


@dataclass(frozen=True)
class FixtureSpec:
    """A fixture produced by the schedule template, before it is stored."""
    week: int
    home_team_id: int
    away_team_id: int


@dataclass(frozen=True)
class GameResult:
    """A score to write onto a stored game."""
    game_id: int
    home_goals: int
    away_goals: int
