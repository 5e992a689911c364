"""
Settings loaded from the environment (prefix LEAGUE_) or a .env file.

League sizing is handed to the services as an explicit LeagueConfig rather
than read from module constants, so the same code runs at other league sizes.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class LeagueConfig:
    """Shape of the competition. Canonical group: 4 teams, 6 weeks, predictions for the last 3."""
    team_count: int = 4
    total_weeks: int = 6
    prediction_window: int = 3
    simulation_count: int = 300

    @property
    def first_prediction_week(self) -> int:
        return self.total_weeks - self.prediction_window + 1


def _default_db_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "league.db"


class Settings(BaseSettings):
    """Application settings."""

    database_path: Path = _default_db_path()

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"

    # League shape
    team_count: int = 4
    total_weeks: int = 6
    prediction_window: int = 3
    simulation_count: int = 300

    # Fixed seed for replayable runs; None = fresh randomness
    random_seed: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="LEAGUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("team_count", "total_weeks", "simulation_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("prediction_window")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError("prediction_window cannot be negative")
        return v

    def league_config(self) -> LeagueConfig:
        return LeagueConfig(
            team_count=self.team_count,
            total_weeks=self.total_weeks,
            prediction_window=self.prediction_window,
            simulation_count=self.simulation_count,
        )


def get_settings() -> Settings:
    """Fresh Settings each call so tests can change the environment."""
    return Settings()
