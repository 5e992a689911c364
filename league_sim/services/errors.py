"""
Error kinds raised by the league services.
"""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Roster size or fixture template does not fit the league configuration."""


class ValidationError(ValueError):
    """Manually entered score is missing, not an integer, or negative."""


class GameNotFoundError(LookupError):
    """No game with the given id."""


class TeamNotFoundError(LookupError):
    """No team with the given id."""
