"""
Match simulation: seeded randomness and the Poisson scoreline model.
"""
from .rng import SeededRNG
from .match_model import (
    MatchModelParams,
    MatchOutcomeModel,
    MatchScore,
    clamp,
    sample_poisson,
)

__all__ = [
    "SeededRNG",
    "MatchModelParams",
    "MatchOutcomeModel",
    "MatchScore",
    "clamp",
    "sample_poisson",
]
