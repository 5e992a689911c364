"""
Ranking rule shared by the live table and champion resolution.

Order: points, goal difference, goals scored (all descending), then team name
ascending so that no two teams with distinct names ever tie.
"""
from __future__ import annotations

from typing import Iterable, Protocol, TypeVar


class Rankable(Protocol):
    team_name: str
    points: int
    goals_for: int

    @property
    def goal_diff(self) -> int: ...


R = TypeVar("R", bound=Rankable)


def ranking_key(row: Rankable) -> tuple[int, int, int, str]:
    return (-row.points, -row.goal_diff, -row.goals_for, row.team_name)


def compare_rows(a: Rankable, b: Rankable) -> int:
    """-1 if a ranks above b, 1 if below, 0 only for identical keys."""
    ka, kb = ranking_key(a), ranking_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_rows(rows: Iterable[R]) -> list[R]:
    return sorted(rows, key=ranking_key)


def top_ranked(rows: Iterable[R]) -> R | None:
    """Best-ranked row, or None for an empty table."""
    return min(rows, key=ranking_key, default=None)
