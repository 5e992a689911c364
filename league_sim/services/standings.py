"""
Standings: fold played games into per-team stats and order them with the
shared ranking rule.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from league_sim.models import Game, StandingsRow, Team, TeamStats
from league_sim.services.ranking import sort_rows

StatsTable = dict[int, TeamStats]


def empty_table(teams: Iterable[Team]) -> StatsTable:
    """One zeroed TeamStats per team, keyed by team id."""
    return {t.id: TeamStats(team_id=t.id, team_name=t.name) for t in teams}


def apply_result(
    table: StatsTable,
    home_team_id: int,
    away_team_id: int,
    home_goals: int,
    away_goals: int,
) -> None:
    """Replace both teams' entries with their stats after this result."""
    table[home_team_id] = table[home_team_id].with_result(home_goals, away_goals)
    table[away_team_id] = table[away_team_id].with_result(away_goals, home_goals)


def fold_results(table: StatsTable, games: Iterable[Game]) -> StatsTable:
    """
    Apply every game with a recorded result. Games flagged played but missing
    a goal count are skipped so one bad record does not break the table.
    """
    for g in games:
        if not g.has_result:
            continue
        apply_result(table, g.home_team_id, g.away_team_id, g.home_goals, g.away_goals)
    return table


def rank_table(table: Mapping[int, TeamStats]) -> list[StandingsRow]:
    """Sort by the ranking rule and number positions 1..N."""
    ordered = sort_rows(table.values())
    return [StandingsRow.from_stats(s, position=i) for i, s in enumerate(ordered, start=1)]


def compute_standings(teams: Iterable[Team], games: Iterable[Game]) -> list[StandingsRow]:
    table = fold_results(empty_table(teams), games)
    return rank_table(table)
