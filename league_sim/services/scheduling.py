"""
Double round-robin fixture generation over abstract slots.

The calendar is a fixed template of (home_slot, away_slot) pairs per week.
Only the binding of teams to slots is random, so balance (every pair meets
twice, once each way; one game per team per week; no byes) holds by
construction and never needs re-checking at generation time.

The canonical 4-team template is a constant. Other even league sizes use the
circle method for the first half of the season and mirror it (home and away
swapped) for the second half.
"""
from __future__ import annotations

from typing import Sequence

from league_sim.config import LeagueConfig
from league_sim.models import FixtureSpec, Team
from league_sim.services.errors import ConfigurationError
from league_sim.simulation.rng import SeededRNG

Template = dict[int, list[tuple[int, int]]]

# week => [(home_slot, away_slot), ...]
FIXTURE_TEMPLATE: Template = {
    1: [(0, 3), (1, 2)],
    2: [(2, 0), (3, 1)],
    3: [(0, 1), (2, 3)],
    4: [(2, 1), (3, 0)],
    5: [(0, 2), (1, 3)],
    6: [(1, 0), (3, 2)],
}


def circle_pairings(n: int) -> list[list[tuple[int, int]]]:
    """
    Single round-robin over slots 0..n-1 (n even) by the circle method:
    fix slot 0, rotate the others each round. Home side alternates with the
    round so no slot is always at home.
    """
    order = list(range(n))
    rounds: list[list[tuple[int, int]]] = []
    for r in range(n - 1):
        pairs: list[tuple[int, int]] = []
        for i in range(n // 2):
            a, b = order[i], order[n - 1 - i]
            pairs.append((a, b) if r % 2 == 0 else (b, a))
        rounds.append(pairs)
        order = [order[0]] + [order[n - 1]] + order[1 : n - 1]
    return rounds


def build_template(team_count: int) -> Template:
    """Slot template for a double round-robin with team_count entrants."""
    if team_count == 4:
        return {week: list(pairs) for week, pairs in FIXTURE_TEMPLATE.items()}
    if team_count < 2 or team_count % 2 == 1:
        raise ConfigurationError(
            f"Double round-robin needs an even number of teams (at least 2), got {team_count}"
        )
    first_half = circle_pairings(team_count)
    half = len(first_half)
    template: Template = {}
    for i, pairs in enumerate(first_half):
        template[i + 1] = list(pairs)
        template[half + i + 1] = [(away, home) for home, away in pairs]
    return template


def assign_slots(teams: Sequence[Team], rng: SeededRNG) -> dict[int, int]:
    """Uniformly random slot -> team_id binding."""
    slots = rng.permutation(len(teams))
    return {slot: team.id for slot, team in zip(slots, teams)}


def fixtures_from_template(template: Template, slot_team_ids: dict[int, int]) -> list[FixtureSpec]:
    """Materialize the template; every referenced slot must be bound to a team."""
    fixtures: list[FixtureSpec] = []
    for week in sorted(template):
        for home_slot, away_slot in template[week]:
            home_id = slot_team_ids.get(home_slot)
            away_id = slot_team_ids.get(away_slot)
            if home_id is None or away_id is None:
                raise ConfigurationError(
                    f"Invalid fixture template: no team mapped for slot(s) {home_slot} or {away_slot} in week {week}"
                )
            fixtures.append(FixtureSpec(week=week, home_team_id=home_id, away_team_id=away_id))
    return fixtures


def generate_fixtures(
    teams: Sequence[Team],
    config: LeagueConfig | None = None,
    rng: SeededRNG | None = None,
) -> list[FixtureSpec]:
    """
    Full season of fixtures for exactly config.team_count teams.
    Raises ConfigurationError on a wrong roster size or a template that does
    not span config.total_weeks.
    """
    config = config or LeagueConfig()
    rng = rng or SeededRNG()
    if len(teams) != config.team_count:
        raise ConfigurationError(
            f"Fixture generation requires exactly {config.team_count} teams, got {len(teams)}"
        )
    template = build_template(config.team_count)
    if len(template) != config.total_weeks:
        raise ConfigurationError(
            f"A {config.team_count}-team double round-robin spans {len(template)} weeks, "
            f"configured total_weeks is {config.total_weeks}"
        )
    return fixtures_from_template(template, assign_slots(teams, rng))
