"""
Play a whole group stage in the terminal: draw fixtures, then simulate week by
week, printing results, the table and (inside the prediction window) each
team's championship probability.

Run from project root: python -m league_sim.run_season --seed 7
"""
from __future__ import annotations

import argparse
import tempfile
from pathlib import Path

from league_sim.config import get_settings
from league_sim.logging_config import setup_logging
from league_sim.models import StandingsRow
from league_sim.persistence import get_connection, init_db
from league_sim.services import LeagueService
from league_sim.simulation.rng import SeededRNG


def _print_table(rows: list[StandingsRow]) -> None:
    print(f"  {'#':>2}  {'Team':<18} {'P':>2} {'W':>2} {'D':>2} {'L':>2} {'GF':>3} {'GA':>3} {'GD':>4} {'Pts':>4}")
    for r in rows:
        print(
            f"  {r.position:>2}  {r.team_name:<18} {r.played:>2} {r.wins:>2} {r.draws:>2} {r.losses:>2} "
            f"{r.goals_for:>3} {r.goals_against:>3} {r.goal_diff:>+4} {r.points:>4}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a full group stage")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a replayable season")
    parser.add_argument("--trials", type=int, default=None, help="Monte-Carlo trials per prediction")
    parser.add_argument("--db", type=Path, default=None, help="SQLite file (default: throwaway temp file)")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging("WARNING")
    config = settings.league_config()
    seed = args.seed if args.seed is not None else settings.random_seed
    service = LeagueService(config=config, rng=SeededRNG(seed))

    with tempfile.TemporaryDirectory() as tmp:
        db_path = args.db or Path(tmp) / "season.db"
        init_db(db_path)
        conn = get_connection(db_path)
        try:
            service.generate_fixtures(conn)
            names = {t.id: t.name for t in service.list_teams(conn)}
            print(f"\n  Group stage: {config.team_count} teams, {config.total_weeks} weeks  [seed={service.rng.seed}]")
            for week in range(1, config.total_weeks + 1):
                service.play_week(conn, week)
                print("\n" + "=" * 60)
                print(f"  WEEK {week}")
                print("=" * 60)
                for g in service.fixtures_by_week(conn).get(week, []):
                    print(f"  {names[g.home_team_id]:>18} {g.home_goals} - {g.away_goals} {names[g.away_team_id]}")
                print()
                _print_table(service.get_standings(conn))
                predictions = service.get_championship_probabilities(conn, trials=args.trials)
                if predictions:
                    print("\n  Championship probability:")
                    for p in predictions:
                        print(f"    {p.team_name:<18} {p.probability:5.1f}%")
            print()
        finally:
            conn.close()


if __name__ == "__main__":
    main()
