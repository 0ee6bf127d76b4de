#!/usr/bin/env python3
"""
Simulate a complete mock draft from a stats provider export.

This script:
1. Loads players from data/<file> (JSON or CSV)
2. Drops unranked players (no ADP, or ADP above 300)
3. Runs a full snake draft with every team picked by the engine
4. Prints the user's roster and writes the pick history to CSV
"""
import argparse
import logging

import pandas as pd

from puckdraft.models.draft import LeagueSettings, RosterConfig
from puckdraft.services.draft_simulator import DraftSimulator
from puckdraft.services.errors import DraftError
from puckdraft.services.league_setup import filter_draftable_players, validate_league_settings
from puckdraft.services.player_loader import PlayerLoader


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('players_file', help='Player export under data/ (e.g. players.json)')
    parser.add_argument('--teams', type=int, default=12)
    parser.add_argument('--position', type=int, default=6, help='Your draft slot (1-based)')
    parser.add_argument('--strategy', choices=DraftSimulator.STRATEGIES, default='adp')
    parser.add_argument('--output', help='CSV path for the pick history')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    print("=" * 60)
    print("Mock Draft Simulation")
    print("=" * 60)

    settings = LeagueSettings(
        num_teams=args.teams,
        user_draft_position=args.position,
        draft_timer_seconds=0,
        roster_config=RosterConfig(),
    )

    try:
        validate_league_settings(settings)
        players = filter_draftable_players(PlayerLoader().load_players(args.players_file))
        print(f"✅ Loaded {len(players)} draftable players")
        state = DraftSimulator().simulate_draft(settings, players, user_strategy=args.strategy)
    except (DraftError, FileNotFoundError) as e:
        print(f"❌ ERROR: {e}")
        return 1

    history = pd.DataFrame(DraftSimulator.summarize(state))
    print(f"✅ Draft complete: {len(history)} picks\n")

    user_team = state.user_team()
    print(f"{user_team.team_name}:")
    for player in user_team.picks:
        print(f"  {player.name:<28} {player.position_code:<8} ADP {player.adp:6.1f}")

    if args.output:
        history.to_csv(args.output, index=False)
        print(f"\nPick history written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
