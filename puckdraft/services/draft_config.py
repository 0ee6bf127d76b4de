"""
Draft engine configuration.

CPU drafting is a weighted blend of four signals:
- ADP proximity: does market consensus put this player near the current pick?
- Positional need: does the roster still have open slots the player fits?
- Raw value: a pick-independent quality proxy (lower ADP = better player)
- Randomness: keeps CPU teams from drafting identically every simulation

Thresholds below encode the CPU strategy bias (wait on goalies, take
centers and defensemen early) and are kept here so they can be tuned.
"""
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CPUDraftWeights:
    adp_weight: float = 0.50
    positional_need_weight: float = 0.30
    value_weight: float = 0.15
    randomness_weight: float = 0.05


DEFAULT_CPU_WEIGHTS = CPUDraftWeights()

# Signal scales
ADP_PROXIMITY_MAX = 100.0
ADP_PROXIMITY_PENALTY = 2.0  # points lost per pick of distance from ADP
VALUE_CEILING = 200.0  # raw value = VALUE_CEILING - ADP
RANDOMNESS_MAX = 100.0

# Positional need multipliers (per open slot)
PRIMARY_NEED_MULTIPLIER = 20
FORWARD_FLEX_NEED_MULTIPLIER = 15
UTIL_NEED_MULTIPLIER = 5

# Strategy bias
GOALIE_DELAY_PICK = 50  # goalies de-prioritized before this overall pick
GOALIE_PENALTY = 0.4
EARLY_PREMIUM_PICK = 30  # C/D boosted before this overall pick
CENTER_BOOST = 1.1
DEFENSE_BOOST = 1.05

# Share of a team's roster drafted before CPU teams chase critical needs only
CRITICAL_NEED_COMPLETION = 0.5

# Recommendations
DEFAULT_RECOMMENDATION_COUNT = 5
GREAT_VALUE_WINDOW = 10  # ADP within this many picks after the current pick
GOOD_VALUE_WINDOW = 20

# Pacing
CPU_PICK_DELAY_SECONDS = 1.5
TIMER_TICK_SECONDS = 1.0

# League setup limits
MIN_TEAMS = 2
MAX_TEAMS = 16
MIN_ROUNDS = 1
MAX_ROUNDS = 30
MAX_DRAFTABLE_ADP = 300.0

USER_TEAM_NAME = 'Your Team'

# Fantasy scoring defaults (points per stat)
DEFAULT_SCORING_WEIGHTS = {
    'goals': 6.0,
    'assists': 4.0,
    'plus_minus': 1.0,
    'hits': 0.4,
    'blocked_shots': 1.0,
    'shots': 0.9,
    'pp_points': 2.0,
}

# API server
API_HOST = os.environ.get('PUCKDRAFT_HOST', '127.0.0.1')
API_PORT = int(os.environ.get('PUCKDRAFT_PORT', '5001'))
API_DEBUG = os.environ.get('PUCKDRAFT_DEBUG', '0') == '1'
