"""Draft state, league settings and team rosters."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional
from puckdraft.models.player import DraftPlayer, Position, ROSTER_POSITIONS


class DraftTab(str, Enum):
    """Which panel of the draft room is showing."""
    AVAILABLE = 'available'
    MY_TEAM = 'my-team'
    DRAFT_BOARD = 'draft-board'


@dataclass(frozen=True)
class RosterConfig:
    """Number of roster slots of each position type."""
    C: int = 2
    LW: int = 2
    RW: int = 2
    D: int = 4
    G: int = 2
    F: int = 1     # Forward flex spots
    UTIL: int = 1  # Utility spots
    BENCH: int = 5

    def capacity(self, position: Position) -> int:
        return getattr(self, Position(position).value)

    def total_slots(self) -> int:
        """Total roster size, which is also the number of draft rounds."""
        return sum(self.capacity(pos) for pos in ROSTER_POSITIONS)

    def to_dict(self) -> Dict[str, int]:
        return {pos.value: self.capacity(pos) for pos in ROSTER_POSITIONS}

    @classmethod
    def from_dict(cls, data: Dict) -> 'RosterConfig':
        """Create a roster config; missing positions default to 0."""
        return cls(**{pos.value: int(data.get(pos.value, 0)) for pos in ROSTER_POSITIONS})


@dataclass(frozen=True)
class LeagueSettings:
    """League settings chosen at draft setup."""
    num_teams: int = 12
    user_draft_position: int = 6  # 1-based
    draft_timer_seconds: int = 60  # 0 = unlimited
    roster_config: RosterConfig = field(default_factory=RosterConfig)
    draft_format: str = 'snake'

    def to_dict(self) -> Dict:
        return {
            'num_teams': self.num_teams,
            'user_draft_position': self.user_draft_position,
            'draft_timer_seconds': self.draft_timer_seconds,
            'roster_config': self.roster_config.to_dict(),
            'draft_format': self.draft_format,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'LeagueSettings':
        roster_data = data.get('roster_config')
        return cls(
            num_teams=int(data.get('num_teams', 12)),
            user_draft_position=int(data.get('user_draft_position', 6)),
            draft_timer_seconds=int(data.get('draft_timer_seconds', 60)),
            roster_config=RosterConfig.from_dict(roster_data) if roster_data else RosterConfig(),
            draft_format=data.get('draft_format', 'snake'),
        )


def empty_filled_positions() -> Dict[Position, int]:
    return {pos: 0 for pos in ROSTER_POSITIONS}


@dataclass
class TeamRoster:
    """A drafting team and the slots it has filled."""
    team_index: int  # 0-based
    team_name: str
    is_user: bool
    picks: List[DraftPlayer] = field(default_factory=list)
    filled_positions: Dict[Position, int] = field(default_factory=empty_filled_positions)

    def copy(self) -> 'TeamRoster':
        """Copy the roster; players are shared, not cloned."""
        return TeamRoster(
            team_index=self.team_index,
            team_name=self.team_name,
            is_user=self.is_user,
            picks=list(self.picks),
            filled_positions=dict(self.filled_positions),
        )

    def to_dict(self) -> Dict:
        return {
            'team_index': self.team_index,
            'team_name': self.team_name,
            'is_user': self.is_user,
            'picks': [player.to_dict() for player in self.picks],
            'filled_positions': {pos.value: count for pos, count in self.filled_positions.items()},
        }


@dataclass
class DraftPick:
    """A single slot in the draft order."""
    overall_pick: int  # 1-based
    round: int  # 1-based
    pick_in_round: int  # 1-based
    team_index: int  # 0-based
    player: Optional[DraftPlayer] = None  # None until picked
    timestamp: Optional[str] = None
    is_user_pick: bool = False

    @property
    def is_filled(self) -> bool:
        return self.player is not None

    def to_dict(self) -> Dict:
        return {
            'overall_pick': self.overall_pick,
            'round': self.round,
            'pick_in_round': self.pick_in_round,
            'team_index': self.team_index,
            'player': self.player.to_dict() if self.player else None,
            'timestamp': self.timestamp,
            'is_user_pick': self.is_user_pick,
        }


@dataclass
class DraftState:
    """Single source of truth for a draft session."""
    league_settings: Optional[LeagueSettings] = None

    # Player pool
    all_players: List[DraftPlayer] = field(default_factory=list)
    available_players: List[DraftPlayer] = field(default_factory=list)

    # Draft progress
    draft_order: List[DraftPick] = field(default_factory=list)
    current_pick_index: int = 0  # 0-based index into draft_order

    teams: List[TeamRoster] = field(default_factory=list)

    # Timer
    pick_timer_remaining: int = 0  # seconds
    is_timer_active: bool = False

    current_tab: DraftTab = DraftTab.AVAILABLE
    is_draft_started: bool = False
    is_draft_complete: bool = False

    @classmethod
    def initial(cls) -> 'DraftState':
        """The empty state before any league is initialized."""
        return cls()

    def current_pick(self) -> Optional[DraftPick]:
        if 0 <= self.current_pick_index < len(self.draft_order):
            return self.draft_order[self.current_pick_index]
        return None

    def user_team(self) -> Optional[TeamRoster]:
        return next((team for team in self.teams if team.is_user), None)

    def get_drafted_players(self) -> List[DraftPlayer]:
        return [pick.player for pick in self.draft_order if pick.player is not None]

    def to_dict(self) -> Dict:
        """Read-only snapshot for the presentation layer."""
        current = self.current_pick()
        return {
            'league_settings': self.league_settings.to_dict() if self.league_settings else None,
            'total_players': len(self.all_players),
            'available_players': [player.to_dict() for player in self.available_players],
            'draft_order': [pick.to_dict() for pick in self.draft_order],
            'current_pick_index': self.current_pick_index,
            'current_pick': current.to_dict() if current else None,
            'teams': [team.to_dict() for team in self.teams],
            'pick_timer_remaining': self.pick_timer_remaining,
            'is_timer_active': self.is_timer_active,
            'current_tab': self.current_tab.value,
            'is_draft_started': self.is_draft_started,
            'is_draft_complete': self.is_draft_complete,
        }
