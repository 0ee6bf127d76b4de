"""Player data model for the mock draft."""
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Optional, Dict, Tuple


class Position(str, Enum):
    """Roster position codes."""
    C = 'C'
    LW = 'LW'
    RW = 'RW'
    D = 'D'
    G = 'G'
    F = 'F'        # Forward flex (C, LW or RW)
    UTIL = 'UTIL'  # Any skater
    BENCH = 'BENCH'


PRIMARY_POSITIONS: Tuple[Position, ...] = (
    Position.C, Position.LW, Position.RW, Position.D, Position.G
)
FORWARD_POSITIONS: Tuple[Position, ...] = (Position.C, Position.LW, Position.RW)
ROSTER_POSITIONS: Tuple[Position, ...] = tuple(Position)


def parse_positions(position_code: str) -> Tuple[Position, ...]:
    """
    Parse a position-eligibility string into primary positions.
    "C/LW" -> (Position.C, Position.LW)

    Tokens that are not primary positions are dropped.
    """
    if not position_code:
        return ()
    positions = []
    for token in position_code.split('/'):
        token = token.strip().upper()
        if token in Position.__members__ and Position(token) in PRIMARY_POSITIONS:
            pos = Position(token)
            if pos not in positions:
                positions.append(pos)
    return tuple(positions)


# Provider keys (camelCase) -> DraftPlayer fields
PROVIDER_FIELD_MAP: Dict[str, str] = {
    'playerId': 'player_id',
    'skaterFullName': 'name',
    'teamAbbrevs': 'team',
    'positionCode': 'position_code',
    'espnADP': 'adp',
    'espnPercentOwned': 'percent_owned',
    'espnTotalRanking': 'total_ranking',
    'espnPositionalRanking': 'positional_ranking',
    'gamesPlayed': 'games_played',
    'plusMinus': 'plus_minus',
    'blockedShots': 'blocked_shots',
    'ppPoints': 'pp_points',
    'shPoints': 'sh_points',
    'fantasyPoints': 'fantasy_points',
    'fantasyPointsPerGame': 'fantasy_points_per_game',
}


@dataclass(frozen=True)
class DraftPlayer:
    """A draftable skater. Immutable once the player pool is loaded."""
    player_id: str
    name: str
    team: str
    position_code: str  # e.g. "C/LW"
    positions: Tuple[Position, ...] = ()
    adp: float = 0.0  # Average draft position

    # Ownership / ranking
    percent_owned: Optional[float] = None
    total_ranking: Optional[int] = None
    positional_ranking: Optional[int] = None

    # Box score
    games_played: Optional[int] = None
    goals: Optional[int] = None
    assists: Optional[int] = None
    points: Optional[int] = None
    plus_minus: Optional[int] = None
    shots: Optional[int] = None
    hits: Optional[int] = None
    blocked_shots: Optional[int] = None
    pp_points: Optional[int] = None
    sh_points: Optional[int] = None

    # Derived by the fantasy scoring model
    fantasy_points: Optional[float] = None
    fantasy_points_per_game: Optional[float] = None

    def __post_init__(self):
        if not self.positions and self.position_code:
            object.__setattr__(self, 'positions', parse_positions(self.position_code))

    def holds(self, position: Position) -> bool:
        return position in self.positions

    def is_forward(self) -> bool:
        return any(pos in FORWARD_POSITIONS for pos in self.positions)

    def with_parsed_positions(self) -> 'DraftPlayer':
        """Return a copy whose positions are re-parsed from position_code."""
        return replace(self, positions=parse_positions(self.position_code))

    def to_dict(self) -> Dict:
        """Convert player to dictionary."""
        data = asdict(self)
        data['positions'] = [pos.value for pos in self.positions]
        return data

    @staticmethod
    def field_name_for(key: str) -> str:
        """Map a provider key to the DraftPlayer field name."""
        return PROVIDER_FIELD_MAP.get(key, key)

    @classmethod
    def from_record(cls, record: Dict) -> 'DraftPlayer':
        """
        Create a player from a stats provider record.

        Accepts both provider camelCase keys (playerId, espnADP, ...) and
        the snake_case field names used by to_dict().
        """
        normalized = {}
        for key, value in record.items():
            field_name = cls.field_name_for(key)
            if field_name in cls.__dataclass_fields__:
                normalized[field_name] = value

        normalized['player_id'] = str(normalized.get('player_id') or '').strip()
        normalized['name'] = normalized.get('name') or ''
        normalized['team'] = normalized.get('team') or ''
        normalized['position_code'] = (normalized.get('position_code') or '').strip()
        normalized['adp'] = float(normalized.get('adp') or 0.0)
        # positions are always derived from the raw eligibility string
        normalized['positions'] = parse_positions(normalized['position_code'])
        return cls(**normalized)
