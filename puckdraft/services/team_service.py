"""Roster slot assignment and positional needs for drafting teams."""
import logging
from dataclasses import dataclass, field
from typing import List, Dict
from puckdraft.models.player import (
    DraftPlayer,
    Position,
    PRIMARY_POSITIONS,
    ROSTER_POSITIONS,
)
from puckdraft.models.draft import RosterConfig, TeamRoster, empty_filled_positions
from puckdraft.services.draft_config import USER_TEAM_NAME
from puckdraft.services.errors import RosterFullError

logger = logging.getLogger(__name__)


@dataclass
class CriticalNeeds:
    """Unfilled starting (primary) positions on a roster."""
    has_needs: bool
    critical_positions: List[Position] = field(default_factory=list)


class TeamService:
    """Places drafted players into roster slots."""

    # Priority order: specific positions first, then flex, then utility, then bench
    PRIORITY_ORDER = (
        Position.C, Position.LW, Position.RW, Position.D, Position.G,
        Position.F, Position.UTIL, Position.BENCH
    )

    @staticmethod
    def can_fill_position(player: DraftPlayer, position: Position) -> bool:
        """Check if a player is eligible for a roster position, ignoring capacity."""
        if position == Position.F:
            return player.is_forward()
        if position in (Position.UTIL, Position.BENCH):
            return True
        return player.holds(position)

    @classmethod
    def get_available_positions(
        cls,
        player: DraftPlayer,
        filled_positions: Dict[Position, int],
        roster_config: RosterConfig
    ) -> List[Position]:
        """Positions the player is eligible for that still have an open slot."""
        available = []
        for pos in ROSTER_POSITIONS:
            if not cls.can_fill_position(player, pos):
                continue
            if filled_positions.get(pos, 0) < roster_config.capacity(pos):
                available.append(pos)
        return available

    @classmethod
    def has_available_slot_for_player(
        cls,
        roster: TeamRoster,
        player: DraftPlayer,
        roster_config: RosterConfig
    ) -> bool:
        return bool(cls.get_available_positions(player, roster.filled_positions, roster_config))

    @classmethod
    def assign_player(cls, player: DraftPlayer, roster: TeamRoster, roster_config: RosterConfig) -> Position:
        """
        Assign a drafted player to the most specific open slot.

        Priority: the player's own positions (C, LW, RW, D, G) > forward flex (F)
        > utility (UTIL) > bench. Mutates roster.filled_positions.

        Returns:
            The position that absorbed the pick

        Raises:
            RosterFullError: no eligible slot has capacity
        """
        available = cls.get_available_positions(player, roster.filled_positions, roster_config)

        for pos in cls.PRIORITY_ORDER:
            if pos not in available:
                continue
            # Primary slots only take players who natively hold that position
            if pos in PRIMARY_POSITIONS and not player.holds(pos):
                continue
            roster.filled_positions[pos] = roster.filled_positions.get(pos, 0) + 1
            return pos

        raise RosterFullError(
            f"No open slot on {roster.team_name} for {player.name} ({player.position_code}); "
            f"filled={cls._format_counts(roster.filled_positions)} "
            f"capacity={roster_config.to_dict()}"
        )

    @staticmethod
    def get_positional_needs(roster: TeamRoster, roster_config: RosterConfig) -> Dict[Position, int]:
        """How many more of each position the roster can take."""
        return {
            pos: max(0, roster_config.capacity(pos) - roster.filled_positions.get(pos, 0))
            for pos in ROSTER_POSITIONS
        }

    @classmethod
    def has_critical_positional_needs(cls, roster: TeamRoster, roster_config: RosterConfig) -> CriticalNeeds:
        """Critical needs are unfilled starting positions (not flex, not bench)."""
        needs = cls.get_positional_needs(roster, roster_config)
        critical_positions = [
            pos for pos in PRIMARY_POSITIONS
            if roster_config.capacity(pos) > 0 and needs[pos] > 0
        ]
        return CriticalNeeds(
            has_needs=len(critical_positions) > 0,
            critical_positions=critical_positions,
        )

    @staticmethod
    def get_roster_completion(roster: TeamRoster, roster_config: RosterConfig) -> float:
        """Percentage (0-100) of the roster that has been drafted."""
        total_spots = roster_config.total_slots()
        if total_spots <= 0:
            return 0.0
        return len(roster.picks) / total_spots * 100

    @staticmethod
    def get_slot_breakdown(roster: TeamRoster, roster_config: RosterConfig) -> Dict[str, Dict[str, int]]:
        """Filled vs. capacity per position, for roster display."""
        return {
            pos.value: {
                'filled': roster.filled_positions.get(pos, 0),
                'capacity': roster_config.capacity(pos),
            }
            for pos in ROSTER_POSITIONS
        }

    @staticmethod
    def initialize_team_rosters(num_teams: int, user_draft_position: int) -> List[TeamRoster]:
        """Create empty rosters; the user's team sits at user_draft_position."""
        teams = []
        for index in range(num_teams):
            is_user = index == user_draft_position - 1
            teams.append(TeamRoster(
                team_index=index,
                team_name=USER_TEAM_NAME if is_user else f"Team {index + 1}",
                is_user=is_user,
                picks=[],
                filled_positions=empty_filled_positions(),
            ))
        logger.debug("Initialized %d team rosters (user at slot %d)", num_teams, user_draft_position)
        return teams

    @staticmethod
    def _format_counts(counts: Dict[Position, int]) -> Dict[str, int]:
        return {pos.value: count for pos, count in counts.items()}
