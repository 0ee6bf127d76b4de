"""Snake draft order generation."""
from dataclasses import dataclass, field
from typing import List, Optional
from puckdraft.models.draft import DraftPick, RosterConfig
from puckdraft.services.errors import DraftConfigError


@dataclass
class PickInfo:
    """Who is on the clock and who picks next."""
    current_pick: Optional[DraftPick]
    next_picks: List[DraftPick] = field(default_factory=list)
    is_user_turn: bool = False


class DraftOrder:
    """Builds and inspects snake draft orders."""

    @classmethod
    def generate_snake_order(
        cls,
        num_teams: int,
        num_rounds: int,
        user_draft_position: int
    ) -> List[DraftPick]:
        """
        Generate the full pick sequence for a snake draft.

        Example for 4 teams:
            Round 1: 0, 1, 2, 3
            Round 2: 3, 2, 1, 0
            Round 3: 0, 1, 2, 3

        Args:
            num_teams: Number of teams (at least 2)
            num_rounds: Number of rounds (at least 1)
            user_draft_position: The user's draft slot (1-based)

        Returns:
            DraftPicks in overall pick order, numbered from 1
        """
        if num_teams < 2:
            raise DraftConfigError(f"Snake draft needs at least 2 teams, got {num_teams}")
        if num_rounds < 1:
            raise DraftConfigError(f"Snake draft needs at least 1 round, got {num_rounds}")
        if not 1 <= user_draft_position <= num_teams:
            raise DraftConfigError(
                f"Draft position must be between 1 and {num_teams}, got {user_draft_position}"
            )

        user_team_index = user_draft_position - 1
        draft_order = []
        overall_pick = 1

        for round_number in range(1, num_rounds + 1):
            is_even_round = round_number % 2 == 0

            for pick_in_round in range(1, num_teams + 1):
                # Even rounds run in reverse
                if is_even_round:
                    team_index = num_teams - pick_in_round
                else:
                    team_index = pick_in_round - 1

                draft_order.append(DraftPick(
                    overall_pick=overall_pick,
                    round=round_number,
                    pick_in_round=pick_in_round,
                    team_index=team_index,
                    is_user_pick=team_index == user_team_index,
                ))
                overall_pick += 1

        return draft_order

    @classmethod
    def calculate_total_rounds(cls, roster_config: RosterConfig) -> int:
        """One round per roster slot."""
        return roster_config.total_slots()

    @classmethod
    def get_current_pick_info(cls, current_pick_index: int, draft_order: List[DraftPick]) -> PickInfo:
        """Get the pick on the clock plus the next three."""
        if not 0 <= current_pick_index < len(draft_order):
            return PickInfo(current_pick=None)

        current_pick = draft_order[current_pick_index]
        return PickInfo(
            current_pick=current_pick,
            next_picks=draft_order[current_pick_index + 1:current_pick_index + 4],
            is_user_turn=current_pick.is_user_pick,
        )

    @classmethod
    def picks_until_user_turn(cls, current_pick_index: int, draft_order: List[DraftPick]) -> Optional[int]:
        """
        Number of picks before the user is on the clock.

        Returns 0 when the user is on the clock now, None if the user has
        no picks left.
        """
        for offset, pick in enumerate(draft_order[max(current_pick_index, 0):]):
            if pick.is_user_pick and not pick.is_filled:
                return offset
        return None
