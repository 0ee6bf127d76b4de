"""Draft recommendations for the user's team."""
from dataclasses import dataclass
from typing import List, Dict, Optional
from puckdraft.models.player import DraftPlayer, Position, ROSTER_POSITIONS
from puckdraft.models.draft import RosterConfig, TeamRoster
from puckdraft.services import draft_config
from puckdraft.services.cpu_drafter import CPUDrafter
from puckdraft.services.team_service import TeamService


@dataclass
class Recommendation:
    player: DraftPlayer
    score: float
    reasoning: str

    def to_dict(self) -> Dict:
        return {
            'player': self.player.to_dict(),
            'score': self.score,
            'reasoning': self.reasoning,
        }


class RecommendationEngine:
    """Ranks available players for the user with the CPU scoring model."""

    def __init__(self, cpu_drafter: Optional[CPUDrafter] = None):
        self.cpu_drafter = cpu_drafter or CPUDrafter()

    def get_recommendations(
        self,
        available_players: List[DraftPlayer],
        roster: TeamRoster,
        roster_config: RosterConfig,
        current_pick_number: int,
        top_n: int = draft_config.DEFAULT_RECOMMENDATION_COUNT
    ) -> List[Recommendation]:
        """
        Get top N draft recommendations.

        Args:
            available_players: Undrafted players
            roster: The user's roster
            roster_config: League roster configuration
            current_pick_number: Overall pick number on the clock (1-based)
            top_n: Number of recommendations to return

        Returns list of Recommendation sorted by score, highest first.
        """
        if not available_players or top_n <= 0:
            return []

        needs = TeamService.get_positional_needs(roster, roster_config)
        critical_positions = TeamService.has_critical_positional_needs(roster, roster_config).critical_positions

        recommendations = []
        for player in available_players:
            score = self.cpu_drafter.score_player(player, roster, roster_config, current_pick_number)
            reasoning = self._explain(player, needs, critical_positions, current_pick_number)
            recommendations.append(Recommendation(player=player, score=score, reasoning=reasoning))

        recommendations.sort(key=lambda rec: rec.score, reverse=True)
        return recommendations[:top_n]

    @staticmethod
    def _explain(player, needs, critical_positions, current_pick_number) -> str:
        filled_critical = [pos.value for pos in critical_positions if player.holds(pos)]
        if filled_critical:
            return f"Fills critical need: {', '.join(filled_critical)}"
        if player.adp <= current_pick_number + draft_config.GREAT_VALUE_WINDOW:
            return "Best available (great value)"
        if player.adp <= current_pick_number + draft_config.GOOD_VALUE_WINDOW:
            return "Good value at this pick"
        filled_needs = [
            pos.value for pos in ROSTER_POSITIONS
            if pos != Position.BENCH and needs[pos] > 0 and TeamService.can_fill_position(player, pos)
        ]
        if filled_needs:
            return f"Fills need: {', '.join(filled_needs)}"
        return "Best available"
