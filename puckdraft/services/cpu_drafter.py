"""CPU draft logic: scores players and makes picks for computer-controlled teams."""
import logging
from dataclasses import dataclass
from typing import List, Optional
import numpy as np
from puckdraft.models.player import DraftPlayer, Position
from puckdraft.models.draft import RosterConfig, TeamRoster
from puckdraft.services import draft_config
from puckdraft.services.draft_config import CPUDraftWeights, DEFAULT_CPU_WEIGHTS
from puckdraft.services.team_service import TeamService

logger = logging.getLogger(__name__)


@dataclass
class ScoreBreakdown:
    """Raw (unweighted) signals behind a CPU score."""
    adp_score: float
    positional_score: float
    value_score: float
    random_score: float
    multiplier: float
    total: float


class CPUDrafter:
    """Chooses picks for non-human teams."""

    def __init__(
        self,
        weights: Optional[CPUDraftWeights] = None,
        rng: Optional[np.random.Generator] = None,
        goalie_delay_pick: int = draft_config.GOALIE_DELAY_PICK,
        early_premium_pick: int = draft_config.EARLY_PREMIUM_PICK,
    ):
        self.weights = weights or DEFAULT_CPU_WEIGHTS
        self.rng = rng if rng is not None else np.random.default_rng()
        self.goalie_delay_pick = goalie_delay_pick
        self.early_premium_pick = early_premium_pick

    def score_breakdown(
        self,
        player: DraftPlayer,
        roster: TeamRoster,
        roster_config: RosterConfig,
        current_pick_number: int
    ) -> ScoreBreakdown:
        """Score a player for a team at the given overall pick, keeping each signal."""
        weights = self.weights

        # 1. ADP proximity: players whose ADP is near this pick score highest
        adp_diff = abs(player.adp - current_pick_number)
        adp_score = max(
            0.0,
            draft_config.ADP_PROXIMITY_MAX - adp_diff * draft_config.ADP_PROXIMITY_PENALTY
        )

        # 2. Positional need: best single contribution, not a sum
        needs = TeamService.get_positional_needs(roster, roster_config)
        positional_score = 0.0
        for pos in player.positions:
            if needs[pos] > 0:
                positional_score = max(positional_score, needs[pos] * draft_config.PRIMARY_NEED_MULTIPLIER)
        if needs[Position.F] > 0 and player.is_forward():
            positional_score = max(
                positional_score, needs[Position.F] * draft_config.FORWARD_FLEX_NEED_MULTIPLIER
            )
        if needs[Position.UTIL] > 0:
            positional_score = max(positional_score, needs[Position.UTIL] * draft_config.UTIL_NEED_MULTIPLIER)

        # 3. Raw value: lower ADP means a better player
        value_score = max(0.0, draft_config.VALUE_CEILING - player.adp)

        # 4. Randomness so CPU teams don't draft identically
        random_score = float(self.rng.uniform(0.0, draft_config.RANDOMNESS_MAX))

        score = (
            adp_score * weights.adp_weight
            + positional_score * weights.positional_need_weight
            + value_score * weights.value_weight
            + random_score * weights.randomness_weight
        )

        multiplier = 1.0
        # Wait on goalies early once one is rostered
        if player.holds(Position.G):
            if (current_pick_number < self.goalie_delay_pick
                    and needs[Position.G] < roster_config.capacity(Position.G)):
                multiplier *= draft_config.GOALIE_PENALTY

        # Premium positions early
        if current_pick_number < self.early_premium_pick:
            if player.holds(Position.C):
                multiplier *= draft_config.CENTER_BOOST
            if player.holds(Position.D):
                multiplier *= draft_config.DEFENSE_BOOST

        return ScoreBreakdown(
            adp_score=adp_score,
            positional_score=positional_score,
            value_score=value_score,
            random_score=random_score,
            multiplier=multiplier,
            total=score * multiplier,
        )

    def score_player(
        self,
        player: DraftPlayer,
        roster: TeamRoster,
        roster_config: RosterConfig,
        current_pick_number: int
    ) -> float:
        return self.score_breakdown(player, roster, roster_config, current_pick_number).total

    def select_pick(
        self,
        available_players: List[DraftPlayer],
        roster: TeamRoster,
        roster_config: RosterConfig,
        current_pick_number: int
    ) -> Optional[DraftPlayer]:
        """
        Pick the highest-scoring player for a CPU team.

        Once more than half the roster is drafted, a team with unfilled
        starting positions only considers players who fill one of them.
        """
        if not available_players:
            return None

        candidates = self._players_with_open_slot(available_players, roster, roster_config)

        critical = TeamService.has_critical_positional_needs(roster, roster_config)
        total_slots = roster_config.total_slots()
        draft_completion = len(roster.picks) / total_slots if total_slots else 0.0

        if critical.has_needs and draft_completion > draft_config.CRITICAL_NEED_COMPLETION:
            need_based = self._players_filling(candidates, critical.critical_positions)
            # Only filter if we have options
            if need_based:
                candidates = need_based

        scored = [
            (self.score_player(player, roster, roster_config, current_pick_number), player)
            for player in candidates
        ]
        scored.sort(key=lambda item: item[0], reverse=True)

        best_score, best_player = scored[0]
        logger.debug(
            "%s selects %s (%s, ADP %.1f) at pick %d with score %.2f",
            roster.team_name, best_player.name, best_player.position_code,
            best_player.adp, current_pick_number, best_score
        )
        return best_player

    def select_auto_pick(
        self,
        available_players: List[DraftPlayer],
        roster: TeamRoster,
        roster_config: RosterConfig
    ) -> Optional[DraftPlayer]:
        """Best ADP among players filling a critical need, else best ADP overall."""
        if not available_players:
            return None

        candidates = self._players_with_open_slot(available_players, roster, roster_config)

        critical = TeamService.has_critical_positional_needs(roster, roster_config)
        if critical.has_needs:
            need_players = self._players_filling(candidates, critical.critical_positions)
            if need_players:
                return min(need_players, key=lambda p: p.adp)

        return min(candidates, key=lambda p: p.adp)

    @staticmethod
    def _players_filling(players: List[DraftPlayer], positions: List[Position]) -> List[DraftPlayer]:
        return [p for p in players if any(pos in positions for pos in p.positions)]

    @staticmethod
    def _players_with_open_slot(
        players: List[DraftPlayer],
        roster: TeamRoster,
        roster_config: RosterConfig
    ) -> List[DraftPlayer]:
        """Filter out players with no open eligible slot (all players if none fit)."""
        fits = [p for p in players if TeamService.has_available_slot_for_player(roster, p, roster_config)]
        return fits or list(players)
