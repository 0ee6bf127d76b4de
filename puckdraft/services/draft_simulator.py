"""Headless draft simulation: every team, including the user's, picked by the engine."""
import logging
from typing import Dict, List, Optional
from puckdraft.models.actions import AutoPick, CPUPick, MakePick, StartDraft
from puckdraft.models.draft import DraftState, LeagueSettings
from puckdraft.models.player import DraftPlayer
from puckdraft.services.cpu_drafter import CPUDrafter
from puckdraft.services.draft_service import DraftService

logger = logging.getLogger(__name__)


class DraftSimulator:
    """Runs complete drafts without the pick timer or CPU pacing."""

    STRATEGIES = ('adp', 'cpu')

    def __init__(self, cpu_drafter: Optional[CPUDrafter] = None):
        self.cpu_drafter = cpu_drafter or CPUDrafter()

    def simulate_draft(
        self,
        settings: LeagueSettings,
        players: List[DraftPlayer],
        user_strategy: str = "adp"
    ) -> DraftState:
        """
        Simulate a complete draft.

        Args:
            settings: League settings
            players: Draftable player pool
            user_strategy: "adp" (auto-pick, as on timer expiry) or "cpu"
                (the user's team drafts like a CPU team)

        Returns:
            The final draft state
        """
        if user_strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown strategy: {user_strategy}")

        service = DraftService(cpu_drafter=self.cpu_drafter)
        service.initialize_league(settings, players)
        state = service.dispatch(StartDraft())

        while not state.is_draft_complete:
            current_pick = state.current_pick()
            if current_pick.is_user_pick:
                next_state = self._user_pick(service, user_strategy)
            else:
                next_state = service.dispatch(CPUPick())

            if next_state is state:
                logger.warning("Simulation stalled at pick %d", current_pick.overall_pick)
                break
            state = next_state

        return state

    def _user_pick(self, service: DraftService, strategy: str) -> DraftState:
        if strategy == "adp":
            return service.dispatch(AutoPick())

        state = service.get_state()
        current_pick = state.current_pick()
        player = self.cpu_drafter.select_pick(
            state.available_players,
            state.teams[current_pick.team_index],
            state.league_settings.roster_config,
            current_pick.overall_pick,
        )
        if player is None:
            return state
        return service.dispatch(MakePick(player=player))

    @staticmethod
    def summarize(state: DraftState) -> List[Dict]:
        """Pick history rows: pick number, round, team, player, position."""
        history = []
        for pick in state.draft_order:
            if pick.player is None:
                continue
            history.append({
                'pick_number': pick.overall_pick,
                'round': pick.round,
                'team_name': state.teams[pick.team_index].team_name,
                'player_id': pick.player.player_id,
                'player_name': pick.player.name,
                'position': pick.player.position_code,
                'adp': pick.player.adp,
            })
        return history
