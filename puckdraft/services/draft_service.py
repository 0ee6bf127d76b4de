"""Draft state machine: applies actions to the draft state."""
import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional
from puckdraft.models.actions import (
    AutoPick,
    ChangeTab,
    CPUPick,
    DraftAction,
    InitializeLeague,
    MakePick,
    ResetDraft,
    StartDraft,
    StartTimer,
    StopTimer,
    TimerTick,
    UpdateTimer,
)
from puckdraft.models.draft import DraftState, DraftTab, LeagueSettings
from puckdraft.models.player import DraftPlayer
from puckdraft.services.cpu_drafter import CPUDrafter
from puckdraft.services.draft_order import DraftOrder, PickInfo
from puckdraft.services.league_setup import ensure_enough_players, validate_league_settings
from puckdraft.services.recommendation_engine import Recommendation, RecommendationEngine
from puckdraft.services.team_service import TeamService
from puckdraft.services.errors import PlayerNotAvailableError

logger = logging.getLogger(__name__)

StateListener = Callable[[DraftState], None]


def apply_action(state: DraftState, action: DraftAction, cpu_drafter: Optional[CPUDrafter] = None) -> DraftState:
    """
    Apply one action and return the resulting state.

    The input state is never mutated; rosters and draft order entries that
    change are copied, players are shared. Stale picks (no current slot, or
    the slot is already filled) return the state unchanged.
    """
    if isinstance(action, InitializeLeague):
        return _initialize_league(state, action.settings, action.players)

    if isinstance(action, StartDraft):
        first_pick = state.draft_order[0] if state.draft_order else None
        return replace(
            state,
            is_draft_started=True,
            pick_timer_remaining=_timer_duration(state),
            is_timer_active=bool(first_pick and first_pick.is_user_pick),
        )

    if isinstance(action, MakePick):
        return _make_pick(state, action.player)

    if isinstance(action, AutoPick):
        return _auto_pick(state, cpu_drafter or CPUDrafter())

    if isinstance(action, CPUPick):
        return _cpu_pick(state, cpu_drafter or CPUDrafter())

    if isinstance(action, UpdateTimer):
        return replace(state, pick_timer_remaining=action.seconds)

    if isinstance(action, TimerTick):
        return _timer_tick(state, cpu_drafter or CPUDrafter())

    if isinstance(action, StartTimer):
        return replace(state, is_timer_active=True)

    if isinstance(action, StopTimer):
        return replace(state, is_timer_active=False)

    if isinstance(action, ChangeTab):
        return replace(state, current_tab=DraftTab(action.tab))

    if isinstance(action, ResetDraft):
        return DraftState.initial()

    raise TypeError(f"Unknown draft action: {action!r}")


def _timer_duration(state: DraftState) -> int:
    return state.league_settings.draft_timer_seconds if state.league_settings else 0


def _initialize_league(state: DraftState, settings: LeagueSettings, players: List[DraftPlayer]) -> DraftState:
    num_rounds = DraftOrder.calculate_total_rounds(settings.roster_config)
    draft_order = DraftOrder.generate_snake_order(
        settings.num_teams, num_rounds, settings.user_draft_position
    )
    teams = TeamService.initialize_team_rosters(settings.num_teams, settings.user_draft_position)

    # Positions are parsed once, here
    players_with_positions = [player.with_parsed_positions() for player in players]

    logger.info(
        "Initialized %d-team league: %d rounds, %d picks, %d players",
        settings.num_teams, num_rounds, len(draft_order), len(players_with_positions)
    )
    return replace(
        state,
        league_settings=settings,
        all_players=players_with_positions,
        available_players=list(players_with_positions),
        draft_order=draft_order,
        teams=teams,
        current_pick_index=0,
        pick_timer_remaining=0,
        is_timer_active=False,
        is_draft_started=False,
        is_draft_complete=False,
        current_tab=DraftTab.AVAILABLE,
    )


def _open_pick(state: DraftState):
    """The current pick if it can still be made, else None."""
    current_pick = state.current_pick()
    if current_pick is None or current_pick.is_filled or state.league_settings is None:
        return None
    return current_pick


def _make_pick(state: DraftState, player: DraftPlayer) -> DraftState:
    current_pick = _open_pick(state)
    if current_pick is None:
        logger.debug("Ignoring pick of %s: no open slot at index %d", player.name, state.current_pick_index)
        return state

    pool_player = next((p for p in state.available_players if p.player_id == player.player_id), None)
    if pool_player is None:
        logger.debug("Ignoring pick of %s: player not available", player.name)
        return state
    player = pool_player

    roster_config = state.league_settings.roster_config

    new_draft_order = list(state.draft_order)
    new_draft_order[state.current_pick_index] = replace(
        current_pick,
        player=player,
        timestamp=datetime.now().isoformat(),
    )

    new_teams = list(state.teams)
    team = state.teams[current_pick.team_index].copy()
    team.picks.append(player)
    slot = TeamService.assign_player(player, team, roster_config)
    new_teams[current_pick.team_index] = team

    new_available = [p for p in state.available_players if p.player_id != player.player_id]

    next_pick_index = state.current_pick_index + 1
    is_draft_complete = next_pick_index >= len(state.draft_order)
    next_pick = state.draft_order[next_pick_index] if not is_draft_complete else None

    logger.info(
        "Pick %d (round %d): %s selects %s (%s) -> %s",
        current_pick.overall_pick, current_pick.round, team.team_name,
        player.name, player.position_code, slot.value
    )
    if is_draft_complete:
        logger.info("Draft complete after %d picks", len(state.draft_order))

    return replace(
        state,
        draft_order=new_draft_order,
        teams=new_teams,
        available_players=new_available,
        current_pick_index=next_pick_index,
        is_draft_complete=is_draft_complete,
        pick_timer_remaining=_timer_duration(state),
        is_timer_active=bool(next_pick and next_pick.is_user_pick),
    )


def _auto_pick(state: DraftState, cpu_drafter: CPUDrafter) -> DraftState:
    current_pick = _open_pick(state)
    if current_pick is None:
        return state

    team = state.teams[current_pick.team_index]
    player = cpu_drafter.select_auto_pick(
        state.available_players, team, state.league_settings.roster_config
    )
    if player is None:
        return state
    return _make_pick(state, player)


def _cpu_pick(state: DraftState, cpu_drafter: CPUDrafter) -> DraftState:
    current_pick = _open_pick(state)
    if current_pick is None or current_pick.is_user_pick:
        return state

    team = state.teams[current_pick.team_index]
    player = cpu_drafter.select_pick(
        state.available_players, team, state.league_settings.roster_config, current_pick.overall_pick
    )
    if player is None:
        return state
    return _make_pick(state, player)


def _timer_tick(state: DraftState, cpu_drafter: CPUDrafter) -> DraftState:
    if not state.is_timer_active or _timer_duration(state) == 0:
        return state

    remaining = state.pick_timer_remaining - 1
    if remaining > 0:
        return replace(state, pick_timer_remaining=remaining)

    logger.info("Pick timer expired at index %d, auto-picking", state.current_pick_index)
    expired = replace(state, pick_timer_remaining=0)
    picked = _auto_pick(expired, cpu_drafter)
    if picked is expired:
        # Nothing to pick; stop the clock rather than ticking below zero
        return replace(expired, is_timer_active=False)
    return picked


class DraftService:
    """
    Owns the current draft state.

    Every action goes through dispatch(), which applies it under a lock so
    picks from the user, the pick timer and CPU turns are serialized.
    """

    def __init__(
        self,
        cpu_drafter: Optional[CPUDrafter] = None,
        recommendation_engine: Optional[RecommendationEngine] = None
    ):
        self.cpu_drafter = cpu_drafter or CPUDrafter()
        self.recommendation_engine = recommendation_engine or RecommendationEngine(self.cpu_drafter)
        self._state = DraftState.initial()
        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> DraftState:
        return self._state

    def get_state(self) -> DraftState:
        with self._lock:
            return self._state

    def subscribe(self, listener: StateListener):
        """
        Call listener with the new state after every dispatched action.

        Listeners run while the lock is held, so they see states in the order
        they were produced.
        """
        with self._lock:
            self._listeners.append(listener)

    def replay(self, listener: StateListener):
        """Call listener with the current state, serialized with dispatch."""
        with self._lock:
            listener(self._state)

    def dispatch(self, action: DraftAction) -> DraftState:
        with self._lock:
            previous = self._state
            self._state = apply_action(previous, action, self.cpu_drafter)
            new_state = self._state
            if new_state is not previous:
                for listener in list(self._listeners):
                    listener(new_state)
            return new_state

    def initialize_league(self, settings: LeagueSettings, players: List[DraftPlayer]) -> DraftState:
        """
        Validate settings and player pool, then start a fresh league.

        Raises:
            DraftConfigError: invalid settings
            InsufficientPlayersError: not enough players for every roster slot
        """
        validate_league_settings(settings)
        ensure_enough_players(players, settings)
        return self.dispatch(InitializeLeague(settings=settings, players=list(players)))

    def start_draft(self) -> DraftState:
        return self.dispatch(StartDraft())

    def make_pick(self, player_id: str) -> DraftState:
        """
        Draft an available player into the current slot.

        Raises:
            PlayerNotAvailableError: the player is unknown or already drafted
        """
        with self._lock:
            if _open_pick(self._state) is None:
                return self._state
            player = self.find_available_player(player_id)
            if player is None:
                raise PlayerNotAvailableError(f"Player {player_id} is not available")
            return self.dispatch(MakePick(player=player))

    def auto_pick(self) -> DraftState:
        return self.dispatch(AutoPick())

    def process_cpu_pick(self, expected_pick_index: Optional[int] = None) -> DraftState:
        """Make the CPU pick for the current slot; dropped if the slot has moved on."""
        with self._lock:
            if expected_pick_index is not None and expected_pick_index != self._state.current_pick_index:
                logger.debug("Dropping stale CPU pick for index %d", expected_pick_index)
                return self._state
            return self.dispatch(CPUPick())

    def tick(self, expected_pick_index: Optional[int] = None) -> DraftState:
        """One second of the pick timer; dropped if the slot has moved on."""
        with self._lock:
            if expected_pick_index is not None and expected_pick_index != self._state.current_pick_index:
                return self._state
            return self.dispatch(TimerTick())

    def change_tab(self, tab) -> DraftState:
        return self.dispatch(ChangeTab(tab=DraftTab(tab)))

    def reset_draft(self) -> DraftState:
        return self.dispatch(ResetDraft())

    def find_available_player(self, player_id: str) -> Optional[DraftPlayer]:
        player_id = str(player_id)
        return next((p for p in self._state.available_players if p.player_id == player_id), None)

    def get_current_pick_info(self) -> PickInfo:
        state = self.get_state()
        return DraftOrder.get_current_pick_info(state.current_pick_index, state.draft_order)

    def get_recommendations(self, top_n: int = 5) -> List[Recommendation]:
        """Recommendations for the user at the current pick."""
        state = self.get_state()
        user_team = state.user_team()
        current_pick = state.current_pick()
        if user_team is None or current_pick is None or state.league_settings is None:
            return []
        return self.recommendation_engine.get_recommendations(
            state.available_players,
            user_team,
            state.league_settings.roster_config,
            current_pick.overall_pick,
            top_n=top_n,
        )
