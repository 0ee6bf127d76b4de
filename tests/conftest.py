"""Pytest configuration and fixtures for tests."""
import numpy as np
import pytest
from puckdraft.models.draft import LeagueSettings, RosterConfig, TeamRoster
from puckdraft.models.player import DraftPlayer
from puckdraft.services.cpu_drafter import CPUDrafter
from puckdraft.services.draft_config import CPUDraftWeights
from puckdraft.services.draft_service import DraftService


POSITION_CYCLE = ['C', 'LW', 'RW', 'D', 'D', 'G', 'C/LW', 'LW/RW', 'C', 'D']


def _make_player(player_id, position_code='C', adp=10.0, name=None, **stats) -> DraftPlayer:
    return DraftPlayer(
        player_id=str(player_id),
        name=name or f"Player {player_id}",
        team='TST',
        position_code=position_code,
        adp=float(adp),
        **stats
    )


@pytest.fixture
def player_factory():
    """Build a DraftPlayer: player_factory('p1', 'C/LW', adp=12)."""
    return _make_player


@pytest.fixture
def player_pool():
    """120 players with mixed positions and ADP 1..120."""
    return [
        _make_player(f"p{i}", POSITION_CYCLE[i % len(POSITION_CYCLE)], adp=i + 1)
        for i in range(120)
    ]


@pytest.fixture
def small_roster_config():
    """One center and one defenseman: a 2-round draft."""
    return RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=0)


@pytest.fixture
def small_league(small_roster_config):
    return LeagueSettings(
        num_teams=4,
        user_draft_position=1,
        draft_timer_seconds=30,
        roster_config=small_roster_config,
    )


@pytest.fixture
def empty_roster():
    def _roster(team_index=0, is_user=False):
        return TeamRoster(team_index=team_index, team_name=f"Team {team_index + 1}", is_user=is_user)
    return _roster


@pytest.fixture
def deterministic_drafter():
    """CPU drafter with the randomness signal weighted to zero."""
    weights = CPUDraftWeights(
        adp_weight=0.50,
        positional_need_weight=0.30,
        value_weight=0.15,
        randomness_weight=0.0,
    )
    return CPUDrafter(weights=weights, rng=np.random.default_rng(7))


@pytest.fixture
def draft_service(deterministic_drafter):
    return DraftService(cpu_drafter=deterministic_drafter)
