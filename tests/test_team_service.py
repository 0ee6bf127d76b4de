"""
Tests for roster slot assignment.

Players fill their own positions first, then forward flex, utility and bench.
"""

import pytest
from puckdraft.models.draft import RosterConfig
from puckdraft.models.player import Position
from puckdraft.services.errors import RosterFullError
from puckdraft.services.team_service import TeamService


class TestEligibility:
    """Test suite for position eligibility."""

    def test_primary_positions_need_membership(self, player_factory):
        winger = player_factory('w', 'LW/RW')

        assert TeamService.can_fill_position(winger, Position.LW)
        assert TeamService.can_fill_position(winger, Position.RW)
        assert not TeamService.can_fill_position(winger, Position.C)
        assert not TeamService.can_fill_position(winger, Position.D)

    def test_forward_flex_takes_forwards_only(self, player_factory):
        assert TeamService.can_fill_position(player_factory('c', 'C'), Position.F)
        assert not TeamService.can_fill_position(player_factory('d', 'D'), Position.F)
        assert not TeamService.can_fill_position(player_factory('g', 'G'), Position.F)

    def test_util_and_bench_take_anyone(self, player_factory):
        defenseman = player_factory('d', 'D')

        assert TeamService.can_fill_position(defenseman, Position.UTIL)
        assert TeamService.can_fill_position(defenseman, Position.BENCH)

    def test_available_positions_respect_capacity(self, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=1, RW=0, D=0, G=0, F=1, UTIL=0, BENCH=1)
        roster = empty_roster()
        roster.filled_positions[Position.C] = 1
        player = player_factory('x', 'C/LW')

        available = TeamService.get_available_positions(player, roster.filled_positions, config)
        assert available == [Position.LW, Position.F, Position.BENCH]


class TestAssignPlayer:
    """Test suite for TeamService.assign_player."""

    def test_center_goes_to_center(self, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=2, RW=2, D=2, G=1, F=3, UTIL=3, BENCH=3)
        roster = empty_roster()

        slot = TeamService.assign_player(player_factory('c', 'C'), roster, config)

        assert slot == Position.C
        assert roster.filled_positions[Position.C] == 1
        assert sum(roster.filled_positions.values()) == 1

    def test_multi_position_player_falls_to_second_position(self, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=1, RW=0, D=0, G=0, F=1, UTIL=1, BENCH=1)
        roster = empty_roster()
        roster.filled_positions[Position.C] = 1

        slot = TeamService.assign_player(player_factory('x', 'C/LW'), roster, config)

        assert slot == Position.LW

    def test_forward_goes_to_flex_when_primaries_full(self, player_factory, empty_roster):
        config = RosterConfig(C=0, LW=0, RW=1, D=0, G=0, F=1, UTIL=1, BENCH=1)
        roster = empty_roster()
        roster.filled_positions[Position.RW] = 1

        slot = TeamService.assign_player(player_factory('r', 'RW'), roster, config)

        assert slot == Position.F

    def test_defenseman_skips_flex_for_util(self, player_factory, empty_roster):
        config = RosterConfig(C=0, LW=0, RW=0, D=1, G=0, F=1, UTIL=1, BENCH=1)
        roster = empty_roster()
        roster.filled_positions[Position.D] = 1

        slot = TeamService.assign_player(player_factory('d', 'D'), roster, config)

        assert slot == Position.UTIL

    def test_bench_is_last_resort(self, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=0, G=0, F=1, UTIL=1, BENCH=1)
        roster = empty_roster()
        roster.filled_positions.update({Position.C: 1, Position.F: 1, Position.UTIL: 1})

        slot = TeamService.assign_player(player_factory('c', 'C'), roster, config)

        assert slot == Position.BENCH

    def test_full_roster_raises(self, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=0)
        roster = empty_roster()
        roster.filled_positions[Position.C] = 1

        with pytest.raises(RosterFullError):
            TeamService.assign_player(player_factory('c', 'C'), roster, config)
        assert roster.filled_positions[Position.C] == 1

    def test_total_filled_equals_assignments(self, player_factory, empty_roster):
        config = RosterConfig()
        roster = empty_roster()
        positions = ['C', 'C', 'C', 'LW', 'RW', 'D', 'D', 'G', 'LW/RW', 'D', 'G', 'C/RW']

        for i, code in enumerate(positions):
            TeamService.assign_player(player_factory(f"p{i}", code), roster, config)
            for pos in Position:
                assert roster.filled_positions[pos] <= config.capacity(pos)

        assert sum(roster.filled_positions.values()) == len(positions)
        # Third center overflows to forward flex
        assert roster.filled_positions[Position.C] == 2
        assert roster.filled_positions[Position.F] == 1


class TestPositionalNeeds:
    """Test suite for needs and critical needs."""

    def test_needs_never_negative(self, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=0)
        roster = empty_roster()
        roster.filled_positions[Position.C] = 1

        needs = TeamService.get_positional_needs(roster, config)
        assert needs[Position.C] == 0
        assert needs[Position.D] == 1
        assert all(value >= 0 for value in needs.values())

    def test_critical_needs_only_primary_positions(self, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=2, UTIL=1, BENCH=3)
        roster = empty_roster()

        critical = TeamService.has_critical_positional_needs(roster, config)
        assert critical.has_needs is True
        assert critical.critical_positions == [Position.C, Position.D]

    def test_no_critical_needs_when_primaries_filled(self, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=2, UTIL=1, BENCH=3)
        roster = empty_roster()
        roster.filled_positions.update({Position.C: 1, Position.D: 1})

        critical = TeamService.has_critical_positional_needs(roster, config)
        assert critical.has_needs is False
        assert critical.critical_positions == []

    def test_zero_capacity_is_never_critical(self, empty_roster):
        config = RosterConfig(C=0, LW=0, RW=0, D=0, G=0, F=1, UTIL=0, BENCH=0)

        assert TeamService.has_critical_positional_needs(empty_roster(), config).has_needs is False

    def test_roster_completion(self, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=2)
        roster = empty_roster()
        roster.picks.append(player_factory('c', 'C'))

        assert TeamService.get_roster_completion(roster, config) == pytest.approx(25.0)

    def test_slot_breakdown(self, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=0)
        roster = empty_roster()
        roster.filled_positions[Position.D] = 1

        breakdown = TeamService.get_slot_breakdown(roster, config)
        assert breakdown['D'] == {'filled': 1, 'capacity': 1}
        assert breakdown['C'] == {'filled': 0, 'capacity': 1}


class TestInitializeRosters:

    def test_user_team_named_and_flagged(self):
        teams = TeamService.initialize_team_rosters(4, 3)

        assert [t.team_name for t in teams] == ['Team 1', 'Team 2', 'Your Team', 'Team 4']
        assert [t.is_user for t in teams] == [False, False, True, False]
        assert all(sum(t.filled_positions.values()) == 0 and t.picks == [] for t in teams)
