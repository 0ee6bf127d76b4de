"""
Tests for CPU draft scoring and selection.

Scores are only asserted exactly with the randomness weight set to zero.
"""

import numpy as np
import pytest
from puckdraft.models.draft import RosterConfig
from puckdraft.models.player import Position
from puckdraft.services.cpu_drafter import CPUDrafter
from puckdraft.services.team_service import TeamService


class TestScorePlayer:
    """Test suite for CPUDrafter.score_player."""

    def test_center_at_adp_early(self, deterministic_drafter, player_factory, empty_roster, small_roster_config):
        player = player_factory('c', 'C', adp=10)

        # adp 100*.5 + need 20*.3 + value 190*.15 = 84.5, then center boost
        score = deterministic_drafter.score_player(player, empty_roster(), small_roster_config, 10)
        assert score == pytest.approx(84.5 * 1.1)

    def test_breakdown_components(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=0, LW=2, RW=0, D=0, G=0, F=1, UTIL=1, BENCH=0)
        player = player_factory('lw', 'LW', adp=40)

        breakdown = deterministic_drafter.score_breakdown(player, empty_roster(), config, 30)
        assert breakdown.adp_score == pytest.approx(80.0)
        assert breakdown.positional_score == pytest.approx(40.0)
        assert breakdown.value_score == pytest.approx(160.0)
        assert breakdown.multiplier == pytest.approx(1.0)

    def test_positional_need_is_max_not_sum(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=1, RW=0, D=0, G=0, F=3, UTIL=2, BENCH=0)
        player = player_factory('x', 'C/LW', adp=100)

        breakdown = deterministic_drafter.score_breakdown(player, empty_roster(), config, 100)
        # primary 1*20, flex 3*15, util 2*5 -> max is 45
        assert breakdown.positional_score == pytest.approx(45.0)

    def test_adp_proximity_floors_at_zero(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=0, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=0)
        player = player_factory('d', 'D', adp=250)

        breakdown = deterministic_drafter.score_breakdown(player, empty_roster(), config, 100)
        assert breakdown.adp_score == 0
        assert breakdown.value_score == 0

    def test_goalie_penalized_early_once_one_is_rostered(
        self, deterministic_drafter, player_factory, empty_roster
    ):
        config = RosterConfig(C=0, LW=0, RW=0, D=0, G=2, F=0, UTIL=0, BENCH=0)
        goalie = player_factory('g', 'G', adp=10)
        roster = empty_roster()

        no_goalie_yet = deterministic_drafter.score_player(goalie, roster, config, 10)
        assert no_goalie_yet == pytest.approx(50 + 40 * 0.3 + 190 * 0.15)

        roster.filled_positions[Position.G] = 1
        one_goalie = deterministic_drafter.score_player(goalie, roster, config, 10)
        assert one_goalie == pytest.approx((50 + 20 * 0.3 + 190 * 0.15) * 0.4)

    def test_goalie_penalty_lifts_at_threshold(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=0, LW=0, RW=0, D=0, G=2, F=0, UTIL=0, BENCH=0)
        roster = empty_roster()
        roster.filled_positions[Position.G] = 1

        breakdown = deterministic_drafter.score_breakdown(player_factory('g', 'G', adp=50), roster, config, 50)
        assert breakdown.multiplier == pytest.approx(1.0)

    def test_premium_positions_boosted_before_pick_30(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig()
        roster = empty_roster()

        assert deterministic_drafter.score_breakdown(
            player_factory('d', 'D', adp=20), roster, config, 29).multiplier == pytest.approx(1.05)
        assert deterministic_drafter.score_breakdown(
            player_factory('cd', 'C/D', adp=20), roster, config, 29).multiplier == pytest.approx(1.1 * 1.05)
        assert deterministic_drafter.score_breakdown(
            player_factory('c', 'C', adp=20), roster, config, 30).multiplier == pytest.approx(1.0)

    def test_thresholds_are_configurable(self, player_factory, empty_roster):
        weights = CPUDrafter().weights
        drafter = CPUDrafter(weights=weights, early_premium_pick=5, goalie_delay_pick=5)

        breakdown = drafter.score_breakdown(player_factory('c', 'C', adp=10), empty_roster(), RosterConfig(), 10)
        assert breakdown.multiplier == pytest.approx(1.0)

    def test_randomness_is_bounded_and_seedable(self, player_factory, empty_roster):
        config = RosterConfig()
        player = player_factory('lw', 'LW', adp=20)

        first = CPUDrafter(rng=np.random.default_rng(42))
        second = CPUDrafter(rng=np.random.default_rng(42))
        scores_a = [first.score_breakdown(player, empty_roster(), config, 20) for _ in range(20)]
        scores_b = [second.score_breakdown(player, empty_roster(), config, 20) for _ in range(20)]

        assert [s.total for s in scores_a] == [s.total for s in scores_b]
        assert all(0 <= s.random_score < 100 for s in scores_a)


class TestSelectPick:
    """Test suite for CPUDrafter.select_pick."""

    def test_empty_pool(self, deterministic_drafter, empty_roster, small_roster_config):
        assert deterministic_drafter.select_pick([], empty_roster(), small_roster_config, 1) is None

    def test_never_picks_player_without_open_slot(
        self, deterministic_drafter, player_factory, empty_roster, small_roster_config
    ):
        roster = empty_roster()
        roster.filled_positions[Position.C] = 1
        roster.picks.append(player_factory('c0', 'C'))
        pool = [player_factory('c1', 'C', adp=1), player_factory('d1', 'D', adp=80)]

        choice = deterministic_drafter.select_pick(pool, roster, small_roster_config, 5)
        assert choice.player_id == 'd1'

    def test_restricts_to_critical_needs_late(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=3)
        roster = empty_roster()
        roster.filled_positions.update({Position.C: 1, Position.BENCH: 2})
        roster.picks.extend(player_factory(f"r{i}", 'C') for i in range(3))
        pool = [player_factory('c1', 'C', adp=1), player_factory('d1', 'D', adp=80)]

        choice = deterministic_drafter.select_pick(pool, roster, config, 20)
        assert choice.player_id == 'd1'

    def test_no_restriction_before_half_of_roster(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=3)
        roster = empty_roster()
        roster.filled_positions.update({Position.C: 1, Position.BENCH: 1})
        roster.picks.extend(player_factory(f"r{i}", 'C') for i in range(2))
        pool = [player_factory('c1', 'C', adp=1), player_factory('d1', 'D', adp=80)]

        choice = deterministic_drafter.select_pick(pool, roster, config, 20)
        assert choice.player_id == 'c1'

    def test_highest_score_wins(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig()
        pool = [player_factory('late', 'LW', adp=90), player_factory('ontime', 'LW', adp=12)]

        choice = deterministic_drafter.select_pick(pool, empty_roster(), config, 12)
        assert choice.player_id == 'ontime'


class TestSelectAutoPick:
    """Test suite for CPUDrafter.select_auto_pick."""

    def test_empty_pool(self, deterministic_drafter, empty_roster, small_roster_config):
        assert deterministic_drafter.select_auto_pick([], empty_roster(), small_roster_config) is None

    def test_lowest_adp_among_critical_needs(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=1)
        pool = [
            player_factory('lw', 'LW', adp=1),
            player_factory('d', 'D', adp=5),
            player_factory('c', 'C', adp=3),
        ]

        choice = deterministic_drafter.select_auto_pick(pool, empty_roster(), config)
        assert choice.player_id == 'c'

    def test_lowest_adp_overall_without_needs(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=1)
        roster = empty_roster()
        roster.filled_positions.update({Position.C: 1, Position.D: 1})
        pool = [player_factory('c', 'C', adp=3), player_factory('lw', 'LW', adp=1)]

        choice = deterministic_drafter.select_auto_pick(pool, roster, config)
        assert choice.player_id == 'lw'

    def test_auto_pick_is_always_assignable(self, deterministic_drafter, player_factory, empty_roster):
        config = RosterConfig(C=1, LW=0, RW=0, D=1, G=0, F=0, UTIL=0, BENCH=0)
        roster = empty_roster()
        roster.filled_positions[Position.C] = 1
        pool = [player_factory('c', 'C', adp=1), player_factory('d', 'D', adp=40)]

        choice = deterministic_drafter.select_auto_pick(pool, roster, config)
        assert TeamService.has_available_slot_for_player(roster, choice, config)
