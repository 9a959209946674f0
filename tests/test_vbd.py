"""Tests for Value-Based Drafting (VBD) calculations"""
import pytest

from src.core.models import Player, Position, LeagueSettings
from src.core.vbd import (
    VBDCalculator, calculate_vbd, position_ranks_from_adp, fallback_rank, scoring_multiplier
)
from src.core.schedule import ScheduleAdjustment
from config import POSITION_FLOORS


class TestVBDCalculator:
    """Test VBD calculator functionality"""

    @pytest.fixture
    def league_settings(self):
        """12-team half PPR with 2 WR and 2 flex"""
        return {
            "teams": 12,
            "scoring": "HALF_PPR",
            "roster": {
                "QB": 1,
                "RB": 2,
                "WR": 2,
                "TE": 1,
                "FLEX": 2,
                "K": 1,
                "DST": 1,
                "BENCH": 6
            }
        }

    @pytest.fixture
    def calculator(self, league_settings):
        return VBDCalculator(league_settings)

    def test_settings_from_dict(self, calculator):
        assert calculator.settings.teams == 12
        assert calculator.settings.scoring == "HALF_PPR"
        assert calculator.settings.flex.count == 2

    def test_vbd_never_negative(self, calculator, pool):
        for player in pool:
            assert calculator.calculate_vbd(player, pool) >= 0

    def test_adjusted_points_respect_floor(self, calculator, pool):
        schedule = {"QB": 1, "RB": 1, "WR": 1, "TE": 1}
        for player in pool:
            if player.position in (Position.K, Position.DST):
                continue
            breakdown = calculator.calculate_breakdown(player, pool, schedule)
            assert breakdown.adjusted_points >= POSITION_FLOORS[player.position.value]

    def test_deep_player_has_zero_vbd(self, calculator, pool):
        deep_rb = next(p for p in pool if p.player_id == "rb40")
        assert calculator.calculate_vbd(deep_rb, pool) == 0.0

    def test_kicker_and_defense_valued_at_zero(self, calculator, pool):
        for player in pool:
            if player.position in (Position.K, Position.DST):
                breakdown = calculator.calculate_breakdown(player, pool)
                assert breakdown.vbd == 0.0
                assert breakdown.position_rank == 0

    def test_breakdown_components(self, calculator, pool):
        wr1 = next(p for p in pool if p.player_id == "wr1")
        breakdown = calculator.calculate_breakdown(wr1, pool)

        assert breakdown.position_rank == 1
        assert breakdown.scoring_multiplier == pytest.approx(0.92)
        assert breakdown.raw_points == pytest.approx(286.0 * 0.92)
        assert breakdown.sos_multiplier == 1.0
        assert breakdown.replacement_rank == 34
        assert breakdown.replacement_points == pytest.approx(151.5 * 0.92)
        assert breakdown.vbd == pytest.approx(breakdown.adjusted_points - breakdown.replacement_points)

    def test_elite_wr_beats_late_rb_with_projections(self, calculator):
        """WR at ADP 9.1 outvalues an RB at ADP 65"""
        wr = Player(player_id="wr1", name="Elite Receiver", position=Position.WR,
                    adp=9.1, projected_points=280)
        rb = Player(player_id="rb22", name="Late Back", position=Position.RB,
                    adp=65.0, projected_points=180)
        pool = [wr, rb]

        assert calculator.calculate_vbd(wr, pool) > calculator.calculate_vbd(rb, pool)

    def test_elite_wr_beats_late_rb_from_curves(self, calculator):
        """Same guard when ranks come from a full pool: WR1 against RB22"""
        pool = [
            Player(player_id=f"rb{i}", name=f"Back {i}", position=Position.RB, adp=float(i * 3))
            for i in range(1, 22)
        ]
        wr = Player(player_id="wr1", name="Elite Receiver", position=Position.WR, adp=9.1)
        rb = Player(player_id="rb22", name="Late Back", position=Position.RB, adp=65.0)
        pool += [wr, rb]

        rb_breakdown = calculator.calculate_breakdown(rb, pool)
        wr_breakdown = calculator.calculate_breakdown(wr, pool)

        assert rb_breakdown.position_rank == 22
        assert wr_breakdown.position_rank == 1
        assert wr_breakdown.vbd > rb_breakdown.vbd

    def test_projection_overrides_curve(self, calculator, pool):
        player = Player(player_id="wr1", name="Projected", position=Position.WR,
                        adp=2.0, projected_points=280)
        breakdown = calculator.calculate_breakdown(player, pool)

        assert breakdown.raw_points == 280

    def test_fallback_rank_for_unknown_player(self, calculator, pool):
        outsider = Player(player_id="new", name="Outsider", position=Position.RB, adp=45.0)
        breakdown = calculator.calculate_breakdown(outsider, pool)

        assert breakdown.position_rank == 5

    def test_schedule_changes_value(self, calculator, pool):
        rb1 = next(p for p in pool if p.player_id == "rb1")
        neutral = calculator.calculate_vbd(rb1, pool)
        easy = calculator.calculate_vbd(rb1, pool, {"RB": 30})
        hard = calculator.calculate_vbd(rb1, pool, {"RB": 3})

        assert hard < neutral < easy

    def test_observer_sees_every_valuation(self, league_settings, pool):
        seen = []
        calculator = VBDCalculator(league_settings, observer=lambda p, b: seen.append((p.player_id, b.vbd)))
        calculator.value_pool(pool)

        assert len(seen) == len(pool)

    def test_value_pool_sorted(self, calculator, pool):
        entries = calculator.value_pool(pool)

        assert len(entries) == len(pool)
        for current, following in zip(entries, entries[1:]):
            assert (current.vbd, -current.adp) >= (following.vbd, -following.adp)

    def test_partial_settings_get_defaults(self, pool):
        """An empty or partial settings dict still produces values"""
        for settings in (None, {}, {"teams": 10}, {"roster": {}}):
            calculator = VBDCalculator(settings)
            assert calculator.calculate_vbd(pool[0], pool) >= 0

    def test_accepts_league_settings(self, pool):
        calculator = VBDCalculator(LeagueSettings(teams=10))
        assert calculator.settings.teams == 10

    def test_custom_schedule_adjustment(self, league_settings, pool):
        flat = VBDCalculator(league_settings, schedule_adjustment=ScheduleAdjustment(sensitivity=0.0))
        rb1 = next(p for p in pool if p.player_id == "rb1")

        assert flat.calculate_vbd(rb1, pool, {"RB": 3}) == flat.calculate_vbd(rb1, pool)

    def test_module_level_calculate_vbd(self, league_settings, pool):
        calculator = VBDCalculator(league_settings)
        assert calculate_vbd(pool[0], pool, league_settings=league_settings) == \
            calculator.calculate_vbd(pool[0], pool)


class TestRankHelpers:
    """Test rank and multiplier helpers"""

    def test_position_ranks_from_adp(self):
        players = [
            Player(player_id="b", name="B", position=Position.RB, adp=12.0),
            Player(player_id="a", name="A", position=Position.RB, adp=3.0),
            Player(player_id="c", name="C", position=Position.WR, adp=1.0),
            Player(player_id="k", name="K", position=Position.K, adp=140.0),
        ]
        ranks = position_ranks_from_adp(players)

        assert ranks == {"a": 1, "b": 2, "c": 1}

    def test_ties_keep_pool_order(self):
        players = [
            Player(player_id="first", name="First", position=Position.TE, adp=50.0),
            Player(player_id="second", name="Second", position=Position.TE, adp=50.0),
        ]
        ranks = position_ranks_from_adp(players)

        assert ranks["first"] == 1
        assert ranks["second"] == 2

    def test_invalid_adp_ranks_last(self):
        players = [
            Player(player_id="nan", name="Unknown", position=Position.QB, adp=float("nan")),
            Player(player_id="qb", name="Known", position=Position.QB, adp=80.0),
        ]
        ranks = position_ranks_from_adp(players)

        assert ranks["qb"] == 1
        assert ranks["nan"] == 2

    @pytest.mark.parametrize("adp,expected", [(45.0, 5), (9.1, 1), (10.0, 1), (0, 0), (float("nan"), 0)])
    def test_fallback_rank(self, adp, expected):
        assert fallback_rank(adp) == expected

    def test_scoring_multiplier(self):
        assert scoring_multiplier(Position.WR, "STANDARD") == pytest.approx(0.85)
        assert scoring_multiplier(Position.QB, "SUPERFLEX") == pytest.approx(1.8)
        assert scoring_multiplier(Position.RB, "UNKNOWN") == 1.0
