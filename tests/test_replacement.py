"""Tests for replacement-level calculations"""
import pytest

from src.core.models import Position, FlexConfig, LeagueSettings
from src.core.replacement import (
    ReplacementModel, replacement_rank, replacement_points, round_half_up
)


class TestReplacementRank:
    """Test replacement rank with flex allocation"""

    @pytest.fixture
    def starters(self):
        """QB1 RB2 WR3 TE1"""
        return {Position.QB: 1, Position.RB: 2, Position.WR: 3, Position.TE: 1}

    def test_wr_two_flex_scaling(self):
        """12 teams, 2 WR + 2 flex lands WR replacement in 28-34"""
        rank = replacement_rank(Position.WR, 12, {"WR": 2}, FlexConfig(count=2))
        assert 28 <= rank <= 34
        assert rank == 34

    def test_twelve_team_one_flex(self, starters):
        flex = FlexConfig(count=1)

        assert replacement_rank(Position.WR, 12, starters, flex) == 41
        assert replacement_rank(Position.RB, 12, starters, flex) == 29
        assert replacement_rank(Position.TE, 12, starters, flex) == 14
        assert replacement_rank(Position.QB, 12, starters, flex) == 12

    def test_no_flex(self, starters):
        assert replacement_rank(Position.RB, 12, starters) == 24
        assert replacement_rank(Position.RB, 12, starters, FlexConfig(count=0)) == 24

    def test_ineligible_position_gets_no_share(self, starters):
        flex = FlexConfig(count=1, eligible=frozenset({Position.RB, Position.WR}))
        assert replacement_rank(Position.TE, 12, starters, flex) == 12

    def test_superflex_share(self, starters):
        flex = FlexConfig(count=1, eligible=frozenset({Position.QB, Position.RB, Position.WR, Position.TE}))
        shares = {"QB": 0.3, "RB": 0.3, "WR": 0.3, "TE": 0.1}

        assert replacement_rank(Position.QB, 12, starters, flex, shares) == 16

    def test_half_share_rounds_up(self):
        # 0.25 * 1 * 10 = 2.5 -> 3
        rank = replacement_rank(Position.TE, 10, {"TE": 1}, FlexConfig(count=1), {"TE": 0.25})
        assert rank == 13

    def test_position_without_starters(self, starters):
        assert replacement_rank(Position.K, 12, starters, FlexConfig()) == 0
        assert replacement_rank("LB", 12, starters, FlexConfig()) == 0

    def test_string_keys_and_codes(self):
        assert replacement_rank("rb", 10, {"RB": 2}, FlexConfig(count=1)) == 24


class TestReplacementPoints:
    """Test points at the replacement rank"""

    @pytest.fixture
    def starters(self):
        return {"QB": 1, "RB": 2, "WR": 3, "TE": 1}

    def test_qb_band(self, starters):
        points = replacement_points(Position.QB, 12, starters, FlexConfig(count=1))
        assert 300 <= points <= 316

    def test_te_band(self, starters):
        points = replacement_points(Position.TE, 12, starters, FlexConfig(count=1))
        assert 120 <= points <= 145

    def test_streaming_discount(self, starters):
        """QB and TE replacement levels are discounted 5%"""
        assert replacement_points(Position.QB, 12, starters, FlexConfig()) == pytest.approx(332.0 * 0.95)
        assert replacement_points(Position.TE, 12, starters, FlexConfig()) == pytest.approx(143.0 * 0.95)

    def test_rb_wr_undiscounted(self, starters):
        assert replacement_points(Position.RB, 12, starters, FlexConfig()) == pytest.approx(165.4)
        assert replacement_points(Position.WR, 12, starters, FlexConfig()) == pytest.approx(149.75)


class TestRoundHalfUp:
    """Test half-up rounding"""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1), (1.5, 2), (2.5, 3), (2.4, 2), (4.8, 5), (9.6, 10), (0.0, 0)
    ])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestReplacementModel:
    """Test ReplacementModel bound to league settings"""

    def test_default_settings(self):
        model = ReplacementModel()

        assert model.replacement_rank(Position.WR) == 41
        assert model.replacement_rank(Position.RB) == 29

    def test_from_settings_dict(self):
        settings = LeagueSettings.from_dict({
            "teams": 12,
            "roster": {"QB": 1, "RB": 2, "WR": 2, "TE": 1, "FLEX": 2}
        })
        model = ReplacementModel(settings)

        assert model.replacement_rank(Position.WR) == 34
        assert model.replacement_rank(Position.RB) == 34

    def test_baselines(self):
        baselines = ReplacementModel().baselines()

        assert set(baselines) == {Position.QB, Position.RB, Position.WR, Position.TE}
        assert baselines[Position.TE]["rank"] == 14
        assert baselines[Position.QB]["points"] == pytest.approx(315.4)
