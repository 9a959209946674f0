"""Replacement-level ranks and points by position"""
import logging
import math
from typing import Dict, Mapping, Optional, Union

from src.core.models import Position, FlexConfig, LeagueSettings, VALUED_POSITIONS, parse_position
from src.core.projections import projected_points
from config import DEFAULT_FLEX_SHARE, STREAMING_DISCOUNT


logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up"""
    return int(math.floor(value + 0.5))


def _count_for(mapping: Mapping, position: Position, default=0):
    """Read a per-position value from a dict keyed by Position or code"""
    if position in mapping:
        return mapping[position]
    return mapping.get(position.value, default)


def replacement_rank(position: Union[Position, str],
                     teams: int,
                     starters: Mapping,
                     flex: Optional[FlexConfig] = None,
                     flex_share: Optional[Mapping[str, float]] = None) -> int:
    """
    Positional rank of the replacement-level player.

    Dedicated starters across the league plus the position's share of
    the league's flex slots. Positions that are not flex-eligible get no
    flex share.

    Args:
        position: Position to evaluate
        teams: Number of teams in the league
        starters: Dedicated starters per team, keyed by Position or code
        flex: Flex slot configuration (None means no flex)
        flex_share: Share of flex slots per position code

    Returns:
        Replacement rank (0 when the position has no starters or flex share)
    """
    pos = parse_position(position)
    if pos is None:
        return 0

    shares = flex_share if flex_share is not None else DEFAULT_FLEX_SHARE
    base = max(0, _count_for(starters, pos) or 0) * teams
    if flex is None or flex.count <= 0:
        return base

    share = _count_for(shares, pos, 0.0) if pos in flex.eligible else 0.0
    return base + round_half_up(share * flex.count * teams)


def replacement_points(position: Union[Position, str],
                       teams: int,
                       starters: Mapping,
                       flex: Optional[FlexConfig] = None,
                       flex_share: Optional[Mapping[str, float]] = None) -> float:
    """
    Projected points at the replacement rank.

    QB and TE replacement levels are discounted because the marginal
    players there are easy to stream week to week.
    """
    pos = parse_position(position)
    rank = replacement_rank(position, teams, starters, flex, flex_share)
    points = projected_points(position, rank)
    if pos is not None:
        points *= STREAMING_DISCOUNT.get(pos.value, 1.0)
    return points


class ReplacementModel:
    """Replacement levels for one league configuration"""

    def __init__(self, settings: Optional[LeagueSettings] = None):
        self.settings = settings or LeagueSettings()

    def replacement_rank(self, position: Union[Position, str]) -> int:
        return replacement_rank(
            position,
            self.settings.teams,
            self.settings.starters,
            self.settings.flex,
            self.settings.flex_share
        )

    def replacement_points(self, position: Union[Position, str]) -> float:
        return replacement_points(
            position,
            self.settings.teams,
            self.settings.starters,
            self.settings.flex,
            self.settings.flex_share
        )

    def baselines(self) -> Dict[Position, Dict[str, float]]:
        """Replacement rank and points for every valued position"""
        baselines = {}
        for position in VALUED_POSITIONS:
            baselines[position] = {
                "rank": self.replacement_rank(position),
                "points": self.replacement_points(position)
            }
            logger.debug(
                f"{position.value} replacement: rank {baselines[position]['rank']}, "
                f"{baselines[position]['points']:.1f} pts"
            )
        return baselines
