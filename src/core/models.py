"""Core data models for FF VBD Engine"""
import math
from dataclasses import dataclass, field
from typing import Optional, Dict, FrozenSet, Mapping, Tuple, Union
from enum import Enum

from config import DEFAULT_SETTINGS, DEFAULT_FLEX_SHARE, FLEX_SHARE_PRESETS


class Position(Enum):
    """NFL positions for fantasy football"""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DST = "DST"
    FLEX = "FLEX"  # RB/WR/TE


# Positions with projection curves
VALUED_POSITIONS = (Position.QB, Position.RB, Position.WR, Position.TE)

# Positions a roster can start (every player position; FLEX is a slot)
ROSTERED_POSITIONS = VALUED_POSITIONS + (Position.K, Position.DST)


def parse_position(value: Union[Position, str, None]) -> Optional[Position]:
    """Coerce a position code to Position, or None if it is not one"""
    if isinstance(value, Position):
        return value
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    if code in ("DEF", "D/ST"):
        code = "DST"
    try:
        return Position(code)
    except ValueError:
        return None


def is_valid_number(value) -> bool:
    """True for finite ints/floats (bools excluded)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


class ValueDecay(Enum):
    """How sharply a position's value falls off down the ranks"""
    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    BIMODAL = "bimodal"
    STEPPED = "stepped"


@dataclass(frozen=True)
class Player:
    """Engine view of a draftable player"""
    player_id: str
    name: str
    position: Position
    adp: float
    projected_points: Optional[float] = None
    team: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.position.value})"

    @property
    def has_projection(self) -> bool:
        return is_valid_number(self.projected_points) and self.projected_points > 0


@dataclass(frozen=True)
class FlexConfig:
    """Flex slots per team and the positions allowed to fill them"""
    count: int = 1
    eligible: FrozenSet[Position] = frozenset({Position.RB, Position.WR, Position.TE})


@dataclass(frozen=True)
class LeagueSettings:
    """League shape used for replacement levels and round math"""
    teams: int = 12
    starters: Mapping[Position, int] = field(default_factory=lambda: {
        Position.QB: 1, Position.RB: 2, Position.WR: 3, Position.TE: 1,
        Position.K: 1, Position.DST: 1
    })
    flex: FlexConfig = field(default_factory=FlexConfig)
    scoring: str = "PPR"
    flex_share: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_FLEX_SHARE))

    def starters_at(self, position: Position) -> int:
        return self.starters.get(position, 0)

    @classmethod
    def from_dict(cls, settings: Optional[Dict] = None) -> 'LeagueSettings':
        """
        Build settings from the project's settings dict format.

        Missing keys fall back to DEFAULT_SETTINGS so a partially empty
        dict still yields a usable configuration.
        """
        settings = settings or {}
        roster = settings.get("roster") or DEFAULT_SETTINGS["roster"]

        teams = settings.get("teams") or DEFAULT_SETTINGS["teams"]
        scoring = str(settings.get("scoring") or DEFAULT_SETTINGS["scoring"]).upper()

        starters = {}
        for position in ROSTERED_POSITIONS:
            count = roster.get(position.value, 0)
            starters[position] = count if isinstance(count, int) and count > 0 else 0

        superflex = roster.get("SUPERFLEX", 0) or 0
        eligible = {
            pos for pos in (parse_position(p) for p in
                            settings.get("flex_eligible", DEFAULT_SETTINGS["flex_eligible"]))
            if pos in VALUED_POSITIONS
        }
        if superflex > 0:
            eligible.add(Position.QB)
        flex = FlexConfig(
            count=max(0, (roster.get("FLEX", 0) or 0) + superflex),
            eligible=frozenset(eligible)
        )

        share = settings.get("flex_share")
        if isinstance(share, str):
            flex_share = FLEX_SHARE_PRESETS.get(share.lower(), DEFAULT_FLEX_SHARE)
        elif isinstance(share, dict):
            flex_share = {**DEFAULT_FLEX_SHARE, **{k.upper(): v for k, v in share.items()}}
        elif superflex > 0:
            flex_share = FLEX_SHARE_PRESETS["superflex"]
        else:
            flex_share = DEFAULT_FLEX_SHARE

        return cls(
            teams=teams,
            starters=starters,
            flex=flex,
            scoring=scoring,
            flex_share=dict(flex_share)
        )


@dataclass(frozen=True)
class VBDBreakdown:
    """Every intermediate value behind one player's VBD"""
    position_rank: int
    raw_points: float
    scoring_multiplier: float
    sos_multiplier: float
    sos_adjusted_points: float
    floor_applied: bool
    adjusted_points: float
    replacement_rank: int
    replacement_points: float
    vbd: float

    @classmethod
    def empty(cls) -> 'VBDBreakdown':
        """Breakdown for positions without a valuation curve"""
        return cls(
            position_rank=0,
            raw_points=0.0,
            scoring_multiplier=1.0,
            sos_multiplier=1.0,
            sos_adjusted_points=0.0,
            floor_applied=False,
            adjusted_points=0.0,
            replacement_rank=0,
            replacement_points=0.0,
            vbd=0.0
        )


@dataclass(frozen=True)
class BoardEntry:
    """A valued player on the draft board"""
    player: Player
    breakdown: VBDBreakdown
    tier: Optional[int] = None
    dead_zone_warning: Optional[str] = None

    @property
    def vbd(self) -> float:
        return self.breakdown.vbd

    @property
    def adp(self) -> float:
        return self.player.adp

    @property
    def position(self) -> Position:
        return self.player.position

    @property
    def player_id(self) -> str:
        return self.player.player_id


@dataclass(frozen=True)
class TierConfig:
    """Tier shape for one position"""
    elite_tier_size: int
    value_decay: Optional[ValueDecay] = None
    dead_zone: Optional[Tuple[int, int]] = None  # (start_round, end_round)


@dataclass(frozen=True)
class TierBreak:
    """A boundary between two adjacent players in a tiered list"""
    after_index: int
    reason: str
    vbd_drop: float
    percent_drop: float
    forced: bool = False
