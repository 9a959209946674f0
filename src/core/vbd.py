"""Value-Based Drafting (VBD) calculations"""
import logging
import math
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from src.core.models import (
    Player, Position, LeagueSettings, VBDBreakdown, BoardEntry,
    VALUED_POSITIONS, is_valid_number
)
from src.core.projections import projected_points
from src.core.replacement import ReplacementModel
from src.core.schedule import ScheduleAdjustment
from config import SCORING_MULTIPLIERS, FALLBACK_RANK_ADP_DIVISOR


logger = logging.getLogger(__name__)

# Called with every breakdown the calculator produces
VBDObserver = Callable[[Player, VBDBreakdown], None]


def log_breakdown(player: Player, breakdown: VBDBreakdown) -> None:
    """Observer that traces each valuation to the debug log"""
    logger.debug(
        f"{player}: rank {breakdown.position_rank}, raw {breakdown.raw_points:.1f}, "
        f"sos x{breakdown.sos_multiplier:.3f}, adjusted {breakdown.adjusted_points:.1f}"
        f"{' (floor)' if breakdown.floor_applied else ''}, "
        f"replacement {breakdown.replacement_points:.1f} (rank {breakdown.replacement_rank}), "
        f"VBD {breakdown.vbd:.1f}"
    )


def _adp_sort_key(player: Player) -> float:
    return player.adp if is_valid_number(player.adp) else math.inf


def position_ranks_from_adp(players: Iterable[Player]) -> Dict[str, int]:
    """
    1-based positional rank for every valued player, by ascending ADP.

    The sort is stable so equal ADPs keep their pool order. Players
    without a usable ADP rank after everyone else at their position.
    """
    by_position: Dict[Position, List[Player]] = {pos: [] for pos in VALUED_POSITIONS}
    for player in players:
        if player.position in by_position:
            by_position[player.position].append(player)

    ranks = {}
    for position_players in by_position.values():
        position_players.sort(key=_adp_sort_key)
        for i, player in enumerate(position_players, 1):
            ranks[player.player_id] = i
    return ranks


def fallback_rank(adp: float) -> int:
    """Rank estimate for a player missing from the pool"""
    if not is_valid_number(adp) or adp <= 0:
        return 0
    return math.ceil(adp / FALLBACK_RANK_ADP_DIVISOR)


def scoring_multiplier(position: Position, scoring: str) -> float:
    """Format adjustment for curve-based points; unknown formats are neutral"""
    return SCORING_MULTIPLIERS.get(scoring, {}).get(position.value, 1.0)


class VBDCalculator:
    """Calculate value over replacement for players in a pool"""

    def __init__(self,
                 league_settings: Union[LeagueSettings, Dict, None] = None,
                 schedule_adjustment: Optional[ScheduleAdjustment] = None,
                 observer: Optional[VBDObserver] = None):
        if isinstance(league_settings, LeagueSettings):
            self.settings = league_settings
        else:
            self.settings = LeagueSettings.from_dict(league_settings)
        self.replacement_model = ReplacementModel(self.settings)
        self.schedule_adjustment = schedule_adjustment or ScheduleAdjustment()
        self.observer = observer

    def calculate_breakdown(self,
                            player: Player,
                            pool: Iterable[Player],
                            schedule: Optional[Mapping] = None,
                            position_ranks: Optional[Dict[str, int]] = None) -> VBDBreakdown:
        """
        Full VBD breakdown for one player relative to the pool.

        Args:
            player: Player to value
            pool: Every player competing for draft slots (ranks come from here)
            schedule: Optional per-position SOS on a 1-32 scale
            position_ranks: Precomputed ranks for the same pool

        Returns:
            VBDBreakdown with vbd >= 0
        """
        position = player.position
        if position not in VALUED_POSITIONS:
            breakdown = VBDBreakdown.empty()
            self._notify(player, breakdown)
            return breakdown

        # Step 1: positional rank from ADP
        if position_ranks is None:
            position_ranks = position_ranks_from_adp(pool)
        rank = position_ranks.get(player.player_id) or fallback_rank(player.adp)

        # Step 2: raw points
        format_multiplier = scoring_multiplier(position, self.settings.scoring)
        if player.has_projection:
            raw_points = float(player.projected_points)
        else:
            raw_points = projected_points(position, rank) * format_multiplier

        # Step 3: schedule, then floor
        sos_mult = self.schedule_adjustment.multiplier(position, schedule)
        sos_adjusted = raw_points * sos_mult
        adjusted = self.schedule_adjustment.apply_floor(position, sos_adjusted)

        # Step 4: replacement level
        replacement_rank = self.replacement_model.replacement_rank(position)
        replacement = self.replacement_model.replacement_points(position) * format_multiplier

        # Step 5: value over replacement
        vbd = max(0.0, adjusted - replacement)

        breakdown = VBDBreakdown(
            position_rank=rank,
            raw_points=raw_points,
            scoring_multiplier=format_multiplier,
            sos_multiplier=sos_mult,
            sos_adjusted_points=sos_adjusted,
            floor_applied=adjusted > sos_adjusted,
            adjusted_points=adjusted,
            replacement_rank=replacement_rank,
            replacement_points=replacement,
            vbd=vbd
        )
        self._notify(player, breakdown)
        return breakdown

    def calculate_vbd(self,
                      player: Player,
                      pool: Iterable[Player],
                      schedule: Optional[Mapping] = None) -> float:
        """VBD score for one player (never negative)"""
        return self.calculate_breakdown(player, pool, schedule).vbd

    def value_pool(self,
                   pool: Iterable[Player],
                   schedule: Optional[Mapping] = None) -> List[BoardEntry]:
        """
        Value every player in the pool.

        Returns:
            Board entries sorted by VBD descending, ties by ADP ascending
        """
        players = list(pool)
        ranks = position_ranks_from_adp(players)

        entries = [
            BoardEntry(player=player, breakdown=self.calculate_breakdown(player, players, schedule, ranks))
            for player in players
        ]
        entries.sort(key=lambda e: (-e.vbd, _adp_sort_key(e.player)))
        return entries

    def _notify(self, player: Player, breakdown: VBDBreakdown) -> None:
        if self.observer is not None:
            self.observer(player, breakdown)


def calculate_vbd(player: Player,
                  pool: Iterable[Player],
                  schedule: Optional[Mapping] = None,
                  league_settings: Union[LeagueSettings, Dict, None] = None,
                  observer: Optional[VBDObserver] = None) -> float:
    """VBD for one player with the given settings"""
    return VBDCalculator(league_settings, observer=observer).calculate_vbd(player, pool, schedule)
