"""VBD-based tiers with position-specific value curves"""
import dataclasses
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from src.core.models import (
    Position, ValueDecay, TierConfig, TierBreak, BoardEntry, is_valid_number
)
from config import (
    TIER_CONFIG, TIER_THRESHOLDS, MAX_TIER_SIZES, DEFAULT_MAX_TIER_SIZE,
    ELITE_PROTECTION_ROUNDS
)


logger = logging.getLogger(__name__)

# Round assigned to players without a usable ADP
UNKNOWN_ROUND = 99


def default_tier_config() -> Dict[Position, TierConfig]:
    """Tier configs built from config.TIER_CONFIG"""
    configs = {}
    for code, values in TIER_CONFIG.items():
        configs[Position(code)] = TierConfig(
            elite_tier_size=values["elite_tier_size"],
            value_decay=ValueDecay(values["value_decay"]),
            dead_zone=values.get("dead_zone")
        )
    return configs


class TierEngine:
    """
    Split a VBD-sorted list into tiers.

    A tier ends between two adjacent players when the VBD drop between
    them is large for the draft round (percentage or absolute threshold),
    or when the tier has grown to the position's maximum size. Early-round
    tiers smaller than the position's elite size are never split on the
    drop test. Both tier assignment and the tier break report read the
    same per-pair decisions.
    """

    def __init__(self, league_size: int = 12,
                 tier_config: Optional[Dict[Position, TierConfig]] = None):
        self.league_size = league_size if league_size and league_size > 0 else 12
        self.tier_config = tier_config or default_tier_config()

    def player_round(self, adp: float) -> int:
        """Draft round a player is typically taken in"""
        if not is_valid_number(adp) or adp <= 0:
            return UNKNOWN_ROUND
        return math.ceil(adp / self.league_size)

    def thresholds(self, round_number: int) -> Tuple[float, float]:
        """(percent, absolute) VBD drop that starts a new tier in this round"""
        for band in TIER_THRESHOLDS:
            if band["through_round"] is None or round_number <= band["through_round"]:
                return band["percent"], band["absolute"]
        last = TIER_THRESHOLDS[-1]
        return last["percent"], last["absolute"]

    def max_tier_size(self, position: Position, round_number: int) -> int:
        """Largest tier allowed for a position at this point in the draft"""
        config = self.tier_config.get(position)
        if config is None or config.value_decay is None:
            return DEFAULT_MAX_TIER_SIZE

        for through_round, size in MAX_TIER_SIZES.get(config.value_decay.value, []):
            if through_round is None or round_number <= through_round:
                return size
        return DEFAULT_MAX_TIER_SIZE

    def _break_between(self, current: BoardEntry, following: BoardEntry,
                       tier_size: int, index: int) -> Optional[TierBreak]:
        """Decide whether a tier ends after `current`"""
        round_number = self.player_round(current.adp)
        vbd_drop = current.vbd - following.vbd
        percent_drop = vbd_drop / max(1.0, current.vbd)

        if tier_size >= self.max_tier_size(current.position, round_number):
            return TierBreak(
                after_index=index,
                reason=f"tier size limit ({tier_size}) reached",
                vbd_drop=vbd_drop,
                percent_drop=percent_drop,
                forced=True
            )

        config = self.tier_config.get(current.position)
        elite_size = config.elite_tier_size if config else 0
        if tier_size < elite_size and round_number <= ELITE_PROTECTION_ROUNDS:
            return None

        percent_limit, absolute_limit = self.thresholds(round_number)
        if percent_drop > percent_limit or vbd_drop > absolute_limit:
            return TierBreak(
                after_index=index,
                reason=f"{percent_drop * 100:.1f}% drop ({vbd_drop:.1f} VBD)",
                vbd_drop=vbd_drop,
                percent_drop=percent_drop
            )
        return None

    def evaluate(self, entries: Sequence[BoardEntry]) -> List[Optional[TierBreak]]:
        """
        One decision per adjacent pair.

        Element i is the TierBreak after entry i, or None when entries i
        and i+1 share a tier.
        """
        decisions = []
        tier_size = 0
        for i in range(len(entries) - 1):
            tier_size += 1
            decision = self._break_between(entries[i], entries[i + 1], tier_size, i)
            if decision is not None:
                tier_size = 0
            decisions.append(decision)
        return decisions

    def assign_tiers(self, entries: Sequence[BoardEntry]) -> List[BoardEntry]:
        """Copy of the entries with tier numbers starting at 1"""
        if not entries:
            return []

        decisions = self.evaluate(entries)
        tiered = []
        current_tier = 1
        for i, entry in enumerate(entries):
            tiered.append(dataclasses.replace(entry, tier=current_tier))
            if i < len(decisions) and decisions[i] is not None:
                current_tier += 1

        logger.debug(f"Assigned {current_tier} tiers to {len(entries)} players")
        return tiered

    def tier_breaks(self, entries: Sequence[BoardEntry]) -> List[TierBreak]:
        """Every tier boundary with the drop that caused it"""
        return [decision for decision in self.evaluate(entries) if decision is not None]

    def check_dead_zone(self, entry: BoardEntry) -> Optional[str]:
        """Warning text for players drafted inside their position's dead zone"""
        config = self.tier_config.get(entry.position)
        if config is None or config.dead_zone is None:
            return None

        start, end = config.dead_zone
        round_number = self.player_round(entry.adp)
        if start <= round_number <= end:
            return (
                f"{entry.position.value} Dead Zone (Rounds {start}-{end}) - "
                "High variance, limited upside"
            )
        return None
