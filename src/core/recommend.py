"""Draft pick recommendations over a VBD board"""
import math
from collections import Counter
from enum import Enum
from typing import Dict, List, Sequence, Union

from src.core.models import (
    Position, BoardEntry, LeagueSettings, VALUED_POSITIONS, ROSTERED_POSITIONS, parse_position
)


class DraftStrategy(Enum):
    """How to pick from the available players"""
    VALUE = "value"        # Best player available
    BALANCED = "balanced"  # Best available at positions still short of depth
    NEED = "need"          # Fill the emptiest starting slots first
    UPSIDE = "upside"      # Safe tiers early, tier outliers late


def _roster_targets(settings: LeagueSettings, positions=VALUED_POSITIONS) -> Dict[Position, int]:
    return {pos: settings.starters_at(pos) for pos in positions}


def get_recommendations(strategy: Union[DraftStrategy, str],
                        my_team: Sequence[Union[Position, str]],
                        available: Sequence[BoardEntry],
                        settings: LeagueSettings,
                        current_pick: int) -> List[str]:
    """
    Player ids to consider with the current pick.

    Args:
        strategy: Strategy or its name
        my_team: Positions already on the roster
        available: Undrafted board entries in board order
        settings: League settings
        current_pick: Overall pick number (1-based)
    """
    try:
        strategy = DraftStrategy(strategy)
    except ValueError:
        return [e.player_id for e in available[:3]]

    counts = Counter(parse_position(p) for p in my_team)
    targets = _roster_targets(settings)

    if strategy == DraftStrategy.VALUE:
        return [e.player_id for e in available[:5]]

    if strategy == DraftStrategy.BALANCED:
        needs = {pos for pos, target in targets.items() if counts[pos] < target + 1}
        picks = [e.player_id for e in available[:5] if e.position in needs]
        return picks or [e.player_id for e in available[:1]]

    if strategy == DraftStrategy.NEED:
        # Kickers and defenses count here too
        shortages = [
            (target - counts[pos], pos)
            for pos, target in _roster_targets(settings, ROSTERED_POSITIONS).items()
            if target - counts[pos] > 0
        ]
        if not shortages:
            return [e.player_id for e in available[:3]]

        shortages.sort(key=lambda s: s[0], reverse=True)
        needed = {pos for _, pos in shortages[:2]}
        return [e.player_id for e in available if e.position in needed][:4]

    current_round = math.ceil(current_pick / (settings.teams or 12))
    if current_round <= 6:
        return [e.player_id for e in available if (e.tier or 999) <= 3][:4]

    expected_tier = math.ceil(current_round * 1.5)
    return [
        e.player_id for e in available
        if e.position in (Position.RB, Position.WR, Position.TE) and (e.tier or 999) < expected_tier
    ][:5]
