"""Draft board assembly: valuation, ordering and tiers"""
import dataclasses
import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Sequence, Union

from src.core.models import Player, Position, LeagueSettings, BoardEntry, TierBreak
from src.core.vbd import VBDCalculator, VBDObserver
from src.core.tiers import TierEngine
from src.utils.monitoring import measure_performance


logger = logging.getLogger(__name__)

TIER_SCOPES = ("position", "overall")


class DraftBoardBuilder:
    """Builds a tiered VBD draft board from a player pool"""

    def __init__(self, league_settings: Union[LeagueSettings, Dict, None] = None,
                 tier_scope: str = "position",
                 observer: Optional[VBDObserver] = None):
        if tier_scope not in TIER_SCOPES:
            raise ValueError(f"Unknown tier scope: {tier_scope}")

        self.vbd_calculator = VBDCalculator(league_settings, observer=observer)
        self.settings = self.vbd_calculator.settings
        self.tier_engine = TierEngine(league_size=self.settings.teams)
        self.tier_scope = tier_scope

    @measure_performance("build_draft_board")
    def build(self, players: Sequence[Player],
              schedule: Optional[Mapping] = None) -> List[BoardEntry]:
        """Value, sort and tier the pool"""
        if not players:
            logger.warning("Empty player pool, nothing to rank")
            return []

        valued = self.vbd_calculator.value_pool(players, schedule)

        if self.tier_scope == "overall":
            tiered = self.tier_engine.assign_tiers(valued)
        else:
            # Tier each position separately, keeping overall VBD order
            slots = defaultdict(list)
            for index, entry in enumerate(valued):
                slots[entry.position].append(index)

            tiered = list(valued)
            for indices in slots.values():
                group = self.tier_engine.assign_tiers([valued[i] for i in indices])
                for index, entry in zip(indices, group):
                    tiered[index] = entry

        board = [
            dataclasses.replace(e, dead_zone_warning=self.tier_engine.check_dead_zone(e))
            for e in tiered
        ]

        logger.info(f"Built draft board with {len(board)} players "
                    f"({self.settings.teams} teams, {self.settings.scoring})")
        return board

    def get_tier_breaks(self, board: Sequence[BoardEntry],
                        position: Optional[Position] = None) -> List[TierBreak]:
        """Tier breaks for the board, or for one position's slice of it"""
        entries = self.get_top_players(board, count=len(board), position=position)
        return self.tier_engine.tier_breaks(entries)

    def get_top_players(self, board: Sequence[BoardEntry],
                        count: int = 200,
                        position: Optional[Position] = None) -> List[BoardEntry]:
        """Get top N players, optionally filtered by position"""
        filtered = list(board)

        if position:
            filtered = [e for e in board if e.position == position]

        return filtered[:count]

    def get_tier_analysis(self, board: Sequence[BoardEntry]) -> Dict[Position, Dict[int, List[BoardEntry]]]:
        """Get board entries organized by position and tier"""
        analysis = defaultdict(lambda: defaultdict(list))

        for entry in board:
            analysis[entry.position][entry.tier].append(entry)

        return {pos: dict(tiers) for pos, tiers in analysis.items()}
