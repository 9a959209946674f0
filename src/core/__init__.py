"""Valuation and tiering engine for fantasy football drafts"""
from .models import (
    Player, Position, ValueDecay, FlexConfig, LeagueSettings,
    VBDBreakdown, BoardEntry, TierConfig, TierBreak
)
from .projections import ProjectionCurve, projected_points
from .replacement import ReplacementModel, replacement_rank, replacement_points
from .schedule import ScheduleAdjustment, sos_multiplier, apply_floor, playoff_weighted_sos
from .vbd import VBDCalculator, calculate_vbd, log_breakdown
from .tiers import TierEngine
from .board import DraftBoardBuilder
from .recommend import DraftStrategy, get_recommendations

__all__ = [
    'Player', 'Position', 'ValueDecay', 'FlexConfig', 'LeagueSettings',
    'VBDBreakdown', 'BoardEntry', 'TierConfig', 'TierBreak',
    'ProjectionCurve', 'projected_points',
    'ReplacementModel', 'replacement_rank', 'replacement_points',
    'ScheduleAdjustment', 'sos_multiplier', 'apply_floor', 'playoff_weighted_sos',
    'VBDCalculator', 'calculate_vbd', 'log_breakdown',
    'TierEngine', 'DraftBoardBuilder',
    'DraftStrategy', 'get_recommendations'
]
