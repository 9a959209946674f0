"""Fantasy point projections from positional rank"""
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from src.core.models import Position, parse_position
from config import POSITION_FLOORS, PROJECTION_FALLBACK, CURVE_BLEND_WINDOW


@dataclass(frozen=True)
class CurveRegime:
    """One linear piece of a projection curve: intercept - slope * rank"""
    through: float  # last rank owned by this regime
    intercept: float
    slope: float

    def points(self, rank: float) -> float:
        return self.intercept - self.slope * rank


@dataclass(frozen=True)
class PositionCurve:
    """Ordered regimes for one position with a points floor"""
    regimes: Tuple[CurveRegime, ...]
    floor: float
    blend_window: float = CURVE_BLEND_WINDOW

    def points(self, rank: float) -> float:
        """
        Evaluate the curve at a rank.

        Each regime owns the ranks up to its `through`. In the blend window
        just past a boundary the result runs in a straight line from the
        previous regime's value at the boundary to this regime's value at
        the end of the window, so whole ranks land exactly on a regime line.
        """
        last = len(self.regimes) - 1
        for i, regime in enumerate(self.regimes):
            if rank > regime.through and i < last:
                continue

            value = max(self.floor, regime.points(rank))
            if i > 0:
                boundary = self.regimes[i - 1].through
                end = boundary + self.blend_window
                if rank < end:
                    start_value = max(self.floor, self.regimes[i - 1].points(boundary))
                    end_value = max(self.floor, regime.points(end))
                    t = (rank - boundary) / self.blend_window
                    value = start_value + (end_value - start_value) * t
            return value

        return PROJECTION_FALLBACK


# Regime tables tuned to per-position scoring distributions
# (e.g. QB12 ~ 332, RB29 ~ 165, WR41 ~ 150).
PROJECTION_CURVES: Dict[Position, PositionCurve] = {
    Position.QB: PositionCurve(
        regimes=(
            CurveRegime(through=6, intercept=380, slope=2.0),      # elite
            CurveRegime(through=15, intercept=371, slope=3.25),    # mid
            CurveRegime(through=math.inf, intercept=350, slope=2.5),
        ),
        floor=POSITION_FLOORS["QB"]
    ),
    Position.RB: PositionCurve(
        regimes=(
            CurveRegime(through=6, intercept=315, slope=5.5),
            CurveRegime(through=18, intercept=325, slope=7.0),
            CurveRegime(through=math.inf, intercept=235, slope=2.4),
        ),
        floor=POSITION_FLOORS["RB"]
    ),
    Position.WR: PositionCurve(
        regimes=(
            CurveRegime(through=8, intercept=290, slope=4.0),
            CurveRegime(through=28, intercept=300, slope=5.0),
            CurveRegime(through=math.inf, intercept=160, slope=0.25),
        ),
        floor=POSITION_FLOORS["WR"]
    ),
    Position.TE: PositionCurve(
        regimes=(
            CurveRegime(through=3, intercept=220, slope=8.0),
            CurveRegime(through=10, intercept=215, slope=6.5),
            CurveRegime(through=math.inf, intercept=150, slope=0.5),
        ),
        floor=POSITION_FLOORS["TE"]
    ),
}


def projected_points(position: Union[Position, str], rank: float,
                     curves: Dict[Position, PositionCurve] = PROJECTION_CURVES) -> float:
    """
    Expected season points for the Nth player at a position.

    Args:
        position: Position or position code
        rank: 1-based positional rank (fractional ranks are allowed)
        curves: Curve table to evaluate

    Returns:
        Projected points; PROJECTION_FALLBACK for invalid ranks or
        positions without a curve
    """
    if isinstance(rank, bool) or not isinstance(rank, (int, float)):
        return PROJECTION_FALLBACK
    if not math.isfinite(rank) or rank <= 0:
        return PROJECTION_FALLBACK

    curve = curves.get(parse_position(position))
    if curve is None:
        return PROJECTION_FALLBACK
    return curve.points(rank)


class ProjectionCurve:
    """Projection lookup bound to a curve table"""

    def __init__(self, curves: Optional[Dict[Position, PositionCurve]] = None):
        self.curves = curves or PROJECTION_CURVES

    def projected_points(self, position: Union[Position, str], rank: float) -> float:
        return projected_points(position, rank, self.curves)

    def curve_table(self, position: Union[Position, str], max_rank: int = 40) -> Dict[int, float]:
        """Projected points for ranks 1..max_rank"""
        return {rank: self.projected_points(position, rank) for rank in range(1, max_rank + 1)}
