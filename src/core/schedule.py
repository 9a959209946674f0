"""Strength-of-schedule adjustment and position floors"""
from typing import Mapping, Optional, Union

from src.core.models import Position, is_valid_number, parse_position
from config import (
    SOS_NEUTRAL, SOS_SENSITIVITY, SOS_MULTIPLIER_MIN, SOS_MULTIPLIER_MAX,
    POSITION_FLOORS, PLAYOFF_SOS_WEIGHT
)


def _schedule_value(schedule: Mapping, position: Position):
    if position in schedule:
        return schedule[position]
    return schedule.get(position.value)


def sos_multiplier(position: Union[Position, str],
                   schedule: Optional[Mapping] = None,
                   sensitivity: float = SOS_SENSITIVITY) -> float:
    """
    Points multiplier for a position's schedule difficulty.

    Schedule values use a 1-32 scale centered on SOS_NEUTRAL. The result
    is clamped to [SOS_MULTIPLIER_MIN, SOS_MULTIPLIER_MAX]; missing or
    non-finite data gives exactly 1.0.
    """
    pos = parse_position(position)
    if not schedule or pos is None:
        return 1.0

    value = _schedule_value(schedule, pos)
    if not is_valid_number(value):
        return 1.0

    multiplier = 1 + sensitivity * ((value - SOS_NEUTRAL) / SOS_NEUTRAL)
    if not is_valid_number(multiplier):
        return 1.0
    return min(SOS_MULTIPLIER_MAX, max(SOS_MULTIPLIER_MIN, multiplier))


def apply_floor(position: Union[Position, str], points: float) -> float:
    """Raise points to the position floor; unfloored positions pass through"""
    pos = parse_position(position)
    floor = POSITION_FLOORS.get(pos.value) if pos else None
    if floor is None:
        return points
    if not is_valid_number(points):
        return floor
    return max(floor, points)


def playoff_weighted_sos(regular_sos: float,
                         playoff_sos: float,
                         playoff_weight: float = PLAYOFF_SOS_WEIGHT) -> float:
    """Blend regular-season and playoff-week schedule difficulty"""
    weight = max(0.0, min(1.0, playoff_weight))
    return (1 - weight) * regular_sos + weight * playoff_sos


class ScheduleAdjustment:
    """Schedule multiplier and floor with a fixed sensitivity"""

    def __init__(self, sensitivity: float = SOS_SENSITIVITY):
        self.sensitivity = sensitivity

    def multiplier(self, position: Union[Position, str], schedule: Optional[Mapping] = None) -> float:
        return sos_multiplier(position, schedule, self.sensitivity)

    def apply_floor(self, position: Union[Position, str], points: float) -> float:
        return apply_floor(position, points)

    def adjust(self, position: Union[Position, str], points: float,
               schedule: Optional[Mapping] = None) -> float:
        """Schedule multiplier first, then the floor"""
        return apply_floor(position, points * self.multiplier(position, schedule))
