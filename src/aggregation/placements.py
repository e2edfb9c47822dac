"""Placement and season-point rules.

All functions here are pure; views compose them instead of branching inline.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

SEASON_POINTS: dict[int, int] = {
    1: 25,
    2: 20,
    3: 16,
    4: 13,
    5: 11,
    6: 10,
    7: 9,
    8: 8,
    9: 7,
    10: 6,
    11: 5,
    12: 4,
    13: 3,
    14: 2,
    15: 1,
    16: 1,
}
ATTENDANCE_POINT = 1

FINALE_MIN_MATCHES = 10
FINALE_QUALIFIED = 20
FINALE_ALTERNATES = 5


def is_placed(place: int | None) -> bool:
    return place is not None and place > 0


def final_placement(qualifying_place: int | None, elimination_place: int | None) -> int | None:
    """Elimination placement wins over qualifying placement when both exist."""
    if is_placed(elimination_place):
        return elimination_place
    if is_placed(qualifying_place):
        return qualifying_place
    return None


def season_points_for(place: int | None) -> int:
    """Table points for ``place``; any other finish earns the attendance point."""
    if place is None:
        return ATTENDANCE_POINT
    return SEASON_POINTS.get(place, ATTENDANCE_POINT)


def best_placement(current: int | None, candidate: int | None) -> int | None:
    if not is_placed(candidate):
        return current
    if current is None:
        return candidate
    return min(current, candidate)


def season_of(date: datetime) -> int:
    """Seasons are calendar years of the tournament date."""
    return date.year


def round_half_up(value: float, step: str) -> float:
    """Round to ``step``; exact halves go away from zero."""
    return float(Decimal(value).quantize(Decimal(step), rounding=ROUND_HALF_UP))


def win_rate(won: int, matches: int) -> float:
    if matches <= 0:
        return 0.0
    return round_half_up(won / matches * 100.0, "0.1")


def points_per_game(points: float, matches: int) -> float:
    if matches <= 0:
        return 0.0
    return round_half_up(points / matches, "0.01")


__all__ = [
    "ATTENDANCE_POINT",
    "FINALE_ALTERNATES",
    "FINALE_MIN_MATCHES",
    "FINALE_QUALIFIED",
    "SEASON_POINTS",
    "best_placement",
    "final_placement",
    "is_placed",
    "points_per_game",
    "round_half_up",
    "season_of",
    "season_points_for",
    "win_rate",
]
