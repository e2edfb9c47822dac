"""Validated standings rows."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
import logging
from typing import Any

from ingest.loader import RawStanding

logger = logging.getLogger(__name__)

REQUIRED_STATS = ("place", "matches", "points", "won", "lost", "goals", "goals_in")


class StandingDataError(ValueError):
    """A standings record lacks stats required for aggregation."""


@dataclass(frozen=True)
class StandingStats:
    raw_id: str | None
    name: str
    place: int | None
    matches: int
    points: float
    won: int
    lost: int
    goals_for: int
    goals_against: int
    external: bool = False
    points_per_game: float | None = None
    corrected_points_per_game: float | None = None
    bh1: float | None = None
    bh2: float | None = None


def _as_int(stats: Mapping[str, Any], key: str, *, label: str) -> int:
    try:
        return int(stats[key])
    except (TypeError, ValueError) as exc:
        raise StandingDataError(f"{label}: stats.{key} is not a number ({stats[key]!r})") from exc


def _optional_float(stats: Mapping[str, Any], key: str) -> float | None:
    value = stats.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_standing(raw: RawStanding, resolve: Callable[[str], str]) -> StandingStats:
    """Resolve the player's name and validate the stats block."""
    name = resolve(raw.name or "")
    label = f"standing {raw.raw_id or raw.name!r}"
    if not name:
        raise StandingDataError(f"{label}: missing player name")
    stats = raw.stats
    if stats is None:
        raise StandingDataError(f"{label}: missing stats")
    missing = [key for key in REQUIRED_STATS if key not in stats]
    if missing:
        raise StandingDataError(f"{label}: missing stats fields {missing}")

    place_value = stats["place"]
    place = None if place_value is None else _as_int(stats, "place", label=label)
    points = _optional_float(stats, "points")
    if points is None:
        raise StandingDataError(f"{label}: stats.points is not a number ({stats['points']!r})")

    return StandingStats(
        raw_id=raw.raw_id,
        name=name,
        place=place,
        matches=_as_int(stats, "matches", label=label),
        points=points,
        won=_as_int(stats, "won", label=label),
        lost=_as_int(stats, "lost", label=label),
        goals_for=_as_int(stats, "goals", label=label),
        goals_against=_as_int(stats, "goals_in", label=label),
        external=raw.external,
        points_per_game=_optional_float(stats, "points_per_game"),
        corrected_points_per_game=_optional_float(stats, "corrected_points_per_game"),
        bh1=_optional_float(stats, "bh1"),
        bh2=_optional_float(stats, "bh2"),
    )


def iter_active_standings(
    standings: Iterable[RawStanding],
    resolve: Callable[[str], str],
) -> Iterator[StandingStats]:
    """Yield parsed, active standings; invalid records are logged and skipped."""
    for raw in standings:
        if not raw.is_active:
            continue
        try:
            yield parse_standing(raw, resolve)
        except StandingDataError as exc:
            logger.warning("excluding standings record: %s", exc)


__all__ = ["REQUIRED_STATS", "StandingDataError", "StandingStats", "iter_active_standings", "parse_standing"]
