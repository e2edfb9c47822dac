"""Per-season ranking, with ratings replayed from that season's matches only."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace

from aggregation.common import PlayerRow
from aggregation.overall_view import aggregate_rows, chronological
from aggregation.placements import (
    FINALE_ALTERNATES,
    FINALE_MIN_MATCHES,
    FINALE_QUALIFIED,
    season_of,
)
from domain.extraction import extract_matches
from domain.ratings.openskill.calculator import OpenSkillParameters, PlayerOpenSkillCalculator
from ingest.loader import TournamentRecord

QUALIFIED = "qualified"
ALTERNATE = "alternate"


def available_seasons(tournaments: Iterable[TournamentRecord]) -> list[int]:
    """Distinct seasons present in ``tournaments``, newest first."""
    return sorted({season_of(tournament.date) for tournament in tournaments}, reverse=True)


def season_tournaments(tournaments: Iterable[TournamentRecord], season: int) -> list[TournamentRecord]:
    return [tournament for tournament in tournaments if season_of(tournament.date) == season]


def finale_qualifiers(
    rows: Sequence[PlayerRow],
    *,
    min_matches: int = FINALE_MIN_MATCHES,
    qualified: int = FINALE_QUALIFIED,
    alternates: int = FINALE_ALTERNATES,
) -> list[PlayerRow]:
    """Keep eligible players; the top ``qualified`` qualify, the next ``alternates`` stand by."""
    eligible = [row for row in rows if row.matches >= min_matches][: qualified + alternates]
    return [
        replace(
            row,
            place=index,
            finale_status=QUALIFIED if index <= qualified else ALTERNATE,
        )
        for index, row in enumerate(eligible, start=1)
    ]


def season_view(
    tournaments: Iterable[TournamentRecord],
    season: int,
    resolve: Callable[[str], str],
    *,
    params: OpenSkillParameters | None = None,
    finale_only: bool = False,
) -> list[PlayerRow]:
    selected = chronological(season_tournaments(tournaments, season))
    calculator = PlayerOpenSkillCalculator(params)
    replay = calculator.compute_all(extract_matches(selected, resolve))
    rows = aggregate_rows(selected, resolve, replay)
    if finale_only:
        return finale_qualifiers(rows)
    return rows


__all__ = [
    "ALTERNATE",
    "QUALIFIED",
    "available_seasons",
    "finale_qualifiers",
    "season_tournaments",
    "season_view",
]
