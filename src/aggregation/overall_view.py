"""All-time ranking across every tournament."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace

from aggregation.common import PlayerRow, build_row
from aggregation.placements import best_placement, round_half_up, season_points_for
from aggregation.tournament_view import merge_tournament
from domain.ratings.openskill.calculator import RatingReplay
from ingest.loader import TournamentRecord


@dataclass
class _PlayerTotals:
    name: str
    external: bool = False
    matches: int = 0
    points: float = 0.0
    won: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    season_points: int = 0
    tournaments: int = 0
    best_place: int | None = None
    places: list[int] = field(default_factory=list)


def chronological(tournaments: Iterable[TournamentRecord]) -> list[TournamentRecord]:
    """Oldest first; equal dates keep input order."""
    return sorted(tournaments, key=lambda tournament: tournament.date)


def accumulate_totals(
    tournaments: Iterable[TournamentRecord],
    resolve: Callable[[str], str],
) -> list[_PlayerTotals]:
    totals: dict[str, _PlayerTotals] = {}
    for tournament in chronological(tournaments):
        for result in merge_tournament(tournament, resolve):
            if not result.participated:
                continue
            entry = totals.get(result.name)
            if entry is None:
                entry = _PlayerTotals(name=result.name, external=result.external)
                totals[result.name] = entry
            place = result.final_place
            entry.matches += result.matches
            entry.points += result.points
            entry.won += result.won
            entry.lost += result.lost
            entry.goals_for += result.goals_for
            entry.goals_against += result.goals_against
            entry.season_points += season_points_for(place)
            entry.tournaments += 1
            entry.best_place = best_placement(entry.best_place, place)
            if place is not None:
                entry.places.append(place)
    return list(totals.values())


def _ranking_key(row: PlayerRow) -> tuple[float, float, float]:
    return -row.season_points, -row.skill, -row.points


def rank_rows(rows: Sequence[PlayerRow]) -> list[PlayerRow]:
    """Sort by season points, skill, then raw points and number places 1..N."""
    ordered = sorted(rows, key=_ranking_key)
    return [replace(row, place=index) for index, row in enumerate(ordered, start=1)]


def aggregate_rows(
    tournaments: Iterable[TournamentRecord],
    resolve: Callable[[str], str],
    replay: RatingReplay,
) -> list[PlayerRow]:
    rows = [
        build_row(
            name=totals.name,
            matches=totals.matches,
            points=totals.points,
            won=totals.won,
            lost=totals.lost,
            goals_for=totals.goals_for,
            goals_against=totals.goals_against,
            skill=replay.skill_of(totals.name),
            season_points=totals.season_points,
            tournaments=totals.tournaments,
            best_place=totals.best_place,
            avg_place=round_half_up(sum(totals.places) / len(totals.places), "0.1") if totals.places else None,
            external=totals.external,
        )
        for totals in accumulate_totals(tournaments, resolve)
    ]
    return rank_rows(rows)


def overall_view(
    tournaments: Iterable[TournamentRecord],
    resolve: Callable[[str], str],
    replay: RatingReplay,
) -> list[PlayerRow]:
    """All-time table; ``replay`` must come from the full chronological replay."""
    return aggregate_rows(tournaments, resolve, replay)


__all__ = ["accumulate_totals", "aggregate_rows", "chronological", "overall_view", "rank_rows"]
