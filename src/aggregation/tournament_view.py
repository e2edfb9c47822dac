"""Single-tournament standings view."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace

from aggregation.common import PlayerRow, TournamentResult, build_row
from aggregation.placements import best_placement, season_points_for
from aggregation.standings import StandingStats, iter_active_standings
from domain.ratings.openskill.calculator import RatingReplay
from ingest.loader import EliminationStage, QualifyingStage, RawStanding, TournamentRecord


def _add(result: TournamentResult | None, stats: StandingStats, *, stage: str) -> TournamentResult:
    if result is None:
        result = TournamentResult(
            name=stats.name,
            qualifying_place=None,
            elimination_place=None,
            matches=0,
            points=0.0,
            won=0,
            lost=0,
            goals_for=0,
            goals_against=0,
            external=stats.external,
            corrected_points_per_game=stats.corrected_points_per_game,
            bh1=stats.bh1,
            bh2=stats.bh2,
        )

    updated = replace(
        result,
        matches=result.matches + stats.matches,
        points=result.points + stats.points,
        won=result.won + stats.won,
        lost=result.lost + stats.lost,
        goals_for=result.goals_for + stats.goals_for,
        goals_against=result.goals_against + stats.goals_against,
    )
    if stage == "qualifying":
        return replace(
            updated,
            qualifying_place=best_placement(updated.qualifying_place, stats.place),
            qualifying_matches=updated.qualifying_matches + stats.matches,
            in_qualifying=True,
        )
    return replace(
        updated,
        elimination_place=best_placement(updated.elimination_place, stats.place),
        in_elimination=True,
    )


def _stage_standings(stages: Iterable[QualifyingStage | EliminationStage]) -> list[RawStanding]:
    standings: list[RawStanding] = []
    for stage in stages:
        standings.extend(stage.standings)
    return standings


def merge_tournament(
    tournament: TournamentRecord,
    resolve: Callable[[str], str],
) -> list[TournamentResult]:
    """Merge qualifying and elimination standings per canonical player name.

    Removed or deactivated records are dropped; records missing stats are
    logged and excluded. Order is first appearance, qualifying first.
    """
    merged: dict[str, TournamentResult] = {}
    for stats in iter_active_standings(_stage_standings(tournament.qualifying), resolve):
        merged[stats.name] = _add(merged.get(stats.name), stats, stage="qualifying")
    for stats in iter_active_standings(_stage_standings(tournament.eliminations), resolve):
        merged[stats.name] = _add(merged.get(stats.name), stats, stage="elimination")
    return list(merged.values())


def _tournament_sort_key(result: TournamentResult) -> tuple[int, float]:
    if result.elimination_place is not None:
        return 0, float(result.elimination_place)
    if result.qualifying_place is not None:
        return 1, float(result.qualifying_place)
    return 2, 0.0


def tournament_view(
    tournament: TournamentRecord,
    resolve: Callable[[str], str],
    replay: RatingReplay | None = None,
) -> list[PlayerRow]:
    """Rank one tournament: knockout finishers first, then qualifying order."""
    results = sorted(merge_tournament(tournament, resolve), key=_tournament_sort_key)
    return [
        build_row(
            place=index,
            name=result.name,
            matches=result.matches,
            points=result.points,
            won=result.won,
            lost=result.lost,
            goals_for=result.goals_for,
            goals_against=result.goals_against,
            skill=replay.skill_of(result.name) if replay is not None else 0.0,
            tournaments=1,
            season_points=season_points_for(result.final_place) if result.participated else 0,
            qualifying_place=result.qualifying_place,
            elimination_place=result.elimination_place,
            final_place=result.final_place,
            best_place=result.final_place,
            external=result.external,
            corrected_points_per_game=result.corrected_points_per_game,
            bh1=result.bh1,
            bh2=result.bh2,
        )
        for index, result in enumerate(results, start=1)
    ]


__all__ = ["merge_tournament", "tournament_view"]
