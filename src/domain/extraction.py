"""Flatten tournament records into a chronologically ordered match list."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from domain.ratings.common import MatchResult
from ingest.loader import RawMatch, TournamentRecord

NameResolverFn = Callable[[str], str]


def _iter_stage_matches(tournament: TournamentRecord) -> Iterator[tuple[str, RawMatch]]:
    for stage in tournament.qualifying:
        for round_matches in stage.rounds:
            for match in round_matches:
                yield "qualifying", match
    for stage in tournament.eliminations:
        for level_matches in stage.levels:
            for match in level_matches:
                yield "elimination", match
        for match in stage.third:
            yield "third", match


def _roster(names: tuple[str, ...], resolve: NameResolverFn) -> tuple[str, ...]:
    resolved = (resolve(name) for name in names)
    return tuple(name for name in resolved if name)


def extract_matches(
    tournaments: Iterable[TournamentRecord],
    resolve: NameResolverFn,
) -> list[MatchResult]:
    """Collect every completed match across ``tournaments``, oldest first.

    Ties on event time keep discovery order (tournament order, then
    qualifying rounds, elimination levels, third-place match).
    """
    matches: list[MatchResult] = []
    for tournament in tournaments:
        for stage, raw in _iter_stage_matches(tournament):
            completed = raw.completed()
            if completed is None:
                continue
            team1, team2, result = completed
            matches.append(
                MatchResult(
                    event_time=raw.time_start or tournament.date,
                    team1_players=_roster(team1, resolve),
                    team2_players=_roster(team2, resolve),
                    team1_score=result[0],
                    team2_score=result[1],
                    tournament_id=tournament.id,
                    stage=stage,
                )
            )

    matches.sort(key=lambda match: match.event_time)
    return matches


__all__ = ["NameResolverFn", "extract_matches"]
