"""Per-player analytics derived from rating history and tournament standings."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from aggregation.placements import final_placement, season_points_for, win_rate
from aggregation.tournament_view import merge_tournament
from domain.ratings.common import HistoryEntry
from ingest.loader import TournamentRecord


@dataclass(frozen=True)
class PlayerSummary:
    total_matches: int
    wins: int
    losses: int
    win_rate: float
    current_skill: float
    initial_skill: float

    @property
    def skill_change(self) -> float:
        return self.current_skill - self.initial_skill


@dataclass(frozen=True)
class PairRecord:
    """Win/loss record with one partner or opponent."""

    name: str
    matches: int
    wins: int
    losses: int

    @property
    def win_rate(self) -> float:
        return win_rate(self.wins, self.matches)


@dataclass(frozen=True)
class OpponentStats:
    won_most_against: list[PairRecord]
    lost_most_against: list[PairRecord]


@dataclass(frozen=True)
class HeadToHead:
    total_matches: int
    player_wins: int
    other_wins: int


@dataclass(frozen=True)
class TeammateRecord:
    total_matches: int
    wins: int
    losses: int


@dataclass(frozen=True)
class RankingTournament:
    tournament: str
    date: datetime


@dataclass(frozen=True)
class BestRanking:
    place: int
    count: int
    tournaments: list[RankingTournament]


@dataclass(frozen=True)
class TournamentParticipation:
    name: str
    date: datetime
    qualifying_place: int | None
    elimination_place: int | None
    final_place: int | None
    season_points: int


def rated_matches(history: Sequence[HistoryEntry]) -> list[HistoryEntry]:
    """History without the prior entry, oldest first."""
    return [entry for entry in history if not entry.is_prior and entry.match is not None]


def player_summary(history: Sequence[HistoryEntry]) -> PlayerSummary:
    matches = rated_matches(history)
    wins = sum(1 for entry in matches if entry.match is not None and entry.match.won)
    return PlayerSummary(
        total_matches=len(matches),
        wins=wins,
        losses=len(matches) - wins,
        win_rate=win_rate(wins, len(matches)),
        current_skill=history[-1].skill if history else 0.0,
        initial_skill=history[0].skill if history else 0.0,
    )


def skill_deltas(history: Sequence[HistoryEntry]) -> list[float]:
    """Conservative-skill change caused by each rated match, oldest first."""
    deltas: list[float] = []
    previous = history[0].skill if history else 0.0
    for entry in history:
        if entry.is_prior:
            previous = entry.skill
            continue
        deltas.append(entry.skill - previous)
        previous = entry.skill
    return deltas


def _tally(
    history: Sequence[HistoryEntry],
    player: str,
    pick: Callable[[HistoryEntry], Iterable[str]],
) -> dict[str, list[int]]:
    tally: dict[str, list[int]] = {}
    for entry in rated_matches(history):
        if entry.match is None:
            continue
        for name in pick(entry):
            if name == player:
                continue
            record = tally.setdefault(name, [0, 0, 0])
            record[0] += 1
            if entry.match.won:
                record[1] += 1
            else:
                record[2] += 1
    return tally


def _records(tally: dict[str, list[int]]) -> list[PairRecord]:
    return [
        PairRecord(name=name, matches=counts[0], wins=counts[1], losses=counts[2])
        for name, counts in tally.items()
    ]


def partner_records(history: Sequence[HistoryEntry], player: str) -> list[PairRecord]:
    """Every teammate, sorted by wins then win rate."""
    records = _records(
        _tally(history, player, lambda entry: entry.match.team_of(player) if entry.match else ())
    )
    return sorted(records, key=lambda record: (-record.wins, -record.win_rate))


def top_partners(history: Sequence[HistoryEntry], player: str, limit: int = 3) -> list[PairRecord]:
    return partner_records(history, player)[:limit]


def opponent_stats(
    history: Sequence[HistoryEntry],
    player: str,
    *,
    min_matches: int = 2,
    limit: int = 3,
) -> OpponentStats:
    records = [
        record
        for record in _records(
            _tally(history, player, lambda entry: entry.match.opponents_of(player) if entry.match else ())
        )
        if record.matches >= min_matches
    ]
    won_most = sorted(records, key=lambda record: (-record.wins, -record.win_rate))
    lost_most = sorted(records, key=lambda record: (-record.losses, record.win_rate))
    return OpponentStats(won_most_against=won_most[:limit], lost_most_against=lost_most[:limit])


def head_to_head(history: Sequence[HistoryEntry], player: str, other: str) -> HeadToHead:
    """Matches where ``player`` and ``other`` were opponents; draws count for nobody."""
    total = player_wins = other_wins = 0
    for entry in rated_matches(history):
        match = entry.match
        if match is None:
            continue
        if other not in match.opponents_of(player):
            continue
        total += 1
        own, theirs = match.score_for(player)
        if own > theirs:
            player_wins += 1
        elif theirs > own:
            other_wins += 1
    return HeadToHead(total_matches=total, player_wins=player_wins, other_wins=other_wins)


def teammate_stats(history: Sequence[HistoryEntry], player: str, other: str) -> TeammateRecord:
    """Matches where ``player`` and ``other`` shared a team; draws count for nobody."""
    total = wins = losses = 0
    for entry in rated_matches(history):
        match = entry.match
        if match is None:
            continue
        if other == player or other not in match.team_of(player):
            continue
        total += 1
        own, theirs = match.score_for(player)
        if own > theirs:
            wins += 1
        elif theirs > own:
            losses += 1
    return TeammateRecord(total_matches=total, wins=wins, losses=losses)


def elimination_placements(
    player: str,
    tournaments: Iterable[TournamentRecord],
    resolve: Callable[[str], str],
) -> list[tuple[int, TournamentRecord]]:
    """Knockout placements of ``player``, oldest tournament first.

    Qualifying placements never count as a tournament finish here.
    """
    placements: list[tuple[int, TournamentRecord]] = []
    for tournament in sorted(tournaments, key=lambda item: item.date):
        for result in merge_tournament(tournament, resolve):
            if result.name == player and result.elimination_place is not None:
                placements.append((result.elimination_place, tournament))
    return placements


def best_rankings(
    player: str,
    tournaments: Iterable[TournamentRecord],
    resolve: Callable[[str], str],
    limit: int = 3,
) -> list[BestRanking]:
    grouped: dict[int, list[RankingTournament]] = {}
    for place, tournament in elimination_placements(player, tournaments, resolve):
        grouped.setdefault(place, []).append(RankingTournament(tournament=tournament.name, date=tournament.date))
    return [
        BestRanking(place=place, count=len(grouped[place]), tournaments=grouped[place])
        for place in sorted(grouped)[:limit]
    ]


def tournament_participation(
    player: str,
    tournaments: Iterable[TournamentRecord],
    resolve: Callable[[str], str],
) -> list[TournamentParticipation]:
    """Tournaments ``player`` took part in, newest first."""
    participations: list[TournamentParticipation] = []
    for tournament in tournaments:
        for result in merge_tournament(tournament, resolve):
            if result.name != player or not result.participated:
                continue
            qualifying_place = result.qualifying_place if result.qualifying_matches > 0 else None
            final_place = final_placement(qualifying_place, result.elimination_place)
            participations.append(
                TournamentParticipation(
                    name=tournament.name,
                    date=tournament.date,
                    qualifying_place=qualifying_place,
                    elimination_place=result.elimination_place,
                    final_place=final_place,
                    season_points=season_points_for(final_place),
                )
            )
    participations.sort(key=lambda item: item.date, reverse=True)
    return participations


__all__ = [
    "BestRanking",
    "HeadToHead",
    "OpponentStats",
    "PairRecord",
    "PlayerSummary",
    "RankingTournament",
    "TeammateRecord",
    "TournamentParticipation",
    "best_rankings",
    "elimination_placements",
    "head_to_head",
    "opponent_stats",
    "partner_records",
    "player_summary",
    "rated_matches",
    "skill_deltas",
    "teammate_stats",
    "top_partners",
    "tournament_participation",
]
