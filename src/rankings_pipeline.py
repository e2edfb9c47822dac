"""One-call orchestration: extract, replay once, then build every view."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from achievements.evaluator import AchievementContext, AchievementReport, evaluate_achievements
from aggregation.common import PlayerRow
from aggregation.overall_view import overall_view
from aggregation.player_stats import (
    BestRanking,
    OpponentStats,
    PairRecord,
    PlayerSummary,
    TournamentParticipation,
    best_rankings,
    elimination_placements,
    opponent_stats,
    player_summary,
    skill_deltas,
    top_partners,
    tournament_participation,
)
from aggregation.season_view import available_seasons, season_view
from aggregation.tournament_view import tournament_view
from domain.extraction import extract_matches
from domain.ratings.common import HistoryEntry
from domain.ratings.openskill.calculator import (
    OpenSkillParameters,
    PlayerOpenSkillCalculator,
    RatingReplay,
)
from ingest.loader import TournamentRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingReport:
    replay: RatingReplay
    overall: list[PlayerRow]
    # keyed by tournament id, in input order
    tournaments: dict[str, list[PlayerRow]] = field(default_factory=dict)
    # keyed by calendar year, newest first
    seasons: dict[int, list[PlayerRow]] = field(default_factory=dict)

    @property
    def history(self) -> dict[str, list[HistoryEntry]]:
        return self.replay.history

    def overall_row(self, name: str) -> PlayerRow | None:
        for row in self.overall:
            if row.name == name:
                return row
        return None


@dataclass(frozen=True)
class PlayerReport:
    name: str
    summary: PlayerSummary
    overall_row: PlayerRow | None
    skill_deltas: list[float]
    partners: list[PairRecord]
    opponents: OpponentStats
    best_rankings: list[BestRanking]
    participations: list[TournamentParticipation]
    achievements: AchievementReport


def build_rankings(
    tournaments: Sequence[TournamentRecord],
    resolve: Callable[[str], str],
    params: OpenSkillParameters | None = None,
) -> RankingReport:
    """Replay every match once and build the overall, tournament and season views."""
    matches = extract_matches(tournaments, resolve)
    calculator = PlayerOpenSkillCalculator(params)
    replay = calculator.compute_all(matches)
    logger.info(
        "replayed tournaments=%d matches=%d players=%d skipped=%d",
        len(tournaments),
        len(matches),
        len(replay.ratings),
        len(replay.skipped_matches),
    )

    return RankingReport(
        replay=replay,
        overall=overall_view(tournaments, resolve, replay),
        tournaments={
            tournament.id: tournament_view(tournament, resolve, replay) for tournament in tournaments
        },
        seasons={
            season: season_view(tournaments, season, resolve, params=params)
            for season in available_seasons(tournaments)
        },
    )


def player_report(
    report: RankingReport,
    name: str,
    tournaments: Sequence[TournamentRecord],
    resolve: Callable[[str], str],
) -> PlayerReport:
    """Analytics and achievements for one canonical player name."""
    history = report.history.get(name, [])
    overall_row = report.overall_row(name)
    participations = tournament_participation(name, tournaments, resolve)
    context = AchievementContext(
        player=name,
        history=history,
        overall_row=overall_row,
        elimination_placements=elimination_placements(name, tournaments, resolve),
        participations=participations,
        season_rows=report.seasons,
    )
    return PlayerReport(
        name=name,
        summary=player_summary(history),
        overall_row=overall_row,
        skill_deltas=skill_deltas(history),
        partners=top_partners(history, name),
        opponents=opponent_stats(history, name),
        best_rankings=best_rankings(name, tournaments, resolve),
        participations=participations,
        achievements=evaluate_achievements(context),
    )


__all__ = ["PlayerReport", "RankingReport", "build_rankings", "player_report"]
