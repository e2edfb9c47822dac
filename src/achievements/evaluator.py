"""Evaluate the badge catalog for one player.

Tournament-count badges scan knockout placements tournament by tournament.
Match milestones and win streaks scan the rating history match by match.
The two passes use separate orderings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from achievements.catalog import BADGES, CATEGORY_ORDER, BadgeDefinition, Metric
from aggregation.common import PlayerRow
from aggregation.player_stats import TournamentParticipation, player_summary, rated_matches
from domain.ratings.common import HistoryEntry
from ingest.loader import TournamentRecord


@dataclass(frozen=True)
class MetricValue:
    current: float | None
    # event time at which each threshold was first reached, keyed by threshold
    reached_on: Mapping[float, datetime] = field(default_factory=dict)


@dataclass(frozen=True)
class BadgeStatus:
    badge: BadgeDefinition
    unlocked: bool
    current: float | None
    unlocked_on: datetime | None = None

    @property
    def progress(self) -> float:
        """Completion ratio in [0, 1]."""
        if self.unlocked:
            return 1.0
        if self.current is None or self.current <= 0:
            return 0.0
        if self.badge.lower_is_better:
            return min(1.0, self.badge.threshold / self.current)
        return max(0.0, min(1.0, self.current / self.badge.threshold))


@dataclass(frozen=True)
class AchievementReport:
    unlocked: list[BadgeStatus]
    in_progress: list[BadgeStatus]

    def top_progress(self, limit: int = 5) -> list[BadgeStatus]:
        return self.in_progress[:limit]


@dataclass(frozen=True)
class AchievementContext:
    """Everything the evaluator reads for one player."""

    player: str
    history: Sequence[HistoryEntry]
    overall_row: PlayerRow | None = None
    elimination_placements: Sequence[tuple[int, TournamentRecord]] = ()
    participations: Sequence[TournamentParticipation] = ()
    season_rows: Mapping[int, Sequence[PlayerRow]] = field(default_factory=dict)


def _count_reached(dates: Iterable[datetime], thresholds: Iterable[float]) -> MetricValue:
    """Cumulative count over chronologically ordered events."""
    ordered = list(dates)
    reached = {
        threshold: ordered[int(threshold) - 1]
        for threshold in thresholds
        if 0 < threshold <= len(ordered)
    }
    return MetricValue(current=float(len(ordered)), reached_on=reached)


def _placement_metric(
    placements: Sequence[tuple[int, TournamentRecord]],
    max_place: int,
    thresholds: Iterable[float],
) -> MetricValue:
    dates = [tournament.date for place, tournament in placements if place <= max_place]
    return _count_reached(dates, thresholds)


def longest_win_streak(history: Sequence[HistoryEntry]) -> tuple[int, dict[int, datetime]]:
    """Longest run of consecutive wins, oldest match first.

    Any non-win, draws included, resets the run. Also returns, per streak
    length, the event time at which that length was first reached.
    """
    current = best = 0
    first_reached: dict[int, datetime] = {}
    for entry in sorted(rated_matches(history), key=lambda item: item.match_index):
        if entry.match is None:
            continue
        if entry.match.won:
            current += 1
            if current > best:
                best = current
                first_reached[best] = entry.event_time
        else:
            current = 0
    return best, first_reached


def _partner_metrics(
    history: Sequence[HistoryEntry],
    player: str,
    same_partner_thresholds: Iterable[float],
    distinct_thresholds: Iterable[float],
) -> tuple[MetricValue, MetricValue]:
    wins_by_partner: dict[str, int] = {}
    best = 0
    best_reached: dict[int, datetime] = {}
    distinct_dates: list[datetime] = []
    for entry in rated_matches(history):
        if entry.match is None or not entry.match.won:
            continue
        for partner in entry.match.team_of(player):
            if partner == player:
                continue
            count = wins_by_partner.get(partner, 0) + 1
            wins_by_partner[partner] = count
            if count == 1:
                distinct_dates.append(entry.event_time)
            if count > best:
                best = count
                best_reached[best] = entry.event_time

    same_partner = MetricValue(
        current=float(best),
        reached_on={
            threshold: best_reached[int(threshold)]
            for threshold in same_partner_thresholds
            if int(threshold) in best_reached
        },
    )
    return same_partner, _count_reached(distinct_dates, distinct_thresholds)


def _season_metrics(player: str, season_rows: Mapping[int, Sequence[PlayerRow]]) -> tuple[MetricValue, MetricValue]:
    best_rank: int | None = None
    best_points = 0
    for rows in season_rows.values():
        for row in rows:
            if row.name != player:
                continue
            best_rank = row.place if best_rank is None else min(best_rank, row.place)
            best_points = max(best_points, row.season_points)
    return (
        MetricValue(current=None if best_rank is None else float(best_rank)),
        MetricValue(current=float(best_points)),
    )


def _thresholds(metric: Metric) -> list[float]:
    return [badge.threshold for badge in BADGES if badge.metric is metric]


def collect_metrics(context: AchievementContext) -> dict[Metric, MetricValue]:
    history = context.history
    matches = rated_matches(history)
    summary = player_summary(history)

    match_dates = [entry.event_time for entry in matches]
    win_dates = [entry.event_time for entry in matches if entry.match is not None and entry.match.won]
    participations = sorted(context.participations, key=lambda item: item.date)

    season_dates: list[datetime] = []
    seen_seasons: set[int] = set()
    for participation in participations:
        if participation.date.year not in seen_seasons:
            seen_seasons.add(participation.date.year)
            season_dates.append(participation.date)

    streak, streak_reached = longest_win_streak(history)
    same_partner, distinct_partners = _partner_metrics(
        history,
        context.player,
        _thresholds(Metric.PARTNER_WINS),
        _thresholds(Metric.WINNING_PARTNERS),
    )
    season_rank, season_points = _season_metrics(context.player, context.season_rows)
    goal_diff = context.overall_row.goal_diff if context.overall_row is not None else 0

    return {
        Metric.TOURNAMENT_WINS: _placement_metric(context.elimination_placements, 1, _thresholds(Metric.TOURNAMENT_WINS)),
        Metric.PODIUMS: _placement_metric(context.elimination_placements, 3, _thresholds(Metric.PODIUMS)),
        Metric.TOP5_FINISHES: _placement_metric(context.elimination_placements, 5, _thresholds(Metric.TOP5_FINISHES)),
        Metric.MATCHES: _count_reached(match_dates, _thresholds(Metric.MATCHES)),
        Metric.WINS: _count_reached(win_dates, _thresholds(Metric.WINS)),
        Metric.TOURNAMENTS: _count_reached(
            [participation.date for participation in participations],
            _thresholds(Metric.TOURNAMENTS),
        ),
        Metric.SEASONS: _count_reached(season_dates, _thresholds(Metric.SEASONS)),
        Metric.WIN_RATE: MetricValue(current=summary.win_rate),
        Metric.GOAL_DIFF: MetricValue(current=float(goal_diff)),
        Metric.SKILL: MetricValue(current=summary.current_skill),
        Metric.WIN_STREAK: MetricValue(
            current=float(streak),
            reached_on={
                threshold: streak_reached[int(threshold)]
                for threshold in _thresholds(Metric.WIN_STREAK)
                if int(threshold) in streak_reached
            },
        ),
        Metric.PARTNER_WINS: same_partner,
        Metric.WINNING_PARTNERS: distinct_partners,
        Metric.SEASON_RANK: season_rank,
        Metric.SEASON_POINTS: season_points,
    }


def _is_unlocked(badge: BadgeDefinition, value: MetricValue, total_matches: int) -> bool:
    if value.current is None:
        return False
    if badge.min_matches is not None and total_matches < badge.min_matches:
        return False
    if badge.lower_is_better:
        return value.current <= badge.threshold
    return value.current >= badge.threshold


def evaluate_achievements(context: AchievementContext) -> AchievementReport:
    metrics = collect_metrics(context)
    total_matches = len(rated_matches(context.history))

    unlocked: list[BadgeStatus] = []
    in_progress: list[BadgeStatus] = []
    for badge in BADGES:
        value = metrics[badge.metric]
        if _is_unlocked(badge, value, total_matches):
            unlocked.append(
                BadgeStatus(
                    badge=badge,
                    unlocked=True,
                    current=value.current,
                    unlocked_on=value.reached_on.get(badge.threshold),
                )
            )
        else:
            in_progress.append(BadgeStatus(badge=badge, unlocked=False, current=value.current))

    unlocked.sort(key=lambda status: (CATEGORY_ORDER[status.badge.category], status.badge.tier))
    in_progress.sort(key=lambda status: -status.progress)
    return AchievementReport(unlocked=unlocked, in_progress=in_progress)


__all__ = [
    "AchievementContext",
    "AchievementReport",
    "BadgeStatus",
    "MetricValue",
    "collect_metrics",
    "evaluate_achievements",
    "longest_win_streak",
]
