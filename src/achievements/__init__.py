"""Badge catalog and per-player achievement evaluation."""

from achievements.catalog import BADGES, BADGES_BY_ID, BadgeDefinition, Category, Metric
from achievements.evaluator import (
    AchievementContext,
    AchievementReport,
    BadgeStatus,
    evaluate_achievements,
    longest_win_streak,
)

__all__ = [
    "BADGES",
    "BADGES_BY_ID",
    "AchievementContext",
    "AchievementReport",
    "BadgeDefinition",
    "BadgeStatus",
    "Category",
    "Metric",
    "evaluate_achievements",
    "longest_win_streak",
]
