"""Fixed catalog of milestone badges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    TOURNAMENT = "tournament"
    MILESTONE = "milestone"
    PERFORMANCE = "performance"
    SKILL = "skill"
    STREAK = "streak"
    PARTNERSHIP = "partnership"
    SEASON = "season"


CATEGORY_ORDER = {category: index for index, category in enumerate(Category, start=1)}


class Metric(str, Enum):
    TOURNAMENT_WINS = "tournament_wins"
    PODIUMS = "podiums"
    TOP5_FINISHES = "top5_finishes"
    MATCHES = "matches"
    WINS = "wins"
    TOURNAMENTS = "tournaments"
    SEASONS = "seasons"
    WIN_RATE = "win_rate"
    GOAL_DIFF = "goal_diff"
    SKILL = "skill"
    WIN_STREAK = "win_streak"
    PARTNER_WINS = "partner_wins"
    WINNING_PARTNERS = "winning_partners"
    SEASON_RANK = "season_rank"
    SEASON_POINTS = "season_points"


@dataclass(frozen=True)
class BadgeDefinition:
    id: str
    emoji: str
    name: str
    description: str
    category: Category
    tier: int
    metric: Metric
    threshold: float
    min_matches: int | None = None
    lower_is_better: bool = False


T, M, P, S = Category.TOURNAMENT, Category.MILESTONE, Category.PERFORMANCE, Category.SKILL

BADGES: tuple[BadgeDefinition, ...] = (
    BadgeDefinition("firstPlace", "🥇", "First Place", "Win your first tournament", T, 1, Metric.TOURNAMENT_WINS, 1),
    BadgeDefinition("champion3", "🏆", "Champion", "Win 3 tournaments", T, 2, Metric.TOURNAMENT_WINS, 3),
    BadgeDefinition("champion5", "👑", "Elite Champion", "Win 5 tournaments", T, 3, Metric.TOURNAMENT_WINS, 5),
    BadgeDefinition("champion10", "💎", "Legendary Champion", "Win 10 tournaments", T, 4, Metric.TOURNAMENT_WINS, 10),
    BadgeDefinition("podium3", "🥉", "Podium Finisher", "Finish in top 3 (3 times)", T, 1, Metric.PODIUMS, 3),
    BadgeDefinition("podium5", "🎖️", "Consistent Podium", "Finish in top 3 (5 times)", T, 2, Metric.PODIUMS, 5),
    BadgeDefinition("top5_5", "⭐", "Consistent Performer", "Finish in top 5 (5 times)", T, 1, Metric.TOP5_FINISHES, 5),
    BadgeDefinition("top5_10", "🌟", "Elite Performer", "Finish in top 5 (10 times)", T, 2, Metric.TOP5_FINISHES, 10),
    BadgeDefinition("matches50", "🎯", "Veteran", "Play 50 matches", M, 1, Metric.MATCHES, 50),
    BadgeDefinition("matches100", "🎖️", "Centurion", "Play 100 matches", M, 2, Metric.MATCHES, 100),
    BadgeDefinition("matches250", "🏅", "Master", "Play 250 matches", M, 3, Metric.MATCHES, 250),
    BadgeDefinition("matches500", "💫", "Legend", "Play 500 matches", M, 4, Metric.MATCHES, 500),
    BadgeDefinition("wins25", "🔥", "Winner", "Win 25 matches", M, 1, Metric.WINS, 25),
    BadgeDefinition("wins50", "⚡", "Dominator", "Win 50 matches", M, 2, Metric.WINS, 50),
    BadgeDefinition("wins100", "💥", "Champion", "Win 100 matches", M, 3, Metric.WINS, 100),
    BadgeDefinition("wins250", "🚀", "Unstoppable", "Win 250 matches", M, 4, Metric.WINS, 250),
    BadgeDefinition("tournaments10", "📅", "Regular", "Play in 10 tournaments", M, 1, Metric.TOURNAMENTS, 10),
    BadgeDefinition("tournaments25", "📆", "Dedicated", "Play in 25 tournaments", M, 2, Metric.TOURNAMENTS, 25),
    BadgeDefinition("tournaments50", "🗓️", "Veteran Competitor", "Play in 50 tournaments", M, 3, Metric.TOURNAMENTS, 50),
    BadgeDefinition("seasons5", "📊", "Season Veteran", "Play in 5+ seasons", M, 2, Metric.SEASONS, 5),
    BadgeDefinition("winRate60", "🎯", "Sharp Shooter", "Achieve 60%+ win rate (min 20 matches)", P, 1, Metric.WIN_RATE, 60, min_matches=20),
    BadgeDefinition("winRate70", "🎪", "Elite Player", "Achieve 70%+ win rate (min 20 matches)", P, 2, Metric.WIN_RATE, 70, min_matches=20),
    BadgeDefinition("winRate80", "🏆", "Master", "Achieve 80%+ win rate (min 20 matches)", P, 3, Metric.WIN_RATE, 80, min_matches=20),
    BadgeDefinition("goalDiff50", "⚽", "Goal Machine", "Achieve +50 goal difference", P, 1, Metric.GOAL_DIFF, 50),
    BadgeDefinition("goalDiff100", "🔥", "Goal Master", "Achieve +100 goal difference", P, 2, Metric.GOAL_DIFF, 100),
    BadgeDefinition("goalDiff200", "💥", "Goal Legend", "Achieve +200 goal difference", P, 3, Metric.GOAL_DIFF, 200),
    BadgeDefinition("skill20", "⭐", "Rising Star", "Reach skill 20", S, 1, Metric.SKILL, 20),
    BadgeDefinition("skill25", "🌟", "Star Player", "Reach skill 25", S, 2, Metric.SKILL, 25),
    BadgeDefinition("skill30", "💫", "Elite", "Reach skill 30", S, 3, Metric.SKILL, 30),
    BadgeDefinition("skill35", "🏆", "Master", "Reach skill 35", S, 4, Metric.SKILL, 35),
    BadgeDefinition("skill40", "👑", "Grandmaster", "Reach skill 40", S, 5, Metric.SKILL, 40),
    BadgeDefinition("skill45", "💎", "Legend", "Reach skill 45", S, 6, Metric.SKILL, 45),
    BadgeDefinition("skill50", "🚀", "Mythic", "Reach skill 50", S, 7, Metric.SKILL, 50),
    BadgeDefinition("winStreak5", "🔥", "Hot Streak", "Win 5 matches in a row", Category.STREAK, 1, Metric.WIN_STREAK, 5),
    BadgeDefinition("winStreak10", "⚡", "On Fire", "Win 10 matches in a row", Category.STREAK, 2, Metric.WIN_STREAK, 10),
    BadgeDefinition("winStreak15", "💥", "Unstoppable", "Win 15 matches in a row", Category.STREAK, 3, Metric.WIN_STREAK, 15),
    BadgeDefinition("partner10", "🤝", "Dynamic Duo", "Win 10+ matches with the same partner", Category.PARTNERSHIP, 1, Metric.PARTNER_WINS, 10),
    BadgeDefinition("partner5", "👥", "Team Player", "Win with 5+ different partners", Category.PARTNERSHIP, 1, Metric.WINNING_PARTNERS, 5),
    BadgeDefinition("seasonChampion", "🏆", "Season Champion", "Win a season", Category.SEASON, 3, Metric.SEASON_RANK, 1, lower_is_better=True),
    BadgeDefinition("seasonPodium", "🥉", "Season Podium", "Finish top 3 in a season", Category.SEASON, 2, Metric.SEASON_RANK, 3, lower_is_better=True),
    BadgeDefinition("seasonPoints50", "⭐", "Season Star", "Earn 50+ season points in one season", Category.SEASON, 1, Metric.SEASON_POINTS, 50),
    BadgeDefinition("seasonPoints100", "🌟", "Season Elite", "Earn 100+ season points in one season", Category.SEASON, 2, Metric.SEASON_POINTS, 100),
    BadgeDefinition("seasonPoints200", "💎", "Season Legend", "Earn 200+ season points in one season", Category.SEASON, 3, Metric.SEASON_POINTS, 200),
)

BADGES_BY_ID = {badge.id: badge for badge in BADGES}

__all__ = ["BADGES", "BADGES_BY_ID", "BadgeDefinition", "CATEGORY_ORDER", "Category", "Metric"]
