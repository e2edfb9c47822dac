"""Rating-system domain modules."""

from domain.ratings.common import Belief, HistoryEntry, MatchResult, MatchSummary
from domain.ratings.protocol import Outcome, RatingEngine, outcome_for_scores

__all__ = [
    "Belief",
    "HistoryEntry",
    "MatchResult",
    "MatchSummary",
    "Outcome",
    "RatingEngine",
    "outcome_for_scores",
]
