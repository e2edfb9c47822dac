"""Rating domain: canonical match payloads, extraction and the rating engine."""

from domain.extraction import extract_matches
from domain.ratings.common import Belief, HistoryEntry, MatchResult, MatchSummary
from domain.ratings.protocol import Outcome

__all__ = [
    "Belief",
    "HistoryEntry",
    "MatchResult",
    "MatchSummary",
    "Outcome",
    "extract_matches",
]
