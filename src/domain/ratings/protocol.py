"""Shared protocols and enums for the rating engine."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Protocol, runtime_checkable

from domain.ratings.common import Belief, MatchResult


class Outcome(str, Enum):
    """Result of a two-team match from team 1's point of view."""

    TEAM1_WINS = "team1_wins"
    TEAM2_WINS = "team2_wins"
    DRAW = "draw"

    @property
    def ranks(self) -> list[int]:
        """Rank ordering for the update step; lower is better, equal means draw."""
        if self is Outcome.TEAM1_WINS:
            return [1, 2]
        if self is Outcome.TEAM2_WINS:
            return [2, 1]
        return [1, 1]


def outcome_for_scores(team1_score: int, team2_score: int) -> Outcome:
    if team1_score > team2_score:
        return Outcome.TEAM1_WINS
    if team2_score > team1_score:
        return Outcome.TEAM2_WINS
    return Outcome.DRAW


@runtime_checkable
class RatingEngine(Protocol):
    """Contract the replay driver relies on."""

    def initialize(self) -> Belief: ...

    def rate_pair(
        self,
        team1: Sequence[Belief],
        team2: Sequence[Belief],
        outcome: Outcome,
    ) -> tuple[list[Belief], list[Belief]]: ...

    def conservative_skill(self, belief: Belief | None) -> float: ...

    def compute_all(self, matches: Sequence[MatchResult]) -> object: ...


__all__ = ["Outcome", "RatingEngine", "outcome_for_scores"]
