"""Shared types for the player rating replay."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Belief:
    """Gaussian estimate (mu, sigma) of one player's latent skill."""

    mu: float
    sigma: float


@dataclass(frozen=True)
class MatchResult:
    """Canonical two-team match payload consumed by the rating engine."""

    event_time: datetime
    team1_players: tuple[str, ...]
    team2_players: tuple[str, ...]
    team1_score: int
    team2_score: int
    tournament_id: str | None = None
    stage: str | None = None

    @property
    def players(self) -> tuple[str, ...]:
        return self.team1_players + self.team2_players


@dataclass(frozen=True)
class MatchSummary:
    """Denormalized match view stored on each history entry."""

    team1_players: tuple[str, ...]
    team2_players: tuple[str, ...]
    team1_score: int
    team2_score: int
    won: bool

    def team_of(self, player: str) -> tuple[str, ...]:
        return self.team1_players if player in self.team1_players else self.team2_players

    def opponents_of(self, player: str) -> tuple[str, ...]:
        return self.team2_players if player in self.team1_players else self.team1_players

    def score_for(self, player: str) -> tuple[int, int]:
        """Return (own_score, opponent_score) from the player's point of view."""
        if player in self.team1_players:
            return self.team1_score, self.team2_score
        return self.team2_score, self.team1_score


@dataclass(frozen=True)
class HistoryEntry:
    """One belief snapshot in a player's rating history.

    ``match_index`` is the global replay position; ``-1`` marks the prior
    entry recorded before the player's first match, which has no ``match``.
    """

    match_index: int
    event_time: datetime
    belief: Belief
    skill: float
    match: MatchSummary | None = None

    @property
    def is_prior(self) -> bool:
        return self.match_index < 0
