"""Row types shared by the ranking views."""

from __future__ import annotations

from dataclasses import dataclass

from aggregation.placements import final_placement, points_per_game, win_rate


@dataclass(frozen=True)
class TournamentResult:
    """One player's merged qualifying + elimination line for one tournament."""

    name: str
    qualifying_place: int | None
    elimination_place: int | None
    matches: int
    points: float
    won: int
    lost: int
    goals_for: int
    goals_against: int
    qualifying_matches: int = 0
    in_qualifying: bool = False
    in_elimination: bool = False
    external: bool = False
    corrected_points_per_game: float | None = None
    bh1: float | None = None
    bh2: float | None = None

    @property
    def final_place(self) -> int | None:
        return final_placement(self.qualifying_place, self.elimination_place)

    @property
    def goal_diff(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def participated(self) -> bool:
        return self.matches > 0 or self.in_elimination


@dataclass(frozen=True)
class PlayerRow:
    """Ranked row handed to the presentation layer."""

    place: int
    name: str
    matches: int
    points: float
    won: int
    lost: int
    goals_for: int
    goals_against: int
    goal_diff: int
    points_per_game: float
    win_rate: float
    skill: float = 0.0
    season_points: int = 0
    tournaments: int = 0
    best_place: int | None = None
    avg_place: float | None = None
    qualifying_place: int | None = None
    elimination_place: int | None = None
    final_place: int | None = None
    finale_status: str | None = None
    external: bool = False
    corrected_points_per_game: float | None = None
    bh1: float | None = None
    bh2: float | None = None


def build_row(
    *,
    name: str,
    matches: int,
    points: float,
    won: int,
    lost: int,
    goals_for: int,
    goals_against: int,
    place: int = 0,
    **extra: object,
) -> PlayerRow:
    """Create a row with goal difference, points per game and win rate derived."""
    return PlayerRow(
        place=place,
        name=name,
        matches=matches,
        points=points,
        won=won,
        lost=lost,
        goals_for=goals_for,
        goals_against=goals_against,
        goal_diff=goals_for - goals_against,
        points_per_game=points_per_game(points, matches),
        win_rate=win_rate(won, matches),
        **extra,  # type: ignore[arg-type]
    )


__all__ = ["PlayerRow", "TournamentResult", "build_row"]
