"""Headline figures shown above a ranking table."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from aggregation.common import PlayerRow

BEST_WIN_RATE_MIN_MATCHES = 3


@dataclass(frozen=True)
class Highlights:
    total_players: int
    total_matches: int
    top_scorer: PlayerRow | None
    best_win_rate: PlayerRow | None
    leader: PlayerRow | None


def view_highlights(rows: Sequence[PlayerRow]) -> Highlights:
    if not rows:
        return Highlights(0, 0, None, None, None)

    top_scorer = rows[0]
    for row in rows[1:]:
        if row.goals_for > top_scorer.goals_for:
            top_scorer = row

    best_win_rate = None
    for row in rows:
        if row.matches < BEST_WIN_RATE_MIN_MATCHES:
            continue
        if best_win_rate is None or row.win_rate > best_win_rate.win_rate:
            best_win_rate = row

    return Highlights(
        total_players=len(rows),
        total_matches=sum(row.matches for row in rows),
        top_scorer=top_scorer,
        best_win_rate=best_win_rate,
        leader=rows[0],
    )


__all__ = ["BEST_WIN_RATE_MIN_MATCHES", "Highlights", "view_highlights"]
