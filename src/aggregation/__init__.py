"""Ranking views built from standings and rating replays."""

from aggregation.common import PlayerRow, TournamentResult
from aggregation.highlights import Highlights, view_highlights
from aggregation.overall_view import overall_view
from aggregation.placements import SEASON_POINTS, final_placement, season_points_for
from aggregation.season_view import available_seasons, finale_qualifiers, season_view
from aggregation.standings import StandingDataError, StandingStats
from aggregation.tournament_view import merge_tournament, tournament_view

__all__ = [
    "Highlights",
    "PlayerRow",
    "SEASON_POINTS",
    "StandingDataError",
    "StandingStats",
    "TournamentResult",
    "available_seasons",
    "final_placement",
    "finale_qualifiers",
    "merge_tournament",
    "overall_view",
    "season_points_for",
    "season_view",
    "tournament_view",
    "view_highlights",
]
