"""Tests for per-player analytics."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from aggregation.player_stats import (
    best_rankings,
    elimination_placements,
    head_to_head,
    opponent_stats,
    player_summary,
    skill_deltas,
    teammate_stats,
    top_partners,
    tournament_participation,
)
from domain.ratings.common import HistoryEntry, MatchResult
from domain.ratings.openskill.calculator import PlayerOpenSkillCalculator
from ingest.aliases import identity_resolver
from tournament_builders import at, example_tournaments, standing, tournament


def _history(*games: tuple[tuple[str, ...], tuple[str, ...], tuple[int, int]]) -> dict[str, list[HistoryEntry]]:
    start = datetime(2024, 4, 1, 18, 0)
    matches = [
        MatchResult(
            event_time=start + timedelta(minutes=index),
            team1_players=team1,
            team2_players=team2,
            team1_score=score[0],
            team2_score=score[1],
        )
        for index, (team1, team2, score) in enumerate(games)
    ]
    return PlayerOpenSkillCalculator().compute_all(matches).history


GAMES = (
    (("Alice", "Carol"), ("Bob", "Dave"), (10, 4)),
    (("Alice", "Carol"), ("Bob", "Eve"), (10, 8)),
    (("Alice", "Bob"), ("Carol", "Dave"), (6, 10)),
    (("Alice", "Dave"), ("Bob", "Carol"), (7, 7)),
    (("Alice", "Carol"), ("Bob", "Dave"), (3, 10)),
)


def test_player_summary_excludes_prior_entry() -> None:
    history = _history(*GAMES)["Alice"]
    summary = player_summary(history)

    assert summary.total_matches == 5
    assert summary.wins == 2
    assert summary.losses == 3
    assert summary.win_rate == pytest.approx(40.0)
    assert summary.initial_skill == pytest.approx(0.0)
    assert summary.skill_change == pytest.approx(summary.current_skill)
    assert len(skill_deltas(history)) == 5
    assert sum(skill_deltas(history)) == pytest.approx(summary.skill_change)


def test_top_partners_sorted_by_wins() -> None:
    partners = top_partners(_history(*GAMES)["Alice"], "Alice")

    assert partners[0].name == "Carol"
    assert partners[0].matches == 3
    assert partners[0].wins == 2
    assert partners[0].win_rate == pytest.approx(66.7)
    assert {partner.name for partner in partners} == {"Carol", "Bob", "Dave"}


def test_opponent_stats_require_minimum_matches() -> None:
    stats = opponent_stats(_history(*GAMES)["Alice"], "Alice")

    assert [record.name for record in stats.won_most_against][0] == "Bob"
    assert "Eve" not in [record.name for record in stats.won_most_against]
    assert stats.lost_most_against[0].name == "Carol"
    assert stats.lost_most_against[0].losses == 2


def test_head_to_head_and_teammate_records_ignore_draws() -> None:
    history = _history(*GAMES)["Alice"]

    versus_bob = head_to_head(history, "Alice", "Bob")
    assert versus_bob.total_matches == 4
    assert versus_bob.player_wins == 2
    assert versus_bob.other_wins == 1

    with_carol = teammate_stats(history, "Alice", "Carol")
    assert with_carol.total_matches == 3
    assert with_carol.wins == 2
    assert with_carol.losses == 1

    with_dave = teammate_stats(history, "Alice", "Dave")
    assert with_dave.total_matches == 1
    assert with_dave.wins == 0
    assert with_dave.losses == 0


def test_elimination_placements_and_best_rankings() -> None:
    tournaments = [
        tournament(
            "late",
            at(2024, 9, 1),
            qualifying_standings=(standing("Alice", 1),),
            elimination_standings=(standing("Alice", 3),),
        ),
        tournament("q-only", at(2024, 5, 1), qualifying_standings=(standing("Alice", 1),)),
        tournament("early", at(2024, 2, 1), elimination_standings=(standing("Alice", 1),)),
        tournament("mid", at(2024, 4, 1), elimination_standings=(standing("Alice", 3),)),
    ]

    placements = elimination_placements("Alice", tournaments, identity_resolver)
    assert [(place, record.id) for place, record in placements] == [(1, "early"), (3, "mid"), (3, "late")]

    rankings = best_rankings("Alice", tournaments, identity_resolver)
    assert [(ranking.place, ranking.count) for ranking in rankings] == [(1, 1), (3, 2)]
    assert [item.tournament for item in rankings[1].tournaments] == ["Tournament mid", "Tournament late"]


def test_tournament_participation_newest_first() -> None:
    tournaments = example_tournaments() + [
        tournament(
            "zero",
            at(2023, 3, 1),
            qualifying_standings=(standing("Alice", 4, matches=0),),
            elimination_standings=(standing("Alice", 2),),
        )
    ]

    participations = tournament_participation("Alice", tournaments, identity_resolver)
    assert [item.name for item in participations] == ["Tournament B", "Tournament A", "Tournament zero"]
    assert participations[0].qualifying_place is None
    assert participations[0].final_place == 1
    assert participations[1].qualifying_place == 1
    assert participations[1].season_points == 25
    assert participations[2].qualifying_place is None
    assert participations[2].elimination_place == 2
    assert participations[2].season_points == 20
