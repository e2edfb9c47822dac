"""Unit tests for the player OpenSkill replay."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from domain.ratings.common import MatchResult
from domain.ratings.openskill.calculator import OpenSkillParameters, PlayerOpenSkillCalculator
from domain.ratings.protocol import Outcome, RatingEngine, outcome_for_scores


def _match(
    team1: tuple[str, ...],
    team2: tuple[str, ...],
    score: tuple[int, int],
    minute: int = 0,
) -> MatchResult:
    return MatchResult(
        event_time=datetime(2024, 3, 1, 12, 0) + timedelta(minutes=minute),
        team1_players=team1,
        team2_players=team2,
        team1_score=score[0],
        team2_score=score[1],
    )


def test_openskill_parameter_defaults_are_expected_constants() -> None:
    params = OpenSkillParameters()
    assert params.initial_mu == pytest.approx(25.0)
    assert params.initial_sigma == pytest.approx(25.0 / 3.0)
    assert params.beta == pytest.approx(25.0 / 6.0)
    assert params.kappa == pytest.approx(0.0001)
    assert params.tau == pytest.approx(25.0 / 300.0)
    assert params.limit_sigma is False
    assert params.balance is False
    assert params.ordinal_z == pytest.approx(3.0)
    assert params.model == "thurstone_mosteller_full"


def test_prior_conservative_skill_is_zero() -> None:
    calculator = PlayerOpenSkillCalculator()
    assert calculator.conservative_skill(calculator.initialize()) == pytest.approx(0.0)
    assert calculator.conservative_skill(None) == 0.0


def test_calculator_satisfies_rating_engine_protocol() -> None:
    assert isinstance(PlayerOpenSkillCalculator(), RatingEngine)


def test_unknown_model_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown openskill model"):
        PlayerOpenSkillCalculator(OpenSkillParameters(model="trueskill"))


def test_outcome_for_scores_maps_to_ranks() -> None:
    assert outcome_for_scores(5, 3) is Outcome.TEAM1_WINS
    assert outcome_for_scores(2, 6) is Outcome.TEAM2_WINS
    assert outcome_for_scores(4, 4) is Outcome.DRAW
    assert Outcome.TEAM1_WINS.ranks == [1, 2]
    assert Outcome.TEAM2_WINS.ranks == [2, 1]
    assert Outcome.DRAW.ranks == [1, 1]


def test_winner_mu_rises_and_loser_mu_falls() -> None:
    calculator = PlayerOpenSkillCalculator()
    prior = calculator.initialize()
    (winner,), (loser,) = calculator.rate_pair([prior], [prior], Outcome.TEAM1_WINS)

    assert winner.mu > prior.mu
    assert loser.mu < prior.mu
    assert winner.sigma < prior.sigma


def test_draw_between_equal_teams_leaves_mu_unchanged() -> None:
    calculator = PlayerOpenSkillCalculator()
    prior = calculator.initialize()
    team1_post, team2_post = calculator.rate_pair([prior, prior], [prior, prior], Outcome.DRAW)

    for belief in team1_post + team2_post:
        assert belief.mu == pytest.approx(prior.mu, abs=1e-9)


def test_rate_pair_rejects_empty_team() -> None:
    calculator = PlayerOpenSkillCalculator()
    with pytest.raises(ValueError, match="empty team"):
        calculator.rate_pair([], [calculator.initialize()], Outcome.TEAM2_WINS)


def test_compute_all_seeds_prior_history_entries() -> None:
    calculator = PlayerOpenSkillCalculator()
    matches = [
        _match(("Alice",), ("Bob",), (5, 3)),
        _match(("Carol",), ("Alice",), (2, 5), minute=10),
    ]
    replay = calculator.compute_all(matches)

    assert list(replay.history) == ["Alice", "Bob", "Carol"]
    for entries in replay.history.values():
        prior = entries[0]
        assert prior.match_index == -1
        assert prior.is_prior
        assert prior.match is None
        assert prior.event_time == matches[0].event_time
        assert prior.skill == pytest.approx(0.0)

    assert [entry.match_index for entry in replay.history["Alice"]] == [-1, 0, 1]
    assert [entry.match_index for entry in replay.history["Carol"]] == [-1, 1]


def test_history_records_personal_win_flag() -> None:
    calculator = PlayerOpenSkillCalculator()
    replay = calculator.compute_all(
        [
            _match(("Alice", "Carol"), ("Bob", "Dave"), (10, 4)),
            _match(("Alice",), ("Bob",), (3, 3), minute=5),
        ]
    )

    alice_first = replay.history["Alice"][1].match
    bob_first = replay.history["Bob"][1].match
    assert alice_first is not None and alice_first.won is True
    assert bob_first is not None and bob_first.won is False

    alice_draw = replay.history["Alice"][2].match
    bob_draw = replay.history["Bob"][2].match
    assert alice_draw is not None and alice_draw.won is False
    assert bob_draw is not None and bob_draw.won is False


def test_replay_is_deterministic() -> None:
    matches = [
        _match(("Alice", "Carol"), ("Bob", "Dave"), (10, 4)),
        _match(("Alice", "Bob"), ("Carol", "Dave"), (7, 9), minute=5),
        _match(("Bob",), ("Carol",), (5, 2), minute=9),
    ]
    first = PlayerOpenSkillCalculator().compute_all(matches)
    second = PlayerOpenSkillCalculator().compute_all(matches)

    assert first.ratings == second.ratings
    assert first.history == second.history


def test_disjoint_matches_are_order_insensitive() -> None:
    match_ab = _match(("Alice",), ("Bob",), (5, 1))
    match_cd = _match(("Carol",), ("Dave",), (2, 5))

    forward = PlayerOpenSkillCalculator().compute_all([match_ab, match_cd])
    backward = PlayerOpenSkillCalculator().compute_all([match_cd, match_ab])

    for player in ("Alice", "Bob", "Carol", "Dave"):
        assert forward.ratings[player].mu == pytest.approx(backward.ratings[player].mu)
        assert forward.ratings[player].sigma == pytest.approx(backward.ratings[player].sigma)


def test_matches_sharing_a_player_are_order_sensitive() -> None:
    match_ab = _match(("Alice",), ("Bob",), (5, 1))
    match_bc = _match(("Bob",), ("Carol",), (5, 1))

    forward = PlayerOpenSkillCalculator().compute_all([match_ab, match_bc])
    backward = PlayerOpenSkillCalculator().compute_all([match_bc, match_ab])

    assert forward.ratings["Bob"].mu != pytest.approx(backward.ratings["Bob"].mu)


def test_empty_roster_is_skipped_and_replay_continues() -> None:
    calculator = PlayerOpenSkillCalculator()
    replay = calculator.compute_all(
        [
            _match((), ("Bob",), (5, 3)),
            _match(("Alice",), ("Bob",), (5, 3), minute=1),
        ]
    )

    assert replay.skipped_matches == [0]
    assert [entry.match_index for entry in replay.history["Bob"]] == [-1, 1]
    assert replay.ratings["Alice"].mu > 25.0


def test_player_on_both_teams_is_skipped_without_touching_ratings() -> None:
    calculator = PlayerOpenSkillCalculator()
    replay = calculator.compute_all([_match(("Alice", "Bob"), ("Alice", "Carol"), (5, 3))])

    assert replay.skipped_matches == [0]
    assert replay.ratings == {}
    assert len(replay.history["Alice"]) == 1
    assert replay.skill_of("Alice") == 0.0


def test_export_reports_skill_mu_and_sigma() -> None:
    replay = PlayerOpenSkillCalculator().compute_all([_match(("Alice",), ("Bob",), (5, 3))])
    exported = replay.export()

    assert set(exported) == {"Alice", "Bob"}
    alice = exported["Alice"]
    assert alice["skill"] == pytest.approx(alice["mu"] - 3.0 * alice["sigma"])
    assert replay.skill_of("Nobody") == 0.0


def test_plackett_luce_model_is_selectable() -> None:
    calculator = PlayerOpenSkillCalculator(OpenSkillParameters(model="plackett_luce"))
    replay = calculator.compute_all([_match(("Alice",), ("Bob",), (5, 3))])
    assert replay.ratings["Alice"].mu > replay.ratings["Bob"].mu
