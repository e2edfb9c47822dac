"""Tests for flattening tournaments into the chronological match list."""

from __future__ import annotations

from dataclasses import replace

from domain.extraction import extract_matches
from ingest.aliases import NameResolver, identity_resolver
from ingest.loader import EliminationStage
from tournament_builders import at, match, standing, tournament


def test_only_complete_matches_are_extracted() -> None:
    record = tournament(
        "T",
        at(2024, 2, 1),
        qualifying_matches=(
            match(("Alice",), ("Bob",), (5, 3)),
            match(("Alice",), ("Carol",), (5, 1), valid=False),
            match(("Bob",), ("Carol",), (5, 2), skipped=True),
            match(("Bob",), ("Dave",), None),
        ),
    )

    matches = extract_matches([record], identity_resolver)
    assert len(matches) == 1
    assert matches[0].team1_players == ("Alice",)
    assert matches[0].tournament_id == "T"
    assert matches[0].stage == "qualifying"


def test_event_time_falls_back_to_tournament_date() -> None:
    record = tournament(
        "T",
        at(2024, 2, 1),
        qualifying_matches=(
            match(("Alice",), ("Bob",), (5, 3)),
            match(("Carol",), ("Dave",), (5, 3), time_start=at(2024, 2, 1, 19)),
        ),
    )

    first, second = extract_matches([record], identity_resolver)
    assert first.event_time == at(2024, 2, 1)
    assert second.event_time == at(2024, 2, 1, 19)


def test_matches_are_sorted_by_time_and_ties_keep_discovery_order() -> None:
    newer = tournament(
        "new",
        at(2024, 5, 1),
        qualifying_matches=(match(("Alice",), ("Bob",), (5, 3)),),
    )
    older = tournament(
        "old",
        at(2024, 1, 1),
        qualifying_matches=(
            match(("Carol",), ("Dave",), (1, 5)),
            match(("Alice",), ("Carol",), (5, 4)),
        ),
        elimination_standings=(standing("Alice", 1),),
        elimination_matches=(match(("Alice",), ("Dave",), (5, 0)),),
        third=(match(("Bob",), ("Carol",), (2, 5)),),
    )

    matches = extract_matches([newer, older], identity_resolver)
    assert [item.tournament_id for item in matches] == ["old", "old", "old", "old", "new"]
    assert [item.stage for item in matches[:4]] == ["qualifying", "qualifying", "elimination", "third"]
    assert matches[0].team1_players == ("Carol",)


def test_every_elimination_stage_is_walked() -> None:
    record = replace(
        tournament("T", at(2024, 2, 1)),
        eliminations=(
            EliminationStage(levels=((match(("Alice",), ("Bob",), (5, 3)),),)),
            EliminationStage(levels=((match(("Carol",), ("Dave",), (5, 3)),),)),
        ),
    )
    assert len(extract_matches([record], identity_resolver)) == 2


def test_names_are_resolved_and_empty_names_dropped() -> None:
    record = tournament(
        "T",
        at(2024, 2, 1),
        qualifying_matches=(match(("Andy M.", ""), ("Moe",), (5, 3)),),
    )

    (extracted,) = extract_matches([record], NameResolver())
    assert extracted.team1_players == ("Andreas Metzke",)
    assert extracted.team2_players == ("Manuel Butollo",)
