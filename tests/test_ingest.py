"""Tests for tournament export parsing and alias resolution."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from ingest.aliases import NameResolver, identity_resolver, load_name_resolver
from ingest.loader import (
    TournamentFormatError,
    load_tournament_dir,
    parse_match,
    parse_timestamp,
    parse_tournament,
)

RAW_TOURNAMENT = {
    "_id": "t-1",
    "name": "Monday Cup",
    "createdAt": "2024-03-04T18:00:00Z",
    "qualifying": [
        {
            "standings": [
                {
                    "_id": "s-1",
                    "name": "Alice",
                    "stats": {"place": 1, "matches": 1, "points": 2, "won": 1, "lost": 0, "goals": 5, "goals_in": 3},
                },
                {"_id": "s-2", "name": "Bob", "removed": True},
            ],
            "rounds": [
                {
                    "matches": [
                        {
                            "valid": True,
                            "team1": {"players": [{"name": "Alice"}]},
                            "team2": {"players": [{"name": "Bob"}]},
                            "result": [5, 3],
                            "timeStart": 1709575200000,
                        },
                        {"valid": False, "team1": None, "team2": None, "result": None},
                    ]
                }
            ],
        }
    ],
    "eliminations": [
        {
            "standings": [],
            "levels": [{"matches": []}],
            "third": {"matches": []},
        }
    ],
}


def test_parse_timestamp_accepts_epoch_millis_and_iso() -> None:
    expected = datetime(2024, 3, 4, 18, 0, tzinfo=UTC)
    assert parse_timestamp(1709575200000) == expected
    assert parse_timestamp("1709575200000") == expected
    assert parse_timestamp("2024-03-04T18:00:00Z") == expected
    assert parse_timestamp("2024-03-04T19:00:00+01:00") == expected
    assert parse_timestamp("2024-03-04T18:00:00") == expected
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_parse_timestamp_rejects_garbage() -> None:
    with pytest.raises(TournamentFormatError, match="unparseable timestamp"):
        parse_timestamp("yesterday")


def test_zero_start_time_counts_as_missing() -> None:
    raw = {
        "valid": True,
        "team1": {"players": [{"name": "Alice"}]},
        "team2": {"players": [{"name": "Bob"}]},
        "result": [5, 3],
        "timeStart": 0,
    }
    assert parse_match(raw).time_start is None


def test_parse_timestamp_keeps_the_iso_offset() -> None:
    parsed = parse_timestamp("2025-01-01T00:30:00+01:00")
    assert parsed is not None
    assert parsed.year == 2025
    assert parsed.utcoffset() == timedelta(hours=1)


def test_parse_tournament_builds_stages() -> None:
    record = parse_tournament(RAW_TOURNAMENT, file_name="monday.json")

    assert record.id == "t-1"
    assert record.name == "Monday Cup"
    assert record.season == 2024
    assert record.file_name == "monday.json"

    stage = record.qualifying[0]
    assert [standing.name for standing in stage.standings] == ["Alice", "Bob"]
    assert stage.standings[1].is_active is False
    assert stage.standings[1].stats is None

    complete, invalid = stage.rounds[0]
    assert complete.completed() == (("Alice",), ("Bob",), (5, 3))
    assert complete.team1_players == ("Alice",)
    assert complete.result == (5, 3)
    assert complete.time_start == datetime(2024, 3, 4, 18, 0, tzinfo=UTC)
    assert invalid.completed() is None

    assert record.eliminations[0].levels == ((),)
    assert record.eliminations[0].third == ()


def test_parse_tournament_requires_date() -> None:
    raw = dict(RAW_TOURNAMENT)
    del raw["createdAt"]
    with pytest.raises(TournamentFormatError, match="has no createdAt date"):
        parse_tournament(raw)


def test_load_tournament_dir_skips_bad_files(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    older = dict(RAW_TOURNAMENT, _id="old", createdAt="2023-05-01T10:00:00Z")
    (tmp_path / "a.json").write_text(json.dumps(older))
    (tmp_path / "b.json").write_text(json.dumps(RAW_TOURNAMENT))
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "undated.json").write_text(json.dumps({"_id": "x"}))

    with caplog.at_level(logging.WARNING):
        tournaments = load_tournament_dir(tmp_path)

    assert [tournament.id for tournament in tournaments] == ["t-1", "old"]
    assert "broken.json" in caplog.text
    assert "undated.json" in caplog.text


def test_load_tournament_dir_requires_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Data directory not found"):
        load_tournament_dir(tmp_path / "missing")


def test_default_resolver_merges_known_aliases() -> None:
    resolver = NameResolver()
    assert resolver("Andy") == "Andreas Metzke"
    assert resolver("Andy M.") == "Andreas Metzke"
    assert resolver("Phi") == "Phi Nguyen-Thien"
    assert resolver("Stranger") == "Stranger"
    assert resolver("") == ""
    assert resolver(None) == ""
    assert resolver.aliases_for("Andreas Metzke") == ["Andreas Metzke", "Andy", "Andy M."]
    assert identity_resolver("Andy") == "Andy"


def test_load_name_resolver_from_toml(tmp_path: Path) -> None:
    aliases_path = tmp_path / "aliases.toml"
    aliases_path.write_text('[aliases]\n"Al" = "Alice Smith"\n')

    resolver = load_name_resolver(aliases_path)
    assert resolver("Al") == "Alice Smith"
    assert resolver("Andy") == "Andy"
    assert resolver.as_dict() == {"Al": "Alice Smith"}


def test_load_name_resolver_rejects_empty_target(tmp_path: Path) -> None:
    aliases_path = tmp_path / "aliases.toml"
    aliases_path.write_text('[aliases]\n"Al" = " "\n')
    with pytest.raises(ValueError, match="must map to a non-empty name"):
        load_name_resolver(aliases_path)


def test_shipped_alias_file_matches_defaults() -> None:
    aliases_path = Path(__file__).resolve().parents[1] / "configs" / "aliases.toml"
    assert load_name_resolver(aliases_path).as_dict() == NameResolver().as_dict()
