"""Parse tournament export JSON into typed tournament records."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TournamentFormatError(ValueError):
    """Raised when a tournament export cannot be interpreted."""


@dataclass(frozen=True)
class RawMatch:
    """One match record as exported, before name resolution."""

    valid: bool
    skipped: bool
    team1_players: tuple[str, ...] | None
    team2_players: tuple[str, ...] | None
    result: tuple[int, int] | None
    time_start: datetime | None = None

    def completed(self) -> tuple[tuple[str, ...], tuple[str, ...], tuple[int, int]] | None:
        """Both rosters and the score, or None unless the match was played out."""
        if not self.valid or self.skipped:
            return None
        if self.team1_players is None or self.team2_players is None or self.result is None:
            return None
        return self.team1_players, self.team2_players, self.result


@dataclass(frozen=True)
class RawStanding:
    """Standings row; ``stats`` stays raw and is validated during aggregation."""

    raw_id: str | None
    name: str | None
    deactivated: bool = False
    removed: bool = False
    external: bool = False
    stats: Mapping[str, Any] | None = None

    @property
    def is_active(self) -> bool:
        return not (self.deactivated or self.removed)


@dataclass(frozen=True)
class QualifyingStage:
    standings: tuple[RawStanding, ...] = ()
    rounds: tuple[tuple[RawMatch, ...], ...] = ()


@dataclass(frozen=True)
class EliminationStage:
    standings: tuple[RawStanding, ...] = ()
    levels: tuple[tuple[RawMatch, ...], ...] = ()
    third: tuple[RawMatch, ...] = ()


@dataclass(frozen=True)
class TournamentRecord:
    id: str
    name: str
    date: datetime
    qualifying: tuple[QualifyingStage, ...] = ()
    eliminations: tuple[EliminationStage, ...] = ()
    file_name: str | None = field(default=None, compare=False)

    @property
    def season(self) -> int:
        return self.date.year


def parse_timestamp(value: Any) -> datetime | None:
    """Parse epoch milliseconds or an ISO-8601 string into an aware datetime.

    Epoch values are read as UTC. ISO strings keep their own offset, so the
    calendar year is the one the organiser saw; naive strings are taken as UTC.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(float(value) / 1000.0, tz=UTC)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return datetime.fromtimestamp(int(text) / 1000.0, tz=UTC)
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise TournamentFormatError(f"unparseable timestamp {value!r}") from exc
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed
    raise TournamentFormatError(f"unsupported timestamp type {type(value).__name__}")


def _player_names(team: Any) -> tuple[str, ...] | None:
    if not isinstance(team, Mapping):
        return None
    players = team.get("players")
    if players is None:
        return None
    names: list[str] = []
    for player in players:
        if isinstance(player, Mapping):
            names.append(str(player.get("name") or ""))
        elif isinstance(player, str):
            names.append(player)
    return tuple(names)


def _result(value: Any) -> tuple[int, int] | None:
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 2:
        return None
    if value[0] is None or value[1] is None:
        return None
    try:
        return int(value[0]), int(value[1])
    except (TypeError, ValueError):
        return None


def parse_match(raw: Mapping[str, Any]) -> RawMatch:
    return RawMatch(
        valid=bool(raw.get("valid", False)),
        skipped=bool(raw.get("skipped", False)),
        team1_players=_player_names(raw.get("team1")),
        team2_players=_player_names(raw.get("team2")),
        result=_result(raw.get("result")),
        # a zero start time means the match was never started
        time_start=parse_timestamp(raw.get("timeStart") or None),
    )


def _matches(container: Any) -> tuple[RawMatch, ...]:
    if not isinstance(container, Mapping):
        return ()
    return tuple(parse_match(match) for match in container.get("matches") or () if isinstance(match, Mapping))


def parse_standing(raw: Mapping[str, Any]) -> RawStanding:
    raw_id = raw.get("_id")
    stats = raw.get("stats")
    return RawStanding(
        raw_id=None if raw_id is None else str(raw_id),
        name=raw.get("name"),
        deactivated=bool(raw.get("deactivated", False)),
        removed=bool(raw.get("removed", False)),
        external=bool(raw.get("external", False)),
        stats=stats if isinstance(stats, Mapping) else None,
    )


def _standings(raw: Any) -> tuple[RawStanding, ...]:
    return tuple(parse_standing(item) for item in raw or () if isinstance(item, Mapping))


def parse_tournament(raw: Mapping[str, Any], *, file_name: str | None = None) -> TournamentRecord:
    """Convert one tournament export into a ``TournamentRecord``."""
    if not isinstance(raw, Mapping):
        raise TournamentFormatError("tournament export must be a JSON object")

    date = parse_timestamp(raw.get("createdAt", raw.get("date")))
    if date is None:
        raise TournamentFormatError(f"tournament {raw.get('_id')!r} has no createdAt date")

    qualifying = tuple(
        QualifyingStage(
            standings=_standings(stage.get("standings")),
            rounds=tuple(_matches(round_) for round_ in stage.get("rounds") or ()),
        )
        for stage in raw.get("qualifying") or ()
        if isinstance(stage, Mapping)
    )
    eliminations = tuple(
        EliminationStage(
            standings=_standings(stage.get("standings")),
            levels=tuple(_matches(level) for level in stage.get("levels") or ()),
            third=_matches(stage.get("third")),
        )
        for stage in raw.get("eliminations") or ()
        if isinstance(stage, Mapping)
    )

    return TournamentRecord(
        id=str(raw.get("_id") or raw.get("id") or file_name or ""),
        name=str(raw.get("name") or "Unknown Tournament"),
        date=date,
        qualifying=qualifying,
        eliminations=eliminations,
        file_name=file_name,
    )


def load_tournament_file(file_path: Path) -> TournamentRecord:
    with file_path.open("r", encoding="utf-8") as file:
        raw = json.load(file)
    return parse_tournament(raw, file_name=file_path.name)


def load_tournament_dir(data_dir: Path) -> list[TournamentRecord]:
    """Load every ``*.json`` export in ``data_dir``, most recent first.

    Files that fail to parse are logged and skipped.
    """
    if not data_dir.exists():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")
    if not data_dir.is_dir():
        raise NotADirectoryError(f"Data path is not a directory: {data_dir}")

    tournaments: list[TournamentRecord] = []
    for file_path in sorted(data_dir.glob("*.json")):
        try:
            tournaments.append(load_tournament_file(file_path))
        except (OSError, json.JSONDecodeError, TournamentFormatError) as exc:
            logger.warning("skipping tournament export %s: %s", file_path.name, exc)

    tournaments.sort(key=lambda tournament: tournament.date, reverse=True)
    logger.info("loaded tournaments=%d data_dir=%s", len(tournaments), data_dir)
    return tournaments


__all__ = [
    "EliminationStage",
    "QualifyingStage",
    "RawMatch",
    "RawStanding",
    "TournamentFormatError",
    "TournamentRecord",
    "load_tournament_dir",
    "load_tournament_file",
    "parse_match",
    "parse_standing",
    "parse_timestamp",
    "parse_tournament",
]
