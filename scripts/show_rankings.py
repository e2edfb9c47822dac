#!/usr/bin/env python3
"""Print overall, season, tournament and player rankings from tournament exports."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from aggregation.common import PlayerRow
from aggregation.highlights import view_highlights
from aggregation.season_view import available_seasons, season_view
from aggregation.tournament_view import tournament_view
from domain.ratings.openskill.calculator import OpenSkillParameters
from domain.ratings.openskill.config import load_openskill_system_config
from ingest.aliases import NameResolver, load_name_resolver
from ingest.loader import TournamentRecord, load_tournament_dir
from logging_utils import setup_logging
from rankings_pipeline import build_rankings, player_report

DEFAULT_DATA_DIR = ROOT_DIR / "data"
DEFAULT_ALIASES = ROOT_DIR / "configs" / "aliases.toml"
DEFAULT_CONFIG = ROOT_DIR / "configs" / "ratings" / "default.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Table-soccer rankings computed from tournament exports.",
)

DataDirOption = Annotated[
    Path,
    typer.Option("--data-dir", help="Directory containing tournament export *.json files."),
]
AliasesOption = Annotated[
    Path,
    typer.Option("--aliases", help="TOML file with an [aliases] table."),
]
ConfigOption = Annotated[
    Path,
    typer.Option("--config", help="OpenSkill system TOML config."),
]
LimitOption = Annotated[
    int,
    typer.Option("--limit", help="Number of rows to print. Use 0 for all rows."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Enable debug logging."),
]


def _load_inputs(
    data_dir: Path,
    aliases: Path,
    config: Path,
    verbose: bool,
) -> tuple[list[TournamentRecord], NameResolver, OpenSkillParameters]:
    setup_logging(verbose)
    try:
        resolver = load_name_resolver(aliases)
        system_config = load_openskill_system_config(config)
        tournaments = load_tournament_dir(data_dir)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not tournaments:
        raise typer.BadParameter(f"No tournament exports found in: {data_dir}")
    return tournaments, resolver, system_config.parameters


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise typer.BadParameter("--limit must be >= 0")


def _print_rows(rows: list[PlayerRow], limit: int) -> None:
    shown = rows if limit == 0 else rows[:limit]
    for row in shown:
        status = f" [{row.finale_status}]" if row.finale_status else ""
        typer.echo(
            f"{row.place:3d}. {row.name:<24} "
            f"season_pts={row.season_points:4d} skill={row.skill:7.2f} "
            f"matches={row.matches:4d} won={row.won:4d} lost={row.lost:4d} "
            f"goals={row.goals_for:4d}:{row.goals_against:<4d} "
            f"ppg={row.points_per_game:5.2f} win_rate={row.win_rate:5.1f}%{status}"
        )


def _print_highlights(rows: list[PlayerRow]) -> None:
    highlights = view_highlights(rows)
    typer.echo(f"players={highlights.total_players} player_matches={highlights.total_matches}")
    if highlights.top_scorer is not None:
        typer.echo(f"top_scorer={highlights.top_scorer.name} goals={highlights.top_scorer.goals_for}")
    if highlights.best_win_rate is not None:
        typer.echo(
            f"best_win_rate={highlights.best_win_rate.name} "
            f"win_rate={highlights.best_win_rate.win_rate:.1f}%"
        )


@app.command()
def overall(
    data_dir: DataDirOption = DEFAULT_DATA_DIR,
    aliases: AliasesOption = DEFAULT_ALIASES,
    config: ConfigOption = DEFAULT_CONFIG,
    limit: LimitOption = 20,
    verbose: VerboseOption = False,
) -> None:
    """Print the all-time ranking."""
    _check_limit(limit)
    tournaments, resolver, params = _load_inputs(data_dir, aliases, config, verbose)
    report = build_rankings(tournaments, resolver, params)
    typer.echo(f"tournaments={len(tournaments)} skipped_matches={len(report.replay.skipped_matches)}")
    _print_highlights(report.overall)
    _print_rows(report.overall, limit)


@app.command()
def season(
    season: Annotated[
        int | None,
        typer.Option("--season", help="Calendar year. Defaults to the latest season."),
    ] = None,
    finale: Annotated[
        bool,
        typer.Option("--finale", help="Only show finale qualifiers and alternates."),
    ] = False,
    data_dir: DataDirOption = DEFAULT_DATA_DIR,
    aliases: AliasesOption = DEFAULT_ALIASES,
    config: ConfigOption = DEFAULT_CONFIG,
    limit: LimitOption = 0,
    verbose: VerboseOption = False,
) -> None:
    """Print one season's ranking, rated from that season's matches only."""
    _check_limit(limit)
    tournaments, resolver, params = _load_inputs(data_dir, aliases, config, verbose)
    seasons = available_seasons(tournaments)
    selected = seasons[0] if season is None else season
    if selected not in seasons:
        raise typer.BadParameter(f"--season {selected} not found; available: {seasons}")

    rows = season_view(tournaments, selected, resolver, params=params, finale_only=finale)
    typer.echo(f"season={selected} finale={finale} rows={len(rows)}")
    _print_rows(rows, limit)


@app.command()
def tournament(
    name: Annotated[
        str | None,
        typer.Argument(help="Tournament id or name. Defaults to the most recent tournament."),
    ] = None,
    data_dir: DataDirOption = DEFAULT_DATA_DIR,
    aliases: AliasesOption = DEFAULT_ALIASES,
    config: ConfigOption = DEFAULT_CONFIG,
    limit: LimitOption = 0,
    verbose: VerboseOption = False,
) -> None:
    """Print one tournament's final standings."""
    _check_limit(limit)
    tournaments, resolver, params = _load_inputs(data_dir, aliases, config, verbose)
    if name is None:
        selected = tournaments[0]
    else:
        matches = [item for item in tournaments if name in (item.id, item.name)]
        if not matches:
            raise typer.BadParameter(f"Tournament not found: {name}")
        selected = matches[0]

    report = build_rankings(tournaments, resolver, params)
    rows = tournament_view(selected, resolver, report.replay)
    typer.echo(f"tournament={selected.name} date={selected.date.date().isoformat()} rows={len(rows)}")
    _print_rows(rows, limit)


@app.command()
def player(
    name: Annotated[str, typer.Argument(help="Player name or alias.")],
    data_dir: DataDirOption = DEFAULT_DATA_DIR,
    aliases: AliasesOption = DEFAULT_ALIASES,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print analytics and achievements for one player."""
    tournaments, resolver, params = _load_inputs(data_dir, aliases, config, verbose)
    canonical = resolver(name)
    report = build_rankings(tournaments, resolver, params)
    if canonical not in report.history:
        raise typer.BadParameter(f"No rated matches for player: {canonical}")

    details = player_report(report, canonical, tournaments, resolver)
    summary = details.summary
    typer.echo(f"player={canonical} aliases={resolver.aliases_for(canonical)[1:]}")
    if details.overall_row is not None:
        typer.echo(
            f"overall_place={details.overall_row.place} "
            f"season_points={details.overall_row.season_points}"
        )
    typer.echo(
        f"matches={summary.total_matches} wins={summary.wins} losses={summary.losses} "
        f"win_rate={summary.win_rate:.1f}% skill={summary.current_skill:.2f} "
        f"change={summary.skill_change:+.2f}"
    )

    for partner in details.partners:
        typer.echo(
            f"partner {partner.name:<24} matches={partner.matches:3d} "
            f"wins={partner.wins:3d} win_rate={partner.win_rate:5.1f}%"
        )
    for opponent in details.opponents.won_most_against:
        typer.echo(f"won_most_against {opponent.name:<24} wins={opponent.wins:3d}/{opponent.matches}")
    for opponent in details.opponents.lost_most_against:
        typer.echo(f"lost_most_against {opponent.name:<24} losses={opponent.losses:3d}/{opponent.matches}")
    for ranking in details.best_rankings:
        typer.echo(f"best_ranking place={ranking.place} count={ranking.count}")

    for status in details.achievements.unlocked:
        unlocked_on = status.unlocked_on.date().isoformat() if status.unlocked_on else "-"
        typer.echo(f"unlocked {status.badge.emoji} {status.badge.name} on={unlocked_on}")
    for status in details.achievements.top_progress():
        typer.echo(
            f"progress {status.badge.emoji} {status.badge.name} "
            f"{status.progress * 100:5.1f}% current={status.current}"
        )


if __name__ == "__main__":
    app()
