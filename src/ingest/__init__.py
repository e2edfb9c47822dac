"""Tournament export loading and player-name resolution."""

from ingest.aliases import NameResolver, identity_resolver, load_name_resolver
from ingest.loader import (
    EliminationStage,
    QualifyingStage,
    RawMatch,
    RawStanding,
    TournamentFormatError,
    TournamentRecord,
    load_tournament_dir,
    parse_tournament,
)

__all__ = [
    "EliminationStage",
    "NameResolver",
    "QualifyingStage",
    "RawMatch",
    "RawStanding",
    "TournamentFormatError",
    "TournamentRecord",
    "identity_resolver",
    "load_name_resolver",
    "load_tournament_dir",
    "parse_tournament",
]
