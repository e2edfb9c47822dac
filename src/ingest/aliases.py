"""Player alias resolution: raw tournament names to canonical identities."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from domain.config_base import load_toml, table

DEFAULT_ALIASES: dict[str, str] = {
    "Phi": "Phi Nguyen-Thien",
    "Andy": "Andreas Metzke",
    "Andy M.": "Andreas Metzke",
    "Jona": "Jona Steffel",
    "Moe": "Manuel Butollo",
}


class NameResolver:
    """Static alias table; unknown names resolve to themselves."""

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases = dict(DEFAULT_ALIASES if aliases is None else aliases)

    def __call__(self, raw_name: str | None) -> str:
        return self.resolve(raw_name)

    def resolve(self, raw_name: str | None) -> str:
        if not raw_name:
            return ""
        return self._aliases.get(raw_name, raw_name)

    def aliases_for(self, canonical_name: str) -> list[str]:
        """Return the canonical name followed by every alias mapping to it."""
        names = [canonical_name]
        for alias, canonical in self._aliases.items():
            if canonical == canonical_name and alias != canonical_name:
                names.append(alias)
        return names

    def as_dict(self) -> dict[str, str]:
        return dict(self._aliases)


def identity_resolver(raw_name: str | None) -> str:
    return raw_name or ""


def load_name_resolver(file_path: Path) -> NameResolver:
    """Load an ``[aliases]`` table (``"Alias" = "Canonical Name"``) from TOML."""
    raw = load_toml(file_path)
    aliases_raw = table(raw, "aliases", file_path=file_path)

    aliases: dict[str, str] = {}
    for alias, canonical in aliases_raw.items():
        if not isinstance(canonical, str) or not canonical.strip():
            raise ValueError(f"{file_path}: [aliases].{alias!r} must map to a non-empty name")
        if not alias.strip():
            raise ValueError(f"{file_path}: [aliases] contains an empty alias")
        aliases[alias] = canonical.strip()
    return NameResolver(aliases)


__all__ = ["DEFAULT_ALIASES", "NameResolver", "identity_resolver", "load_name_resolver"]
