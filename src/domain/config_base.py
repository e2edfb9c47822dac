"""TOML loading helpers shared by the rating-system and alias configs."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar
import tomllib

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


@dataclass(frozen=True)
class BaseSystemConfig:
    """Name, description and source file common to every rating-system config."""

    name: str
    description: str | None
    file_path: Path

    def as_config_json(self) -> dict[str, Any]:
        raise NotImplementedError


T = TypeVar("T", bound=BaseSystemConfig)


def load_toml(file_path: Path) -> dict[str, Any]:
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    with file_path.open("rb") as file:
        return tomllib.load(file)


def load_system_configs(
    config_dir: Path,
    parser: Callable[[dict[str, Any], Path], T],
    *,
    duplicate_name_label: str = "rating",
) -> list[T]:
    """Parse every ``*.toml`` file in ``config_dir``; system names must be unique."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    systems = [parser(load_toml(file_path), file_path) for file_path in config_files]
    duplicates = sorted(name for name, count in Counter(system.name for system in systems).items() if count > 1)
    if duplicates:
        raise ValueError(
            f"Duplicate {duplicate_name_label} system names found in {config_dir}: {duplicates}"
        )
    return systems


def table(raw: Mapping[str, Any], key: str, *, file_path: Path) -> Mapping[str, Any]:
    """Return the ``[key]`` table, or an empty mapping when it is absent."""
    value = raw.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"{file_path}: [{key}] must be a table")
    return value


def parse_float(value: Any, *, file_path: Path, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{file_path}: {key} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{file_path}: {key} must be a number") from exc


def parse_bool(value: Any, *, file_path: Path, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    raise ValueError(f"{file_path}: {key} must be a boolean")


__all__ = [
    "BaseSystemConfig",
    "load_system_configs",
    "load_toml",
    "parse_bool",
    "parse_float",
    "table",
]
