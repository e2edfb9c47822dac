"""Load OpenSkill rating-system definitions from TOML files.

A file has a ``[system]`` table (``name``, optional ``description``) and an
``[openskill]`` table whose keys mirror ``OpenSkillParameters``; omitted keys
fall back to the dataclass defaults.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from domain.config_base import (
    BaseSystemConfig,
    load_system_configs,
    load_toml,
    parse_bool,
    parse_float,
    table,
)
from domain.ratings.openskill.calculator import MODEL_CLASSES, OpenSkillParameters

_BOOL_KEYS = ("limit_sigma", "balance")
_POSITIVE_KEYS = ("initial_mu", "initial_sigma", "beta", "kappa", "ordinal_z")


@dataclass(frozen=True)
class OpenSkillSystemConfig(BaseSystemConfig):
    """One named OpenSkill replay setup."""

    parameters: OpenSkillParameters = OpenSkillParameters()

    def as_config_json(self) -> dict[str, Any]:
        return asdict(self.parameters)


def load_openskill_system_configs(config_dir: Path) -> list[OpenSkillSystemConfig]:
    return load_system_configs(config_dir, parse_openskill_config, duplicate_name_label="openskill")


def load_openskill_system_config(file_path: Path) -> OpenSkillSystemConfig:
    return parse_openskill_config(load_toml(file_path), file_path)


def parse_openskill_config(raw: dict[str, Any], file_path: Path) -> OpenSkillSystemConfig:
    system_raw = table(raw, "system", file_path=file_path)
    openskill_raw = table(raw, "openskill", file_path=file_path)

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")
    description = system_raw.get("description")

    parameters = _parse_parameters(openskill_raw, file_path)
    _validate_parameters(parameters, file_path)
    return OpenSkillSystemConfig(
        name=name,
        description=None if description is None else str(description),
        file_path=file_path,
        parameters=parameters,
    )


def _parse_parameters(openskill_raw: Any, file_path: Path) -> OpenSkillParameters:
    defaults = OpenSkillParameters()
    values: dict[str, Any] = {}
    for field in fields(OpenSkillParameters):
        if field.name not in openskill_raw:
            continue
        value = openskill_raw[field.name]
        key = f"[openskill].{field.name}"
        if field.name == "model":
            values[field.name] = str(value).strip().lower()
        elif field.name in _BOOL_KEYS:
            values[field.name] = parse_bool(value, file_path=file_path, key=key)
        else:
            values[field.name] = parse_float(value, file_path=file_path, key=key)

    unknown = sorted(set(openskill_raw) - {field.name for field in fields(OpenSkillParameters)})
    if unknown:
        raise ValueError(f"{file_path}: unknown [openskill] keys {unknown}")
    return OpenSkillParameters(**{**asdict(defaults), **values})


def _validate_parameters(parameters: OpenSkillParameters, file_path: Path) -> None:
    if parameters.model not in MODEL_CLASSES:
        raise ValueError(
            f"{file_path}: [openskill].model must be one of {sorted(MODEL_CLASSES)}"
        )
    for key in _POSITIVE_KEYS:
        if getattr(parameters, key) <= 0.0:
            raise ValueError(f"{file_path}: [openskill].{key} must be > 0")
    if parameters.tau < 0.0:
        raise ValueError(f"{file_path}: [openskill].tau must be >= 0")


__all__ = [
    "OpenSkillSystemConfig",
    "load_openskill_system_config",
    "load_openskill_system_configs",
    "parse_openskill_config",
]
