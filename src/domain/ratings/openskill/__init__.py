"""OpenSkill rating modules."""

from domain.ratings.openskill.calculator import (
    MODEL_CLASSES,
    OpenSkillParameters,
    PlayerOpenSkillCalculator,
    RatingReplay,
)
from domain.ratings.openskill.config import (
    OpenSkillSystemConfig,
    load_openskill_system_config,
    load_openskill_system_configs,
)

__all__ = [
    "MODEL_CLASSES",
    "OpenSkillParameters",
    "OpenSkillSystemConfig",
    "PlayerOpenSkillCalculator",
    "RatingReplay",
    "load_openskill_system_config",
    "load_openskill_system_configs",
]
