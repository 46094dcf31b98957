"""Content schema for Binary Boxer.

Stats, language modules, bosses, companions and combat actions are all
Pydantic models (or closed enums) that serialise cleanly to/from JSON.
The :class:`~binary_boxer.sim.content.registry.CatalogueRegistry` loads
them from the bundled data files.
"""

from .actions import ACTION_INFO, ActionInfo, CombatAction
from .bosses import BossDefinition, BossOverlay
from .companions import CompanionDefinition, CompanionId
from .languages import LanguageDefinition
from .stats import (
    COMBAT_STATS,
    GROWTH_STATS,
    LegacyMap,
    StatKey,
    StatVector,
    round_half_up,
    round_one_decimal,
)

__all__ = [
    # actions
    "ACTION_INFO",
    "ActionInfo",
    "CombatAction",
    # bosses
    "BossDefinition",
    "BossOverlay",
    # companions
    "CompanionDefinition",
    "CompanionId",
    # languages
    "LanguageDefinition",
    # stats
    "COMBAT_STATS",
    "GROWTH_STATS",
    "LegacyMap",
    "StatKey",
    "StatVector",
    "round_half_up",
    "round_one_decimal",
]
