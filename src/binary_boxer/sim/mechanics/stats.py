"""Stat model -- robot stats from language modules, level, and legacy.

Pipeline for ``calculate_stats_for_level``:
    base -> per-level module bonuses -> all-stats bonus -> legacy -> max_hp level scaling

Legacy values may be fractional and are added as-is; nothing is rounded
mid-formula.
"""

from __future__ import annotations

from binary_boxer.ir.languages import LanguageDefinition
from binary_boxer.ir.stats import (
    GROWTH_STATS,
    LegacyMap,
    StatKey,
    StatVector,
    StatValue,
    round_half_up,
)

MAX_HP_PER_LEVEL = 10
XP_PER_LEVEL = 50

VEIL_WISDOM_MULT = 1.2
ECHO_CRIT_MULT = 1.15
ECHO_LANGUAGE_STAT_MULT = 1.1


def base_stats() -> StatVector:
    """Starting vector: 100 HP, 10 power, 5 defence, 5 speed, all else 0."""
    return StatVector(hp=100, max_hp=100, power=10, defence=5, speed=5)


def calculate_stats_for_level(
    module_a: LanguageDefinition,
    module_b: LanguageDefinition,
    level: int,
    legacy: LegacyMap | None = None,
) -> StatVector:
    """Calculate a robot's full stat vector with ``hp`` set to ``max_hp``."""
    values: dict[StatKey, StatValue] = base_stats().as_dict()

    for module in (module_a, module_b):
        for stat, bonus in module.bonuses():
            values[stat] += bonus * level

    for module in (module_a, module_b):
        if module.all_stats_bonus:
            for stat in GROWTH_STATS:
                values[stat] += module.all_stats_bonus * level

    for stat, bonus in (legacy or {}).items():
        values[StatKey(stat)] += bonus

    values[StatKey.MAX_HP] += level * MAX_HP_PER_LEVEL
    values[StatKey.HP] = values[StatKey.MAX_HP]

    return StatVector(**{k.value: v for k, v in values.items()})


def get_xp_required(level: int) -> int:
    """XP needed to advance from *level* to the next."""
    return level * XP_PER_LEVEL


def get_xp_for_fight(enemy_level: int, won: bool, is_boss: bool) -> int:
    """``10 + enemy_level * 2 + (5 if won)``, tripled against a boss."""
    xp = 10 + enemy_level * 2 + (5 if won else 0)
    if is_boss:
        xp *= 3
    return xp


def get_training_cost(current_value: StatValue) -> StatValue:
    """XP cost to raise a stat by one point.

    A zero-valued stat costs nothing here; the career layer applies the
    minimum-cost floor.
    """
    return current_value * 10


def highest_language_bonus_stat(
    module_a: LanguageDefinition,
    module_b: LanguageDefinition,
) -> StatKey | None:
    """Return the growth stat with the highest combined per-level bonus.

    Ties go to the stat encountered first (slot 1 primary, slot 1
    secondary, slot 2 primary, slot 2 secondary).
    """
    combined: dict[StatKey, int] = {}
    for module in (module_a, module_b):
        for stat, bonus in module.bonuses():
            combined[stat] = combined.get(stat, 0) + bonus

    best: StatKey | None = None
    best_bonus = 0
    for stat, bonus in combined.items():
        if bonus > best_bonus:
            best, best_bonus = stat, bonus
    return best


def apply_companion_buffs(
    stats: StatVector,
    has_veil: bool,
    has_echo: bool,
    module_a: LanguageDefinition,
    module_b: LanguageDefinition,
) -> StatVector:
    """Return a buffed copy of *stats*; the input is never modified.

    - Veil: wisdom x1.2
    - Echo: crit chance x1.15 and the strongest language stat x1.1
    """
    buffed = stats
    if has_veil:
        buffed = buffed.with_changes(
            {StatKey.WISDOM: round_half_up(buffed.wisdom * VEIL_WISDOM_MULT)}
        )

    if has_echo:
        buffed = buffed.with_changes(
            {StatKey.CRIT_CHANCE: round_half_up(buffed.crit_chance * ECHO_CRIT_MULT)}
        )
        highest = highest_language_bonus_stat(module_a, module_b)
        if highest is not None:
            buffed = buffed.with_changes(
                {highest: round_half_up(buffed.get(highest) * ECHO_LANGUAGE_STAT_MULT)}
            )

    return buffed
