"""Procedural enemy generation.

Enemies are a pure function of ``(player_level, fight_number, seed)`` plus
the static name pools: every fifth fight is a boss, the level wobbles
around the player's, and every non-HP stat is set to the same value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from binary_boxer.ir.stats import StatVector, round_half_up
from binary_boxer.sim.core.fight_state import EnemyDescriptor
from binary_boxer.sim.core.rng import seeded_range

if TYPE_CHECKING:
    from binary_boxer.sim.content.registry import CatalogueRegistry

logger = logging.getLogger(__name__)

BOSS_INTERVAL = 5
LEVEL_OFFSET_MIN = -1
LEVEL_OFFSET_MAX = 2

BASE_STAT = 10
STAT_PER_LEVEL = 3
BASE_HP = 100
HP_PER_LEVEL = 15

BOSS_STAT_MULT = 1.5
BOSS_HP_MULT = 2.0


def is_boss_fight(fight_number: int) -> bool:
    return fight_number > 0 and fight_number % BOSS_INTERVAL == 0


def enemy_stats_for_level(level: int, is_boss: bool) -> StatVector:
    """Stat-flat vector for an enemy of *level*, boss-scaled if requested."""
    stat = BASE_STAT + level * STAT_PER_LEVEL
    hp = BASE_HP + level * HP_PER_LEVEL
    if is_boss:
        stat = round_half_up(stat * BOSS_STAT_MULT)
        hp = round_half_up(hp * BOSS_HP_MULT)
    return StatVector.uniform(stat, hp)


def generate_enemy(
    registry: CatalogueRegistry,
    player_level: int,
    fight_number: int,
    seed: int,
) -> EnemyDescriptor:
    """Build the opponent for *fight_number*.

    Parameters
    ----------
    registry:
        Loaded catalogue supplying the name pools and boss definitions.
    player_level:
        Current level of the player's robot.
    fight_number:
        1-based count of the fight being started.
    seed:
        Fight seed.  ``seed`` drives the level offset and ``seed + 1`` the
        name pick.
    """
    is_boss = is_boss_fight(fight_number)
    level = max(1, player_level + seeded_range(seed, LEVEL_OFFSET_MIN, LEVEL_OFFSET_MAX))

    pool = registry.boss_names if is_boss else registry.enemy_names
    name = pool[seeded_range(seed + 1, 0, len(pool) - 1)]

    ability = taunt = None
    overlay = None
    if is_boss:
        boss = registry.get_boss(name)
        if boss is None:
            logger.warning("No boss definition for %r; fighting without an overlay", name)
        else:
            ability, taunt, overlay = boss.ability, boss.taunt, boss.overlay

    return EnemyDescriptor(
        name=name,
        level=level,
        stats=enemy_stats_for_level(level, is_boss),
        is_boss=is_boss,
        boss_ability=ability,
        boss_taunt=taunt,
        boss_overlay=overlay,
    )
