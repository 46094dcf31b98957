"""Boss effect resolution.

A boss's :class:`~binary_boxer.ir.bosses.BossOverlay` is static catalogue
data.  Each round it is resolved into a concrete :class:`BossEffects`
(round-scaled multipliers, flat bonus damage in HP) and then applied to
per-round copies of the two stat vectors.  The stored fight snapshot is
never touched.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from binary_boxer.ir.bosses import BossOverlay
from binary_boxer.ir.stats import COMBAT_STATS, StatKey, StatVector, round_half_up
from binary_boxer.sim.core.fight_state import EnemyDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BossEffects:
    """Concrete modifiers for one round.  The default instance is neutral."""

    player_defence_mult: float = 1.0
    interrupt_chance: float = 0.0
    bonus_flat_damage: int = 0
    extra_crash_chance: float = 0.0
    enemy_stat_mult: float = 1.0
    crit_immune: bool = False
    enemy_stability_mult: float = 1.0
    damage_reduction: float = 0.0
    negate_player_guard: bool = False
    enemy_auto_dodge: bool = False
    swap_player_power_defence: bool = False

    @property
    def is_neutral(self) -> bool:
        return self == NO_BOSS_EFFECTS


NO_BOSS_EFFECTS = BossEffects()


def resolve_overlay(
    overlay: BossOverlay,
    round_number: int,
    player_max_hp: float,
) -> BossEffects:
    """Turn a catalogue overlay into this round's effects."""
    if not overlay.active_in(round_number):
        return NO_BOSS_EFFECTS

    stat_mult = 1.0
    if overlay.enemy_stat_growth_per_round:
        stat_mult = 1 + overlay.enemy_stat_growth_per_round * round_number

    return BossEffects(
        player_defence_mult=overlay.player_defence_mult,
        interrupt_chance=overlay.interrupt_chance,
        bonus_flat_damage=math.floor(player_max_hp * overlay.bonus_damage_pct_player_max_hp),
        extra_crash_chance=overlay.extra_crash_chance,
        enemy_stat_mult=stat_mult,
        crit_immune=overlay.crit_immune,
        enemy_stability_mult=overlay.enemy_stability_mult,
        damage_reduction=overlay.damage_reduction,
        negate_player_guard=overlay.negate_player_guard,
        enemy_auto_dodge=overlay.enemy_auto_dodge,
        swap_player_power_defence=overlay.swap_player_power_defence,
    )


def get_boss_effects(
    enemy: EnemyDescriptor,
    round_number: int,
    player_max_hp: float,
) -> BossEffects:
    """Effects active against *enemy* in *round_number* (1-based).

    Regular enemies, and bosses without an overlay, return the neutral
    effects.
    """
    if not enemy.is_boss or enemy.boss_overlay is None:
        return NO_BOSS_EFFECTS

    effects = resolve_overlay(enemy.boss_overlay, round_number, player_max_hp)
    if not effects.is_neutral:
        logger.debug("Round %d: %s overlay active: %s", round_number, enemy.name, effects)
    return effects


def apply_player_stat_mods(stats: StatVector, effects: BossEffects) -> StatVector:
    """Swap power/defence, then scale defence.  Returns *stats* itself when
    nothing applies."""
    if effects.player_defence_mult == 1 and not effects.swap_player_power_defence:
        return stats

    modified = stats
    if effects.swap_player_power_defence:
        modified = modified.with_changes({
            StatKey.POWER: stats.defence,
            StatKey.DEFENCE: stats.power,
        })
    if effects.player_defence_mult != 1:
        modified = modified.with_changes({
            StatKey.DEFENCE: round_half_up(modified.defence * effects.player_defence_mult),
        })
    return modified


def apply_enemy_stat_mods(stats: StatVector, effects: BossEffects) -> StatVector:
    """Scale every non-HP stat, then stability.  ``max_hp`` is left alone."""
    modified = stats
    if effects.enemy_stat_mult != 1:
        modified = modified.scaled(COMBAT_STATS, effects.enemy_stat_mult)
    if effects.enemy_stability_mult != 1:
        modified = modified.scaled((StatKey.STABILITY,), effects.enemy_stability_mult)
    return modified
