"""Between-fight ("corner") actions: repair, training and language swaps.

All of them require the robot to be in the ``corner`` phase and return a
new :class:`PlayerState`.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from binary_boxer.ir.stats import GROWTH_STATS, StatKey, round_half_up
from binary_boxer.sim.career.progression import stats_for
from binary_boxer.sim.core.entities import PlayerState, RobotPhase
from binary_boxer.sim.mechanics.stats import get_training_cost

if TYPE_CHECKING:
    from binary_boxer.sim.content.registry import CatalogueRegistry

logger = logging.getLogger(__name__)

REPAIR_FRACTION = 0.5
FULL_REPAIR_COOLDOWN = 3
SWAP_LANGUAGE_COOLDOWN = 10
TRAINING_COST_FLOOR = 10


def _require_corner(player: PlayerState, doing: str) -> None:
    if player.phase is not RobotPhase.CORNER:
        raise ValueError(f"Robot must be in the corner to {doing}")


def repair(player: PlayerState) -> PlayerState:
    """Heal half of max HP (floored), capped at max HP."""
    _require_corner(player, "repair")
    heal = math.floor(player.stats.max_hp * REPAIR_FRACTION)
    stats = player.stats.with_hp(player.stats.hp + heal)
    return player.model_copy(update={"stats": stats})


def full_repair(player: PlayerState) -> PlayerState:
    """Heal to full HP.  Puts full repair on a 3-fight cooldown."""
    _require_corner(player, "repair")
    if player.full_repair_cooldown > 0:
        raise ValueError(
            f"Full repair on cooldown ({player.full_repair_cooldown} fights remaining)"
        )
    return player.model_copy(update={
        "stats": player.stats.with_hp(player.stats.max_hp),
        "full_repair_cooldown": FULL_REPAIR_COOLDOWN,
    })


def training_cost(player: PlayerState, stat: StatKey) -> int:
    """XP needed to raise *stat* by one point, never below the floor."""
    return max(TRAINING_COST_FLOOR, round_half_up(get_training_cost(player.stats.get(stat))))


def train(player: PlayerState, stat: StatKey | str) -> PlayerState:
    """Spend XP to raise one growth stat by 1.

    Training ``max_hp`` raises current ``hp`` by 1 as well.

    Raises
    ------
    ValueError
        Unknown or non-growth stat, wrong phase, or not enough XP.
    """
    _require_corner(player, "train")
    stat = StatKey(stat)
    if stat not in GROWTH_STATS:
        raise ValueError(f"Stat {stat.value!r} cannot be trained")

    cost = training_cost(player, stat)
    if player.xp < cost:
        raise ValueError(f"Not enough XP. Need {cost}, have {player.xp}")

    stats = player.stats.add(stat, 1)
    if stat is StatKey.MAX_HP:
        stats = stats.add(StatKey.HP, 1)

    logger.info("%s trained %s for %d XP", player.robot_name, stat.value, cost)
    return player.model_copy(update={"stats": stats, "xp": player.xp - cost})


def swap_language(
    registry: CatalogueRegistry,
    player: PlayerState,
    slot: int,
    language_id: str,
) -> PlayerState:
    """Replace the language in *slot* (1 or 2) and recompute stats.

    The HP ratio is preserved (floor, minimum 1).  Language swap then
    goes on a 10-fight cooldown.

    Raises
    ------
    KeyError
        Unknown language id.
    ValueError
        Bad slot, wrong phase, cooldown active, or the language is already
        equipped in either slot.
    """
    if slot not in (1, 2):
        raise ValueError("Slot must be 1 or 2")
    registry.get_language(language_id)
    _require_corner(player, "swap languages")
    if player.swap_language_cooldown > 0:
        raise ValueError(
            f"Language swap on cooldown ({player.swap_language_cooldown} fights remaining)"
        )
    if language_id == player.language_slot(slot):
        raise ValueError("New language must be different from the current one")
    if language_id == player.language_slot(3 - slot):
        raise ValueError("New language must be different from the other slot")

    language_1 = language_id if slot == 1 else player.language_1
    language_2 = language_id if slot == 2 else player.language_2

    hp_ratio = player.stats.hp / player.stats.max_hp
    stats = stats_for(registry, language_1, language_2, player.level, player.legacy_stats)
    stats = stats.with_hp(max(1, math.floor(stats.max_hp * hp_ratio)))

    logger.info(
        "%s swapped slot %d: %s -> %s",
        player.robot_name, slot, player.language_slot(slot), language_id,
    )
    return player.model_copy(update={
        "language_1": language_1,
        "language_2": language_2,
        "stats": stats,
        "swap_language_cooldown": SWAP_LANGUAGE_COOLDOWN,
    })
