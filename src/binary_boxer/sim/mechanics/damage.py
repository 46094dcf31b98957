"""Damage calculation for a single hit.

Pipeline (order matters -- it fixes the RNG draw sequence):
    1. Guard / analyse deal nothing and draw nothing
    2. Dodge check on defender evasion
    3. Heavy strike's independent 20% miss
    4. power * (1 + level * 0.05) * action multiplier
    5. minus defence (reduced by penetration, halved if defender is berserk), floor 1
    6. Crit check (x2)
    7. Block check (x0.5), then counter check on a block

Raw stats are turned into probabilities with the diminishing-returns
curve ``stat / (stat + K)``, so no stat reaches 100% on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from binary_boxer.ir.actions import CombatAction
from binary_boxer.ir.stats import StatVector, round_half_up
from binary_boxer.sim.core.rng import SeededRNG

EVASION_K = 80
CRIT_K = 50
BLOCK_K = 50
COUNTER_K = 75

HEAVY_STRIKE_MISS_CHANCE = 0.2
LEVEL_DAMAGE_SCALING = 0.05
COUNTER_POWER_RATIO = 0.6

GUARD_BLOCK_BONUS = 0.5
GUARD_BLOCK_CAP = 0.9
GUARD_COUNTER_BONUS = 0.3
GUARD_COUNTER_CAP = 0.8

ACTION_MULTIPLIERS: dict[CombatAction, float] = {
    CombatAction.HEAVY_STRIKE: 1.5,
    CombatAction.COMBO: 0.7,
    CombatAction.BERSERK: 2.0,
    CombatAction.OVERCLOCK: 1.1,
}


@dataclass(frozen=True)
class DamageResult:
    """Outcome of one hit."""

    damage: int = 0
    critical: bool = False
    blocked: bool = False
    dodged: bool = False
    counter_attack: bool = False
    counter_damage: int = 0

    @property
    def landed(self) -> bool:
        return self.damage > 0


NO_DAMAGE = DamageResult()
DODGED = DamageResult(dodged=True)


def stat_to_chance(stat: float, half_point: float) -> float:
    """Diminishing-returns conversion: 0 for non-positive stats, else
    ``stat / (stat + half_point)``."""
    if stat <= 0:
        return 0.0
    return stat / (stat + half_point)


def scaled_power(power: float, level: int) -> float:
    return power * (1 + level * LEVEL_DAMAGE_SCALING)


def penetration_factor(penetration: float) -> float:
    return max(0.0, 1 - penetration / 100)


def calculate_counter_damage(
    attacker: StatVector,
    defender: StatVector,
    defender_level: int,
) -> int:
    """Retaliation dealt by *defender* back to *attacker* after a block."""
    base = scaled_power(defender.power, defender_level) * COUNTER_POWER_RATIO
    reduction = attacker.defence * penetration_factor(defender.penetration)
    return max(1, round_half_up(base - reduction))


def calculate_damage(
    attacker: StatVector,
    defender: StatVector,
    attacker_level: int,
    defender_level: int,
    action: CombatAction,
    rng: SeededRNG,
    defender_guarding: bool = False,
    defender_berserk: bool = False,
    crit_immune: bool = False,
) -> DamageResult:
    """Resolve one hit of *action* from *attacker* against *defender*.

    *crit_immune* still consumes the crit roll so the draw sequence does
    not depend on the defender.
    """
    if not action.deals_damage:
        return NO_DAMAGE

    if rng.chance(stat_to_chance(defender.evasion, EVASION_K)):
        return DODGED

    if action is CombatAction.HEAVY_STRIKE and rng.chance(HEAVY_STRIKE_MISS_CHANCE):
        return DODGED

    damage = scaled_power(attacker.power, attacker_level)
    damage *= ACTION_MULTIPLIERS.get(action, 1.0)

    defence = defender.defence * penetration_factor(attacker.penetration)
    if defender_berserk:
        defence *= 0.5
    damage = max(1.0, damage - defence)

    critical = rng.chance(stat_to_chance(attacker.crit_chance, CRIT_K)) and not crit_immune
    if critical:
        damage *= 2

    block_chance = stat_to_chance(defender.block_chance, BLOCK_K)
    if defender_guarding:
        block_chance = min(GUARD_BLOCK_CAP, block_chance + GUARD_BLOCK_BONUS)
    blocked = rng.chance(block_chance)
    if blocked:
        damage *= 0.5

    counter_attack = False
    counter_damage = 0
    if blocked:
        counter_chance = stat_to_chance(defender.counter, COUNTER_K)
        if defender_guarding:
            counter_chance = min(GUARD_COUNTER_CAP, counter_chance + GUARD_COUNTER_BONUS)
        counter_attack = rng.chance(counter_chance)
        if counter_attack:
            counter_damage = calculate_counter_damage(attacker, defender, defender_level)

    return DamageResult(
        damage=round_half_up(damage),
        critical=critical,
        blocked=blocked,
        counter_attack=counter_attack,
        counter_damage=counter_damage,
    )


def reduce_damage(result: DamageResult, reduction: float) -> DamageResult:
    """Apply a flat-percentage reduction to a landed hit (floor 1)."""
    if reduction <= 0 or not result.landed:
        return result
    return replace(result, damage=max(1, round_half_up(result.damage * (1 - reduction))))


def add_flat_damage(result: DamageResult, bonus: int) -> DamageResult:
    """Add flat bonus damage to a landed hit."""
    if bonus <= 0 or not result.landed:
        return result
    return replace(result, damage=result.damage + bonus)
