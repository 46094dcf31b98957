"""Tests for single-hit damage calculation."""

from __future__ import annotations

import pytest

from binary_boxer.ir.actions import CombatAction
from binary_boxer.ir.stats import StatVector
from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.mechanics.damage import (
    DODGED,
    NO_DAMAGE,
    DamageResult,
    add_flat_damage,
    calculate_counter_damage,
    calculate_damage,
    reduce_damage,
    stat_to_chance,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _ScriptedRNG(SeededRNG):
    """Replays fixed ``next()`` values, then 0.99 (every roll fails)."""

    def __init__(self, values: list[float] | None = None) -> None:
        super().__init__(0)
        self.values = list(values or [])
        self.draws = 0

    def next(self) -> float:
        self.draws += 1
        return self.values.pop(0) if self.values else 0.99


def _make_stats(**overrides) -> StatVector:
    fields = dict(hp=100, max_hp=100, power=10, defence=5, speed=5)
    fields.update(overrides)
    return StatVector(**fields)


def _hit(action: CombatAction = CombatAction.STRIKE, rng: SeededRNG | None = None, **kwargs) -> DamageResult:
    attacker = kwargs.pop("attacker", _make_stats())
    defender = kwargs.pop("defender", _make_stats())
    return calculate_damage(attacker, defender, 1, 1, action, rng or _ScriptedRNG(), **kwargs)


# ---------------------------------------------------------------------------
# Diminishing returns
# ---------------------------------------------------------------------------

class TestStatToChance:
    def test_zero_and_negative(self) -> None:
        assert stat_to_chance(0, 80) == 0.0
        assert stat_to_chance(-5, 80) == 0.0

    def test_half_point(self) -> None:
        assert stat_to_chance(80, 80) == 0.5

    def test_never_reaches_one(self) -> None:
        assert stat_to_chance(10_000, 50) < 1.0


# ---------------------------------------------------------------------------
# Base damage
# ---------------------------------------------------------------------------

class TestBaseDamage:
    def test_strike(self) -> None:
        # 10 * 1.05 - 5 = 5.5, rounded half up
        assert _hit().damage == 6

    @pytest.mark.parametrize("action, expected", [
        (CombatAction.BERSERK, 16),
        (CombatAction.OVERCLOCK, 7),
        (CombatAction.COMBO, 2),
    ])
    def test_action_multipliers(self, action: CombatAction, expected: int) -> None:
        assert _hit(action).damage == expected

    def test_heavy_strike(self) -> None:
        # dodge fails, miss roll fails, then 10.5 * 1.5 - 5
        result = _hit(CombatAction.HEAVY_STRIKE, _ScriptedRNG([0.99, 0.99]))
        assert result.damage == 11

    def test_minimum_one(self) -> None:
        assert _hit(defender=_make_stats(defence=500)).damage == 1

    def test_penetration(self) -> None:
        assert _hit(attacker=_make_stats(penetration=50)).damage == 8

    def test_defender_berserk_halves_defence(self) -> None:
        assert _hit(defender_berserk=True).damage == 8

    def test_level_scaling(self) -> None:
        result = calculate_damage(
            _make_stats(), _make_stats(), 10, 1, CombatAction.STRIKE, _ScriptedRNG(),
        )
        assert result.damage == 10


# ---------------------------------------------------------------------------
# Rolls
# ---------------------------------------------------------------------------

class TestRolls:
    def test_non_damaging_actions_draw_nothing(self) -> None:
        rng = _ScriptedRNG()
        assert _hit(CombatAction.GUARD, rng) is NO_DAMAGE
        assert _hit(CombatAction.ANALYSE, rng) is NO_DAMAGE
        assert rng.draws == 0

    def test_dodge(self) -> None:
        result = _hit(defender=_make_stats(evasion=80), rng=_ScriptedRNG([0.1]))
        assert result == DODGED
        assert result.damage == 0

    def test_heavy_strike_miss(self) -> None:
        result = _hit(CombatAction.HEAVY_STRIKE, _ScriptedRNG([0.99, 0.1]))
        assert result.dodged

    def test_crit_doubles(self) -> None:
        result = _hit(attacker=_make_stats(crit_chance=50), rng=_ScriptedRNG([0.99, 0.1]))
        assert result.critical
        assert result.damage == 11

    def test_crit_immune_still_draws(self) -> None:
        rng = _ScriptedRNG([0.99, 0.1])
        result = _hit(attacker=_make_stats(crit_chance=50), rng=rng, crit_immune=True)
        assert not result.critical
        assert result.damage == 6
        assert rng.draws == 3

    def test_block_halves(self) -> None:
        result = _hit(defender=_make_stats(block_chance=50), rng=_ScriptedRNG([0.99, 0.99, 0.1]))
        assert result.blocked
        assert result.damage == 3
        assert not result.counter_attack

    def test_block_then_counter(self) -> None:
        defender = _make_stats(block_chance=50, counter=75, power=20)
        result = _hit(defender=defender, rng=_ScriptedRNG([0.99, 0.99, 0.1, 0.1]))
        assert result.blocked
        assert result.counter_attack
        # 20 * 1.05 * 0.6 - 5 = 7.6
        assert result.counter_damage == 8

    def test_guard_raises_block_odds(self) -> None:
        # 0.4 fails a 0% block but passes the guard's +50%
        rng_values = [0.99, 0.99, 0.4, 0.99]
        assert not _hit(rng=_ScriptedRNG(rng_values)).blocked
        assert _hit(rng=_ScriptedRNG(rng_values), defender_guarding=True).blocked

    def test_guard_block_cap(self) -> None:
        defender = _make_stats(block_chance=10_000)
        rng = _ScriptedRNG([0.99, 0.99, 0.95])
        assert not _hit(defender=defender, rng=rng, defender_guarding=True).blocked

    def test_same_seed_same_result(self) -> None:
        attacker = _make_stats(crit_chance=20)
        defender = _make_stats(evasion=20, block_chance=20, counter=20)
        a = calculate_damage(attacker, defender, 3, 3, CombatAction.COMBO, SeededRNG(9))
        b = calculate_damage(attacker, defender, 3, 3, CombatAction.COMBO, SeededRNG(9))
        assert a == b


class TestCounterDamage:
    def test_floor_one(self) -> None:
        assert calculate_counter_damage(_make_stats(defence=100), _make_stats(), 1) == 1

    def test_penetration_reduces_attacker_defence(self) -> None:
        defender = _make_stats(power=20, penetration=100)
        assert calculate_counter_damage(_make_stats(), defender, 1) == 13


class TestAdjustments:
    def test_reduce_damage(self) -> None:
        assert reduce_damage(DamageResult(damage=10), 0.5).damage == 5
        assert reduce_damage(DamageResult(damage=1), 0.9).damage == 1

    def test_reduce_ignores_misses(self) -> None:
        assert reduce_damage(DODGED, 0.5) is DODGED

    def test_add_flat_damage(self) -> None:
        assert add_flat_damage(DamageResult(damage=4), 11).damage == 15
        assert add_flat_damage(NO_DAMAGE, 11) is NO_DAMAGE
