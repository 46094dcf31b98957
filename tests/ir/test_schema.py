"""Tests for the content schema models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from binary_boxer.ir import (
    ACTION_INFO,
    COMBAT_STATS,
    GROWTH_STATS,
    BossDefinition,
    BossOverlay,
    CombatAction,
    LanguageDefinition,
    StatKey,
    StatVector,
    round_half_up,
    round_one_decimal,
)
from binary_boxer.sim.content.registry import CatalogueRegistry


# ---- Rounding ----

class TestRounding:
    @pytest.mark.parametrize("value, expected", [
        (2.5, 3), (3.5, 4), (2.49, 2), (0.5, 1), (-0.5, 0), (-1.5, -1), (7.0, 7),
    ])
    def test_round_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_round_one_decimal(self) -> None:
        assert round_one_decimal(0.98) == 1.0
        assert round_one_decimal(1.04) == 1.0
        assert round_one_decimal(1.05) == 1.1


# ---- Stats ----

class TestStatVector:
    def test_stat_sets(self) -> None:
        assert StatKey.HP not in GROWTH_STATS
        assert StatKey.MAX_HP in GROWTH_STATS
        assert StatKey.MAX_HP not in COMBAT_STATS
        assert len(GROWTH_STATS) == len(StatKey) - 1

    def test_defaults_to_zero(self) -> None:
        stats = StatVector(hp=100, max_hp=100, power=10, defence=5, speed=5)
        assert stats.wisdom == 0
        assert stats.penetration == 0

    def test_with_hp_clamps(self) -> None:
        stats = StatVector(hp=50, max_hp=100, power=10, defence=5, speed=5)
        assert stats.with_hp(150).hp == 100
        assert stats.with_hp(-3).hp == 0
        assert stats.with_hp(70).hp == 70

    def test_rounded(self) -> None:
        stats = StatVector(hp=100, max_hp=100, power=10.5, defence=5.4, speed=5)
        rounded = stats.rounded()
        assert rounded.power == 11
        assert rounded.defence == 5

    def test_add_returns_new_vector(self) -> None:
        stats = StatVector(hp=100, max_hp=100, power=10, defence=5, speed=5)
        assert stats.add(StatKey.POWER, 2).power == 12
        assert stats.power == 10

    def test_uniform(self) -> None:
        stats = StatVector.uniform(13, 115)
        assert stats.hp == stats.max_hp == 115
        assert all(stats.get(s) == 13 for s in COMBAT_STATS)

    def test_json_round_trip(self) -> None:
        stats = StatVector(hp=80, max_hp=100, power=10.5, defence=5, speed=5, crit_chance=3)
        assert StatVector.model_validate_json(stats.model_dump_json()) == stats


# ---- Languages ----

class TestLanguageDefinition:
    def test_bonuses(self) -> None:
        lang = LanguageDefinition(
            id="rust", name="Rust", primary_stat="defence", primary_bonus=3,
            secondary_stat="stability", secondary_bonus=1,
        )
        assert lang.bonuses() == [(StatKey.DEFENCE, 3), (StatKey.STABILITY, 1)]

    def test_no_secondary(self) -> None:
        lang = LanguageDefinition(id="py", name="Py", primary_stat="power", primary_bonus=2)
        assert lang.bonuses() == [(StatKey.POWER, 2)]

    def test_hp_bonus_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LanguageDefinition(id="bad", name="Bad", primary_stat="hp", primary_bonus=3)

    def test_unknown_stat_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LanguageDefinition(id="bad", name="Bad", primary_stat="luck", primary_bonus=3)


# ---- Bosses ----

class TestBossOverlay:
    def test_default_is_neutral(self) -> None:
        overlay = BossOverlay()
        assert overlay.player_defence_mult == 1.0
        assert overlay.damage_reduction == 0.0
        assert overlay.active_in(50)

    def test_max_round(self) -> None:
        overlay = BossOverlay(enemy_auto_dodge=True, max_round=3)
        assert overlay.active_in(3)
        assert not overlay.active_in(4)

    def test_damage_reduction_bounded(self) -> None:
        with pytest.raises(ValidationError):
            BossOverlay(damage_reduction=1.0)

    def test_definition_default_overlay(self) -> None:
        boss = BossDefinition(name="X", ability="Nothing", taunt="Hi")
        assert boss.overlay == BossOverlay()


class TestActions:
    def test_every_action_has_info(self) -> None:
        assert set(ACTION_INFO) == set(CombatAction)

    def test_deals_damage(self) -> None:
        assert not CombatAction.GUARD.deals_damage
        assert not CombatAction.ANALYSE.deals_damage
        assert CombatAction.COMBO.deals_damage


# ---- Bundled catalogue ----

class TestCatalogue:
    def test_ten_languages(self, registry: CatalogueRegistry) -> None:
        assert len(registry.list_language_ids()) == 10
        assert registry.list_language_ids()[0] == "rust"

    def test_every_boss_name_has_definition(self, registry: CatalogueRegistry) -> None:
        for name in registry.boss_names:
            assert registry.get_boss(name) is not None

    def test_unknown_language(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(KeyError):
            registry.get_language("cobol")
        assert not registry.has_language("cobol")

    def test_companions_loaded(self, registry: CatalogueRegistry) -> None:
        assert registry.get_companion("veil").name == "Veil"
        assert len(registry.companions) == 3

    def test_enemy_pools_nonempty(self, registry: CatalogueRegistry) -> None:
        assert registry.enemy_names
        assert len(registry.boss_names) == 10
