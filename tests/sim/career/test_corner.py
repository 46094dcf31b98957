"""Tests for between-fight corner actions."""

from __future__ import annotations

import pytest

from binary_boxer.ir.stats import StatKey
from binary_boxer.sim.career.corner import (
    full_repair,
    repair,
    swap_language,
    train,
    training_cost,
)
from binary_boxer.sim.career.progression import create_robot
from binary_boxer.sim.content.registry import CatalogueRegistry
from binary_boxer.sim.core.entities import PlayerState, RobotPhase


def _make_player(registry: CatalogueRegistry, hp: int | None = None, **updates) -> PlayerState:
    player, _ = create_robot(registry, "BOLT", "rust", "go")
    if hp is not None:
        updates["stats"] = player.stats.with_hp(hp)
    return player.model_copy(update=updates)


class TestRepair:
    def test_heals_half_max_hp(self, registry: CatalogueRegistry) -> None:
        assert repair(_make_player(registry, hp=10)).stats.hp == 65

    def test_capped_at_max(self, registry: CatalogueRegistry) -> None:
        assert repair(_make_player(registry, hp=100)).stats.hp == 110

    def test_no_cooldown(self, registry: CatalogueRegistry) -> None:
        player = repair(_make_player(registry, hp=0))
        assert player.full_repair_cooldown == 0
        assert repair(player).stats.hp == 110

    def test_requires_corner(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError):
            repair(_make_player(registry, hp=10, phase=RobotPhase.FIGHTING))


class TestFullRepair:
    def test_heals_to_max_and_sets_cooldown(self, registry: CatalogueRegistry) -> None:
        player = full_repair(_make_player(registry, hp=1))
        assert player.stats.hp == 110
        assert player.full_repair_cooldown == 3

    def test_on_cooldown(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError, match="cooldown"):
            full_repair(_make_player(registry, hp=1, full_repair_cooldown=2))


class TestTraining:
    def test_cost(self, registry: CatalogueRegistry) -> None:
        player = _make_player(registry)
        assert training_cost(player, StatKey.POWER) == 100
        assert training_cost(player, StatKey.DEFENCE) == 80

    def test_zero_stat_costs_floor(self, registry: CatalogueRegistry) -> None:
        assert training_cost(_make_player(registry), StatKey.WISDOM) == 10

    def test_train_power(self, registry: CatalogueRegistry) -> None:
        player = train(_make_player(registry, xp=130), "power")
        assert player.stats.power == 11
        assert player.xp == 30

    def test_train_max_hp_raises_hp(self, registry: CatalogueRegistry) -> None:
        player = train(_make_player(registry, hp=50, xp=2000), StatKey.MAX_HP)
        assert player.stats.max_hp == 111
        assert player.stats.hp == 51
        assert player.xp == 2000 - 1100

    def test_not_enough_xp(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError, match="Not enough XP"):
            train(_make_player(registry, xp=99), StatKey.POWER)

    def test_hp_not_trainable(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError):
            train(_make_player(registry, xp=5000), StatKey.HP)

    def test_unknown_stat(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError):
            train(_make_player(registry, xp=5000), "luck")


class TestSwapLanguage:
    def test_swap_slot_two(self, registry: CatalogueRegistry) -> None:
        player = swap_language(registry, _make_player(registry), 2, "cpp")
        assert player.language_2 == "cpp"
        assert player.language_1 == "rust"
        assert player.swap_language_cooldown == 10
        assert player.stats.wisdom == 3
        assert player.stats.speed == 5
        assert player.stats.hp == player.stats.max_hp

    def test_hp_ratio_preserved(self, registry: CatalogueRegistry) -> None:
        player = swap_language(registry, _make_player(registry, hp=55), 1, "javascript")
        # javascript raises max hp to 113; 113 * 0.5 floored
        assert player.stats.max_hp == 113
        assert player.stats.hp == 56

    def test_min_one_hp(self, registry: CatalogueRegistry) -> None:
        player = swap_language(registry, _make_player(registry, hp=0), 1, "cpp")
        assert player.stats.hp == 1

    def test_same_language_rejected(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError):
            swap_language(registry, _make_player(registry), 1, "rust")

    def test_other_slot_rejected(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError):
            swap_language(registry, _make_player(registry), 1, "go")

    def test_cooldown(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError, match="cooldown"):
            swap_language(registry, _make_player(registry, swap_language_cooldown=4), 1, "cpp")

    def test_bad_slot(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(ValueError):
            swap_language(registry, _make_player(registry), 3, "cpp")

    def test_unknown_language(self, registry: CatalogueRegistry) -> None:
        with pytest.raises(KeyError):
            swap_language(registry, _make_player(registry), 1, "cobol")
