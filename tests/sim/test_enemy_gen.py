"""Tests for procedural enemy generation."""

from __future__ import annotations

import pytest

from binary_boxer.ir.stats import COMBAT_STATS
from binary_boxer.sim.content.registry import CatalogueRegistry
from binary_boxer.sim.core.rng import seeded_range
from binary_boxer.sim.enemy_gen import enemy_stats_for_level, generate_enemy, is_boss_fight


class TestBossSchedule:
    @pytest.mark.parametrize("fight_number, expected", [
        (1, False), (4, False), (5, True), (6, False), (10, True), (25, True), (0, False),
    ])
    def test_every_fifth_fight(self, fight_number: int, expected: bool) -> None:
        assert is_boss_fight(fight_number) is expected


class TestEnemyStats:
    def test_regular(self) -> None:
        stats = enemy_stats_for_level(1, is_boss=False)
        assert stats.max_hp == stats.hp == 115
        assert all(stats.get(s) == 13 for s in COMBAT_STATS)

    def test_boss(self) -> None:
        stats = enemy_stats_for_level(1, is_boss=True)
        assert stats.max_hp == 230
        assert stats.power == 20

    def test_level_scaling(self) -> None:
        stats = enemy_stats_for_level(4, is_boss=False)
        assert stats.power == 22
        assert stats.max_hp == 160


class TestGenerateEnemy:
    def test_deterministic(self, registry: CatalogueRegistry) -> None:
        assert generate_enemy(registry, 3, 2, 777) == generate_enemy(registry, 3, 2, 777)

    def test_level_offset(self, registry: CatalogueRegistry) -> None:
        for seed in range(100):
            enemy = generate_enemy(registry, 5, 1, seed)
            assert 4 <= enemy.level <= 7
            assert enemy.level == 5 + seeded_range(seed, -1, 2)

    def test_level_never_below_one(self, registry: CatalogueRegistry) -> None:
        for seed in range(100):
            assert generate_enemy(registry, 1, 1, seed).level >= 1

    def test_regular_enemy(self, registry: CatalogueRegistry) -> None:
        enemy = generate_enemy(registry, 2, 3, 42)
        assert not enemy.is_boss
        assert enemy.name in registry.enemy_names
        assert enemy.boss_ability is None
        assert enemy.boss_overlay is None
        assert enemy.stats == enemy_stats_for_level(enemy.level, is_boss=False)

    def test_name_from_seed_plus_one(self, registry: CatalogueRegistry) -> None:
        enemy = generate_enemy(registry, 2, 3, 42)
        index = seeded_range(43, 0, len(registry.enemy_names) - 1)
        assert enemy.name == registry.enemy_names[index]

    def test_boss_enemy(self, registry: CatalogueRegistry) -> None:
        enemy = generate_enemy(registry, 2, 5, 42)
        assert enemy.is_boss
        assert enemy.name in registry.boss_names
        boss = registry.get_boss(enemy.name)
        assert enemy.boss_ability == boss.ability
        assert enemy.boss_taunt == boss.taunt
        assert enemy.boss_overlay == boss.overlay
        assert enemy.stats.max_hp == enemy_stats_for_level(enemy.level, is_boss=True).max_hp
