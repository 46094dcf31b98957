"""Tests for dynasty inheritance."""

from __future__ import annotations

import pytest

from binary_boxer.ir.stats import StatKey, StatVector
from binary_boxer.sim.core.entities import DynastyGeneration, RetirementCause
from binary_boxer.sim.mechanics.inheritance import (
    DynastyTitle,
    calculate_inheritance,
    calculate_total_legacy,
    decay_factor,
    get_dynasty_title,
)


def _make_stats(**overrides) -> StatVector:
    fields = dict(hp=150, max_hp=150, power=10, defence=20, speed=5)
    fields.update(overrides)
    return StatVector(**fields)


def _make_ancestor(number: int, stats: StatVector | None = None) -> DynastyGeneration:
    return DynastyGeneration(
        generation_number=number,
        robot_name=f"GEN{number}",
        language_1="rust",
        language_2="go",
        final_level=5,
        total_fights=20,
        wins=10,
        best_streak=3,
        cause_of_retirement=RetirementCause.VOLUNTARY,
        final_stats=stats or _make_stats(),
    )


class TestCalculateInheritance:
    def test_single_parent(self) -> None:
        legacy = calculate_inheritance(_make_stats(), generation=1, has_decay_boost=False)
        assert legacy[StatKey.POWER] == 1.0
        assert legacy[StatKey.DEFENCE] == 2.0
        assert legacy[StatKey.MAX_HP] == 14.7

    def test_zero_stats_omitted(self) -> None:
        legacy = calculate_inheritance(_make_stats(), generation=1, has_decay_boost=False)
        assert StatKey.WISDOM not in legacy
        assert StatKey.HP not in legacy

    def test_decay_boost(self) -> None:
        plain = calculate_inheritance(_make_stats(defence=40), 1, False)
        boosted = calculate_inheritance(_make_stats(defence=40), 1, True)
        assert plain[StatKey.DEFENCE] == 3.9
        assert boosted[StatKey.DEFENCE] == 4.9
        assert boosted[StatKey.DEFENCE] > plain[StatKey.DEFENCE]

    def test_decay_factor(self) -> None:
        assert decay_factor(0) == 1.0
        assert decay_factor(2) == pytest.approx(0.9604)

    @pytest.mark.parametrize("gap", range(0, 30))
    def test_decay_strictly_decreasing(self, gap: int) -> None:
        assert decay_factor(gap + 1) < decay_factor(gap)


class TestTotalLegacy:
    def test_no_ancestors(self) -> None:
        assert calculate_total_legacy([], False) == {}

    def test_one_ancestor_matches_single_parent(self) -> None:
        ancestor = _make_ancestor(1)
        assert calculate_total_legacy([ancestor], False) == calculate_inheritance(
            ancestor.final_stats, 1, False,
        )

    def test_older_ancestors_decay_more(self) -> None:
        stats = _make_stats(defence=100)
        legacy = calculate_total_legacy([_make_ancestor(1, stats), _make_ancestor(2, stats)], False)
        # 100 * 0.1 * (0.98**2 + 0.98)
        assert legacy[StatKey.DEFENCE] == 19.4

    @pytest.mark.parametrize("gap", range(1, 10))
    def test_contribution_shrinks_with_gap(self, gap: int) -> None:
        def defence_at(distance: int) -> float:
            # A defence-less newest generation pushes the first one `distance` back.
            ancestors = [_make_ancestor(1, _make_stats(defence=1000))]
            if distance > 1:
                ancestors.append(_make_ancestor(distance, _make_stats(defence=0)))
            return calculate_total_legacy(ancestors, False)[StatKey.DEFENCE]

        assert defence_at(gap + 1) < defence_at(gap)

    def test_recomputed_not_accumulated(self) -> None:
        stats = _make_stats(power=1.5)
        legacy = calculate_total_legacy([_make_ancestor(1, stats), _make_ancestor(2, stats)], False)
        # Rounding each parent separately gives 0.1 + 0.1; the full history gives
        # 0.15 * (0.98**2 + 0.98) = 0.291.
        folded = sum(
            calculate_inheritance(stats, gap, False)[StatKey.POWER] for gap in (1, 2)
        )
        assert folded == pytest.approx(0.2)
        assert legacy[StatKey.POWER] == 0.3


class TestDynastyTitle:
    @pytest.mark.parametrize("generation, title", [
        (1, DynastyTitle.PROTOTYPE),
        (2, DynastyTitle.LINEAGE),
        (3, DynastyTitle.LEGACY),
        (4, DynastyTitle.LEGACY),
        (5, DynastyTitle.DYNASTY),
        (9, DynastyTitle.DYNASTY),
        (10, DynastyTitle.EMPIRE),
        (24, DynastyTitle.EMPIRE),
        (25, DynastyTitle.ETERNAL),
        (100, DynastyTitle.ETERNAL),
    ])
    def test_boundaries(self, generation: int, title: DynastyTitle) -> None:
        assert get_dynasty_title(generation) is title
