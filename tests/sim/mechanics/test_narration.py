"""Tests for combat log lines."""

from __future__ import annotations

from binary_boxer.ir.actions import CombatAction
from binary_boxer.sim.core.fight_state import Side
from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.mechanics.damage import DODGED, NO_DAMAGE, DamageResult
from binary_boxer.sim.mechanics.narration import fill_template, narrate


def _line(side=Side.PLAYER, action=CombatAction.STRIKE, result=None, crashed=False, seed=1) -> str:
    return narrate(side, action, result or DamageResult(damage=6), crashed, "BOLT", "NULLPTR", SeededRNG(seed))


class TestFillTemplate:
    def test_substitutes(self) -> None:
        assert fill_template("{a} hits {b}", {"a": "X", "b": "Y"}) == "X hits Y"

    def test_unknown_key_left_bare(self) -> None:
        assert fill_template("{a} and {who}", {"a": "X"}) == "X and who"


class TestNarrate:
    def test_no_placeholders_left(self) -> None:
        for seed in range(20):
            line = _line(seed=seed)
            assert "{" not in line and "}" not in line

    def test_deterministic(self) -> None:
        assert _line(seed=5) == _line(seed=5)

    def test_crash(self) -> None:
        line = _line(action=CombatAction.OVERCLOCK, result=NO_DAMAGE, crashed=True)
        assert "BOLT" in line

    def test_enemy_side_names_enemy_as_actor(self) -> None:
        line = _line(side=Side.ENEMY, action=CombatAction.GUARD, result=NO_DAMAGE)
        assert line.startswith("NULLPTR")

    def test_dodge_names_defender(self) -> None:
        for seed in range(10):
            assert "NULLPTR" in _line(result=DODGED, seed=seed)

    def test_crit_line(self) -> None:
        assert "CRITICAL" in _line(result=DamageResult(damage=12, critical=True))

    def test_single_draw(self) -> None:
        rng = SeededRNG(8)
        narrate(Side.PLAYER, CombatAction.STRIKE, DamageResult(damage=6), False, "BOLT", "NULLPTR", rng)
        reference = SeededRNG(8)
        reference.next()
        assert rng.next() == reference.next()
