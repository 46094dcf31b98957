"""Tests for metric computation functions."""

from __future__ import annotations

import pytest

from binary_boxer.balance.metrics import (
    compute_global_metrics,
    compute_language_metrics,
    compute_loadout_metrics,
)
from binary_boxer.sim.runner import Loadout
from binary_boxer.sim.telemetry import FightTelemetry


def _make_fight(
    result: str = "win",
    rounds: int = 10,
    hp_end: float = 55,
    crashes: int = 0,
    actions: dict[str, int] | None = None,
    is_boss: bool = False,
) -> FightTelemetry:
    return FightTelemetry(
        seed=0,
        enemy_name="NULLPTR",
        enemy_level=1,
        is_boss=is_boss,
        result=result,
        rounds=rounds,
        player_hp_start=110,
        player_hp_end=hp_end if result == "win" else 0,
        enemy_hp_end=0 if result == "win" else 40,
        damage_dealt=115 if result == "win" else 75,
        damage_taken=55 if result == "win" else 110,
        crashes=crashes,
        actions_played=actions if actions is not None else {"strike": rounds},
    )


# ---- Global metrics ----

class TestComputeGlobalMetrics:
    def test_basic(self) -> None:
        fights = [
            _make_fight("win", rounds=8),
            _make_fight("loss", rounds=12, is_boss=True),
            _make_fight("loss", rounds=10),
        ]
        gm = compute_global_metrics(fights)
        assert gm.total_fights == 3
        assert gm.wins == 1
        assert gm.losses == 2
        assert gm.win_rate == pytest.approx(1 / 3)
        assert gm.avg_rounds == pytest.approx(10.0)
        assert gm.boss_fights == 1

    def test_empty(self) -> None:
        gm = compute_global_metrics([])
        assert gm.total_fights == 0
        assert gm.win_rate == 0.0


# ---- Loadout metrics ----

class TestComputeLoadoutMetrics:
    def test_basic(self) -> None:
        fights = [
            _make_fight("win", hp_end=55, actions={"strike": 6, "guard": 4}, crashes=1),
            _make_fight("loss", actions={"strike": 10}),
        ]
        m = compute_loadout_metrics(Loadout("rust", "go"), fights, global_wr=0.4)
        assert m.loadout == "rust+go"
        assert m.fights == 2
        assert m.wins == 1
        assert m.win_rate == 0.5
        assert m.win_rate_delta == pytest.approx(0.1)
        assert m.avg_hp_left == pytest.approx(0.25)
        assert m.avg_damage_dealt == pytest.approx(95)
        assert m.crash_rate == pytest.approx(1 / 20)
        assert m.action_share == {"guard": 0.2, "strike": 0.8}

    def test_no_turns(self) -> None:
        m = compute_loadout_metrics(Loadout("rust", "go"), [_make_fight(actions={})], global_wr=1.0)
        assert m.crash_rate == 0.0
        assert m.action_share == {}


# ---- Language metrics ----

class TestComputeLanguageMetrics:
    def test_aggregates_every_pair_with_language(self) -> None:
        wins = [_make_fight("win")] * 3 + [_make_fight("loss")]
        losses = [_make_fight("loss")] * 4
        loadouts = [
            compute_loadout_metrics(Loadout("rust", "go"), wins, 0.5),
            compute_loadout_metrics(Loadout("rust", "css"), losses, 0.5),
            compute_loadout_metrics(Loadout("go", "css"), wins, 0.5),
        ]
        languages = compute_language_metrics(loadouts, global_wr=0.5)
        by_name = {m.language: m for m in languages}

        assert [m.language for m in languages] == ["go", "css", "rust"]
        assert by_name["go"].win_rate == 0.75
        assert by_name["rust"].fights == 8
        assert by_name["rust"].loadouts == 2
        assert by_name["rust"].win_rate == pytest.approx(3 / 8)
        assert by_name["css"].win_rate_delta == pytest.approx(3 / 8 - 0.5)
