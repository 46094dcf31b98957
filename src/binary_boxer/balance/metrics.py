"""Pure metric computation functions for balance analysis.

All functions take fight telemetry (or already computed metrics) and
return structured metrics.  No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from binary_boxer.balance.models import GlobalMetrics, LanguageMetrics, LoadoutMetrics

if TYPE_CHECKING:
    from binary_boxer.sim.runner import Loadout
    from binary_boxer.sim.telemetry import FightTelemetry


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_global_metrics(fights: list[FightTelemetry]) -> GlobalMetrics:
    """Compute aggregate fight statistics."""
    total = len(fights)
    if total == 0:
        return GlobalMetrics(total_fights=0, wins=0, losses=0, win_rate=0.0, avg_rounds=0.0)

    wins = sum(1 for f in fights if f.won)
    return GlobalMetrics(
        total_fights=total,
        wins=wins,
        losses=total - wins,
        win_rate=wins / total,
        avg_rounds=_mean([f.rounds for f in fights]),
        boss_fights=sum(1 for f in fights if f.is_boss),
    )


def compute_loadout_metrics(
    loadout: Loadout,
    fights: list[FightTelemetry],
    global_wr: float,
) -> LoadoutMetrics:
    """Compute fight metrics for one loadout's batch."""
    total = len(fights)
    wins = sum(1 for f in fights if f.won)
    win_rate = wins / total if total else 0.0

    actions: Counter[str] = Counter()
    for f in fights:
        actions.update(f.actions_played)
    player_turns = sum(actions.values())
    crashes = sum(f.crashes for f in fights)

    return LoadoutMetrics(
        loadout=loadout.label,
        language_1=loadout.language_1,
        language_2=loadout.language_2,
        fights=total,
        wins=wins,
        losses=total - wins,
        win_rate=win_rate,
        win_rate_delta=win_rate - global_wr,
        avg_rounds=_mean([f.rounds for f in fights]),
        avg_hp_left=_mean([
            f.player_hp_end / f.player_hp_start for f in fights if f.player_hp_start > 0
        ]),
        avg_damage_dealt=_mean([f.damage_dealt for f in fights]),
        avg_damage_taken=_mean([f.damage_taken for f in fights]),
        crash_rate=crashes / player_turns if player_turns else 0.0,
        action_share={
            action: count / player_turns for action, count in sorted(actions.items())
        } if player_turns else {},
    )


def compute_language_metrics(
    loadouts: list[LoadoutMetrics],
    global_wr: float,
) -> list[LanguageMetrics]:
    """Aggregate loadout metrics per language, best win rate first."""
    languages = sorted({m.language_1 for m in loadouts} | {m.language_2 for m in loadouts})

    results: list[LanguageMetrics] = []
    for language in languages:
        with_language = [m for m in loadouts if language in (m.language_1, m.language_2)]
        fights = sum(m.fights for m in with_language)
        wins = sum(m.wins for m in with_language)
        win_rate = wins / fights if fights else 0.0
        results.append(LanguageMetrics(
            language=language,
            loadouts=len(with_language),
            fights=fights,
            win_rate=win_rate,
            win_rate_delta=win_rate - global_wr,
        ))

    results.sort(key=lambda m: m.win_rate, reverse=True)
    return results
