"""Action menu for the player and weighted action choice for the enemy.

The player is offered ``strike`` plus whatever their stats unlock, capped
at three entries.  The enemy draws from a weighted pool gated by the same
thresholds, switching to ``berserk`` more often when low on HP.
"""

from __future__ import annotations

from binary_boxer.ir.actions import ACTION_INFO, CombatAction
from binary_boxer.ir.stats import StatVector
from binary_boxer.sim.core.fight_state import AvailableAction
from binary_boxer.sim.core.rng import SeededRNG

MAX_OFFERED_ACTIONS = 3
BERSERK_HP_THRESHOLD = 0.3
ENEMY_BERSERK_CHANCE = 0.6

HEAVY_STRIKE_CREATIVITY = 15
GUARD_WISDOM = 15
ANALYSE_PATTERN_READ = 10
OVERCLOCK_ADAPTABILITY = 15
COMBO_CREATIVITY_SPEED = 25


def _unlocked(stats: StatVector) -> list[CombatAction]:
    """Stat-gated actions in menu order (``strike`` and ``berserk`` excluded)."""
    actions: list[CombatAction] = []
    if stats.creativity >= HEAVY_STRIKE_CREATIVITY:
        actions.append(CombatAction.HEAVY_STRIKE)
    if stats.wisdom >= GUARD_WISDOM:
        actions.append(CombatAction.GUARD)
    if stats.pattern_read >= ANALYSE_PATTERN_READ:
        actions.append(CombatAction.ANALYSE)
    if stats.adaptability >= OVERCLOCK_ADAPTABILITY:
        actions.append(CombatAction.OVERCLOCK)
    if stats.creativity + stats.speed > COMBO_CREATIVITY_SPEED:
        actions.append(CombatAction.COMBO)
    return actions


def score_action(action: CombatAction, stats: StatVector) -> float:
    """How well *stats* suit *action*; the highest offered score is primary."""
    if action is CombatAction.STRIKE:
        return stats.power
    if action is CombatAction.HEAVY_STRIKE:
        return stats.creativity + stats.power * 0.5
    if action is CombatAction.GUARD:
        return stats.wisdom + stats.block_chance
    if action is CombatAction.ANALYSE:
        return stats.pattern_read * 2
    if action is CombatAction.OVERCLOCK:
        return stats.adaptability + stats.speed
    if action is CombatAction.COMBO:
        return stats.creativity + stats.speed
    if action is CombatAction.BERSERK:
        return stats.power * 2
    return 0


def get_available_actions(
    stats: StatVector,
    current_hp: float,
    max_hp: float,
) -> list[AvailableAction]:
    """Build the player's action menu.

    ``strike`` is always first.  When more than three actions qualify the
    menu is ``strike`` plus the two best-scoring others.  Exactly one entry
    is flagged primary: the first one holding the highest score, so a tie
    keeps ``strike`` primary.
    """
    candidates = _unlocked(stats)
    if max_hp > 0 and current_hp / max_hp < BERSERK_HP_THRESHOLD:
        candidates.append(CombatAction.BERSERK)

    if len(candidates) + 1 > MAX_OFFERED_ACTIONS:
        candidates = sorted(candidates, key=lambda a: score_action(a, stats), reverse=True)
        candidates = candidates[: MAX_OFFERED_ACTIONS - 1]

    offered = [CombatAction.STRIKE] + candidates
    scores = [score_action(a, stats) for a in offered]
    primary_idx = scores.index(max(scores))

    menu: list[AvailableAction] = []
    for idx, action in enumerate(offered):
        info = ACTION_INFO[action]
        menu.append(AvailableAction(
            action=action,
            name=info.name,
            description=info.description,
            risk_label=info.risk_label,
            is_primary=idx == primary_idx,
        ))
    return menu


# ---------------------------------------------------------------------------
# Enemy AI
# ---------------------------------------------------------------------------

_ENEMY_WEIGHTS: dict[CombatAction, int] = {
    CombatAction.STRIKE: 30,
    CombatAction.HEAVY_STRIKE: 20,
    CombatAction.GUARD: 15,
    CombatAction.COMBO: 18,
    CombatAction.OVERCLOCK: 10,
}


def enemy_action_pool(stats: StatVector) -> list[tuple[CombatAction, int]]:
    """Weighted ``(action, weight)`` pool the enemy draws from."""
    pool = [(CombatAction.STRIKE, _ENEMY_WEIGHTS[CombatAction.STRIKE])]
    if stats.creativity >= HEAVY_STRIKE_CREATIVITY:
        pool.append((CombatAction.HEAVY_STRIKE, _ENEMY_WEIGHTS[CombatAction.HEAVY_STRIKE]))
    if stats.wisdom >= GUARD_WISDOM:
        pool.append((CombatAction.GUARD, _ENEMY_WEIGHTS[CombatAction.GUARD]))
    if stats.creativity + stats.speed > COMBO_CREATIVITY_SPEED:
        pool.append((CombatAction.COMBO, _ENEMY_WEIGHTS[CombatAction.COMBO]))
    if stats.adaptability >= OVERCLOCK_ADAPTABILITY:
        pool.append((CombatAction.OVERCLOCK, _ENEMY_WEIGHTS[CombatAction.OVERCLOCK]))
    return pool


def choose_enemy_action(
    stats: StatVector,
    hp_fraction: float,
    rng: SeededRNG,
) -> CombatAction:
    """Pick the enemy's action for this round.

    Below 30% HP the berserk roll is made first; otherwise (or if it
    fails) one draw selects from the weighted pool.
    """
    if hp_fraction < BERSERK_HP_THRESHOLD and rng.chance(ENEMY_BERSERK_CHANCE):
        return CombatAction.BERSERK

    pool = enemy_action_pool(stats)
    roll = rng.next() * sum(weight for _, weight in pool)
    for action, weight in pool:
        roll -= weight
        if roll <= 0:
            return action
    return CombatAction.STRIKE
