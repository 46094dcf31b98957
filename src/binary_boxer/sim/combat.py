"""Round-by-round combat resolution.

``resolve_round`` is the whole state machine: it takes a
:class:`FightState`, the player's chosen action and the player's level,
and returns the next state together with the turn records it appended.
Each round draws from its own RNG seeded with
``seed + current_round * 997``, so a round's outcome depends only on the
fight seed and the round index.  Resolving interactively and
auto-resolving therefore produce the same fight.

RNG draw order inside a round:
    1. Interrupt roll (only when the boss overlay has an interrupt chance)
    2. Player crash roll (overclock, or any action under extra crash chance)
    3. Enemy action choice
    4. Enemy crash roll (only for overclock)
    5. First actor: hit rolls, combo follow-up rolls, narration pick
    6. Second actor: same, skipped if the first actor ended the fight
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from binary_boxer.ir.actions import CombatAction
from binary_boxer.ir.stats import StatValue, StatVector, round_half_up
from binary_boxer.sim.core.fight_state import (
    AvailableAction,
    EnemyDescriptor,
    FightResult,
    FightState,
    Side,
    TurnRecord,
)
from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.mechanics.actions import choose_enemy_action, get_available_actions
from binary_boxer.sim.mechanics.boss_effects import (
    BossEffects,
    apply_enemy_stat_mods,
    apply_player_stat_mods,
    get_boss_effects,
)
from binary_boxer.sim.mechanics.damage import (
    DODGED,
    NO_DAMAGE,
    DamageResult,
    add_flat_damage,
    calculate_damage,
    reduce_damage,
    stat_to_chance,
)
from binary_boxer.sim.mechanics.narration import narrate

logger = logging.getLogger(__name__)

MAX_ROUNDS = 50
ROUND_SEED_STRIDE = 997

STABILITY_K = 60
OVERCLOCK_CRASH_CHANCE = 0.2
MIN_OVERCLOCK_CRASH_CHANCE = 0.05


@dataclass(frozen=True)
class RoundResult:
    """The new state plus the records appended this round.

    ``enemy_turn`` (or ``player_turn``) is ``None`` when the round ended
    on the first actor's knockout before that side could act.
    """

    state: FightState
    player_turn: TurnRecord | None = None
    enemy_turn: TurnRecord | None = None


@dataclass(frozen=True)
class _Combatant:
    side: Side
    stats: StatVector
    level: int
    action: CombatAction
    crashed: bool

    @property
    def guarding(self) -> bool:
        return self.action is CombatAction.GUARD and not self.crashed

    @property
    def berserk(self) -> bool:
        return self.action is CombatAction.BERSERK and not self.crashed


# ---------------------------------------------------------------------------
# Fight setup
# ---------------------------------------------------------------------------

def init_fight(player_stats: StatVector, enemy: EnemyDescriptor, seed: int) -> FightState:
    """Round-0 state: both sides at their starting HP, menu computed."""
    return FightState(
        enemy=enemy,
        seed=seed,
        player_stats_snapshot=player_stats,
        available_actions=tuple(
            get_available_actions(player_stats, player_stats.hp, player_stats.max_hp)
        ),
        current_hp=player_stats.hp,
        enemy_current_hp=enemy.stats.hp,
    )


# ---------------------------------------------------------------------------
# Per-hit helpers
# ---------------------------------------------------------------------------

def roll_crash(
    action: CombatAction,
    stats: StatVector,
    extra_crash_chance: float,
    rng: SeededRNG,
) -> bool:
    """Overclock always rolls; other actions roll only under extra crash chance."""
    if action is CombatAction.OVERCLOCK:
        chance = max(
            MIN_OVERCLOCK_CRASH_CHANCE,
            OVERCLOCK_CRASH_CHANCE + extra_crash_chance - stat_to_chance(stats.stability, STABILITY_K),
        )
        return rng.chance(chance)
    if extra_crash_chance > 0:
        return rng.chance(extra_crash_chance)
    return False


def _hit(
    attacker: _Combatant,
    defender: _Combatant,
    effects: BossEffects,
    rng: SeededRNG,
) -> DamageResult:
    if attacker.crashed:
        return NO_DAMAGE

    player_attacking = attacker.side is Side.PLAYER
    if player_attacking and effects.enemy_auto_dodge and attacker.action.deals_damage:
        return DODGED

    result = calculate_damage(
        attacker.stats,
        defender.stats,
        attacker.level,
        defender.level,
        attacker.action,
        rng,
        defender_guarding=defender.guarding,
        defender_berserk=defender.berserk,
        crit_immune=player_attacking and effects.crit_immune,
    )

    if player_attacking:
        return reduce_damage(result, effects.damage_reduction)

    result = add_flat_damage(result, effects.bonus_flat_damage)
    if result.counter_attack and effects.damage_reduction > 0:
        reduced = round_half_up(result.counter_damage * (1 - effects.damage_reduction))
        result = replace(result, counter_damage=max(1, reduced))
    return result


def _combine(first: DamageResult, second: DamageResult) -> DamageResult:
    return DamageResult(
        damage=first.damage + second.damage,
        critical=first.critical or second.critical,
        blocked=first.blocked or second.blocked,
        dodged=first.dodged,
        counter_attack=first.counter_attack or second.counter_attack,
        counter_damage=first.counter_damage + second.counter_damage,
    )


def _act(
    actor: _Combatant,
    target: _Combatant,
    hp: dict[Side, StatValue],
    effects: BossEffects,
    rng: SeededRNG,
) -> DamageResult:
    """Resolve *actor*'s whole action, applying damage to *hp* in place.

    A combo's follow-up is a second full hit, made only if the first was
    not dodged and both sides are still standing.
    """
    outcome = _hit(actor, target, effects, rng)
    hp[target.side] = max(0, hp[target.side] - outcome.damage)
    hp[actor.side] = max(0, hp[actor.side] - outcome.counter_damage)

    if (
        actor.action is CombatAction.COMBO
        and not actor.crashed
        and not outcome.dodged
        and hp[target.side] > 0
        and hp[actor.side] > 0
    ):
        follow_up = _hit(actor, target, effects, rng)
        hp[target.side] = max(0, hp[target.side] - follow_up.damage)
        hp[actor.side] = max(0, hp[actor.side] - follow_up.counter_damage)
        outcome = _combine(outcome, follow_up)

    return outcome


def _result_for(hp: dict[Side, StatValue], round_number: int) -> FightResult:
    if hp[Side.PLAYER] <= 0:
        return FightResult.LOSS
    if hp[Side.ENEMY] <= 0:
        return FightResult.WIN
    if round_number >= MAX_ROUNDS:
        return FightResult.WIN if hp[Side.PLAYER] > hp[Side.ENEMY] else FightResult.LOSS
    return FightResult.PENDING


# ---------------------------------------------------------------------------
# Round resolution
# ---------------------------------------------------------------------------

def resolve_round(
    state: FightState,
    player_action: CombatAction,
    player_level: int,
    robot_name: str,
) -> RoundResult:
    """Resolve one round.  *player_action* must already be validated
    against ``state.available_actions``.

    A terminal *state* is returned unchanged with no turn records.
    """
    if state.is_over:
        return RoundResult(state=state)

    rng = SeededRNG(state.seed + state.current_round * ROUND_SEED_STRIDE)
    round_number = state.current_round + 1

    effects = get_boss_effects(state.enemy, round_number, state.player_stats_snapshot.max_hp)
    player_stats = apply_player_stat_mods(state.player_stats_snapshot, effects)
    enemy_stats = apply_enemy_stat_mods(state.enemy.stats, effects)
    player_first = player_stats.speed >= enemy_stats.speed

    action = player_action
    if effects.negate_player_guard and action is CombatAction.GUARD:
        action = CombatAction.STRIKE
    if effects.interrupt_chance > 0 and rng.chance(effects.interrupt_chance):
        action = CombatAction.STRIKE
    player_crashed = roll_crash(action, player_stats, effects.extra_crash_chance, rng)

    enemy_action = choose_enemy_action(
        enemy_stats, state.enemy_current_hp / enemy_stats.max_hp, rng,
    )
    enemy_crashed = roll_crash(enemy_action, enemy_stats, 0.0, rng)

    player = _Combatant(Side.PLAYER, player_stats, player_level, action, player_crashed)
    enemy = _Combatant(Side.ENEMY, enemy_stats, state.enemy.level, enemy_action, enemy_crashed)
    order = (player, enemy) if player_first else (enemy, player)

    hp: dict[Side, StatValue] = {
        Side.PLAYER: state.current_hp,
        Side.ENEMY: state.enemy_current_hp,
    }
    records: list[TurnRecord] = []

    for offset, (actor, target) in enumerate((order, order[::-1])):
        outcome = _act(actor, target, hp, effects, rng)
        records.append(TurnRecord(
            round_number=round_number,
            turn_number=round_number * 2 - 1 + offset,
            side=actor.side,
            action=actor.action,
            damage=outcome.damage,
            blocked=outcome.blocked,
            dodged=outcome.dodged,
            critical=outcome.critical,
            crashed=actor.crashed,
            counter_attack=outcome.counter_attack,
            counter_damage=outcome.counter_damage,
            player_hp_after=hp[Side.PLAYER],
            enemy_hp_after=hp[Side.ENEMY],
            narration=narrate(
                actor.side, actor.action, outcome, actor.crashed,
                robot_name, state.enemy.name, rng,
            ),
        ))
        if hp[Side.PLAYER] <= 0 or hp[Side.ENEMY] <= 0:
            break

    result = _result_for(hp, round_number)
    next_actions: tuple[AvailableAction, ...] = ()
    if result is FightResult.PENDING:
        next_actions = tuple(
            get_available_actions(player_stats, hp[Side.PLAYER], player_stats.max_hp)
        )

    logger.debug(
        "Round %d vs %s: %s -> player %s, enemy %s (%s)",
        round_number, state.enemy.name,
        ", ".join(f"{r.side.value}:{r.action.value}={r.damage}" for r in records),
        hp[Side.PLAYER], hp[Side.ENEMY], result.value,
    )

    new_state = state.model_copy(update={
        "current_round": round_number,
        "turns": state.turns + tuple(records),
        "result": result,
        "current_hp": hp[Side.PLAYER],
        "enemy_current_hp": hp[Side.ENEMY],
        "available_actions": next_actions,
    })

    by_side = {r.side: r for r in records}
    return RoundResult(
        state=new_state,
        player_turn=by_side.get(Side.PLAYER),
        enemy_turn=by_side.get(Side.ENEMY),
    )


# ---------------------------------------------------------------------------
# Auto-resolve
# ---------------------------------------------------------------------------

def auto_pick_action(actions: tuple[AvailableAction, ...] | list[AvailableAction]) -> CombatAction:
    """The primary-flagged action, or ``strike`` if none is flagged."""
    for entry in actions:
        if entry.is_primary:
            return entry.action
    return CombatAction.STRIKE


def auto_resolve(state: FightState, player_level: int, robot_name: str) -> FightState:
    """Resolve every remaining round with :func:`auto_pick_action`.

    The returned state has ``auto_pilot`` set.  Terminates within
    ``MAX_ROUNDS`` rounds.
    """
    while not state.is_over:
        action = auto_pick_action(state.available_actions)
        state = resolve_round(state, action, player_level, robot_name).state
    return state.model_copy(update={"auto_pilot": True})
