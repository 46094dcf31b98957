"""Career progression -- robot creation, fights, levelling and retirement.

Everything here is a pure function over :class:`PlayerState` /
:class:`Dynasty` / :class:`FightState` records: the inputs are never
modified and nothing is persisted.  Storage, identity and event delivery
stay with the caller.

Lifecycle::

    create_robot -> (start_fight -> take_turn* | resolve_remaining -> complete_fight)*
                 -> retire_robot -> create_robot (next generation) ...
"""

from __future__ import annotations

import logging
import math
import re
import uuid
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from binary_boxer.ir.actions import CombatAction
from binary_boxer.ir.companions import CompanionId
from binary_boxer.ir.stats import LegacyMap, StatVector
from binary_boxer.sim.career import events
from binary_boxer.sim.career.events import MilestoneEvent
from binary_boxer.sim.combat import RoundResult, auto_resolve, init_fight, resolve_round
from binary_boxer.sim.core.entities import (
    Dynasty,
    DynastyGeneration,
    PlayerState,
    RetirementCause,
    RobotPhase,
)
from binary_boxer.sim.core.fight_state import FightResult, FightState
from binary_boxer.sim.enemy_gen import generate_enemy
from binary_boxer.sim.mechanics.inheritance import calculate_total_legacy
from binary_boxer.sim.mechanics.stats import (
    apply_companion_buffs,
    calculate_stats_for_level,
    get_xp_for_fight,
    get_xp_required,
)

if TYPE_CHECKING:
    from binary_boxer.sim.content.registry import CatalogueRegistry

logger = logging.getLogger(__name__)

ROBOT_NAME_MAX_LENGTH = 20

VEIL_UNLOCK_FIGHTS = 5
ECHO_UNLOCK_FIGHTS = 12
KINDRED_MIN_GENERATION = 2

VOLUNTARY_RETIREMENT_MIN_FIGHTS = 20
FORCED_RETIREMENT_MIN_FIGHTS = 30

_HTML_TAG = re.compile(r"<[^>]*>")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class FightCompletion:
    """Result of :func:`complete_fight`."""

    player: PlayerState
    dynasty: Dynasty | None
    events: list[MilestoneEvent] = field(default_factory=list)
    xp_gained: int = 0
    leveled_up: bool = False
    companion_unlocked: CompanionId | None = None
    forced_retirement: bool = False
    retired: PlayerState | None = None
    """The knocked-out robot in ``retired`` phase, set on forced retirement."""


@dataclass
class Retirement:
    """Result of :func:`retire_robot`: the successor in ``creating`` phase."""

    player: PlayerState
    retired: PlayerState
    dynasty: Dynasty
    generation: DynastyGeneration
    event: MilestoneEvent


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def sanitize_robot_name(raw: str) -> str:
    """Strip HTML tags and non-printable characters, collapse whitespace.

    Raises
    ------
    ValueError
        If the cleaned name is empty or longer than 20 characters.
    """
    name = _HTML_TAG.sub("", raw.strip())
    name = _NON_PRINTABLE.sub("", name)
    name = _WHITESPACE.sub(" ", name).strip()
    if not 1 <= len(name) <= ROBOT_NAME_MAX_LENGTH:
        raise ValueError(
            f"Robot name must be 1-{ROBOT_NAME_MAX_LENGTH} printable characters, got {raw!r}"
        )
    return name


def _require_phase(player: PlayerState, phase: RobotPhase, doing: str) -> None:
    if player.phase is not phase:
        raise ValueError(f"Robot must be in the {phase.value} phase to {doing} (is {player.phase.value})")


def stats_for(
    registry: CatalogueRegistry,
    language_1: str,
    language_2: str,
    level: int,
    legacy: LegacyMap,
) -> StatVector:
    return calculate_stats_for_level(
        registry.get_language(language_1),
        registry.get_language(language_2),
        level,
        legacy,
    )


def effective_stats(registry: CatalogueRegistry, player: PlayerState) -> StatVector:
    """Player stats with companion buffs applied (what a fight sees)."""
    return apply_companion_buffs(
        player.stats,
        player.has_veil,
        player.has_echo,
        registry.get_language(player.language_1),
        registry.get_language(player.language_2),
    )


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

def create_robot(
    registry: CatalogueRegistry,
    name: str,
    language_1: str,
    language_2: str,
    previous: PlayerState | None = None,
    dynasty_id: str | None = None,
) -> tuple[PlayerState, MilestoneEvent]:
    """Build a level-1 robot in the ``corner`` phase.

    *previous* is the ``creating``-phase record left by a retirement; its
    generation, legacy, Kindred flag and dynasty id carry over.  Without
    one this is generation 1 of a new dynasty (*dynasty_id*, or a fresh
    random id).

    Raises
    ------
    KeyError
        Unknown language id.
    ValueError
        Invalid name, identical languages, or *previous* is still active.
    """
    robot_name = sanitize_robot_name(name)
    registry.get_language(language_1)
    registry.get_language(language_2)
    if language_1 == language_2:
        raise ValueError("A robot needs two different languages")

    if previous is not None:
        _require_phase(previous, RobotPhase.CREATING, "build a successor")
        legacy = dict(previous.legacy_stats)
        generation = previous.generation
        has_kindred = previous.has_kindred
        dynasty_id = previous.dynasty_id or dynasty_id
    else:
        legacy = {}
        generation = 1
        has_kindred = False

    player = PlayerState(
        robot_name=robot_name,
        language_1=language_1,
        language_2=language_2,
        stats=stats_for(registry, language_1, language_2, 1, legacy),
        xp_to_next=get_xp_required(1),
        has_kindred=has_kindred,
        generation=generation,
        dynasty_id=dynasty_id or uuid.uuid4().hex,
        legacy_stats=legacy,
        phase=RobotPhase.CORNER,
    )
    logger.info(
        "Created %s (%s/%s), generation %d", robot_name, language_1, language_2, generation,
    )
    return player, events.robot_created(robot_name, generation)


# ---------------------------------------------------------------------------
# Fighting
# ---------------------------------------------------------------------------

def start_fight(
    registry: CatalogueRegistry,
    player: PlayerState,
    seed: int,
) -> tuple[PlayerState, FightState]:
    """Generate the next opponent and open a fight against it.

    The fight snapshot is the companion-buffed stat vector rounded to
    integers.  The player moves to the ``fighting`` phase.
    """
    _require_phase(player, RobotPhase.CORNER, "start a fight")
    if player.stats.hp <= 0:
        raise ValueError("Robot has no HP left; repair before fighting")

    enemy = generate_enemy(registry, player.level, player.total_fights + 1, seed)
    snapshot = effective_stats(registry, player).rounded()
    fight = init_fight(snapshot, enemy, seed)

    logger.debug(
        "Fight %d for %s: %s (level %d%s)",
        player.total_fights + 1, player.robot_name, enemy.name, enemy.level,
        ", boss" if enemy.is_boss else "",
    )
    return player.model_copy(update={"phase": RobotPhase.FIGHTING}), fight


def award_xp(fight: FightState) -> FightState:
    """Set ``xp_awarded`` on a terminal fight."""
    if not fight.is_over:
        return fight
    xp = get_xp_for_fight(fight.enemy.level, fight.result is FightResult.WIN, fight.enemy.is_boss)
    return fight.model_copy(update={"xp_awarded": xp})


def take_turn(
    fight: FightState,
    action: CombatAction | str,
    player: PlayerState,
) -> RoundResult:
    """Validate *action* against the menu and resolve one round.

    A terminal fight is returned untouched.  XP is assigned as soon as the
    fight ends.

    Raises
    ------
    ValueError
        *action* is not a known action or is not offered this round.
    """
    if fight.is_over:
        return RoundResult(state=fight)

    action = CombatAction(action)
    if not fight.is_available(action):
        offered = ", ".join(a.action.value for a in fight.available_actions)
        raise ValueError(f"Action {action.value!r} is not available (offered: {offered})")

    result = resolve_round(fight, action, player.level, player.robot_name)
    if result.state.is_over:
        result = replace(result, state=award_xp(result.state))
    return result


def resolve_remaining(fight: FightState, player: PlayerState) -> FightState:
    """Auto-resolve the rest of *fight* and assign XP."""
    if fight.is_over:
        return fight
    return award_xp(auto_resolve(fight, player.level, player.robot_name))


def complete_fight(
    registry: CatalogueRegistry,
    player: PlayerState,
    fight: FightState,
    dynasty: Dynasty | None = None,
) -> FightCompletion:
    """Fold a finished fight back into the player's record.

    Applies XP, records and streaks, carries HP out of the fight, levels
    up (recomputing stats with the HP ratio preserved), unlocks
    companions, ticks cooldowns, and force-retires a veteran robot that
    was knocked out.

    Raises
    ------
    ValueError
        The fight is still pending or the player is not fighting.
    """
    if not fight.is_over:
        raise ValueError("Cannot complete a fight that is still in progress")
    _require_phase(player, RobotPhase.FIGHTING, "complete a fight")

    won = fight.result is FightResult.WIN
    total_fights = player.total_fights + 1
    wins, losses = player.wins, player.losses
    streak, best_streak = player.current_streak, player.best_streak
    if won:
        wins += 1
        streak += 1
        best_streak = max(best_streak, streak)
    else:
        losses += 1
        streak = 0

    xp = player.xp + fight.xp_awarded
    level, xp_to_next = player.level, player.xp_to_next
    stats = player.stats.with_hp(max(0, fight.current_hp))
    leveled_up = False

    hp_ratio = fight.current_hp / fight.player_stats_snapshot.max_hp
    while xp >= xp_to_next:
        xp -= xp_to_next
        level += 1
        xp_to_next = get_xp_required(level)
        leveled_up = True
        stats = stats_for(registry, player.language_1, player.language_2, level, player.legacy_stats)
        stats = stats.with_hp(max(1, math.floor(stats.max_hp * hp_ratio)))

    if leveled_up:
        logger.info("%s reached level %d", player.robot_name, level)

    has_veil, has_echo = player.has_veil, player.has_echo
    unlocked: CompanionId | None = None
    if not has_veil and total_fights >= VEIL_UNLOCK_FIGHTS:
        has_veil = True
        unlocked = CompanionId.VEIL
    if not has_echo and total_fights >= ECHO_UNLOCK_FIGHTS:
        has_echo = True
        unlocked = CompanionId.ECHO
    if unlocked is not None:
        logger.info("%s unlocked companion %s", player.robot_name, unlocked.value)

    updated = player.model_copy(update={
        "stats": stats,
        "level": level,
        "xp": xp,
        "xp_to_next": xp_to_next,
        "total_fights": total_fights,
        "wins": wins,
        "losses": losses,
        "current_streak": streak,
        "best_streak": best_streak,
        "has_veil": has_veil,
        "has_echo": has_echo,
        "full_repair_cooldown": max(0, player.full_repair_cooldown - 1),
        "swap_language_cooldown": max(0, player.swap_language_cooldown - 1),
        "phase": RobotPhase.CORNER,
    })

    completion = FightCompletion(
        player=updated,
        dynasty=dynasty,
        xp_gained=fight.xp_awarded,
        leveled_up=leveled_up,
        companion_unlocked=unlocked,
    )

    if won and fight.enemy.is_boss:
        completion.events.append(events.boss_kill(player.robot_name, fight.enemy.name, level))
    if leveled_up and (milestone := events.level_milestone(player.robot_name, level)):
        completion.events.append(milestone)
    if won and (record := events.streak_record(player.robot_name, streak)):
        completion.events.append(record)

    if not won and stats.hp <= 0 and total_fights >= FORCED_RETIREMENT_MIN_FIGHTS:
        retirement = _retire(registry, updated, dynasty, RetirementCause.KO)
        completion.player = retirement.player
        completion.retired = retirement.retired
        completion.dynasty = retirement.dynasty
        completion.forced_retirement = True
        completion.events.append(retirement.event)

    return completion


# ---------------------------------------------------------------------------
# Retirement
# ---------------------------------------------------------------------------

def retire_robot(
    registry: CatalogueRegistry,
    player: PlayerState,
    dynasty: Dynasty | None = None,
) -> Retirement:
    """Voluntarily retire a robot with at least 20 fights.

    Raises
    ------
    ValueError
        Not in the corner, or too few fights.
    """
    _require_phase(player, RobotPhase.CORNER, "retire")
    if player.total_fights < VOLUNTARY_RETIREMENT_MIN_FIGHTS:
        raise ValueError(
            f"Robot needs at least {VOLUNTARY_RETIREMENT_MIN_FIGHTS} fights to retire "
            f"(currently {player.total_fights})"
        )
    return _retire(registry, player, dynasty, RetirementCause.VOLUNTARY)


def build_successor(
    registry: CatalogueRegistry,
    dynasty: Dynasty,
    language_1: str,
    language_2: str,
    dynasty_id: str | None = None,
) -> PlayerState:
    """The ``creating``-phase record for the next robot of *dynasty*.

    Generation, Kindred and legacy all follow from the dynasty's history:
    the next generation is one past the last retired robot (1 for an empty
    dynasty), and legacy is recomputed over every ancestor.  Pass the
    result to :func:`create_robot` as *previous*.
    """
    if dynasty.generations:
        new_generation = dynasty.generations[-1].generation_number + 1
    else:
        new_generation = 1
    has_kindred = new_generation >= KINDRED_MIN_GENERATION
    legacy = calculate_total_legacy(dynasty.generations, has_kindred)

    return PlayerState(
        robot_name="",
        language_1=language_1,
        language_2=language_2,
        stats=stats_for(registry, language_1, language_2, 1, legacy),
        xp_to_next=get_xp_required(1),
        has_kindred=has_kindred,
        generation=new_generation,
        dynasty_id=dynasty_id or dynasty.id,
        legacy_stats=legacy,
        phase=RobotPhase.CREATING,
    )


def _retire(
    registry: CatalogueRegistry,
    player: PlayerState,
    dynasty: Dynasty | None,
    cause: RetirementCause,
) -> Retirement:
    record = DynastyGeneration(
        generation_number=player.generation,
        robot_name=player.robot_name,
        language_1=player.language_1,
        language_2=player.language_2,
        final_level=player.level,
        total_fights=player.total_fights,
        wins=player.wins,
        best_streak=player.best_streak,
        cause_of_retirement=cause,
        final_stats=player.stats,
    )
    if dynasty is None:
        dynasty = Dynasty(id=player.dynasty_id)
    dynasty = dynasty.with_generation(record)

    successor = build_successor(
        registry, dynasty, player.language_1, player.language_2, player.dynasty_id,
    )
    new_generation = successor.generation
    logger.info(
        "%s retired (%s) at level %d after %d fights; generation %d begins",
        player.robot_name, cause.value, player.level, player.total_fights, new_generation,
    )
    return Retirement(
        player=successor,
        retired=player.model_copy(update={"phase": RobotPhase.RETIRED}),
        dynasty=dynasty,
        generation=record,
        event=events.dynasty_start(
            player.robot_name, player.level, new_generation, cause is RetirementCause.KO,
        ),
    )
