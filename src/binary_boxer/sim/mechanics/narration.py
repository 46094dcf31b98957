"""Combat log lines.

One line per turn record, picked from a small template table with the
round's RNG, so narration is as reproducible as the numbers.  Exactly one
``rng.range`` draw is made per call.
"""

from __future__ import annotations

import re

from binary_boxer.ir.actions import CombatAction
from binary_boxer.sim.core.fight_state import Side
from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.mechanics.damage import DamageResult

_TEMPLATES: dict[str, tuple[str, ...]] = {
    "player_hit": (
        "{robot} lands a clean hit on {enemy}.",
        "{robot} finds a gap in {enemy}'s plating.",
        "{robot} connects with a solid jab.",
        "{robot} pushes {enemy} back with a sharp blow.",
    ),
    "enemy_hit": (
        "{enemy} hits {robot} hard.",
        "{enemy} slips through and lands a blow.",
        "{enemy} hammers {robot}'s chassis.",
        "{enemy} answers with a heavy swing.",
    ),
    "crit": (
        "CRITICAL! {attacker} hits a weak joint.",
        "CRITICAL! {attacker} rattles {defender}'s core.",
        "CRITICAL! {attacker} finds the exploit.",
    ),
    "dodge": (
        "{defender} sidesteps the attack.",
        "{defender} reads it early and slides away.",
        "Miss! {defender} is already gone.",
    ),
    "block": (
        "{defender} blocks and soaks half the hit.",
        "{defender}'s armour takes the brunt.",
        "{defender} braces and absorbs the blow.",
    ),
    "counter": (
        "{defender} blocks and fires back.",
        "{defender} turns the block into a counter.",
    ),
    "guard": (
        "{actor} raises its guard.",
        "{actor} settles into a defensive stance.",
    ),
    "berserk": (
        "{actor} drops all caution and goes BERSERK.",
        "{actor} overrides its safety limits. BERSERK!",
    ),
    "analyse": (
        "{actor} scans for weaknesses.",
        "{actor} logs its opponent's patterns.",
    ),
    "combo": (
        "{actor} chains a rapid COMBO.",
        "{actor} fires a double strike.",
    ),
    "heavy_strike": (
        "{actor} winds up a HEAVY STRIKE.",
        "{actor} throws everything into one swing.",
    ),
    "overclock": (
        "{actor} OVERCLOCKS and surges forward.",
        "{actor} spikes its clock speed.",
    ),
    "crash": (
        "{actor} crashes mid-move and loses the turn.",
        "{actor} glitches out. Nothing happens.",
    ),
}

_ANNOUNCED = (CombatAction.GUARD, CombatAction.BERSERK, CombatAction.ANALYSE)
_ACTION_HITS = (CombatAction.HEAVY_STRIKE, CombatAction.COMBO, CombatAction.OVERCLOCK)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def fill_template(template: str, values: dict[str, str]) -> str:
    """Substitute ``{key}`` placeholders; unknown keys are left as the bare name."""
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(1)), template)


def _category(action: CombatAction, result: DamageResult, crashed: bool, side: Side) -> str:
    if crashed:
        return "crash"
    if action in _ANNOUNCED:
        return action.value
    if result.dodged:
        return "dodge"
    if result.critical:
        return "crit"
    if result.counter_attack:
        return "counter"
    if result.blocked:
        return "block"
    if action in _ACTION_HITS:
        return action.value
    return "player_hit" if side is Side.PLAYER else "enemy_hit"


def narrate(
    side: Side,
    action: CombatAction,
    result: DamageResult,
    crashed: bool,
    robot_name: str,
    enemy_name: str,
    rng: SeededRNG,
) -> str:
    """Return the log line for one actor's turn."""
    actor, other = (robot_name, enemy_name) if side is Side.PLAYER else (enemy_name, robot_name)
    values = {
        "robot": robot_name,
        "enemy": enemy_name,
        "actor": actor,
        "attacker": actor,
        "defender": other,
    }
    templates = _TEMPLATES[_category(action, result, crashed, side)]
    return fill_template(rng.choice(templates), values)
