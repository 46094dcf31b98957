"""Deterministic agents: always the primary action, or always strike."""

from __future__ import annotations

from typing import TYPE_CHECKING

from binary_boxer.ir.actions import CombatAction
from binary_boxer.sim.combat import auto_pick_action
from binary_boxer.sim.play_agents.base import ActionAgent

if TYPE_CHECKING:
    from binary_boxer.sim.core.entities import PlayerState
    from binary_boxer.sim.core.fight_state import FightState


class PrimaryAgent(ActionAgent):
    """Plays exactly what auto-resolve would play."""

    name = "primary"

    def choose_action(self, fight: FightState, player: PlayerState) -> CombatAction:
        return auto_pick_action(fight.available_actions)


class StrikeAgent(ActionAgent):
    """Always strikes.  ``strike`` is on every menu."""

    name = "strike"

    def choose_action(self, fight: FightState, player: PlayerState) -> CombatAction:
        return CombatAction.STRIKE
