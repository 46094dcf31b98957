"""Base class for agents that pick the player's combat action.

The fight simulator calls :meth:`ActionAgent.choose_action` once per
round with the current fight state; the returned action must be one of
``fight.available_actions``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from binary_boxer.ir.actions import CombatAction
    from binary_boxer.sim.core.entities import PlayerState
    from binary_boxer.sim.core.fight_state import FightState


class ActionAgent(ABC):
    """Base class for combat decision makers."""

    name: str = "agent"

    @abstractmethod
    def choose_action(self, fight: FightState, player: PlayerState) -> CombatAction:
        """Choose the action to play this round.

        Parameters
        ----------
        fight:
            The pending fight, giving the agent full observability.
        player:
            The robot's progression record (level, name, languages).

        Returns
        -------
        CombatAction
            One of the actions in ``fight.available_actions``.
        """
