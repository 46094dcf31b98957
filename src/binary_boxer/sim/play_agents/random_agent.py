"""Random action agent -- picks uniformly from the offered actions.

Used as the noisy baseline in batch runs: a loadout that only wins when
its actions are chosen well shows a wide gap between this agent and
:class:`~binary_boxer.sim.play_agents.primary_agent.PrimaryAgent`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.play_agents.base import ActionAgent

if TYPE_CHECKING:
    from binary_boxer.ir.actions import CombatAction
    from binary_boxer.sim.core.entities import PlayerState
    from binary_boxer.sim.core.fight_state import FightState


class RandomAgent(ActionAgent):
    """Agent that picks a random available action each round.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``SeededRNG(0)`` is created.  Kept separate from the fight's own
        per-round RNG.
    """

    name = "random"

    def __init__(self, rng: SeededRNG | None = None) -> None:
        self._rng = rng or SeededRNG(0)

    def choose_action(self, fight: FightState, player: PlayerState) -> CombatAction:
        return self._rng.choice(fight.available_actions).action
