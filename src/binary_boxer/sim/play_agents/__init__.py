"""Action agents for headless fight simulation.

Re-exports the base class and all concrete agent implementations so
consumers can do::

    from binary_boxer.sim.play_agents import ActionAgent, PrimaryAgent
"""

from .base import ActionAgent
from .primary_agent import PrimaryAgent, StrikeAgent
from .random_agent import RandomAgent

AGENTS: dict[str, type[ActionAgent]] = {
    PrimaryAgent.name: PrimaryAgent,
    StrikeAgent.name: StrikeAgent,
    RandomAgent.name: RandomAgent,
}

__all__ = ["AGENTS", "ActionAgent", "PrimaryAgent", "RandomAgent", "StrikeAgent"]
