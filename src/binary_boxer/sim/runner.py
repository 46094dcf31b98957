"""Fight simulation runner -- ties the combat engine, agents and telemetry together.

Provides:

- **play_fight**: drive one pending fight to completion with an agent.
- **FightSimulator**: build a robot for a loadout and run one fight.
- **BatchRunner**: run many seeded fights or careers, optionally in parallel.
"""

from __future__ import annotations

import logging
import multiprocessing
from dataclasses import dataclass
from typing import TYPE_CHECKING

from binary_boxer.sim.career.progression import start_fight, stats_for, take_turn
from binary_boxer.sim.core.entities import PlayerState, RobotPhase
from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.mechanics.stats import get_xp_required
from binary_boxer.sim.play_agents.base import ActionAgent
from binary_boxer.sim.play_agents.primary_agent import PrimaryAgent
from binary_boxer.sim.play_agents.random_agent import RandomAgent
from binary_boxer.sim.telemetry import CareerTelemetry, FightTelemetry

if TYPE_CHECKING:
    from binary_boxer.sim.content.registry import CatalogueRegistry
    from binary_boxer.sim.core.fight_state import FightState

logger = logging.getLogger(__name__)

# Added to the fight seed to seed a RandomAgent.
AGENT_SEED_OFFSET = 0x5EED


@dataclass(frozen=True)
class Loadout:
    """A language pair at a given level and fight number."""

    language_1: str
    language_2: str
    level: int = 1
    fight_number: int = 1
    """1-based; multiples of 5 are boss fights."""

    @property
    def label(self) -> str:
        return f"{self.language_1}+{self.language_2}"


def make_agent(agent_class: type[ActionAgent], seed: int) -> ActionAgent:
    if agent_class is RandomAgent:
        return RandomAgent(rng=SeededRNG(seed + AGENT_SEED_OFFSET))
    return agent_class()


def play_fight(fight: FightState, player: PlayerState, agent: ActionAgent) -> FightState:
    """Resolve rounds with *agent*'s choices until the fight ends.

    XP is assigned on the returned state.
    """
    while not fight.is_over:
        action = agent.choose_action(fight, player)
        fight = take_turn(fight, action, player).state
    return fight


# =====================================================================
# FightSimulator
# =====================================================================

class FightSimulator:
    """Runs a single fight for a synthetic robot.

    Parameters
    ----------
    registry:
        Loaded catalogue.
    agent:
        Picks the player's action each round.
    """

    def __init__(self, registry: CatalogueRegistry, agent: ActionAgent) -> None:
        self.registry = registry
        self.agent = agent

    def build_player(self, loadout: Loadout, name: str = "SIM") -> PlayerState:
        """A fresh corner-phase robot at the loadout's level and fight count."""
        return PlayerState(
            robot_name=name,
            language_1=loadout.language_1,
            language_2=loadout.language_2,
            stats=stats_for(
                self.registry, loadout.language_1, loadout.language_2, loadout.level, {},
            ),
            level=loadout.level,
            xp_to_next=get_xp_required(loadout.level),
            total_fights=loadout.fight_number - 1,
            phase=RobotPhase.CORNER,
        )

    def run_fight(self, player: PlayerState, seed: int) -> tuple[PlayerState, FightState]:
        """Start and finish one fight.  Returns the ``fighting``-phase
        player and the terminal fight."""
        player, fight = start_fight(self.registry, player, seed)
        return player, play_fight(fight, player, self.agent)

    def run(self, loadout: Loadout, seed: int) -> FightTelemetry:
        _, fight = self.run_fight(self.build_player(loadout), seed)
        return FightTelemetry.from_fight(fight)


# =====================================================================
# BatchRunner
# =====================================================================

def _worker_run_fight(
    args: tuple[type[ActionAgent], Loadout, int],
) -> FightTelemetry:
    """Run one fight inside a worker process (the registry is reloaded)."""
    from binary_boxer.sim.content.registry import CatalogueRegistry

    agent_class, loadout, seed = args
    registry = CatalogueRegistry().load_all()
    return FightSimulator(registry, make_agent(agent_class, seed)).run(loadout, seed)


def _worker_run_career(
    args: tuple[type[ActionAgent], Loadout, int, int],
) -> CareerTelemetry:
    from binary_boxer.sim.career.run_manager import CareerManager
    from binary_boxer.sim.content.registry import CatalogueRegistry

    agent_class, loadout, seed, max_fights = args
    registry = CatalogueRegistry().load_all()
    manager = CareerManager(registry, make_agent(agent_class, seed), seed, max_fights=max_fights)
    return manager.run_career(loadout.language_1, loadout.language_2)


class BatchRunner:
    """Runs many seeded simulations, optionally in parallel.

    Fight batches use seeds ``base_seed .. base_seed + n - 1``; careers are
    spaced ``max_fights`` apart.  The same seed always yields the same
    telemetry whether run sequentially or in a worker.
    """

    def __init__(
        self,
        registry: CatalogueRegistry,
        agent_class: type[ActionAgent] = PrimaryAgent,
    ) -> None:
        self.registry = registry
        self.agent_class = agent_class

    def run_batch(
        self,
        n_fights: int,
        loadout: Loadout,
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[FightTelemetry]:
        """Run *n_fights* independent fights for *loadout*."""
        seeds = [base_seed + i for i in range(n_fights)]
        logger.debug("Batch: %d fights for %s from seed %d", n_fights, loadout.label, base_seed)

        if parallel and n_fights > 1:
            work = [(self.agent_class, loadout, seed) for seed in seeds]
            return self._map(_worker_run_fight, work)

        results: list[FightTelemetry] = []
        for seed in seeds:
            simulator = FightSimulator(self.registry, make_agent(self.agent_class, seed))
            results.append(simulator.run(loadout, seed))
        return results

    def run_careers(
        self,
        n_careers: int,
        loadout: Loadout,
        base_seed: int = 42,
        max_fights: int = 60,
        parallel: bool = False,
    ) -> list[CareerTelemetry]:
        """Run *n_careers* whole careers; career *i* uses master seed
        ``base_seed + i * max_fights`` so no two careers share fight seeds."""
        seeds = [base_seed + i * max_fights for i in range(n_careers)]

        if parallel and n_careers > 1:
            work = [(self.agent_class, loadout, seed, max_fights) for seed in seeds]
            return self._map(_worker_run_career, work)

        from binary_boxer.sim.career.run_manager import CareerManager

        results: list[CareerTelemetry] = []
        for seed in seeds:
            manager = CareerManager(
                self.registry, make_agent(self.agent_class, seed), seed, max_fights=max_fights,
            )
            results.append(manager.run_career(loadout.language_1, loadout.language_2))
        return results

    @staticmethod
    def _map(func, work: list) -> list:
        n_workers = min(len(work), multiprocessing.cpu_count() or 1)
        with multiprocessing.Pool(processes=n_workers) as pool:
            return pool.map(func, work)
