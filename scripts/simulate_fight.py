"""Play one fight and print the combat log.

Usage:
    python scripts/simulate_fight.py rust go [--level 3] [--fight-number 5] [--seed 1234]
"""

from __future__ import annotations

import argparse
import logging

from binary_boxer.sim.content.registry import CatalogueRegistry
from binary_boxer.sim.core.rng import SeededRNG
from binary_boxer.sim.play_agents import AGENTS, RandomAgent
from binary_boxer.sim.runner import FightSimulator, Loadout
from binary_boxer.sim.telemetry import FightTelemetry


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a single fight")
    parser.add_argument("language_1")
    parser.add_argument("language_2")
    parser.add_argument("--name", default="SPARKY", help="Robot name")
    parser.add_argument("--level", type=int, default=1)
    parser.add_argument("--fight-number", type=int, default=1)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--agent", choices=sorted(AGENTS), default="primary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    registry = CatalogueRegistry().load_all()
    agent_class = AGENTS[args.agent]
    agent = RandomAgent(SeededRNG(args.seed)) if agent_class is RandomAgent else agent_class()

    simulator = FightSimulator(registry, agent)
    loadout = Loadout(args.language_1, args.language_2, args.level, args.fight_number)
    player = simulator.build_player(loadout, name=args.name)
    _, fight = simulator.run_fight(player, args.seed)

    enemy = fight.enemy
    print(f"{args.name} ({loadout.label}, level {args.level}) vs {enemy.name} (level {enemy.level})")
    if enemy.is_boss:
        print(f'  BOSS: {enemy.boss_ability}')
        print(f'  "{enemy.boss_taunt}"')
    print()

    for turn in fight.turns:
        print(
            f"[R{turn.round_number:02d}] {turn.side.value:6s} {turn.action.value:12s}"
            f" dmg={turn.damage:<3d} HP {turn.player_hp_after}/{turn.enemy_hp_after}"
            f"  {turn.narration}"
        )

    telemetry = FightTelemetry.from_fight(fight)
    print()
    print(
        f"Result: {telemetry.result.upper()} after {telemetry.rounds} rounds,"
        f" dealt {telemetry.damage_dealt}, took {telemetry.damage_taken},"
        f" XP {telemetry.xp_awarded}"
    )


if __name__ == "__main__":
    main()
