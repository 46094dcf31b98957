"""Generate loadout baselines: every language pair fights the same seeds.

Usage:
    python scripts/generate_baselines.py [--fights 200] [--level 1] [--output data/baselines/]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from binary_boxer.balance.baselines import generate_baseline, save_baseline
from binary_boxer.balance.report import generate_text_report
from binary_boxer.sim.content.registry import CatalogueRegistry
from binary_boxer.sim.play_agents import AGENTS


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate loadout baselines")
    parser.add_argument("--fights", type=int, default=200, help="Fights per language pair")
    parser.add_argument("--level", type=int, default=1, help="Robot level")
    parser.add_argument("--fight-number", type=int, default=1, help="Fight number (5, 10, ... are bosses)")
    parser.add_argument("--agent", choices=sorted(AGENTS), default="primary", help="Action agent")
    parser.add_argument("--output", type=str, default="data/baselines/", help="Output directory")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--parallel", action="store_true", help="Use a process pool")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    print("Loading catalogue...")
    registry = CatalogueRegistry().load_all()

    n_pairs = len(registry.languages) * (len(registry.languages) - 1) // 2
    print(f"Running {args.fights:,} fights for each of {n_pairs} loadouts...")
    t0 = time.perf_counter()
    baseline = generate_baseline(
        registry,
        fights_per_loadout=args.fights,
        level=args.level,
        fight_number=args.fight_number,
        base_seed=args.seed,
        agent_class=AGENTS[args.agent],
        parallel=args.parallel,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    out_dir = Path(args.output)
    filename = f"loadouts_{args.agent}_lvl{args.level}_fight{args.fight_number}_{args.fights}.json"
    json_path = out_dir / filename
    save_baseline(baseline, json_path)
    print(f"Saved baseline to {json_path}")

    print()
    print(generate_text_report(baseline))


if __name__ == "__main__":
    main()
