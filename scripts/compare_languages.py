"""Win-rate heatmap for every language pair.

Usage:
    python scripts/compare_languages.py [--fights 200] [--level 1] [--fight-number 1]
"""

from __future__ import annotations

import argparse
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from binary_boxer.balance.baselines import generate_baseline
from binary_boxer.sim.content.registry import CatalogueRegistry
from binary_boxer.sim.play_agents import AGENTS


def run_comparison(
    n_fights: int,
    level: int,
    fight_number: int,
    agent: str,
    out_path: str,
) -> None:
    print("Loading catalogue...")
    registry = CatalogueRegistry().load_all()
    languages = registry.list_language_ids()

    print(f"Running {n_fights} fights per loadout ({agent} agent, level {level})...")
    t0 = time.time()
    baseline = generate_baseline(
        registry,
        fights_per_loadout=n_fights,
        level=level,
        fight_number=fight_number,
        agent_class=AGENTS[agent],
    )
    print(f"  Time: {time.time() - t0:.1f}s")

    index = {lang: i for i, lang in enumerate(languages)}
    matrix = np.full((len(languages), len(languages)), np.nan)
    rounds = []
    for m in baseline.loadout_metrics:
        i, j = index[m.language_1], index[m.language_2]
        matrix[i, j] = matrix[j, i] = m.win_rate * 100
        rounds.append(m.avg_rounds)

    print(f"  Global win rate: {baseline.global_metrics.win_rate:.1%}")
    print(f"  Loadout win rate: mean {np.nanmean(matrix):.1f}%, std {np.nanstd(matrix):.1f}")
    print(f"  Avg rounds: mean {np.mean(rounds):.1f}, median {np.median(rounds):.1f}")

    generate_charts(baseline, languages, matrix, out_path)


def generate_charts(baseline, languages: list[str], matrix: np.ndarray, out_path: str) -> None:
    fig, axes = plt.subplots(1, 2, figsize=(16, 7))
    fig.suptitle(
        f"Language loadouts: level {baseline.level}, fight {baseline.fight_number}"
        f" ({baseline.fights_per_loadout} fights each)",
        fontsize=14, fontweight="bold",
    )

    # --- Chart 1: Pair heatmap ---
    ax = axes[0]
    image = ax.imshow(matrix, cmap="RdYlGn", vmin=0, vmax=100)
    ax.set_xticks(np.arange(len(languages)), labels=languages, rotation=45, ha="right")
    ax.set_yticks(np.arange(len(languages)), labels=languages)
    for i in range(len(languages)):
        for j in range(len(languages)):
            if not np.isnan(matrix[i, j]):
                ax.text(j, i, f"{matrix[i, j]:.0f}", ha="center", va="center", fontsize=8)
    ax.set_title("Win rate (%) by language pair")
    fig.colorbar(image, ax=ax, fraction=0.046)

    # --- Chart 2: Per-language win rate ---
    ax = axes[1]
    names = [m.language for m in baseline.language_metrics]
    rates = np.array([m.win_rate * 100 for m in baseline.language_metrics])
    colors = ["#2ecc71" if m.win_rate_delta >= 0 else "#e74c3c" for m in baseline.language_metrics]
    ax.barh(names[::-1], rates[::-1], color=colors[::-1], edgecolor="black", linewidth=0.5)
    ax.axvline(baseline.global_metrics.win_rate * 100, color="black", linestyle="--", linewidth=1)
    ax.set_xlabel("Win Rate (%)")
    ax.set_title("Average over every pair containing the language")

    plt.tight_layout()
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--fights", type=int, default=200, help="Fights per loadout")
    parser.add_argument("--level", type=int, default=1)
    parser.add_argument("--fight-number", type=int, default=1)
    parser.add_argument("--agent", choices=sorted(AGENTS), default="primary")
    parser.add_argument("--output", default="language_comparison.png")
    args = parser.parse_args()
    run_comparison(args.fights, args.level, args.fight_number, args.agent, args.output)
