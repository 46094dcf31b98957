"""Baseline generation: run sims, compute metrics, save/load JSON.

Orchestrates BatchRunner -> metric computation -> LoadoutBaseline model.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from itertools import combinations
from pathlib import Path
from typing import TYPE_CHECKING

from binary_boxer.balance.metrics import (
    compute_global_metrics,
    compute_language_metrics,
    compute_loadout_metrics,
)
from binary_boxer.balance.models import LoadoutBaseline
from binary_boxer.sim.play_agents.base import ActionAgent
from binary_boxer.sim.play_agents.primary_agent import PrimaryAgent
from binary_boxer.sim.runner import BatchRunner, Loadout

if TYPE_CHECKING:
    from binary_boxer.sim.content.registry import CatalogueRegistry
    from binary_boxer.sim.telemetry import FightTelemetry

logger = logging.getLogger(__name__)


def all_loadouts(
    language_ids: list[str],
    level: int = 1,
    fight_number: int = 1,
) -> list[Loadout]:
    """Every unordered pair of distinct languages."""
    return [
        Loadout(a, b, level=level, fight_number=fight_number)
        for a, b in combinations(language_ids, 2)
    ]


def generate_baseline(
    registry: CatalogueRegistry,
    fights_per_loadout: int = 200,
    level: int = 1,
    fight_number: int = 1,
    base_seed: int = 42,
    agent_class: type[ActionAgent] = PrimaryAgent,
    languages: list[str] | None = None,
    parallel: bool = False,
) -> LoadoutBaseline:
    """Run batch fights for every language pair and compute a baseline.

    Parameters
    ----------
    registry:
        Fully loaded CatalogueRegistry.
    fights_per_loadout:
        Number of fights per language pair.  Every pair sees the same
        seeds, so pairs are compared against identical enemies.
    level / fight_number:
        Robot level and fight number (multiples of 5 are boss fights).
    languages:
        Restrict to these language ids (default: the whole catalogue).
    """
    language_ids = languages or registry.list_language_ids()
    for language_id in language_ids:
        registry.get_language(language_id)

    runner = BatchRunner(registry, agent_class=agent_class)
    batches: list[tuple[Loadout, list[FightTelemetry]]] = []
    for loadout in all_loadouts(language_ids, level, fight_number):
        fights = runner.run_batch(fights_per_loadout, loadout, base_seed=base_seed, parallel=parallel)
        batches.append((loadout, fights))
        logger.debug("%s: %d fights", loadout.label, len(fights))

    global_metrics = compute_global_metrics([f for _, fights in batches for f in fights])
    global_wr = global_metrics.win_rate
    loadout_metrics = [
        compute_loadout_metrics(loadout, fights, global_wr) for loadout, fights in batches
    ]

    return LoadoutBaseline(
        agent=getattr(agent_class, "name", agent_class.__name__),
        fights_per_loadout=fights_per_loadout,
        level=level,
        fight_number=fight_number,
        base_seed=base_seed,
        generated_at=datetime.now(timezone.utc).isoformat(),
        global_metrics=global_metrics,
        loadout_metrics=loadout_metrics,
        language_metrics=compute_language_metrics(loadout_metrics, global_wr),
    )


def save_baseline(baseline: LoadoutBaseline, path: Path) -> None:
    """Save baseline to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(baseline.model_dump(), indent=2))


def load_baseline(path: Path) -> LoadoutBaseline:
    """Load baseline from JSON file."""
    data = json.loads(path.read_text())
    return LoadoutBaseline.model_validate(data)
