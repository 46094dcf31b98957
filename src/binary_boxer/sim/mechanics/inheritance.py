"""Dynasty inheritance -- how a retired robot's stats carry into its successors.

Each ancestor contributes ``stat * 0.10 * 0.98 ** gap`` per growth stat
(``x1.25`` with the Kindred decay boost).  The total legacy is always
recomputed from the full ancestor list rather than updated incrementally,
so rounding error never compounds and a replayed or edited history gives
the same answer.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from binary_boxer.ir.stats import GROWTH_STATS, LegacyMap, StatVector, round_one_decimal
from binary_boxer.sim.core.entities import DynastyGeneration

BASE_INHERITANCE_RATE = 0.10
DECAY_BASE = 0.98
DECAY_BOOST_MULTIPLIER = 1.25


class DynastyTitle(str, Enum):
    PROTOTYPE = "Prototype"
    LINEAGE = "Lineage"
    LEGACY = "Legacy"
    DYNASTY = "Dynasty"
    EMPIRE = "Empire"
    ETERNAL = "Eternal"


# Lower bound of each title band, highest first.
_TITLE_BANDS: tuple[tuple[int, DynastyTitle], ...] = (
    (25, DynastyTitle.ETERNAL),
    (10, DynastyTitle.EMPIRE),
    (5, DynastyTitle.DYNASTY),
    (3, DynastyTitle.LEGACY),
    (2, DynastyTitle.LINEAGE),
)


def decay_factor(gap: int) -> float:
    return DECAY_BASE ** gap


def calculate_inheritance(
    parent_final_stats: StatVector,
    generation: int,
    has_decay_boost: bool,
) -> LegacyMap:
    """Legacy bonuses from a single parent.

    Values are rounded to one decimal; stats whose bonus rounds to zero
    or below are omitted.
    """
    legacy: LegacyMap = {}
    for stat in GROWTH_STATS:
        bonus = parent_final_stats.get(stat) * BASE_INHERITANCE_RATE
        if has_decay_boost:
            bonus *= DECAY_BOOST_MULTIPLIER
        bonus = round_one_decimal(bonus * decay_factor(generation))
        if bonus > 0:
            legacy[stat] = bonus
    return legacy


def get_dynasty_title(generation: int) -> DynastyTitle:
    for lower_bound, title in _TITLE_BANDS:
        if generation >= lower_bound:
            return title
    return DynastyTitle.PROTOTYPE


def calculate_total_legacy(
    ancestors: Sequence[DynastyGeneration],
    has_decay_boost: bool,
) -> LegacyMap:
    """Combined legacy of every ancestor for the next generation.

    The next generation is one past the last ancestor's number; each
    ancestor decays by its distance to that generation.
    """
    if not ancestors:
        return {}

    current_generation = ancestors[-1].generation_number + 1
    totals = {stat: 0.0 for stat in GROWTH_STATS}

    for ancestor in ancestors:
        factor = decay_factor(current_generation - ancestor.generation_number)
        for stat in GROWTH_STATS:
            contribution = ancestor.final_stats.get(stat) * BASE_INHERITANCE_RATE * factor
            if has_decay_boost:
                contribution *= DECAY_BOOST_MULTIPLIER
            totals[stat] += contribution

    legacy: LegacyMap = {}
    for stat, total in totals.items():
        rounded = round_one_decimal(total)
        if rounded > 0:
            legacy[stat] = rounded
    return legacy
