"""Stat definitions -- the closed set of robot stats and the immutable stat vector.

Every consumer (language bonuses, legacy maps, boss overlays, training)
iterates over the same :data:`GROWTH_STATS` tuple, so adding a stat is a
single change here.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict


class StatKey(str, Enum):
    """Every field of a robot's stat vector."""

    HP = "hp"
    """Current HP -- the only resource stat."""

    MAX_HP = "max_hp"
    POWER = "power"
    DEFENCE = "defence"
    SPEED = "speed"
    WISDOM = "wisdom"
    CREATIVITY = "creativity"
    STABILITY = "stability"
    ADAPTABILITY = "adaptability"
    EVASION = "evasion"
    BLOCK_CHANCE = "block_chance"
    COUNTER = "counter"
    CRIT_CHANCE = "crit_chance"
    PATTERN_READ = "pattern_read"
    PENETRATION = "penetration"


GROWTH_STATS: tuple[StatKey, ...] = tuple(s for s in StatKey if s is not StatKey.HP)
"""All stats except ``hp``, in declaration order."""

COMBAT_STATS: tuple[StatKey, ...] = tuple(
    s for s in GROWTH_STATS if s is not StatKey.MAX_HP
)
"""Growth stats excluding ``max_hp`` (the "non-HP" stats)."""

LegacyMap = dict[StatKey, float]
"""Sparse mapping of growth stat -> inherited bonus (one decimal place)."""

StatValue = int | float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding towards +infinity.

    Python's built-in :func:`round` uses banker's rounding, which would
    make ``round(2.5) == 2``; every stat rounding in the game uses this
    helper instead.
    """
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


class StatVector(BaseModel):
    """A full, immutable set of robot stats.

    Growth stats may carry fractional legacy remainders until they are
    rounded with :meth:`rounded` at display / persist time.
    """

    model_config = ConfigDict(frozen=True)

    hp: StatValue
    max_hp: StatValue
    power: StatValue
    defence: StatValue
    speed: StatValue
    wisdom: StatValue = 0
    creativity: StatValue = 0
    stability: StatValue = 0
    adaptability: StatValue = 0
    evasion: StatValue = 0
    block_chance: StatValue = 0
    counter: StatValue = 0
    crit_chance: StatValue = 0
    pattern_read: StatValue = 0
    penetration: StatValue = 0

    # -- access --------------------------------------------------------------

    def get(self, stat: StatKey) -> StatValue:
        return getattr(self, stat.value)

    def items(self) -> Iterator[tuple[StatKey, StatValue]]:
        for stat in StatKey:
            yield stat, self.get(stat)

    def as_dict(self) -> dict[StatKey, StatValue]:
        return dict(self.items())

    # -- derivation ----------------------------------------------------------

    def with_changes(self, changes: dict[StatKey, StatValue]) -> StatVector:
        """Return a new vector with *changes* applied on top of this one."""
        return self.model_copy(update={k.value: v for k, v in changes.items()})

    def add(self, stat: StatKey, amount: StatValue) -> StatVector:
        return self.with_changes({stat: self.get(stat) + amount})

    def scaled(self, stats: tuple[StatKey, ...], multiplier: float) -> StatVector:
        """Return a copy with each of *stats* multiplied and rounded half-up."""
        return self.with_changes(
            {s: round_half_up(self.get(s) * multiplier) for s in stats}
        )

    def rounded(self) -> StatVector:
        """Return a copy with every field rounded half-up to an integer."""
        return StatVector(**{k.value: round_half_up(v) for k, v in self.items()})

    def with_hp(self, hp: StatValue) -> StatVector:
        """Return a copy with ``hp`` clamped into ``[0, max_hp]``."""
        return self.with_changes({StatKey.HP: min(max(hp, 0), self.max_hp)})

    @classmethod
    def uniform(cls, value: StatValue, hp: StatValue) -> StatVector:
        """Build a stat-flat vector: every combat stat equal to *value*."""
        fields: dict[str, StatValue] = {s.value: value for s in COMBAT_STATS}
        return cls(hp=hp, max_hp=hp, **fields)
