"""Progression records: the current robot and its dynasty history.

``PlayerState`` is replaced wholesale by every career operation (via
``model_copy``); ``DynastyGeneration`` is written once at retirement and
never changed afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from binary_boxer.ir.stats import LegacyMap, StatVector


class RobotPhase(str, Enum):
    CREATING = "creating"
    CORNER = "corner"
    FIGHTING = "fighting"
    RETIRED = "retired"


class RetirementCause(str, Enum):
    VOLUNTARY = "voluntary"
    KO = "ko"


# ---------------------------------------------------------------------------
# PlayerState
# ---------------------------------------------------------------------------

class PlayerState(BaseModel):
    """A player's current robot and its progression counters."""

    model_config = ConfigDict(frozen=True)

    robot_name: str
    language_1: str
    language_2: str
    stats: StatVector

    level: int = 1
    xp: int = 0
    xp_to_next: int = 50
    total_fights: int = 0
    wins: int = 0
    losses: int = 0
    current_streak: int = 0
    best_streak: int = 0

    has_veil: bool = False
    has_echo: bool = False
    has_kindred: bool = False

    full_repair_cooldown: int = 0
    swap_language_cooldown: int = 0

    generation: int = 1
    dynasty_id: str = ""
    legacy_stats: LegacyMap = Field(default_factory=dict)
    phase: RobotPhase = RobotPhase.CORNER

    def language_slot(self, slot: int) -> str:
        return self.language_1 if slot == 1 else self.language_2


# ---------------------------------------------------------------------------
# Dynasty
# ---------------------------------------------------------------------------

class DynastyGeneration(BaseModel):
    """Frozen summary of one retired robot."""

    model_config = ConfigDict(frozen=True)

    generation_number: int
    robot_name: str
    language_1: str
    language_2: str
    final_level: int
    total_fights: int
    wins: int
    best_streak: int
    cause_of_retirement: RetirementCause
    final_stats: StatVector


class Dynasty(BaseModel):
    """Append-only lineage of retired robots for one player."""

    model_config = ConfigDict(frozen=True)

    id: str
    generations: tuple[DynastyGeneration, ...] = ()
    total_fights: int = 0
    total_wins: int = 0
    deepest_level: int = 0

    def with_generation(self, generation: DynastyGeneration) -> Dynasty:
        """Return a new dynasty with *generation* appended."""
        return self.model_copy(update={
            "generations": self.generations + (generation,),
            "total_fights": self.total_fights + generation.total_fights,
            "total_wins": self.total_wins + generation.wins,
            "deepest_level": max(self.deepest_level, generation.final_level),
        })
