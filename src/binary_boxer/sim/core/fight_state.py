"""Fight state for a single robot-versus-enemy bout.

Every record here is frozen: the combat engine never mutates a state in
place, it derives the next snapshot with ``model_copy(update=...)``.  A
caller can therefore keep any earlier snapshot, discard a computed round
and resolve it again with identical results.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from binary_boxer.ir.actions import CombatAction
from binary_boxer.ir.bosses import BossOverlay
from binary_boxer.ir.stats import StatVector, StatValue


class FightResult(str, Enum):
    PENDING = "pending"
    WIN = "win"
    LOSS = "loss"


class Side(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"


# ---------------------------------------------------------------------------
# EnemyDescriptor
# ---------------------------------------------------------------------------

class EnemyDescriptor(BaseModel):
    """A procedurally generated opponent."""

    model_config = ConfigDict(frozen=True)

    name: str
    level: int
    stats: StatVector
    is_boss: bool = False
    boss_ability: str | None = None
    """Ability text, only set for bosses."""

    boss_taunt: str | None = None
    boss_overlay: BossOverlay | None = None
    """Copied from the boss catalogue at generation time."""


# ---------------------------------------------------------------------------
# AvailableAction
# ---------------------------------------------------------------------------

class AvailableAction(BaseModel):
    """One entry of the player's action menu."""

    model_config = ConfigDict(frozen=True)

    action: CombatAction
    name: str
    description: str
    risk_label: str
    is_primary: bool = False
    """The action auto-resolve picks."""


# ---------------------------------------------------------------------------
# TurnRecord
# ---------------------------------------------------------------------------

class TurnRecord(BaseModel):
    """One actor's resolved action within a round.  Never mutated."""

    model_config = ConfigDict(frozen=True)

    round_number: int
    turn_number: int
    """``round * 2 - 1`` for the first actor, ``round * 2`` for the second."""

    side: Side
    action: CombatAction
    damage: int = 0
    """Total damage the action dealt (both hits for a combo)."""

    blocked: bool = False
    dodged: bool = False
    critical: bool = False
    crashed: bool = False
    counter_attack: bool = False
    counter_damage: int = 0
    player_hp_after: StatValue
    enemy_hp_after: StatValue
    narration: str = ""


# ---------------------------------------------------------------------------
# FightState
# ---------------------------------------------------------------------------

class FightState(BaseModel):
    """The unit of combat progress, persisted between rounds by the caller.

    While ``result`` is pending, ``len(turns) == current_round * 2``.  A
    round that ends on the first actor's knockout appends a single record
    and makes the result terminal.
    """

    model_config = ConfigDict(frozen=True)

    enemy: EnemyDescriptor
    seed: int
    turns: tuple[TurnRecord, ...] = ()
    result: FightResult = FightResult.PENDING
    xp_awarded: int = 0
    player_stats_snapshot: StatVector
    current_round: int = 0
    available_actions: tuple[AvailableAction, ...] = Field(default_factory=tuple)
    auto_pilot: bool = False
    current_hp: StatValue
    enemy_current_hp: StatValue

    # -- queries -------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.result is not FightResult.PENDING

    def is_available(self, action: CombatAction) -> bool:
        return any(a.action == action for a in self.available_actions)

    def last_turns(self) -> tuple[TurnRecord, ...]:
        """Return the turn records appended by the most recent round."""
        if self.current_round == 0:
            return ()
        return tuple(t for t in self.turns if t.round_number == self.current_round)
