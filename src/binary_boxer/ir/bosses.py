"""Boss definitions -- taunts, ability text, and the data-driven effect overlay.

Boss abilities are expressed as a :class:`BossOverlay` struct rather than
code, so the round-resolution algorithm never needs to know boss names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BossOverlay(BaseModel):
    """Per-round modifiers applied while fighting a boss.

    Every field defaults to the neutral value, so an empty overlay changes
    nothing.
    """

    model_config = ConfigDict(frozen=True)

    player_defence_mult: float = 1.0
    """Multiplier on the player's defence."""

    interrupt_chance: float = 0.0
    """Chance the player's chosen action is forced down to ``strike``."""

    bonus_damage_pct_player_max_hp: float = 0.0
    """Flat damage added to each landed enemy hit, as a fraction of the
    player's max HP (floored)."""

    extra_crash_chance: float = 0.0
    """Unconditional crash chance added to every player action."""

    enemy_stat_growth_per_round: float = 0.0
    """Enemy non-HP stats are scaled by ``1 + growth * round``."""

    crit_immune: bool = False
    enemy_stability_mult: float = 1.0

    damage_reduction: float = Field(default=0.0, ge=0.0, lt=1.0)
    """Fraction removed from every hit dealt to the enemy."""

    negate_player_guard: bool = False
    enemy_auto_dodge: bool = False
    swap_player_power_defence: bool = False

    max_round: int | None = None
    """Last round the overlay is active, or ``None`` for the whole fight."""

    def active_in(self, round_number: int) -> bool:
        return self.max_round is None or round_number <= self.max_round


class BossDefinition(BaseModel):
    """Catalogue entry for one named boss."""

    model_config = ConfigDict(frozen=True)

    name: str
    ability: str
    """Human-readable description of the overlay."""

    taunt: str
    overlay: BossOverlay = Field(default_factory=BossOverlay)
