"""Pydantic v2 models for loadout baseline data.

These models define the structured output of balance analysis:
per-loadout fight metrics, per-language aggregates and global fight
statistics.  All are serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoadoutMetrics(BaseModel):
    """Fight metrics for one language pair."""

    loadout: str
    """``"<language_1>+<language_2>"``."""
    language_1: str
    language_2: str
    fights: int
    wins: int
    losses: int
    win_rate: float
    win_rate_delta: float
    """win_rate - global win rate."""
    avg_rounds: float
    avg_hp_left: float
    """Mean fraction of starting HP left at the end of the fight."""
    avg_damage_dealt: float
    avg_damage_taken: float
    crash_rate: float
    """Crashed player turns / player turns."""
    action_share: dict[str, float] = Field(default_factory=dict)
    """Fraction of player turns spent on each action."""


class LanguageMetrics(BaseModel):
    """Aggregate over every loadout that contains one language."""

    language: str
    loadouts: int
    fights: int
    win_rate: float
    win_rate_delta: float


class GlobalMetrics(BaseModel):
    """Aggregate fight statistics."""

    total_fights: int
    wins: int
    losses: int
    win_rate: float
    avg_rounds: float
    boss_fights: int = 0


class LoadoutBaseline(BaseModel):
    """Top-level baseline data structure."""

    agent: str
    """Agent used for generation (e.g. ``"primary"``)."""
    fights_per_loadout: int
    level: int
    fight_number: int
    base_seed: int
    generated_at: str
    """ISO 8601 timestamp."""
    global_metrics: GlobalMetrics
    loadout_metrics: list[LoadoutMetrics]
    language_metrics: list[LanguageMetrics]
