"""Language module definitions -- the two stat-granting modules a robot equips."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from .stats import StatKey


class LanguageDefinition(BaseModel):
    """Static definition of one programming-language module.

    All bonuses are per level: a level 4 robot with a ``+3 defence``
    primary gains 12 defence from this module.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    primary_stat: StatKey
    primary_bonus: int
    secondary_stat: StatKey | None = None
    secondary_bonus: int = 0
    all_stats_bonus: int = 0
    """Flat per-level bonus added to every growth stat (never ``hp``)."""

    color: str = "#ffffff"
    flavour: str = ""

    @model_validator(mode="after")
    def _check_stats(self) -> LanguageDefinition:
        if self.primary_stat is StatKey.HP or self.secondary_stat is StatKey.HP:
            raise ValueError("Language bonuses must target growth stats, not hp")
        return self

    def bonuses(self) -> list[tuple[StatKey, int]]:
        """Return ``(stat, per-level bonus)`` pairs for primary and secondary."""
        pairs = [(self.primary_stat, self.primary_bonus)]
        if self.secondary_stat is not None:
            pairs.append((self.secondary_stat, self.secondary_bonus))
        return pairs
