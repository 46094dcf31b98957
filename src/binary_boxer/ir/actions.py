"""Combat actions and their display metadata."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CombatAction(str, Enum):
    """Everything a combatant can do on its turn."""

    STRIKE = "strike"
    HEAVY_STRIKE = "heavy_strike"
    GUARD = "guard"
    ANALYSE = "analyse"
    OVERCLOCK = "overclock"
    COMBO = "combo"
    BERSERK = "berserk"

    @property
    def deals_damage(self) -> bool:
        return self not in (CombatAction.GUARD, CombatAction.ANALYSE)


class ActionInfo(BaseModel):
    """Menu text shown next to an action."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    risk_label: str


ACTION_INFO: dict[CombatAction, ActionInfo] = {
    CombatAction.STRIKE: ActionInfo(
        name="Strike", description="Standard attack", risk_label="Reliable",
    ),
    CombatAction.HEAVY_STRIKE: ActionInfo(
        name="Heavy Strike", description="1.5x damage, 20% miss chance", risk_label="Risky",
    ),
    CombatAction.GUARD: ActionInfo(
        name="Guard", description="Raise block odds, chance to counter", risk_label="Safe",
    ),
    CombatAction.ANALYSE: ActionInfo(
        name="Analyse", description="Study the opponent", risk_label="Setup",
    ),
    CombatAction.OVERCLOCK: ActionInfo(
        name="Overclock", description="1.1x damage, crash risk", risk_label="Volatile",
    ),
    CombatAction.COMBO: ActionInfo(
        name="Combo", description="2 hits at 70% damage each", risk_label="Aggressive",
    ),
    CombatAction.BERSERK: ActionInfo(
        name="Berserk", description="2x damage, defence halved", risk_label="Desperate",
    ),
}
