"""Core simulation primitives for the Binary Boxer combat engine."""

from binary_boxer.sim.core.entities import (
    Dynasty,
    DynastyGeneration,
    PlayerState,
    RetirementCause,
    RobotPhase,
)
from binary_boxer.sim.core.fight_state import (
    AvailableAction,
    EnemyDescriptor,
    FightResult,
    FightState,
    Side,
    TurnRecord,
)
from binary_boxer.sim.core.rng import SeededRNG, seeded_range

__all__ = [
    # rng
    "SeededRNG",
    "seeded_range",
    # fight_state
    "AvailableAction",
    "EnemyDescriptor",
    "FightResult",
    "FightState",
    "Side",
    "TurnRecord",
    # entities
    "Dynasty",
    "DynastyGeneration",
    "PlayerState",
    "RetirementCause",
    "RobotPhase",
]
