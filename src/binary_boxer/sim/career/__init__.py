"""Career layer: the pure functions that drive the engine between fights.

``run_manager`` is not re-exported here; import it directly.
"""

from .corner import full_repair, repair, swap_language, train, training_cost
from .events import EventType, MilestoneEvent
from .progression import (
    FightCompletion,
    Retirement,
    award_xp,
    build_successor,
    complete_fight,
    create_robot,
    effective_stats,
    resolve_remaining,
    retire_robot,
    sanitize_robot_name,
    start_fight,
    take_turn,
)

__all__ = [
    # corner
    "full_repair",
    "repair",
    "swap_language",
    "train",
    "training_cost",
    # events
    "EventType",
    "MilestoneEvent",
    # progression
    "FightCompletion",
    "Retirement",
    "award_xp",
    "build_successor",
    "complete_fight",
    "create_robot",
    "effective_stats",
    "resolve_remaining",
    "retire_robot",
    "sanitize_robot_name",
    "start_fight",
    "take_turn",
]
