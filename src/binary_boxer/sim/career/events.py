"""Milestone events handed to the notification collaborator.

Career operations return these alongside the updated records; delivering
them (broadcast, feed, nothing at all) is the caller's business.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from binary_boxer.sim.mechanics.inheritance import get_dynasty_title


class EventType(str, Enum):
    ROBOT_CREATED = "robot_created"
    BOSS_KILL = "boss_kill"
    LEVEL_MILESTONE = "level_milestone"
    STREAK_RECORD = "streak_record"
    DYNASTY_START = "dynasty_start"


class MilestoneEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: EventType
    robot_name: str
    detail: str


LEVEL_MILESTONE_INTERVAL = 5
STREAK_MILESTONE_INTERVAL = 10


def robot_created(robot_name: str, generation: int) -> MilestoneEvent:
    return MilestoneEvent(
        type=EventType.ROBOT_CREATED,
        robot_name=robot_name,
        detail=f"created {robot_name} (Gen {generation})",
    )


def boss_kill(robot_name: str, boss_name: str, level: int) -> MilestoneEvent:
    return MilestoneEvent(
        type=EventType.BOSS_KILL,
        robot_name=robot_name,
        detail=f"defeated {boss_name} at Level {level}",
    )


def level_milestone(robot_name: str, level: int) -> MilestoneEvent | None:
    """Event for reaching *level*, or ``None`` if it is not a milestone."""
    if level % LEVEL_MILESTONE_INTERVAL != 0:
        return None
    return MilestoneEvent(
        type=EventType.LEVEL_MILESTONE,
        robot_name=robot_name,
        detail=f"reached Level {level}",
    )


def streak_record(robot_name: str, streak: int) -> MilestoneEvent | None:
    if streak <= 0 or streak % STREAK_MILESTONE_INTERVAL != 0:
        return None
    return MilestoneEvent(
        type=EventType.STREAK_RECORD,
        robot_name=robot_name,
        detail=f"{streak} win streak",
    )


def dynasty_start(robot_name: str, level: int, new_generation: int, forced: bool) -> MilestoneEvent:
    how = "KO'd and forced to retire" if forced else "retired"
    title = get_dynasty_title(new_generation).value
    return MilestoneEvent(
        type=EventType.DYNASTY_START,
        robot_name=robot_name,
        detail=(
            f"{robot_name} {how} at Level {level}. "
            f"Generation {new_generation} begins ({title})"
        ),
    )
