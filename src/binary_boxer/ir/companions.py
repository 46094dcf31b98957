"""Companion definitions -- late-game helpers that buff stats or inheritance."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CompanionId(str, Enum):
    VEIL = "veil"
    """+20% wisdom."""

    ECHO = "echo"
    """+15% crit chance and +10% on the strongest language stat."""

    KINDRED = "kindred"
    """+25% inheritance."""


class CompanionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: CompanionId
    name: str
    unlock_condition: str
    buff_description: str
    color: str = "#ffffff"
    lore: str = ""
