"""Career manager -- drives one robot from creation to retirement.

Between fights the robot repairs (full repair when badly hurt and off
cooldown, otherwise a partial repair).  The career ends on forced
retirement, on voluntary retirement once ``retire_after`` fights are
reached, or when the fight cap runs out.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from binary_boxer.sim.career.corner import full_repair, repair
from binary_boxer.sim.career.progression import (
    VOLUNTARY_RETIREMENT_MIN_FIGHTS,
    build_successor,
    complete_fight,
    create_robot,
    retire_robot,
    start_fight,
)
from binary_boxer.sim.core.entities import Dynasty, PlayerState
from binary_boxer.sim.runner import play_fight
from binary_boxer.sim.telemetry import CareerTelemetry, FightTelemetry

if TYPE_CHECKING:
    from binary_boxer.sim.content.registry import CatalogueRegistry
    from binary_boxer.sim.play_agents.base import ActionAgent

logger = logging.getLogger(__name__)

FULL_REPAIR_BELOW = 0.5


class CareerManager:
    """Drives a full robot career.

    Parameters
    ----------
    registry:
        The catalogue with all tables loaded.
    agent:
        Picks the player's action each round.
    seed:
        Master seed; fight *i* (0-based) uses ``seed + i``.
    max_fights:
        Hard cap on fights in the career.
    retire_after:
        Retire voluntarily once this many fights are done, or ``None`` to
        fight until KO'd or capped.  Values below the voluntary minimum
        retire at the minimum instead.
    """

    def __init__(
        self,
        registry: CatalogueRegistry,
        agent: ActionAgent,
        seed: int,
        max_fights: int = 60,
        retire_after: int | None = None,
    ) -> None:
        self.registry = registry
        self.agent = agent
        self.seed = seed
        self.max_fights = max_fights
        self.retire_after = retire_after

    def run_career(
        self,
        language_1: str,
        language_2: str,
        name: str = "SIM",
        dynasty: Dynasty | None = None,
    ) -> CareerTelemetry:
        """Create a robot and fight until the career ends.

        With a *dynasty* that already has retired generations, the robot is
        its next generation and inherits the dynasty's legacy.
        """
        if dynasty is None:
            dynasty = Dynasty(id=f"sim-{self.seed}")
        previous = build_successor(self.registry, dynasty, language_1, language_2)
        player, _ = create_robot(self.registry, name, language_1, language_2, previous=previous)
        telemetry = CareerTelemetry(
            seed=self.seed,
            language_1=language_1,
            language_2=language_2,
            generation=player.generation,
        )

        retire_at = None
        if self.retire_after is not None:
            retire_at = max(self.retire_after, VOLUNTARY_RETIREMENT_MIN_FIGHTS)

        for index in range(self.max_fights):
            if retire_at is not None and player.total_fights >= retire_at:
                retirement = retire_robot(self.registry, player, dynasty)
                self._finish(telemetry, retirement.retired, "voluntary", retirement.player)
                return telemetry

            player = self._corner(player)
            player, fight = start_fight(self.registry, player, self.seed + index)
            fight = play_fight(fight, player, self.agent)
            fight_telemetry = FightTelemetry.from_fight(fight)
            telemetry.fights.append(fight_telemetry)
            if fight_telemetry.won and fight_telemetry.is_boss:
                telemetry.bosses_defeated += 1

            completion = complete_fight(self.registry, player, fight, dynasty)
            dynasty = completion.dynasty or dynasty
            if completion.forced_retirement:
                self._finish(telemetry, completion.retired, "ko", completion.player)
                return telemetry
            player = completion.player

        self._finish(telemetry, player, None, None)
        return telemetry

    # ------------------------------------------------------------------

    @staticmethod
    def _corner(player: PlayerState) -> PlayerState:
        stats = player.stats
        if stats.hp >= stats.max_hp:
            return player
        if player.full_repair_cooldown == 0 and stats.hp < stats.max_hp * FULL_REPAIR_BELOW:
            return full_repair(player)
        return repair(player)

    @staticmethod
    def _finish(
        telemetry: CareerTelemetry,
        player: PlayerState | None,
        cause: str | None,
        successor: PlayerState | None,
    ) -> None:
        if player is not None:
            telemetry.final_level = player.level
            telemetry.wins = player.wins
            telemetry.losses = player.losses
            telemetry.best_streak = player.best_streak
        telemetry.retirement_cause = cause
        if successor is not None:
            telemetry.legacy_total = round(sum(successor.legacy_stats.values()), 1)
        logger.info(
            "Career %d (%s+%s) ended after %d fights: %s",
            telemetry.seed, telemetry.language_1, telemetry.language_2,
            len(telemetry.fights), cause or "fight cap",
        )
