"""Telemetry data models for per-fight and per-career statistics.

These lightweight dataclasses capture what balance analysis needs without
storing every fight state:

- **FightTelemetry**: outcome, rounds, HP, damage both ways, action counts.
- **CareerTelemetry**: a robot's loadout, ordered fights, and how it ended.

Both are plain ``dataclass`` instances (not Pydantic models) to keep
collection cheap during batch runs.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from binary_boxer.sim.core.fight_state import FightState, Side


@dataclass
class FightTelemetry:
    """Stats from a single fight.

    Attributes
    ----------
    seed:
        Fight seed.
    enemy_name / enemy_level / is_boss:
        The opponent.
    result:
        ``"win"`` or ``"loss"``.
    rounds:
        Rounds resolved (the last one may hold a single turn record).
    player_hp_start / player_hp_end / enemy_hp_end:
        HP at the start and end of the fight.
    damage_dealt / damage_taken:
        Total damage from the player's point of view, counters included.
    crits / dodges / blocks / crashes:
        Flag counts across the player's own turns.
    actions_played:
        ``action -> count`` for the player.
    xp_awarded:
        XP on the final state (0 if it was never assigned).
    """

    seed: int
    enemy_name: str
    enemy_level: int
    is_boss: bool
    result: str  # "win" or "loss"
    rounds: int
    player_hp_start: float
    player_hp_end: float
    enemy_hp_end: float
    damage_dealt: int = 0
    damage_taken: int = 0
    crits: int = 0
    dodges: int = 0
    blocks: int = 0
    crashes: int = 0
    actions_played: dict[str, int] = field(default_factory=dict)
    xp_awarded: int = 0

    @property
    def won(self) -> bool:
        return self.result == "win"

    @classmethod
    def from_fight(cls, fight: FightState) -> FightTelemetry:
        """Summarise a terminal fight state."""
        dealt = taken = 0
        crits = dodges = blocks = crashes = 0
        actions: Counter[str] = Counter()

        for turn in fight.turns:
            if turn.side is Side.PLAYER:
                dealt += turn.damage
                taken += turn.counter_damage
                crits += turn.critical
                dodges += turn.dodged
                blocks += turn.blocked
                crashes += turn.crashed
                actions[turn.action.value] += 1
            else:
                taken += turn.damage
                dealt += turn.counter_damage

        return cls(
            seed=fight.seed,
            enemy_name=fight.enemy.name,
            enemy_level=fight.enemy.level,
            is_boss=fight.enemy.is_boss,
            result=fight.result.value,
            rounds=fight.current_round,
            player_hp_start=fight.player_stats_snapshot.hp,
            player_hp_end=fight.current_hp,
            enemy_hp_end=fight.enemy_current_hp,
            damage_dealt=dealt,
            damage_taken=taken,
            crits=crits,
            dodges=dodges,
            blocks=blocks,
            crashes=crashes,
            actions_played=dict(actions),
            xp_awarded=fight.xp_awarded,
        )


@dataclass
class CareerTelemetry:
    """Stats from one robot's whole career.

    Attributes
    ----------
    seed:
        Master seed; fight *i* uses ``seed + i``.
    language_1 / language_2:
        The loadout at creation.
    generation:
        The robot's generation within its dynasty.
    fights:
        Ordered fight telemetry.
    final_level:
        Level when the career ended.
    retirement_cause:
        ``"voluntary"``, ``"ko"``, or ``None`` if the fight cap ran out first.
    """

    seed: int
    language_1: str
    language_2: str
    generation: int = 1
    fights: list[FightTelemetry] = field(default_factory=list)
    final_level: int = 1
    wins: int = 0
    losses: int = 0
    best_streak: int = 0
    bosses_defeated: int = 0
    retirement_cause: str | None = None
    legacy_total: float = 0.0
    """Sum of the successor's legacy map."""
