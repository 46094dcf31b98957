"""Combat and progression mechanics for the Binary Boxer simulator.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from binary_boxer.sim.mechanics import (
        calculate_stats_for_level, apply_companion_buffs,
        calculate_total_legacy, get_dynasty_title,
        get_available_actions, choose_enemy_action,
        calculate_damage, stat_to_chance,
        get_boss_effects,
    )
"""

# -- stats -------------------------------------------------------------------
from .stats import (
    apply_companion_buffs,
    base_stats,
    calculate_stats_for_level,
    get_training_cost,
    get_xp_for_fight,
    get_xp_required,
)

# -- inheritance -------------------------------------------------------------
from .inheritance import (
    DynastyTitle,
    calculate_inheritance,
    calculate_total_legacy,
    get_dynasty_title,
)

# -- actions -----------------------------------------------------------------
from .actions import choose_enemy_action, get_available_actions, score_action

# -- damage ------------------------------------------------------------------
from .damage import DamageResult, calculate_damage, stat_to_chance

# -- boss effects ------------------------------------------------------------
from .boss_effects import (
    BossEffects,
    apply_enemy_stat_mods,
    apply_player_stat_mods,
    get_boss_effects,
)

# -- narration ---------------------------------------------------------------
from .narration import narrate

__all__ = [
    # stats
    "apply_companion_buffs",
    "base_stats",
    "calculate_stats_for_level",
    "get_training_cost",
    "get_xp_for_fight",
    "get_xp_required",
    # inheritance
    "DynastyTitle",
    "calculate_inheritance",
    "calculate_total_legacy",
    "get_dynasty_title",
    # actions
    "choose_enemy_action",
    "get_available_actions",
    "score_action",
    # damage
    "DamageResult",
    "calculate_damage",
    "stat_to_chance",
    # boss effects
    "BossEffects",
    "apply_enemy_stat_mods",
    "apply_player_stat_mods",
    "get_boss_effects",
    # narration
    "narrate",
]
