"""Balance analysis: loadout baselines, metrics, and reports."""

from binary_boxer.balance.baselines import (
    all_loadouts,
    generate_baseline,
    load_baseline,
    save_baseline,
)
from binary_boxer.balance.metrics import (
    compute_global_metrics,
    compute_language_metrics,
    compute_loadout_metrics,
)
from binary_boxer.balance.models import (
    GlobalMetrics,
    LanguageMetrics,
    LoadoutBaseline,
    LoadoutMetrics,
)
from binary_boxer.balance.report import generate_text_report

__all__ = [
    "GlobalMetrics",
    "LanguageMetrics",
    "LoadoutBaseline",
    "LoadoutMetrics",
    "all_loadouts",
    "compute_global_metrics",
    "compute_language_metrics",
    "compute_loadout_metrics",
    "generate_baseline",
    "generate_text_report",
    "load_baseline",
    "save_baseline",
]
