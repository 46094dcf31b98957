"""Text report for loadout baselines."""

from __future__ import annotations

from binary_boxer.balance.models import LoadoutBaseline


def generate_text_report(baseline: LoadoutBaseline, top_n: int = 10) -> str:
    """Generate a human-readable summary of the baseline."""
    g = baseline.global_metrics
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Loadout Baseline Report: {baseline.agent} agent")
    lines.append(
        f"Level {baseline.level}, fight {baseline.fight_number}"
        f" | {baseline.fights_per_loadout:,} fights per loadout"
        f" | Generated: {baseline.generated_at}"
    )
    lines.append("=" * 60)

    lines.append("")
    lines.append("## Global Stats")
    lines.append(f"  Win rate:    {g.win_rate:.1%} ({g.wins}/{g.total_fights})")
    lines.append(f"  Avg rounds:  {g.avg_rounds:.1f}")
    if g.boss_fights:
        lines.append(f"  Boss fights: {g.boss_fights}")

    by_wr = sorted(baseline.loadout_metrics, key=lambda m: m.win_rate, reverse=True)

    lines.append("")
    lines.append(f"## Top {top_n} Loadouts")
    for m in by_wr[:top_n]:
        lines.append(
            f"  {m.loadout:24s}  wr={m.win_rate:.3f} ({m.win_rate_delta:+.3f})"
            f"  rounds={m.avg_rounds:.1f}  hp_left={m.avg_hp_left:.2f}"
        )

    lines.append("")
    lines.append(f"## Bottom {top_n} Loadouts")
    for m in by_wr[-top_n:]:
        lines.append(
            f"  {m.loadout:24s}  wr={m.win_rate:.3f} ({m.win_rate_delta:+.3f})"
            f"  rounds={m.avg_rounds:.1f}  hp_left={m.avg_hp_left:.2f}"
        )

    if baseline.language_metrics:
        lines.append("")
        lines.append("## Languages")
        for lang in baseline.language_metrics:
            lines.append(
                f"  {lang.language:12s}  wr={lang.win_rate:.3f}"
                f"  delta={lang.win_rate_delta:+.3f}  loadouts={lang.loadouts}"
            )

    lines.append("")
    return "\n".join(lines)
