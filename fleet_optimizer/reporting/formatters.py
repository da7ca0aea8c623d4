"""
Display helpers and ASCII terminal formatters for CLI reporting commands.

Small pure helpers (``format_currency``, ``waste_category``,
``priority_color``) are shared by the CLI, the dashboard, and the assistant
context builder.

Table formatters accept domain models and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Waste categories
----------------
  critical  waste_score >= 0.7
  warning   waste_score >= 0.4
  good      everything else
"""

from __future__ import annotations

from collections.abc import Sequence

from fleet_optimizer.models.fleet import FleetStats
from fleet_optimizer.models.recommendation import Recommendation
from fleet_optimizer.models.table import TableRecord
from fleet_optimizer.simulation.profiles import FleetProfile
from fleet_optimizer.taxonomy.fleet_taxonomy import Priority, WasteCategory
from fleet_optimizer.utils.numeric import round_to

_PRIORITY_COLORS: dict[str, str] = {
    Priority.HIGH:   "critical",
    Priority.MEDIUM: "warning",
    Priority.LOW:    "good",
}


# ── Scalar helpers ────────────────────────────────────────────────────────────


def format_currency(amount: int | float) -> str:
    """``1500 -> "$1.5k"``, ``42 -> "$42"``; thousands round half up (``1250 -> "$1.3k"``)."""
    if amount >= 1000:
        return f"${round_to(amount / 1000, 1):.1f}k"
    return f"${amount}"


def waste_category(score: float) -> WasteCategory:
    """Bucket a waste score into critical / warning / good."""
    if score >= 0.7:
        return WasteCategory.CRITICAL
    if score >= 0.4:
        return WasteCategory.WARNING
    return WasteCategory.GOOD


def priority_color(priority: str) -> str:
    """Map an action priority to its display colour class (``"info"`` if unknown)."""
    return _PRIORITY_COLORS.get(priority, "info")


# ── Profiles ──────────────────────────────────────────────────────────────────


def format_profiles_table(profiles: Sequence[FleetProfile]) -> str:
    """List the selectable fleet profiles."""
    lines: list[str] = ["", "=== Fleet Profiles ==="]
    header = f"  {'Profile':<12}  {'Name':<22}  {'Tables':>6}  Description"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2 + 20))
    for p in profiles:
        lines.append(
            f"  {p.profile_id:<12}  {p.name:<22}  {p.table_count:>6}  {p.description}"
        )
    return "\n".join(lines)


# ── Fleet summary ─────────────────────────────────────────────────────────────


def format_fleet_summary(profile: FleetProfile, stats: FleetStats) -> str:
    """Render fleet-wide statistics as a labelled block."""
    lines = [
        "",
        f"=== Fleet Summary: {profile.name} ===",
        f"  Tables:             {stats.total_tables}",
        f"  Monthly spend:      {format_currency(stats.total_monthly_spend)}",
        f"  Savings potential:  {format_currency(stats.total_savings_potential)}"
        f" ({stats.savings_percentage}% of spend)",
        f"  Critical tables:    {stats.critical_tables}",
        f"  Avg utilization:    {stats.avg_utilization}%",
        f"  Unused GSIs:        {stats.unused_gsi_count}",
    ]
    return "\n".join(lines)


# ── Fleet table ───────────────────────────────────────────────────────────────


def format_fleet_table(tables: Sequence[TableRecord], top: int | None = None) -> str:
    """Render the fleet as one row per table, in the given order.

    Args:
        tables: Tables to show (typically already sorted by waste score).
        top:    Show only the first ``top`` rows; ``None`` shows all.

    Returns:
        Multi-line string.
    """
    shown = list(tables if top is None else tables[:top])
    lines: list[str] = ["", "=== Fleet Tables ==="]

    if not shown:
        lines.append("  (no tables)")
        return "\n".join(lines)

    header = (
        f"  {'Table':<28}  {'Region':<9}  {'Mode':<11}  {'Pattern':<7}  "
        f"{'Util':>4}  {'GSI':>3}  {'Unused':>6}  {'Spend':>7}  "
        f"{'Savings':>7}  {'Waste':>5}  Category"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for t in shown:
        lines.append(
            f"  {t.table_name[:28]:<28}  {t.region.value:<9}  "
            f"{t.capacity_mode.value:<11}  {t.traffic_pattern.value:<7}  "
            f"{t.utilization_percent:>3}%  {t.gsi_count:>3}  {len(t.unused_gsis):>6}  "
            f"{format_currency(t.monthly_spend):>7}  "
            f"{format_currency(t.savings_potential):>7}  "
            f"{t.waste_score:>5.2f}  [{waste_category(t.waste_score).value.upper()}]"
        )

    if top is not None and len(tables) > top:
        lines.append(f"  ... and {len(tables) - top} more table(s).")
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(recommendations: Sequence[Recommendation]) -> str:
    """Render ranked recommendations with their action breakdown::

        1. orders-prod-01  (us-east-1)  spend $1.2k  save $480/mo  waste 0.82
           * Right-size Capacity            HIGH     $450  <- primary
             Only 10% utilization - reduce provisioned capacity
    """
    lines: list[str] = ["", "=== Optimization Recommendations ==="]

    if not recommendations:
        lines.append("  (no actionable tables found)")
        return "\n".join(lines)

    for rank, rec in enumerate(recommendations, start=1):
        lines.append("")
        lines.append(
            f"  {rank:>2}. {rec.table_name}  ({rec.region.value})  "
            f"spend {format_currency(rec.current_spend)}  "
            f"save {format_currency(rec.total_savings)}/mo  "
            f"waste {rec.waste_score:.2f}"
        )
        for action in rec.all_actions:
            marker = "*" if action == rec.primary_action else " "
            suffix = "  <- primary" if action == rec.primary_action else ""
            lines.append(
                f"      {marker} {action.title:<30}  {action.priority.value:<6}  "
                f"{format_currency(action.estimated_savings):>7}{suffix}"
            )
            lines.append(f"          {action.description}")

    return "\n".join(lines)
