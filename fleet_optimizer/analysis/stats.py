"""
Fleet statistics aggregator.

``compute_fleet_stats()`` reduces a list of ``TableRecord`` into one
``FleetStats``. It is a pure reduction: no randomness, no I/O.

Degenerate inputs
-----------------
- Empty fleet: every field is 0.
- Zero total spend: ``savings_percentage`` is 0 rather than undefined.
"""

from __future__ import annotations

from collections.abc import Sequence

from fleet_optimizer.models.fleet import FleetStats
from fleet_optimizer.models.table import TableRecord
from fleet_optimizer.utils.numeric import round_half_up

CRITICAL_WASTE_THRESHOLD = 0.7


def compute_fleet_stats(tables: Sequence[TableRecord]) -> FleetStats:
    """Aggregate cost and health metrics across ``tables``.

    Args:
        tables: Generated fleet, in any order.

    Returns:
        ``FleetStats``; all zeros for an empty fleet.
    """
    total_tables = len(tables)
    if total_tables == 0:
        return FleetStats(
            total_tables=0,
            total_monthly_spend=0,
            total_savings_potential=0,
            critical_tables=0,
            avg_utilization=0,
            unused_gsi_count=0,
            savings_percentage=0,
        )

    total_spend   = sum(t.monthly_spend for t in tables)
    total_savings = sum(t.savings_potential for t in tables)
    critical      = sum(1 for t in tables if t.waste_score >= CRITICAL_WASTE_THRESHOLD)
    utilization   = sum(t.utilization_percent for t in tables) / total_tables
    unused_gsis   = sum(len(t.unused_gsis) for t in tables)

    return FleetStats(
        total_tables=total_tables,
        total_monthly_spend=total_spend,
        total_savings_potential=total_savings,
        critical_tables=critical,
        avg_utilization=round_half_up(utilization),
        unused_gsi_count=unused_gsis,
        savings_percentage=savings_percentage(total_savings, total_spend),
    )


def savings_percentage(total_savings: int, total_spend: int) -> int:
    """``total_savings / total_spend`` as a rounded percent; 0 when spend is 0."""
    if total_spend <= 0:
        return 0
    return round_half_up(total_savings / total_spend * 100)
