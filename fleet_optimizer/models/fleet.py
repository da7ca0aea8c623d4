"""
Fleet-level summary statistics.

``FleetStats`` is derived on demand from a list of ``TableRecord`` and is
never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FleetStats(BaseModel):
    """Aggregate cost and health metrics for one generated fleet.

    Attributes:
        total_tables: Number of tables in the fleet.
        total_monthly_spend: Sum of ``monthly_spend``.
        total_savings_potential: Sum of ``savings_potential``.
        critical_tables: Tables with ``waste_score >= 0.7``.
        avg_utilization: Mean ``utilization_percent``, rounded.
        unused_gsi_count: Total unused indexes across the fleet.
        savings_percentage: Savings potential as a rounded percent of spend.
    """

    model_config = ConfigDict(frozen=True)

    total_tables: int = Field(ge=0)
    total_monthly_spend: int = Field(ge=0)
    total_savings_potential: int = Field(ge=0)
    critical_tables: int = Field(ge=0)
    avg_utilization: int = Field(ge=0, le=100)
    unused_gsi_count: int = Field(ge=0)
    savings_percentage: int = Field(ge=0)
