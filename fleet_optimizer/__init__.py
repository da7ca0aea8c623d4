"""
DynamoDB fleet cost optimizer.

Simulates a fleet of DynamoDB tables for an industry profile, scores each
table for wasted spend, and turns the worst offenders into ranked,
explained optimization actions.

Public API::

    from fleet_optimizer import (
        generate_fleet, compute_fleet_stats, generate_recommendations,
        format_currency, waste_category,
    )

    tables = generate_fleet("gaming")
    stats = compute_fleet_stats(tables)
    recs = generate_recommendations(tables, limit=10)
"""

from fleet_optimizer.analysis.stats import compute_fleet_stats
from fleet_optimizer.recommendations.engine import generate_recommendations
from fleet_optimizer.reporting.formatters import (
    format_currency,
    priority_color,
    waste_category,
)
from fleet_optimizer.simulation.generator import generate_fleet, generate_table

__version__ = "0.1.0"

__all__ = [
    "compute_fleet_stats",
    "format_currency",
    "generate_fleet",
    "generate_recommendations",
    "generate_table",
    "priority_color",
    "waste_category",
]
