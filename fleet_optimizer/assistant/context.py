"""
Prompt context for the fleet assistant.

``build_context_text()`` renders the stats and top recommendations of the
fleet currently on screen into the block appended to ``SYSTEM_PROMPT``::

    Current Fleet Context:
    - Profile: gaming
    - Total Tables: 45
    - Monthly Spend: $48210
    - Savings Potential: $9120
    - Critical Tables: 7

    Top 5 Optimization Targets:
    1. players-prod-01: Right-size Capacity (Save $1320/mo)
    ...

Stats render as ``N/A`` until a fleet has been generated.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from fleet_optimizer.models.fleet import FleetStats
from fleet_optimizer.models.recommendation import Recommendation
from fleet_optimizer.models.table import TableRecord
from fleet_optimizer.utils.numeric import round_half_up

SYSTEM_PROMPT = """You are a Senior Solutions Architect specializing in Amazon DynamoDB optimization. You're helping analyze a simulated fleet of DynamoDB tables to identify cost-saving opportunities.

Your expertise includes:
- Capacity Mode Selection (Provisioned vs On-Demand)
- Read/Write Capacity Unit optimization
- Global Secondary Index (GSI) management
- Traffic pattern analysis (Steady, Spiky, Bursty)
- DAX caching recommendations
- Partition key design and hot partition prevention

When responding:
1. Be concise but insightful
2. Reference specific tables from the fleet context when applicable
3. Provide actionable recommendations
4. Quantify savings potential when possible
5. Explain the "why" behind each recommendation

Format your responses in markdown for clarity."""

DEFAULT_TARGET_COUNT = 5


@dataclass
class FleetContext:
    """What the assistant is told about the fleet on screen.

    Attributes:
        profile:             Profile id the fleet was generated from.
        stats:               Fleet statistics, or ``None`` before generation.
        top_recommendations: Highest-savings recommendations, in rank order.
    """

    profile: str
    stats: Optional[FleetStats] = None
    top_recommendations: list[Recommendation] = field(default_factory=list)

    @classmethod
    def from_fleet(
        cls,
        profile: str,
        stats: FleetStats,
        recommendations: Sequence[Recommendation],
        limit: int = DEFAULT_TARGET_COUNT,
    ) -> "FleetContext":
        return cls(
            profile=profile,
            stats=stats,
            top_recommendations=list(recommendations[:limit]),
        )


def build_context_text(context: Optional[FleetContext]) -> str:
    """Render ``context`` as prompt text; empty string when there is none."""
    if context is None:
        return ""

    stats = context.stats

    def stat(name: str) -> str:
        return "N/A" if stats is None else str(getattr(stats, name))

    if context.top_recommendations:
        targets = "\n".join(
            f"{i}. {rec.table_name}: {rec.primary_action.title} "
            f"(Save ${rec.total_savings}/mo)"
            for i, rec in enumerate(context.top_recommendations, start=1)
        )
    else:
        targets = "No recommendations yet"

    return (
        "\n\nCurrent Fleet Context:\n"
        f"- Profile: {context.profile}\n"
        f"- Total Tables: {stat('total_tables')}\n"
        f"- Monthly Spend: ${stat('total_monthly_spend')}\n"
        f"- Savings Potential: ${stat('total_savings_potential')}\n"
        f"- Critical Tables: {stat('critical_tables')}\n"
        "\n"
        f"Top {len(context.top_recommendations) or DEFAULT_TARGET_COUNT} Optimization Targets:\n"
        f"{targets}"
    )


def fleet_greeting(profile: str, tables: Sequence[TableRecord]) -> str:
    """Opening assistant message for a freshly generated fleet.

    ``tables`` is expected in waste order, so the first one is the top
    optimization opportunity.
    """
    if not tables:
        return f"Fleet analysis complete! I found 0 tables in your {profile} fleet."
    top = tables[0]
    return (
        f"Fleet analysis complete! I found {len(tables)} tables in your {profile} fleet. "
        f"The top optimization opportunity is **{top.table_name}** with a waste score "
        f"of {round_half_up(top.waste_score * 100)}%. "
        "Would you like me to explain why this table is prioritized?"
    )
