"""
Recommendation engine: turns ``TableRecord`` objects into ranked
``Recommendation`` objects with one or more concrete actions each.

Action rules (each evaluated independently, in this order)
----------------------------------------------------------
    SWITCH_TO_ONDEMAND : PROVISIONED and SPIKY
                         savings = spend * 0.4                   HIGH
    RIGHT_SIZE         : PROVISIONED and utilization < 30%
                         savings = spend * (1 - util) * 0.5      HIGH if util < 15%
                                                                 else MEDIUM
    REMOVE_GSI         : at least one unused GSI
                         savings = unused * 50                   HIGH if >= 2
                                                                 else MEDIUM
    ADD_DAX            : consumed RCU > 5000 and STEADY
                         savings = spend * 0.25                  LOW

Selection
---------
1. Stable-sort tables by ``savings_potential`` descending; take the top
   ``limit``.
2. Evaluate the rules for each; tables triggering nothing are dropped.
3. The primary action is the one with the highest ``estimated_savings``
   (first in rule order on ties).

Output order is the savings-sorted selection order; recommendations are not
re-sorted by their own action savings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Optional

from fleet_optimizer.models.recommendation import Action, Recommendation
from fleet_optimizer.models.table import TableRecord
from fleet_optimizer.simulation.scoring import UNUSED_GSI_MONTHLY_COST
from fleet_optimizer.taxonomy.fleet_taxonomy import (
    ActionType,
    CapacityMode,
    Priority,
    TrafficPattern,
)
from fleet_optimizer.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

RIGHT_SIZE_UTILIZATION_PCT = 30
RIGHT_SIZE_URGENT_PCT = 15
DAX_READ_THRESHOLD = 5000

ActionRule = Callable[[TableRecord], Optional[Action]]


# ── Rules ─────────────────────────────────────────────────────────────────────


def _switch_to_on_demand(table: TableRecord) -> Optional[Action]:
    if not (
        table.capacity_mode == CapacityMode.PROVISIONED
        and table.traffic_pattern == TrafficPattern.SPIKY
    ):
        return None
    return Action(
        type=ActionType.SWITCH_TO_ONDEMAND,
        title="Switch to On-Demand",
        description=(
            f"Traffic pattern is {table.traffic_pattern.value.lower()}, "
            "On-Demand would be more cost-effective"
        ),
        estimated_savings=round_half_up(table.monthly_spend * 0.4),
        priority=Priority.HIGH,
        icon="⚡",
    )


def _right_size(table: TableRecord) -> Optional[Action]:
    util = table.utilization_percent
    if not (
        table.capacity_mode == CapacityMode.PROVISIONED
        and util < RIGHT_SIZE_UTILIZATION_PCT
    ):
        return None
    return Action(
        type=ActionType.RIGHT_SIZE,
        title="Right-size Capacity",
        description=f"Only {util}% utilization - reduce provisioned capacity",
        estimated_savings=round_half_up(table.monthly_spend * (1 - util / 100) * 0.5),
        priority=Priority.HIGH if util < RIGHT_SIZE_URGENT_PCT else Priority.MEDIUM,
        icon="📉",
    )


def _remove_unused_gsis(table: TableRecord) -> Optional[Action]:
    unused = len(table.unused_gsis)
    if unused == 0:
        return None
    plural = "s" if unused > 1 else ""
    return Action(
        type=ActionType.REMOVE_GSI,
        title=f"Delete {unused} Unused GSI{plural}",
        description=f"GSIs without recent queries: {', '.join(table.unused_gsis)}",
        estimated_savings=unused * UNUSED_GSI_MONTHLY_COST,
        priority=Priority.HIGH if unused >= 2 else Priority.MEDIUM,
        icon="🗑️",
    )


def _add_dax(table: TableRecord) -> Optional[Action]:
    if not (
        table.consumed_rcu > DAX_READ_THRESHOLD
        and table.traffic_pattern == TrafficPattern.STEADY
    ):
        return None
    return Action(
        type=ActionType.ADD_DAX,
        title="Consider DAX Cache",
        description="High read throughput with steady pattern - DAX could reduce costs",
        estimated_savings=round_half_up(table.monthly_spend * 0.25),
        priority=Priority.LOW,
        icon="🚀",
    )


ACTION_RULES: tuple[ActionRule, ...] = (
    _switch_to_on_demand,
    _right_size,
    _remove_unused_gsis,
    _add_dax,
)


# ── Public API ────────────────────────────────────────────────────────────────


def evaluate_actions(table: TableRecord) -> list[Action]:
    """Return every action ``table`` triggers, in rule order (may be empty)."""
    actions: list[Action] = []
    for rule in ACTION_RULES:
        action = rule(table)
        if action is not None:
            actions.append(action)
    return actions


def select_primary_action(actions: Sequence[Action]) -> Action:
    """Return the action with the highest ``estimated_savings``.

    Ties go to the earliest action in ``actions``.

    Raises:
        ValueError: If ``actions`` is empty.
    """
    if not actions:
        raise ValueError("Cannot select a primary action from an empty list.")
    return max(actions, key=lambda a: a.estimated_savings)


def build_recommendation(table: TableRecord) -> Optional[Recommendation]:
    """Build a ``Recommendation`` for ``table``, or ``None`` if nothing triggers."""
    actions = evaluate_actions(table)
    if not actions:
        return None
    return Recommendation(
        table_id=table.table_id,
        table_name=table.table_name,
        region=table.region,
        current_spend=table.monthly_spend,
        waste_score=table.waste_score,
        total_savings=table.savings_potential,
        primary_action=select_primary_action(actions),
        all_actions=tuple(actions),
    )


def generate_recommendations(
    tables: Sequence[TableRecord],
    limit:  int = DEFAULT_LIMIT,
) -> list[Recommendation]:
    """Recommend actions for the ``limit`` tables with the most savings potential.

    Args:
        tables: Generated fleet, in any order.
        limit:  Maximum number of tables considered. ``<= 0`` yields ``[]``.

    Returns:
        At most ``limit`` recommendations, in savings-potential order.
    """
    if limit <= 0:
        return []

    candidates = sorted(tables, key=lambda t: t.savings_potential, reverse=True)[:limit]

    recommendations: list[Recommendation] = []
    for table in candidates:
        rec = build_recommendation(table)
        if rec is None:
            logger.debug("No actions triggered for %s", table.table_name)
            continue
        recommendations.append(rec)

    logger.info(
        "Built %d recommendation(s) from %d candidate table(s)",
        len(recommendations), len(candidates),
    )
    return recommendations
