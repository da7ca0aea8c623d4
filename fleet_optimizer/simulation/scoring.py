"""
Cost model: monthly spend, waste score, and savings potential for one table.

All functions are pure; no randomness, no I/O. They return unrounded floats
so callers can round once at the model boundary.

Monthly spend
-------------
PROVISIONED (flat hourly rate per provisioned unit)::

    (provisioned_rcu * 0.00013 + provisioned_wcu * 0.00065) * 730

ON_DEMAND (consumed units treated as a per-second request rate)::

    consumed_rcu * 0.25 / 1e6 * 3600 * 730
    + consumed_wcu * 1.25 / 1e6 * 3600 * 730

730 is the average number of hours in a month.

Waste score (0–1)
-----------------
    capacity_waste = 1 - utilization        (PROVISIONED only, else 0)
    gsi_waste      = 0.15 * unused_gsis
    mode_waste     = 0.2                    (PROVISIONED and SPIKY, else 0)

    waste = min(1, capacity_waste * 0.6 + gsi_waste + mode_waste)

Savings potential ($/month)
---------------------------
    + spend * 0.4                           if PROVISIONED and SPIKY
    + spend * capacity_waste * 0.5          if capacity_waste > 0.5
    + unused_gsis * 50
"""

from __future__ import annotations

from fleet_optimizer.taxonomy.fleet_taxonomy import CapacityMode, TrafficPattern

HOURS_PER_MONTH = 730
SECONDS_PER_HOUR = 3600

PROVISIONED_RCU_HOURLY = 0.00013
PROVISIONED_WCU_HOURLY = 0.00065
ON_DEMAND_READ_PER_MILLION = 0.25
ON_DEMAND_WRITE_PER_MILLION = 1.25

UNUSED_GSI_MONTHLY_COST = 50

CAPACITY_WASTE_WEIGHT = 0.6
GSI_WASTE_PER_INDEX = 0.15
MODE_MISMATCH_WASTE = 0.2

ON_DEMAND_SWITCH_SAVINGS_RATE = 0.4
RIGHT_SIZE_SAVINGS_RATE = 0.5
RIGHT_SIZE_WASTE_THRESHOLD = 0.5


def compute_monthly_spend(
    capacity_mode:   CapacityMode,
    provisioned_rcu: int,
    provisioned_wcu: int,
    consumed_rcu:    int,
    consumed_wcu:    int,
) -> float:
    """Estimated monthly dollars for one table (unrounded)."""
    if capacity_mode == CapacityMode.PROVISIONED:
        hourly = (
            provisioned_rcu * PROVISIONED_RCU_HOURLY
            + provisioned_wcu * PROVISIONED_WCU_HOURLY
        )
        return hourly * HOURS_PER_MONTH

    seconds_per_month = SECONDS_PER_HOUR * HOURS_PER_MONTH
    reads  = consumed_rcu * ON_DEMAND_READ_PER_MILLION / 1_000_000 * seconds_per_month
    writes = consumed_wcu * ON_DEMAND_WRITE_PER_MILLION / 1_000_000 * seconds_per_month
    return reads + writes


def capacity_waste(capacity_mode: CapacityMode, utilization: float) -> float:
    """Unused share of reserved capacity; always 0 for on-demand tables."""
    if capacity_mode == CapacityMode.PROVISIONED:
        return 1 - utilization
    return 0.0


def is_mode_mismatch(capacity_mode: CapacityMode, traffic_pattern: TrafficPattern) -> bool:
    """Provisioned capacity under spiky traffic pays for peaks it rarely uses."""
    return (
        capacity_mode == CapacityMode.PROVISIONED
        and traffic_pattern == TrafficPattern.SPIKY
    )


def compute_waste_score(
    capacity_mode:   CapacityMode,
    utilization:     float,
    unused_gsis:     int,
    traffic_pattern: TrafficPattern,
) -> float:
    """Waste score in ``[0, 1]`` (unrounded)."""
    cap_waste  = capacity_waste(capacity_mode, utilization)
    gsi_waste  = GSI_WASTE_PER_INDEX * unused_gsis
    mode_waste = MODE_MISMATCH_WASTE if is_mode_mismatch(capacity_mode, traffic_pattern) else 0.0
    return min(1.0, cap_waste * CAPACITY_WASTE_WEIGHT + gsi_waste + mode_waste)


def compute_savings_potential(
    capacity_mode:   CapacityMode,
    utilization:     float,
    unused_gsis:     int,
    traffic_pattern: TrafficPattern,
    monthly_spend:   float,
) -> float:
    """Recoverable monthly dollars (unrounded)."""
    savings = 0.0

    if is_mode_mismatch(capacity_mode, traffic_pattern):
        savings += monthly_spend * ON_DEMAND_SWITCH_SAVINGS_RATE

    cap_waste = capacity_waste(capacity_mode, utilization)
    if cap_waste > RIGHT_SIZE_WASTE_THRESHOLD:
        savings += monthly_spend * cap_waste * RIGHT_SIZE_SAVINGS_RATE

    savings += unused_gsis * UNUSED_GSI_MONTHLY_COST
    return savings
