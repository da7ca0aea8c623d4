"""
Fleet taxonomy for simulated DynamoDB tables.

Orthogonal dimensions describing every table:
  - ``CapacityMode``   — how the table is billed.
  - ``TrafficPattern`` — the shape of request volume over time.
  - ``Environment``    — deployment stage the table belongs to.
  - ``Region``         — AWS region hosting the table.

Recommendation vocabulary:
  - ``ActionType`` — the optimization a recommendation proposes.
  - ``Priority``   — urgency of an action.
  - ``WasteCategory`` — display bucket for a waste score.

This module has NO imports from any other ``fleet_optimizer`` package.
"""

from enum import StrEnum


class CapacityMode(StrEnum):
    """DynamoDB billing / capacity mode."""

    PROVISIONED = "PROVISIONED"
    """Fixed RCU/WCU reserved and paid for per hour regardless of use."""

    ON_DEMAND = "ON_DEMAND"
    """Pay per request unit actually consumed."""


class TrafficPattern(StrEnum):
    """Qualitative shape of a table's request volume."""

    STEADY = "STEADY"
    SPIKY = "SPIKY"
    BURSTY = "BURSTY"


class Environment(StrEnum):
    """Deployment stage."""

    PROD = "prod"
    STAGING = "staging"
    DEV = "dev"
    TEST = "test"


class Region(StrEnum):
    """Regions the simulated fleet is spread across."""

    US_EAST_1 = "us-east-1"
    US_WEST_2 = "us-west-2"
    EU_WEST_1 = "eu-west-1"


class ActionType(StrEnum):
    """Cost optimization actions the recommendation engine can propose."""

    SWITCH_TO_ONDEMAND = "SWITCH_TO_ONDEMAND"
    RIGHT_SIZE = "RIGHT_SIZE"
    REMOVE_GSI = "REMOVE_GSI"
    ADD_DAX = "ADD_DAX"


class Priority(StrEnum):
    """Urgency of an action."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class WasteCategory(StrEnum):
    """Display bucket for a waste score."""

    CRITICAL = "critical"
    WARNING = "warning"
    GOOD = "good"


# Draw order matters: generation indexes into these tuples with a single
# uniform draw, so reordering changes which value a given draw selects.
ENVIRONMENTS: tuple[Environment, ...] = (
    Environment.PROD,
    Environment.STAGING,
    Environment.DEV,
    Environment.TEST,
)
REGIONS: tuple[Region, ...] = (Region.US_EAST_1, Region.US_WEST_2, Region.EU_WEST_1)
TRAFFIC_PATTERNS: tuple[TrafficPattern, ...] = (
    TrafficPattern.STEADY,
    TrafficPattern.SPIKY,
    TrafficPattern.BURSTY,
)
