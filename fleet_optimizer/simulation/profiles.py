"""
Industry fleet profiles.

Each profile is a row in the ``PROFILES`` lookup table: the table-name prefix
catalog, how many tables the fleet has, and the distribution utilization
factors are drawn from. The generator only ever talks to a ``FleetProfile``,
so adding a profile means adding a row here.

Utilization distributions
-------------------------
ecommerce : bimodal. 30% of tables sit in a seasonal trough (5–30%), the rest
            run at 40–90%.
gaming    : bimodal 50/50. Hot tables at 70–95%, cold ones at 10–40%.
financial : conservatively over-provisioned, 15–50%.
fallback  : flat 20–80%.

Bands are drawn in whole percent, then divided by 100.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from fleet_optimizer.utils.logging import fleet_extra
from fleet_optimizer.utils.random_source import RandomSource, random_between

logger = logging.getLogger(__name__)

UtilizationDistribution = Callable[[RandomSource], float]


def _band(rng: RandomSource, low_pct: int, high_pct: int) -> float:
    return random_between(rng, low_pct, high_pct) / 100


def ecommerce_utilization(rng: RandomSource) -> float:
    if rng.random() > 0.7:
        return _band(rng, 5, 30)
    return _band(rng, 40, 90)


def gaming_utilization(rng: RandomSource) -> float:
    if rng.random() > 0.5:
        return _band(rng, 70, 95)
    return _band(rng, 10, 40)


def financial_utilization(rng: RandomSource) -> float:
    return _band(rng, 15, 50)


def default_utilization(rng: RandomSource) -> float:
    return _band(rng, 20, 80)


@dataclass(frozen=True)
class FleetProfile:
    """Static description of an industry fleet.

    Attributes:
        profile_id:  Lookup key, e.g. ``"gaming"``.
        name:        Display name.
        icon:        Display-only glyph.
        description: One-line summary for selectors.
        prefixes:    Table-name prefixes, cycled by table index.
        table_count: Number of tables generated for this profile.
        utilization: Draws one utilization factor in ``[0, 1]``.
    """

    profile_id:  str
    name:        str
    icon:        str
    description: str
    prefixes:    tuple[str, ...]
    table_count: int
    utilization: UtilizationDistribution


_ECOMMERCE_PREFIXES = (
    "orders", "products", "users", "carts", "inventory", "reviews",
    "payments", "shipments", "promotions", "sessions", "wishlists", "returns",
)

PROFILES: dict[str, FleetProfile] = {
    "ecommerce": FleetProfile(
        profile_id="ecommerce",
        name="E-commerce Fleet",
        icon="🛒",
        description="70 tables, seasonal traffic patterns",
        prefixes=_ECOMMERCE_PREFIXES,
        table_count=70,
        utilization=ecommerce_utilization,
    ),
    "gaming": FleetProfile(
        profile_id="gaming",
        name="Gaming Backend",
        icon="🎮",
        description="45 tables, uneven load distribution",
        prefixes=(
            "players", "sessions", "leaderboards", "achievements", "inventory",
            "matches", "guilds", "chat", "events", "purchases", "stats",
        ),
        table_count=45,
        utilization=gaming_utilization,
    ),
    "financial": FleetProfile(
        profile_id="financial",
        name="Financial Services",
        icon="🏦",
        description="90 tables, conservative provisioning",
        prefixes=(
            "accounts", "transactions", "audit", "compliance", "customers", "loans",
            "cards", "alerts", "reports", "kyc", "fraud", "statements",
        ),
        table_count=90,
        utilization=financial_utilization,
    ),
}

# Unrecognised profile types borrow the ecommerce names but not its load shape.
FALLBACK_PROFILE = FleetProfile(
    profile_id="custom",
    name="Custom Fleet",
    icon="🗄️",
    description="50 tables, uniform utilization",
    prefixes=_ECOMMERCE_PREFIXES,
    table_count=50,
    utilization=default_utilization,
)


def resolve_profile(profile_type: str) -> FleetProfile:
    """Return the profile for ``profile_type``, or ``FALLBACK_PROFILE``."""
    profile = PROFILES.get(profile_type)
    if profile is None:
        logger.warning(
            "Unknown profile type %r; using fallback (%d tables).",
            profile_type, FALLBACK_PROFILE.table_count,
            extra=fleet_extra(FALLBACK_PROFILE.profile_id, requested=profile_type),
        )
        return FALLBACK_PROFILE
    return profile
