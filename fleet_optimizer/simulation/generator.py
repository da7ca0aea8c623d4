"""
Synthetic fleet generator.

``generate_table()`` builds one ``TableRecord`` from a fixed sequence of
random draws; ``generate_fleet()`` builds a whole profile's fleet and sorts it
by waste score.

Draw order (one ``rng.random()`` call per step unless noted)
------------------------------------------------------------
 1. capacity mode        PROVISIONED when draw > 0.3 (70%)
 2. traffic tier         high traffic when draw > 0.6 (40%)
 3. provisioned RCU      high [2000, 10000] / normal [100, 2000]
 4. provisioned WCU      high [500, 3000]   / normal [50, 500]
 5. utilization factor   profile distribution (one or two draws)
 6. GSI count            [0, 5]
 7. unused GSIs          coin flip > 0.5, count in [1, min(3, gsi_count)],
                         then one name draw per unused index (with replacement)
 8. traffic pattern      STEADY / SPIKY / BURSTY
 9. region               us-east-1 / us-west-2 / eu-west-1

Provisioned RCU/WCU are drawn for on-demand tables too; there they only feed
consumed capacity and are dropped from the record.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from fleet_optimizer.models.table import MAX_GSI_COUNT, MAX_UNUSED_GSIS, TableRecord
from fleet_optimizer.simulation.profiles import (
    FALLBACK_PROFILE,
    PROFILES,
    FleetProfile,
    resolve_profile,
)
from fleet_optimizer.simulation.scoring import (
    capacity_waste,
    compute_monthly_spend,
    compute_savings_potential,
    compute_waste_score,
)
from fleet_optimizer.taxonomy.fleet_taxonomy import (
    ENVIRONMENTS,
    REGIONS,
    TRAFFIC_PATTERNS,
    CapacityMode,
    Environment,
)
from fleet_optimizer.utils.logging import fleet_extra
from fleet_optimizer.utils.numeric import round_half_up, round_to
from fleet_optimizer.utils.random_source import (
    RandomSource,
    choice,
    default_source,
    random_between,
)

logger = logging.getLogger(__name__)

# Index names that look abandoned; sampled for unused GSIs.
UNUSED_GSI_NAMES: tuple[str, ...] = (
    "gsi-legacy-idx", "gsi-migration-temp", "gsi-old-format", "gsi-deprecated",
    "gsi-test-idx", "gsi-backup-idx", "gsi-unused-sort", "gsi-archive-idx",
)

HIGH_TRAFFIC_RCU = (2000, 10000)
HIGH_TRAFFIC_WCU = (500, 3000)
NORMAL_TRAFFIC_RCU = (100, 2000)
NORMAL_TRAFFIC_WCU = (50, 500)

PROD_SHARE = 0.6


def generate_table(
    prefix:       str,
    environment:  Environment | str,
    index:        int,
    profile_type: str,
    rng:          Optional[RandomSource] = None,
    now:          Optional[datetime] = None,
) -> TableRecord:
    """Generate one fully-populated table.

    Args:
        prefix:       Table-name prefix, e.g. ``"orders"``.
        environment:  Deployment stage for the table.
        index:        1-based position in the fleet; zero-padded in the name.
        profile_type: Profile key selecting the utilization distribution.
                      Unknown keys use the fallback distribution.
        rng:          Random source; a fresh unseeded one when ``None``.
        now:          Generation timestamp; ``datetime.now(UTC)`` when ``None``.

    Returns:
        A validated ``TableRecord``.
    """
    profile = PROFILES.get(profile_type, FALLBACK_PROFILE)
    return _build_table(
        profile,
        prefix,
        Environment(environment),
        index,
        rng or default_source(),
        now or datetime.now(timezone.utc),
    )


def generate_fleet(
    profile_type: str,
    rng:          Optional[RandomSource] = None,
    now:          Optional[datetime] = None,
) -> list[TableRecord]:
    """Generate every table for ``profile_type``, highest waste score first.

    The first 60% of tables (by index) are ``prod``; the rest draw their
    environment uniformly from all four stages, ``prod`` included.

    Args:
        profile_type: Profile key (``"ecommerce"``, ``"gaming"``,
                      ``"financial"``); anything else uses the 50-table
                      fallback profile with ecommerce prefixes.
        rng:          Random source shared by every table in the run.
        now:          Timestamp shared by every table in the run.

    Returns:
        Tables sorted by ``waste_score`` descending; ties keep generation order.
    """
    profile = resolve_profile(profile_type)
    rng = rng or default_source()
    now = now or datetime.now(timezone.utc)

    tables: list[TableRecord] = []
    for i in range(profile.table_count):
        prefix = profile.prefixes[i % len(profile.prefixes)]
        if i < profile.table_count * PROD_SHARE:
            env = Environment.PROD
        else:
            env = choice(rng, ENVIRONMENTS)
        tables.append(_build_table(profile, prefix, env, i + 1, rng, now))

    tables.sort(key=lambda t: t.waste_score, reverse=True)

    critical = sum(1 for t in tables if t.waste_score >= 0.7)
    logger.info(
        "Generated %d tables (%d critical)",
        len(tables),
        critical,
        extra=fleet_extra(profile.profile_id, tables=len(tables), critical=critical),
    )
    return tables


# ── Internals ─────────────────────────────────────────────────────────────────


def _build_table(
    profile:     FleetProfile,
    prefix:      str,
    environment: Environment,
    index:       int,
    rng:         RandomSource,
    now:         datetime,
) -> TableRecord:
    is_provisioned  = rng.random() > 0.3
    is_high_traffic = rng.random() > 0.6
    mode = CapacityMode.PROVISIONED if is_provisioned else CapacityMode.ON_DEMAND

    rcu_range = HIGH_TRAFFIC_RCU if is_high_traffic else NORMAL_TRAFFIC_RCU
    wcu_range = HIGH_TRAFFIC_WCU if is_high_traffic else NORMAL_TRAFFIC_WCU
    provisioned_rcu = random_between(rng, *rcu_range)
    provisioned_wcu = random_between(rng, *wcu_range)

    utilization = profile.utilization(rng)
    consumed_rcu = math.floor(provisioned_rcu * utilization)
    consumed_wcu = math.floor(provisioned_wcu * utilization)

    gsi_count = random_between(rng, 0, MAX_GSI_COUNT)
    unused_gsis: list[str] = []
    if gsi_count > 0 and rng.random() > 0.5:
        num_unused = random_between(rng, 1, min(MAX_UNUSED_GSIS, gsi_count))
        unused_gsis = [choice(rng, UNUSED_GSI_NAMES) for _ in range(num_unused)]

    traffic_pattern = choice(rng, TRAFFIC_PATTERNS)

    monthly_spend = compute_monthly_spend(
        mode, provisioned_rcu, provisioned_wcu, consumed_rcu, consumed_wcu
    )
    waste_score = compute_waste_score(mode, utilization, len(unused_gsis), traffic_pattern)
    savings = compute_savings_potential(
        mode, utilization, len(unused_gsis), traffic_pattern, monthly_spend
    )

    logger.debug(
        "table=%s-%s-%02d mode=%s util=%.2f cap_waste=%.2f unused_gsis=%d",
        prefix, environment.value, index, mode.value, utilization,
        capacity_waste(mode, utilization), len(unused_gsis),
    )

    return TableRecord(
        table_id=f"tbl-{int(now.timestamp() * 1000)}-{index}",
        table_name=f"{prefix}-{environment.value}-{index:02d}",
        region=choice(rng, REGIONS),
        environment=environment,
        capacity_mode=mode,
        provisioned_rcu=provisioned_rcu if is_provisioned else None,
        provisioned_wcu=provisioned_wcu if is_provisioned else None,
        consumed_rcu=consumed_rcu,
        consumed_wcu=consumed_wcu,
        utilization_percent=round_half_up(utilization * 100),
        gsi_count=gsi_count,
        unused_gsis=tuple(unused_gsis),
        traffic_pattern=traffic_pattern,
        monthly_spend=round_half_up(monthly_spend),
        waste_score=round_to(waste_score, 2),
        savings_potential=round_half_up(savings),
        last_updated=now,
    )
