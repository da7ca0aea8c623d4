"""
Shared pytest fixtures for the fleet optimizer test suite.

Provides:
  - ``scripted_rng``: factory for a random source that replays fixed draws,
    so generator tests can pin exact table values.
  - ``make_table``: factory for valid ``TableRecord`` objects with sensible
    defaults; override any field by keyword.
  - ``fixed_now``: a stable generation timestamp.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

import pytest

from fleet_optimizer.models.table import TableRecord
from fleet_optimizer.taxonomy.fleet_taxonomy import (
    CapacityMode,
    Environment,
    Region,
    TrafficPattern,
)

FIXED_NOW = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)


class ScriptedRandom:
    """Random source that returns ``draws`` in order, then fails loudly."""

    def __init__(self, draws: Iterable[float]) -> None:
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self._draws):
            raise AssertionError(
                f"ScriptedRandom exhausted after {self.calls} draws"
            )
        value = self._draws[self.calls]
        self.calls += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self._draws) - self.calls


@pytest.fixture
def scripted_rng() -> Callable[[Iterable[float]], ScriptedRandom]:
    """Return a factory: ``scripted_rng([0.5, 0.1, ...])``."""
    return ScriptedRandom


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_table() -> Callable[..., TableRecord]:
    """Return a ``TableRecord`` factory.

    Defaults describe a healthy provisioned table: 1000/200 RCU/WCU at 60%
    utilization, steady traffic, no unused indexes, $200/month.

    ``capacity_mode=ON_DEMAND`` clears the provisioned fields unless they are
    passed explicitly.
    """
    counter = {"n": 0}

    def _make(**overrides: Any) -> TableRecord:
        counter["n"] += 1
        n = counter["n"]
        fields: dict[str, Any] = {
            "table_id":            f"tbl-test-{n}",
            "table_name":          f"orders-prod-{n:02d}",
            "region":              Region.US_EAST_1,
            "environment":         Environment.PROD,
            "capacity_mode":       CapacityMode.PROVISIONED,
            "provisioned_rcu":     1000,
            "provisioned_wcu":     200,
            "consumed_rcu":        600,
            "consumed_wcu":        120,
            "utilization_percent": 60,
            "gsi_count":           0,
            "unused_gsis":         (),
            "traffic_pattern":     TrafficPattern.STEADY,
            "monthly_spend":       200,
            "waste_score":         0.24,
            "savings_potential":   0,
            "last_updated":        FIXED_NOW,
        }
        if overrides.get("capacity_mode") == CapacityMode.ON_DEMAND:
            overrides.setdefault("provisioned_rcu", None)
            overrides.setdefault("provisioned_wcu", None)
        if overrides.get("unused_gsis") and "gsi_count" not in overrides:
            overrides["gsi_count"] = len(overrides["unused_gsis"])
        fields.update(overrides)
        return TableRecord(**fields)

    return _make
