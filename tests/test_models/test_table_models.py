"""
Tests for fleet_optimizer/models/table.py and models/recommendation.py.

Verifies that the validators reject records that would break fleet
invariants, and that the models are immutable.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fleet_optimizer.models.recommendation import Action, Recommendation
from fleet_optimizer.taxonomy.fleet_taxonomy import (
    ActionType,
    CapacityMode,
    Priority,
    Region,
)


class TestTableRecord:
    def test_valid_defaults(self, make_table):
        t = make_table()
        assert t.is_provisioned
        assert t.table_name.startswith("orders-prod-")

    def test_frozen(self, make_table):
        t = make_table()
        with pytest.raises(ValidationError):
            t.monthly_spend = 1  # type: ignore[misc]

    def test_on_demand_has_no_provisioned_capacity(self, make_table):
        t = make_table(capacity_mode=CapacityMode.ON_DEMAND)
        assert t.provisioned_rcu is None
        assert not t.is_provisioned

    def test_on_demand_rejects_provisioned_capacity(self, make_table):
        with pytest.raises(ValidationError, match="ON_DEMAND"):
            make_table(capacity_mode=CapacityMode.ON_DEMAND, provisioned_rcu=100, provisioned_wcu=50)

    def test_provisioned_requires_capacity(self, make_table):
        with pytest.raises(ValidationError, match="PROVISIONED"):
            make_table(provisioned_rcu=None)

    def test_consumed_cannot_exceed_provisioned(self, make_table):
        with pytest.raises(ValidationError, match="consumed_rcu"):
            make_table(consumed_rcu=1001)
        with pytest.raises(ValidationError, match="consumed_wcu"):
            make_table(consumed_wcu=201)

    def test_unused_gsis_bounded_by_gsi_count(self, make_table):
        with pytest.raises(ValidationError, match="unused GSIs"):
            make_table(gsi_count=1, unused_gsis=("gsi-a", "gsi-b"))

    def test_unused_gsis_capped_at_three(self, make_table):
        with pytest.raises(ValidationError):
            make_table(gsi_count=5, unused_gsis=("a", "b", "c", "d"))

    @pytest.mark.parametrize("score", [-0.01, 1.01])
    def test_waste_score_range(self, make_table, score):
        with pytest.raises(ValidationError):
            make_table(waste_score=score)

    def test_utilization_range(self, make_table):
        with pytest.raises(ValidationError):
            make_table(utilization_percent=101)

    def test_json_dump_uses_enum_values(self, make_table):
        data = make_table(unused_gsis=("gsi-old-format",)).model_dump(mode="json")
        assert data["capacity_mode"] == "PROVISIONED"
        assert data["region"] == "us-east-1"
        assert data["unused_gsis"] == ["gsi-old-format"]


def _action(savings: int = 100, type_: ActionType = ActionType.RIGHT_SIZE) -> Action:
    return Action(
        type=type_,
        title="Right-size Capacity",
        description="Only 10% utilization - reduce provisioned capacity",
        estimated_savings=savings,
        priority=Priority.HIGH,
        icon="📉",
    )


class TestRecommendationModel:
    def test_valid(self):
        a = _action()
        rec = Recommendation(
            table_id="tbl-1", table_name="orders-prod-01", region=Region.US_WEST_2,
            current_spend=1000, waste_score=0.8, total_savings=450,
            primary_action=a, all_actions=(a,),
        )
        assert rec.primary_action.estimated_savings == 100

    def test_rejects_empty_actions(self):
        a = _action()
        with pytest.raises(ValidationError, match="at least one action"):
            Recommendation(
                table_id="tbl-1", table_name="t", region=Region.US_EAST_1,
                current_spend=1, waste_score=0.1, total_savings=0,
                primary_action=a, all_actions=(),
            )

    def test_primary_must_be_listed(self):
        listed, other = _action(100), _action(200, ActionType.ADD_DAX)
        with pytest.raises(ValidationError, match="primary_action"):
            Recommendation(
                table_id="tbl-1", table_name="t", region=Region.US_EAST_1,
                current_spend=1, waste_score=0.1, total_savings=0,
                primary_action=other, all_actions=(listed,),
            )

    def test_action_savings_non_negative(self):
        with pytest.raises(ValidationError):
            _action(-1)
