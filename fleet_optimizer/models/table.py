"""
Simulated table model.

``TableRecord`` is one synthetic DynamoDB table: identity, capacity settings,
observed load, index health, traffic shape, and the derived economics
(monthly spend, waste score, savings potential).

The model is frozen. A fleet is regenerated wholesale on every profile
selection, so records are never patched in place.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fleet_optimizer.taxonomy.fleet_taxonomy import (
    CapacityMode,
    Environment,
    Region,
    TrafficPattern,
)

MAX_GSI_COUNT = 5
MAX_UNUSED_GSIS = 3


class TableRecord(BaseModel):
    """One simulated DynamoDB table.

    Attributes:
        table_id: Unique identifier within a generation run.
        table_name: ``{prefix}-{environment}-{index:02d}``.
        region: Hosting region.
        environment: Deployment stage.
        capacity_mode: Billing mode.
        provisioned_rcu: Reserved read capacity; ``None`` for on-demand tables.
        provisioned_wcu: Reserved write capacity; ``None`` for on-demand tables.
        consumed_rcu: Observed read capacity.
        consumed_wcu: Observed write capacity.
        utilization_percent: Consumed / provisioned, as an integer percent.
        gsi_count: Number of global secondary indexes on the table.
        unused_gsis: Names of indexes with no recent query traffic.
        traffic_pattern: Shape of request volume.
        monthly_spend: Estimated monthly cost in dollars.
        waste_score: 0 (efficient) to 1 (pure waste), two decimals.
        savings_potential: Estimated recoverable monthly dollars.
        last_updated: UTC generation timestamp.
    """

    model_config = ConfigDict(frozen=True)

    table_id: str
    table_name: str
    region: Region
    environment: Environment
    capacity_mode: CapacityMode
    provisioned_rcu: Optional[int] = Field(default=None, gt=0)
    provisioned_wcu: Optional[int] = Field(default=None, gt=0)
    consumed_rcu: int = Field(ge=0)
    consumed_wcu: int = Field(ge=0)
    utilization_percent: int = Field(ge=0, le=100)
    gsi_count: int = Field(ge=0, le=MAX_GSI_COUNT)
    unused_gsis: tuple[str, ...] = ()
    traffic_pattern: TrafficPattern
    monthly_spend: int = Field(ge=0)
    waste_score: float = Field(ge=0.0, le=1.0)
    savings_potential: int = Field(ge=0)
    last_updated: datetime

    @model_validator(mode="after")
    def validate_capacity_consistency(self) -> "TableRecord":
        provisioned = (self.provisioned_rcu, self.provisioned_wcu)
        if self.capacity_mode == CapacityMode.PROVISIONED:
            if None in provisioned:
                raise ValueError(
                    "PROVISIONED tables require provisioned_rcu and provisioned_wcu."
                )
            if self.consumed_rcu > self.provisioned_rcu:
                raise ValueError(
                    f"consumed_rcu ({self.consumed_rcu}) exceeds "
                    f"provisioned_rcu ({self.provisioned_rcu})."
                )
            if self.consumed_wcu > self.provisioned_wcu:
                raise ValueError(
                    f"consumed_wcu ({self.consumed_wcu}) exceeds "
                    f"provisioned_wcu ({self.provisioned_wcu})."
                )
        elif provisioned != (None, None):
            raise ValueError("ON_DEMAND tables must not carry provisioned capacity.")
        return self

    @model_validator(mode="after")
    def validate_unused_gsis(self) -> "TableRecord":
        limit = min(MAX_UNUSED_GSIS, self.gsi_count)
        if len(self.unused_gsis) > limit:
            raise ValueError(
                f"{len(self.unused_gsis)} unused GSIs listed but at most {limit} "
                f"allowed for a table with gsi_count={self.gsi_count}."
            )
        return self

    @property
    def is_provisioned(self) -> bool:
        return self.capacity_mode == CapacityMode.PROVISIONED
