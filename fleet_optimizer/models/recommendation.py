"""
Optimization recommendation models.

``Action`` is one concrete change (switch mode, right-size, drop indexes,
add a cache) with an estimated monthly saving.

``Recommendation`` groups every action triggered for one table and names the
highest-saving one as ``primary_action``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fleet_optimizer.taxonomy.fleet_taxonomy import ActionType, Priority, Region


class Action(BaseModel):
    """A single proposed optimization.

    Attributes:
        type: Which optimization this is.
        title: Short headline, e.g. ``"Right-size Capacity"``.
        description: Table-specific explanation.
        estimated_savings: Monthly dollars saved if applied.
        priority: Urgency.
        icon: Display-only glyph.
    """

    model_config = ConfigDict(frozen=True)

    type: ActionType
    title: str
    description: str
    estimated_savings: int = Field(ge=0)
    priority: Priority
    icon: str = ""


class Recommendation(BaseModel):
    """All triggered actions for one table.

    Attributes:
        table_id: Source table identifier.
        table_name: Source table name.
        region: Source table region.
        current_spend: The table's ``monthly_spend``.
        waste_score: The table's ``waste_score``.
        total_savings: The table's ``savings_potential``.
        primary_action: Highest ``estimated_savings`` action.
        all_actions: Every triggered action, in rule order.
    """

    model_config = ConfigDict(frozen=True)

    table_id: str
    table_name: str
    region: Region
    current_spend: int = Field(ge=0)
    waste_score: float = Field(ge=0.0, le=1.0)
    total_savings: int = Field(ge=0)
    primary_action: Action
    all_actions: tuple[Action, ...]

    @field_validator("all_actions")
    @classmethod
    def validate_actions_not_empty(cls, v: tuple[Action, ...]) -> tuple[Action, ...]:
        if not v:
            raise ValueError("A recommendation needs at least one action.")
        return v

    @model_validator(mode="after")
    def validate_primary_in_actions(self) -> "Recommendation":
        if self.primary_action not in self.all_actions:
            raise ValueError("primary_action must be one of all_actions.")
        return self
