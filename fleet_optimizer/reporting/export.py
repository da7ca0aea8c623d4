"""
Export helpers for spreadsheet and manual analysis.

All writer functions write to disk and return the written ``Path``.
They accept generic ``list[dict]`` data to stay decoupled from specific
report shapes.

CSV exports are flat (no nested dicts or lists) so they load directly in
Excel or pandas without any pre-processing step. The JSON report keeps the
nested structure.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fleet_optimizer.models.fleet import FleetStats
from fleet_optimizer.models.recommendation import Recommendation
from fleet_optimizer.models.table import TableRecord
from fleet_optimizer.reporting.formatters import waste_category


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8"
    )
    return path


def flatten_tables_for_export(tables: Sequence[TableRecord]) -> list[dict]:
    """One flat row per table.

    ``unused_gsis`` is joined with ``;``; on-demand tables leave the
    provisioned columns empty. A ``waste_category`` column is added.
    """
    rows: list[dict] = []
    for t in tables:
        rows.append(
            {
                "table_id":            t.table_id,
                "table_name":          t.table_name,
                "region":              t.region.value,
                "environment":         t.environment.value,
                "capacity_mode":       t.capacity_mode.value,
                "provisioned_rcu":     t.provisioned_rcu if t.provisioned_rcu is not None else "",
                "provisioned_wcu":     t.provisioned_wcu if t.provisioned_wcu is not None else "",
                "consumed_rcu":        t.consumed_rcu,
                "consumed_wcu":        t.consumed_wcu,
                "utilization_percent": t.utilization_percent,
                "gsi_count":           t.gsi_count,
                "unused_gsis":         ";".join(t.unused_gsis),
                "traffic_pattern":     t.traffic_pattern.value,
                "monthly_spend":       t.monthly_spend,
                "waste_score":         t.waste_score,
                "waste_category":      waste_category(t.waste_score).value,
                "savings_potential":   t.savings_potential,
                "last_updated":        t.last_updated.isoformat(),
            }
        )
    return rows


def flatten_recommendations_for_export(
    recommendations: Sequence[Recommendation],
) -> list[dict]:
    """One flat row per (recommendation, action) pair.

    Each row carries the table-level fields, its ``rank`` in the
    recommendation list, the action fields, and ``is_primary``.
    """
    rows: list[dict] = []
    for rank, rec in enumerate(recommendations, start=1):
        for action in rec.all_actions:
            rows.append(
                {
                    "rank":              rank,
                    "table_id":          rec.table_id,
                    "table_name":        rec.table_name,
                    "region":            rec.region.value,
                    "current_spend":     rec.current_spend,
                    "waste_score":       rec.waste_score,
                    "total_savings":     rec.total_savings,
                    "action_type":       action.type.value,
                    "action_title":      action.title,
                    "action_priority":   action.priority.value,
                    "estimated_savings": action.estimated_savings,
                    "is_primary":        action == rec.primary_action,
                    "description":       action.description,
                }
            )
    return rows


def build_report_payload(
    profile_id:      str,
    tables:          Sequence[TableRecord],
    stats:           FleetStats,
    recommendations: Sequence[Recommendation],
) -> dict[str, Any]:
    """Assemble the nested JSON report for one generation run."""
    return {
        "profile":         profile_id,
        "generated_at":    datetime.now(timezone.utc).isoformat(),
        "stats":           stats.model_dump(mode="json"),
        "recommendations": [r.model_dump(mode="json") for r in recommendations],
        "tables":          [t.model_dump(mode="json") for t in tables],
    }
