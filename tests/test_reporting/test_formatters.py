"""
Tests for fleet_optimizer/reporting/formatters.py.

Scalar helpers are checked value-by-value; the ASCII formatters are checked
for headers, row content, and empty-state messages rather than exact layout.
"""

from __future__ import annotations

import pytest

from fleet_optimizer.analysis.stats import compute_fleet_stats
from fleet_optimizer.recommendations.engine import build_recommendation
from fleet_optimizer.reporting.formatters import (
    format_currency,
    format_fleet_summary,
    format_fleet_table,
    format_profiles_table,
    format_recommendations,
    priority_color,
    waste_category,
)
from fleet_optimizer.simulation.profiles import PROFILES
from fleet_optimizer.taxonomy.fleet_taxonomy import (
    Priority,
    TrafficPattern,
    WasteCategory,
)


class TestFormatCurrency:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (1500, "$1.5k"),
            (1000, "$1.0k"),
            (48210, "$48.2k"),
            (1250, "$1.3k"),
            (2250, "$2.3k"),
            (3250, "$3.3k"),
            (1249, "$1.2k"),
            (999, "$999"),
            (42, "$42"),
            (0, "$0"),
        ],
    )
    def test_values(self, amount, expected):
        assert format_currency(amount) == expected


class TestWasteCategory:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (1.0, WasteCategory.CRITICAL),
            (0.75, WasteCategory.CRITICAL),
            (0.7, WasteCategory.CRITICAL),
            (0.69, WasteCategory.WARNING),
            (0.5, WasteCategory.WARNING),
            (0.4, WasteCategory.WARNING),
            (0.39, WasteCategory.GOOD),
            (0.1, WasteCategory.GOOD),
            (0.0, WasteCategory.GOOD),
        ],
    )
    def test_thresholds(self, score, expected):
        assert waste_category(score) == expected

    def test_values_are_display_strings(self):
        assert waste_category(0.9) == "critical"


class TestPriorityColor:
    def test_known_priorities(self):
        assert priority_color(Priority.HIGH) == "critical"
        assert priority_color(Priority.MEDIUM) == "warning"
        assert priority_color(Priority.LOW) == "good"

    def test_plain_strings_accepted(self):
        assert priority_color("HIGH") == "critical"

    def test_unknown_is_info(self):
        assert priority_color("URGENT") == "info"


class TestFormatProfilesTable:
    def test_lists_every_profile(self):
        out = format_profiles_table(list(PROFILES.values()))
        assert "=== Fleet Profiles ===" in out
        for profile in PROFILES.values():
            assert profile.profile_id in out
            assert str(profile.table_count) in out


class TestFormatFleetSummary:
    def test_contains_stats(self, make_table):
        tables = [
            make_table(monthly_spend=1500, savings_potential=300, waste_score=0.8),
            make_table(monthly_spend=500, savings_potential=0),
        ]
        out = format_fleet_summary(PROFILES["gaming"], compute_fleet_stats(tables))
        assert "=== Fleet Summary: Gaming Backend ===" in out
        assert "$2.0k" in out
        assert "$300" in out
        assert "(15% of spend)" in out
        assert "Critical tables:    1" in out


class TestFormatFleetTable:
    def test_rows_in_given_order(self, make_table):
        tables = [
            make_table(table_name="first-prod-01", waste_score=0.9),
            make_table(table_name="second-prod-02", waste_score=0.5),
        ]
        out = format_fleet_table(tables)
        assert "=== Fleet Tables ===" in out
        assert out.index("first-prod-01") < out.index("second-prod-02")
        assert "[CRITICAL]" in out
        assert "[WARNING]" in out

    def test_top_truncates_with_note(self, make_table):
        tables = [make_table(table_name=f"t-prod-{i:02d}") for i in range(1, 6)]
        out = format_fleet_table(tables, top=2)
        assert "t-prod-02" in out
        assert "t-prod-03" not in out
        assert "... and 3 more table(s)." in out

    def test_top_larger_than_fleet_has_no_note(self, make_table):
        out = format_fleet_table([make_table()], top=5)
        assert "more table(s)" not in out

    def test_empty(self):
        assert "(no tables)" in format_fleet_table([])


class TestFormatRecommendations:
    def test_marks_primary_action(self, make_table):
        table = make_table(
            table_name="orders-prod-07",
            traffic_pattern=TrafficPattern.SPIKY,
            utilization_percent=10,
            consumed_rcu=100,
            consumed_wcu=20,
            monthly_spend=1000,
            savings_potential=900,
        )
        rec = build_recommendation(table)
        out = format_recommendations([rec])

        assert "=== Optimization Recommendations ===" in out
        assert "1. orders-prod-07" in out
        primary_line = next(line for line in out.splitlines() if "<- primary" in line)
        assert "Right-size Capacity" in primary_line
        assert "Switch to On-Demand" in out
        assert "Only 10% utilization - reduce provisioned capacity" in out

    def test_empty(self):
        assert "(no actionable tables found)" in format_recommendations([])
