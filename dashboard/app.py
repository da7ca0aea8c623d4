"""
DynamoDB Fleet Cost Optimizer — Streamlit Dashboard
===================================================

Optional local UI over the Python API. Every profile selection generates a
fresh fleet in-process; nothing is read from or written to disk.

Why optional?
-------------
- Streamlit adds ~100 MB of dependencies not needed for headless runs.
- Everything shown here is also available via the ``fleet-optimizer`` CLI.

App structure (3 tabs)
----------------------
  1. Fleet           — Every table, sortable, colour-tagged by waste category.
  2. Recommendations — Top-N tables by savings with their action breakdown.
  3. Assistant       — Chat with the fleet assistant about the current fleet.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import logging

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="DynamoDB Fleet Optimizer",
    page_icon="🗄️",
    layout="wide",
    initial_sidebar_state="expanded",
)

import pandas as pd

from fleet_optimizer.analysis.stats import compute_fleet_stats
from fleet_optimizer.assistant.client import AssistantClient
from fleet_optimizer.assistant.context import FleetContext, fleet_greeting
from fleet_optimizer.config import AppConfig, load_config
from fleet_optimizer.recommendations.engine import generate_recommendations
from fleet_optimizer.reporting.export import flatten_tables_for_export
from fleet_optimizer.reporting.formatters import (
    format_currency,
    priority_color,
    waste_category,
)
from fleet_optimizer.simulation.generator import generate_fleet
from fleet_optimizer.simulation.profiles import PROFILES
from fleet_optimizer.utils.logging import configure_logging, fleet_extra

logger = logging.getLogger(__name__)

_CATEGORY_COLOURS = {
    "critical": "#f8d7da",
    "warning":  "#fff3cd",
    "good":     "#d4edda",
}
_PRIORITY_BADGES = {
    "critical": ":red",
    "warning":  ":orange",
    "good":     ":green",
    "info":     ":blue",
}


@st.cache_resource
def _config() -> AppConfig:
    try:
        config = load_config()
    except FileNotFoundError:
        config = AppConfig()
    configure_logging(config.logging)
    return config


config = _config()


def _select_profile(profile_id: str) -> None:
    """Replace the fleet wholesale and restart the chat with a greeting for it."""
    tables = generate_fleet(profile_id)
    st.session_state.profile = profile_id
    st.session_state.tables = tables
    st.session_state.stats = compute_fleet_stats(tables)
    st.session_state.recommendations = generate_recommendations(
        tables, config.recommendations.limit
    )
    st.session_state.messages = [
        {"role": "assistant", "content": fleet_greeting(profile_id, tables)}
    ]
    logger.info("Dashboard fleet regenerated", extra=fleet_extra(profile_id))


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("DynamoDB Fleet Optimizer")
    st.caption("Simulated fleet — no live AWS access")
    st.divider()

    for profile in PROFILES.values():
        if st.button(
            f"{profile.icon} {profile.name}",
            help=profile.description,
            use_container_width=True,
        ):
            _select_profile(profile.profile_id)

    if "profile" in st.session_state:
        st.divider()
        if st.button("Regenerate fleet", help="Draw a new fleet for the same profile."):
            _select_profile(st.session_state.profile)


if "tables" not in st.session_state:
    st.info("Pick a fleet profile in the sidebar to generate a simulated fleet.")
    st.stop()

tables = st.session_state.tables
stats = st.session_state.stats
recommendations = st.session_state.recommendations
active = PROFILES[st.session_state.profile]


# ── Stat cards ────────────────────────────────────────────────────────────────

st.header(f"{active.icon} {active.name}")
c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Tables", stats.total_tables)
c2.metric("Monthly spend", format_currency(stats.total_monthly_spend))
c3.metric(
    "Savings potential",
    format_currency(stats.total_savings_potential),
    f"{stats.savings_percentage}% of spend",
    delta_color="off",
)
c4.metric("Critical tables", stats.critical_tables)
c5.metric("Avg utilization", f"{stats.avg_utilization}%", f"{stats.unused_gsi_count} unused GSIs",
          delta_color="off")

tab_fleet, tab_recs, tab_chat = st.tabs(["Fleet", "Recommendations", "Assistant"])


# ══════════════════════════════════════════════════════════════════════════════
# Tab 1 — Fleet
# ══════════════════════════════════════════════════════════════════════════════

with tab_fleet:
    df = pd.DataFrame(flatten_tables_for_export(tables))
    columns = [
        "table_name", "region", "environment", "capacity_mode", "traffic_pattern",
        "utilization_percent", "gsi_count", "unused_gsis", "monthly_spend",
        "savings_potential", "waste_score", "waste_category",
    ]
    df = df[columns]

    sort_col = st.selectbox("Sort by", options=columns, index=columns.index("waste_score"))
    descending = st.toggle("Descending", value=True)
    df = df.sort_values(sort_col, ascending=not descending, kind="stable")

    def _row_style(row: pd.Series) -> list[str]:
        colour = _CATEGORY_COLOURS.get(row["waste_category"], "")
        return [f"background-color: {colour}" if colour else ""] * len(row)

    st.dataframe(df.style.apply(_row_style, axis=1), use_container_width=True, hide_index=True)


# ══════════════════════════════════════════════════════════════════════════════
# Tab 2 — Recommendations
# ══════════════════════════════════════════════════════════════════════════════

with tab_recs:
    if not recommendations:
        st.info("No table in this fleet triggers an optimization action.")

    for rank, rec in enumerate(recommendations, start=1):
        primary = rec.primary_action
        label = (
            f"{rank}. {rec.table_name} — {primary.icon} {primary.title} "
            f"(save {format_currency(rec.total_savings)}/mo)"
        )
        with st.expander(label, expanded=rank <= 3):
            st.caption(
                f"{rec.region.value} · spend {format_currency(rec.current_spend)}/mo · "
                f"waste {rec.waste_score:.2f} ({waste_category(rec.waste_score).value})"
            )
            for action in rec.all_actions:
                badge = _PRIORITY_BADGES[priority_color(action.priority)]
                st.markdown(
                    f"{action.icon} **{action.title}** "
                    f"{badge}[{action.priority.value}] "
                    f"— {format_currency(action.estimated_savings)}/mo  \n"
                    f"{action.description}"
                )


# ══════════════════════════════════════════════════════════════════════════════
# Tab 3 — Assistant
# ══════════════════════════════════════════════════════════════════════════════

with tab_chat:
    for msg in st.session_state.messages:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])

    if prompt := st.chat_input("Ask about this fleet..."):
        st.session_state.messages.append({"role": "user", "content": prompt})
        with st.chat_message("user"):
            st.markdown(prompt)

        context = FleetContext.from_fleet(
            active.profile_id,
            stats,
            recommendations,
            limit=config.recommendations.chat_context_limit,
        )
        with st.chat_message("assistant"):
            with st.spinner("Thinking..."):
                reply = AssistantClient(config.chat).ask(prompt, context)
            st.markdown(reply)
        st.session_state.messages.append({"role": "assistant", "content": reply})
