# ops_dashboards.py
"""Intelligence Engine pages: one render function per /ops route."""

from __future__ import annotations

from typing import Callable

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

import ops_data
from constants import ICON_COLORS, PRIMARY, STATUS_COLORS, SUCCESS, TEXT
from theme import page_header

CHART_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": TEXT},
    margin=dict(l=10, r=10, t=40, b=10),
    height=340,
)


def _header(title: str, icon: str, color_key: str, subtitle: str) -> None:
    st.markdown(
        page_header(f"{icon} {title}", subtitle),
        unsafe_allow_html=True,
    )
    st.markdown(
        f"<div style='height:4px;background:{ICON_COLORS[color_key]};border-radius:2px;margin:-0.8rem 0 1rem'></div>",
        unsafe_allow_html=True,
    )


def _show(fig: go.Figure) -> None:
    fig.update_layout(**CHART_LAYOUT)
    st.plotly_chart(fig, use_container_width=True)


# =================================================
# COMMAND CENTER
# =================================================

def render_command_center() -> None:
    _header("Command Center", "🎛️", "command_center", "Real-time operational overview")

    cols = st.columns(4)
    for col, (_, kpi) in zip(cols, ops_data.kpis().iterrows()):
        with col:
            st.metric(kpi["title"], kpi["value"], delta=kpi["trend"])
            st.caption(kpi["subtitle"])

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("### Work in Progress")
        wip = ops_data.wip_by_stage()
        fig = px.bar(
            wip, x="pct", y="stage", orientation="h",
            text=wip["wip"].astype(str) + " / " + wip["capacity"].astype(str),
            range_x=[0, 100], color_discrete_sequence=[PRIMARY],
        )
        fig.update_traces(textposition="inside")
        fig.update_layout(xaxis_title="% of capacity", yaxis_title="")
        _show(fig)

    with col2:
        st.markdown("### Current Flow Status & Bottlenecks")
        flow = ops_data.flow_status()
        st.dataframe(flow, use_container_width=True, hide_index=True)
        blocked = ops_data.bottlenecks(flow)
        if blocked:
            st.warning(f"Bottleneck: {', '.join(blocked)}")

    st.markdown("---")
    st.markdown("### Today's Performance vs. Plan")
    plan = ops_data.actual_vs_plan()
    cols = st.columns(len(plan))
    for col, (_, row) in zip(cols, plan.iterrows()):
        with col:
            sign = "+" if row["above_plan"] else ""
            st.metric(
                row["metric"],
                f"{row['actual']:,}",
                delta=f"{sign}{row['delta']:,} {row['unit']}",
            )
            st.progress(int(row["progress"]), text=f"{row['pct_of_plan']}% of plan ({row['plan']:,})")


# =================================================
# EQUIPMENT
# =================================================

def render_equipment_performance() -> None:
    _header("Equipment Performance", "🤖", "equipment_performance", "Cycle times, queue lengths and throughput per unit")

    df = ops_data.equipment()
    summary = ops_data.equipment_summary(df)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Equipment", summary["total"], delta=f"{summary['operational']} operational")
    c2.metric("Avg Utilization", f"{summary['avg_utilization']}%")
    c3.metric("Total Throughput", f"{summary['total_throughput']:,}/hr")
    c4.metric("Needs Attention", summary["needs_attention"], delta_color="inverse",
              delta="degraded or offline" if summary["needs_attention"] else None)

    col1, col2 = st.columns([2, 1])
    with col1:
        fig = px.bar(
            df, x="id", y="utilization", color="status",
            color_discrete_map=STATUS_COLORS, title="Utilization by unit (%)",
        )
        _show(fig)
    with col2:
        counts = ops_data.equipment_status_counts(df)
        fig = px.pie(counts, names="status", values="count", color="status",
                     color_discrete_map=STATUS_COLORS, hole=0.5, title="Status")
        _show(fig)

    st.dataframe(
        df.rename(columns={
            "id": "Unit", "type": "Type", "utilization": "Utilization %",
            "cycle_time_s": "Cycle Time (s)", "status": "Status",
            "throughput_per_hr": "Throughput/hr", "queue_length": "Queue",
        }),
        use_container_width=True, hide_index=True,
    )


# =================================================
# WORKFORCE
# =================================================

def render_workforce_performance() -> None:
    _header("Workforce Performance", "⏱️", "workforce_performance", "Labor throughput against target")

    activities = ops_data.workforce_activities()
    c1, c2, c3 = st.columns(3)
    c1.metric("Active Workers", int(activities["workers"].sum()))
    c2.metric("Avg Efficiency", f"{activities['efficiency'].mean():.1f}%")
    c3.metric("Activities On Target", f"{int(activities['on_target'].sum())} / {len(activities)}")

    fig = go.Figure()
    fig.add_bar(x=activities["activity"], y=activities["throughput"], name="Actual", marker_color=PRIMARY)
    fig.add_scatter(x=activities["activity"], y=activities["target"], name="Target",
                    mode="markers", marker=dict(color=SUCCESS, size=12, symbol="line-ew-open"))
    fig.update_layout(title="Throughput vs target")
    _show(fig)

    st.markdown("### Activities")
    st.dataframe(activities.drop(columns="on_target"), use_container_width=True, hide_index=True)
    st.markdown("### Stations")
    st.dataframe(ops_data.workforce_stations(), use_container_width=True, hide_index=True)


# =================================================
# INVENTORY & STORAGE
# =================================================

def render_inventory_storage() -> None:
    _header("Inventory & Storage", "📦", "inventory_storage", "Storage utilization and replenishment")

    zone_df = ops_data.zones()
    queue = ops_data.replenishment_queue()
    summary = ops_data.inventory_summary(zone_df, queue)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total SKUs", f"{summary['total_skus']:,}")
    c2.metric("Total Units", f"{summary['total_units']:,}")
    c3.metric("Avg Utilization", f"{summary['avg_utilization']}%")
    c4.metric("Replenishment Needs", summary["replenishment_needs"])

    fig = px.bar(
        zone_df, x="zone", y="utilization", color="status",
        color_discrete_map=STATUS_COLORS, text="utilization",
        title=f"Zone utilization (high at {ops_data.HIGH_UTILIZATION}%+)",
    )
    fig.add_hline(y=ops_data.HIGH_UTILIZATION, line_dash="dash", line_color=STATUS_COLORS["high"])
    _show(fig)

    st.markdown("### Replenishment queue")
    st.dataframe(queue, use_container_width=True, hide_index=True)


# =================================================
# ALERTS & LOGS
# =================================================

def render_alerts_diagnostics() -> None:
    _header("Alerts & Diagnostics", "⚠️", "alerts_diagnostics", "Active alerts and device faults")

    df = ops_data.alerts()
    summary = ops_data.alert_summary(df)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Critical / High", summary["critical"])
    c2.metric("Active Alerts", summary["active"])
    c3.metric("Resolved", summary["resolved"])
    c4.metric("Resolution Rate", f"{summary['resolution_rate']}%")

    col1, col2 = st.columns([1, 2])
    with col1:
        by_sev = ops_data.active_alerts_by_severity(df)
        fig = px.bar(by_sev, x="severity", y="count", color="severity",
                     color_discrete_map=STATUS_COLORS, title="Active by severity")
        fig.update_layout(showlegend=False)
        _show(fig)
    with col2:
        show_resolved = st.toggle("Show resolved", value=False)
        view = df if show_resolved else df[df["status"] == "active"]
        st.dataframe(view, use_container_width=True, hide_index=True)


def render_log_viewer() -> None:
    _header("Log Viewer", "📄", "log_viewer", "WES, WCS and PLC event stream")

    logs = ops_data.event_logs()
    c1, c2, c3 = st.columns([2, 1, 1])
    with c1:
        search = st.text_input("Search", placeholder="Message, order, tote or device id")
    with c2:
        subsystem = st.selectbox("Subsystem", ["all"] + ops_data.SUBSYSTEMS,
                                 format_func=lambda s: "All Subsystems" if s == "all" else s)
    with c3:
        severity = st.selectbox("Severity", ["all"] + ops_data.LOG_SEVERITIES,
                                format_func=lambda s: "All Severities" if s == "all" else s.title())

    filtered = ops_data.filter_logs(logs, search, subsystem, severity)
    st.caption(f"Showing {len(filtered)} of {len(logs)} events")
    st.dataframe(filtered, use_container_width=True, hide_index=True)


# =================================================
# AI INSIGHTS
# =================================================

def _insight_table(title: str, df: pd.DataFrame) -> None:
    st.markdown(f"### {title}")
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_ai_insights() -> None:
    _header("AI Insights", "🧠", "ai_insights", "Predictions, recommendations and anomalies")

    _insight_table("Predictions", ops_data.predictions())
    _insight_table("Optimization recommendations", ops_data.recommendations())
    _insight_table("Anomalies", ops_data.anomalies())


DASHBOARDS: dict[str, Callable[[], None]] = {
    "/ops/command-center": render_command_center,
    "/ops/equipment-performance": render_equipment_performance,
    "/ops/workforce-performance": render_workforce_performance,
    "/ops/inventory-storage": render_inventory_storage,
    "/ops/alerts-diagnostics": render_alerts_diagnostics,
    "/ops/log-viewer": render_log_viewer,
    "/ops/ai-insights": render_ai_insights,
}
