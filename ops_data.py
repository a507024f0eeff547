"""
Static operations data behind the Intelligence Engine dashboards.

Nothing here talks to a live WES/WCS yet: the frames are fixed samples, and
the helpers derive the summary figures each dashboard shows.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

HIGH_UTILIZATION = 90  # zone utilization (%) flagged as high
PRIORITY_ORDER = ["critical", "high", "medium", "low"]
SUBSYSTEMS = ["WES", "WCS", "PLC"]
LOG_SEVERITIES = ["error", "warning", "info"]


# =================================================
# COMMAND CENTER
# =================================================

def kpis() -> pd.DataFrame:
    return pd.DataFrame([
        {"title": "Orders Processed Today", "value": "1,247", "subtitle": "Target: 1,200", "trend": "+3.9% vs plan"},
        {"title": "Lines Processed", "value": "8,934", "subtitle": "Avg: 7.2 lines/order", "trend": "+5.2% vs plan"},
        {"title": "Units Shipped", "value": "12,456", "subtitle": "Last hour: 523 units", "trend": "+2.1% vs plan"},
        {"title": "SLA Adherence", "value": "98.2%", "subtitle": "Target: 97.0%", "trend": "+1.2% vs plan"},
    ])


def wip_by_stage() -> pd.DataFrame:
    df = pd.DataFrame({
        "stage": ["Picking", "Packing", "Shipping"],
        "wip": [234, 156, 89],
        "capacity": [300, 200, 150],
    })
    df["pct"] = (df["wip"] / df["capacity"] * 100).round(1)
    return df


def flow_status() -> pd.DataFrame:
    return pd.DataFrame({
        "area": ["Receiving", "Putaway", "Picking Zone A", "Packing", "Shipping"],
        "status": ["normal", "normal", "bottleneck", "normal", "normal"],
        "throughput": ["125 units/hr", "118 units/hr", "89 units/hr", "142 units/hr", "156 units/hr"],
    })


def bottlenecks(flow: pd.DataFrame) -> list[str]:
    return flow.loc[flow["status"] == "bottleneck", "area"].tolist()


def actual_vs_plan() -> pd.DataFrame:
    df = pd.DataFrame({
        "metric": ["Orders", "Lines", "Units"],
        "actual": [1247, 8934, 12456],
        "plan": [1200, 8500, 12000],
        "unit": ["orders", "lines", "units"],
    })
    df["pct_of_plan"] = (df["actual"] / df["plan"] * 100).round(1)
    df["delta"] = df["actual"] - df["plan"]
    df["above_plan"] = df["actual"] >= df["plan"]
    # progress bars stop at 100%
    df["progress"] = df["pct_of_plan"].clip(upper=100)
    return df


# =================================================
# EQUIPMENT
# =================================================

def equipment() -> pd.DataFrame:
    rows = [
        ("SH-001", "Shuttle System", 87, 2.3, "operational", 342, 3),
        ("SH-002", "Shuttle System", 92, 2.1, "operational", 389, 1),
        ("SH-003", "Shuttle System", 45, 4.2, "degraded", 156, 12),
        ("SH-004", "Shuttle System", 89, 2.2, "operational", 365, 2),
        ("SH-005", "Shuttle System", 94, 2.0, "operational", 398, 0),
        ("SH-006", "Shuttle System", 78, 2.5, "operational", 312, 4),
        ("AMR-01", "AMR", 82, 3.2, "operational", 234, 0),
        ("AMR-02", "AMR", 0, np.nan, "offline", 0, 0),
        ("AMR-03", "AMR", 88, 3.0, "operational", 267, 1),
        ("AMR-04", "AMR", 75, 3.5, "operational", 198, 2),
        ("AMR-05", "AMR", 91, 2.9, "operational", 289, 0),
        ("AMR-06", "AMR", 68, 3.8, "operational", 178, 3),
        ("ASRS-01", "AS/RS", 91, 2.8, "operational", 298, 2),
        ("PA-01", "Print & Apply", 76, 1.5, "operational", 445, 1),
    ]
    return pd.DataFrame(rows, columns=[
        "id", "type", "utilization", "cycle_time_s", "status", "throughput_per_hr", "queue_length",
    ])


def equipment_summary(df: pd.DataFrame) -> dict:
    """Fleet figures; average utilization only counts units that are not offline."""
    online = df[df["status"] != "offline"]
    return {
        "total": len(df),
        "operational": int((df["status"] == "operational").sum()),
        "avg_utilization": int(round(online["utilization"].mean())) if len(online) else 0,
        "total_throughput": int(df["throughput_per_hr"].sum()),
        "needs_attention": int((df["status"] != "operational").sum()),
    }


def equipment_status_counts(df: pd.DataFrame) -> pd.DataFrame:
    return df["status"].value_counts().rename_axis("status").reset_index(name="count")


# =================================================
# WORKFORCE
# =================================================

def workforce_activities() -> pd.DataFrame:
    df = pd.DataFrame([
        ("Picking", 342, 320, 94, "2.3 min", 12, 28.5, 99.2),
        ("Packing", 289, 280, 98, "1.8 min", 8, 36.1, 99.8),
        ("Replenishment", 156, 150, 96, "3.2 min", 4, 39.0, 98.5),
        ("Decanting", 124, 120, 97, "2.5 min", 3, 41.3, 99.1),
        ("Induction", 198, 190, 95, "1.5 min", 5, 39.6, 99.5),
        ("Exception Handling", 23, 25, 92, "8.5 min", 2, 11.5, 100.0),
    ], columns=["activity", "throughput", "target", "efficiency", "cycle_time", "workers", "uph", "accuracy"])
    df["vs_target"] = df["throughput"] - df["target"]
    df["on_target"] = df["throughput"] >= df["target"]
    return df


def workforce_stations() -> pd.DataFrame:
    return pd.DataFrame([
        ("P-001", "Zone A", 45, 92, 28.5, "active"),
        ("P-002", "Zone A", 38, 88, 25.3, "active"),
        ("P-003", "Zone B", 42, 95, 30.1, "active"),
        ("PK-001", "Packing", 52, 98, 36.2, "active"),
        ("PK-002", "Packing", 48, 96, 35.8, "active"),
        ("REP-001", "Replenishment", 39, 94, 39.0, "active"),
    ], columns=["station", "zone", "throughput", "efficiency", "uph", "status"])


# =================================================
# INVENTORY & STORAGE
# =================================================

def zones() -> pd.DataFrame:
    df = pd.DataFrame([
        ("Zone A", 1245, 45678, 87, "AS/RS Storage"),
        ("Zone B", 892, 32145, 72, "AS/RS Storage"),
        ("Zone C", 1567, 52341, 94, "AS/RS Storage"),
        ("Buffer Zone", 234, 8923, 65, "Buffer"),
        ("Decant Area", 156, 3456, 58, "Decant"),
    ], columns=["zone", "skus", "units", "utilization", "type"])
    df["status"] = zone_status(df["utilization"])
    return df


def zone_status(utilization: pd.Series) -> np.ndarray:
    return np.where(utilization >= HIGH_UTILIZATION, "high", "normal")


def replenishment_queue() -> pd.DataFrame:
    """Open replenishment tasks, most urgent first."""
    df = pd.DataFrame([
        ("A-12-34", "SKU-12345", 45, 100, "high"),
        ("B-23-45", "SKU-23456", 12, 50, "critical"),
        ("C-34-56", "SKU-34567", 8, 30, "critical"),
    ], columns=["location", "sku", "current", "target", "priority"])
    df["fill_pct"] = (df["current"] / df["target"] * 100).round(0).astype(int)
    rank = np.select(
        [df["priority"] == p for p in PRIORITY_ORDER],
        list(range(len(PRIORITY_ORDER))),
        default=len(PRIORITY_ORDER),
    )
    return df.assign(_rank=rank).sort_values(["_rank", "fill_pct"]).drop(columns="_rank").reset_index(drop=True)


def inventory_summary(zone_df: pd.DataFrame, queue: pd.DataFrame) -> dict:
    return {
        "total_skus": int(zone_df["skus"].sum()),
        "total_units": int(zone_df["units"].sum()),
        "avg_utilization": int(round(zone_df["utilization"].mean())) if len(zone_df) else 0,
        "replenishment_needs": len(queue),
    }


# =================================================
# ALERTS & LOGS
# =================================================

def alerts() -> pd.DataFrame:
    return pd.DataFrame([
        ("ALT-001", "Routing Error", "high", "Conveyor CV-001", "Tote blocked at junction J-12", "2 min ago", "active"),
        ("ALT-002", "Device Fault", "critical", "Shuttle SH-003", "Motor temperature exceeded threshold", "15 min ago", "active"),
        ("ALT-003", "Short Pick", "medium", "Picking Zone A", "SKU-12345 not found at location", "8 min ago", "resolved"),
        ("ALT-004", "Workflow Interruption", "medium", "Packing Station PK-002", "Scan failed - manual review required", "5 min ago", "active"),
        ("ALT-005", "System Warning", "low", "Database", "Query response time elevated", "1 hour ago", "active"),
        ("ALT-006", "Queue Delay", "medium", "Shipping Dock", "Queue length exceeded threshold (45 totes)", "12 min ago", "active"),
    ], columns=["id", "type", "severity", "source", "message", "time", "status"])


def alert_summary(df: pd.DataFrame) -> dict:
    active = df[df["status"] == "active"]
    total = len(df)
    return {
        "critical": int(active["severity"].isin(["critical", "high"]).sum()),
        "active": len(active),
        "resolved": int((df["status"] == "resolved").sum()),
        "resolution_rate": int(round((total - len(active)) / total * 100)) if total else 0,
    }


def active_alerts_by_severity(df: pd.DataFrame) -> pd.DataFrame:
    active = df[df["status"] == "active"]
    counts = active["severity"].value_counts().reindex(PRIORITY_ORDER, fill_value=0)
    return counts.rename_axis("severity").reset_index(name="count")


_LOG_ROWS = [
    ("14:23:45.123", "WES", "info", "ORD-12345", "TOTE-001", "SH-001", "Order ORD-12345 assigned to tote TOTE-001"),
    ("14:23:46.234", "WCS", "info", None, "TOTE-001", "SH-001", "Tote TOTE-001 retrieved by shuttle SH-001"),
    ("14:23:47.345", "PLC", "warning", None, "TOTE-001", "CV-001", "Conveyor CV-001 queue length exceeded threshold (15 totes)"),
    ("14:23:48.456", "WES", "error", "ORD-12346", "TOTE-002", None, "Routing error: Tote TOTE-002 blocked at junction J-12"),
    ("14:23:49.567", "WCS", "info", None, "TOTE-003", "AMR-01", "AMR-01 completed putaway task for tote TOTE-003"),
    ("14:23:50.678", "WES", "info", "ORD-12347", None, None, "Order ORD-12347 completed and released for shipping"),
    ("14:23:51.789", "WES", "info", "ORD-12348", "TOTE-004", "SH-002", "Order ORD-12348 assigned to tote TOTE-004"),
    ("14:23:52.890", "WCS", "info", None, "TOTE-004", "SH-002", "Shuttle SH-002 moving tote TOTE-004 to picking zone"),
    ("14:23:53.901", "WES", "info", "ORD-12349", "TOTE-005", "SH-003", "Order ORD-12349 assigned to tote TOTE-005"),
    ("14:23:54.012", "PLC", "warning", None, "TOTE-005", "SH-003", "Shuttle SH-003 cycle time elevated (4.2s vs target 2.5s)"),
    ("14:23:55.123", "WCS", "info", None, "TOTE-006", "AMR-03", "AMR-03 started retrieval task for tote TOTE-006"),
    ("14:23:56.234", "WES", "info", "ORD-12350", "TOTE-007", "SH-004", "Order ORD-12350 assigned to tote TOTE-007"),
    ("14:23:57.345", "WCS", "info", None, "TOTE-007", "SH-004", "Shuttle SH-004 completed cycle for tote TOTE-007"),
    ("14:23:58.456", "WES", "error", "ORD-12351", "TOTE-008", None, "Short pick detected: SKU-12345 not found at location A-12-34"),
    ("14:23:59.567", "WCS", "info", None, "TOTE-009", "AMR-04", "AMR-04 navigating to location B-23-45"),
    ("14:24:00.678", "WES", "info", "ORD-12352", "TOTE-010", "SH-005", "Order ORD-12352 assigned to tote TOTE-010"),
    ("14:24:01.789", "PLC", "info", None, "TOTE-010", "SH-005", "Shuttle SH-005 utilization at 94%"),
    ("14:24:02.890", "WCS", "info", None, "TOTE-011", "ASRS-01", "AS/RS ASRS-01 storing tote TOTE-011 in location C-34-56"),
    ("14:24:03.901", "WES", "info", "ORD-12353", "TOTE-012", "SH-006", "Order ORD-12353 assigned to tote TOTE-012"),
    ("14:24:04.012", "WCS", "warning", None, "TOTE-012", "SH-006", "Shuttle SH-006 queue length at 4 (approaching threshold)"),
    ("14:24:05.123", "WES", "info", "ORD-12354", "TOTE-013", "AMR-05", "Order ORD-12354 assigned to tote TOTE-013"),
    ("14:24:06.234", "WCS", "info", None, "TOTE-013", "AMR-05", "AMR-05 completed pick task for tote TOTE-013"),
    ("14:24:07.345", "PLC", "error", None, "TOTE-014", "SH-003", "Shuttle SH-003 motor temperature exceeded threshold (85°C)"),
    ("14:24:08.456", "WES", "info", "ORD-12355", "TOTE-015", "SH-001", "Order ORD-12355 assigned to tote TOTE-015"),
    ("14:24:09.567", "WCS", "info", None, "TOTE-015", "SH-001", "Shuttle SH-001 retrieved tote TOTE-015 from storage"),
    ("14:24:10.678", "WES", "info", "ORD-12356", "TOTE-016", "AMR-06", "Order ORD-12356 assigned to tote TOTE-016"),
    ("14:24:11.789", "WCS", "info", None, "TOTE-016", "AMR-06", "AMR-06 moving tote TOTE-016 to packing station"),
    ("14:24:12.890", "WES", "info", "ORD-12357", "TOTE-017", "SH-002", "Order ORD-12357 assigned to tote TOTE-017"),
    ("14:24:13.901", "PLC", "info", None, "TOTE-017", "PA-01", "Print & Apply PA-01 labeled tote TOTE-017"),
    ("14:24:14.012", "WES", "info", "ORD-12358", "TOTE-018", "SH-004", "Order ORD-12358 assigned to tote TOTE-018"),
    ("14:24:15.123", "WCS", "info", None, "TOTE-018", "SH-004", "Shuttle SH-004 delivered tote TOTE-018 to picking zone A"),
    ("14:24:16.234", "WES", "info", "ORD-12359", "TOTE-019", "AMR-01", "Order ORD-12359 assigned to tote TOTE-019"),
    ("14:24:17.345", "WCS", "info", None, "TOTE-019", "AMR-01", "AMR-01 completed putaway for tote TOTE-019"),
    ("14:24:18.456", "WES", "info", "ORD-12360", "TOTE-020", "SH-005", "Order ORD-12360 assigned to tote TOTE-020"),
    ("14:24:19.567", "WCS", "warning", None, "TOTE-020", "SH-005", "Shuttle SH-005 queue length at 0 (optimal)"),
    ("14:24:20.678", "WES", "info", "ORD-12361", None, None, "Order ORD-12361 completed and released for shipping"),
    ("14:24:21.789", "WCS", "info", None, "TOTE-021", "ASRS-01", "AS/RS ASRS-01 retrieving tote TOTE-021 from location D-45-67"),
    ("14:24:22.890", "WES", "info", "ORD-12362", "TOTE-022", "SH-006", "Order ORD-12362 assigned to tote TOTE-022"),
    ("14:24:23.901", "PLC", "info", None, "TOTE-022", "SH-006", "Shuttle SH-006 cycle time: 2.5s (within target)"),
    ("14:24:24.012", "WCS", "info", None, "TOTE-023", "AMR-03", "AMR-03 completed retrieval task for tote TOTE-023"),
    ("14:24:25.123", "WES", "info", "ORD-12363", "TOTE-024", "SH-001", "Order ORD-12363 assigned to tote TOTE-024"),
    ("14:24:26.234", "WCS", "info", None, "TOTE-024", "SH-001", "Shuttle SH-001 moving tote TOTE-024 to packing zone"),
    ("14:24:27.345", "WES", "error", "ORD-12364", "TOTE-025", None, "Scan failed for order ORD-12364 - manual review required"),
    ("14:24:28.456", "WCS", "info", None, "TOTE-025", "AMR-04", "AMR-04 assigned to handle exception for tote TOTE-025"),
    ("14:24:29.567", "WES", "info", "ORD-12365", "TOTE-026", "SH-002", "Order ORD-12365 assigned to tote TOTE-026"),
    ("14:24:30.678", "PLC", "warning", None, "TOTE-026", "SH-002", "Shuttle SH-002 utilization at 92% (high)"),
    ("14:24:31.789", "WCS", "info", None, "TOTE-027", "AMR-05", "AMR-05 started putaway task for tote TOTE-027"),
    ("14:24:32.890", "WES", "info", "ORD-12366", "TOTE-028", "SH-003", "Order ORD-12366 assigned to tote TOTE-028"),
    ("14:24:33.901", "WCS", "info", None, "TOTE-028", "SH-003", "Shuttle SH-003 status: degraded - reduced throughput"),
    ("14:24:34.012", "WES", "info", "ORD-12367", None, None, "Order ORD-12367 completed and released for shipping"),
    ("14:24:35.123", "WCS", "info", None, "TOTE-029", "ASRS-01", "AS/RS ASRS-01 storing tote TOTE-029 in location E-56-78"),
    ("14:24:36.234", "WES", "info", "ORD-12368", "TOTE-030", "SH-004", "Order ORD-12368 assigned to tote TOTE-030"),
    ("14:24:37.345", "PLC", "info", None, "TOTE-030", "SH-004", "Shuttle SH-004 cycle completed successfully"),
]


def event_logs() -> pd.DataFrame:
    df = pd.DataFrame(_LOG_ROWS, columns=[
        "time", "subsystem", "severity", "order_id", "tote_id", "device_id", "message",
    ])
    df.insert(0, "timestamp", "2024-01-15 " + df.pop("time"))
    return df


def filter_logs(
    df: pd.DataFrame,
    search: str = "",
    subsystem: str = "all",
    severity: str = "all",
) -> pd.DataFrame:
    """
    Case-insensitive search over message, order, tote and device ids, plus
    exact subsystem / severity filters where "all" matches everything.
    """
    mask = pd.Series(True, index=df.index)
    needle = (search or "").strip().lower()
    if needle:
        hit = pd.Series(False, index=df.index)
        for col in ("message", "order_id", "tote_id", "device_id"):
            hit |= df[col].fillna("").str.lower().str.contains(needle, regex=False)
        mask &= hit
    if subsystem and subsystem != "all":
        mask &= df["subsystem"] == subsystem
    if severity and severity != "all":
        mask &= df["severity"] == severity
    return df[mask]


# =================================================
# AI INSIGHTS
# =================================================

def predictions() -> pd.DataFrame:
    return pd.DataFrame([
        ("Equipment Failure", "SH-003", "Motor temperature trending upward", "high", "4-6 hours", "Schedule preventive maintenance"),
        ("SLA Risk", "ORD-12345", "Order at risk of missing SLA", "medium", "2 hours", "Prioritize order processing"),
        ("Bottleneck", "Picking Zone A", "Queue length expected to exceed threshold", "medium", "1 hour", "Reallocate labor resources"),
    ], columns=["type", "subject", "prediction", "risk", "timeframe", "action"])


def recommendations() -> pd.DataFrame:
    return pd.DataFrame([
        ("Labor", "Reallocate 2 workers from Zone B to Zone A to address bottleneck", "high", "+15% throughput"),
        ("Routing", "Optimize tote routing to reduce junction J-12 congestion", "medium", "+8% efficiency"),
        ("Replenishment", "Advance replenishment for SKU-12345 to prevent stockout", "high", "Prevent 3-hour downtime"),
    ], columns=["category", "suggestion", "impact", "estimated_improvement"])


def anomalies() -> pd.DataFrame:
    return pd.DataFrame([
        ("Anomaly Detected", "Unusual spike in cycle time for SH-003", "15 min ago", "medium"),
        ("Pattern Change", "Throughput in Zone A decreased 20% vs. historical average", "1 hour ago", "low"),
    ], columns=["type", "description", "detected", "severity"])
