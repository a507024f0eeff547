# constants.py
APP_TITLE = "The Machine"
APP_TAGLINE = "Warehouse design and operations intelligence"
# Brand palette
PRIMARY = "#1E879E"       # teal
PRIMARY_HOVER = "#166273" # deep sea
ACCENT = "#FFA51F"        # orange
DANGER = "#B42318"
SUCCESS = "#027A48"
TEXT = "#1B1B1B"          # dark grey 500
TEXT_MUTED = "#555555"    # dark grey 300
BORDER = "#D3DCE2"        # light grey 500
SURFACE = "#FFFFFF"
SURFACE_ALT = "#F3F7F8"   # cool 1
RING = "#81BCC8"          # teal 200
# Sidebar / page icon colors
ICON_COLORS = {
    "data_invalidator": "#B42318",
    "data_synthesis": "#155969",
    "layout_manager": "#555555",
    "modeling": "#BDD9F2",
    "labor_calculator": "#186C7E",
    "capital_expenses": "#027A48",
    "route_distance_calculator": "#E5941C",
    "command_center": "#1E879E",
    "equipment_performance": "#4CAF50",
    "workforce_performance": "#2196F3",
    "inventory_storage": "#C19A6B",
    "alerts_diagnostics": "#FF9800",
    "log_viewer": "#607D8B",
    "ai_insights": "#9C27B0",
}
# Plotly status colors
STATUS_COLORS = {
    "operational": SUCCESS,
    "normal": SUCCESS,
    "active": DANGER,
    "resolved": SUCCESS,
    "degraded": ACCENT,
    "bottleneck": ACCENT,
    "high": ACCENT,
    "offline": DANGER,
    "critical": DANGER,
    "medium": "#F5C15B",
    "low": PRIMARY,
    "error": DANGER,
    "warning": ACCENT,
    "info": PRIMARY,
}
# === Route distance REST API ===
ROUTE_DISTANCE_PREFIX = "/api/route-distance"
UPLOAD_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/upload"
PROCESS_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/process"
TASK_STATUS_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/task-status"
DOWNLOAD_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/download"
RETRY_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/retry"
DATABASE_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/database"
DATABASE_DELETE_ENDPOINT = f"{ROUTE_DISTANCE_PREFIX}/database/delete"
# Upload picker
ACCEPTED_UPLOAD_TYPES = ["csv", "xlsx", "xls"]
POLL_INTERVAL_SECONDS = 2.0
DEFAULT_HUB_STORAGE_KEY = "the-machine-default-hub"
WORKFLOW_STEPS = ["Upload File", "Map Fields", "Process", "Complete"]
