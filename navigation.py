"""
Sidebar menus and route resolution for both hubs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import feature_flags as ff
from constants import ICON_COLORS
from feature_flags import FeatureFlags
from hubs import OPS_INTELLIGENCE
from module_templates import MODELING_MODULES, modeling_module

DEFAULT_ROUTE = "/ops/command-center"
LOGIN_ROUTE = "/login"


@dataclass(frozen=True)
class NavItem:
    text: str
    path: str
    icon: str
    icon_color: str
    coming_soon: bool = False
    feature: Optional[str] = None
    sub_items: tuple["NavItem", ...] = field(default=())

    def is_selected(self, path: str) -> bool:
        return path == self.path or any(sub.path == path for sub in self.sub_items)


DESIGN_MENU: tuple[NavItem, ...] = (
    NavItem("Data Invalidator", "/data-invalidator", "🚫", ICON_COLORS["data_invalidator"],
            coming_soon=True, feature=ff.DATA_INVALIDATOR),
    NavItem("Data Synthesis", "/data-synthesis", "🔀", ICON_COLORS["data_synthesis"],
            coming_soon=True, feature=ff.DATA_SYNTHESIS),
    NavItem("Capital Expenses", "/capital-expenses", "💲", ICON_COLORS["capital_expenses"],
            coming_soon=True, feature=ff.CAPITAL_EXPENSES),
    NavItem("Labor Calculator", "/labor-calculator", "🧮", ICON_COLORS["labor_calculator"],
            coming_soon=True, feature=ff.LABOR_CALCULATOR),
    NavItem("Modeling", "/modeling", "🧩", ICON_COLORS["modeling"],
            coming_soon=True, feature=ff.MODELING,
            sub_items=tuple(
                NavItem(m.name, f"/modeling/{m.slug}", "•", ICON_COLORS["modeling"])
                for m in MODELING_MODULES
            )),
    NavItem("Route Distance Calculator", "/route-distance", "🛣️", ICON_COLORS["route_distance_calculator"]),
    NavItem("Layout Manager", "/layout-manager", "🗺️", ICON_COLORS["layout_manager"],
            coming_soon=True, feature=ff.LAYOUT_MANAGER),
)

OPS_MENU: tuple[NavItem, ...] = (
    NavItem("Command Center", "/ops/command-center", "🎛️", ICON_COLORS["command_center"]),
    NavItem("Equipment Performance", "/ops/equipment-performance", "🤖", ICON_COLORS["equipment_performance"]),
    NavItem("Workforce Performance", "/ops/workforce-performance", "⏱️", ICON_COLORS["workforce_performance"]),
    NavItem("Inventory & Storage", "/ops/inventory-storage", "📦", ICON_COLORS["inventory_storage"]),
    NavItem("Alerts & Diagnostics", "/ops/alerts-diagnostics", "⚠️", ICON_COLORS["alerts_diagnostics"]),
    NavItem("Log Viewer", "/ops/log-viewer", "📄", ICON_COLORS["log_viewer"]),
    NavItem("AI Insights", "/ops/ai-insights", "🧠", ICON_COLORS["ai_insights"]),
)

STATIC_ROUTES = {
    "/dashboard",
    "/data-invalidator",
    "/data-synthesis",
    "/modeling",
    "/labor-calculator",
    "/capital-expenses",
    "/route-distance",
    "/route-distance/database",
} | {item.path for item in OPS_MENU}


def menu_for(hub_id: str, flags: FeatureFlags) -> list[NavItem]:
    """Sidebar items for a hub, with flag-disabled items left out."""
    items = OPS_MENU if hub_id == OPS_INTELLIGENCE else DESIGN_MENU
    return [item for item in items if item.feature is None or flags.is_enabled(item.feature)]


def normalize_path(path: Optional[str]) -> str:
    path = (path or "/").strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def resolve_route(path: Optional[str], flags: FeatureFlags) -> str:
    """
    Map a requested path onto a page that exists.

    Login is not implemented yet, so it forwards to the design hub home.
    Anything unknown lands on the command center.
    """
    path = normalize_path(path)
    if path == LOGIN_ROUTE:
        return "/dashboard"
    if path in STATIC_ROUTES:
        return path
    if path == "/layout-manager" and flags.is_enabled(ff.LAYOUT_MANAGER):
        return path
    if path.startswith("/modeling/") and modeling_module(path[len("/modeling/"):]):
        return path
    return DEFAULT_ROUTE
