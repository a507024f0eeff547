"""
Hub definitions and the default-hub preference.

Two engines: the Design Engine (modeling, route distance, facility design
tools) and the Intelligence Engine (warehouse analytics).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from constants import DEFAULT_HUB_STORAGE_KEY
from storage import KeyValueStore

logger = structlog.get_logger(__name__)

DESIGN = "design"
OPS_INTELLIGENCE = "ops_intelligence"


@dataclass(frozen=True)
class Hub:
    id: str
    name: str
    short_name: str
    description: str
    icon: str
    color: str
    home_path: str


HUB_DEFINITIONS: dict[str, Hub] = {
    DESIGN: Hub(
        id=DESIGN,
        name="Design Engine",
        short_name="Design",
        description="Modeling, route distance, and facility design tools",
        icon="🧩",
        color="#BDD9F2",
        home_path="/dashboard",
    ),
    OPS_INTELLIGENCE: Hub(
        id=OPS_INTELLIGENCE,
        name="Intelligence Engine",
        short_name="Intelligence",
        description="Real-time warehouse analytics and operational insights",
        icon="📊",
        color="#4CAF50",
        home_path="/ops/command-center",
    ),
}

DESIGN_PATH_PREFIXES = (
    "/design", "/dashboard", "/route-distance", "/modeling", "/data-invalidator",
    "/data-synthesis", "/capital-expenses", "/labor-calculator", "/layout-manager",
)


def get_hub(hub_id: str) -> Hub:
    return HUB_DEFINITIONS[hub_id]


def all_hubs() -> list[Hub]:
    return list(HUB_DEFINITIONS.values())


def current_hub(path: str) -> Optional[str]:
    """Hub that owns a route path, or None for paths outside both hubs."""
    if path.startswith("/ops"):
        return OPS_INTELLIGENCE
    if path.startswith(DESIGN_PATH_PREFIXES):
        return DESIGN
    return None


class HubPreferences:
    """Reads and stores the user's default hub through a key-value store."""

    def __init__(self, store: KeyValueStore, available: Sequence[str] = (DESIGN, OPS_INTELLIGENCE)):
        self.store = store
        self.available = list(available)

    @property
    def show_switcher(self) -> bool:
        return len(self.available) > 1

    def default_hub(self) -> Optional[str]:
        saved = self.store.get(DEFAULT_HUB_STORAGE_KEY)
        if saved and saved in self.available:
            return saved
        return None

    def set_as_default(self, hub_id: str) -> None:
        if hub_id not in self.available:
            raise ValueError(f"Unknown hub: {hub_id}")
        self.store.set(DEFAULT_HUB_STORAGE_KEY, hub_id)
        logger.info("default_hub_saved", hub=hub_id)

    def switch_target(self, hub_id: str) -> str:
        """Route to navigate to when switching into a hub."""
        return get_hub(hub_id).home_path
