"""
Feature flag definitions and lookup.

Features can be switched via environment variables ``FEATURE_<KEY>``
("true" or "1" enables, anything else disables). Without an override, the
development or production default of the flag applies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)

ENV_PREFIX = "FEATURE_"

DATA_INVALIDATOR = "DATA_INVALIDATOR"
DATA_SYNTHESIS = "DATA_SYNTHESIS"
LAYOUT_MANAGER = "LAYOUT_MANAGER"
MODELING = "MODELING"
LABOR_CALCULATOR = "LABOR_CALCULATOR"
CAPITAL_EXPENSES = "CAPITAL_EXPENSES"
ROUTE_DISTANCE_CALCULATOR = "ROUTE_DISTANCE_CALCULATOR"
NEW_DASHBOARD = "NEW_DASHBOARD"
EXPERIMENTAL_API = "EXPERIMENTAL_API"
ADVANCED_ROUTE_FEATURES = "ADVANCED_ROUTE_FEATURES"


@dataclass(frozen=True)
class FeatureDefinition:
    key: str
    name: str
    description: str = ""
    default_dev: bool = False
    default_prod: bool = False


FEATURE_DEFINITIONS: dict[str, FeatureDefinition] = {
    d.key: d
    for d in (
        FeatureDefinition(DATA_INVALIDATOR, "Data Invalidator",
                          "Data Invalidator tool for invalidating data entries", True, False),
        FeatureDefinition(DATA_SYNTHESIS, "Data Synthesis",
                          "Data Synthesis tool for combining and synthesizing data", True, False),
        FeatureDefinition(LAYOUT_MANAGER, "Layout Manager",
                          "Layout Manager tool for managing facility layouts", False, False),
        FeatureDefinition(MODELING, "Modeling",
                          "Modeling section for creating and managing models", True, False),
        FeatureDefinition(LABOR_CALCULATOR, "Labor Calculator",
                          "Labor Calculator tool for calculating labor costs", True, False),
        FeatureDefinition(CAPITAL_EXPENSES, "Capital Expenses",
                          "Capital Expenses tool for managing capital expenditure", True, False),
        # already live, so enabled in production too
        FeatureDefinition(ROUTE_DISTANCE_CALCULATOR, "Route Distance Calculator",
                          "Route Distance Calculator for calculating route distances", True, True),
        FeatureDefinition(NEW_DASHBOARD, "New Dashboard",
                          "Redesigned dashboard with improved UX", True, False),
        FeatureDefinition(EXPERIMENTAL_API, "Experimental API",
                          "Access to experimental API endpoints", True, False),
        FeatureDefinition(ADVANCED_ROUTE_FEATURES, "Advanced Route Features",
                          "Advanced features for route distance calculations", True, False),
    )
}


class FeatureFlags:
    """
    Resolved feature flags for one process.

    Built once at startup and passed to whatever needs it, instead of
    reading the environment on every check.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, production: bool = False):
        self._environ = dict(os.environ if environ is None else environ)
        self.production = production

    @classmethod
    def from_settings(cls, settings, environ: Optional[Mapping[str, str]] = None) -> "FeatureFlags":
        return cls(environ=environ, production=settings.is_production)

    def is_enabled(self, key: str) -> bool:
        definition = FEATURE_DEFINITIONS.get(key)
        if definition is None:
            logger.warning("unknown_feature_flag", feature=key)
            return False

        raw = self._environ.get(f"{ENV_PREFIX}{key}")
        if raw is not None:
            return raw.strip().lower() in ("true", "1")

        return definition.default_prod if self.production else definition.default_dev

    def definition(self, key: str) -> Optional[FeatureDefinition]:
        return FEATURE_DEFINITIONS.get(key)

    def all_flags(self) -> dict[str, dict]:
        """Every flag with its current status; used by the settings panel."""
        return {
            key: {"enabled": self.is_enabled(key), "definition": definition}
            for key, definition in FEATURE_DEFINITIONS.items()
        }
