"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety. Values come from the
process environment or a local ``.env`` file.
"""

from functools import lru_cache
from typing import Optional

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8000"


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    # ===================
    # BACKEND API
    # ===================
    api_base_url: Optional[str] = Field(
        None,
        description="Base URL of the route-distance backend"
    )
    api_base_url_dev: Optional[str] = Field(
        None,
        description="Backend URL used outside production (overrides api_base_url)"
    )
    api_base_url_prod: Optional[str] = Field(
        None,
        description="Backend URL used in production (overrides api_base_url)"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Timeout applied to every backend request"
    )

    # ===================
    # ROUTE DISTANCE
    # ===================
    poll_interval_seconds: float = Field(
        default=2.0,
        gt=0,
        le=60,
        description="Seconds between task-status polls"
    )
    poll_timeout_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="Give up on a task that is still processing after this many seconds"
    )
    database_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Rows per page in the route-distance database view"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def resolved_api_base_url(self) -> str:
        """
        Backend base URL for the current environment.

        Priority: mode-specific URL, then the generic one, then the local
        development default. Trailing slashes are removed.
        """
        mode_specific = self.api_base_url_prod if self.is_production else self.api_base_url_dev
        for candidate in (mode_specific, self.api_base_url):
            if candidate and candidate.strip():
                return candidate.strip().rstrip("/")

        if not self.is_production:
            logger.warning(
                "api_base_url_not_configured",
                fallback=DEFAULT_API_BASE_URL,
                hint="Set API_BASE_URL (or API_BASE_URL_DEV / API_BASE_URL_PROD)",
            )
        return DEFAULT_API_BASE_URL


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Call get_settings.cache_clear() to reload.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
