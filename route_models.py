"""
Pydantic models for the route-distance API.

Field names follow the backend's JSON so responses validate directly.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from field_mapping import FieldMapping


class TaskState(str, Enum):
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class RouteIssue(BaseModel):
    """A route the backend could not compute."""

    origin: str = ""
    destination: str = ""
    reason: str = ""


class UploadResult(BaseModel):
    """Response of the upload call; immutable once received."""

    model_config = ConfigDict(frozen=True)

    filename: str
    columns: list[str] = Field(default_factory=list)
    field_suggestions: FieldMapping = Field(default_factory=FieldMapping)
    message: str = ""

    @field_validator("field_suggestions", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or {}


class ProcessResponse(BaseModel):
    task_id: str
    message: str = ""


class RouteStats(BaseModel):
    total_rows: int = 0
    from_cache: int = 0
    from_api: int = 0
    api_failed: int = 0
    missing: int = 0
    unique_routes: int = 0
    db_found: Optional[int] = None
    db_errors: Optional[int] = None
    db_missing: Optional[int] = None
    known_bad_routes: list[RouteIssue] = Field(default_factory=list)
    missing_routes: list[RouteIssue] = Field(default_factory=list)


class TaskResult(BaseModel):
    filename: str
    stats: RouteStats = Field(default_factory=RouteStats)
    failed_routes: list[RouteIssue] = Field(default_factory=list)


class TaskStatus(BaseModel):
    """One task-status poll response."""

    state: TaskState
    status: Optional[str] = None
    message: str = ""
    percent: int = 0
    result: Optional[TaskResult] = None

    @field_validator("percent", mode="before")
    @classmethod
    def _clamp_percent(cls, value):
        try:
            value = int(float(value))
        except (TypeError, ValueError):
            return 0
        return max(0, min(100, value))

    @field_validator("message", mode="before")
    @classmethod
    def _none_message(cls, value):
        return value or ""

    @property
    def is_terminal(self) -> bool:
        return self.state in (TaskState.SUCCESS, TaskState.FAILURE)


class RetrySummary(BaseModel):
    updated: int = 0
    successes: int = 0
    failures: int = 0


class RouteRecord(BaseModel):
    """One row of the route-distance database."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    Origin_3DZ: str = ""
    Destination_3DZ: str = ""
    Origin_5DZ: Optional[str] = None
    Destination_5DZ: Optional[str] = None
    Origin_Country: Optional[str] = None
    Destination_Country: Optional[str] = None
    Distance: Optional[float] = None
    Status: Optional[str] = None
    Source: Optional[str] = None
    Error_Reason: Optional[str] = None
    calculated_at: Optional[str] = None

    @property
    def label(self) -> str:
        origin = self.Origin_3DZ or self.Origin_5DZ or ""
        destination = self.Destination_3DZ or self.Destination_5DZ or ""
        return f"{origin} → {destination}"

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match over the searchable columns."""
        if not search:
            return True
        needle = search.lower()
        haystack = (
            self.Origin_3DZ, self.Destination_3DZ, self.Origin_5DZ, self.Destination_5DZ,
            self.Origin_Country, self.Destination_Country, self.Error_Reason,
        )
        return any(needle in value.lower() for value in haystack if value)


class RoutePage(BaseModel):
    routes: list[RouteRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 0
    page_size: int = 100

    @field_validator("routes", mode="before")
    @classmethod
    def _none_routes(cls, value):
        return value or []


class DatabaseFilters(BaseModel):
    """Server-side filters of the database view; "all" means no filter."""

    status: str = "error"
    origin_country: str = "all"
    destination_country: str = "all"
    source: str = "all"

    def to_params(self, page: int, page_size: int) -> dict[str, str]:
        params = {"page": str(page), "page_size": str(page_size)}
        for name in ("status", "origin_country", "destination_country", "source"):
            value = getattr(self, name)
            if value and value != "all":
                params[name] = value
        return params
