"""
Route-distance endpoints, typed.

Upload, process, status and download drive the enrichment workflow; retry
and the database calls back the results and database pages.
"""

from typing import Iterable, Type, TypeVar
from urllib.parse import quote

import structlog
from pydantic import BaseModel, ValidationError

from api_client import ApiClient
from constants import (
    DATABASE_DELETE_ENDPOINT,
    DATABASE_ENDPOINT,
    DOWNLOAD_ENDPOINT,
    PROCESS_ENDPOINT,
    RETRY_ENDPOINT,
    TASK_STATUS_ENDPOINT,
    UPLOAD_ENDPOINT,
)
from errors import ApiError
from field_mapping import FieldMapping
from route_models import (
    DatabaseFilters,
    ProcessResponse,
    RetrySummary,
    RouteIssue,
    RoutePage,
    RouteRecord,
    TaskStatus,
    UploadResult,
)
from upload_readers import UploadedFile

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: Type[ModelT], data, endpoint: str) -> ModelT:
    """Validate a response body; a malformed body is reported like any other API failure."""
    try:
        return model.model_validate(data or {})
    except ValidationError as e:
        logger.error("api_response_invalid", endpoint=endpoint, model=model.__name__, errors=e.error_count())
        raise ApiError("Unexpected response from server", endpoint=endpoint) from e


class RouteDistanceApi:
    """Calls under /api/route-distance."""

    def __init__(self, client: ApiClient):
        self.client = client

    def upload_route_file(self, upload: UploadedFile) -> UploadResult:
        data = self.client.upload(UPLOAD_ENDPOINT, upload.name, upload.content, upload.content_type)
        result = _parse(UploadResult, data, UPLOAD_ENDPOINT)
        logger.info(
            "route_file_uploaded",
            filename=result.filename,
            columns=len(result.columns),
        )
        return result

    def process_route_enrichment(self, filename: str, mapping: FieldMapping) -> ProcessResponse:
        fields = {"filename": filename, **mapping.to_form()}
        data = self.client.post_form(PROCESS_ENDPOINT, fields)
        response = _parse(ProcessResponse, data, PROCESS_ENDPOINT)
        logger.info("route_processing_started", filename=filename, task_id=response.task_id)
        return response

    def get_task_status(self, task_id: str) -> TaskStatus:
        data = self.client.get(f"{TASK_STATUS_ENDPOINT}/{quote(task_id, safe='')}")
        return _parse(TaskStatus, data, TASK_STATUS_ENDPOINT)

    def download_enriched_file(self, filename: str) -> bytes:
        content = self.client.download(f"{DOWNLOAD_ENDPOINT}/{quote(filename, safe='')}")
        logger.info("enriched_file_downloaded", filename=filename, size=len(content))
        return content

    def retry_failures(self, routes: Iterable[RouteIssue]) -> RetrySummary:
        payload = {"routes": [r.model_dump() for r in routes]}
        data = self.client.post(RETRY_ENDPOINT, payload)
        summary = _parse(RetrySummary, data, RETRY_ENDPOINT)
        logger.info(
            "route_retry_finished",
            requested=len(payload["routes"]),
            updated=summary.updated,
            failures=summary.failures,
        )
        return summary

    def list_routes(self, filters: DatabaseFilters, page: int = 0, page_size: int = 100) -> RoutePage:
        data = self.client.get(DATABASE_ENDPOINT, params=filters.to_params(page, page_size))
        return _parse(RoutePage, data, DATABASE_ENDPOINT)

    def delete_route(self, route: RouteRecord) -> None:
        payload = {
            "origin_3dz": route.Origin_3DZ,
            "destination_3dz": route.Destination_3DZ,
        }
        if route.Origin_Country:
            payload["origin_country"] = route.Origin_Country
        if route.Destination_Country:
            payload["destination_country"] = route.Destination_Country
        self.client.post(DATABASE_DELETE_ENDPOINT, payload)
        logger.info("route_deleted", route=route.label)
