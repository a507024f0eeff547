"""
Shared test fixtures.

Backend calls are faked with MagicMock; nothing here opens a socket.
"""

import sys
from pathlib import Path

# Add the app root (flat layout) to the Python path
app_dir = Path(__file__).parent.parent
sys.path.insert(0, str(app_dir))

import pytest
from unittest.mock import MagicMock

from factories import COLUMNS, SUGGESTIONS
from field_mapping import FieldMapping
from route_distance_api import RouteDistanceApi
from route_models import ProcessResponse, UploadResult
from storage import MemoryStore
from upload_readers import UploadedFile


# ===================
# FIXTURES
# ===================

@pytest.fixture
def upload_file() -> UploadedFile:
    return UploadedFile(name="routes.csv", content=b"a,b\n1,2\n", content_type="text/csv")


@pytest.fixture
def upload_result() -> UploadResult:
    return UploadResult(
        filename="routes.csv",
        columns=COLUMNS,
        field_suggestions=FieldMapping(**SUGGESTIONS),
        message="Uploaded",
    )


@pytest.fixture
def mock_api(upload_result) -> MagicMock:
    """RouteDistanceApi double with a successful upload and process call."""
    api = MagicMock(spec=RouteDistanceApi)
    api.upload_route_file.return_value = upload_result
    api.process_route_enrichment.return_value = ProcessResponse(task_id="task-1", message="queued")
    return api


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()
