"""
Unit tests for the route-distance response models.

Run: pytest tests/test_route_models.py -v
"""

import pytest
from pydantic import ValidationError

from route_models import (
    DatabaseFilters,
    RoutePage,
    RouteRecord,
    TaskState,
    TaskStatus,
    UploadResult,
)


class TestTaskStatus:
    """Tests for TaskStatus validation."""

    @pytest.mark.parametrize("raw, expected", [
        (-5, 0),
        (42, 42),
        (42.9, 42),
        ("77", 77),
        (250, 100),
        (None, 0),
        ("n/a", 0),
    ])
    def test_percent_clamped(self, raw, expected):
        assert TaskStatus(state="PROCESSING", percent=raw).percent == expected

    def test_terminal_states(self):
        assert TaskStatus(state="SUCCESS").is_terminal
        assert TaskStatus(state="FAILURE").is_terminal
        assert not TaskStatus(state="PROCESSING").is_terminal

    def test_unknown_state_rejected(self):
        with pytest.raises(ValidationError):
            TaskStatus(state="QUEUED")

    def test_success_result_parsed(self):
        """Nested stats and failed routes should validate into models."""
        status = TaskStatus.model_validate({
            "state": "SUCCESS",
            "result": {
                "filename": "out.xlsx",
                "stats": {"total_rows": 10, "known_bad_routes": [{"origin": "1", "destination": "2"}]},
                "failed_routes": [{"origin": "3", "destination": "4", "reason": "no road"}],
            },
        })

        assert status.state is TaskState.SUCCESS
        assert status.result.stats.total_rows == 10
        assert status.result.stats.db_found is None
        assert status.result.stats.known_bad_routes[0].reason == ""
        assert status.result.failed_routes[0].reason == "no road"


class TestUploadResult:
    def test_frozen(self):
        result = UploadResult(filename="a.csv")

        with pytest.raises(ValidationError):
            result.filename = "b.csv"


class TestRouteRecord:
    """Tests for RouteRecord helpers."""

    def test_label_falls_back_to_5dz(self):
        record = RouteRecord(Origin_5DZ="10001", Destination_3DZ="200")

        assert record.label == "10001 → 200"

    def test_matches_is_case_insensitive(self):
        record = RouteRecord(Origin_3DZ="100", Destination_3DZ="200", Error_Reason="No Route Found")

        assert record.matches("no route")
        assert record.matches("")
        assert not record.matches("timeout")

    def test_matches_skips_missing_fields(self):
        assert not RouteRecord(Origin_3DZ="100").matches("us")

    def test_extra_fields_ignored(self):
        assert RouteRecord.model_validate({"Origin_3DZ": "1", "unexpected": True}).Origin_3DZ == "1"


class TestRoutePage:
    def test_null_routes_is_empty(self):
        assert RoutePage.model_validate({"routes": None}).routes == []


class TestDatabaseFilters:
    """Tests for DatabaseFilters.to_params()"""

    def test_defaults(self):
        assert DatabaseFilters().to_params(0, 100) == {"page": "0", "page_size": "100", "status": "error"}

    def test_all_filters_set(self):
        filters = DatabaseFilters(status="all", origin_country="US", destination_country="CA", source="api")

        assert filters.to_params(3, 50) == {
            "page": "3",
            "page_size": "50",
            "origin_country": "US",
            "destination_country": "CA",
            "source": "api",
        }
