"""
Unit tests for the route database view state and its API calls.

Run: pytest tests/test_route_database.py -v
"""

import pytest
from unittest.mock import MagicMock

from errors import ApiError
from route_database_page import DatabaseView, delete_route, filter_choices, load_page
from route_distance_api import RouteDistanceApi
from route_models import RoutePage, RouteRecord

ROUTES = [
    RouteRecord(Origin_3DZ="100", Destination_3DZ="200", Origin_Country="US", Destination_Country="CA"),
    RouteRecord(Origin_3DZ="300", Destination_3DZ="400", Origin_Country="US", Error_Reason="No route found"),
    RouteRecord(Origin_3DZ="500", Destination_3DZ="600", Origin_Country="MX"),
]


@pytest.fixture
def api():
    return MagicMock(spec=RouteDistanceApi)


class TestDatabaseView:
    """Tests for DatabaseView"""

    def test_filter_change_resets_page(self):
        view = DatabaseView(page=4)

        view.set_filter("origin_country", "US")

        assert view.filters.origin_country == "US"
        assert view.page == 0

    def test_same_filter_keeps_page(self):
        view = DatabaseView(page=4)

        view.set_filter("status", "error")

        assert view.page == 4

    def test_paging_bounds(self):
        """A full page may have a next page; a short one is the last."""
        view = DatabaseView()

        assert not view.can_go_back()
        assert view.can_go_forward(loaded=100, page_size=100)
        assert not view.can_go_forward(loaded=37, page_size=100)

        view.page = 1
        assert view.can_go_back()

    def test_search_is_client_side(self):
        view = DatabaseView(search="no route")

        assert view.visible(ROUTES) == [ROUTES[1]]


def test_filter_choices():
    assert filter_choices(ROUTES, "Origin_Country") == ["all", "MX", "US"]
    assert filter_choices(ROUTES, "Destination_Country") == ["all", "CA"]


class TestLoadPage:
    """Tests for load_page()"""

    def test_success_clears_error(self, api):
        api.list_routes.return_value = RoutePage(routes=ROUTES, total=3)
        view = DatabaseView(page=2, error="old")

        page = load_page(api, view, page_size=100)

        api.list_routes.assert_called_once_with(view.filters, 2, 100)
        assert page.total == 3
        assert view.error == ""

    def test_failure_sets_error_and_empty_page(self, api):
        api.list_routes.side_effect = ApiError("Database unavailable", status_code=503)
        view = DatabaseView()

        page = load_page(api, view, page_size=100)

        assert page.routes == []
        assert view.error == "Database unavailable"


class TestDeleteRoute:
    """Tests for delete_route()"""

    def test_success_clears_pending(self, api):
        view = DatabaseView(pending_delete=ROUTES[0])

        assert delete_route(api, view, ROUTES[0]) is True
        assert view.pending_delete is None
        api.delete_route.assert_called_once_with(ROUTES[0])

    def test_failure_keeps_pending_and_reports(self, api):
        api.delete_route.side_effect = ApiError("Route not found", status_code=404)
        view = DatabaseView(pending_delete=ROUTES[0])

        assert delete_route(api, view, ROUTES[0]) is False
        assert view.pending_delete is ROUTES[0]
        assert view.error == "Route not found"
