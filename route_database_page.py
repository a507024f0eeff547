# route_database_page.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import streamlit as st
import structlog

from errors import ApiError
from exporters import Exporter, export_filename, routes_frame
from io_utils import CSV_MIME, EXCEL_MIME
from route_distance_api import RouteDistanceApi
from route_models import DatabaseFilters, RoutePage, RouteRecord
from theme import page_header

logger = structlog.get_logger(__name__)

VIEW_KEY = "rd_db_view"
STATUS_OPTIONS = ["all", "success", "error"]


@dataclass
class DatabaseView:
    """Filter, paging and search state of the database page."""

    filters: DatabaseFilters = field(default_factory=DatabaseFilters)
    page: int = 0
    search: str = ""
    pending_delete: Optional[RouteRecord] = None
    error: str = ""

    def set_filter(self, name: str, value: str) -> None:
        """Server-side filters restart paging at the first page."""
        if getattr(self.filters, name) == value:
            return
        self.filters = self.filters.model_copy(update={name: value})
        self.page = 0

    def can_go_back(self) -> bool:
        return self.page > 0

    def can_go_forward(self, loaded: int, page_size: int) -> bool:
        # a short page is the last one
        return loaded >= page_size

    def visible(self, routes: list[RouteRecord]) -> list[RouteRecord]:
        return [r for r in routes if r.matches(self.search)]


def filter_choices(routes: list[RouteRecord], attr: str) -> list[str]:
    """'all' plus the distinct values of ``attr`` on the loaded page."""
    values = {getattr(r, attr) for r in routes}
    return ["all"] + sorted(v for v in values if v)


def load_page(api: RouteDistanceApi, view: DatabaseView, page_size: int) -> RoutePage:
    try:
        page = api.list_routes(view.filters, view.page, page_size)
    except ApiError as e:
        logger.warning("route_page_load_failed", page=view.page, error=e.message)
        view.error = e.message or "Failed to load routes"
        return RoutePage(page=view.page, page_size=page_size)
    view.error = ""
    return page


def delete_route(api: RouteDistanceApi, view: DatabaseView, route: RouteRecord) -> bool:
    try:
        api.delete_route(route)
    except ApiError as e:
        logger.warning("route_delete_failed", route=route.label, error=e.message)
        view.error = e.message or "Failed to delete route"
        return False
    view.error = ""
    view.pending_delete = None
    return True


# ================= UI =================

def _describe(route: RouteRecord) -> str:
    countries = " / ".join(c for c in (route.Origin_Country, route.Destination_Country) if c)
    return f"{route.label} ({countries})" if countries else route.label


def _filter_select(view: DatabaseView, label: str, name: str, options: list[str]) -> None:
    current = getattr(view.filters, name)
    if current not in options:
        options = options + [current]
    value = st.selectbox(
        label, options, index=options.index(current),
        format_func=lambda v: "All" if v == "all" else v.title() if name in ("status", "source") else v,
        key=f"rd_db_{name}",
    )
    if value != current:
        view.set_filter(name, value)
        st.rerun()


def _confirm_delete(api: RouteDistanceApi, view: DatabaseView) -> None:
    route = view.pending_delete
    st.warning(f"Are you sure you want to delete this route?\n\n{route.label}")
    c1, c2, _ = st.columns([1, 1, 4])
    if c1.button("Delete", type="primary", key="rd_db_confirm"):
        if delete_route(api, view, route):
            st.toast(f"Deleted {route.label}")
        st.rerun()
    if c2.button("Cancel", key="rd_db_cancel"):
        view.pending_delete = None
        st.rerun()


def render_route_database(api: RouteDistanceApi, page_size: int = 100, exporter: Exporter | None = None) -> None:
    exporter = exporter or Exporter()
    view: DatabaseView = st.session_state.setdefault(VIEW_KEY, DatabaseView())

    st.markdown(page_header("Route Distance Database", "Stored route distances and failed lookups"),
                unsafe_allow_html=True)
    if st.button("← Back to calculator"):
        st.query_params["page"] = "/route-distance"
        st.rerun()

    with st.spinner("Loading routes…"):
        result = load_page(api, view, page_size)
    routes = result.routes

    if view.error:
        st.error(view.error)

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        _filter_select(view, "Status", "status", STATUS_OPTIONS)
    with c2:
        _filter_select(view, "Origin Country", "origin_country", filter_choices(routes, "Origin_Country"))
    with c3:
        _filter_select(view, "Destination Country", "destination_country", filter_choices(routes, "Destination_Country"))
    with c4:
        _filter_select(view, "Source", "source", filter_choices(routes, "Source"))

    s1, s2, s3, s4 = st.columns([4, 1, 1, 2])
    with s1:
        view.search = st.text_input("Search", value=view.search, key="rd_db_search")
    with s2:
        if st.button("◀", disabled=not view.can_go_back(), help="Previous page"):
            view.page -= 1
            st.rerun()
    with s3:
        if st.button("▶", disabled=not view.can_go_forward(len(routes), page_size), help="Next page"):
            view.page += 1
            st.rerun()
    with s4:
        st.caption(f"Page {view.page + 1} · Total: {result.total:,} rows")

    if view.pending_delete is not None:
        _confirm_delete(api, view)

    shown = view.visible(routes)
    if not shown:
        st.info("No routes match the current filters.")
        return

    df = routes_frame(shown)
    st.dataframe(df, use_container_width=True, hide_index=True)

    d1, d2, d3 = st.columns([3, 1, 1])
    with d1:
        choice = st.selectbox(
            "Route to delete", [None] + list(range(len(shown))),
            format_func=lambda i: "— select —" if i is None else _describe(shown[i]),
        )
        if choice is not None and st.button("🗑️ Delete route"):
            view.pending_delete = shown[choice]
            st.rerun()
    with d2:
        st.download_button("⬇️ CSV", data=exporter.export_csv(df),
                           file_name=export_filename("Route Database", "csv"), mime=CSV_MIME)
    with d3:
        st.download_button("⬇️ Excel", data=exporter.export_full_excel(df, sheet_name="Route Database"),
                           file_name=export_filename("Route Database", "xlsx"), mime=EXCEL_MIME)
