# app.py

import streamlit as st
import structlog

# === Modular imports ===

from api_client import ApiClient
from constants import APP_TAGLINE, APP_TITLE
from feature_flags import FeatureFlags
from hubs import DESIGN, HubPreferences, all_hubs, current_hub, get_hub
from log_config import configure_logging
from module_page import render_module
from module_templates import template_for_path
from navigation import menu_for, normalize_path, resolve_route
from ops_dashboards import DASHBOARDS
from polling import StatusPoller
from route_database_page import render_route_database
from route_distance_api import RouteDistanceApi
from route_distance_page import render_route_distance
from settings import get_settings
from storage import MemoryStore
from theme import page_header, theme_css
from workflow import RouteDistanceWorkflow

logger = structlog.get_logger(__name__)

WORKFLOW_KEY = "rd_workflow"


# ================= Page / Theme (light only) =================

st.set_page_config(page_title=APP_TITLE, page_icon="⚙️", layout="wide")

st.markdown(theme_css(), unsafe_allow_html=True)


# ================= Cached services =================

@st.cache_resource(show_spinner=False)
def bootstrap():
    """Settings, logging, flags and the API client; built once per server process."""
    settings = get_settings()
    configure_logging(settings)
    flags = FeatureFlags.from_settings(settings)
    client = ApiClient(settings.resolved_api_base_url, timeout=settings.request_timeout_seconds)
    api = RouteDistanceApi(client)
    logger.info(
        "app_started",
        environment=settings.environment,
        api_base_url=client.base_url,
        poll_interval=settings.poll_interval_seconds,
    )
    return settings, flags, api


try:
    settings, flags, api = bootstrap()
except Exception as e:
    st.error(f"Configuration error: {e}")
    st.stop()

# default hub is kept per browser session
preferences = HubPreferences(MemoryStore(st.session_state))

if WORKFLOW_KEY not in st.session_state:
    poller = StatusPoller(
        api.get_task_status,
        interval=settings.poll_interval_seconds,
        max_duration=settings.poll_timeout_seconds,
    )
    st.session_state[WORKFLOW_KEY] = RouteDistanceWorkflow(api, poller)
workflow: RouteDistanceWorkflow = st.session_state[WORKFLOW_KEY]


# ================= Routing =================

requested = normalize_path(st.query_params.get("page"))
route = resolve_route(requested, flags)
if route != requested:
    st.query_params["page"] = route

hub_id = current_hub(route) or DESIGN


def go(path: str) -> None:
    st.query_params["page"] = path
    st.rerun()


# ================= Sidebar =================

with st.sidebar:
    st.markdown(f"## {APP_TITLE}")
    st.caption(APP_TAGLINE)

    if preferences.show_switcher:
        hubs = all_hubs()
        default_hub = preferences.default_hub()
        ids = [h.id for h in hubs]
        picked = st.radio(
            "Engine",
            ids,
            index=ids.index(hub_id),
            format_func=lambda h: f"{get_hub(h).icon} {get_hub(h).name}" + (" ★" if h == default_hub else ""),
        )
        if picked != hub_id:
            go(preferences.switch_target(picked))
        if hub_id != default_hub and st.button("Set as default", key="hub_default"):
            preferences.set_as_default(hub_id)
            st.toast(f"{get_hub(hub_id).name} is now your default engine")
            st.rerun()

    st.markdown("---")
    for item in menu_for(hub_id, flags):
        label = f"{item.icon} {item.text}" + (" · soon" if item.coming_soon else "")
        selected = item.is_selected(route)
        if st.button(label, key=f"nav_{item.path}", use_container_width=True,
                     type="primary" if selected else "secondary"):
            go(item.path)
        if item.sub_items and selected:
            for sub in item.sub_items:
                if st.button(f"   {sub.text}", key=f"nav_{sub.path}", use_container_width=True,
                             type="primary" if sub.path == route else "secondary"):
                    go(sub.path)


# ================= Pages =================

def render_home() -> None:
    st.markdown(page_header(APP_TITLE, APP_TAGLINE), unsafe_allow_html=True)
    st.markdown("### Engines")
    cols = st.columns(len(all_hubs()))
    for col, hub in zip(cols, all_hubs()):
        with col:
            st.markdown(
                f'<div class="hub-card" style="border-left-color:{hub.color}">'
                f'<div class="hub-name">{hub.icon} {hub.name}</div>'
                f'<div class="hub-desc">{hub.description}</div></div>',
                unsafe_allow_html=True,
            )
            if st.button(f"Open {hub.short_name}", key=f"home_{hub.id}"):
                go(hub.home_path)

    st.markdown("### Design tools")
    for item in menu_for(DESIGN, flags):
        c1, c2 = st.columns([4, 1])
        c1.markdown(f"{item.icon} **{item.text}**" + ("  _(coming soon)_" if item.coming_soon else ""))
        if c2.button("Open", key=f"home_{item.path}"):
            go(item.path)


if route == "/dashboard":
    render_home()
elif route == "/route-distance":
    render_route_distance(workflow, flags, poll_interval=settings.poll_interval_seconds)
elif route == "/route-distance/database":
    render_route_database(api, page_size=settings.database_page_size)
elif route in DASHBOARDS:
    DASHBOARDS[route]()
else:
    template = template_for_path(route)
    if template is None:
        st.error(f"Page not found: {route}")
        st.stop()
    render_module(template)
