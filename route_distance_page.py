# route_distance_page.py
from __future__ import annotations

import streamlit as st

import feature_flags as ff
from constants import ACCEPTED_UPLOAD_TYPES, POLL_INTERVAL_SECONDS, WORKFLOW_STEPS
from exporters import Exporter, export_filename, issues_frame
from feature_flags import FeatureFlags
from field_mapping import DESTINATION_KEYS, FIELD_LABELS, ORIGIN_KEYS, REQUIRED_KEYS
from io_utils import CSV_MIME, EXCEL_MIME
from route_models import RouteIssue
from theme import page_header, stepper_html
from upload_readers import UploadReader
from workflow import RouteDistanceWorkflow, Step

NONCE_KEY = "rd_nonce"  # bumped on reset so widgets start empty


def _nonce() -> int:
    return st.session_state.setdefault(NONCE_KEY, 0)


def _start_over(workflow: RouteDistanceWorkflow) -> None:
    workflow.reset()
    st.session_state[NONCE_KEY] = _nonce() + 1


# ================= Upload =================

def _render_upload(workflow: RouteDistanceWorkflow, reader: UploadReader) -> None:
    st.markdown("### Upload File")
    st.caption("Drop a CSV or Excel file here, or click to browse")
    file = st.file_uploader("Select a file", type=ACCEPTED_UPLOAD_TYPES, key=f"rd_file_{_nonce()}")
    if file is None:
        st.info("Upload a route file (.csv / .xlsx / .xls) to begin.")
        return

    upload = reader.read(file)
    try:
        preview = reader.preview(upload)
    except Exception as e:
        st.warning(f"Could not preview the file locally: {e}")
    else:
        st.caption(f"Preview of **{upload.name}** ({upload.size:,} bytes)")
        st.dataframe(preview, use_container_width=True, hide_index=True)

    if st.button("Upload & Continue", type="primary"):
        with st.spinner("Uploading…"):
            workflow.submit_file(upload)
        st.rerun()


# ================= Mapping =================

def _on_mapping_change(workflow: RouteDistanceWorkflow, key: str, widget_key: str) -> None:
    workflow.update_mapping({key: st.session_state[widget_key] or None})


def _field_select(workflow: RouteDistanceWorkflow, key: str) -> None:
    mapping = workflow.field_mapping
    options = [""] + mapping.available_columns(workflow.upload_data.columns, key)
    current = getattr(mapping, key) or ""
    label = FIELD_LABELS[key] + (" *" if key in REQUIRED_KEYS else "")
    widget_key = f"rd_map_{key}_{_nonce()}"
    st.selectbox(
        label,
        options,
        index=options.index(current) if current in options else 0,
        format_func=lambda c: c or "— not mapped —",
        key=widget_key,
        on_change=_on_mapping_change,
        args=(workflow, key, widget_key),
    )


def _render_mapping(workflow: RouteDistanceWorkflow) -> None:
    st.markdown("### Map Fields")
    st.caption("Confirm the auto-detected mappings.")
    if workflow.upload_data.message:
        st.caption(workflow.upload_data.message)

    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Origin Fields**")
        for key in ORIGIN_KEYS:
            _field_select(workflow, key)
    with c2:
        st.markdown("**Destination Fields**")
        for key in DESTINATION_KEYS:
            _field_select(workflow, key)

    st.info("Required: Country and at least one ZIP field.")

    b1, b2, _ = st.columns([1, 1, 4])
    with b1:
        if st.button("Cancel"):
            _start_over(workflow)
            st.rerun()
    with b2:
        if st.button("Start Processing", type="primary", disabled=not workflow.can_process):
            workflow.submit_job()
            st.rerun()


# ================= Processing =================

def _processing_panel(workflow: RouteDistanceWorkflow) -> None:
    if workflow.poller is None:
        workflow.poll_status()
    if not workflow.is_processing:
        st.rerun()
    st.markdown("### Calculating Distances")
    st.write(workflow.progress_message or "Processing your file...")
    st.progress(workflow.progress, text=f"{workflow.progress}% complete")


# ================= Complete =================

def _issue_table(title: str, issues: list[RouteIssue], exporter: Exporter, key: str) -> None:
    if not issues:
        return
    df = issues_frame(issues)
    st.markdown(f"**{len(issues):,} {title}:**")
    st.dataframe(df, use_container_width=True, hide_index=True, height=min(400, 40 + 35 * len(df)))
    st.download_button(
        f"⬇️ Download CSV ({title})",
        data=exporter.export_csv(df),
        file_name=export_filename(title.title(), "csv"),
        mime=CSV_MIME,
        key=f"rd_csv_{key}",
    )


def _render_complete(workflow: RouteDistanceWorkflow, flags: FeatureFlags, exporter: Exporter) -> None:
    result = workflow.result
    stats = result.stats
    known_bad = workflow.known_bad_routes
    missing = workflow.missing_routes

    st.success("Processing Complete! Your file has been enriched with route distances.")

    cards = [("Total Rows", stats.total_rows), ("From Database", stats.from_cache), ("From Azure", stats.from_api)]
    if known_bad:
        cards.append(("Known Bad Routes", len(known_bad)))
    if stats.missing > 0:
        cards.append(("Not Processed", stats.missing))
    if stats.api_failed > 0:
        cards.append(("Azure Failed", stats.api_failed))
    for col, (label, value) in zip(st.columns(len(cards)), cards):
        col.metric(label, f"{value:,}")

    b1, b2, _ = st.columns([1, 1, 3])
    with b1:
        if workflow.download is None:
            if st.button("Download Enriched File", type="primary"):
                with st.spinner("Fetching file…"):
                    workflow.download_result()
                st.rerun()
        else:
            st.download_button(
                "⬇️ Save Enriched File",
                data=workflow.download.content,
                file_name=workflow.download.filename,
                mime="application/octet-stream",
            )
    with b2:
        if st.button("Process Another File"):
            _start_over(workflow)
            st.rerun()

    st.markdown("---")
    if result.failed_routes:
        _issue_table("routes could not be calculated", result.failed_routes, exporter, "failed")
    _issue_table("routes not processed", missing, exporter, "missing")
    _issue_table("known bad routes", known_bad, exporter, "known_bad")

    if known_bad or missing:
        st.download_button(
            "⬇️ Download Excel (all issues)",
            data=exporter.export_issues_workbook(known_bad, missing),
            file_name=export_filename("Route Issues", "xlsx"),
            mime=EXCEL_MIME,
        )

    if known_bad and flags.is_enabled(ff.ADVANCED_ROUTE_FEATURES):
        st.markdown("#### Retry failed routes")
        if st.button(f"Retry {len(known_bad):,} route(s)"):
            with st.spinner("Retrying…"):
                workflow.retry_failed_routes()
            st.rerun()
        summary = workflow.retry_summary
        if summary is not None:
            st.info(f"Updated {summary.updated:,} · succeeded {summary.successes:,} · failed {summary.failures:,}")


# ================= Error =================

def _render_error(workflow: RouteDistanceWorkflow) -> None:
    st.error(f"**Processing Failed**\n\n{workflow.error or 'An unknown error occurred'}")
    # a failed job is terminal; the only way on is a fresh upload
    if st.button("Start Over", type="primary"):
        _start_over(workflow)
        st.rerun()


# ================= Page =================

def render_route_distance(
    workflow: RouteDistanceWorkflow,
    flags: FeatureFlags,
    reader: UploadReader | None = None,
    exporter: Exporter | None = None,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> None:
    reader = reader or UploadReader()
    exporter = exporter or Exporter()

    st.markdown(page_header("Route Distance Calculator", "Enrich a route file with distances between ZIP regions"),
                unsafe_allow_html=True)
    if st.button("🗄️ Route Database", key="rd_open_db"):
        st.query_params["page"] = "/route-distance/database"
        st.rerun()
    st.markdown(stepper_html(WORKFLOW_STEPS, workflow.active_step_index), unsafe_allow_html=True)

    if workflow.error and workflow.step is not Step.ERROR:
        c1, c2 = st.columns([8, 1])
        c1.error(workflow.error)
        if c2.button("✕", key="rd_clear_error", help="Dismiss"):
            workflow.clear_error()
            st.rerun()

    step = workflow.step
    if step is Step.UPLOAD:
        _render_upload(workflow, reader)
    elif step is Step.MAPPING and workflow.upload_data is not None:
        _render_mapping(workflow)
    elif step is Step.PROCESSING:
        st.fragment(run_every=poll_interval)(_processing_panel)(workflow)
    elif step is Step.COMPLETE and workflow.result is not None:
        _render_complete(workflow, flags, exporter)
    elif step is Step.ERROR:
        _render_error(workflow)
