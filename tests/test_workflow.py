"""
Unit tests for RouteDistanceWorkflow.

Run: pytest tests/test_workflow.py -v
"""

import json

import pytest
import requests
from unittest.mock import MagicMock

from api_client import ApiClient
from errors import ApiError
from factories import COLUMNS, SUGGESTIONS, http_response, make_result, make_status
from field_mapping import FieldMapping
from polling import PollHandle, StatusPoller
from route_distance_api import RouteDistanceApi
from route_models import RetrySummary, RouteIssue
from workflow import MAPPING_INCOMPLETE, RouteDistanceWorkflow, Step

TERMINAL = (Step.COMPLETE, Step.ERROR)


def fake_poller() -> MagicMock:
    """StatusPoller double handing out a fresh handle per start()."""
    poller = MagicMock(spec=StatusPoller)
    poller.start.side_effect = lambda job_id, on_status, on_error: MagicMock(spec=PollHandle, job_id=job_id)
    return poller


def terminal_transitions(workflow) -> list:
    return [t for t in workflow.transitions if t[1] in TERMINAL]


@pytest.fixture
def workflow(mock_api):
    return RouteDistanceWorkflow(mock_api)


@pytest.fixture
def mapped_workflow(workflow, upload_file):
    """Workflow sitting in the mapping step with the suggested mapping."""
    assert workflow.submit_file(upload_file)
    return workflow


@pytest.fixture
def processing_workflow(mapped_workflow):
    assert mapped_workflow.submit_job()
    return mapped_workflow


# ===================
# UPLOAD
# ===================

class TestSubmitFile:
    """Tests for RouteDistanceWorkflow.submit_file()"""

    def test_success_moves_to_mapping(self, workflow, upload_file, mock_api):
        """Should store the upload result and go to mapping."""
        assert workflow.submit_file(upload_file) is True

        assert workflow.step is Step.MAPPING
        assert workflow.upload_data.filename == "routes.csv"
        assert workflow.file is upload_file
        assert workflow.error is None
        mock_api.upload_route_file.assert_called_once_with(upload_file)

    def test_suggestions_fill_mapping_field_for_field(self, workflow, upload_file):
        """Mapping should equal the server's suggestions exactly."""
        workflow.submit_file(upload_file)

        assert workflow.field_mapping.model_dump() == SUGGESTIONS

    def test_missing_suggestions_leave_mapping_empty(self, workflow, upload_file, mock_api, upload_result):
        """No suggestions should give an all-unset mapping."""
        mock_api.upload_route_file.return_value = upload_result.model_copy(
            update={"field_suggestions": FieldMapping()}
        )

        workflow.submit_file(upload_file)

        assert workflow.field_mapping == FieldMapping()

    def test_failure_stays_on_upload_and_clears_file(self, workflow, upload_file, mock_api):
        """Server rejection should surface the message and drop the file."""
        mock_api.upload_route_file.side_effect = ApiError("Unsupported file type", status_code=400)

        assert workflow.submit_file(upload_file) is False

        assert workflow.step is Step.UPLOAD
        assert workflow.error == "Unsupported file type"
        assert workflow.file is None
        assert workflow.upload_data is None
        assert workflow.transitions == []


class TestUpdateMapping:
    """Tests for RouteDistanceWorkflow.update_mapping()"""

    def test_merges_without_transition(self, mapped_workflow):
        """Should merge partial values and keep the step."""
        before = list(mapped_workflow.transitions)

        mapped_workflow.update_mapping({"source_5dz": "Orig5", "dest_5dz": None})

        assert mapped_workflow.field_mapping.source_5dz == "Orig5"
        assert mapped_workflow.field_mapping.dest_5dz is None
        assert mapped_workflow.field_mapping.source_3dz == "Orig3"
        assert mapped_workflow.step is Step.MAPPING
        assert mapped_workflow.transitions == before

    def test_unknown_key_rejected(self, mapped_workflow):
        """Should refuse keys outside the six mapping fields."""
        with pytest.raises(ValueError):
            mapped_workflow.update_mapping({"weight": "Weight"})


# ===================
# SUBMIT
# ===================

class TestSubmitJob:
    """Tests for RouteDistanceWorkflow.submit_job()"""

    def test_requires_upload(self, workflow, mock_api):
        """Should refuse with 'No file uploaded' before any upload."""
        assert workflow.submit_job() is False

        assert workflow.error == "No file uploaded"
        assert workflow.step is Step.UPLOAD
        mock_api.process_route_enrichment.assert_not_called()

    def test_requires_sufficient_mapping(self, mapped_workflow, mock_api):
        """Should refuse when a country is unmapped."""
        mapped_workflow.update_mapping({"dest_country": None})

        assert mapped_workflow.can_process is False
        assert mapped_workflow.submit_job() is False

        assert mapped_workflow.error == MAPPING_INCOMPLETE
        assert mapped_workflow.step is Step.MAPPING
        mock_api.process_route_enrichment.assert_not_called()

    def test_success_moves_to_processing(self, mapped_workflow, mock_api):
        """Should send filename and mapping, then record the task id."""
        assert mapped_workflow.submit_job() is True

        assert mapped_workflow.step is Step.PROCESSING
        assert mapped_workflow.task_id == "task-1"
        assert mapped_workflow.is_processing
        filename, mapping = mock_api.process_route_enrichment.call_args.args
        assert filename == "routes.csv"
        assert mapping.to_form() == {k: v for k, v in SUGGESTIONS.items() if v}

    def test_failure_stays_on_mapping(self, mapped_workflow, mock_api):
        """Submission failure should surface the error and keep mapping."""
        mock_api.process_route_enrichment.side_effect = ApiError("Backend busy", status_code=503)

        assert mapped_workflow.submit_job() is False

        assert mapped_workflow.step is Step.MAPPING
        assert mapped_workflow.error == "Backend busy"
        assert mapped_workflow.task_id is None

    def test_starts_exactly_one_poller(self, mock_api, upload_file):
        """Should start polling for the new job id."""
        poller = fake_poller()
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)

        workflow.submit_job()

        poller.start.assert_called_once()
        assert poller.start.call_args.args[0] == "task-1"
        assert workflow.poll_handle.job_id == "task-1"

    def test_new_job_cancels_previous_poller(self, mock_api, upload_file):
        """A second submission should cancel the first handle before starting."""
        poller = fake_poller()
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)
        workflow.submit_job()
        first = workflow.poll_handle
        mock_api.process_route_enrichment.return_value = mock_api.process_route_enrichment.return_value.model_copy(
            update={"task_id": "task-2"}
        )

        workflow.submit_job()

        first.cancel.assert_called_once()
        assert workflow.task_id == "task-2"
        assert workflow.poll_handle.job_id == "task-2"
        assert poller.start.call_count == 2


# ===================
# POLLING
# ===================

class TestPollStatus:
    """Tests for RouteDistanceWorkflow.poll_status()"""

    def test_progress_then_success(self, processing_workflow, mock_api):
        """10% -> 55% -> success should end complete with one terminal transition."""
        mock_api.get_task_status.side_effect = [
            make_status(percent=10, message="Reading file"),
            make_status(percent=55, message="Calculating"),
            make_status("SUCCESS", percent=100, result=make_result(total_rows=3)),
        ]

        processing_workflow.poll_status()
        assert (processing_workflow.progress, processing_workflow.progress_message) == (10, "Reading file")
        assert processing_workflow.step is Step.PROCESSING

        processing_workflow.poll_status()
        assert processing_workflow.progress == 55
        assert processing_workflow.step is Step.PROCESSING

        processing_workflow.poll_status()
        assert processing_workflow.step is Step.COMPLETE
        assert processing_workflow.result.stats.total_rows == 3
        assert len(terminal_transitions(processing_workflow)) == 1

    def test_no_poll_after_terminal(self, processing_workflow, mock_api):
        """Polling after completion should not hit the server."""
        mock_api.get_task_status.return_value = make_status("SUCCESS", result=make_result())
        processing_workflow.poll_status()

        assert processing_workflow.poll_status() is None
        assert mock_api.get_task_status.call_count == 1

    def test_failure_uses_server_message(self, processing_workflow, mock_api):
        """FAILURE should go to error with the server's message."""
        mock_api.get_task_status.return_value = make_status("FAILURE", message="Bad ZIP column")

        processing_workflow.poll_status()

        assert processing_workflow.step is Step.ERROR
        assert processing_workflow.error == "Bad ZIP column"

    def test_failure_without_message(self, processing_workflow, mock_api):
        """FAILURE without a message should say 'Processing failed'."""
        mock_api.get_task_status.return_value = make_status("FAILURE", message=None)

        processing_workflow.poll_status()

        assert processing_workflow.error == "Processing failed"

    def test_transport_error_goes_to_error_and_stops_polling(self, mock_api, upload_file):
        """A network error should surface, go to error and cancel the handle."""
        poller = fake_poller()
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)
        workflow.submit_job()
        handle = workflow.poll_handle
        mock_api.get_task_status.side_effect = ApiError("Could not reach the server: connection refused")

        workflow.poll_status()

        assert workflow.step is Step.ERROR
        assert workflow.error == "Could not reach the server: connection refused"
        handle.cancel.assert_called_once()
        assert workflow.poll_handle is None

    def test_success_cancels_handle(self, mock_api, upload_file):
        """Reaching complete should cancel the polling handle."""
        poller = fake_poller()
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)
        workflow.submit_job()
        handle = workflow.poll_handle

        stop = workflow._apply_status("task-1", make_status("SUCCESS", result=make_result()))

        assert stop is True
        handle.cancel.assert_called_once()

    def test_stale_job_response_discarded(self, processing_workflow):
        """A response for another job id should change nothing."""
        stop = processing_workflow._apply_status("old-task", make_status("SUCCESS", result=make_result()))

        assert stop is True
        assert processing_workflow.step is Step.PROCESSING
        assert processing_workflow.task_status is None

    def test_late_error_after_reset_discarded(self, processing_workflow):
        """An error arriving after reset should not resurrect the job."""
        processing_workflow.reset()

        processing_workflow._apply_poll_error("task-1", ApiError("timeout"))

        assert processing_workflow.step is Step.UPLOAD
        assert processing_workflow.error is None

    def test_runs_with_real_poller(self, mock_api, upload_file):
        """Background polling should drive the job to complete."""
        mock_api.get_task_status.side_effect = [
            make_status(percent=10),
            make_status(percent=55),
            make_status("SUCCESS", percent=100, result=make_result()),
        ]
        poller = StatusPoller(mock_api.get_task_status, interval=0.01)
        handles = []
        start = poller.start
        poller.start = lambda *args: handles.append(start(*args)) or handles[-1]
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)

        workflow.submit_job()
        handles[0].join(timeout=5)

        assert workflow.step is Step.COMPLETE
        assert mock_api.get_task_status.call_count == 3
        assert len(terminal_transitions(workflow)) == 1


class TestUnexpectedResponses:
    """Malformed bodies and unexpected exceptions, through the real client and poller."""

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    @pytest.fixture
    def real_api(self, session):
        return RouteDistanceApi(ApiClient("http://api.local", timeout=5, session=session))

    @staticmethod
    def capture_handles(poller: StatusPoller) -> list:
        handles = []
        start = poller.start
        poller.start = lambda *args: handles.append(start(*args)) or handles[-1]
        return handles

    def test_malformed_status_body_ends_in_error(self, session, real_api, upload_file):
        """A 200 status reply that does not parse should end the job in error and stop polling."""
        session.request.side_effect = [
            http_response(json.dumps({"filename": "routes.csv", "columns": COLUMNS, "field_suggestions": SUGGESTIONS}).encode()),
            http_response(b'{"task_id": "task-1", "message": "queued"}'),
            http_response(b"<html>proxy error</html>"),
        ]
        poller = StatusPoller(real_api.get_task_status, interval=0.01)
        handles = self.capture_handles(poller)
        workflow = RouteDistanceWorkflow(real_api, poller)
        assert workflow.submit_file(upload_file)
        assert workflow.submit_job()

        handles[0].join(timeout=5)

        assert workflow.step is Step.ERROR
        assert workflow.error == "Unexpected response from server"
        assert not handles[0].running
        assert workflow.poll_handle is None
        assert session.request.call_count == 3

    def test_malformed_upload_body_stays_on_upload(self, session, real_api, upload_file):
        session.request.return_value = http_response(b"<html>proxy error</html>")
        workflow = RouteDistanceWorkflow(real_api)

        assert workflow.submit_file(upload_file) is False

        assert workflow.step is Step.UPLOAD
        assert workflow.file is None
        assert workflow.error == "Unexpected response from server"

    def test_unexpected_fetch_failure_ends_in_error(self, mock_api, upload_file):
        """Any exception from the status call should reach the workflow as an error."""
        mock_api.get_task_status.side_effect = RuntimeError("socket closed")
        poller = StatusPoller(mock_api.get_task_status, interval=0.01)
        handles = self.capture_handles(poller)
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)
        workflow.submit_job()

        handles[0].join(timeout=5)

        assert workflow.step is Step.ERROR
        assert workflow.error == "Failed to check task status"
        assert not handles[0].running


# ===================
# RESULT
# ===================

class TestResult:
    """Tests for download, retry and derived values after completion."""

    @pytest.fixture
    def complete_workflow(self, processing_workflow, mock_api):
        mock_api.get_task_status.return_value = make_status(
            "SUCCESS",
            percent=100,
            result=make_result(
                total_rows=10,
                failed_routes=[{"origin": "100", "destination": "200", "reason": "No road"}],
                missing_routes=[{"origin": "300", "destination": "400", "reason": "Missing ZIP"}],
            ),
        )
        processing_workflow.poll_status()
        return processing_workflow

    def test_download_returns_bytes(self, complete_workflow, mock_api):
        """Should fetch the enriched file by result filename."""
        mock_api.download_enriched_file.return_value = b"xlsx-bytes"

        download = complete_workflow.download_result()

        assert download.filename == "routes_enriched.xlsx"
        assert download.content == b"xlsx-bytes"
        assert complete_workflow.download is download
        mock_api.download_enriched_file.assert_called_once_with("routes_enriched.xlsx")

    def test_download_without_result(self, mapped_workflow, mock_api):
        """Should refuse with 'No result file available'."""
        assert mapped_workflow.download_result() is None

        assert mapped_workflow.error == "No result file available"
        mock_api.download_enriched_file.assert_not_called()

    def test_download_failure_keeps_step(self, complete_workflow, mock_api):
        """Download failure should surface an error and stay complete."""
        mock_api.download_enriched_file.side_effect = ApiError("Not Found", status_code=404)

        assert complete_workflow.download_result() is None

        assert complete_workflow.step is Step.COMPLETE
        assert complete_workflow.error == "Not Found"

    def test_known_bad_falls_back_to_failed_routes(self, complete_workflow):
        """Without stats.known_bad_routes the failed routes are used."""
        assert complete_workflow.known_bad_routes == [
            RouteIssue(origin="100", destination="200", reason="No road")
        ]
        assert complete_workflow.missing_routes[0].reason == "Missing ZIP"

    def test_known_bad_prefers_stats(self, processing_workflow, mock_api):
        """stats.known_bad_routes should win over failed_routes."""
        mock_api.get_task_status.return_value = make_status(
            "SUCCESS",
            result=make_result(
                failed_routes=[{"origin": "1", "destination": "2", "reason": "x"}],
                known_bad_routes=[{"origin": "9", "destination": "8", "reason": "Ocean"}],
            ),
        )
        processing_workflow.poll_status()

        assert [r.origin for r in processing_workflow.known_bad_routes] == ["9"]

    def test_retry_failed_routes(self, complete_workflow, mock_api):
        """Should post the known-bad routes once and keep the summary."""
        mock_api.retry_failures.return_value = RetrySummary(updated=1, successes=1, failures=0)

        summary = complete_workflow.retry_failed_routes()

        assert summary.successes == 1
        assert complete_workflow.retry_summary is summary
        mock_api.retry_failures.assert_called_once_with(complete_workflow.known_bad_routes)

    def test_retry_failure_keeps_step(self, complete_workflow, mock_api):
        """Retry failure should surface an error without a transition."""
        mock_api.retry_failures.side_effect = ApiError("Retry unavailable")

        assert complete_workflow.retry_failed_routes() is None

        assert complete_workflow.step is Step.COMPLETE
        assert complete_workflow.error == "Retry unavailable"


# ===================
# RESET / RECOVERY
# ===================

class TestResetAndRecovery:
    """Tests for reset() and clear_error()"""

    def test_reset_clears_everything_and_stops_poller(self, mock_api, upload_file):
        """Reset should empty all fields, cancel polling and return to upload."""
        poller = fake_poller()
        workflow = RouteDistanceWorkflow(mock_api, poller)
        workflow.submit_file(upload_file)
        workflow.submit_job()
        handle = workflow.poll_handle
        workflow.error = "stale"

        workflow.reset()

        assert workflow.step is Step.UPLOAD
        assert workflow.file is None
        assert workflow.upload_data is None
        assert workflow.field_mapping == FieldMapping()
        assert workflow.task_id is None
        assert workflow.task_status is None
        assert workflow.error is None
        assert workflow.download is None
        assert workflow.progress == 0
        handle.cancel.assert_called_once()
        assert workflow.poll_handle is None

    def test_failed_job_leaves_error_only_through_reset(self, processing_workflow, mock_api):
        """A failed job is terminal: the next step is upload, via reset."""
        mock_api.get_task_status.return_value = make_status("FAILURE", message="boom")
        processing_workflow.poll_status()

        processing_workflow.reset()

        from_error = [t for t in processing_workflow.transitions if t[0] is Step.ERROR]
        assert from_error == [(Step.ERROR, Step.UPLOAD)]
        assert processing_workflow.upload_data is None

    def test_clear_error_keeps_step(self, workflow):
        """clear_error should only drop the message."""
        workflow.submit_job()

        workflow.clear_error()

        assert workflow.error is None
        assert workflow.step is Step.UPLOAD

    @pytest.mark.parametrize("step, index", [
        (Step.UPLOAD, 0),
        (Step.MAPPING, 1),
        (Step.PROCESSING, 2),
        (Step.COMPLETE, 3),
        (Step.ERROR, 1),
    ])
    def test_active_step_index(self, workflow, step, index):
        """Error should show on the mapping step."""
        workflow.step = step
        assert workflow.active_step_index == index
