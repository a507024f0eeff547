"""
Route-distance enrichment workflow.

One instance per browser session (kept in ``st.session_state``). The step
moves upload -> mapping -> processing -> complete, with error reachable from
processing. Network calls run outside the lock; their results are applied
under it, and poll results are only applied for the current job id while the
step is still processing.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

import structlog

from errors import AppError, WorkflowError
from field_mapping import FieldMapping, can_submit_mapping
from polling import PollHandle, StatusPoller
from route_distance_api import RouteDistanceApi
from route_models import RetrySummary, RouteIssue, TaskResult, TaskState, TaskStatus, UploadResult
from upload_readers import UploadedFile

logger = structlog.get_logger(__name__)

MAPPING_INCOMPLETE = "Map a country and at least one ZIP field for both origin and destination"


class Step(str, Enum):
    UPLOAD = "upload"
    MAPPING = "mapping"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"


# Stepper position; a failed job is shown back on the mapping step
STEP_INDEX = {
    Step.UPLOAD: 0,
    Step.MAPPING: 1,
    Step.PROCESSING: 2,
    Step.COMPLETE: 3,
    Step.ERROR: 1,
}


@dataclass(frozen=True)
class DownloadedFile:
    filename: str
    content: bytes


class RouteDistanceWorkflow:
    def __init__(self, api: RouteDistanceApi, poller: Optional[StatusPoller] = None):
        self.api = api
        self.poller = poller
        self.transitions: list[tuple[Step, Step]] = []
        self._lock = threading.RLock()
        self._handle: Optional[PollHandle] = None
        self._clear()

    def _clear(self) -> None:
        self.step = Step.UPLOAD
        self.file: Optional[UploadedFile] = None
        self.upload_data: Optional[UploadResult] = None
        self.field_mapping = FieldMapping()
        self.task_id: Optional[str] = None
        self.task_status: Optional[TaskStatus] = None
        self.error: Optional[str] = None
        self.download: Optional[DownloadedFile] = None
        self.retry_summary: Optional[RetrySummary] = None

    # ===================
    # OPERATIONS
    # ===================

    def submit_file(self, file: UploadedFile) -> bool:
        """Upload ``file``; on success the mapping is pre-filled from the server's suggestions."""
        with self._lock:
            self.error = None
            self.file = file

        try:
            data = self.api.upload_route_file(file)
        except AppError as e:
            with self._lock:
                self._fail(e, "Failed to upload file")
                self.file = None
            return False

        with self._lock:
            self.upload_data = data
            self.field_mapping = FieldMapping(**data.field_suggestions.model_dump())
            self._transition(Step.MAPPING)
        return True

    def update_mapping(self, partial: Mapping[str, Optional[str]]) -> None:
        with self._lock:
            self.field_mapping = self.field_mapping.merged(partial)

    def submit_job(self) -> bool:
        """Start processing the uploaded file with the current mapping."""
        try:
            with self._lock:
                filename, mapping = self._job_request()
                self.error = None
            response = self.api.process_route_enrichment(filename, mapping)
        except AppError as e:
            with self._lock:
                self._fail(e, "Failed to start processing")
            return False

        with self._lock:
            self._cancel_polling()
            self.task_id = response.task_id
            self.task_status = None
            self.download = None
            self.retry_summary = None
            self._transition(Step.PROCESSING)
            if self.poller is not None:
                self._handle = self.poller.start(
                    response.task_id, self._apply_status, self._apply_poll_error
                )
        return True

    def poll_status(self) -> Optional[TaskStatus]:
        """One status request for the current job; None when nothing was applied."""
        with self._lock:
            job_id = self.task_id
            if self.step is not Step.PROCESSING or job_id is None:
                return None

        try:
            status = self.api.get_task_status(job_id)
        except AppError as e:
            self._apply_poll_error(job_id, e)
            return None

        self._apply_status(job_id, status)
        return status

    def download_result(self) -> Optional[DownloadedFile]:
        try:
            with self._lock:
                filename = self._result_filename()
            content = self.api.download_enriched_file(filename)
        except AppError as e:
            with self._lock:
                self._fail(e, "Failed to download file")
            return None

        with self._lock:
            self.download = DownloadedFile(filename=filename, content=content)
            return self.download

    def retry_failed_routes(self) -> Optional[RetrySummary]:
        """Send the job's failed routes back for one more attempt."""
        try:
            with self._lock:
                routes = self.known_bad_routes
                if not routes:
                    raise WorkflowError("No failed routes to retry", step=self.step.value)
            summary = self.api.retry_failures(routes)
        except AppError as e:
            with self._lock:
                self._fail(e, "Failed to retry routes")
            return None

        with self._lock:
            self.retry_summary = summary
            return summary

    def reset(self) -> None:
        with self._lock:
            self._cancel_polling()
            previous = self.step
            self._clear()
            if previous is not Step.UPLOAD:
                self.transitions.append((previous, Step.UPLOAD))
            logger.info("workflow_reset", previous_step=previous.value)

    def clear_error(self) -> None:
        with self._lock:
            self.error = None

    # ===================
    # DERIVED
    # ===================

    @property
    def can_process(self) -> bool:
        return self.upload_data is not None and can_submit_mapping(self.field_mapping)

    def can_submit_mapping(self) -> bool:
        return can_submit_mapping(self.field_mapping)

    @property
    def is_processing(self) -> bool:
        return self.step is Step.PROCESSING

    @property
    def progress(self) -> int:
        return self.task_status.percent if self.task_status else 0

    @property
    def progress_message(self) -> str:
        return self.task_status.message if self.task_status else ""

    @property
    def result(self) -> Optional[TaskResult]:
        return self.task_status.result if self.task_status else None

    @property
    def known_bad_routes(self) -> list[RouteIssue]:
        result = self.result
        if result is None:
            return []
        return list(result.stats.known_bad_routes or result.failed_routes)

    @property
    def missing_routes(self) -> list[RouteIssue]:
        result = self.result
        return list(result.stats.missing_routes) if result else []

    @property
    def active_step_index(self) -> int:
        return STEP_INDEX[self.step]

    @property
    def poll_handle(self) -> Optional[PollHandle]:
        return self._handle

    # ===================
    # INTERNALS
    # ===================

    def _apply_status(self, job_id: str, status: TaskStatus) -> bool:
        """Apply one poll response; True once polling for ``job_id`` should stop."""
        with self._lock:
            if job_id != self.task_id or self.step is not Step.PROCESSING:
                logger.debug("stale_status_discarded", job_id=job_id, step=self.step.value)
                return True

            self.task_status = status
            if status.state is TaskState.SUCCESS:
                self._transition(Step.COMPLETE)
                self._cancel_polling()
                return True
            if status.state is TaskState.FAILURE:
                self.error = status.message or "Processing failed"
                self._transition(Step.ERROR)
                self._cancel_polling()
                return True
            return False

    def _apply_poll_error(self, job_id: str, error: AppError) -> None:
        with self._lock:
            if job_id != self.task_id or self.step is not Step.PROCESSING:
                return
            self._fail(error, "Failed to check task status")
            self._transition(Step.ERROR)
            self._cancel_polling()

    def _job_request(self) -> tuple[str, FieldMapping]:
        if self.upload_data is None:
            raise WorkflowError("No file uploaded", step=self.step.value)
        if not can_submit_mapping(self.field_mapping):
            raise WorkflowError(MAPPING_INCOMPLETE, step=self.step.value)
        return self.upload_data.filename, self.field_mapping

    def _result_filename(self) -> str:
        result = self.result
        if result is None or not result.filename:
            raise WorkflowError("No result file available", step=self.step.value)
        return result.filename

    def _transition(self, target: Step) -> None:
        previous = self.step
        self.step = target
        self.transitions.append((previous, target))
        logger.info("workflow_transition", from_step=previous.value, to_step=target.value, task_id=self.task_id)

    def _fail(self, error: AppError, fallback: str) -> None:
        self.error = error.message or fallback
        logger.warning("workflow_error", code=error.code, error=self.error, step=self.step.value)

    def _cancel_polling(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
