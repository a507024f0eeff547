"""
Background status polling for one processing job.

One daemon thread per handle runs a sequential loop: poll, apply, wait. The
next request is only issued after the previous response has been applied.
"""

import threading
import time
from typing import Callable, Optional

import structlog

from errors import ApiError
from route_models import TaskStatus

logger = structlog.get_logger(__name__)

FetchStatus = Callable[[str], TaskStatus]
OnStatus = Callable[[str, TaskStatus], bool]
OnError = Callable[[str, ApiError], None]


class PollHandle:
    """Abort handle for the polling task of a single job id."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def cancel(self) -> None:
        if not self._stop.is_set():
            logger.debug("poll_cancelled", job_id=self.job_id)
        self._stop.set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout``; True if cancelled meanwhile."""
        return self._stop.wait(timeout)

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)


class StatusPoller:
    """
    Starts polling tasks; ``fetch_status`` is usually ``RouteDistanceApi.get_task_status``.

    Fetch failures of any kind reach ``on_error``. A job still running after
    ``max_duration`` seconds is reported there too.
    """

    def __init__(self, fetch_status: FetchStatus, interval: float = 2.0, max_duration: Optional[float] = None):
        self.fetch_status = fetch_status
        self.interval = interval
        self.max_duration = max_duration

    def start(self, job_id: str, on_status: OnStatus, on_error: OnError) -> PollHandle:
        handle = PollHandle(job_id)
        thread = threading.Thread(
            target=self._run,
            args=(handle, on_status, on_error),
            name=f"poll-{job_id}",
            daemon=True,
        )
        handle._thread = thread
        thread.start()
        logger.info("poll_started", job_id=job_id, interval=self.interval, max_duration=self.max_duration)
        return handle

    def _fetch(self, job_id: str) -> TaskStatus:
        try:
            return self.fetch_status(job_id)
        except ApiError:
            raise
        except Exception as e:
            logger.exception("poll_status_unexpected_error", job_id=job_id)
            raise ApiError("Failed to check task status") from e

    def _run(self, handle: PollHandle, on_status: OnStatus, on_error: OnError) -> None:
        deadline = time.monotonic() + self.max_duration if self.max_duration else None
        while not handle.cancelled:
            try:
                status = self._fetch(handle.job_id)
            except ApiError as e:
                if not handle.cancelled:
                    logger.warning("poll_status_failed", job_id=handle.job_id, error=e.message)
                    on_error(handle.job_id, e)
                return

            if handle.cancelled:
                return
            if on_status(handle.job_id, status):
                logger.info("poll_finished", job_id=handle.job_id, state=status.state.value)
                return
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning("poll_timed_out", job_id=handle.job_id, max_duration=self.max_duration)
                on_error(handle.job_id, ApiError(
                    f"Task did not finish within {self.max_duration:g}s", status_code=504
                ))
                return
            if handle.wait(self.interval):
                return
