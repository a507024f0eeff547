"""
HTTP client for the backend REST API.

Every failure is raised as ApiError carrying one readable message. That
includes transport problems and success responses whose JSON body does not
parse.
"""

from typing import Any, Mapping, Optional

import requests
import structlog

from errors import ApiError

logger = structlog.get_logger(__name__)


def error_message(response: requests.Response) -> str:
    """
    Readable message for a failed response.

    JSON bodies contribute their ``detail`` or ``message``; a body that is not
    JSON falls back to the HTTP reason phrase.
    """
    fallback = f"HTTP error! status: {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        return response.reason or fallback

    if isinstance(data, dict):
        for key in ("detail", "message"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


class ApiClient:
    """Thin wrapper over a requests.Session bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def url(self, endpoint: str) -> str:
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return f"{self.base_url}{endpoint}"

    # ===================
    # PUBLIC CALLS
    # ===================

    def get(self, endpoint: str, params: Optional[Mapping[str, str]] = None) -> Any:
        response = self._send("GET", endpoint, params=params)
        return self._json(response, endpoint)

    def post(self, endpoint: str, data: Any = None) -> Any:
        response = self._send("POST", endpoint, json=data)
        return self._json(response, endpoint)

    def post_form(self, endpoint: str, fields: Mapping[str, str]) -> Any:
        """POST fields as multipart/form-data (no file part)."""
        files = {key: (None, value) for key, value in fields.items()}
        response = self._send("POST", endpoint, files=files)
        return self._json(response, endpoint)

    def upload(
        self,
        endpoint: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None,
        additional_data: Optional[Mapping[str, str]] = None
    ) -> Any:
        file_part = (filename, content, content_type) if content_type else (filename, content)
        response = self._send(
            "POST",
            endpoint,
            files={"file": file_part},
            data=dict(additional_data or {}),
        )
        return self._json(response, endpoint)

    def download(self, endpoint: str) -> bytes:
        response = self._send("GET", endpoint)
        return response.content

    # ===================
    # INTERNALS
    # ===================

    def _send(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = self.url(endpoint)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.error("api_request_timeout", method=method, url=url)
            raise ApiError(f"Request timed out after {self.timeout:g}s", status_code=504, endpoint=endpoint) from e
        except requests.exceptions.RequestException as e:
            logger.error("api_request_failed", method=method, url=url, error=str(e))
            raise ApiError(f"Could not reach the server: {e}", endpoint=endpoint) from e

        if not response.ok:
            message = error_message(response)
            logger.warning(
                "api_error_response",
                method=method,
                url=url,
                status=response.status_code,
                message=message,
            )
            raise ApiError(message, status_code=response.status_code, endpoint=endpoint)

        logger.debug("api_request_ok", method=method, url=url, status=response.status_code)
        return response

    @staticmethod
    def _json(response: requests.Response, endpoint: str) -> Any:
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error("api_response_not_json", endpoint=endpoint, status=response.status_code)
            raise ApiError("Unexpected response from server", endpoint=endpoint) from e
