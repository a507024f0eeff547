"""
Exception classes for the application.

Every error ends up in the UI as one human-readable string (``message``).
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        code: Error code (e.g., "API_ERROR")
        message: Human-readable message
        status_code: HTTP status code, when one applies
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ApiError(AppError):
    """Backend call failed: non-2xx response or transport failure."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        endpoint: Optional[str] = None
    ):
        super().__init__(
            code="API_ERROR",
            message=message,
            status_code=status_code,
            details={"endpoint": endpoint} if endpoint else None
        )


class WorkflowError(AppError):
    """Operation not allowed in the current workflow state."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(
            code="WORKFLOW_ERROR",
            message=message,
            status_code=409,
            details={"step": step} if step else None
        )
