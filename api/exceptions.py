"""Custom exceptions and error handling."""

from typing import Any

from fastapi import status

from emulation.exceptions import (
    CriteriaTreeError,
    EmulationScoringError,
    PermissionDeniedError,
    WorkflowError,
)


class AppError(Exception):
    """Base exception for the scoring API."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppError):
    """Input is well-formed but cannot be scored."""

    def __init__(
        self,
        message: str,
        code: str = "validation_error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class AuthorizationError(AppError):
    """Authorization failed."""

    def __init__(self, message: str = "Permission denied", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="authorization_error",
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ConflictError(AppError):
    """Resource state conflict."""

    def __init__(
        self,
        message: str,
        code: str = "conflict",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


def to_app_error(exc: EmulationScoringError) -> AppError:
    """Translate a domain error into the API error raised to the client."""
    if isinstance(exc, WorkflowError):
        return ConflictError(exc.message, code=exc.code, details=exc.details)
    if isinstance(exc, PermissionDeniedError):
        return AuthorizationError(exc.message, details=exc.details)
    if isinstance(exc, CriteriaTreeError):
        return ValidationError(exc.message, code=exc.code, details=exc.details)
    return AppError(
        exc.message,
        code=exc.code,
        status_code=status.HTTP_400_BAD_REQUEST,
        details=exc.details,
    )
