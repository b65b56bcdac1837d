"""
Custom exception hierarchy for centralized error handling.
All exceptions map to appropriate HTTP status codes.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class InvalidConfigurationError(AppException):
    """Ranking parameters that cannot produce rankings."""

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        super().__init__(
            message=f"Invalid ranking configuration: {parameter}={value!r} ({reason})",
            status_code=500,
            error_code="INVALID_CONFIGURATION",
            details={"parameter": parameter, "value": value, "reason": reason},
        )


class IneligibleRecordError(AppException):
    """Observation lacking usable view, like or dislike counts."""

    def __init__(self, reason: str, errors: Optional[list] = None) -> None:
        super().__init__(
            message=f"Observation is not eligible for storage: {reason}",
            status_code=422,
            error_code="INELIGIBLE_RECORD",
            details={"reason": reason, "errors": errors or []},
        )


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(
            message=f"{resource} not found: {identifier}",
            status_code=404,
            error_code="NOT_FOUND",
            details={"resource": resource, "identifier": identifier},
        )
