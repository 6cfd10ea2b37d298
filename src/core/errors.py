"""Error taxonomy and user-facing error classification."""

from enum import Enum

from pydantic import BaseModel, ValidationError

from src.core.db_client import DatabaseError, RecordNotFoundError


class RecordValidationError(ValueError):
    """A submitted field failed validation before any write happened."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    @classmethod
    def from_pydantic(cls, error: ValidationError) -> "RecordValidationError":
        """Build from the first failure reported by a Pydantic model."""
        first = error.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "record"
        message = first["msg"].removeprefix("Value error, ")
        return cls(field, message)


class SessionRequiredError(Exception):
    """The rider client has no live device session for a rider-scoped call."""


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Submission errors
    ERR_INVALID_FIELD = "ERR_INVALID_FIELD"
    ERR_INVALID_MOBILE = "ERR_INVALID_MOBILE"

    # Client session errors
    ERR_SESSION_REQUIRED = "ERR_SESSION_REQUIRED"

    # Store errors
    ERR_RIDER_NOT_FOUND = "ERR_RIDER_NOT_FOUND"
    ERR_RECORD_NOT_FOUND = "ERR_RECORD_NOT_FOUND"
    ERR_STORE_UNAVAILABLE = "ERR_STORE_UNAVAILABLE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity
    field: str | None = None


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Validation errors point at the offending field so the form can be corrected
    in place. Store errors surface as a generic retryable failure.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, RecordValidationError):
        if exception.field == "phone":
            return ErrorResponse(
                code=ErrorCode.ERR_INVALID_MOBILE,
                message="Mobile number must be exactly 10 digits.",
                suggestion="Enter the number without the country code or spaces.",
                severity=ErrorSeverity.LOW,
                field=exception.field,
            )
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_FIELD,
            message=f"Invalid value for {exception.field}: {exception.message}",
            suggestion="Correct the highlighted field and submit again.",
            severity=ErrorSeverity.LOW,
            field=exception.field,
        )

    if isinstance(exception, SessionRequiredError):
        return ErrorResponse(
            code=ErrorCode.ERR_SESSION_REQUIRED,
            message="Your session on this device has ended.",
            suggestion="Register again or sign back in to continue.",
            severity=ErrorSeverity.MEDIUM,
        )

    if isinstance(exception, RecordNotFoundError):
        error_str = str(exception).lower()
        if "rider_profiles" in error_str:
            return ErrorResponse(
                code=ErrorCode.ERR_RIDER_NOT_FOUND,
                message="Rider profile not found.",
                suggestion="Complete onboarding to create a rider profile.",
                severity=ErrorSeverity.MEDIUM,
            )
        return ErrorResponse(
            code=ErrorCode.ERR_RECORD_NOT_FOUND,
            message="The requested record was not found.",
            suggestion="Refresh and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, DatabaseError):
        return ErrorResponse(
            code=ErrorCode.ERR_STORE_UNAVAILABLE,
            message="Could not reach the data store.",
            suggestion="Please try again in a moment.",
            severity=ErrorSeverity.HIGH,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
