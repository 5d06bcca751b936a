"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    ACCOUNT_BANNED = "ACCOUNT_BANNED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    REPORT_NOT_FOUND = "REPORT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNDERAGE = "UNDERAGE"
    CHAT_NOT_ENABLED = "CHAT_NOT_ENABLED"

    # Conflict errors (409)
    ALREADY_SWIPED = "ALREADY_SWIPED"
    REPORT_ALREADY_RESOLVED = "REPORT_ALREADY_RESOLVED"
    INVALID_MATCH_TRANSITION = "INVALID_MATCH_TRANSITION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/502)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class MatchNotFoundError(AppException):
    """Match not found."""

    def __init__(self, match_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.MATCH_NOT_FOUND,
            message=f"Match not found: {match_id}",
            status_code=404,
            details={"match_id": match_id},
        )


class ReportNotFoundError(AppException):
    """Reported content not found."""

    def __init__(self, report_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.REPORT_NOT_FOUND,
            message=f"Report not found: {report_id}",
            status_code=404,
            details={"report_id": report_id},
        )


class UserNotFoundError(AppException):
    """Auth user not found in the identity service."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ValidationError(AppException):
    """Client-side input failed validation before reaching storage."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        step: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if step is not None:
            details["step"] = step
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=details or None,
        )


class UnderageError(AppException):
    """Birthdate yields an age below the minimum."""

    def __init__(self, minimum_age: int, step: int | None = None) -> None:
        details: dict[str, Any] = {"field": "birthdate", "minimum_age": minimum_age}
        if step is not None:
            details["step"] = step
        super().__init__(
            error_code=ErrorCode.UNDERAGE,
            message=f"You must be at least {minimum_age} years old to use this service",
            status_code=400,
            details=details,
        )


class AlreadySwipedError(AppException):
    """The swiper has already swiped on this profile."""

    def __init__(self, swiped_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_SWIPED,
            message="You have already swiped on this profile",
            status_code=409,
            details={"swiped_id": swiped_id},
        )


class ChatNotEnabledError(AppException):
    """Messages are only readable on a matched pair."""

    def __init__(self, match_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CHAT_NOT_ENABLED,
            message="Chat is only available once both users have matched",
            status_code=400,
            details={"match_id": match_id},
        )


class InvalidMatchTransitionError(AppException):
    """Match status cannot move to the requested state."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_MATCH_TRANSITION,
            message=f"Cannot change match status from '{current}' to '{target}'",
            status_code=409,
            details={"current": current, "target": target},
        )


class ReportAlreadyResolvedError(AppException):
    """Report was already resolved with a different decision."""

    def __init__(self, report_id: str, status: str) -> None:
        super().__init__(
            error_code=ErrorCode.REPORT_ALREADY_RESOLVED,
            message=f"Report already resolved as '{status}'",
            status_code=409,
            details={"report_id": report_id, "status": status},
        )


class StorageError(AppException):
    """A call to the backing storage or identity service failed."""

    def __init__(self, message: str = "Storage service request failed", details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=message,
            status_code=502,
            details=details,
        )
