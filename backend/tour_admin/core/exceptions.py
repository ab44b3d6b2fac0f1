"""
Error codes, the `{error}` result value and the exceptions raised in the HTTP layer

Backend calls and dispatch handlers return errors as values; only the HTTP
layer (dependencies, middleware) raises, and every raised `AppException`
is rendered with the same `{"success": False, "error": {...}}` shape.
"""
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    """Standard error codes for the application"""

    # Authentication (1xxx)
    INVALID_CREDENTIALS = "AUTH_1001"
    TOKEN_EXPIRED = "AUTH_1002"
    INVALID_TOKEN = "AUTH_1003"
    INSUFFICIENT_PERMISSIONS = "AUTH_1004"

    # Rate Limiting (3xxx)
    RATE_LIMIT_EXCEEDED = "RATE_3001"

    # Remote backend (5xxx)
    BACKEND_NOT_CONFIGURED = "BACKEND_5000"
    BACKEND_UNAVAILABLE = "BACKEND_5001"
    BACKEND_TIMEOUT = "BACKEND_5002"
    BACKEND_HTTP_ERROR = "BACKEND_5003"
    BACKEND_REJECTED = "BACKEND_5004"

    # Validation (6xxx)
    INVALID_INPUT = "VAL_6001"
    NOT_FOUND = "VAL_6004"

    # Internal Errors (9xxx)
    INTERNAL_SERVER_ERROR = "SYS_9001"
    SERVICE_UNAVAILABLE = "SYS_9002"


def error_result(
    status_code: Optional[int],
    message: str,
    code: Optional[ErrorCode] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """Build the `{"error": {...}}` value returned instead of raising."""
    error: Dict[str, Any] = {"status": status_code, "message": message}
    if code is not None:
        error["code"] = code.value
    if details is not None:
        error["details"] = details
    return {"error": error}


def is_error(result: Any) -> bool:
    """True when `result` is the `{error}` shape rather than data."""
    return isinstance(result, dict) and "error" in result and result["error"] is not None


def error_status(result: Any) -> Optional[int]:
    if not is_error(result):
        return None
    error = result["error"]
    if isinstance(error, dict):
        return error.get("status")
    return None


class AppException(Exception):
    """
    Base exception for errors raised in the HTTP layer

    `user_message` is sent to the browser, `internal_message` only reaches
    the log. Subclasses set the status, code and default message.
    """

    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR
    default_message: ClassVar[str] = "Unexpected error"

    def __init__(
        self,
        user_message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        internal_message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.user_message = user_message or self.default_message
        self.internal_message = internal_message or self.user_message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code  # type: ignore[misc]
        self.details = details or {}
        self.headers = headers

        super().__init__(self.internal_message)

    def to_dict(self) -> Dict[str, Any]:
        """JSON body: the dispatch-result shape with `success: False`."""
        body = error_result(self.status_code, self.user_message, self.error_code, self.details or None)
        return {"success": False, **body}


class AuthenticationError(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Authentication required"


class ValidationError(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.INVALID_INPUT
    default_message = "Invalid input data"

    def __init__(
        self,
        user_message: Optional[str] = None,
        field: Optional[str] = None,
        internal_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(user_message, internal_message=internal_message, details=details)


class RateLimitError(AppException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error_code = ErrorCode.RATE_LIMIT_EXCEEDED
    default_message = "Too many attempts, please try again later"

    def __init__(
        self,
        user_message: Optional[str] = None,
        internal_message: Optional[str] = None,
        retry_after: Optional[int] = None,
    ):
        self.retry_after = retry_after
        super().__init__(
            user_message,
            internal_message=internal_message,
            details={"retry_after": retry_after} if retry_after else None,
            headers={"Retry-After": str(retry_after)} if retry_after else None,
        )


STATUS_ERROR_CODES = {
    400: ErrorCode.INVALID_INPUT,
    401: ErrorCode.INVALID_TOKEN,
    403: ErrorCode.INSUFFICIENT_PERMISSIONS,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.INVALID_INPUT,
    413: ErrorCode.INVALID_INPUT,
    429: ErrorCode.RATE_LIMIT_EXCEEDED,
    502: ErrorCode.BACKEND_UNAVAILABLE,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def http_exception_to_app_exception(exc: HTTPException) -> AppException:
    """Starlette/FastAPI `HTTPException` (404s, 405s, explicit raises) as an `AppException`"""
    return AppException(
        user_message=str(exc.detail),
        error_code=STATUS_ERROR_CODES.get(exc.status_code, ErrorCode.INTERNAL_SERVER_ERROR),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )
