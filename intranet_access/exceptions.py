"""Errors raised by the access service's HTTP layer.

The policy engine never raises: a denial is a normal ``Decision``. These
exceptions exist for the enforcement layer, which turns a denial, a bad
token, or a missing record into an HTTP response. Each subclass fixes its
error code and status; the body shape is always ``to_dict()``.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable ``error`` values of API error bodies."""

    FORM_NOT_FOUND = "FORM_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PortalException(Exception):
    """Base class: message, error code, HTTP status, and optional details."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class FormNotFoundError(PortalException):
    error_code = ErrorCode.FORM_NOT_FOUND
    status_code = 404

    def __init__(self, form_id: str):
        super().__init__(f"Form not found: {form_id}", {"form_id": form_id})


class UserNotFoundError(PortalException):
    error_code = ErrorCode.USER_NOT_FOUND
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}", {"user_id": user_id})


class RouteNotFoundError(PortalException):
    """The admin route is not in the catalog."""

    error_code = ErrorCode.ROUTE_NOT_FOUND
    status_code = 404

    def __init__(self, route: str):
        super().__init__(f"Unknown admin route: {route}", {"route": route})


class ValidationError(PortalException):
    error_code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)


class AuthenticationError(PortalException):
    """Missing, invalid, or expired token, or a token for an unusable profile."""

    error_code = ErrorCode.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(message)


class ForbiddenError(PortalException):
    """The policy engine denied the request.

    ``reason`` is the engine's machine-readable denial reason and is exposed
    to clients as ``details.reason``.
    """

    error_code = ErrorCode.FORBIDDEN
    status_code = 403

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        reason: Optional[str] = None,
    ):
        super().__init__(message, {"reason": reason} if reason else None)


class DatabaseError(PortalException):
    error_code = ErrorCode.DATABASE_ERROR
    status_code = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, {"original_error": str(original_error)} if original_error else None)
