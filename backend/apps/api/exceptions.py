from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

SERVER_ERROR_MESSAGE = "Something went wrong"


class ApplicationError(Exception):
    """
    Error raised by services and views that maps straight onto an API response.

    Args:
        code: Machine readable error code, e.g. ``NOT_FOUND``.
        message: Human readable explanation.
        status_code: Explicit HTTP status. Falls back to the code mapping in
            ``apps.api.utils`` when omitted.
        details: Optional structured details for clients.
        hint: Optional remediation hint.
    """

    default_code = "SERVER_ERROR"
    default_status: Optional[int] = None

    def __init__(
        self,
        code: Optional[str] = None,
        message: str = SERVER_ERROR_MESSAGE,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status
        self.details = details
        self.hint = hint
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            headers=self.headers,
        )


class _KindError(ApplicationError):
    """Base for the fixed error kinds; callers only supply the message."""

    def __init__(self, message: Optional[str] = None, **kwargs: Any):
        super().__init__(self.default_code, message or self.default_message, **kwargs)

    default_message = SERVER_ERROR_MESSAGE


class NotFoundError(_KindError):
    default_code = "NOT_FOUND"
    default_status = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidRequestError(_KindError):
    default_code = "BAD_REQUEST"
    default_status = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class ForbiddenError(_KindError):
    default_code = "FORBIDDEN"
    default_status = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"


class InternalError(_KindError):
    default_code = "SERVER_ERROR"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = SERVER_ERROR_MESSAGE


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER`` that renders every failure in the error envelope."""
    log = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        if (exc.status_code or 0) >= 500:
            log.error("Application error", code=exc.code, status=exc.status_code)
        else:
            log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(getattr(exc, "message_dict", None) or list(exc.messages))

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            SERVER_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details = _describe(exc, response.data, response.status_code)
    log.info("Converted API exception", code=code, status=response.status_code)
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        headers=_passthrough_headers(response),
    )


def _passthrough_headers(response: Response) -> Optional[Dict[str, str]]:
    # WWW-Authenticate, Allow, Retry-After; the renderer sets Content-Type itself
    headers = {
        key: value
        for key, value in getattr(response, "headers", {}).items()
        if key.lower() != "content-type"
    }
    return headers or None


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _describe(exc: Exception, payload: Any, status_code: int) -> Tuple[str, str, Optional[Any]]:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", "Validation failed", payload
    if isinstance(exc, ParseError):
        return "VALIDATION_ERROR", _message(payload, "Malformed request"), None
    if isinstance(exc, AuthenticationFailed):
        return "UNAUTHORIZED", _message(payload, "Authentication failed"), None
    if isinstance(exc, NotAuthenticated):
        return "UNAUTHORIZED", _message(payload, "Authentication required"), None
    if isinstance(exc, (PermissionDenied, DjangoPermissionDenied)):
        return "FORBIDDEN", _message(payload, ForbiddenError.default_message), None
    if isinstance(exc, (NotFound, Http404)):
        return "NOT_FOUND", _message(payload, NotFoundError.default_message), None
    if isinstance(exc, MethodNotAllowed):
        return "METHOD_NOT_ALLOWED", _message(payload, "Method not allowed"), None
    if status_code >= 500:
        return "SERVER_ERROR", SERVER_ERROR_MESSAGE, None
    return "UNKNOWN_ERROR", _message(payload, "Request failed"), None


def _message(payload: Any, fallback: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    return fallback


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "InternalError",
    "InvalidRequestError",
    "NotFoundError",
    "global_exception_handler",
]
