from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

ERROR_STATUS_MAP = {
    "BAD_REQUEST": status.HTTP_400_BAD_REQUEST,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}
DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST


def status_for_code(code: str) -> int:
    return ERROR_STATUS_MAP.get(code.strip().upper(), DEFAULT_ERROR_STATUS)


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": type(details).__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Build the error envelope every endpoint returns::

        {"error": {"code": ..., "message": ..., "status": ..., "details"?, "hint"?}}

    ``http_status`` overrides the status derived from ``code``.
    """
    if not isinstance(code, str) or not code.strip():
        raise ValueError("error_response requires a non-empty code")
    if not isinstance(message, str) or not message.strip():
        raise ValueError("error_response requires a non-empty message")

    status_code = int(http_status) if http_status is not None else status_for_code(code)
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    error: Dict[str, Any] = {
        "code": code.strip().upper(),
        "message": message.strip(),
        "status": status_code,
    }
    if details is not None:
        error["details"] = _normalize_details(details)
    if hint is not None:
        error["hint"] = hint

    headers_dict = {str(k): str(v) for k, v in headers.items()} if headers else None
    return Response({"error": error}, status=status_code, headers=headers_dict)
