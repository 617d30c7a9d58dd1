"""
Error body parsing and transport failure classification.
"""

import json
from typing import Any, Optional

import httpx

from ..exceptions import ErrorMessages
from ..models import ErrorResponse
from .filters import compact_json


def parse_error_code(value: Any) -> int:
    """Read ``error_code``; ints and int-like strings count, anything else is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def parse_error_detail(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return compact_json(value)


def parse_error_body(text: Optional[str]) -> ErrorResponse:
    """Turn a raw error body into an ``ErrorResponse``.

    JSON bodies contribute ``error_message``, ``error_code`` and ``errors``.
    Anything else is kept verbatim as the message with code 0.
    """
    if text is None or not text.strip():
        return ErrorResponse(message=ErrorMessages.NO_RESPONSE, code=0)

    try:
        body = json.loads(text)
    except ValueError:
        return ErrorResponse(message=text, code=0)

    if not isinstance(body, dict):
        return ErrorResponse(message=text, code=0)

    message = body.get("error_message")
    if not isinstance(message, str) or not message.strip():
        message = ErrorMessages.UNKNOWN_ERROR

    return ErrorResponse(
        message=message,
        code=parse_error_code(body.get("error_code")),
        detail=parse_error_detail(body.get("errors")),
    )


def classify_request_exception(exception: Exception) -> str:
    """Sort a send failure into ``timeout``, ``network`` or ``unknown``."""
    if isinstance(exception, httpx.TimeoutException):
        return "timeout"
    if isinstance(exception, (httpx.NetworkError, httpx.ProxyError, OSError)):
        return "network"
    return "unknown"


def describe_transport_failure(exception: Exception) -> str:
    """Message carried by a status-0 response when no HTTP status was received."""
    kind = classify_request_exception(exception)
    detail = str(exception) or exception.__class__.__name__
    if kind == "timeout":
        return f"Request timed out: {detail}"
    if kind == "network":
        return f"Network error: {detail}"
    return f"Request failed: {detail}"
