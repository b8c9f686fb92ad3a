"""Turn client failures into one-line, human-readable messages."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from halkit.errors.base import (
    ConnectionError,
    HalKitError,
    HTTPStatusError,
    RequestTimeoutError,
)

STATUS_MESSAGES: dict[int, str] = {
    400: "Bad request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    409: "Conflicting change, reload and try again",
    500: "Internal server error",
    502: "Bad gateway",
    503: "Service temporarily unavailable",
}


def _body_message(body: Any) -> str:
    if isinstance(body, str):
        return body.strip()
    if isinstance(body, Mapping):
        for key in ("message", "error"):
            if body.get(key):
                value = body[key]
                if isinstance(value, list):
                    return ", ".join(str(v) for v in value)
                return str(value)
    return ""


def format_error(error: Any) -> str:
    """Render any error value raised or returned by halkit as a short message."""
    if error is None or error == "":
        return "Unknown error"

    if isinstance(error, HTTPStatusError):
        status_message = STATUS_MESSAGES.get(error.status_code, f"HTTP error {error.status_code}")
        detail = _body_message(error.body)
        return f"{status_message}: {detail}" if detail else status_message

    if isinstance(error, RequestTimeoutError):
        return f"Request timed out: {error.message}"

    if isinstance(error, ConnectionError):
        return f"Could not reach the API server: {error.message}"

    if isinstance(error, HalKitError):
        return error.message

    if isinstance(error, BaseException):
        return str(error) or error.__class__.__name__

    if isinstance(error, str):
        return error

    return "Unknown error"
