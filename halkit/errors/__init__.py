"""halkit error handling.

Provides the exception hierarchy with error codes and a formatter that turns
client failures into user-facing messages.
"""

from halkit.errors.base import (
    ActionNotAvailableError,
    ConnectionError,
    ErrorCode,
    ErrorContext,
    HalKitError,
    HTTPStatusError,
    InvalidTransitionError,
    LinkNotFoundError,
    MalformedLinkError,
    MalformedResourceError,
    RequestTimeoutError,
    StateInconsistencyError,
    TemplateError,
    UnknownStatusError,
)
from halkit.errors.formatting import format_error

__all__ = [
    "ActionNotAvailableError",
    "ConnectionError",
    "ErrorCode",
    "ErrorContext",
    "HTTPStatusError",
    "HalKitError",
    "InvalidTransitionError",
    "LinkNotFoundError",
    "MalformedLinkError",
    "MalformedResourceError",
    "RequestTimeoutError",
    "StateInconsistencyError",
    "TemplateError",
    "UnknownStatusError",
    "format_error",
]
