"""Exception hierarchy for halkit.

Every halkit error carries:
- error_code: an ErrorCode for programmatic handling
- context: ErrorContext with request/response/resource details
- suggestions: actionable steps to resolve the issue

Callers can branch on the class to tell "the server does not offer this
action" (ActionNotAvailableError) apart from "the request was made and
failed" (HTTPStatusError, ConnectionError).

Example:
    try:
        client.execute_action(post, "publish")
    except ActionNotAvailableError as e:
        print(f"Cannot publish, available: {e.available_actions}")
    except HTTPStatusError as e:
        print(f"HTTP {e.status_code}: {e.body}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for halkit.

    Error codes are organized by category:
    - E0xx: Connection errors
    - E1xx: Request errors
    - E2xx: Resource/link shape errors
    - E3xx: Hypermedia state errors
    - E9xx: Unknown/internal errors
    """

    # Connection errors (E0xx)
    CONNECTION_FAILED = "E001"

    # Request errors (E1xx)
    REQUEST_TIMEOUT = "E101"
    REQUEST_FAILED = "E102"

    # Shape errors (E2xx)
    MALFORMED_RESOURCE = "E201"
    MALFORMED_LINK = "E202"
    TEMPLATE_UNSUPPORTED = "E203"

    # Hypermedia state errors (E3xx)
    ACTION_NOT_AVAILABLE = "E301"
    LINK_NOT_FOUND = "E302"
    STATE_INCONSISTENT = "E303"
    UNKNOWN_STATUS = "E304"
    INVALID_TRANSITION = "E305"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 100:
            return "connection"
        elif code_num < 200:
            return "request"
        elif code_num < 300:
            return "shape"
        elif code_num < 400:
            return "state"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context captured when an error occurs.

    Attributes:
        request: HTTP request details (method, url, body)
        response: HTTP response details (status, body)
        resource_rel: The link relation being followed, if any
        extra: Additional context-specific information
        timestamp: When the error occurred
    """

    request: dict[str, Any] | None = None
    response: dict[str, Any] | None = None
    resource_rel: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "request": self.request,
            "response": self.response,
            "resource_rel": self.resource_rel,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}


class HalKitError(Exception):
    """Base exception for all halkit errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with execution details
        suggestions: List of actionable steps to resolve the issue
        recoverable: Whether retrying might succeed
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool = False,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [
            f"Error [{self.error_code.value}]: {self.message}",
        ]

        if self.context.request:
            method = self.context.request.get("method", "?")
            url = self.context.request.get("url", "?")
            lines.append(f"Request: {method} {url}")

        if self.context.response:
            status = self.context.response.get("status", "?")
            lines.append(f"Response: HTTP {status}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class ConnectionError(HalKitError):
    """The request never produced an HTTP response."""

    error_code = ErrorCode.CONNECTION_FAILED
    default_message = "Failed to establish connection"
    default_suggestions = [
        "Verify the API is running and reachable",
        "Check HALKIT_API_URL / HALKIT_ORIGIN match the API address",
    ]

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("recoverable", True)
        super().__init__(message=message, **kwargs)


class RequestTimeoutError(ConnectionError):
    """HTTP request timed out waiting for a response."""

    error_code = ErrorCode.REQUEST_TIMEOUT
    default_message = "HTTP request timed out"
    default_suggestions = [
        "Increase HALKIT_TIMEOUT",
        "Impose a deadline in the surrounding transport if the endpoint is slow",
    ]


class HTTPStatusError(HalKitError):
    """The server answered with a non-2xx status.

    ``body`` holds the raw response body: parsed JSON when the response
    declared a JSON media type, text otherwise.
    """

    error_code = ErrorCode.REQUEST_FAILED
    default_message = "HTTP request failed"

    def __init__(
        self,
        message: str | None = None,
        status_code: int = 0,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        kwargs.setdefault("suggestions", self._suggestions_for_status(status_code))
        kwargs.setdefault("recoverable", status_code == 409 or status_code >= 500)
        context = kwargs.pop("context", None) or ErrorContext(
            request={"method": method, "url": url},
            response={"status": status_code, "body": body},
        )
        target = " ".join(part for part in (method, url) if part) or "Request"
        super().__init__(
            message=message or f"{target} returned HTTP {status_code}",
            context=context,
            **kwargs,
        )

    @property
    def is_conflict(self) -> bool:
        """True when the server rejected a concurrent state transition."""
        return self.status_code == 409

    def _suggestions_for_status(self, status_code: int) -> list[str]:
        """Generate suggestions based on HTTP status code."""
        if status_code == 400:
            return [
                "Check the request payload matches what the action expects",
                "Validate JSON payload format",
            ]
        elif status_code == 404:
            return [
                "The resource may have been deleted; refetch the parent collection",
                "Verify the link href resolves against the right base URL",
            ]
        elif status_code == 405:
            return [
                "The link's method does not match the server route",
            ]
        elif status_code == 409:
            return [
                "Another transition changed the resource first",
                "Refetch the resource and retry with its current links",
            ]
        elif 500 <= status_code < 600:
            return [
                "Check server logs for error details",
            ]
        else:
            return [
                f"Received HTTP {status_code} response",
                "Check response body for error details",
            ]

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        result["body"] = self.body
        return result


class MalformedResourceError(HalKitError):
    """A value expected to be a HAL resource is not one."""

    error_code = ErrorCode.MALFORMED_RESOURCE
    default_message = "Response is not a HAL resource"
    default_suggestions = [
        "_links and _embedded must be JSON objects when present",
        "Check the endpoint answers with application/hal+json",
    ]


class MalformedLinkError(HalKitError):
    """A link cannot be interpreted (unknown method, missing href)."""

    error_code = ErrorCode.MALFORMED_LINK
    default_message = "Link object is malformed"


class TemplateError(HalKitError):
    """URI template uses syntax outside the supported subset, or stayed unexpanded."""

    error_code = ErrorCode.TEMPLATE_UNSUPPORTED
    default_message = "URI template cannot be expanded"
    default_suggestions = [
        "Only {name} and {?a,b} expressions are supported",
        "Pass values for every placeholder of a templated action link",
    ]

    def __init__(self, message: str | None = None, template: str | None = None, **kwargs: Any) -> None:
        self.template = template
        super().__init__(message=message, **kwargs)


class ActionNotAvailableError(HalKitError):
    """The resource does not advertise the requested action rel."""

    error_code = ErrorCode.ACTION_NOT_AVAILABLE
    default_message = "Action is not available"

    def __init__(
        self,
        action: str,
        available_actions: list[str],
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.action = action
        self.available_actions = list(available_actions)
        available = ", ".join(self.available_actions) or "none"
        kwargs.setdefault(
            "context", ErrorContext(resource_rel=action, extra={"available_actions": self.available_actions})
        )
        kwargs.setdefault(
            "suggestions",
            [
                "The server decides which actions apply to the current state",
                "Refetch the resource if you expected this action to be offered",
            ],
        )
        super().__init__(
            message=message or f'Action "{action}" is not available. Available actions: {available}',
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["action"] = self.action
        result["available_actions"] = self.available_actions
        return result


class LinkNotFoundError(HalKitError):
    """A navigational link to follow is missing."""

    error_code = ErrorCode.LINK_NOT_FOUND
    default_message = "Link not found"

    def __init__(self, rel: str, message: str | None = None, **kwargs: Any) -> None:
        self.rel = rel
        kwargs.setdefault("context", ErrorContext(resource_rel=rel))
        super().__init__(message=message or f'Resource has no "{rel}" link', **kwargs)


class StateInconsistencyError(HalKitError):
    """Advertised actions diverge from the declared lifecycle table."""

    error_code = ErrorCode.STATE_INCONSISTENT
    default_message = "Resource links do not match its lifecycle state"
    default_suggestions = [
        "The server's links are authoritative; update the lifecycle table or fix the server",
        "A stale cached resource can cause this; refetch it",
    ]

    def __init__(
        self,
        status: str | None,
        expected: list[str],
        actual: list[str],
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.status = status
        self.expected = list(expected)
        self.actual = list(actual)
        self.missing = [rel for rel in self.expected if rel not in self.actual]
        super().__init__(
            message=message
            or f"Status {status} expects actions {self.expected}, resource offers {self.actual}",
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.status
        result["missing"] = self.missing
        return result


class UnknownStatusError(HalKitError, KeyError):
    """A status is not declared in a lifecycle table."""

    error_code = ErrorCode.UNKNOWN_STATUS
    default_message = "Unknown lifecycle status"

    def __str__(self) -> str:
        return HalKitError.__str__(self)


class InvalidTransitionError(HalKitError):
    """An entity cannot move from its current status with this transition."""

    error_code = ErrorCode.INVALID_TRANSITION
    default_message = "Transition not permitted from the current status"
