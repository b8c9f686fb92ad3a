"""Tests for the error hierarchy and message formatting."""

from __future__ import annotations

import pytest

from halkit.errors import (
    ActionNotAvailableError,
    ConnectionError,
    ErrorCode,
    HalKitError,
    HTTPStatusError,
    MalformedResourceError,
    RequestTimeoutError,
    StateInconsistencyError,
    format_error,
)


class TestErrorCodes:
    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (ErrorCode.CONNECTION_FAILED, "connection"),
            (ErrorCode.REQUEST_FAILED, "request"),
            (ErrorCode.MALFORMED_RESOURCE, "shape"),
            (ErrorCode.ACTION_NOT_AVAILABLE, "state"),
            (ErrorCode.UNKNOWN, "unknown"),
        ],
    )
    def test_category(self, code: ErrorCode, category: str) -> None:
        assert code.category == category


class TestHalKitError:
    """Tests for the base error."""

    def test_defaults(self) -> None:
        error = HalKitError()
        assert error.message == "An unexpected error occurred"
        assert str(error) == "[E999] An unexpected error occurred"
        assert error.recoverable is False

    def test_extra_context(self) -> None:
        error = MalformedResourceError("bad", rel="items")
        assert error.context.extra == {"rel": "items"}
        assert error.to_dict()["error_type"] == "MalformedResourceError"

    def test_format_verbose(self) -> None:
        error = HTTPStatusError(status_code=404, body="missing", method="GET", url="http://x/api/posts/1")
        text = error.format_verbose()
        assert "Request: GET http://x/api/posts/1" in text
        assert "Response: HTTP 404" in text
        assert "Suggestions:" in text


class TestActionNotAvailableError:
    def test_carries_available_actions(self) -> None:
        error = ActionNotAvailableError("archive", ["publish", "update"])

        assert error.action == "archive"
        assert error.available_actions == ["publish", "update"]
        assert error.context.resource_rel == "archive"
        assert error.to_dict()["available_actions"] == ["publish", "update"]
        assert error.error_code is ErrorCode.ACTION_NOT_AVAILABLE

    def test_no_actions(self) -> None:
        assert "Available actions: none" in ActionNotAvailableError("publish", []).message

    def test_is_not_a_request_failure(self) -> None:
        assert not isinstance(ActionNotAvailableError("x", []), HTTPStatusError)


class TestHTTPStatusError:
    def test_payload(self) -> None:
        error = HTTPStatusError(status_code=409, body={"message": "conflict"}, method="POST", url="/p")

        assert error.message == "POST /p returned HTTP 409"
        assert error.is_conflict is True
        assert error.recoverable is True
        assert error.to_dict()["status_code"] == 409
        assert error.to_dict()["body"] == {"message": "conflict"}

    def test_client_error_not_recoverable(self) -> None:
        assert HTTPStatusError(status_code=400).recoverable is False


class TestFormatError:
    """Tests for user-facing error messages."""

    def test_http_error_with_message_body(self) -> None:
        error = HTTPStatusError(status_code=404, body={"message": "Post 9 not found"})
        assert format_error(error) == "Resource not found: Post 9 not found"

    def test_http_error_with_error_body(self) -> None:
        error = HTTPStatusError(status_code=400, body={"error": "Bad Request", "statusCode": 400})
        assert format_error(error) == "Bad request: Bad Request"

    def test_http_error_with_list_message(self) -> None:
        error = HTTPStatusError(status_code=400, body={"message": ["title is required", "content is required"]})
        assert format_error(error) == "Bad request: title is required, content is required"

    def test_http_error_with_text_body(self) -> None:
        assert format_error(HTTPStatusError(status_code=502, body="upstream down")) == "Bad gateway: upstream down"

    def test_http_error_unknown_status(self) -> None:
        assert format_error(HTTPStatusError(status_code=418, body="")) == "HTTP error 418"

    def test_connection_errors(self) -> None:
        assert format_error(ConnectionError("refused")).startswith("Could not reach the API server")
        assert format_error(RequestTimeoutError("slow")).startswith("Request timed out")

    def test_halkit_error(self) -> None:
        error = StateInconsistencyError("DRAFT", ["publish", "update"], ["publish"])
        assert format_error(error) == error.message

    def test_plain_values(self) -> None:
        assert format_error(None) == "Unknown error"
        assert format_error("") == "Unknown error"
        assert format_error("custom") == "custom"
        assert format_error(ValueError("bad value")) == "bad value"
        assert format_error(42) == "Unknown error"
