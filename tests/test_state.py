"""Tests for lifecycle state derivation."""

from __future__ import annotations

import copy
import logging
from typing import Any

import pytest

from halkit.errors import StateInconsistencyError, UnknownStatusError
from halkit.posts import PostStatus
from halkit.state import POST_LIFECYCLE, LifecycleTable, check_consistency, derive_state


class TestLifecycleTable:
    """Tests for the declared lifecycle table."""

    def test_post_lifecycle(self) -> None:
        assert POST_LIFECYCLE.expected_actions("DRAFT") == ("publish", "update", "delete")
        assert POST_LIFECYCLE.expected_actions("PUBLISHED") == ("archive", "update")
        assert POST_LIFECYCLE.expected_actions("ARCHIVED") == ("republish", "delete")

    def test_accepts_enum_status(self) -> None:
        assert POST_LIFECYCLE.expected_actions(PostStatus.ARCHIVED) == ("republish", "delete")
        assert PostStatus.DRAFT in POST_LIFECYCLE

    def test_unknown_status(self) -> None:
        with pytest.raises(UnknownStatusError):
            POST_LIFECYCLE.expected_actions("DELETED")

    def test_unknown_status_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            POST_LIFECYCLE.expected_actions("DELETED")

    def test_custom_table(self) -> None:
        table = LifecycleTable("order", {"OPEN": ["pay", "cancel"], "PAID": ["ship"]})
        assert table.statuses == ["OPEN", "PAID"]
        assert table.expected_actions("PAID") == ("ship",)


class TestDeriveState:
    """Tests for comparing offered links with the table."""

    @pytest.mark.parametrize(
        ("fixture_name", "status", "actions"),
        [
            ("draft_resource", "DRAFT", ["publish", "update", "delete"]),
            ("published_resource", "PUBLISHED", ["archive", "update"]),
            ("archived_resource", "ARCHIVED", ["republish", "delete"]),
        ],
    )
    def test_server_resources_are_consistent(
        self, request: pytest.FixtureRequest, fixture_name: str, status: str, actions: list[str]
    ) -> None:
        view = derive_state(request.getfixturevalue(fixture_name))

        assert view.current_state == status
        assert view.available_actions == actions
        assert view.is_consistent is True
        assert view.missing_actions == []

    def test_draft_without_update_is_inconsistent(self, draft_resource: dict[str, Any]) -> None:
        resource = copy.deepcopy(draft_resource)
        del resource["_links"]["update"]

        view = derive_state(resource)

        assert view.is_consistent is False
        assert view.missing_actions == ["update"]
        assert view.available_actions == ["publish", "delete"]

    def test_missing_links_are_never_synthesized(self, draft_resource: dict[str, Any]) -> None:
        resource = copy.deepcopy(draft_resource)
        del resource["_links"]["publish"]

        view = derive_state(resource)

        assert view.can("publish") is False
        assert "publish" not in resource["_links"]

    def test_extra_links_reported_but_consistent(self, published_resource: dict[str, Any]) -> None:
        resource = copy.deepcopy(published_resource)
        resource["_links"]["share"] = {"href": "/api/posts/2/share", "method": "POST"}

        view = derive_state(resource)

        assert view.is_consistent is True
        assert view.unexpected_actions == ["share"]

    def test_none_resource(self) -> None:
        view = derive_state(None)
        assert view.current_state is None
        assert view.available_actions == []
        assert view.is_consistent is False

    def test_malformed_resource(self) -> None:
        view = derive_state({"status": "DRAFT", "_links": []})
        assert view.current_state is None
        assert view.is_consistent is False

    def test_unknown_status(self, caplog: pytest.LogCaptureFixture) -> None:
        resource = {"status": "DELETED", "_links": {"restore": {"href": "/r"}}}

        with caplog.at_level(logging.WARNING):
            view = derive_state(resource)

        assert view.current_state == "DELETED"
        assert view.expected_actions == ()
        assert view.available_actions == ["restore"]
        assert view.is_consistent is False
        assert "DELETED" in caplog.text

    def test_custom_status_field(self) -> None:
        table = LifecycleTable("order", {"OPEN": ["pay"]})
        view = derive_state({"state": "OPEN", "_links": {"pay": {"href": "/pay"}}}, table, "state")
        assert view.is_consistent is True


class TestCheckConsistency:
    def test_returns_view_when_consistent(self, archived_resource: dict[str, Any]) -> None:
        assert check_consistency(archived_resource).current_state == "ARCHIVED"

    def test_raises_with_details(self, draft_resource: dict[str, Any]) -> None:
        resource = copy.deepcopy(draft_resource)
        del resource["_links"]["update"]

        with pytest.raises(StateInconsistencyError) as exc_info:
            check_consistency(resource)

        error = exc_info.value
        assert error.status == "DRAFT"
        assert error.missing == ["update"]
        assert error.actual == ["publish", "delete"]
        assert error.to_dict()["missing"] == ["update"]
