"""Lifecycle state derived from a resource's links.

The server decides what can be done to a resource and says so through
``_links``. A LifecycleTable is a client-side shadow of that decision: for each
status it lists the action rels the client expects to see. Comparing the two
finds divergence (a server bug, or a stale cached resource). The table is
never used to add or hide actions; ``available_actions`` always comes from
the resource itself.

Example:
    >>> view = derive_state(post)
    >>> view.current_state, view.available_actions, view.is_consistent
    ('DRAFT', ['publish', 'update', 'delete'], True)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from halkit.errors import StateInconsistencyError, UnknownStatusError
from halkit.hal.parser import get_action_rels, is_resource
from halkit.hal.types import Resource

logger = logging.getLogger(__name__)


def _status_key(status: Any) -> str:
    return str(getattr(status, "value", status))


class LifecycleTable:
    """Declared mapping of status -> expected action rels."""

    def __init__(self, name: str, transitions: Mapping[str, Iterable[str]]) -> None:
        self.name = name
        self._transitions: dict[str, tuple[str, ...]] = {
            _status_key(status): tuple(actions) for status, actions in transitions.items()
        }

    @property
    def statuses(self) -> list[str]:
        return list(self._transitions)

    def __contains__(self, status: object) -> bool:
        return _status_key(status) in self._transitions

    def expected_actions(self, status: Any) -> tuple[str, ...]:
        key = _status_key(status)
        try:
            return self._transitions[key]
        except KeyError:
            raise UnknownStatusError(
                f"Status {key!r} is not declared in lifecycle '{self.name}'",
                lifecycle=self.name,
                known_statuses=self.statuses,
            ) from None

    def __repr__(self) -> str:
        return f"LifecycleTable({self.name!r}, {self._transitions!r})"


POST_LIFECYCLE = LifecycleTable(
    "post",
    {
        "DRAFT": ("publish", "update", "delete"),
        "PUBLISHED": ("archive", "update"),
        "ARCHIVED": ("republish", "delete"),
    },
)


@dataclass(frozen=True)
class StateView:
    """What a resource's links say about its lifecycle state."""

    current_state: str | None = None
    expected_actions: tuple[str, ...] = ()
    available_actions: list[str] = field(default_factory=list)
    is_consistent: bool = False

    @property
    def missing_actions(self) -> list[str]:
        return [rel for rel in self.expected_actions if rel not in self.available_actions]

    @property
    def unexpected_actions(self) -> list[str]:
        return [rel for rel in self.available_actions if rel not in self.expected_actions]

    def can(self, action: str) -> bool:
        return action in self.available_actions


def derive_state(
    resource: Resource | None,
    table: LifecycleTable = POST_LIFECYCLE,
    status_field: str = "status",
) -> StateView:
    """Compare the actions ``resource`` offers with those ``table`` expects."""
    if resource is None or not is_resource(resource):
        return StateView()

    available = get_action_rels(resource)
    status = resource.get(status_field)
    if status is None:
        return StateView(available_actions=available)

    status = _status_key(status)
    if status not in table:
        logger.warning(f"Status {status!r} is not declared in lifecycle '{table.name}'")
        return StateView(current_state=status, available_actions=available)

    expected = table.expected_actions(status)
    return StateView(
        current_state=status,
        expected_actions=expected,
        available_actions=available,
        is_consistent=all(rel in available for rel in expected),
    )


def check_consistency(
    resource: Resource | None,
    table: LifecycleTable = POST_LIFECYCLE,
    status_field: str = "status",
) -> StateView:
    """Return the derived state, or raise StateInconsistencyError if it diverges."""
    view = derive_state(resource, table, status_field)
    if not view.is_consistent:
        logger.warning(
            f"Lifecycle '{table.name}' mismatch for status {view.current_state}: "
            f"missing {view.missing_actions}"
        )
        raise StateInconsistencyError(
            status=view.current_state,
            expected=list(view.expected_actions),
            actual=view.available_actions,
        )
    return view
