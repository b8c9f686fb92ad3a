"""Lifecycle state derivation from hypermedia links."""

from halkit.state.lifecycle import (
    POST_LIFECYCLE,
    LifecycleTable,
    StateView,
    check_consistency,
    derive_state,
)

__all__ = [
    "POST_LIFECYCLE",
    "LifecycleTable",
    "StateView",
    "check_consistency",
    "derive_state",
]
