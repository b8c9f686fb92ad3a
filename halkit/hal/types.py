"""HAL (Hypertext Application Language) type model.

Resources travel as plain JSON-decoded dicts. The types here describe their
shape for readers and type checkers; nothing is converted on the way in.

A Resource Object is an open mapping of application fields plus two reserved,
optional keys:

    _links      rel -> Link | list[Link]
    _embedded   rel -> Resource | list[Resource]

Example:
    >>> post = {
    ...     "id": 1,
    ...     "status": "DRAFT",
    ...     "_links": {
    ...         "self": {"href": "/api/posts/1"},
    ...         "publish": {"href": "/api/posts/1/publish", "method": "POST"},
    ...     },
    ... }
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict, Union

LINKS_KEY = "_links"
EMBEDDED_KEY = "_embedded"

HAL_JSON = "application/hal+json"


class HttpMethod(str, Enum):
    """HTTP methods a link may declare."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def carries_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class _LinkRequired(TypedDict):
    href: str


class Link(_LinkRequired, total=False):
    """A single entry of ``_links``.

    ``href`` is always present. When ``templated`` is true it holds an
    RFC 6570 template. Extension keys (``name``, ``profile``, ``deprecation``)
    are allowed at runtime.
    """

    rel: str
    type: str
    method: str
    templated: bool
    title: str


LinkValue = Union[Link, Sequence[Link]]
Resource = dict[str, Any]
Variables = Mapping[str, Any]

NAVIGATION_RELS: frozenset[str] = frozenset(
    {"self", "author", "comments", "next", "prev", "first", "last"}
)

ACTION_RELS: frozenset[str] = frozenset(
    {"publish", "update", "delete", "archive", "republish"}
)


def as_sequence(value: LinkValue | None) -> list[Link]:
    """Normalize a link value to a new list of links.

    Anything that is neither a link object nor a list of them normalizes to
    ``[]``, and non-object entries inside a list are skipped.
    """
    if isinstance(value, Mapping):
        return [value]  # type: ignore[list-item]
    if isinstance(value, (list, tuple)):
        return [link for link in value if isinstance(link, Mapping)]
    return []


def total_pages_for(total_elements: int, size: int) -> int:
    """Number of pages needed for ``total_elements`` at ``size`` per page."""
    if size <= 0 or total_elements <= 0:
        return 0
    return math.ceil(total_elements / size)


@dataclass(frozen=True)
class Collection:
    """Read-only view over a paginated collection resource."""

    items: list[Resource] = field(default_factory=list)
    page: int | None = None
    size: int | None = None
    total_elements: int | None = None
    total_pages: int | None = None

    @property
    def has_next(self) -> bool:
        if self.page is None or self.total_pages is None:
            return False
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page is not None and self.page > 1

    def __len__(self) -> int:
        return len(self.items)
