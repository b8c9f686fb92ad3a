"""Pure functions over HAL Resource Objects.

Nothing in this module performs I/O or mutates its arguments. Missing or
malformed optional data is answered with None or an empty list; the only
functions that raise are the ones asked to interpret a link that cannot be
interpreted (missing href, unknown HTTP method, unsupported template syntax).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from halkit.errors import MalformedLinkError
from halkit.hal import template
from halkit.hal.types import (
    EMBEDDED_KEY,
    LINKS_KEY,
    NAVIGATION_RELS,
    Collection,
    HttpMethod,
    Link,
    LinkValue,
    Resource,
    Variables,
    as_sequence,
)


def _links_of(resource: Any) -> Mapping[str, LinkValue] | None:
    if not isinstance(resource, Mapping):
        return None
    links = resource.get(LINKS_KEY)
    if not isinstance(links, Mapping):
        return None
    return links


def _embedded_of(resource: Any) -> Mapping[str, Any] | None:
    if not isinstance(resource, Mapping):
        return None
    embedded = resource.get(EMBEDDED_KEY)
    if not isinstance(embedded, Mapping):
        return None
    return embedded


def is_resource(value: Any) -> bool:
    """Return True if ``value`` has the shape of a HAL Resource Object.

    Both reserved keys are optional, but when present they must be mappings.
    ``{"_links": None}`` is rejected: a present key with a null value is
    treated as malformed, not as absent.
    """
    if not isinstance(value, Mapping):
        return False
    for key in (LINKS_KEY, EMBEDDED_KEY):
        if key in value and not isinstance(value[key], Mapping):
            return False
    return True


def get_link(resource: Resource | None, rel: str) -> Link | None:
    """Return the link for ``rel``; the first one if several are stored."""
    links = _links_of(resource)
    if links is None:
        return None
    candidates = as_sequence(links.get(rel))
    return candidates[0] if candidates else None


def get_links(resource: Resource | None, rel: str) -> list[Link]:
    """Return every link for ``rel`` as a new list."""
    links = _links_of(resource)
    if links is None:
        return []
    return as_sequence(links.get(rel))


def has_link(resource: Resource | None, rel: str) -> bool:
    return get_link(resource, rel) is not None


def get_embedded(resource: Resource | None, key: str) -> Any | None:
    embedded = _embedded_of(resource)
    if embedded is None:
        return None
    return embedded.get(key)


def is_action_rel(rel: str) -> bool:
    return rel not in NAVIGATION_RELS


def get_action_rels(resource: Resource | None) -> list[str]:
    """Return the non-navigational rels of ``resource`` in ``_links`` order."""
    links = _links_of(resource)
    if links is None:
        return []
    return [rel for rel in links if is_action_rel(rel)]


def parse_template_link(link: Link, variables: Variables | None = None) -> str:
    """Resolve a link to an href.

    Non-templated links are returned untouched, whatever the variables say.
    A link without a string ``href`` raises MalformedLinkError.
    """
    href = link.get("href") if isinstance(link, Mapping) else None
    if not isinstance(href, str):
        raise MalformedLinkError(
            "Link has no href",
            link=dict(link) if isinstance(link, Mapping) else link,
        )
    if link.get("templated") is not True:
        return href
    return template.expand(href, variables or {})


def get_link_method(link: Link | None) -> HttpMethod:
    """Return the HTTP method declared by a link's ``method`` field.

    The ``type`` field is a media-type hint and is never read as a method.
    """
    if link is None:
        return HttpMethod.GET
    method = link.get("method")
    if method is None:
        return HttpMethod.GET
    try:
        return HttpMethod(str(method).upper())
    except ValueError as e:
        raise MalformedLinkError(
            f"Unsupported HTTP method '{method}' on link {link.get('href')!r}",
            link=dict(link),
        ) from e


def get_collection(resource: Resource | None, key: str = "items") -> Collection | None:
    """Build a Collection view from ``_embedded[key]`` and pagination fields."""
    if not isinstance(resource, Mapping) or not is_resource(resource):
        return None

    items = get_embedded(resource, key)
    if not isinstance(items, list):
        items = []

    def _int_field(name: str) -> int | None:
        value = resource.get(name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    return Collection(
        items=[item for item in items if is_resource(item)],
        page=_int_field("page"),
        size=_int_field("size"),
        total_elements=_int_field("totalElements"),
        total_pages=_int_field("totalPages"),
    )
