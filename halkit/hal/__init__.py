"""HAL resource model, parser and URI-Template expansion."""

from halkit.hal.parser import (
    get_action_rels,
    get_collection,
    get_embedded,
    get_link,
    get_link_method,
    get_links,
    has_link,
    is_action_rel,
    is_resource,
    parse_template_link,
)
from halkit.hal.template import expand, is_fully_expanded
from halkit.hal.types import (
    ACTION_RELS,
    EMBEDDED_KEY,
    HAL_JSON,
    LINKS_KEY,
    NAVIGATION_RELS,
    Collection,
    HttpMethod,
    Link,
    LinkValue,
    Resource,
    as_sequence,
    total_pages_for,
)

__all__ = [
    "ACTION_RELS",
    "EMBEDDED_KEY",
    "HAL_JSON",
    "LINKS_KEY",
    "NAVIGATION_RELS",
    "Collection",
    "HttpMethod",
    "Link",
    "LinkValue",
    "Resource",
    "as_sequence",
    "expand",
    "get_action_rels",
    "get_collection",
    "get_embedded",
    "get_link",
    "get_link_method",
    "get_links",
    "has_link",
    "is_action_rel",
    "is_fully_expanded",
    "is_resource",
    "parse_template_link",
    "total_pages_for",
]
