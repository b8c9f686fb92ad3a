"""halkit - HAL hypermedia client toolkit.

halkit reads HAL (Hypertext Application Language) resources, expands the
URI templates their links carry, follows those links over HTTP, and derives a
resource's lifecycle state from the links the server attached to it.

Example:
    >>> from halkit import HateoasClient, UrlResolver, derive_state
    >>>
    >>> client = HateoasClient(resolver=UrlResolver(base_url="http://localhost:3000"))
    >>> post = client.fetch("/api/posts/1")
    >>> derive_state(post).available_actions
    ['publish', 'update', 'delete']
    >>> post = client.execute_action(post, "publish")

Parser (pure functions):
    is_resource, get_link, get_links, get_embedded, get_action_rels,
    parse_template_link, get_collection

Client:
    HateoasClient: Synchronous client following links with httpx
    AsyncHateoasClient: Async variant
    UrlResolver: Base-URL policy for relative hrefs

State:
    derive_state: Compare offered actions with a lifecycle table
    POST_LIFECYCLE: Declared post lifecycle

Configuration:
    HalKitConfig: Settings read from HALKIT_* environment variables

Error Handling:
    HalKitError: Base exception for all halkit errors
    ActionNotAvailableError: Requested rel is not offered by the resource
    HTTPStatusError: Non-2xx response with status and body attached
"""

from halkit.client import (
    ActionOutcome,
    AsyncHateoasClient,
    HateoasClient,
    LinkAffordances,
    RequestRecord,
    UrlResolver,
    hateoas_links,
)
from halkit.config import HalKitConfig, load_config
from halkit.errors import (
    ActionNotAvailableError,
    ConnectionError,
    HalKitError,
    HTTPStatusError,
    LinkNotFoundError,
    MalformedLinkError,
    MalformedResourceError,
    RequestTimeoutError,
    StateInconsistencyError,
    TemplateError,
    format_error,
)
from halkit.hal import (
    NAVIGATION_RELS,
    Collection,
    HttpMethod,
    Link,
    Resource,
    get_action_rels,
    get_collection,
    get_embedded,
    get_link,
    get_links,
    has_link,
    is_resource,
    parse_template_link,
)
from halkit.state import POST_LIFECYCLE, LifecycleTable, StateView, check_consistency, derive_state

__version__ = "0.1.0"

__all__ = [
    "NAVIGATION_RELS",
    "POST_LIFECYCLE",
    "ActionNotAvailableError",
    "ActionOutcome",
    "AsyncHateoasClient",
    "Collection",
    "ConnectionError",
    "HTTPStatusError",
    "HalKitConfig",
    "HalKitError",
    "HateoasClient",
    "HttpMethod",
    "LifecycleTable",
    "Link",
    "LinkAffordances",
    "LinkNotFoundError",
    "MalformedLinkError",
    "MalformedResourceError",
    "RequestRecord",
    "RequestTimeoutError",
    "Resource",
    "StateInconsistencyError",
    "StateView",
    "TemplateError",
    "UrlResolver",
    "check_consistency",
    "derive_state",
    "format_error",
    "get_action_rels",
    "get_collection",
    "get_embedded",
    "get_link",
    "get_links",
    "has_link",
    "hateoas_links",
    "is_resource",
    "load_config",
    "parse_template_link",
]
