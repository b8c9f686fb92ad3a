"""Hypermedia client: follow HAL links over HTTP.

The client holds no per-resource state. Everything it knows about what can be
done to a resource comes from that resource's ``_links``; configuration (the
base-URL policy, timeouts, default headers, an optional httpx transport) is
injected at construction.

Example:
    >>> client = HateoasClient(resolver=UrlResolver(base_url="http://localhost:3000"))
    >>> post = client.fetch("/api/posts/1")
    >>> if client.has_link(post, "publish"):
    ...     post = client.execute_action(post, "publish")
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from halkit.client.urls import UrlResolver
from halkit.config.settings import HalKitConfig
from halkit.errors import (
    ActionNotAvailableError,
    ConnectionError,
    ErrorContext,
    HalKitError,
    HTTPStatusError,
    LinkNotFoundError,
    MalformedLinkError,
    MalformedResourceError,
    RequestTimeoutError,
    TemplateError,
)
from halkit.hal import parser
from halkit.hal.template import is_fully_expanded
from halkit.hal.types import ACTION_RELS, HAL_JSON, HttpMethod, Link, Resource, Variables

logger = logging.getLogger(__name__)

JSON = "application/json"


@dataclass
class RequestRecord:
    """Record of an HTTP request/response."""

    method: str
    url: str
    request_body: Any | None
    response_status: int
    response_body: Any | None
    headers: dict[str, str]
    duration_ms: float
    timestamp: datetime = field(default_factory=datetime.now)
    error: str | None = None


@dataclass
class ActionOutcome:
    """Result of an action as a value: either a resource or an error."""

    resource: Resource | None = None
    error: HalKitError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Resource:
        if self.error is not None:
            raise self.error
        return self.resource if self.resource is not None else {}


@dataclass(frozen=True)
class LinkAffordances:
    """Which post lifecycle actions a resource currently offers."""

    publish_link: Link | None = None
    archive_link: Link | None = None
    update_link: Link | None = None
    delete_link: Link | None = None
    republish_link: Link | None = None
    all_actions: list[str] = field(default_factory=list)

    @property
    def can_publish(self) -> bool:
        return self.publish_link is not None

    @property
    def can_archive(self) -> bool:
        return self.archive_link is not None

    @property
    def can_update(self) -> bool:
        return self.update_link is not None

    @property
    def can_delete(self) -> bool:
        return self.delete_link is not None

    @property
    def can_republish(self) -> bool:
        return self.republish_link is not None


def hateoas_links(resource: Resource | None) -> LinkAffordances:
    """Read the lifecycle affordances of a post from its links only."""
    if resource is None:
        return LinkAffordances()
    links = {f"{rel}_link": parser.get_link(resource, rel) for rel in ACTION_RELS}
    return LinkAffordances(**links, all_actions=parser.get_action_rels(resource))


@dataclass
class PreparedRequest:
    method: HttpMethod
    url: str
    headers: dict[str, str]
    payload: Any | None = None
    has_body: bool = False


class _HateoasBase:
    """Request preparation and response interpretation shared by both clients."""

    def __init__(
        self,
        resolver: UrlResolver | None = None,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self.resolver = resolver or UrlResolver()
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self.history: list[RequestRecord] = []

    @staticmethod
    def get_link(resource: Resource | None, rel: str) -> Link | None:
        return parser.get_link(resource, rel)

    @staticmethod
    def has_link(resource: Resource | None, rel: str) -> bool:
        return parser.has_link(resource, rel)

    @staticmethod
    def get_available_actions(resource: Resource | None) -> list[str]:
        return parser.get_action_rels(resource)

    @staticmethod
    def parse_template_link(link: Link, variables: Variables | None = None) -> str:
        return parser.parse_template_link(link, variables)

    def resolve_url(self, href: str) -> str:
        return self.resolver.resolve(href)

    def _prepare_link(
        self,
        link: Link,
        payload: Any | None = None,
        variables: Variables | None = None,
    ) -> PreparedRequest:
        if not isinstance(link.get("href"), str):
            raise MalformedLinkError("Link has no href", link=dict(link))
        method = parser.get_link_method(link)
        href = parser.parse_template_link(link, variables)
        if link.get("templated") is True and not is_fully_expanded(href):
            raise TemplateError(
                f"Templated link {link['href']!r} left unexpanded placeholders: {href!r}",
                template=link["href"],
            )

        headers = {**self.default_headers, "Accept": HAL_JSON}
        has_body = method.carries_body and payload is not None
        if has_body:
            headers["Content-Type"] = JSON

        return PreparedRequest(
            method=method,
            url=self.resolve_url(href),
            headers=headers,
            payload=payload if has_body else None,
            has_body=has_body,
        )

    def _prepare_action(
        self,
        resource: Resource,
        action: str,
        payload: Any | None,
        variables: Variables | None,
    ) -> PreparedRequest:
        link = parser.get_link(resource, action)
        if link is None:
            available = parser.get_action_rels(resource)
            logger.debug(f"Action '{action}' not offered; available: {available}")
            raise ActionNotAvailableError(action, available)
        return self._prepare_link(link, payload, variables)

    def _prepare_follow(self, resource: Resource, rel: str, variables: Variables | None) -> PreparedRequest:
        link = parser.get_link(resource, rel)
        if link is None:
            raise LinkNotFoundError(rel)
        prepared = self._prepare_link(link, None, variables)
        prepared.method = HttpMethod.GET
        return prepared

    def _prepare_fetch(self, href: str) -> PreparedRequest:
        return PreparedRequest(
            method=HttpMethod.GET,
            url=self.resolve_url(href),
            headers={**self.default_headers, "Accept": HAL_JSON},
        )

    @staticmethod
    def _request_kwargs(prepared: PreparedRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": prepared.headers}
        if prepared.has_body:
            kwargs["content"] = json.dumps(prepared.payload).encode("utf-8")
        return kwargs

    @staticmethod
    def _response_body(response: httpx.Response) -> Any:
        """Raw body as the caller should see it: JSON when declared, else text."""
        content_type = response.headers.get("content-type", "")
        if "json" in content_type and response.content:
            try:
                return response.json()
            except ValueError:
                return response.text
        return response.text

    def _record(
        self,
        prepared: PreparedRequest,
        response: httpx.Response | None,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        self.history.append(
            RequestRecord(
                method=prepared.method.value,
                url=prepared.url,
                request_body=prepared.payload,
                response_status=response.status_code if response is not None else 0,
                response_body=self._response_body(response) if response is not None else None,
                headers=dict(prepared.headers),
                duration_ms=duration_ms,
                error=error,
            )
        )

    def _transport_error(self, prepared: PreparedRequest, e: httpx.RequestError) -> ConnectionError:
        if isinstance(e, httpx.TimeoutException):
            logger.warning(f"Request timeout: {prepared.method.value} {prepared.url}")
            return RequestTimeoutError(
                f"{prepared.method.value} {prepared.url} timed out",
                cause=e,
                context=ErrorContext(request={"method": prepared.method.value, "url": prepared.url}),
            )
        logger.error(f"Request error: {e}")
        return ConnectionError(
            f"{prepared.method.value} {prepared.url} failed: {e}",
            cause=e,
            context=ErrorContext(request={"method": prepared.method.value, "url": prepared.url}),
        )

    def _interpret(self, prepared: PreparedRequest, response: httpx.Response) -> Resource:
        if not response.is_success:
            body = self._response_body(response)
            logger.warning(
                f"{prepared.method.value} {prepared.url} returned HTTP {response.status_code}"
            )
            raise HTTPStatusError(
                status_code=response.status_code,
                body=body,
                method=prepared.method.value,
                url=prepared.url,
            )

        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResourceError(
                f"{prepared.method.value} {prepared.url} returned a body that is not JSON",
                cause=e,
            ) from e

        if not parser.is_resource(data):
            raise MalformedResourceError(
                f"{prepared.method.value} {prepared.url} returned a value that is not a HAL resource",
                response={"status": response.status_code, "body": data},
            )
        return data

    def get_history(self) -> list[RequestRecord]:
        """Get all request history."""
        return self.history.copy()

    def clear_history(self) -> None:
        """Clear request history."""
        self.history.clear()

    def last_request(self) -> RequestRecord | None:
        """Get the most recent request record."""
        return self.history[-1] if self.history else None


class HateoasClient(_HateoasBase):
    """Synchronous HAL client backed by ``httpx.Client``."""

    def __init__(
        self,
        resolver: UrlResolver | None = None,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        super().__init__(resolver=resolver, timeout=timeout, default_headers=default_headers)
        self._transport = transport
        self._client: httpx.Client | None = http_client

    @classmethod
    def from_config(cls, config: HalKitConfig, **kwargs: Any) -> HateoasClient:
        return cls(
            resolver=UrlResolver.from_settings(config),
            timeout=config.timeout,
            default_headers=dict(config.default_headers),
            **kwargs,
        )

    def connect(self) -> None:
        """Initialize the HTTP client."""
        self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        logger.info("HAL client connected")

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> HateoasClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _send(self, prepared: PreparedRequest) -> Resource:
        if not self._client:
            self.connect()
        assert self._client is not None

        logger.debug(f"{prepared.method.value} {prepared.url}")
        start_time = time.perf_counter()
        try:
            response = self._client.request(
                prepared.method.value, prepared.url, **self._request_kwargs(prepared)
            )
        except httpx.RequestError as e:
            self._record(prepared, None, 0.0, error=str(e))
            raise self._transport_error(prepared, e) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._record(prepared, response, duration_ms)
        return self._interpret(prepared, response)

    def execute_action(
        self,
        resource: Resource,
        action: str,
        payload: Any | None = None,
        variables: Variables | None = None,
    ) -> Resource:
        """Follow the ``action`` link of ``resource`` and return the new resource.

        Raises ActionNotAvailableError without touching the network when the
        resource does not offer ``action``.
        """
        return self._send(self._prepare_action(resource, action, payload, variables))

    def try_execute_action(
        self,
        resource: Resource,
        action: str,
        payload: Any | None = None,
        variables: Variables | None = None,
    ) -> ActionOutcome:
        try:
            return ActionOutcome(resource=self.execute_action(resource, action, payload, variables))
        except HalKitError as e:
            return ActionOutcome(error=e)

    def follow(self, resource: Resource, rel: str, variables: Variables | None = None) -> Resource:
        """GET the resource behind a navigational link such as ``next``."""
        return self._send(self._prepare_follow(resource, rel, variables))

    def fetch(self, href: str) -> Resource:
        return self._send(self._prepare_fetch(href))


class AsyncHateoasClient(_HateoasBase):
    """Async HAL client backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        resolver: UrlResolver | None = None,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(resolver=resolver, timeout=timeout, default_headers=default_headers)
        self._transport = transport
        self._client: httpx.AsyncClient | None = http_client

    @classmethod
    def from_config(cls, config: HalKitConfig, **kwargs: Any) -> AsyncHateoasClient:
        return cls(
            resolver=UrlResolver.from_settings(config),
            timeout=config.timeout,
            default_headers=dict(config.default_headers),
            **kwargs,
        )

    async def connect(self) -> None:
        """Initialize the async HTTP client."""
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        logger.info("Async HAL client connected")

    async def aclose(self) -> None:
        """Close the async HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AsyncHateoasClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _send(self, prepared: PreparedRequest) -> Resource:
        if not self._client:
            await self.connect()
        assert self._client is not None

        logger.debug(f"{prepared.method.value} {prepared.url}")
        start_time = time.perf_counter()
        try:
            response = await self._client.request(
                prepared.method.value, prepared.url, **self._request_kwargs(prepared)
            )
        except httpx.RequestError as e:
            self._record(prepared, None, 0.0, error=str(e))
            raise self._transport_error(prepared, e) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._record(prepared, response, duration_ms)
        return self._interpret(prepared, response)

    async def execute_action(
        self,
        resource: Resource,
        action: str,
        payload: Any | None = None,
        variables: Variables | None = None,
    ) -> Resource:
        """Async variant of HateoasClient.execute_action."""
        return await self._send(self._prepare_action(resource, action, payload, variables))

    async def try_execute_action(
        self,
        resource: Resource,
        action: str,
        payload: Any | None = None,
        variables: Variables | None = None,
    ) -> ActionOutcome:
        try:
            return ActionOutcome(
                resource=await self.execute_action(resource, action, payload, variables)
            )
        except HalKitError as e:
            return ActionOutcome(error=e)

    async def follow(
        self, resource: Resource, rel: str, variables: Variables | None = None
    ) -> Resource:
        return await self._send(self._prepare_follow(resource, rel, variables))

    async def fetch(self, href: str) -> Resource:
        return await self._send(self._prepare_fetch(href))


__all__ = [
    "ActionOutcome",
    "AsyncHateoasClient",
    "HateoasClient",
    "LinkAffordances",
    "PreparedRequest",
    "RequestRecord",
    "UrlResolver",
    "hateoas_links",
]
