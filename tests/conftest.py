"""Pytest fixtures for halkit tests."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from halkit.client import AsyncHateoasClient, HateoasClient, UrlResolver
from halkit.errors import InvalidTransitionError
from halkit.posts import Post, PostStatus, build_post_resource, build_posts_collection

BASE_URL = "http://testserver"

ITEM_ROUTE = re.compile(r"^/api/posts/(\d+)(?:/(publish|archive|republish))?$")


class FakePostsServer:
    """In-memory HAL posts API served through httpx.MockTransport."""

    def __init__(self, posts: list[Post] | None = None) -> None:
        self.posts: dict[int, Post] = {post.id: post for post in posts or []}
        self.requests: list[httpx.Request] = []

    def _hal(self, status_code: int, data: Any) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=json.dumps(data).encode("utf-8"),
            headers={"Content-Type": "application/hal+json"},
        )

    def _error(self, status_code: int, message: str) -> httpx.Response:
        return httpx.Response(status_code, json={"statusCode": status_code, "message": message})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/posts" and request.method == "GET":
            page = int(request.url.params.get("page", 1))
            size = int(request.url.params.get("size", 10))
            ordered = sorted(self.posts.values(), key=lambda p: p.id)
            chunk = ordered[(page - 1) * size : page * size]
            return self._hal(200, build_posts_collection(chunk, page, size, len(ordered)))

        match = ITEM_ROUTE.match(path)
        if not match:
            return self._error(404, f"No route for {request.method} {path}")

        post = self.posts.get(int(match.group(1)))
        if post is None:
            return self._error(404, f"Post {match.group(1)} not found")

        transition = match.group(2)
        try:
            if transition and request.method == "POST":
                getattr(post, transition)()
                return self._hal(200, build_post_resource(post))
            if request.method == "GET":
                return self._hal(200, build_post_resource(post))
            if request.method == "PUT":
                post.update(**json.loads(request.content))
                return self._hal(200, build_post_resource(post))
            if request.method == "DELETE":
                if not post.can_delete:
                    return self._error(409, f"Post {post.id} cannot be deleted")
                del self.posts[post.id]
                return httpx.Response(204)
        except InvalidTransitionError as e:
            return self._error(409, e.message)

        return self._error(405, f"{request.method} not allowed on {path}")


def make_post(post_id: int, status: PostStatus = PostStatus.DRAFT, **kwargs: Any) -> Post:
    return Post(
        id=post_id,
        title=kwargs.pop("title", f"Post {post_id}"),
        content=kwargs.pop("content", "Body"),
        author=kwargs.pop("author", "alice"),
        status=status,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        **kwargs,
    )


@pytest.fixture
def draft_resource() -> dict[str, Any]:
    return build_post_resource(make_post(1))


@pytest.fixture
def published_resource() -> dict[str, Any]:
    return build_post_resource(
        make_post(2, PostStatus.PUBLISHED, published_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
    )


@pytest.fixture
def archived_resource() -> dict[str, Any]:
    return build_post_resource(make_post(3, PostStatus.ARCHIVED))


@pytest.fixture
def posts_server() -> FakePostsServer:
    return FakePostsServer(
        [
            make_post(1),
            make_post(2, PostStatus.PUBLISHED),
            make_post(3, PostStatus.ARCHIVED),
        ]
    )


@pytest.fixture
def resolver() -> UrlResolver:
    return UrlResolver(base_url=BASE_URL)


@pytest.fixture
def client(posts_server: FakePostsServer, resolver: UrlResolver) -> Iterator[HateoasClient]:
    hal_client = HateoasClient(resolver=resolver, transport=httpx.MockTransport(posts_server))
    yield hal_client
    hal_client.close()


@pytest.fixture
def async_client(posts_server: FakePostsServer, resolver: UrlResolver) -> AsyncHateoasClient:
    return AsyncHateoasClient(resolver=resolver, transport=httpx.MockTransport(posts_server))
