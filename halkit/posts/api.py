"""Posts API built on hypermedia links.

Every mutation first reads the post, then follows the link the server put on
it. If the post's current state does not offer the action, the call fails
with ActionNotAvailableError before any write is attempted.

Reads report the cache tags they provide and mutations the tags they
invalidate, so a caller holding a cache knows what to drop.
"""

from __future__ import annotations

import logging
from typing import Any

from halkit.client import HateoasClient
from halkit.hal.parser import get_collection, parse_template_link
from halkit.hal.types import Collection, Resource

logger = logging.getLogger(__name__)

Tag = tuple[str, Any]

POST_TAG = "Post"
LIST_ID = "LIST"


class PostsApi:
    """Read and transition posts through a HateoasClient."""

    def __init__(
        self,
        client: HateoasClient,
        list_template: str = "/api/posts{?page,size}",
        item_template: str = "/api/posts/{id}",
    ) -> None:
        self.client = client
        self.list_template = list_template
        self.item_template = item_template
        self.last_provided: list[Tag] = []
        self.last_invalidated: list[Tag] = []

    def _item_href(self, post_id: int) -> str:
        return parse_template_link({"href": self.item_template, "templated": True}, {"id": post_id})

    def get_post(self, post_id: int) -> Resource:
        post = self.client.fetch(self._item_href(post_id))
        self.last_provided = [(POST_TAG, post_id), (POST_TAG, LIST_ID)]
        return post

    def list_posts(self, page: int | None = None, size: int | None = None) -> Collection:
        href = parse_template_link(
            {"href": self.list_template, "templated": True},
            {"page": page, "size": size},
        )
        resource = self.client.fetch(href)
        collection = get_collection(resource) or Collection()
        self.last_provided = [(POST_TAG, item.get("id")) for item in collection.items]
        self.last_provided.append((POST_TAG, LIST_ID))
        return collection

    def _transition(self, post_id: int, action: str, payload: Any | None = None) -> Resource:
        post = self.get_post(post_id)
        logger.debug(f"Post {post_id}: executing '{action}'")
        result = self.client.execute_action(post, action, payload)
        self.last_invalidated = [(POST_TAG, post_id)]
        return result

    def update_post(self, post_id: int, data: dict[str, Any]) -> Resource:
        return self._transition(post_id, "update", data)

    def publish_post(self, post_id: int) -> Resource:
        return self._transition(post_id, "publish")

    def archive_post(self, post_id: int) -> Resource:
        return self._transition(post_id, "archive")

    def republish_post(self, post_id: int) -> Resource:
        return self._transition(post_id, "republish")

    def delete_post(self, post_id: int) -> None:
        self._transition(post_id, "delete")
        self.last_invalidated = [(POST_TAG, post_id), (POST_TAG, LIST_ID)]
