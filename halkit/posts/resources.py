"""Render posts as HAL resources.

Which action links a post carries depends only on its status; this is the
server-side half of the contract that ``halkit.state`` checks on the client.
"""

from __future__ import annotations

from collections.abc import Sequence

from halkit.hal.types import HAL_JSON, Link, Resource, total_pages_for
from halkit.posts.models import Post, PostStatus


def _action(href: str, rel: str, method: str) -> Link:
    return {"href": href, "rel": rel, "method": method}


def build_post_links(post: Post, base_url: str = "") -> dict[str, Link]:
    item = f"{base_url}/api/posts/{post.id}"
    links: dict[str, Link] = {
        "self": {"href": item, "type": HAL_JSON},
    }

    if post.status is PostStatus.DRAFT:
        links["publish"] = _action(f"{item}/publish", "publish", "POST")
        links["update"] = _action(item, "update", "PUT")
        links["delete"] = _action(item, "delete", "DELETE")
    elif post.status is PostStatus.PUBLISHED:
        links["archive"] = _action(f"{item}/archive", "archive", "POST")
        links["update"] = _action(item, "update", "PUT")
    elif post.status is PostStatus.ARCHIVED:
        links["republish"] = _action(f"{item}/republish", "republish", "POST")
        links["delete"] = _action(item, "delete", "DELETE")

    return links


def build_post_resource(post: Post, base_url: str = "") -> Resource:
    """HAL representation of a single post."""
    if post is None or not post.id or post.id < 1:
        raise ValueError("Invalid post: post or post.id is missing")
    return {**post.to_dict(), "_links": build_post_links(post, base_url)}


def build_posts_collection(
    posts: Sequence[Post],
    page: int,
    size: int,
    total_elements: int,
    base_url: str = "",
) -> Resource:
    """HAL collection of posts with pagination links."""
    total_pages = total_pages_for(total_elements, size)
    collection = f"{base_url}/api/posts"

    def page_link(number: int) -> Link:
        return {"href": f"{collection}?page={number}&size={size}", "templated": False}

    links: dict[str, Link] = {
        "self": page_link(page),
        "first": page_link(1),
        "last": page_link(max(total_pages, 1)),
        "find": {"href": f"{collection}{{?page,size}}", "templated": True},
    }
    if page > 1:
        links["prev"] = page_link(page - 1)
    if page < total_pages:
        links["next"] = page_link(page + 1)

    return {
        "_links": links,
        "_embedded": {"items": [build_post_resource(post, base_url) for post in posts]},
        "page": page,
        "size": size,
        "totalElements": total_elements,
        "totalPages": total_pages,
    }
