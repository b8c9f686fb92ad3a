"""Blog post domain: entity, HAL rendering and a link-driven API."""

from halkit.posts.api import PostsApi
from halkit.posts.models import Post, PostStatus
from halkit.posts.resources import (
    build_post_links,
    build_post_resource,
    build_posts_collection,
)

__all__ = [
    "Post",
    "PostStatus",
    "PostsApi",
    "build_post_links",
    "build_post_resource",
    "build_posts_collection",
]
