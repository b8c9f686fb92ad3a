"""Blog post entity and its lifecycle transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from halkit.errors import InvalidTransitionError


class PostStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass
class Post:
    """A blog post.

    Created in DRAFT. DRAFT -> PUBLISHED -> ARCHIVED -> PUBLISHED (republish).
    Deletion is permitted from DRAFT and ARCHIVED only.
    """

    id: int
    title: str
    content: str = ""
    author: str = ""
    status: PostStatus = PostStatus.DRAFT
    created_at: datetime = field(default_factory=_now)
    published_at: datetime | None = None

    def _require(self, expected: PostStatus, transition: str) -> None:
        if self.status is not expected:
            raise InvalidTransitionError(
                f"Cannot {transition} post {self.id} with status {self.status.value}",
                post_id=self.id,
                status=self.status.value,
                transition=transition,
            )

    def publish(self) -> Post:
        self._require(PostStatus.DRAFT, "publish")
        self.status = PostStatus.PUBLISHED
        self.published_at = _now()
        return self

    def archive(self) -> Post:
        self._require(PostStatus.PUBLISHED, "archive")
        self.status = PostStatus.ARCHIVED
        return self

    def republish(self) -> Post:
        self._require(PostStatus.ARCHIVED, "republish")
        self.status = PostStatus.PUBLISHED
        self.published_at = _now()
        return self

    def update(self, **changes: Any) -> Post:
        """Apply editable field changes; status and identity cannot be set this way."""
        for name in ("title", "content", "author"):
            if name in changes and changes[name] is not None:
                setattr(self, name, changes[name])
        return self

    @property
    def can_delete(self) -> bool:
        return self.status in (PostStatus.DRAFT, PostStatus.ARCHIVED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "status": self.status.value,
            "createdAt": _isoformat(self.created_at),
            "publishedAt": _isoformat(self.published_at),
        }
