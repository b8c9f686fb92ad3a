"""Resolve link hrefs to absolute request targets."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urljoin

from halkit.config.settings import HalKitConfig, api_base_url

_API_SUFFIX = re.compile(r"/api/?$")


def is_absolute(href: str) -> bool:
    return href.startswith(("http://", "https://"))


@dataclass(frozen=True)
class UrlResolver:
    """Base-URL policy for relative hrefs.

    Absolute hrefs always pass through. In production, relative hrefs resolve
    against ``origin`` (same-origin deployment); in development they are
    prefixed with ``base_url``.
    """

    base_url: str | None = "http://localhost:3000"
    production: bool = False
    origin: str | None = None

    def resolve(self, href: str) -> str:
        if is_absolute(href):
            return href

        if self.production:
            if self.origin:
                return urljoin(self.origin.rstrip("/") + "/", href)
            return href

        if not self.base_url:
            return href
        base = self.base_url.rstrip("/")
        if href.startswith("/"):
            return f"{base}{href}"
        return f"{base}/{href}"

    @classmethod
    def from_settings(cls, config: HalKitConfig) -> UrlResolver:
        # hrefs already carry the /api prefix
        base_url = _API_SUFFIX.sub("", api_base_url(config)) or None
        return cls(base_url=base_url, production=config.is_production, origin=config.origin)
