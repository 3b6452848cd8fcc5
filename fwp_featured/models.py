"""Transient data models used by the featured-image pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote_plus

POSTS_ENDPOINT = "/wp-json/wp/v2/posts"
MEDIA_ENDPOINT = "/wp-json/wp/v2/media"


@dataclass(frozen=True)
class OriginQuery:
    """Origin site and slug derived from a post's origin URL."""

    base_url: str
    slug: str

    @property
    def posts_url(self) -> str:
        return f"{self.base_url}{POSTS_ENDPOINT}?slug={quote_plus(self.slug)}&_embed"

    def media_url(self, media_id: int) -> str:
        return f"{self.base_url}{MEDIA_ENDPOINT}/{media_id}"


@dataclass
class DownloadedAsset:
    """Image bytes written to a temporary file for hand-off to the CMS."""

    path: Path
    filename: str
    source_url: str
    size: int
