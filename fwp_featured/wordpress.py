"""MediaPlatform backed by a destination WordPress site's REST API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from .config import WordPressSiteConfig
from .document import get_path, get_positive_int
from .errors import PlatformError
from .images import detect_content_type

logger = logging.getLogger("fwp_featured")

POSTS_PATH = "/wp-json/wp/v2/posts"
MEDIA_PATH = "/wp-json/wp/v2/media"


def content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-ASCII names (RFC 6266).

    The quoted ``filename`` carries an ASCII-only fallback; ``filename*``
    carries the exact name percent-encoded as UTF-8.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "_").replace('"', "_").replace("?", "_")
    fallback = "".join(ch if ch.isprintable() else "_" for ch in fallback)
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


class WordPressPlatform:
    """Read post state and store media through an application password."""

    def __init__(
        self,
        config: WordPressSiteConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.auth = (config.user, config.app_password)
        self._posts: Dict[int, Dict[str, Any]] = {}

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        kwargs.setdefault("timeout", self.config.timeout)
        try:
            resp = self.session.request(method, url, **kwargs)
        except (requests.RequestException, UnicodeError) as exc:
            raise PlatformError(f"{method} {url} failed: {exc}") from exc
        if resp.status_code not in (200, 201):
            raise PlatformError(
                f"{method} {url} returned {resp.status_code}: {resp.text[:500]}"
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise PlatformError(f"{method} {url} returned a non-JSON body") from exc

    def _post(self, post_id: int) -> Dict[str, Any]:
        if post_id not in self._posts:
            data = self._request(
                "GET",
                self._url(f"{POSTS_PATH}/{post_id}"),
                params={"context": "edit"},
            )
            if not isinstance(data, dict):
                raise PlatformError(f"Post {post_id} is not a JSON object")
            self._posts[post_id] = data
        return self._posts[post_id]

    def forget(self, post_id: int) -> None:
        """Drop the cached post record so the next read goes to the site."""
        self._posts.pop(post_id, None)

    def has_featured_image(self, post_id: int) -> bool:
        return get_positive_int(self._post(post_id), "featured_media") is not None

    def get_origin_url(self, post_id: int) -> str:
        value = get_path(self._post(post_id), "meta", self.config.meta_key)
        if isinstance(value, list):
            value = value[0] if value else None
        if not isinstance(value, str):
            return ""
        return value.strip()

    def sideload(self, filename: str, path: Path, post_id: int) -> int:
        """Upload ``path`` to the media library attached to ``post_id``."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise PlatformError(f"Cannot read {path}: {exc}") from exc

        headers = {
            "Content-Disposition": content_disposition(filename),
            "Content-Type": detect_content_type(data, filename) or "application/octet-stream",
        }
        result = self._request(
            "POST",
            self._url(MEDIA_PATH),
            params={"post": post_id},
            headers=headers,
            data=data,
        )
        media_id = get_positive_int(result, "id")
        if media_id is None:
            raise PlatformError(f"Media upload for post {post_id} returned no id")
        logger.debug("Uploaded %s as media %s", filename, media_id)
        return media_id

    def set_featured_image(self, post_id: int, media_id: int) -> None:
        self._request(
            "POST",
            self._url(f"{POSTS_PATH}/{post_id}"),
            json={"featured_media": media_id},
        )
        self.forget(post_id)
