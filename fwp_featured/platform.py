"""Interface the resolver consumes from the destination CMS."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class MediaPlatform(Protocol):
    """Post queries and media storage owned by the CMS.

    ``sideload`` and ``set_featured_image`` raise ``PlatformError`` when the
    CMS rejects the request. ``forget`` is called once at the end of every
    ``resolve`` so that nothing read for a post outlives the invocation;
    platforms that keep no per-post state implement it as a no-op.
    """

    def has_featured_image(self, post_id: int) -> bool: ...

    def get_origin_url(self, post_id: int) -> str: ...

    def sideload(self, filename: str, path: Path, post_id: int) -> int: ...

    def set_featured_image(self, post_id: int, media_id: int) -> None: ...

    def forget(self, post_id: int) -> None: ...
