"""Resolve and attach featured images for syndicated posts."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from .config import ResolverConfig
from .errors import (
    DownloadError,
    FeaturedImageError,
    MalformedResponseError,
    OriginAPIError,
    PlatformError,
)
from .images import download_to_temp, release
from .models import DownloadedAsset
from .origin import derive_query, fetch_post_record, locate_image_url
from .platform import MediaPlatform

logger = logging.getLogger("fwp_featured")

Downloader = Callable[[requests.Session, str, float, int], DownloadedAsset]


class ImageResolver:
    """Fill in a missing featured image from the post's origin site.

    Neither ``resolve`` nor ``attach`` raises: every failure is logged and the
    post is left without a featured image.
    """

    def __init__(
        self,
        platform: MediaPlatform,
        session: Optional[requests.Session] = None,
        config: Optional[ResolverConfig] = None,
        downloader: Downloader = download_to_temp,
    ) -> None:
        self.platform = platform
        self.config = config or ResolverConfig()
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.config.user_agent
        self.session = session
        self.downloader = downloader

    def resolve(self, post_id: int) -> None:
        """Look up the origin article of ``post_id`` and attach its image."""
        try:
            self._resolve(post_id)
        except FeaturedImageError as exc:
            self._abort(post_id, "resolve", exc)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error resolving featured image for post %s", post_id)
        finally:
            try:
                self.platform.forget(post_id)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Failed to clear platform state for post %s", post_id)

    def attach(self, post_id: int, image_url: str) -> None:
        """Download ``image_url`` and make it the featured image of ``post_id``."""
        try:
            self._attach(post_id, image_url)
        except FeaturedImageError as exc:
            self._abort(post_id, "attach", exc)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error attaching %s to post %s", image_url, post_id)

    def _resolve(self, post_id: int) -> None:
        if self.platform.has_featured_image(post_id):
            logger.debug("Post %s already has a featured image", post_id)
            return

        origin_url = self.platform.get_origin_url(post_id)
        if not origin_url:
            logger.debug("Post %s has no %s", post_id, self.config.meta_key)
            return

        query = derive_query(origin_url)
        if query is None:
            logger.debug("Post %s origin URL %r is not usable", post_id, origin_url)
            return

        record = fetch_post_record(self.session, query, timeout=self.config.timeout)
        if record is None:
            logger.debug("No origin post found for %s", query.posts_url)
            return

        image_url = locate_image_url(self.session, query, record, timeout=self.config.timeout)
        if not image_url:
            logger.debug("No featured image on origin post %s", query.posts_url)
            return

        self.attach(post_id, image_url)

    def _attach(self, post_id: int, image_url: str) -> None:
        asset = self.downloader(
            self.session, image_url, self.config.timeout, self.config.chunk_size
        )
        logger.debug("Downloaded %s (%d bytes) to %s", asset.source_url, asset.size, asset.path)
        try:
            media_id = self.platform.sideload(asset.filename, asset.path, post_id)
        finally:
            release(asset)

        try:
            self.platform.set_featured_image(post_id, media_id)
        except PlatformError as exc:
            logger.warning("Setting featured image %s on post %s failed: %s", media_id, post_id, exc)
            return
        logger.info(
            "Set featured image %s on post %s from %s (%d bytes)",
            media_id,
            post_id,
            asset.source_url,
            asset.size,
        )

    def _abort(self, post_id: int, stage: str, exc: FeaturedImageError) -> None:
        """Single exit for absorbed failures; picks the log level by kind."""
        if isinstance(exc, MalformedResponseError):
            logger.debug("%s for post %s stopped: %s", stage, post_id, exc)
        elif isinstance(exc, OriginAPIError):
            logger.warning("Origin API request failed for post %s: %s", post_id, exc)
        elif isinstance(exc, DownloadError):
            logger.warning("Download failed for post %s: %s", post_id, exc)
        elif isinstance(exc, PlatformError):
            logger.warning("CMS request failed for post %s: %s", post_id, exc)
        else:
            logger.warning("%s for post %s failed: %s", stage, post_id, exc)
