"""Origin-site lookups against the public WordPress REST API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import requests

from .config import DEFAULT_TIMEOUT
from .document import first_record, get_positive_int, get_str
from .errors import MalformedResponseError, OriginAPIError
from .models import OriginQuery

logger = logging.getLogger("fwp_featured")

JSON_HEADERS = {"Accept": "application/json"}


def derive_query(origin_url: str) -> Optional[OriginQuery]:
    """Split an origin URL into the site root and the article slug.

    Returns ``None`` when the URL lacks a scheme or host. An empty path
    yields an empty slug, which is still queried.
    """
    if not origin_url or not origin_url.strip():
        return None
    try:
        parsed = urlparse(origin_url.strip())
    except ValueError:
        return None
    host = parsed.netloc.rpartition("@")[2]
    if not parsed.scheme or not host:
        return None
    slug = parsed.path.strip("/").split("/")[-1]
    return OriginQuery(base_url=f"{parsed.scheme}://{host}", slug=slug)


def fetch_json(
    session: requests.Session,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """GET ``url`` and decode its body as JSON."""
    try:
        resp = session.get(url, timeout=timeout, headers=headers)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise OriginAPIError(f"Request to {url} failed: {exc}") from exc
    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponseError(f"Response from {url} is not JSON") from exc


def fetch_post_record(
    session: requests.Session,
    query: OriginQuery,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[Mapping[str, Any]]:
    """Return the first post matching the query's slug, if any."""
    data = fetch_json(session, query.posts_url, timeout=timeout, headers=JSON_HEADERS)
    return first_record(data)


def embedded_image_url(record: Mapping[str, Any]) -> Optional[str]:
    return get_str(record, "_embedded", "wp:featuredmedia", 0, "source_url")


def fetch_media_url(
    session: requests.Session,
    query: OriginQuery,
    media_id: int,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[str]:
    """Resolve a media ID through the origin's media endpoint."""
    data = fetch_json(session, query.media_url(media_id), timeout=timeout)
    return get_str(data, "source_url")


def locate_image_url(
    session: requests.Session,
    query: OriginQuery,
    record: Mapping[str, Any],
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[str]:
    """Find the featured image of ``record``; embedded media wins over a lookup.

    Failures of the secondary media lookup are not errors for the caller:
    they are logged and the post simply gets no image.
    """
    url = embedded_image_url(record)
    if url:
        return url

    media_id = get_positive_int(record, "featured_media")
    if media_id is None:
        logger.debug("No featured media on %s for slug %r", query.base_url, query.slug)
        return None

    try:
        return fetch_media_url(session, query, media_id, timeout=timeout)
    except (OriginAPIError, MalformedResponseError) as exc:
        logger.debug("Media lookup %s failed: %s", query.media_url(media_id), exc)
        return None
