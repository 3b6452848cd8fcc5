"""Image download and file naming utilities."""

from __future__ import annotations

import logging
import mimetypes
import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlparse

import requests
from filetype import guess

from .config import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT
from .errors import DownloadError
from .models import DownloadedAsset

logger = logging.getLogger("fwp_featured")

FALLBACK_FILENAME = "image"
TEMP_PREFIX = "fwp-featured-"


def filename_from_url(url: str) -> str:
    """Use the final path segment of ``url`` as the attachment filename."""
    path = unquote(urlparse(url).path)
    name = PurePosixPath(path).name.strip()
    return name or FALLBACK_FILENAME


def detect_content_type(data: bytes, filename: Optional[str] = None) -> Optional[str]:
    """Detect a MIME type from the file signature, falling back to the name."""
    kind = guess(data)
    if kind:
        return kind.mime
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        return guessed
    return None


def release(asset: DownloadedAsset) -> None:
    """Delete the temporary file behind ``asset``."""
    try:
        asset.path.unlink()
    except FileNotFoundError:
        logger.debug("Temporary file %s already removed", asset.path)
    except OSError as exc:
        logger.warning("Failed to remove temporary file %s: %s", asset.path, exc)


def _discard(path: Path) -> None:
    try:
        os.unlink(path)
    except OSError:
        logger.debug("Could not remove partial download %s", path)


def download_to_temp(
    session: requests.Session,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DownloadedAsset:
    """Stream ``url`` into a temporary file and return a handle to it.

    Raises ``DownloadError`` on any transport failure or non-2xx status. The
    temporary file is removed before any error propagates.
    """
    handle = tempfile.NamedTemporaryFile(prefix=TEMP_PREFIX, delete=False)
    path = Path(handle.name)
    size = 0
    try:
        with handle:
            with session.get(url, timeout=timeout, stream=True) as resp:
                resp.raise_for_status()
                for chunk in resp.iter_content(chunk_size=chunk_size):
                    if not chunk:
                        continue
                    handle.write(chunk)
                    size += len(chunk)
    except (requests.RequestException, OSError) as exc:
        _discard(path)
        raise DownloadError(f"Failed to download {url}: {exc}") from exc
    except Exception:
        _discard(path)
        raise

    return DownloadedAsset(
        path=path,
        filename=filename_from_url(url),
        source_url=url,
        size=size,
    )
