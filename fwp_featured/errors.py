"""Exceptions raised by the seams of the featured-image pipeline."""

from __future__ import annotations


class FeaturedImageError(Exception):
    """Base class for every failure the resolver absorbs."""


class OriginAPIError(FeaturedImageError):
    """The origin site could not be reached or answered with an error status."""


class MalformedResponseError(FeaturedImageError):
    """The origin site answered with a body that is not the expected JSON."""


class DownloadError(FeaturedImageError):
    """The image could not be fetched into a temporary file."""


class PlatformError(FeaturedImageError):
    """The CMS rejected a query, upload or featured-image update."""
