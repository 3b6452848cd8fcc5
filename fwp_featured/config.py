"""Configuration objects and constants for the featured-image resolver."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TIMEOUT = 10.0
DEFAULT_META_KEY = "syndication_source_uri"
DEFAULT_USER_AGENT = "fwp-featured/1.0"
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass
class ResolverConfig:
    """Settings shared by every outbound call of one resolver."""

    timeout: float = DEFAULT_TIMEOUT
    meta_key: str = DEFAULT_META_KEY
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass
class WordPressSiteConfig:
    """Connection details for the destination WordPress site."""

    base_url: str
    user: str
    app_password: str
    timeout: float = DEFAULT_TIMEOUT
    meta_key: str = DEFAULT_META_KEY

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
