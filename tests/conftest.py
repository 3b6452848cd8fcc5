"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path

import pytest
import requests

from fwp_featured.errors import PlatformError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeResponse:
    """Just enough of requests.Response for the code under test."""

    def __init__(self, status_code=200, body=b"", headers=None):
        self.status_code = status_code
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.content = body
        self.headers = headers or {}

    @property
    def text(self):
        return self.content.decode("utf-8", "replace")

    def json(self):
        return json.loads(self.content.decode("utf-8"))

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """Routes requests by URL and records every call."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.headers = {}
        self.auth = None

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        outcome = self.routes.get((method, url), self.routes.get(url))
        if outcome is None:
            raise requests.ConnectionError(f"No route for {method} {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)

    @property
    def urls(self):
        return [url for _, url, _ in self.calls]


class FakePlatform:
    """In-memory CMS recording sideloads and featured-image updates."""

    def __init__(self, origin_urls=None, featured=None, sideload_error=None):
        self.origin_urls = dict(origin_urls or {})
        self.featured = dict(featured or {})
        self.sideload_error = sideload_error
        self.sideloads = []
        self.featured_calls = []
        self.forgotten = []
        self.next_media_id = 500

    def has_featured_image(self, post_id):
        return post_id in self.featured

    def get_origin_url(self, post_id):
        return self.origin_urls.get(post_id, "")

    def sideload(self, filename, path, post_id):
        path = Path(path)
        self.sideloads.append(
            {
                "filename": filename,
                "path": path,
                "post_id": post_id,
                "existed": path.exists(),
                "data": path.read_bytes() if path.exists() else None,
            }
        )
        if self.sideload_error:
            raise PlatformError(self.sideload_error)
        self.next_media_id += 1
        return self.next_media_id

    def set_featured_image(self, post_id, media_id):
        self.featured_calls.append((post_id, media_id))
        self.featured[post_id] = media_id

    def forget(self, post_id):
        self.forgotten.append(post_id)


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def platform():
    return FakePlatform(origin_urls={7: "https://example.com/blog/my-post/"})
