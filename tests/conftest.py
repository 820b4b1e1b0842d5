"""Shared fixtures and capability stubs."""

import os

import pytest

from base64load.resolve.remote import FetchResponse


FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")
PIXEL_GIF_URI = '"data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///ywAAAAAAQABAAACAkQBADs="'
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\n"
WOFF2_BYTES = b"wOF2\x00\x01\x00\x00" + b"\x00" * 40


class RecordingFetcher:
    """Fetcher stub that records URLs and replays a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


class RecordingSniffer:
    """Sniffer stub returning fixed answers and recording every call."""

    def __init__(self, from_bytes=None, from_path=None):
        self.from_bytes = from_bytes
        self.from_path = from_path
        self.calls = []

    async def sniff_bytes(self, content):
        self.calls.append(("bytes", content))
        return self.from_bytes

    async def sniff_path(self, path):
        self.calls.append(("path", path))
        return self.from_path


class AccessorStore:
    """Cache object exposing only `get`/`set` methods."""

    def __init__(self):
        self.values = {}
        self.sets = []

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.sets.append(key)
        self.values[key] = value


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def pixel_bytes():
    with open(os.path.join(FIXTURES_DIR, "pixel.gif"), "rb") as f:
        return f.read()


@pytest.fixture
def png_response():
    return FetchResponse(
        status_code=200,
        reason_phrase="OK",
        content=b"\x89PNG-not-really",
        content_type="image/png",
    )
