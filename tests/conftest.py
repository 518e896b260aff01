"""Shared pytest fixtures for eveclient tests."""

import hashlib
import logging
from typing import BinaryIO

import pytest

from eveclient.errors import TransportError

BASE_URL = "https://binaries.example.com"


class FakeTransport:
    """Transport serving canned bodies and recording requested URLs."""

    def __init__(self) -> None:
        self.responses: dict[str, bytes] = {}
        self.requests: list[str] = []
        self.closed = False

    def serve(self, url: str, body: bytes | str) -> None:
        self.responses[url] = body.encode() if isinstance(body, str) else body

    def get_text(self, url: str) -> str:
        return self._lookup(url).decode()

    def download(self, url: str, filep: BinaryIO) -> int:
        body = self._lookup(url)
        filep.write(body)
        return len(body)

    def close(self) -> None:
        self.closed = True

    def _lookup(self, url: str) -> bytes:
        self.requests.append(url)
        try:
            return self.responses[url]
        except KeyError as exc:
            raise TransportError(f"GET {url} failed: 404 Not Found") from exc


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo the logging configuration performed by CLI commands."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Return a FakeTransport without any canned response."""
    return FakeTransport()


@pytest.fixture
def base_url() -> str:
    """Return the binaries host used by the tests."""
    return BASE_URL


@pytest.fixture
def md5():
    """Return a helper computing the uppercase MD5 of test data."""

    def _md5(content: bytes) -> str:
        return hashlib.md5(content).hexdigest().upper()

    return _md5
