"""HTTP transport used to talk with the binaries host."""

from __future__ import annotations

import logging
from typing import BinaryIO, Protocol

import requests
from tqdm import tqdm

from .config import DEFAULT_USER_AGENT
from .errors import TransportError
from .hashing import CHUNK_SIZE

log = logging.getLogger("eveclient/transport")


class Transport(Protocol):
    """
    Represent the possibility of fetching documents and files
    from the binaries host.

    Methods:
        get_text: return the body of the given URL decoded as text.
        download: stream the body of the given URL into filep and
            return the number of bytes written.
        close: release the underlying resources.
    """

    def get_text(self, url: str) -> str: ...

    def download(self, url: str, filep: BinaryIO) -> int: ...

    def close(self) -> None: ...


class HTTPTransport:
    """
    Transport implementation using a requests.Session.

    Every request carries our User-Agent and follows redirects. Any
    connection failure or non-2xx status becomes a TransportError.

    Use as a context manager to close the session when done:

        with HTTPTransport() as transport:
            text = transport.get_text(url)
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
        progress: bool = False,
        session: requests.Session | None = None,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.timeout = timeout
        self.progress = progress

    def __enter__(self) -> HTTPTransport:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def get_text(self, url: str) -> str:
        log.debug("GET %s... start", url)
        resp = self._get(url, stream=False)
        # Without an explicit charset requests assumes ISO-8859-1 for text/*
        if "charset" not in resp.headers.get("Content-Type", "").lower():
            resp.encoding = "utf-8"
        log.debug("GET %s... ok", url)
        return resp.text

    def download(self, url: str, filep: BinaryIO) -> int:
        log.debug("GET %s... start", url)
        resp = self._get(url, stream=True)
        total = resp.headers.get("Content-Length")
        total = int(total) if total is not None else None
        count = 0
        try:
            with (
                resp,
                tqdm(
                    total=total,
                    unit="B",
                    unit_scale=True,
                    unit_divisor=1024,
                    desc=url.rsplit("/", 1)[-1],
                    leave=False,
                    disable=not self.progress,
                ) as pbar,
            ):
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    filep.write(chunk)
                    count += len(chunk)
                    pbar.update(len(chunk))
        except requests.RequestException as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        log.debug("GET %s... ok (%d bytes)", url, count)
        return count

    def _get(self, url: str, *, stream: bool) -> requests.Response:
        try:
            resp = self.session.get(url, stream=stream, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        try:
            resp.raise_for_status()
        except requests.RequestException as exc:
            # Release the connection held by a streamed response
            resp.close()
            raise TransportError(f"GET {url} failed: {exc}") from exc
        return resp
