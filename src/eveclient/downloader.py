"""Downloader session for a single server."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Generic, TypeVar

from .build import build_info_url, resolve_build
from .config import DownloaderConfig
from .manifest import Manifest, manifest_url, parse_manifest
from .reconcile import EntryAction, PlannedEntry, Reconciler, ReconcileResult
from .server import EveServer
from .transport import HTTPTransport, Transport

log = logging.getLogger("eveclient/downloader")

T = TypeVar("T")


class Resolved(Generic[T]):
    """
    Value computed the first time it is requested and then kept.

    A failed computation is not stored, so the next get() tries again.
    """

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._value: T | None = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    def get(self) -> T:
        if not self._resolved:
            self._value = self._compute()
            self._resolved = True
        return self._value  # type: ignore[return-value]


class EveClientDownloader:
    """
    Session downloading the client build currently published by a server.

    The build number and the manifest are fetched at most once per session,
    so a new session is needed to observe a newly published build.

    Use as a context manager to release the HTTP transport when done:

        with EveClientDownloader(EveServer.TRANQUILITY) as downloader:
            result = downloader.fetch(Path("client"), cache_dir=Path("cache"))
        result.raise_for_status()

    A transport passed to the constructor is not closed by the session.
    """

    def __init__(
        self,
        server: EveServer,
        *,
        config: DownloaderConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.server = server
        self.config = config if config is not None else DownloaderConfig()
        self._owns_transport = transport is None
        self.transport: Transport = (
            transport
            if transport is not None
            else HTTPTransport(
                user_agent=self.config.user_agent,
                timeout=self.config.timeout,
                progress=self.config.progress,
            )
        )
        self.reconciler = Reconciler(self.transport)
        self._build = Resolved(self._resolve_build)
        self._manifest = Resolved(self._load_manifest)

    def __enter__(self) -> EveClientDownloader:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if the session created it."""
        if self._owns_transport:
            self.transport.close()

    def build_info_url(self) -> str:
        return build_info_url(self.server, base_url=self.config.root_url())

    def manifest_url(self) -> str:
        return manifest_url(self.resolve_build(), base_url=self.config.root_url())

    def resolve_build(self) -> int:
        """Return the build published by the server, fetching it once."""
        return self._build.get()

    def load_manifest(self) -> Manifest:
        """Return the manifest of the current build, fetching it once."""
        return self._manifest.get()

    def fetch(self, target_dir: Path, cache_dir: Path | None = None) -> ReconcileResult:
        """
        Bring target_dir in agreement with the current build.

        Raises:
            TransportError: if the build or the manifest cannot be fetched.
            ParseError: if the build or the manifest are malformed.
        """
        manifest = self.load_manifest()
        log.info("reconciling %s with build %s... start", target_dir, manifest.build)
        result = self.reconciler.reconcile(Path(target_dir), manifest, _optional_path(cache_dir))
        log.info(
            "reconciling %s with build %s... %s (%d present, %d cached, %d downloaded)",
            target_dir,
            manifest.build,
            "ok" if result.ok else "aborted",
            result.count(EntryAction.PRESENT),
            result.count(EntryAction.CACHED),
            result.count(EntryAction.DOWNLOADED),
        )
        return result

    def plan(self, target_dir: Path, cache_dir: Path | None = None) -> Iterator[PlannedEntry]:
        """Yield the state of each manifest entry without changing anything."""
        manifest = self.load_manifest()
        return self.reconciler.plan(Path(target_dir), manifest, _optional_path(cache_dir))

    def _resolve_build(self) -> int:
        return resolve_build(self.transport, self.server, base_url=self.config.root_url())

    def _load_manifest(self) -> Manifest:
        build = self.resolve_build()
        url = manifest_url(build, base_url=self.config.root_url())
        log.info("fetching manifest for build %d... start", build)
        manifest = parse_manifest(
            self.transport.get_text(url),
            base_url=self.config.root_url(),
            build=build,
        )
        log.info("fetching manifest for build %d... ok (%d entries)", build, len(manifest))
        return manifest


def _optional_path(value: str | Path | None) -> Path | None:
    return None if value is None else Path(value)
