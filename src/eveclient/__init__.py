"""EVE Online client downloader.

This library resolves the client build currently published by a server,
fetches its manifest, and reconciles a local directory against it by
skipping verified files, copying them from a local cache, or downloading
and verifying them.
"""

from .config import DownloaderConfig, load_config
from .downloader import EveClientDownloader
from .errors import (
    ChecksumMismatchError,
    ConfigError,
    EveClientError,
    MalformedEntryError,
    ParseError,
    TransportError,
    UnsafePathError,
)
from .manifest import Manifest, ManifestEntry, parse_manifest
from .reconcile import EntryAction, EntryState, Reconciler, ReconcileResult, ReconcileStatus
from .server import EveServer

__version__ = "0.1.0"

__all__ = [
    "ChecksumMismatchError",
    "ConfigError",
    "DownloaderConfig",
    "EntryAction",
    "EntryState",
    "EveClientDownloader",
    "EveClientError",
    "EveServer",
    "MalformedEntryError",
    "Manifest",
    "ManifestEntry",
    "ParseError",
    "Reconciler",
    "ReconcileResult",
    "ReconcileStatus",
    "TransportError",
    "UnsafePathError",
    "load_config",
    "parse_manifest",
    "__version__",
]
