"""
Reconciliation of a local directory against a build manifest.

Entries are processed one at a time, in manifest order. For each of
them we either find the file already in place, copy it from a local
cache directory, or download it, in this order of preference. Nothing
is written to the target path unless its MD5 matches the manifest.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from tempfile import TemporaryDirectory

from .errors import ChecksumMismatchError, EveClientError, TransportError
from .hashing import compute_file_md5, digests_equal, verify_file
from .manifest import Manifest, ManifestEntry
from .transport import Transport

log = logging.getLogger("eveclient/reconcile")


class EntryAction(str, Enum):
    """Action taken to satisfy a manifest entry."""

    PRESENT = "present"
    CACHED = "cached"
    DOWNLOADED = "downloaded"


class EntryState(str, Enum):
    """State of a manifest entry before reconciling it."""

    PRESENT = "present"
    IN_CACHE = "in_cache"
    MISSING = "missing"


class ReconcileStatus(str, Enum):
    """Overall outcome of a reconciliation."""

    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True, kw_only=True)
class EntryOutcome:
    """Entry satisfied during a reconciliation and how."""

    index: int
    entry: ManifestEntry
    action: EntryAction


@dataclass(frozen=True, kw_only=True)
class PlannedEntry:
    """Entry classified without touching the filesystem."""

    index: int
    entry: ManifestEntry
    state: EntryState


@dataclass(frozen=True, kw_only=True)
class ReconcileResult:
    """
    Result of Reconciler.reconcile.

    Attributes:
        outcomes: entries satisfied before stopping, in manifest order
        total: number of entries in the manifest
        failed_index: index of the entry that aborted the operation
        error: the error that aborted the operation
    """

    outcomes: tuple[EntryOutcome, ...]
    total: int
    failed_index: int | None = None
    error: EveClientError | None = None

    @property
    def status(self) -> ReconcileStatus:
        return ReconcileStatus.COMPLETED if self.error is None else ReconcileStatus.ABORTED

    @property
    def ok(self) -> bool:
        return self.error is None

    def count(self, action: EntryAction) -> int:
        """Return how many entries were satisfied using the given action."""
        return sum(1 for outcome in self.outcomes if outcome.action == action)

    def raise_for_status(self) -> None:
        """Raise the error that aborted the operation, if any."""
        if self.error is not None:
            raise self.error


class Reconciler:
    """Brings a directory in agreement with a manifest."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def reconcile(
        self,
        target_dir: Path,
        manifest: Manifest,
        cache_dir: Path | None = None,
    ) -> ReconcileResult:
        """
        Reconcile target_dir with the manifest, optionally copying
        verified files from cache_dir instead of downloading them.

        The first checksum mismatch or transport failure stops the
        operation: later entries are not attempted and the files
        already written stay on disk. Filesystem errors propagate.
        """
        outcomes: list[EntryOutcome] = []
        for index, entry in enumerate(manifest):
            try:
                action = self._reconcile_entry(entry, target_dir, cache_dir)
            except (ChecksumMismatchError, TransportError) as exc:
                log.error("reconciling %s... failure: %s", entry.path, exc)
                return ReconcileResult(
                    outcomes=tuple(outcomes),
                    total=len(manifest),
                    failed_index=index,
                    error=exc,
                )
            outcomes.append(EntryOutcome(index=index, entry=entry, action=action))
        return ReconcileResult(outcomes=tuple(outcomes), total=len(manifest))

    def plan(
        self,
        target_dir: Path,
        manifest: Manifest,
        cache_dir: Path | None = None,
    ) -> Iterator[PlannedEntry]:
        """Yield what reconcile would do for each entry, without doing it."""
        for index, entry in enumerate(manifest):
            if verify_file(entry.local_path(target_dir), entry.md5):
                state = EntryState.PRESENT
            elif cache_dir is not None and verify_file(entry.local_path(cache_dir), entry.md5):
                state = EntryState.IN_CACHE
            else:
                state = EntryState.MISSING
            yield PlannedEntry(index=index, entry=entry, state=state)

    def _reconcile_entry(
        self,
        entry: ManifestEntry,
        target_dir: Path,
        cache_dir: Path | None,
    ) -> EntryAction:
        dest_path = entry.local_path(target_dir)
        if verify_file(dest_path, entry.md5):
            log.info("already present: %s", entry.path)
            return EntryAction.PRESENT

        dest_path.parent.mkdir(parents=True, exist_ok=True)

        if cache_dir is not None:
            cached_path = entry.local_path(cache_dir)
            if verify_file(cached_path, entry.md5):
                log.info("copying %s from cache... start", entry.path)
                shutil.copyfile(cached_path, dest_path)
                log.info("copying %s from cache... ok", entry.path)
                return EntryAction.CACHED

        self._download(entry, dest_path)
        return EntryAction.DOWNLOADED

    def _download(self, entry: ManifestEntry, dest_path: Path) -> None:
        # Operate inside a temporary directory in the destination directory so
        # `os.replace()` is atomic and we avoid cross-filesystem moves.
        with TemporaryDirectory(dir=dest_path.parent) as tmp_dir:
            tmp_file = Path(tmp_dir) / dest_path.name

            log.info("fetching %s... start", entry.path)
            with open(tmp_file, "wb") as filep:
                size = self.transport.download(entry.url, filep)
            log.info("fetching %s... ok (%d bytes)", entry.path, size)

            log.debug("validating %s... start", entry.path)
            md5 = compute_file_md5(tmp_file)
            if not digests_equal(md5, entry.md5):
                raise ChecksumMismatchError(entry.path, expected=entry.md5, actual=md5)
            log.debug("validating %s... ok", entry.path)

            os.replace(tmp_file, dest_path)
