"""
Manifest (binary index) of a published client build.

The manifest is a CRLF-delimited text document where each line
describes a single file of the build:

    app:/bin64/exefile.exe,9f/9f3c...d1_exefile.exe,0C4D3F...A1B2

That is, the path relative to the installation directory, the path
of the file relative to the binaries host, and its MD5 digest. Fields
never contain commas.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Final

from .errors import MalformedEntryError, UnsafePathError

APP_PREFIX: Final[str] = "app:"
LINE_SEPARATOR: Final[str] = "\r\n"
FIELD_SEPARATOR: Final[str] = ","


@dataclass(frozen=True, kw_only=True)
class ManifestEntry:
    """
    Single file belonging to a build.

    Attributes:
        path: normalized path relative to the installation directory,
            using the host path separator
        url: URL from which to fetch the file
        md5: expected MD5 hex digest, case as published
    """

    path: str
    url: str
    md5: str

    def __post_init__(self):
        _validate_relative_path(self.path)

    def local_path(self, root: Path) -> Path:
        """Return the location of this entry below the given root."""
        return root / self.path


@dataclass(frozen=True)
class Manifest:
    """Ordered sequence of entries for a build, in publication order."""

    entries: tuple[ManifestEntry, ...]
    build: int | None = None

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def manifest_url(build: int, *, base_url: str) -> str:
    """Return the URL of the manifest for the given build."""
    return f"{base_url.rstrip('/')}/eveonline_{build}.txt"


def normalize_path(raw: str) -> str:
    """
    Turn a manifest path into a path relative to the installation directory.

    We strip the `app:` prefix, then a single leading slash, and finally
    convert forward slashes to the host path separator.
    """
    path = raw
    if path.startswith(APP_PREFIX):
        path = path[len(APP_PREFIX) :]
    if path.startswith("/"):
        path = path[1:]
    return path.replace("/", os.sep)


def parse_entry(line: str, *, base_url: str) -> ManifestEntry:
    """
    Parse a single manifest line.

    Raises:
        MalformedEntryError: if the line does not contain exactly three fields.
        UnsafePathError: if the path would escape the installation directory.
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != 3:
        raise MalformedEntryError(f"expected 3 fields, got {len(fields)}: {line!r}")
    raw_path, suffix, md5 = fields
    return ManifestEntry(
        path=normalize_path(raw_path),
        url=f"{base_url.rstrip('/')}/{suffix}",
        md5=md5,
    )


def parse_manifest(text: str, *, base_url: str, build: int | None = None) -> Manifest:
    """
    Parse the whole manifest text, preserving line order.

    Empty lines are skipped. Any malformed line aborts the parse.

    Raises:
        MalformedEntryError: naming the offending line number.
    """
    entries: list[ManifestEntry] = []
    for lineno, line in enumerate(text.split(LINE_SEPARATOR), start=1):
        if not line:
            continue
        try:
            entries.append(parse_entry(line, base_url=base_url))
        except MalformedEntryError as exc:
            raise type(exc)(f"manifest line {lineno}: {exc}") from exc
    return Manifest(entries=tuple(entries), build=build)


def _validate_relative_path(path: str) -> None:
    if not path:
        raise MalformedEntryError("empty manifest path")
    if path.startswith(("/", "\\")) or PureWindowsPath(path).drive:
        raise UnsafePathError(f"absolute manifest path: {path}")
    # Check both separators so the result does not depend on the host
    segments = path.replace("\\", "/").split("/")
    if ".." in segments:
        raise UnsafePathError(f"manifest path escapes the target directory: {path}")
    if "." in segments:
        raise UnsafePathError(f"manifest path has a current-directory segment: {path}")
