"""MD5 helpers used to verify client files against the manifest."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import BinaryIO, Final

CHUNK_SIZE: Final[int] = 8192


def compute_md5(source: bytes | BinaryIO) -> str:
    """
    Compute the MD5 hex digest of a byte string or of a binary stream.

    Streams are consumed in CHUNK_SIZE chunks until EOF. The remote
    service only publishes MD5 digests, hence the algorithm choice.
    """
    md5 = hashlib.md5(usedforsecurity=False)
    if isinstance(source, (bytes, bytearray, memoryview)):
        md5.update(source)
        return md5.hexdigest()
    while chunk := source.read(CHUNK_SIZE):
        md5.update(chunk)
    return md5.hexdigest()


def compute_file_md5(path: Path) -> str:
    """Compute MD5 hash of a file."""
    with open(path, "rb") as fp:
        return compute_md5(fp)


def digests_equal(actual: str, expected: str) -> bool:
    """Compare two hex digests ignoring case."""
    return actual.lower() == expected.lower()


def verify_file(path: Path, expected: str) -> bool:
    """Return whether path is an existing file whose MD5 is expected."""
    if not path.is_file():
        return False
    return digests_equal(compute_file_md5(path), expected)
