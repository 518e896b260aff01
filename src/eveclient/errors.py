"""Exceptions raised by the eveclient package."""

from __future__ import annotations


class EveClientError(Exception):
    """Base class for all the errors emitted by this package."""


class ConfigError(EveClientError, ValueError):
    """The configuration file is missing or invalid."""


class TransportError(EveClientError):
    """A remote endpoint is unreachable or returned a non-success status."""


class ParseError(EveClientError, ValueError):
    """A remote document does not have the expected structure."""


class MalformedEntryError(ParseError):
    """A manifest line cannot be turned into a manifest entry."""


class UnsafePathError(MalformedEntryError):
    """A manifest path would resolve outside of the target directory."""


class ChecksumMismatchError(EveClientError):
    """
    The MD5 of downloaded content differs from the manifest.

    Attributes:
        path: the relative path of the offending manifest entry
        expected: the digest declared by the manifest
        actual: the digest of the downloaded content
    """

    def __init__(self, path: str, *, expected: str, actual: str) -> None:
        super().__init__(f"checksum mismatch for {path}: expected {expected}, got {actual}")
        self.path = path
        self.expected = expected
        self.actual = actual
