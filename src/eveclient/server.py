"""Servers publishing builds of the EVE Online client."""

from __future__ import annotations

from enum import Enum


class EveServer(str, Enum):
    """
    Deployment environment publishing client builds.

    The value is the short code the binaries host uses to name the
    build-info document of each server.
    """

    TRANQUILITY = "TQ"
    SINGULARITY = "SISI"
    CHAOS = "CHAOS"
    DUALITY = "DUALITY"
    THUNDERDOME = "THUNDERDOME"

    @property
    def code(self) -> str:
        """Return the short code identifying the server."""
        return self.value

    @classmethod
    def parse(cls, text: str) -> EveServer:
        """
        Return the server matching either the short code (e.g. `SISI`)
        or the member name (e.g. `singularity`), ignoring case.

        Raises:
            ValueError: if no server matches.
        """
        key = text.strip().upper()
        for server in cls:
            if key in (server.value, server.name):
                return server
        raise ValueError(f"unknown server: {text}")

    def __str__(self) -> str:
        return self.value
