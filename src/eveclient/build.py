"""Resolution of the build currently published by a server."""

from __future__ import annotations

import json
import logging

from .errors import ParseError
from .server import EveServer
from .transport import Transport

log = logging.getLogger("eveclient/build")


def build_info_url(server: EveServer, *, base_url: str) -> str:
    """Return the URL of the build-info document for the given server."""
    return f"{base_url.rstrip('/')}/eveclient_{server.code}.json"


def parse_build_info(text: str) -> int:
    """
    Extract the build number from a build-info document.

    The document is a JSON object like `{"build": "2548118", ...}`
    where the build may also be a plain integer.

    Raises:
        ParseError: if the document is not a JSON object with an
            integer-valued `build` field.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"build info is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ParseError("build info is not a JSON object")
    if "build" not in data:
        raise ParseError("build info lacks the `build` field")
    value = data["build"]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ParseError(f"invalid build value: {value!r}")
    try:
        return int(value)
    except ValueError as exc:
        raise ParseError(f"invalid build value: {value!r}") from exc


def resolve_build(transport: Transport, server: EveServer, *, base_url: str) -> int:
    """
    Fetch the build-info document of the given server and return its build.

    Raises:
        TransportError: if the build-info document cannot be fetched.
        ParseError: if the document does not contain a valid build.
    """
    url = build_info_url(server, base_url=base_url)
    log.info("resolving build for %s... start", server)
    build = parse_build_info(transport.get_text(url))
    log.info("resolving build for %s... ok (build %d)", server, build)
    return build
