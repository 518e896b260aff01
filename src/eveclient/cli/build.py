"""Build command."""

from pathlib import Path

import click

from ..errors import EveClientError
from ..server import EveServer
from . import cli
from .session import open_session, session_options


@cli.command()
@session_options
def build(
    server: EveServer,
    config_file: Path | None,
    base_url: str | None,
    timeout: float | None,
) -> None:
    """Print the build currently published by the server."""
    try:
        with open_session(server, config_file, base_url=base_url, timeout=timeout) as session:
            click.echo(session.resolve_build())
    except EveClientError as exc:
        raise click.ClickException(str(exc)) from exc
