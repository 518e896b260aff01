"""Manifest command."""

from pathlib import Path

import click

from ..errors import EveClientError
from ..server import EveServer
from . import cli
from .session import open_session, session_options


@cli.command()
@session_options
@click.option("--urls", "show_urls", is_flag=True, help="Print the source URL of each file")
def manifest(
    server: EveServer,
    config_file: Path | None,
    base_url: str | None,
    timeout: float | None,
    show_urls: bool,
) -> None:
    """Print the manifest of the current build, one `MD5  PATH` per line."""
    try:
        with open_session(server, config_file, base_url=base_url, timeout=timeout) as session:
            for entry in session.load_manifest():
                line = f"{entry.md5.lower()}  {entry.path}"
                if show_urls:
                    line += f"  {entry.url}"
                click.echo(line)
    except EveClientError as exc:
        raise click.ClickException(str(exc)) from exc
