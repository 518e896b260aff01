"""Fetch command."""

from pathlib import Path

import click
from tqdm.contrib.logging import logging_redirect_tqdm

from ..errors import EveClientError
from ..reconcile import EntryAction
from ..server import EveServer
from . import cli
from .logger import configure_logging
from .session import open_session, session_options


@cli.command()
@click.argument("target_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding a previous installation to copy verified files from.",
)
@session_options
@click.option(
    "--progress/--no-progress",
    default=None,
    help="Show a progress bar for each download.",
)
@click.option("-q", "--quiet", is_flag=True, default=False, help="Only log warnings and errors.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose mode.")
def fetch(
    target_dir: Path,
    cache_dir: Path | None,
    server: EveServer,
    config_file: Path | None,
    base_url: str | None,
    timeout: float | None,
    progress: bool | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Download the current client build into TARGET_DIR.

    Files already in TARGET_DIR with the right MD5 are kept. Files
    found with the right MD5 in --cache-dir are copied. Everything
    else is downloaded and verified. The first checksum mismatch
    stops the command; running it again resumes from there.
    """
    configure_logging(verbose=verbose, quiet=quiet)
    session = open_session(
        server,
        config_file,
        base_url=base_url,
        timeout=timeout,
        progress=progress,
    )
    try:
        with logging_redirect_tqdm(), session:
            result = session.fetch(target_dir, cache_dir)
    except EveClientError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(
        f"Done: {result.count(EntryAction.PRESENT)} present, "
        f"{result.count(EntryAction.CACHED)} cached, "
        f"{result.count(EntryAction.DOWNLOADED)} downloaded."
    )

    if not result.ok:
        assert result.failed_index is not None
        click.echo(
            f"Aborted at entry {result.failed_index + 1}/{result.total}: {result.error}",
            err=True,
        )
        raise SystemExit(1)
