"""Status command."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from ..errors import EveClientError
from ..reconcile import EntryState
from ..server import EveServer
from . import cli
from .session import open_session, session_options

_STATE_CHARS: dict[EntryState, tuple[str, str]] = {
    EntryState.MISSING: ("D", "red"),
    EntryState.IN_CACHE: ("C", "yellow"),
    EntryState.PRESENT: (" ", "dim"),
}


@cli.command()
@click.argument("target_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding a previous installation.",
)
@click.option("-a", "--all", "show_all", is_flag=True, help="Include files already present")
@session_options
def status(
    target_dir: Path,
    cache_dir: Path | None,
    show_all: bool,
    server: EveServer,
    config_file: Path | None,
    base_url: str | None,
    timeout: float | None,
) -> None:
    """Show what `fetch` would do for TARGET_DIR.

    Each manifest path is prefixed with a status letter:

    \b
      'D'  needs download (missing or hash differs)
      'C'  will be copied from --cache-dir

    Use `-a, --all` to see files already in place as well, which are
    printed using the following status letter:

    \b
      ' '  present (on disk, same hash)
    """
    console = Console()
    try:
        with open_session(server, config_file, base_url=base_url, timeout=timeout) as session:
            for planned in session.plan(target_dir, cache_dir):
                if planned.state == EntryState.PRESENT and not show_all:
                    continue
                char, color = _STATE_CHARS[planned.state]
                console.print(f"[{color}]{char}[/] {escape(planned.entry.path)}")
    except EveClientError as exc:
        raise click.ClickException(str(exc)) from exc
