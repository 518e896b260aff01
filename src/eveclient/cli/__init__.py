"""
Command-line entry point for the EVE client downloader.

The `eveclient` group resolves the current build of an EVE Online
server, reads its manifest, and brings a local install directory in
line with it:

    eveclient build                 # print the current TQ build
    eveclient manifest -s SISI      # list the Singularity manifest
    eveclient status ./client       # what a fetch would do
    eveclient fetch ./client        # download and verify missing files

Subcommands live in sibling modules and attach themselves to `cli`
when imported at the bottom of this file.
"""

from importlib.metadata import version

import click

_PACKAGE_NAME = "eve-client-downloader"


def _get_version() -> str:
    return version(_PACKAGE_NAME)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s", package_name=_PACKAGE_NAME)
def cli() -> None:
    """Download and verify EVE Online client builds.

    Every command talks to one server, chosen with -s/--server
    (TQ by default). Files already on disk with the expected MD5 are
    left alone; missing or stale files are copied from --cache-dir
    when it holds a good copy, and downloaded otherwise.
    """


@cli.command(hidden=True)
def help() -> None:
    """Show usage information."""
    click.echo("eveclient keeps an EVE Online client directory in sync with a server build.")
    click.echo("Try `eveclient status ./client` before `eveclient fetch ./client`.")
    click.echo('Use "eveclient --help" for usage information.')
    click.echo('Use "eveclient <command> --help" for help on a specific command.')


@cli.command("version")
def version_cmd() -> None:
    """Print the version number."""
    click.echo(_get_version())


# Subcommands register on import, so cli must exist first
from . import build as _build  # noqa: E402, F401
from . import fetch as _fetch  # noqa: E402, F401
from . import manifest as _manifest  # noqa: E402, F401
from . import status as _status  # noqa: E402, F401
