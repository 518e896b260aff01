"""Options shared by the commands that open a downloader session."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from ..config import DownloaderConfig, load_config
from ..downloader import EveClientDownloader
from ..errors import ConfigError
from ..server import EveServer


def _parse_server(ctx: click.Context, param: click.Parameter, value: str) -> EveServer:
    _ = ctx
    try:
        return EveServer.parse(value)
    except ValueError as exc:
        choices = ", ".join(server.code for server in EveServer)
        raise click.BadParameter(f"{exc} (choose from {choices})", param=param) from exc


def session_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --server, --config, --base-url and --timeout options."""
    func = click.option(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: wait forever).",
    )(func)
    func = click.option(
        "--base-url",
        default=None,
        help="URL of the binaries host (default: https://binaries.eveonline.com).",
    )(func)
    func = click.option(
        "-c",
        "--config",
        "config_file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Path to YAML config file.",
    )(func)
    func = click.option(
        "-s",
        "--server",
        default=EveServer.TRANQUILITY.code,
        show_default=True,
        callback=_parse_server,
        help="Server code or name (TQ, SISI, CHAOS, DUALITY, THUNDERDOME).",
    )(func)
    return func


def make_config(
    config_file: Path | None,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    progress: bool | None = None,
) -> DownloaderConfig:
    """Load the config file, if any, and apply command line overrides."""
    overrides: dict[str, Any] = {}
    if base_url is not None:
        overrides["base_url"] = base_url
    if timeout is not None:
        overrides["timeout"] = timeout
    if progress is not None:
        overrides["progress"] = progress
    try:
        config = load_config(config_file) if config_file is not None else DownloaderConfig()
        return dataclasses.replace(config, **overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def open_session(
    server: EveServer,
    config_file: Path | None,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    progress: bool | None = None,
) -> EveClientDownloader:
    """Return a downloader session configured from the command line."""
    config = make_config(config_file, base_url=base_url, timeout=timeout, progress=progress)
    return EveClientDownloader(server, config=config)
