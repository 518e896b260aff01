"""Logging helpers for the eveclient CLI."""

from __future__ import annotations

import logging
import os
import sys

import colorlog

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "bold_cyan",
    "INFO": "bold_green",
    "WARNING": "bold_yellow",
    "ERROR": "bold_red",
    "CRITICAL": "bold_red,bg_white",
}


def _use_color() -> bool:
    if os.getenv("NO_COLOR") is not None:
        return False
    return sys.stderr.isatty()


def _level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def _make_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    if _use_color():
        handler.setFormatter(
            colorlog.ColoredFormatter(
                fmt="%(log_color)s[%(asctime)s] <%(name)s> %(levelname)s:%(reset)s %(message)s",
                log_colors=LOG_COLORS,
                datefmt=DATE_FORMAT,
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="[%(asctime)s] <%(name)s> %(levelname)s: %(message)s",
                datefmt=DATE_FORMAT,
            )
        )
    return handler


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """
    Route log records to stderr, with colors when stderr is a terminal
    and NO_COLOR is not set. Verbose wins over quiet.
    """
    logging.basicConfig(
        level=_level(verbose=verbose, quiet=quiet),
        handlers=[_make_handler()],
        force=True,
    )
