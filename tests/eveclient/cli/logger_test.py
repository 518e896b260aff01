"""Tests for the eveclient.cli.logger module."""

import logging

import colorlog
import pytest

from eveclient.cli import logger


@pytest.mark.parametrize(
    ("verbose", "quiet", "expected_level"),
    [
        (True, False, logging.DEBUG),
        (False, False, logging.INFO),
        (False, True, logging.WARNING),
        (True, True, logging.DEBUG),
    ],
)
def test_configure_sets_level(verbose: bool, quiet: bool, expected_level: int) -> None:
    logger.configure_logging(verbose=verbose, quiet=quiet)

    assert logging.getLogger().level == expected_level


def test_plain_formatter_with_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")

    logger.configure_logging()

    (handler,) = logging.getLogger().handlers
    assert not isinstance(handler.formatter, colorlog.ColoredFormatter)


def test_colored_formatter_on_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setattr(logger, "_use_color", lambda: True)

    logger.configure_logging()

    (handler,) = logging.getLogger().handlers
    assert isinstance(handler.formatter, colorlog.ColoredFormatter)
