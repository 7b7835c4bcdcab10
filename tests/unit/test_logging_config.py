"""Tests for loguru configuration."""

from collections.abc import Iterator

import pytest
from loguru import logger

from yan_notes.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    yield
    logger.remove()


def test_cli_logging_hides_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()

    logger.debug("hidden detail")
    logger.info("synced note 3")

    err = capsys.readouterr().err
    assert "synced note 3" in err
    assert "hidden detail" not in err


def test_verbose_logging_shows_debug_with_module(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)

    logger.debug("request sent")

    err = capsys.readouterr().err
    assert "request sent" in err
    assert "test_logging_config" in err


def test_server_logging_keeps_stdout_clean(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(server=True)

    logger.warning("no stored session")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "| WARNING  |" in captured.err
    assert "no stored session" in captured.err
