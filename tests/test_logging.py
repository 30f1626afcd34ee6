"""Tests for logging setup."""

import logging
from pathlib import Path

import pytest

from docsync.utils.logging import PACKAGE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Leave the package logger with console output only after each test."""
    yield
    setup_logging()


class TestLevels:
    """Tests for level handling."""

    @pytest.mark.parametrize(
        "name,expected",
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("chatty", 20)],
    )
    def test_level_names(self, name: str, expected: int) -> None:
        assert setup_logging(level=name).level == expected

    def test_handlers_share_level(self) -> None:
        logger = setup_logging(level="ERROR")
        assert {h.level for h in logger.handlers} == {logging.ERROR}


class TestHandlers:
    """Tests for handler wiring."""

    def test_console_only_by_default(self) -> None:
        logger = setup_logging()
        assert logger.name == PACKAGE_LOGGER
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_repeated_setup_does_not_duplicate(self, tmp_path: Path) -> None:
        setup_logging(log_file=str(tmp_path / "first.log"))
        logger = setup_logging(log_file=str(tmp_path / "second.log"))
        assert len(logger.handlers) == 2

    def test_pipeline_records_reach_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "sync.log"
        logger = setup_logging(
            log_format="%(name)s|%(message)s", log_file=str(log_file)
        )

        logging.getLogger("docsync.pipeline.orchestrator").info("Analyzing codebase")
        logging.getLogger("docsync.generators.comparison").debug("hidden")
        for handler in logger.handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert "docsync.pipeline.orchestrator|Analyzing codebase" in lines
        assert not any("hidden" in line for line in lines)
