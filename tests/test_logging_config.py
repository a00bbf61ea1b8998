"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from codecomplexity.logging_config import configure_logging, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("codecomplexity").setLevel(logging.NOTSET)


class TestSetupLogging:
    """Verbosity levels and handlers."""

    def test_default_is_warning(self):
        assert setup_logging().level == logging.WARNING

    def test_verbose(self):
        assert setup_logging(verbose=True).level == logging.DEBUG

    def test_quiet_wins(self):
        assert setup_logging(verbose=True, quiet=True).level == logging.ERROR

    def test_rich_handler_installed(self):
        setup_logging()
        assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(log_file=str(log_file))
        logger.warning("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()


class TestGetLogger:
    """Logger namespacing."""

    def test_root(self):
        assert get_logger().name == "codecomplexity"

    def test_prefixed(self):
        assert get_logger("scanning").name == "codecomplexity.scanning"
        assert get_logger("codecomplexity.api").name == "codecomplexity.api"


class TestConfigureLogging:
    """Verbosity names from AnalysisConfig."""

    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_levels(self, verbosity, level):
        assert configure_logging(verbosity).level == level

    def test_replaces_handlers(self):
        configure_logging("normal")
        configure_logging("verbose")
        rich_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1

    def test_dependency_loggers_quiet_by_default(self):
        configure_logging("normal")
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
