"""Tests for logging configuration."""

import logging
from cqlgen.config.logging import get_logger, setup_logging


def test_get_logger_namespaces():
    """Module loggers live under the cqlgen namespace."""
    assert get_logger("cqlgen.generation.naming").name == "cqlgen.generation.naming"
    assert get_logger("scripts.export").name == "cqlgen.scripts.export"


def test_setup_logging_with_file(tmp_path):
    """setup_logging attaches a console handler and an optional file handler."""
    log_file = tmp_path / "logs" / "cqlgen.log"
    try:
        setup_logging(level="DEBUG", log_file=log_file)
        logger = logging.getLogger("cqlgen")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        get_logger(__name__).debug("hello from the tests")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from the tests" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logging.getLogger("cqlgen").handlers:
            handler.close()
        logging.getLogger("cqlgen").handlers.clear()
        logging.getLogger("cqlgen").setLevel(logging.NOTSET)
