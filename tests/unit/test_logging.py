"""Unit tests for logging setup."""

import json
import logging

import pytest

from src.config.logging import LOGGER_NAME, setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture
def restore_logger():
    """Undo setup_logging so other tests keep default propagation."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


def test_writes_to_log_file(tmp_path, restore_logger):
    log_file = tmp_path / "logs" / "proxy.log"
    package_logger = setup_logging(level="debug", log_file=log_file)

    logging.getLogger(f"{LOGGER_NAME}.core.services").info("fetched %d groups", 3)
    for handler in package_logger.handlers:
        handler.flush()

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 2
    assert "fetched 3 groups" in log_file.read_text(encoding="utf-8")


def test_json_lines_in_log_file(tmp_path, restore_logger):
    log_file = tmp_path / "proxy.log"
    package_logger = setup_logging(log_file=log_file, json_format=True)

    logging.getLogger(f"{LOGGER_NAME}.adapters").warning("upstream slow")
    for handler in package_logger.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert entry["level"] == "WARNING"
    assert entry["message"] == "upstream slow"
    assert entry["logger"] == f"{LOGGER_NAME}.adapters"


def test_console_only_without_log_file(restore_logger):
    package_logger = setup_logging()
    assert len(package_logger.handlers) == 1
