"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from jooqbuild.core.observability.logging_config import (
    LOG_LEVEL_ENV,
    LOGGER_NAME,
    console_level,
    parse_level,
    setup_logging,
)


class TestLevels:
    @pytest.mark.parametrize(
        "name,expected",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), (None, logging.WARNING), ("loud", logging.WARNING)],
    )
    def test_parse_level(self, name, expected):
        assert parse_level(name) == expected

    def test_flags_win_over_env(self):
        env = {LOG_LEVEL_ENV: "ERROR"}
        assert console_level(debug=True, environ=env) == logging.DEBUG
        assert console_level(verbose=True, environ=env) == logging.INFO
        assert console_level(environ=env) == logging.ERROR
        assert console_level(environ={}) == logging.WARNING

    def test_quiet(self):
        assert console_level(quiet=True, environ={}) == logging.ERROR


class TestSetupLogging:
    def test_package_logger_only(self):
        root_handlers = list(logging.getLogger().handlers)

        package_logger = setup_logging("INFO")

        assert package_logger.name == LOGGER_NAME
        assert package_logger.level == logging.INFO
        assert len(package_logger.handlers) == 1
        assert package_logger.propagate is False
        assert logging.getLogger().handlers == root_handlers

    def test_reconfigure_replaces_handlers(self):
        setup_logging("INFO")
        package_logger = setup_logging("DEBUG")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG

    def test_file_output(self, tmp_path: Path):
        log_file = tmp_path / "jooqbuild.log"
        package_logger = setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")

        logging.getLogger("jooqbuild.core.plugin").debug("resolved classpath")
        for handler in package_logger.handlers:
            handler.flush()

        assert package_logger.level == logging.DEBUG
        assert "resolved classpath" in log_file.read_text()
