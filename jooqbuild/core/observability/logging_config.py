"""
Logging setup for the jooqbuild CLI.

Only the ``jooqbuild`` logger tree is configured, so a program that
imports the package keeps its own logging as it is. Modules log through
``logging.getLogger(__name__)`` and inherit this setup.

Console level:  --debug > --verbose > --quiet > $JOOQBUILD_LOG_LEVEL > WARNING
File output:    $JOOQBUILD_LOG_FILE at $JOOQBUILD_LOG_FILE_LEVEL (default: console level)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LOGGER_NAME = "jooqbuild"

LOG_LEVEL_ENV = "JOOQBUILD_LOG_LEVEL"
LOG_FILE_ENV = "JOOQBUILD_LOG_FILE"
LOG_FILE_LEVEL_ENV = "JOOQBUILD_LOG_FILE_LEVEL"

# (format, datefmt) by the most detailed level they apply to
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s  %(message)s", "%H:%M:%S"),
)
_PLAIN_FORMAT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """``"debug"`` → ``logging.DEBUG``; unknown or empty names give ``default``."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def console_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Console level from CLI flags, falling back to $JOOQBUILD_LOG_LEVEL."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    environ = os.environ if environ is None else environ
    return parse_level(environ.get(LOG_LEVEL_ENV))


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_PLAIN_FORMAT)


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """(Re)configure the ``jooqbuild`` logger.

    Calling it again replaces the handlers of the previous call.

    Returns:
        The configured package logger.
    """
    console_lvl = parse_level(level) if isinstance(level, str) else level

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_lvl)
    console.setFormatter(_console_formatter(console_lvl))
    package_logger.addHandler(console)
    lowest = console_lvl

    if log_file:
        file_lvl = parse_level(log_file_level, default=console_lvl)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_lvl)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        package_logger.addHandler(file_handler)
        lowest = min(lowest, file_lvl)

    package_logger.setLevel(lowest)
    package_logger.propagate = False
    return package_logger
