"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from jooqbuild.adapters.mock import MockGeneratorLauncher
from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.models.settings import BuildSettings
from jooqbuild.core.observability.logging_config import LOGGER_NAME
from jooqbuild.core.plugin import JooqBuild, JooqPlugin


@pytest.fixture
def settings(tmp_path: Path) -> BuildSettings:
    """Default settings with a known toolchain (Java 17)."""
    return BuildSettings.for_project(tmp_path, toolchain_version=17)


@pytest.fixture
def project(tmp_path: Path) -> BuildProject:
    return BuildProject(tmp_path)


@pytest.fixture
def launcher() -> MockGeneratorLauncher:
    return MockGeneratorLauncher()


@pytest.fixture
def jooq(project: BuildProject, settings: BuildSettings, launcher: MockGeneratorLauncher) -> JooqBuild:
    """A project with the jOOQ plugin applied."""
    return JooqPlugin(settings, launcher=launcher).apply(project)


@pytest.fixture
def write_build_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write a build.yml into tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "build.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging (CLI runs, logging tests)."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
