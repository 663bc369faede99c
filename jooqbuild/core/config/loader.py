"""
Configuration loader — reads build.yml into typed models.

It reads YAML, validates against Pydantic schemas, and returns a
BuildFile. Turning the BuildFile into a configured project is the job
of the configure use case.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from jooqbuild.core.errors import ConfigurationError
from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.models.edition import JooqEdition
from jooqbuild.core.models.settings import BuildSettings

logger = logging.getLogger(__name__)

# Default config filename
BUILD_CONFIG_FILE = "build.yml"


def _check_notations(values: list[str]) -> list[str]:
    for notation in values:
        Coordinate.parse(notation)
    return values


class ProfileSpec(BaseModel):
    """One entry under ``jooq.configurations``."""

    source_set: str = "main"
    output_directory: str | None = None
    configuration: dict[str, Any] = Field(default_factory=dict)


class JooqSpec(BaseModel):
    """The ``jooq:`` block."""

    edition: JooqEdition | None = None
    version: str | None = None
    generate_schema_source_on_compilation: bool = True
    toolchain_version: int | None = None
    jvm_args: list[str] = Field(default_factory=list)
    runtime: list[str] = Field(default_factory=list)
    configurations: dict[str, ProfileSpec] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_string(cls, value: Any) -> Any:
        # YAML reads an unquoted 3.10 as the float 3.1
        if isinstance(value, float):
            raise ValueError(f"version must be a quoted string (e.g. \"3.18.7\"), got {value}")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("runtime")
    @classmethod
    def _runtime_notations(cls, value: list[str]) -> list[str]:
        return _check_notations(value)


class BuildFile(BaseModel):
    """Root of build.yml."""

    name: str = ""
    build_dir: str = "build"
    source_sets: list[str] = Field(default_factory=lambda: ["main", "test"])
    dependencies: dict[str, list[str]] = Field(default_factory=dict)
    jooq: JooqSpec = Field(default_factory=JooqSpec)

    @field_validator("dependencies")
    @classmethod
    def _dependency_notations(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        for notations in value.values():
            _check_notations(notations)
        return value

    def settings(self, project_dir: Path, toolchain_version: int | None = None) -> BuildSettings:
        """Build-wide settings for a project rooted at ``project_dir``.

        ``toolchain_version`` is only used when build.yml does not set one.
        """
        return BuildSettings.for_project(
            project_dir,
            self.build_dir,
            edition=self.jooq.edition,
            version=self.jooq.version,
            generate_schema_source_on_compilation=self.jooq.generate_schema_source_on_compilation,
            toolchain_version=self.jooq.toolchain_version or toolchain_version,
            jvm_args=tuple(self.jooq.jvm_args),
        )


def find_build_file(start_dir: Path | None = None) -> Path | None:
    """Search for build.yml starting from the given directory, walking up."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / BUILD_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_build_file(path: Path | None = None) -> BuildFile:
    """Load and validate build.yml.

    Args:
        path: Explicit path to build.yml. If None, searches upward.

    Raises:
        ConfigurationError: If the file is missing or invalid.
    """
    if path is None:
        path = find_build_file()

    if path is None:
        raise ConfigurationError(f"No {BUILD_CONFIG_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    logger.debug("Loading build config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        build = BuildFile.model_validate(data)
    except Exception as e:
        raise ConfigurationError(f"Invalid build configuration: {e}") from e

    logger.info(
        "Loaded build '%s' with %d jOOQ configuration(s)",
        build.name or path.parent.name,
        len(build.jooq.configurations),
    )
    return build
