"""
Configure use case — build.yml in, configured project out.

Creates the host project, declares its dependencies, applies the jOOQ
plugin and registers every declared jOOQ configuration. After this
returns, every profile has its task, output directory and source wiring.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jooqbuild.adapters.base import GeneratorLauncher
from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.config.loader import BuildFile, ProfileSpec, find_build_file, load_build_file
from jooqbuild.core.errors import ConfigurationError
from jooqbuild.core.models.profile import GenerationProfile
from jooqbuild.core.plugin import JooqBuild, JooqPlugin
from jooqbuild.core.plugin.profile_registry import ProfileConfigurer

logger = logging.getLogger(__name__)


@dataclass
class ConfiguredBuild:
    """A project with the jOOQ plugin applied."""

    config_path: Path
    build_file: BuildFile
    project: BuildProject
    jooq: JooqBuild


def _configurer(declared: ProfileSpec) -> ProfileConfigurer:
    def configure(profile: GenerationProfile) -> None:
        profile.source_set = declared.source_set
        profile.configuration = declared.configuration
        if declared.output_directory is not None:
            profile.output_directory = declared.output_directory

    return configure


def configure_build(
    config_path: Path | None = None,
    launcher: GeneratorLauncher | None = None,
    detect_toolchain: bool = False,
    engine_version: str | None = None,
) -> ConfiguredBuild:
    """Load build.yml and configure the project it describes.

    Args:
        config_path: Explicit path to build.yml. If None, searches upward.
        launcher: Generator launcher (default: the java launcher).
        detect_toolchain: Probe ``java -version`` when build.yml does not
            declare a toolchain version.
        engine_version: Override the host engine version (tests).

    Raises:
        ConfigurationError, HostIncompatibility: Configuration is invalid
            or the engine is unsupported.
    """
    if config_path is None:
        config_path = find_build_file()
    if config_path is None:
        raise ConfigurationError("No build.yml found. Specify one with --config.")

    build_file = load_build_file(config_path)
    project_dir = config_path.parent.resolve()

    toolchain = None
    if detect_toolchain and build_file.jooq.toolchain_version is None:
        from jooqbuild.adapters.java import detect_java_version

        toolchain = detect_java_version()
        logger.debug("Detected Java toolchain: %s", toolchain)

    project_kwargs = {} if engine_version is None else {"engine_version": engine_version}
    project = BuildProject(
        project_dir,
        build_dir=build_file.build_dir,
        source_sets=build_file.source_sets,
        **project_kwargs,
    )
    settings = build_file.settings(project_dir, toolchain_version=toolchain)

    jooq = JooqPlugin(settings, launcher=launcher).apply(project)

    for set_name, notations in build_file.dependencies.items():
        dependency_set = project.dependency_sets.get_or_create(set_name)
        for notation in notations:
            dependency_set.add(notation)
    for notation in build_file.jooq.runtime:
        jooq.runtime_classpath.add(notation)

    for name, declared in build_file.jooq.configurations.items():
        jooq.register(name, _configurer(declared))

    logger.info("Configured %d jOOQ task(s)", len(jooq.tasks()))
    return ConfiguredBuild(config_path=config_path, build_file=build_file, project=project, jooq=jooq)
