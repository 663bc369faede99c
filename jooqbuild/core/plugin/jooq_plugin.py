"""
jOOQ plugin — entry point that installs everything on a build project.

On apply:
    check engine version → enforce jOOQ version → provision jooqRuntime → profile registry

For every profile registered afterwards:
    default output directory → check source set → create task → wire

A profile that fails a check gets no task and is dropped from the
registry again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jooqbuild.adapters.base import GeneratorLauncher
from jooqbuild.core.build.dependencies import DependencySet
from jooqbuild.core.build.project import BuildProject, parse_version
from jooqbuild.core.build.tasks import DuplicateTaskError
from jooqbuild.core.errors import ConfigurationError, HostIncompatibility
from jooqbuild.core.models.profile import GenerationProfile
from jooqbuild.core.models.settings import BuildSettings
from jooqbuild.core.plugin.dependency_rewriter import DependencyRewriter
from jooqbuild.core.plugin.generation_task import GenerationTask
from jooqbuild.core.plugin.output_defaulting import apply_default_output
from jooqbuild.core.plugin.profile_registry import ProfileConfigurer, ProfileRegistry
from jooqbuild.core.plugin.runtime_classpath import provision_runtime_classpath
from jooqbuild.core.plugin.source_wirer import SourceWirer
from jooqbuild.core.plugin.task_factory import TaskFactory
from jooqbuild.core.plugin.version_policy import VersionPolicy

logger = logging.getLogger(__name__)

MINIMUM_ENGINE_VERSION = "1.0"


def check_engine_version(project: BuildProject) -> None:
    """Raise HostIncompatibility if the host engine is too old."""
    try:
        current = parse_version(project.engine_version)
    except ValueError as e:
        raise HostIncompatibility(f"Unrecognized build engine version: {project.engine_version!r}") from e
    if current < parse_version(MINIMUM_ENGINE_VERSION):
        raise HostIncompatibility(
            f"This version of the jooq plugin is not compatible with build engine < {MINIMUM_ENGINE_VERSION} "
            f"(found {project.engine_version})"
        )


@dataclass
class JooqBuild:
    """What the plugin installed on a project."""

    project: BuildProject
    settings: BuildSettings
    policy: VersionPolicy
    runtime_classpath: DependencySet
    profiles: ProfileRegistry
    factory: TaskFactory
    wirer: SourceWirer

    def register(self, name: str, configure: ProfileConfigurer | None = None) -> GenerationProfile:
        """Declare (or reconfigure) a generation profile."""
        return self.profiles.register(name, configure)

    def task_for(self, name: str) -> GenerationTask | None:
        profile = self.profiles.get(name)
        if profile is None:
            return None
        task = self.project.tasks.get(profile.task_name)
        return task if isinstance(task, GenerationTask) else None

    def tasks(self) -> list[GenerationTask]:
        return [t for t in (self.task_for(n) for n in self.profiles.names()) if t is not None]


class JooqPlugin:
    """Installs jOOQ source generation on a build project."""

    def __init__(self, settings: BuildSettings, launcher: GeneratorLauncher | None = None):
        self._settings = settings
        if launcher is None:
            from jooqbuild.adapters.java import JavaGeneratorLauncher

            launcher = JavaGeneratorLauncher()
        self._launcher = launcher

    def apply(self, project: BuildProject) -> JooqBuild:
        # abort before touching the project if the engine is too old
        check_engine_version(project)

        policy = VersionPolicy(self._settings)
        DependencyRewriter(policy).install(project)

        runtime = provision_runtime_classpath(project, self._settings.toolchain_version)
        factory = TaskFactory(project, runtime, policy, self._launcher, self._settings.jvm_args)
        wirer = SourceWirer(project, eager=self._settings.generate_schema_source_on_compilation)
        profiles = ProfileRegistry()

        def when_profile_added(profile: GenerationProfile) -> None:
            apply_default_output(profile, self._settings)
            wirer.source_set_for(profile)
            try:
                task = factory.create_task_for(profile)
            except DuplicateTaskError as e:
                raise ConfigurationError(str(e), profile=profile.name) from e
            wirer.wire(profile, task)

        profiles.on_each_registration(when_profile_added)
        logger.debug("jOOQ plugin applied to %s (launcher=%s)", project, self._launcher.name)

        return JooqBuild(
            project=project,
            settings=self._settings,
            policy=policy,
            runtime_classpath=runtime,
            profiles=profiles,
            factory=factory,
            wirer=wirer,
        )
