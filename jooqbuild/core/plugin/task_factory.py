"""
Task factory — one generation task per profile.
"""

from __future__ import annotations

import logging

from jooqbuild.adapters.base import GeneratorLauncher
from jooqbuild.core.build.dependencies import DependencySet
from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.models.profile import GenerationProfile
from jooqbuild.core.plugin.generation_task import GenerationTask
from jooqbuild.core.plugin.version_policy import VersionPolicy

logger = logging.getLogger(__name__)


class TaskFactory:
    """Creates generation tasks bound to the shared runtime classpath."""

    def __init__(
        self,
        project: BuildProject,
        runtime_classpath: DependencySet,
        policy: VersionPolicy,
        launcher: GeneratorLauncher,
        jvm_args: tuple[str, ...] = (),
    ):
        self._project = project
        self._runtime_classpath = runtime_classpath
        self._policy = policy
        self._launcher = launcher
        self._jvm_args = jvm_args

    def create_task_for(self, profile: GenerationProfile) -> GenerationTask:
        """Register the generation task for a profile.

        Raises:
            DuplicateTaskError: If the profile already has a task.
        """
        task = self._project.tasks.create(
            profile.task_name,
            GenerationTask,
            profile=profile,
            classpath=self._runtime_classpath,
            policy=self._policy,
            launcher=self._launcher,
            jvm_args=self._jvm_args,
        )
        logger.debug("Task %s created for jOOQ configuration '%s'", task.name, profile.name)
        return task
