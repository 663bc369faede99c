"""
Source wiring — makes the compiler see generated sources.

Eager: the task itself is added to the source set, so anything that
reads the source set depends on the task and runs it first.

Lazy: only a DeferredPath to the output directory is added. Reading
the directory never triggers generation; something else has to run
the task.
"""

from __future__ import annotations

import logging

from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.build.source_sets import DeferredPath, SourceSet
from jooqbuild.core.errors import ConfigurationError
from jooqbuild.core.models.profile import GenerationProfile
from jooqbuild.core.plugin.generation_task import GenerationTask

logger = logging.getLogger(__name__)


class SourceWirer:
    """Attaches each generation task's output to its profile's source set."""

    def __init__(self, project: BuildProject, eager: bool):
        self._project = project
        self._eager = eager
        self._wired: set[str] = set()

    @property
    def eager(self) -> bool:
        return self._eager

    def source_set_for(self, profile: GenerationProfile) -> SourceSet:
        """The source set the profile's sources belong to.

        Raises:
            ConfigurationError: If the profile names an unknown source set.
        """
        source_set = self._project.source_sets.get(profile.source_set)
        if source_set is None:
            raise ConfigurationError(
                f"source set '{profile.source_set}' not found "
                f"(available: {', '.join(self._project.source_sets.names()) or 'none'})",
                profile=profile.name,
            )
        return source_set

    def wire(self, profile: GenerationProfile, task: GenerationTask) -> None:
        """Add the task's output to the profile's source set, once.

        Raises:
            ConfigurationError: If the profile names an unknown source set.
        """
        if profile.name in self._wired:
            logger.debug("jOOQ configuration '%s' already wired", profile.name)
            return

        source_set = self.source_set_for(profile)

        if self._eager:
            source_set.java.src_dir(task)
        else:
            source_set.java.src_dir(DeferredPath(lambda: task.output_directory))
        self._wired.add(profile.name)
        logger.debug(
            "Wired %s into source set '%s' (%s)",
            task.name,
            source_set.name,
            "eager" if self._eager else "lazy",
        )
