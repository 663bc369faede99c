"""
Generation task — runs the jOOQ generator for one profile.

The task keeps references to its profile and to the shared runtime
classpath and reads both when it fingerprints or executes, so edits
made before execution are honored.

Inputs:  configuration (mapping and serialized document), resolved
         classpath, JVM arguments
Outputs: the profile's output directory
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

from jooqbuild.adapters.base import GeneratorLauncher, LaunchContext
from jooqbuild.core.build.dependencies import DependencySet
from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.build.tasks import Task
from jooqbuild.core.errors import ConfigurationError, GenerationFailure
from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.models.profile import GenerationProfile
from jooqbuild.core.plugin.config_xml import to_xml, with_target_directory
from jooqbuild.core.plugin.dependency_rewriter import verify_family_consistency
from jooqbuild.core.plugin.version_policy import VersionPolicy

logger = logging.getLogger(__name__)

TASK_GROUP = "jOOQ"


class GenerationTask(Task):
    """Generates jOOQ sources from one profile."""

    def __init__(
        self,
        name: str,
        project: BuildProject,
        profile: GenerationProfile,
        classpath: DependencySet,
        policy: VersionPolicy,
        launcher: GeneratorLauncher,
        jvm_args: tuple[str, ...] = (),
    ):
        super().__init__(
            name,
            project,
            description=f"Generates the jOOQ sources from the '{profile.name}' jOOQ configuration.",
            group=TASK_GROUP,
        )
        self.profile = profile
        self.classpath = classpath
        self.jvm_args = tuple(jvm_args)
        self._policy = policy
        self._launcher = launcher

    @property
    def output_directory(self) -> Path:
        """The profile's output directory, resolved against the project."""
        if self.profile.output_directory is None:
            raise ConfigurationError("no output directory configured", profile=self.profile.name)
        return self.project.file(self.profile.output_directory)

    @property
    def config_file(self) -> Path:
        return self.project.build_dir / "tmp" / self.name / "config.xml"

    def serialized_configuration(self) -> str:
        configuration = with_target_directory(self.profile.configuration, self.output_directory)
        return to_xml(configuration, self._policy.selection().schema_version)

    def resolve_classpath(self) -> list[Coordinate]:
        """Resolve the runtime classpath with jOOQ versions enforced."""
        resolved = self.project.resolution.resolve(self.classpath)
        verify_family_consistency(resolved)
        return resolved

    def input_fingerprint(self) -> str:
        digest = hashlib.sha256()
        digest.update(self.serialized_configuration().encode("utf-8"))
        # the document cannot tell [] from {}, so the mapping is hashed too
        canonical = json.dumps(self.profile.configuration, sort_keys=True, default=str)
        digest.update(f"cfg:{canonical}\n".encode())
        for coordinate in self.resolve_classpath():
            digest.update(f"cp:{coordinate}\n".encode())
        for arg in self.jvm_args:
            digest.update(f"jvm:{arg}\n".encode())
        digest.update(f"launcher:{self._launcher.name}\n".encode())
        return digest.hexdigest()

    def output_paths(self) -> list[Path]:
        return [self.output_directory]

    def execute(self) -> str:
        document = self.serialized_configuration()
        classpath = self.resolve_classpath()

        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(document, encoding="utf-8")

        output_dir = self.output_directory
        created = not output_dir.exists()
        output_dir.mkdir(parents=True, exist_ok=True)

        logger.info("Generating jOOQ sources for '%s' into %s", self.profile.name, output_dir)
        receipt = self._launcher.launch(
            LaunchContext(
                task_name=self.name,
                config_file=self.config_file,
                output_directory=output_dir,
                working_dir=self.project.project_dir,
                classpath=classpath,
                jvm_args=list(self.jvm_args),
            )
        )

        if receipt.failed:
            if created and output_dir.is_dir() and not any(output_dir.iterdir()):
                output_dir.rmdir()
            raise GenerationFailure(self.name, receipt.error or "generator failed", exit_code=receipt.exit_code)

        return receipt.output or f"Generated sources into {output_dir}"
