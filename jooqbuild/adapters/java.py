"""
Java launcher — runs the jOOQ GenerationTool in a separate JVM.

    java [jvm args] -cp <jars> org.jooq.codegen.GenerationTool <config.xml>
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import time
from pathlib import Path

from jooqbuild.adapters.base import GeneratorLauncher, LaunchContext
from jooqbuild.adapters.maven import LocalMavenRepository
from jooqbuild.core.models.receipt import TaskReceipt

logger = logging.getLogger(__name__)

# `java -version` prints e.g. 'openjdk version "17.0.9"' or 'java version "1.8.0_392"'
_JAVA_VERSION_RE = re.compile(r'version "(\d+)(?:\.(\d+))?')


def detect_java_version(java: str = "java") -> int | None:
    """Feature release of the installed JVM (8, 11, 17 ...), or None."""
    if shutil.which(java) is None:
        return None
    try:
        result = subprocess.run(
            [java, "-version"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    match = _JAVA_VERSION_RE.search(result.stderr + result.stdout)
    if not match:
        return None
    major = int(match.group(1))
    if major == 1 and match.group(2):
        return int(match.group(2))
    return major


class JavaGeneratorLauncher(GeneratorLauncher):
    """Launch the generator with the ``java`` executable."""

    def __init__(self, java: str = "java", repository: LocalMavenRepository | None = None):
        self._java = java
        self._repository = repository or LocalMavenRepository()

    @property
    def name(self) -> str:
        return "java"

    def is_available(self) -> bool:
        return shutil.which(self._java) is not None

    def build_command(self, context: LaunchContext, jars: list[Path]) -> list[str]:
        return [
            self._java,
            *context.jvm_args,
            "-cp",
            os.pathsep.join(str(j) for j in jars),
            context.main_class,
            str(context.config_file),
        ]

    def launch(self, context: LaunchContext) -> TaskReceipt:
        jars, missing = self._repository.locate_all(context.classpath)
        if missing:
            return TaskReceipt.failure(
                task=context.task_name,
                error=(
                    f"Cannot launch generator: {len(missing)} artifact(s) not found in "
                    f"{self._repository.root}: {', '.join(str(m) for m in missing)}"
                ),
                metadata={"missing": [str(m) for m in missing]},
            )

        if not self.is_available():
            return TaskReceipt.failure(
                task=context.task_name,
                error=f"Cannot launch generator: '{self._java}' not found on PATH",
            )

        command = self.build_command(context, jars)
        logger.debug("Executing: %s (cwd=%s)", " ".join(command), context.working_dir)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                cwd=context.working_dir,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return TaskReceipt.failure(
                task=context.task_name,
                error=f"Cannot launch generator: {e}",
                metadata={"command": command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode != 0:
            return TaskReceipt.failure(
                task=context.task_name,
                error=stderr or f"Generator exited with code {result.returncode}",
                exit_code=result.returncode,
                duration_ms=elapsed_ms,
                metadata={"command": command, "stdout": stdout},
            )

        return TaskReceipt.success(
            task=context.task_name,
            output=stdout,
            exit_code=0,
            duration_ms=elapsed_ms,
            metadata={"command": command, "stderr": stderr},
        )
