"""
Build project — the root of the host build model.

Holds everything a plugin can contribute to: dependency sets and the
resolution rules that apply to them, tasks, and source sets.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jooqbuild.core.build.dependencies import DependencySetContainer, ResolutionStrategy
from jooqbuild.core.build.source_sets import SourceSetContainer
from jooqbuild.core.build.tasks import TaskContainer

# Version of this host build engine, checked by plugins on apply
ENGINE_VERSION = "1.2.0"

DEFAULT_SOURCE_SETS = ("main", "test")


def parse_version(version: str) -> tuple[int, ...]:
    """Parse ``"1.2.3"`` (or ``"v1.2"``) into a comparable tuple.

    Raises:
        ValueError: If any of the first three parts is not an integer.
    """
    return tuple(int(x) for x in version.lstrip("v").split(".")[:3])


class BuildProject:
    """A single project being built."""

    def __init__(
        self,
        project_dir: Path,
        build_dir: str | Path = "build",
        engine_version: str = ENGINE_VERSION,
        source_sets: Iterable[str] = DEFAULT_SOURCE_SETS,
    ):
        self.project_dir = Path(project_dir)
        self.build_dir = self.file(build_dir)
        self.engine_version = engine_version

        self.dependency_sets = DependencySetContainer()
        self.resolution = ResolutionStrategy()
        self.tasks = TaskContainer(self)
        self.source_sets = SourceSetContainer(self.project_dir)
        for name in source_sets:
            self.source_sets.create(name)

    @property
    def state_dir(self) -> Path:
        """Where the host keeps up-to-date state and the audit ledger."""
        return self.build_dir / ".state"

    def file(self, path: str | Path) -> Path:
        """Resolve a path relative to the project directory."""
        path = Path(path)
        return path if path.is_absolute() else self.project_dir / path

    def __repr__(self) -> str:
        return f"<BuildProject dir={str(self.project_dir)!r}>"
