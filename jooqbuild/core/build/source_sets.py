"""
Source sets — the source inputs of each compilation unit.

A source directory set accepts three kinds of entries:

    - a plain path
    - a task exposing ``output_directory``: the directory is read from
      the task, and the task becomes a build dependency of the set
    - a DeferredPath: the directory is computed on demand, nothing else
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Union

from jooqbuild.core.build.tasks import Task


class DeferredPath:
    """A directory whose value is only computed when asked for."""

    def __init__(self, producer: Callable[[], Union[Path, str]]):
        self._producer = producer

    def get(self) -> Path:
        return Path(self._producer())

    def __repr__(self) -> str:
        return f"<DeferredPath producer={self._producer!r}>"


SourceEntry = Union[Path, Task, DeferredPath]


class SourceDirectorySet:
    """Ordered source directories of one language in a source set."""

    def __init__(self, name: str, project_dir: Path):
        self.name = name
        self._project_dir = project_dir
        self._entries: list[SourceEntry] = []

    @property
    def entries(self) -> list[SourceEntry]:
        return list(self._entries)

    def src_dir(self, item: Union[str, Path, Task, DeferredPath]) -> None:
        """Add a source directory, a producing task, or a deferred directory."""
        if isinstance(item, Task):
            if not hasattr(item, "output_directory"):
                raise TypeError(f"Task '{item.name}' does not expose an output directory")
        elif isinstance(item, str):
            item = Path(item)
        elif not isinstance(item, (Path, DeferredPath)):
            raise TypeError(f"Unsupported source directory entry: {item!r}")
        self._entries.append(item)

    def _materialize(self, entry: SourceEntry) -> Path:
        if isinstance(entry, Task):
            path = Path(entry.output_directory)  # type: ignore[attr-defined]
        elif isinstance(entry, DeferredPath):
            path = entry.get()
        else:
            path = entry
        return path if path.is_absolute() else self._project_dir / path

    def directories(self) -> list[Path]:
        """Resolve every entry to a directory path, declaration order."""
        return [self._materialize(e) for e in self._entries]

    def build_dependencies(self) -> list[Task]:
        """Tasks that must run before these sources can be read."""
        return [e for e in self._entries if isinstance(e, Task)]


class SourceSet:
    """A compilation unit (main, test, ...)."""

    def __init__(self, name: str, project_dir: Path):
        self.name = name
        self.java = SourceDirectorySet(f"{name} Java source", project_dir)
        self.java.src_dir(Path("src") / name / "java")

    @property
    def compile_task_name(self) -> str:
        if self.name == "main":
            return "compileJava"
        return f"compile{self.name[:1].upper()}{self.name[1:]}Java"

    def __repr__(self) -> str:
        return f"<SourceSet name={self.name!r}>"


class SourceSetContainer:
    """All source sets of a project, by name."""

    def __init__(self, project_dir: Path):
        self._project_dir = project_dir
        self._sets: dict[str, SourceSet] = {}

    def create(self, name: str) -> SourceSet:
        if name in self._sets:
            raise ValueError(f"Source set '{name}' already exists")
        source_set = SourceSet(name, self._project_dir)
        self._sets[name] = source_set
        return source_set

    def get(self, name: str) -> SourceSet | None:
        return self._sets.get(name)

    def names(self) -> list[str]:
        return list(self._sets)

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __iter__(self) -> Iterator[SourceSet]:
        return iter(self._sets.values())
