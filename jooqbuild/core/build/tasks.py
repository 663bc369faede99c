"""
Tasks — units of work the host schedules.

A task declares what it consumes (an input fingerprint) and what it
produces (output paths) so the runner can skip it when nothing changed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from jooqbuild.core.build.project import BuildProject

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Task")


class DuplicateTaskError(Exception):
    """Raised when a task name is registered twice."""


class Task:
    """Base class for all tasks."""

    def __init__(self, name: str, project: BuildProject, description: str = "", group: str = ""):
        self.name = name
        self.project = project
        self.description = description
        self.group = group
        self._depends_on: list[Task] = []

    @property
    def dependencies(self) -> list[Task]:
        return list(self._depends_on)

    def depends_on(self, *tasks: Task) -> None:
        for task in tasks:
            if task not in self._depends_on:
                self._depends_on.append(task)

    def input_fingerprint(self) -> str | None:
        """Stable digest of everything the task reads.

        None means the task has no declared inputs and always runs.
        """
        return None

    def output_paths(self) -> list[Path]:
        """Files or directories the task produces."""
        return []

    def execute(self) -> str:
        """Do the work. Returns a short summary; raises on failure."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class TaskContainer:
    """All tasks of a project, by name."""

    def __init__(self, project: BuildProject):
        self._project = project
        self._tasks: dict[str, Task] = {}

    def create(self, name: str, task_type: type[T], **kwargs: Any) -> T:
        """Instantiate and register a task.

        Raises:
            DuplicateTaskError: If a task with this name already exists.
        """
        if name in self._tasks:
            raise DuplicateTaskError(f"Cannot add task '{name}' as a task with that name already exists")
        task = task_type(name=name, project=self._project, **kwargs)
        self._tasks[name] = task
        logger.debug("Created task %s (%s)", name, task_type.__name__)
        return task

    def get(self, name: str) -> Task | None:
        return self._tasks.get(name)

    def names(self) -> list[str]:
        return list(self._tasks)

    def of_type(self, task_type: type[T]) -> list[T]:
        return [t for t in self._tasks.values() if isinstance(t, task_type)]

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)
