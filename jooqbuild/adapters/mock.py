"""
Mock launcher — test double for the generator process.

Writes a fixed set of files into the output directory, or fails with
a configured exit code, without starting any process.
"""

from __future__ import annotations

from jooqbuild.adapters.base import GeneratorLauncher, LaunchContext
from jooqbuild.core.models.receipt import TaskReceipt

DEFAULT_FILES = {
    "Tables.java": "public class Tables {}\n",
}


class MockGeneratorLauncher(GeneratorLauncher):
    """Mock launcher for tests.

    By default every launch succeeds and writes ``files`` (relative
    path → content) under the context's output directory.
    """

    def __init__(self, files: dict[str, str] | None = None, available: bool = True):
        self._files = dict(DEFAULT_FILES if files is None else files)
        self._available = available
        self._failures: dict[str, tuple[int, str]] = {}
        self._call_log: list[LaunchContext] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[LaunchContext]:
        """All launch contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_files(self, files: dict[str, str]) -> None:
        self._files = dict(files)

    def set_failure(self, task_name: str, exit_code: int = 1, error: str = "Mock generator failure") -> None:
        """Configure launches for a task to exit non-zero."""
        self._failures[task_name] = (exit_code, error)

    def clear_failure(self, task_name: str) -> None:
        self._failures.pop(task_name, None)

    def launch(self, context: LaunchContext) -> TaskReceipt:
        self._call_log.append(context)

        if context.task_name in self._failures:
            exit_code, error = self._failures[context.task_name]
            return TaskReceipt.failure(task=context.task_name, error=error, exit_code=exit_code)

        for relative, content in self._files.items():
            target = context.output_directory / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

        return TaskReceipt.success(
            task=context.task_name,
            output=f"[mock] generated {len(self._files)} file(s)",
            exit_code=0,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
