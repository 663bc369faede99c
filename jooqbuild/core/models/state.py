"""
Task state — what the last successful run of each task saw.

Serialized to <build_dir>/.state/tasks.json and compared on the next
run to decide whether a task is up-to-date. Disposable: delete it and
every task simply runs again.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class TaskState(BaseModel):
    """Fingerprints recorded after a task succeeded."""

    name: str
    input_fingerprint: str
    output_fingerprint: str
    executed_at: str = Field(default_factory=_now_iso)


class BuildState(BaseModel):
    """Root state document."""

    schema_version: int = 1
    updated_at: str = Field(default_factory=_now_iso)
    tasks: dict[str, TaskState] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = _now_iso()

    def record(self, name: str, input_fingerprint: str, output_fingerprint: str) -> None:
        self.tasks[name] = TaskState(
            name=name,
            input_fingerprint=input_fingerprint,
            output_fingerprint=output_fingerprint,
        )

    def forget(self, name: str) -> None:
        self.tasks.pop(name, None)
