"""
Task receipts — the outcome of running one task or one launch.

Launchers and the task runner report through receipts instead of
raising, so one failed generation never hides the others.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class TaskReceipt(BaseModel):
    """Result of a task execution or a generator launch.

    ``skipped`` means the task was up-to-date and nothing ran.
    """

    task: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    exit_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def up_to_date(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(cls, task: str, output: str = "", **kwargs: Any) -> TaskReceipt:
        """Create a success receipt."""
        return cls(task=task, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, task: str, error: str, **kwargs: Any) -> TaskReceipt:
        """Create a failure receipt."""
        return cls(task=task, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, task: str, reason: str = "UP-TO-DATE", **kwargs: Any) -> TaskReceipt:
        """Create a skip receipt."""
        return cls(task=task, status="skipped", output=reason, **kwargs)
