"""
Build ledger — one NDJSON line per runner invocation.

    <build_dir>/.state/audit.ndjson

Each line is a RunRecord: the overall status plus the outcome of every
task the run touched. Lines are only ever appended.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, ValidationError

if TYPE_CHECKING:
    from jooqbuild.core.build.runner import ExecutionReport

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_FILE = "audit.ndjson"


class TaskOutcome(BaseModel):
    task: str
    status: Literal["ok", "skipped", "failed"]
    duration_ms: int = 0
    exit_code: int | None = None
    error: str | None = None


class RunRecord(BaseModel):
    """What one run did."""

    recorded_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    operation_id: str = ""
    status: str = "ok"  # ok, partial, failed
    duration_ms: int = 0
    outcomes: list[TaskOutcome] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: ExecutionReport, duration_ms: int = 0) -> RunRecord:
        return cls(
            operation_id=report.operation_id,
            status=report.status,
            duration_ms=duration_ms,
            outcomes=[
                TaskOutcome(
                    task=r.task,
                    status=r.status,
                    duration_ms=r.duration_ms,
                    exit_code=r.exit_code,
                    error=r.error,
                )
                for r in report.receipts
            ],
        )

    @property
    def tasks(self) -> list[str]:
        return [o.task for o in self.outcomes]

    @property
    def errors(self) -> list[str]:
        return [o.error for o in self.outcomes if o.error]

    def count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)


class BuildLedger:
    """Append-only history of task runs for one project."""

    def __init__(self, path: Path):
        self.path = path

    @classmethod
    def in_state_dir(cls, state_dir: Path) -> BuildLedger:
        return cls(state_dir / DEFAULT_AUDIT_FILE)

    def append(self, record: RunRecord) -> None:
        """Add a record. Losing a ledger line never fails the build."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(record.model_dump_json() + "\n")
        except OSError as e:
            logger.error("Cannot append to build ledger %s: %s", self.path, e)
            return
        logger.debug("Run %s recorded (%s)", record.operation_id, record.status)

    def records(self) -> list[RunRecord]:
        """All readable records, oldest first. Unreadable lines are skipped."""
        if not self.path.is_file():
            return []

        result: list[RunRecord] = []
        for number, line in enumerate(self.path.read_text(encoding="utf-8").splitlines(), start=1):
            if not line.strip():
                continue
            try:
                result.append(RunRecord.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning("Skipping unreadable ledger line %d in %s: %s", number, self.path, e)
        return result

    def latest(self) -> RunRecord | None:
        records = self.records()
        return records[-1] if records else None
