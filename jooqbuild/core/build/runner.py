"""
Task runner — executes tasks with up-to-date checks.

Flow per task:
    fingerprint inputs + outputs → compare with last success → skip or execute → record

No parallelism and no retries. A failed task forgets its recorded
state so the next run executes it again.
"""

from __future__ import annotations

import hashlib
import logging
import time
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from jooqbuild.core.build.audit import BuildLedger, RunRecord
from jooqbuild.core.build.project import BuildProject
from jooqbuild.core.build.source_sets import SourceSet
from jooqbuild.core.build.state_file import default_state_path, load_state, save_state
from jooqbuild.core.build.tasks import Task
from jooqbuild.core.models.receipt import TaskReceipt
from jooqbuild.core.models.state import BuildState

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Result of running a list of tasks."""

    operation_id: str = ""
    receipts: list[TaskReceipt] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def executed(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def up_to_date(self) -> int:
        return sum(1 for r in self.receipts if r.up_to_date)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.failed < self.total:
            return "partial"
        return "failed"

    def receipt_for(self, task_name: str) -> TaskReceipt | None:
        for receipt in self.receipts:
            if receipt.task == task_name:
                return receipt
        return None

    def to_dict(self) -> dict:
        return {
            "operation_id": self.operation_id,
            "status": self.status,
            "total": self.total,
            "executed": self.executed,
            "up_to_date": self.up_to_date,
            "failed": self.failed,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def fingerprint_outputs(paths: Iterable[Path]) -> str:
    """Digest of every file under the given paths.

    Missing paths contribute an explicit marker, so a deleted output
    directory never matches a recorded fingerprint.
    """
    digest = hashlib.sha256()
    for root in paths:
        if not root.exists():
            digest.update(f"absent:{root}\n".encode())
            continue
        files = [root] if root.is_file() else sorted(p for p in root.rglob("*") if p.is_file())
        digest.update(f"root:{root}:{len(files)}\n".encode())
        for path in files:
            digest.update(f"{path.relative_to(root) if path != root else path.name}\n".encode())
            digest.update(hashlib.sha256(path.read_bytes()).digest())
    return digest.hexdigest()


def with_dependencies(tasks: Iterable[Task]) -> list[Task]:
    """Expand tasks with their dependencies, dependencies first."""
    ordered: list[Task] = []

    def visit(task: Task, trail: tuple[str, ...]) -> None:
        if task.name in trail:
            raise ValueError(f"Circular task dependency: {' -> '.join(trail + (task.name,))}")
        if task in ordered:
            return
        for dependency in task.dependencies:
            visit(dependency, trail + (task.name,))
        ordered.append(task)

    for task in tasks:
        visit(task, ())
    return ordered


def tasks_required_by(source_set: SourceSet) -> list[Task]:
    """Tasks that must run before the source set can be compiled."""
    return with_dependencies(source_set.java.build_dependencies())


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return f"run-{now}-{uuid.uuid4().hex[:6]}"


class TaskRunner:
    """Runs tasks of one project, skipping those that are up-to-date."""

    def __init__(
        self,
        project: BuildProject,
        fail_fast: bool = False,
        rerun: bool = False,
        ledger: BuildLedger | None = None,
    ):
        self._project = project
        self._fail_fast = fail_fast
        self._rerun = rerun
        self._state_path = default_state_path(project.state_dir)
        self._ledger = ledger

    def run(self, tasks: Iterable[Task]) -> ExecutionReport:
        """Execute the tasks (and their dependencies) in order."""
        start = time.monotonic()
        report = ExecutionReport(operation_id=generate_operation_id())
        state = load_state(self._state_path)

        for task in with_dependencies(tasks):
            if self._fail_fast and report.failed:
                break
            receipt = self._run_one(task, state)
            report.receipts.append(receipt)
            marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
            logger.info("%s %s → %s", marker, task.name, receipt.output or receipt.status)

        save_state(state, self._state_path)
        if self._ledger is not None:
            self._ledger.append(RunRecord.from_report(report, int((time.monotonic() - start) * 1000)))
        return report

    def _run_one(self, task: Task, state: BuildState) -> TaskReceipt:
        started = time.monotonic()
        try:
            input_fp = task.input_fingerprint()
        except Exception as e:
            state.forget(task.name)
            return TaskReceipt.failure(task=task.name, error=str(e))

        previous = state.tasks.get(task.name)
        if (
            not self._rerun
            and input_fp is not None
            and previous is not None
            and previous.input_fingerprint == input_fp
            and previous.output_fingerprint == fingerprint_outputs(task.output_paths())
        ):
            return TaskReceipt.skip(task=task.name)

        try:
            output = task.execute()
        except Exception as e:
            state.forget(task.name)
            logger.debug("Task %s failed", task.name, exc_info=True)
            return TaskReceipt.failure(
                task=task.name,
                error=str(e),
                exit_code=getattr(e, "exit_code", None),
                duration_ms=int((time.monotonic() - started) * 1000),
            )

        if input_fp is not None:
            state.record(task.name, input_fp, fingerprint_outputs(task.output_paths()))
        return TaskReceipt.success(
            task=task.name,
            output=output or "",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
