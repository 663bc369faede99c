"""
Generate use case — run generation tasks with up-to-date checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jooqbuild.core.build.audit import BuildLedger
from jooqbuild.core.build.runner import ExecutionReport, TaskRunner, tasks_required_by
from jooqbuild.core.build.tasks import Task
from jooqbuild.core.use_cases.configure import ConfiguredBuild

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a generation run."""

    report: ExecutionReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.all_ok

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"report": self.report.to_dict() if self.report else None}


def _runner(build: ConfiguredBuild, rerun: bool, fail_fast: bool) -> TaskRunner:
    return TaskRunner(
        build.project,
        fail_fast=fail_fast,
        rerun=rerun,
        ledger=BuildLedger.in_state_dir(build.project.state_dir),
    )


def run_generation(
    build: ConfiguredBuild,
    profiles: list[str] | None = None,
    rerun: bool = False,
    fail_fast: bool = False,
) -> GenerateResult:
    """Run the generation tasks of the given profiles (default: all)."""
    names = profiles or build.jooq.profiles.names()
    unknown = [n for n in names if n not in build.jooq.profiles]
    if unknown:
        return GenerateResult(error=f"Unknown jOOQ configuration(s): {', '.join(unknown)}")

    tasks: list[Task] = [t for t in (build.jooq.task_for(n) for n in names) if t is not None]
    if not tasks:
        return GenerateResult(error="No jOOQ configurations to generate.")

    report = _runner(build, rerun, fail_fast).run(tasks)
    return GenerateResult(report=report)


def run_source_set_prerequisites(
    build: ConfiguredBuild,
    source_set: str = "main",
    rerun: bool = False,
    fail_fast: bool = False,
) -> GenerateResult:
    """Run whatever the source set needs before it can be compiled."""
    target = build.project.source_sets.get(source_set)
    if target is None:
        return GenerateResult(error=f"Unknown source set: {source_set}")

    tasks = tasks_required_by(target)
    if not tasks:
        logger.info("Source set '%s' has no build dependencies", source_set)
    report = _runner(build, rerun, fail_fast).run(tasks)
    return GenerateResult(report=report)
