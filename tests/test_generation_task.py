"""
Tests for generation tasks run through the task runner.

Covers the config document handed to the generator, up-to-date
checks, failure handling and the audit ledger.
"""

from pathlib import Path

import pytest

from jooqbuild.adapters.mock import MockGeneratorLauncher
from jooqbuild.core.build.audit import BuildLedger
from jooqbuild.core.build.runner import TaskRunner, tasks_required_by, with_dependencies
from jooqbuild.core.build.state_file import default_state_path, load_state
from jooqbuild.core.build.tasks import Task
from jooqbuild.core.errors import GenerationFailure
from jooqbuild.core.models.coordinates import Coordinate
from jooqbuild.core.plugin import JooqBuild


def _configure_h2(profile):
    profile.configuration.update(
        {
            "jdbc": {"driver": "org.h2.Driver", "url": "jdbc:h2:mem:app"},
            "generator": {"database": {"input_schema": "PUBLIC"}},
        }
    )


class TestExecute:
    def test_writes_config_and_launches(self, jooq: JooqBuild, launcher: MockGeneratorLauncher, tmp_path: Path):
        jooq.register("main", _configure_h2)
        task = jooq.task_for("main")

        task.execute()

        config = task.config_file.read_text()
        assert task.config_file == tmp_path / "build" / "tmp" / "generateMainSources" / "config.xml"
        assert "jooq-codegen-3.18.0.xsd" in config
        assert "<url>jdbc:h2:mem:app</url>" in config
        assert "<inputSchema>PUBLIC</inputSchema>" in config
        assert f"<directory>{task.output_directory}</directory>" in config

        assert launcher.call_count == 1
        context = launcher.call_log[0]
        assert context.task_name == "generateMainSources"
        assert context.config_file == task.config_file
        assert context.output_directory == task.output_directory
        assert context.working_dir == tmp_path
        assert (task.output_directory / "Tables.java").is_file()

    def test_classpath_enforced(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        jooq.runtime_classpath.add("org.jooq:jooq-meta-extensions:3.11.0")
        jooq.runtime_classpath.add("com.h2database:h2:2.2.224")

        jooq.task_for("main").execute()

        classpath = launcher.call_log[0].classpath
        assert Coordinate.parse("org.jooq:jooq-codegen:3.18.7") in classpath
        assert Coordinate.parse("org.jooq:jooq-meta-extensions:3.18.7") in classpath
        assert Coordinate.parse("com.h2database:h2:2.2.224") in classpath
        assert Coordinate.parse("javax.activation:activation:1.1.1") in classpath

    def test_jvm_args_passed(self, project, tmp_path: Path, launcher: MockGeneratorLauncher):
        from jooqbuild.core.models.settings import BuildSettings
        from jooqbuild.core.plugin import JooqPlugin

        settings = BuildSettings.for_project(tmp_path, toolchain_version=17, jvm_args=("-Xmx512m",))
        jooq = JooqPlugin(settings, launcher=launcher).apply(project)
        jooq.register("main")
        jooq.task_for("main").execute()
        assert launcher.call_log[0].jvm_args == ["-Xmx512m"]

    def test_failure_raises_and_cleans_up(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        task = jooq.task_for("main")
        launcher.set_failure("generateMainSources", exit_code=3, error="connection refused")

        with pytest.raises(GenerationFailure, match="connection refused") as exc:
            task.execute()

        assert exc.value.exit_code == 3
        assert exc.value.task == "generateMainSources"
        assert not task.output_directory.exists()

    def test_failure_keeps_existing_output(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        task = jooq.task_for("main")
        task.execute()
        launcher.set_failure("generateMainSources")

        with pytest.raises(GenerationFailure):
            task.execute()
        assert (task.output_directory / "Tables.java").is_file()


class TestUpToDate:
    def test_second_run_is_up_to_date(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main", _configure_h2)
        task = jooq.task_for("main")

        first = TaskRunner(jooq.project).run([task])
        second = TaskRunner(jooq.project).run([task])

        assert first.executed == 1
        assert second.up_to_date == 1
        assert second.receipt_for("generateMainSources").output == "UP-TO-DATE"
        assert launcher.call_count == 1

    def test_configuration_change_reruns(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        profile = jooq.register("main", _configure_h2)
        task = jooq.task_for("main")
        TaskRunner(jooq.project).run([task])

        profile.configuration["jdbc"]["url"] = "jdbc:h2:mem:other"
        report = TaskRunner(jooq.project).run([task])

        assert report.executed == 1
        assert launcher.call_count == 2

    def test_classpath_change_reruns(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        task = jooq.task_for("main")
        TaskRunner(jooq.project).run([task])

        jooq.runtime_classpath.add("org.postgresql:postgresql:42.7.1")
        assert TaskRunner(jooq.project).run([task]).executed == 1

    def test_deleted_output_reruns(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        task = jooq.task_for("main")
        TaskRunner(jooq.project).run([task])

        (task.output_directory / "Tables.java").unlink()
        assert TaskRunner(jooq.project).run([task]).executed == 1
        assert (task.output_directory / "Tables.java").is_file()

    @pytest.mark.parametrize(
        "before,after",
        [([], {}), (None, ""), ({}, None)],
        ids=["list-to-mapping", "none-to-empty-string", "mapping-to-none"],
    )
    def test_empty_value_change_reruns(self, jooq: JooqBuild, launcher: MockGeneratorLauncher, before, after):
        profile = jooq.register(
            "main", lambda p: p.configuration.update({"generator": {"database": {"properties": before}}})
        )
        task = jooq.task_for("main")
        TaskRunner(jooq.project).run([task])

        profile.configuration["generator"]["database"]["properties"] = after
        assert TaskRunner(jooq.project).run([task]).executed == 1
        assert launcher.call_count == 2

    def test_rerun_flag(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        task = jooq.task_for("main")
        TaskRunner(jooq.project).run([task])

        assert TaskRunner(jooq.project, rerun=True).run([task]).executed == 1
        assert launcher.call_count == 2

    def test_state_recorded(self, jooq: JooqBuild):
        jooq.register("main")
        TaskRunner(jooq.project).run([jooq.task_for("main")])

        state = load_state(default_state_path(jooq.project.state_dir))
        assert "generateMainSources" in state.tasks


class TestFailures:
    def test_failure_forgets_state(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        task = jooq.task_for("main")
        TaskRunner(jooq.project).run([task])

        launcher.set_failure("generateMainSources", exit_code=2)
        failed = TaskRunner(jooq.project, rerun=True).run([task])
        receipt = failed.receipt_for("generateMainSources")
        assert receipt.failed
        assert receipt.exit_code == 2
        assert "Task 'generateMainSources' failed" in receipt.error

        state = load_state(default_state_path(jooq.project.state_dir))
        assert "generateMainSources" not in state.tasks

        launcher.clear_failure("generateMainSources")
        assert TaskRunner(jooq.project).run([task]).executed == 1

    def test_sibling_profile_unaffected(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        jooq.register("test", lambda p: setattr(p, "source_set", "test"))
        launcher.set_failure("generateMainSources")

        report = TaskRunner(jooq.project).run(jooq.tasks())

        assert report.status == "partial"
        assert report.receipt_for("generateMainSources").failed
        assert report.receipt_for("generateTestSources").ok
        assert (jooq.task_for("test").output_directory / "Tables.java").is_file()

    def test_fail_fast_stops(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        jooq.register("test", lambda p: setattr(p, "source_set", "test"))
        launcher.set_failure("generateMainSources")

        report = TaskRunner(jooq.project, fail_fast=True).run(jooq.tasks())

        assert report.total == 1
        assert report.status == "failed"

    def test_unresolvable_classpath_fails_task(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        jooq.runtime_classpath.add("org.postgresql:postgresql")

        report = TaskRunner(jooq.project).run(jooq.tasks())

        assert report.failed == 1
        assert "jooqRuntime" in report.receipts[0].error
        assert launcher.call_count == 0


class TestLedger:
    def test_one_record_per_run(self, jooq: JooqBuild, launcher: MockGeneratorLauncher):
        jooq.register("main")
        ledger = BuildLedger.in_state_dir(jooq.project.state_dir)
        launcher.set_failure("generateMainSources", exit_code=4, error="boom")

        TaskRunner(jooq.project, ledger=ledger).run(jooq.tasks())
        launcher.clear_failure("generateMainSources")
        TaskRunner(jooq.project, ledger=ledger).run(jooq.tasks())
        TaskRunner(jooq.project, ledger=ledger).run(jooq.tasks())

        records = ledger.records()
        assert [r.status for r in records] == ["failed", "ok", "ok"]
        assert records[0].tasks == ["generateMainSources"]
        assert records[0].outcomes[0].exit_code == 4
        assert any("boom" in error for error in records[0].errors)
        assert records[1].count("ok") == 1
        assert records[2].count("skipped") == 1
        assert ledger.latest() == records[2]


class TestTaskGraph:
    def test_eager_source_set_requires_generation(self, jooq: JooqBuild):
        jooq.register("main")
        main = jooq.project.source_sets.get("main")
        assert tasks_required_by(main) == [jooq.task_for("main")]

    def test_lazy_source_set_requires_nothing(self, project, tmp_path: Path, launcher: MockGeneratorLauncher):
        from jooqbuild.core.models.settings import BuildSettings
        from jooqbuild.core.plugin import JooqPlugin

        settings = BuildSettings.for_project(tmp_path, generate_schema_source_on_compilation=False)
        jooq = JooqPlugin(settings, launcher=launcher).apply(project)
        jooq.register("main")
        assert tasks_required_by(project.source_sets.get("main")) == []

    def test_dependencies_first(self, project):
        a = project.tasks.create("a", Task)
        b = project.tasks.create("b", Task)
        b.depends_on(a)
        assert with_dependencies([b]) == [a, b]

    def test_cycle_detected(self, project):
        a = project.tasks.create("a", Task)
        b = project.tasks.create("b", Task)
        a.depends_on(b)
        b.depends_on(a)
        with pytest.raises(ValueError, match="Circular"):
            with_dependencies([a])
