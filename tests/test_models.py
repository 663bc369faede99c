"""
Tests for domain models — coordinates, editions, profiles, receipts.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from jooqbuild.core.models import (
    BuildSettings,
    Coordinate,
    GenerationProfile,
    JooqEdition,
    TaskReceipt,
    VersionSelection,
    task_name_for,
)


class TestCoordinate:
    def test_parse_versioned(self):
        c = Coordinate.parse("org.jooq:jooq:3.10.0")
        assert c.group == "org.jooq"
        assert c.name == "jooq"
        assert c.version == "3.10.0"
        assert c.notation == "org.jooq:jooq:3.10.0"

    def test_parse_unversioned(self):
        c = Coordinate.parse("org.jooq:jooq-codegen")
        assert c.version is None
        assert str(c) == "org.jooq:jooq-codegen"
        assert c.module == "org.jooq:jooq-codegen"

    @pytest.mark.parametrize("notation", ["", "jooq", "org.jooq::3.1", "a:b:c:d"])
    def test_parse_invalid(self, notation: str):
        with pytest.raises(ValueError):
            Coordinate.parse(notation)

    def test_frozen(self):
        c = Coordinate.parse("org.jooq:jooq:3.10.0")
        with pytest.raises(ValidationError):
            c.version = "3.11.0"

    def test_equality_by_value(self):
        assert Coordinate.parse("a:b:1") == Coordinate(group="a", name="b", version="1")


class TestEdition:
    def test_group_ids(self):
        assert JooqEdition.OSS.group_id == "org.jooq"
        assert JooqEdition.PRO.group_id == "org.jooq.pro"
        assert JooqEdition.TRIAL_JAVA_8.group_id == "org.jooq.trial-java-8"

    def test_all_group_ids_distinct(self):
        assert len(JooqEdition.group_ids()) == len(JooqEdition)


class TestVersionSelection:
    def test_schema_version(self):
        selection = VersionSelection(edition=JooqEdition.OSS, version="3.18.7")
        assert selection.schema_version == "3.18.0"

    def test_coordinate(self):
        selection = VersionSelection(edition=JooqEdition.PRO, version="3.18.0")
        assert selection.coordinate("jooq-meta").notation == "org.jooq.pro:jooq-meta:3.18.0"


class TestProfile:
    def test_task_name(self):
        assert task_name_for("main") == "generateMainSources"
        assert task_name_for("legacyDb") == "generateLegacyDbSources"

    def test_defaults(self):
        profile = GenerationProfile(name="main")
        assert profile.source_set == "main"
        assert profile.configuration == {}
        assert profile.output_directory is None
        assert profile.task_name == "generateMainSources"

    def test_output_directory_coerced_to_path(self):
        profile = GenerationProfile(name="main")
        profile.output_directory = "src/generated"
        assert profile.output_directory == Path("src/generated")


class TestSettings:
    def test_for_project_resolves_build_dir(self, tmp_path: Path):
        settings = BuildSettings.for_project(tmp_path, "out")
        assert settings.build_dir == tmp_path / "out"
        assert settings.generated_sources_root == tmp_path / "out" / "generated-src" / "jooq"

    def test_frozen(self, tmp_path: Path):
        settings = BuildSettings.for_project(tmp_path)
        with pytest.raises(ValidationError):
            settings.version = "3.18.0"


class TestReceipt:
    def test_factories(self):
        assert TaskReceipt.success(task="t").ok
        assert TaskReceipt.failure(task="t", error="boom").failed
        skipped = TaskReceipt.skip(task="t")
        assert skipped.up_to_date
        assert skipped.output == "UP-TO-DATE"
