"""
Tests for the generator configuration document.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from jooqbuild.core.plugin.config_xml import camel_case, singular, to_xml, with_target_directory

NS = "{http://www.jooq.org/xsd/jooq-codegen-3.18.0.xsd}"


def _parse(document: str) -> ET.Element:
    return ET.fromstring(document.split("\n", 1)[1])


class TestNames:
    @pytest.mark.parametrize(
        "key,expected",
        [("input_schema", "inputSchema"), ("inputSchema", "inputSchema"), ("jdbc", "jdbc"),
         ("include_tables_and_views", "includeTablesAndViews")],
    )
    def test_camel_case(self, key: str, expected: str):
        assert camel_case(key) == expected

    @pytest.mark.parametrize(
        "tag,expected",
        [("forcedTypes", "forcedType"), ("schemata", "schema"), ("properties", "property"),
         ("strategies", "strategy"), ("matchers", "matcher"), ("catalog", "catalog")],
    )
    def test_singular(self, tag: str, expected: str):
        assert singular(tag) == expected


class TestTargetDirectory:
    def test_injected(self):
        result = with_target_directory({}, Path("/out"))
        assert result == {"generator": {"target": {"directory": "/out"}}}

    def test_overrides_user_value(self):
        config = {"generator": {"target": {"directory": "elsewhere", "package_name": "com.acme"}}}
        result = with_target_directory(config, Path("/out"))
        assert result["generator"]["target"] == {"directory": "/out", "package_name": "com.acme"}

    def test_original_untouched(self):
        config = {"generator": {"target": {"package_name": "com.acme"}}}
        with_target_directory(config, Path("/out"))
        assert config == {"generator": {"target": {"package_name": "com.acme"}}}


class TestDocument:
    def test_declaration_and_namespace(self):
        document = to_xml({}, "3.18.0")
        assert document.startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n')
        assert _parse(document).tag == f"{NS}configuration"

    def test_nested_mapping(self):
        config = {
            "jdbc": {"driver": "org.h2.Driver", "url": "jdbc:h2:mem:db"},
            "generator": {"database": {"input_schema": "PUBLIC"}, "target": {"package_name": "com.acme.db"}},
        }
        root = _parse(to_xml(config, "3.18.0"))
        assert root.find(f"{NS}jdbc/{NS}url").text == "jdbc:h2:mem:db"
        assert root.find(f"{NS}generator/{NS}database/{NS}inputSchema").text == "PUBLIC"
        assert root.find(f"{NS}generator/{NS}target/{NS}packageName").text == "com.acme.db"

    def test_lists_and_booleans(self):
        config = {
            "generator": {
                "database": {
                    "forced_types": [
                        {"name": "BOOLEAN", "include_expression": ".*\\.IS_.*"},
                        {"name": "INSTANT", "include_types": "TIMESTAMP"},
                    ]
                },
                "generate": {"records": True, "pojos": False},
            }
        }
        root = _parse(to_xml(config, "3.18.0"))
        forced = root.findall(f"{NS}generator/{NS}database/{NS}forcedTypes/{NS}forcedType")
        assert [f.find(f"{NS}name").text for f in forced] == ["BOOLEAN", "INSTANT"]
        assert root.find(f"{NS}generator/{NS}generate/{NS}records").text == "true"
        assert root.find(f"{NS}generator/{NS}generate/{NS}pojos").text == "false"

    def test_special_characters_escaped(self):
        document = to_xml({"jdbc": {"url": "jdbc:x?a=1&b=<2>"}}, "3.18.0")
        assert "&amp;" in document
        assert _parse(document).find(f"{NS}jdbc/{NS}url").text == "jdbc:x?a=1&b=<2>"

    def test_stable_output(self):
        config = {"jdbc": {"url": "u"}, "generator": {"name": "org.jooq.codegen.JavaGenerator"}}
        assert to_xml(config, "3.18.0") == to_xml(dict(config), "3.18.0")

    def test_none_left_out(self):
        root = _parse(to_xml({"jdbc": {"url": "u", "user": None, "password": ""}}, "3.18.0"))
        jdbc = root.find(f"{NS}jdbc")
        assert jdbc.find(f"{NS}user") is None
        assert jdbc.find(f"{NS}password") is not None

    def test_none_and_empty_string_differ(self):
        assert to_xml({"jdbc": {"user": None}}, "3.18.0") != to_xml({"jdbc": {"user": ""}}, "3.18.0")
