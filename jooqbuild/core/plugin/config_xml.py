"""
Generator configuration document — the XML the jOOQ GenerationTool reads.

The configuration mapping is written out element by element:

    mapping    →  child elements (snake_case keys become camelCase)
    list       →  wrapper element with one singular child per item
                  (forcedTypes → forcedType, schemata → schema)
    bool       →  true / false
    None       →  element left out

Output depends only on the mapping and the schema version, so an
unchanged configuration always serializes to the same bytes.
"""

from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

NAMESPACE_TEMPLATE = "http://www.jooq.org/xsd/jooq-codegen-{version}.xsd"

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

_IRREGULAR_SINGULARS = {
    "schemata": "schema",
    "properties": "property",
    "matchers": "matcher",
}


def camel_case(key: str) -> str:
    if "_" not in key:
        return key
    first, *rest = key.split("_")
    return first + "".join(part[:1].upper() + part[1:] for part in rest)


def singular(tag: str) -> str:
    if tag in _IRREGULAR_SINGULARS:
        return _IRREGULAR_SINGULARS[tag]
    if tag.endswith("ies"):
        return tag[:-3] + "y"
    if tag.endswith("s"):
        return tag[:-1]
    return tag


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append(parent: ET.Element, key: str, value: Any) -> None:
    if value is None:
        return
    tag = camel_case(str(key))
    element = ET.SubElement(parent, tag)
    if isinstance(value, dict):
        for child_key, child_value in value.items():
            _append(element, child_key, child_value)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _append(element, singular(tag), item)
    else:
        element.text = _scalar(value)


def with_target_directory(configuration: dict[str, Any], directory: Path) -> dict[str, Any]:
    """Copy of ``configuration`` with generator.target.directory set."""
    result = copy.deepcopy(configuration)
    generator = result.get("generator")
    if not isinstance(generator, dict):
        generator = result["generator"] = {}
    target = generator.get("target")
    if not isinstance(target, dict):
        target = generator["target"] = {}
    target["directory"] = str(directory)
    return result


def to_xml(configuration: dict[str, Any], schema_version: str) -> str:
    """Serialize a configuration mapping to a codegen XML document."""
    root = ET.Element("configuration", {"xmlns": NAMESPACE_TEMPLATE.format(version=schema_version)})
    for key, value in configuration.items():
        _append(root, key, value)
    ET.indent(root)
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
