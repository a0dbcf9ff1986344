"""Tests for the YAML and JSON schema front-ends."""

from __future__ import annotations

import json

import pytest

from getdocs.builder import build
from getdocs.frontends import (
    JsonSchemaFrontend,
    SchemaError,
    YamlSchemaFrontend,
    load_registry,
    records_from_document,
)
from tests._fixtures.records import LENGTH_DOC, SIMPLE_MAP_SCHEMA
from tests._fixtures.schema_builder import SchemaBuilder


def test_yaml_schema_builds_simple_map_tree(schema_builder: SchemaBuilder) -> None:
    registry = schema_builder.registry(SIMPLE_MAP_SCHEMA)

    assert registry.type_names() == ["Simple", "SimpleMap"]
    assert registry["Simple"].doc_lines == ("A simple record",)

    (simple,) = build("SimpleMap", registry)
    assert simple.name == "simple"
    assert simple.type_signature == "HashMap < String, Simple >"
    assert simple.doc_lines == ("Map for simple struct",)
    assert [child.name for child in simple.children] == ["name", "length"]
    assert simple.children[1].doc_lines == LENGTH_DOC


def test_json_schema_is_supported(schema_builder: SchemaBuilder) -> None:
    document = {
        "records": {
            "Point": {"fields": [{"name": "x", "type": "f64"}, {"name": "y", "type": "f64"}]},
            "Line": {"fields": [{"name": "ends", "type": "Pair<Point, Point>", "doc": ["Endpoints"]}]},
        }
    }
    registry = schema_builder.registry(json.dumps(document), name="schema.json")

    (ends,) = build("Line", registry)
    assert ends.doc_lines == ("Endpoints",)
    assert [child.name for child in ends.children] == ["x", "y"]


def test_frontends_select_by_suffix(tmp_path) -> None:
    assert YamlSchemaFrontend().supports(tmp_path / "a.yml")
    assert YamlSchemaFrontend().supports(tmp_path / "a.YAML")
    assert not YamlSchemaFrontend().supports(tmp_path / "a.json")
    assert JsonSchemaFrontend().supports(tmp_path / "a.json")


def test_empty_schema_yields_empty_registry(schema_builder: SchemaBuilder) -> None:
    assert len(schema_builder.registry("\n")) == 0


def test_missing_schema_file_raises(tmp_path) -> None:
    with pytest.raises(SchemaError, match="not found"):
        load_registry(tmp_path / "missing.yml")


def test_unsupported_suffix_raises(schema_builder: SchemaBuilder) -> None:
    path = schema_builder.write("schema.toml", "records = {}\n")

    with pytest.raises(SchemaError, match="No front-end"):
        load_registry(path)


def test_invalid_yaml_raises_schema_error(schema_builder: SchemaBuilder) -> None:
    with pytest.raises(SchemaError, match="Failed to parse"):
        schema_builder.registry("records: [unclosed\n")


def test_invalid_json_raises_schema_error(schema_builder: SchemaBuilder) -> None:
    with pytest.raises(SchemaError, match="Failed to parse"):
        schema_builder.registry("{", name="schema.json")


@pytest.mark.parametrize(
    ("document", "message"),
    [
        (["not", "a", "mapping"], "mapping at the root"),
        ({"records": ["A"]}, "'records' must be a mapping"),
        ({"records": {"A": "text"}}, "record 'A' must be a mapping"),
        ({"records": {"A": {"fields": {"x": "u8"}}}}, "must be a list"),
        ({"records": {"A": {"fields": ["x"]}}}, "field #1 of record 'A' must be a mapping"),
        ({"records": {"A": {"fields": [{"type": "u8"}]}}}, "needs a non-empty 'name'"),
        ({"records": {"A": {"fields": [{"name": "x"}]}}}, "needs a 'type'"),
        ({"records": {"A": {"fields": [{"name": "x", "type": "u8", "doc": 3}]}}}, "'doc' of field 'x'"),
        ({"records": {"A": {"fields": [{"name": "x", "type": "u8", "doc": [1]}]}}}, "must be strings"),
        (
            {"records": {"A": {"fields": [{"name": "x", "type": "u8"}, {"name": "x", "type": "u8"}]}}},
            "declares field 'x' twice",
        ),
    ],
)
def test_malformed_documents_raise_schema_error(document: object, message: str) -> None:
    with pytest.raises(SchemaError, match=message):
        records_from_document(document, source="schema.yml")


def test_document_without_fields_gives_empty_record() -> None:
    (record,) = records_from_document({"records": {"Empty": None}})

    assert record.type_name == "Empty"
    assert record.fields == ()


def test_doc_string_is_split_into_lines() -> None:
    (record,) = records_from_document(
        {"records": {"A": {"fields": [{"name": "x", "type": "u8", "doc": "first\nsecond\n"}]}}}
    )

    assert record.fields[0].doc_lines == ("first", "second")
