"""Schema-file front-ends (YAML and JSON record declarations)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import yaml

from .base import Frontend, SchemaError
from ..logging import get_logger
from ..models import FieldDefinition, RecordDefinition

logger = get_logger("frontends.schema")


class _SchemaFrontend(Frontend):
    suffixes: Tuple[str, ...] = ()

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in self.suffixes

    def load(self, path: Path) -> Iterable[RecordDefinition]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SchemaError(f"Failed to read {path}: {exc}") from exc
        data = self._parse(path, text) if text.strip() else {}
        records = records_from_document(data, source=path.name)
        logger.info("Loaded %d record(s) from %s", len(records), path.name)
        return records

    def _parse(self, path: Path, text: str) -> Any:
        raise NotImplementedError


class YamlSchemaFrontend(_SchemaFrontend):
    """Reads ``records:`` declarations from YAML files."""

    name = "yaml"
    suffixes = (".yml", ".yaml")

    def _parse(self, path: Path, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SchemaError(f"Failed to parse {path.name}: {exc}") from exc


class JsonSchemaFrontend(_SchemaFrontend):
    """Reads ``records`` declarations from JSON files."""

    name = "json"
    suffixes = (".json",)

    def _parse(self, path: Path, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Failed to parse {path.name}: {exc}") from exc


def records_from_document(data: Any, *, source: str = "<schema>") -> List[RecordDefinition]:
    """Convert a decoded schema document into record definitions.

    The document must be a mapping with a ``records`` mapping of type name to
    ``{"doc": ..., "fields": [...]}``. Record and field order are preserved.
    """
    if data is None:
        return []
    if not isinstance(data, dict):
        raise SchemaError(f"{source} must contain a mapping at the root")
    records_data = data.get("records")
    if records_data is None:
        return []
    if not isinstance(records_data, dict):
        raise SchemaError(f"{source}: 'records' must be a mapping of type name to record")

    records: List[RecordDefinition] = []
    for type_name, body in records_data.items():
        if not isinstance(type_name, str) or not type_name.strip():
            raise SchemaError(f"{source}: record names must be non-empty strings")
        body = {} if body is None else body
        if not isinstance(body, dict):
            raise SchemaError(f"{source}: record {type_name!r} must be a mapping")
        fields = _parse_fields(body.get("fields"), type_name, source)
        records.append(
            RecordDefinition(
                type_name=type_name,
                fields=fields,
                doc_lines=_as_doc_lines(body.get("doc"), f"record {type_name!r}", source),
            )
        )
    return records


def _parse_fields(raw: Any, type_name: str, source: str) -> Tuple[FieldDefinition, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SchemaError(f"{source}: 'fields' of record {type_name!r} must be a list")

    fields: List[FieldDefinition] = []
    seen: Dict[str, int] = {}
    for position, entry in enumerate(raw):
        where = f"field #{position + 1} of record {type_name!r}"
        if not isinstance(entry, dict):
            raise SchemaError(f"{source}: {where} must be a mapping")
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError(f"{source}: {where} needs a non-empty 'name'")
        if name in seen:
            raise SchemaError(f"{source}: record {type_name!r} declares field {name!r} twice")
        seen[name] = position
        signature = entry.get("type")
        if not isinstance(signature, (str, int, float)) or isinstance(signature, bool):
            raise SchemaError(f"{source}: field {name!r} of record {type_name!r} needs a 'type'")
        fields.append(
            FieldDefinition(
                name=name,
                type_signature=str(signature),
                doc_lines=_as_doc_lines(entry.get("doc"), f"field {name!r}", source),
            )
        )
    return tuple(fields)


def _as_doc_lines(value: Any, where: str, source: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.rstrip("\n").splitlines())
    if isinstance(value, list):
        if not all(isinstance(line, str) for line in value):
            raise SchemaError(f"{source}: doc lines of {where} must be strings")
        return tuple(value)
    raise SchemaError(f"{source}: 'doc' of {where} must be a string or a list of strings")


__all__ = [
    "JsonSchemaFrontend",
    "YamlSchemaFrontend",
    "records_from_document",
]
