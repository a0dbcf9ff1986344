"""Core data models shared across getdocs components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple, Union


@dataclass(frozen=True)
class FieldDefinition:
    """A single declared field of a record, as supplied by a front-end."""

    name: str
    type_signature: str
    doc_lines: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Field name must be a non-empty string")
        object.__setattr__(self, "type_signature", str(self.type_signature))
        object.__setattr__(self, "doc_lines", _as_lines(self.doc_lines))


@dataclass(frozen=True)
class RecordDefinition:
    """Ordered field declarations for one record type."""

    type_name: str
    fields: Tuple[FieldDefinition, ...] = ()
    doc_lines: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.type_name, str) or not self.type_name.strip():
            raise ValueError("Record type name must be a non-empty string")
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "doc_lines", _as_lines(self.doc_lines))

    def field_names(self) -> List[str]:
        return [item.name for item in self.fields]


@dataclass(frozen=True)
class FieldDoc:
    """Documentation node for one field, with the inlined docs of nested records."""

    name: str
    type_signature: str
    doc_lines: Tuple[str, ...] = ()
    children: Tuple["FieldDoc", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "doc_lines", _as_lines(self.doc_lines))
        object.__setattr__(self, "children", tuple(self.children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type_signature": self.type_signature,
            "doc_lines": list(self.doc_lines),
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FieldDoc":
        return cls(
            name=str(payload["name"]),
            type_signature=str(payload.get("type_signature", "")),
            doc_lines=tuple(str(line) for line in payload.get("doc_lines") or ()),
            children=tuple(cls.from_dict(child) for child in payload.get("children") or ()),
        )

    def walk(self, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], "FieldDoc"]]:
        """Yield ``(path, node)`` pairs depth-first, starting with this node."""
        path = prefix + (self.name,)
        yield path, self
        for child in self.children:
            yield from child.walk(path)


def _as_lines(value: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    # a bare string is one doc comment, possibly spanning several lines
    if isinstance(value, str):
        return tuple(value.splitlines())
    return tuple(str(line) for line in value)


def docs_to_dicts(docs: Sequence[FieldDoc]) -> List[Dict[str, Any]]:
    """Serialise a documentation sequence into plain lists and dictionaries."""
    return [doc.to_dict() for doc in docs]


def walk_docs(docs: Sequence[FieldDoc]) -> Iterator[Tuple[Tuple[str, ...], FieldDoc]]:
    for doc in docs:
        yield from doc.walk()


__all__ = [
    "FieldDefinition",
    "FieldDoc",
    "RecordDefinition",
    "docs_to_dicts",
    "walk_docs",
]
