"""Documentation tree construction over a record registry."""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Mapping, Optional, Tuple

from .logging import get_logger
from .models import FieldDefinition, FieldDoc, RecordDefinition
from .registry import UnknownType
from .signature import parse_signature, resolve_nested_record

logger = get_logger("builder")


class DocTreeBuilder:
    """Builds :class:`FieldDoc` trees for record types of a read-only registry.

    Each field whose type signature resolves to one or more known records gets
    the documentation of those records inlined as its children. Expansion stops
    at any record already open on the current path, so self-referential and
    mutually-referential registries still produce finite trees.
    """

    def __init__(self, registry: Mapping[str, RecordDefinition]) -> None:
        self._registry = registry

    @property
    def registry(self) -> Mapping[str, RecordDefinition]:
        return self._registry

    def build(
        self,
        root_type_name: str,
        visiting: Optional[Iterable[str]] = None,
    ) -> Tuple[FieldDoc, ...]:
        """Return one documentation node per field of ``root_type_name``.

        ``visiting`` names records already being expanded by the caller; the
        root itself is always added. The caller's collection is not modified.
        """
        record = self._lookup(root_type_name)
        path = frozenset(visiting or ()) | {root_type_name}
        return self._expand(record, path)

    def build_root(self, root_type_name: str) -> FieldDoc:
        """Wrap :meth:`build` output in a single node named after the root type."""
        record = self._lookup(root_type_name)
        return FieldDoc(
            name=record.type_name,
            type_signature=record.type_name,
            doc_lines=record.doc_lines,
            children=self._expand(record, frozenset({root_type_name})),
        )

    def _lookup(self, type_name: str) -> RecordDefinition:
        try:
            return self._registry[type_name]
        except KeyError:
            raise UnknownType(type_name) from None

    def _expand(self, record: RecordDefinition, path: AbstractSet[str]) -> Tuple[FieldDoc, ...]:
        return tuple(self._document_field(item, path) for item in record.fields)

    def _document_field(self, item: FieldDefinition, path: AbstractSet[str]) -> FieldDoc:
        children: List[FieldDoc] = []
        resolved = resolve_nested_record(item.type_signature, self._registry)
        if not resolved and parse_signature(item.type_signature) is not None:
            logger.debug(
                "No known record among the arguments of %s (%s)",
                item.name,
                item.type_signature,
            )
        for nested in resolved:
            if nested in path:
                logger.debug(
                    "Not expanding %s (%s): %s is already being documented",
                    item.name,
                    item.type_signature,
                    nested,
                )
                continue
            children.extend(self._expand(self._registry[nested], path | {nested}))
        return FieldDoc(
            name=item.name,
            type_signature=item.type_signature,
            doc_lines=item.doc_lines,
            children=tuple(children),
        )


def build(
    root_type_name: str,
    registry: Mapping[str, RecordDefinition],
    visiting: Optional[Iterable[str]] = None,
) -> Tuple[FieldDoc, ...]:
    """Build the documentation sequence for ``root_type_name``."""
    return DocTreeBuilder(registry).build(root_type_name, visiting)


def build_root(root_type_name: str, registry: Mapping[str, RecordDefinition]) -> FieldDoc:
    return DocTreeBuilder(registry).build_root(root_type_name)


__all__ = ["DocTreeBuilder", "build", "build_root"]
