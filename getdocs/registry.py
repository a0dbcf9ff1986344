"""Immutable registry of record definitions used for nested-type resolution."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping

from .models import RecordDefinition


class UnknownType(LookupError):
    """Raised when documentation is requested for a type absent from the registry."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unknown record type: {type_name!r}")
        self.type_name = type_name


class RegistryError(ValueError):
    """Raised when record definitions cannot form a consistent registry."""


class Registry(Mapping[str, RecordDefinition]):
    """Read-only ``type_name -> RecordDefinition`` mapping, in declaration order."""

    def __init__(self, definitions: Iterable[RecordDefinition] = ()) -> None:
        records: dict[str, RecordDefinition] = {}
        for definition in definitions:
            if not isinstance(definition, RecordDefinition):
                raise RegistryError(
                    f"Registry entries must be RecordDefinition instances, got {type(definition).__name__}"
                )
            if definition.type_name in records:
                raise RegistryError(f"Duplicate record type: {definition.type_name!r}")
            records[definition.type_name] = definition
        self._records = MappingProxyType(records)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, RecordDefinition]) -> "Registry":
        for key, definition in mapping.items():
            if key != definition.type_name:
                raise RegistryError(
                    f"Registry key {key!r} does not match record type {definition.type_name!r}"
                )
        return cls(mapping.values())

    def __getitem__(self, type_name: str) -> RecordDefinition:
        return self._records[type_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Registry({list(self._records)!r})"

    def require(self, type_name: str) -> RecordDefinition:
        """Return the definition for ``type_name`` or raise :class:`UnknownType`."""
        try:
            return self._records[type_name]
        except KeyError:
            raise UnknownType(type_name) from None

    def type_names(self) -> List[str]:
        return list(self._records)

    def merged(self, other: Iterable[RecordDefinition]) -> "Registry":
        """Return a new registry holding these definitions followed by ``other``."""
        return Registry([*self._records.values(), *other])


__all__ = ["Registry", "RegistryError", "UnknownType"]
