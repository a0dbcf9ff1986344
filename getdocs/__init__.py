"""Field documentation trees for structured record types."""

from .builder import DocTreeBuilder, build, build_root
from .models import FieldDefinition, FieldDoc, RecordDefinition
from .registry import Registry, RegistryError, UnknownType
from .signature import parse_signature, resolve_nested_record

__all__ = [
    "DocTreeBuilder",
    "FieldDefinition",
    "FieldDoc",
    "RecordDefinition",
    "Registry",
    "RegistryError",
    "UnknownType",
    "build",
    "build_root",
    "parse_signature",
    "resolve_nested_record",
]
