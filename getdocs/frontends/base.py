"""Base classes for registry front-end plugins."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from ..models import RecordDefinition


class SchemaError(RuntimeError):
    """Raised when a schema source cannot be read or has an invalid shape."""


class Frontend(ABC):
    """Contract for front-ends that turn a source file into record definitions."""

    name: str = ""

    @abstractmethod
    def supports(self, path: Path) -> bool:
        """Return True when this front-end can read ``path``."""

    @abstractmethod
    def load(self, path: Path) -> Iterable[RecordDefinition]:
        """Produce record definitions in declaration order."""
