from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from getdocs.models import FieldDefinition, RecordDefinition
from getdocs.registry import Registry
from tests._fixtures.records import LENGTH_DOC
from tests._fixtures.schema_builder import SchemaBuilder


@pytest.fixture(autouse=True)
def _reset_getdocs_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing getdocs records."""
    yield
    logger = logging.getLogger("getdocs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def schema_builder(tmp_path: Path) -> SchemaBuilder:
    """Provide a reusable schema builder rooted at the pytest tmp_path."""
    return SchemaBuilder(tmp_path)


@pytest.fixture
def simple_registry() -> Registry:
    """``SimpleMap.simple: HashMap < String, Simple >`` over a two-field ``Simple``."""
    return Registry(
        [
            RecordDefinition(
                type_name="Simple",
                fields=(
                    FieldDefinition("name", "String", ("Name for simple example",)),
                    FieldDefinition("length", "u64", LENGTH_DOC),
                ),
            ),
            RecordDefinition(
                type_name="SimpleMap",
                fields=(
                    FieldDefinition(
                        "simple", "HashMap < String, Simple >", ("Map for simple struct",)
                    ),
                ),
            ),
        ]
    )
