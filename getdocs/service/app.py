"""FastAPI application exposing documentation trees over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Mapping

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..builder import DocTreeBuilder
from ..models import FieldDoc, RecordDefinition
from ..registry import UnknownType


class FieldDocModel(BaseModel):
    name: str
    type_signature: str
    doc_lines: List[str] = []
    children: List["FieldDocModel"] = []

    @classmethod
    def from_doc(cls, doc: FieldDoc) -> "FieldDocModel":
        return cls(
            name=doc.name,
            type_signature=doc.type_signature,
            doc_lines=list(doc.doc_lines),
            children=[cls.from_doc(child) for child in doc.children],
        )


FieldDocModel.model_rebuild()


class DocsResponse(BaseModel):
    type_name: str
    fields: List[FieldDocModel]


class TypesResponse(BaseModel):
    types: List[str]


class HealthResponse(BaseModel):
    status: str


RegistryFactory = Callable[[], Mapping[str, RecordDefinition]]


def create_app(registry_factory: RegistryFactory) -> FastAPI:
    """Create the FastAPI application serving docs for ``registry_factory()``."""

    app = FastAPI(title="getdocs", version="1.0.0")

    async def get_builder() -> DocTreeBuilder:
        return DocTreeBuilder(registry_factory())

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/types", response_model=TypesResponse)
    async def list_types(builder: DocTreeBuilder = Depends(get_builder)) -> TypesResponse:
        return TypesResponse(types=list(builder.registry))

    @app.get("/types/{type_name}/docs", response_model=DocsResponse)
    async def type_docs(
        type_name: str,
        wrap_root: bool = False,
        builder: DocTreeBuilder = Depends(get_builder),
    ) -> DocsResponse:
        def _run_build() -> List[FieldDoc]:
            if wrap_root:
                return [builder.build_root(type_name)]
            return list(builder.build(type_name))

        loop = asyncio.get_running_loop()
        docs = await loop.run_in_executor(None, _run_build)
        return DocsResponse(
            type_name=type_name,
            fields=[FieldDocModel.from_doc(doc) for doc in docs],
        )

    @app.exception_handler(UnknownType)
    async def unknown_type_handler(_: Any, exc: UnknownType) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    return app


def run_service(
    registry_factory: RegistryFactory, host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(registry_factory), host=host, port=port)
