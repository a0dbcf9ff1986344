"""Derive record definitions from Python dataclasses.

Doc lines are attached per field through dataclass metadata::

    @dataclass
    class Simple:
        name: str = field(metadata={"doc": "Name for simple example"})

Annotations are rendered into the same ``Outer<Arg, ...>`` signature form the
schema front-ends use, so ``Dict[str, Simple]`` becomes ``dict<str, Simple>``.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
import typing
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import FieldDefinition, RecordDefinition
from .registry import Registry

DOC_METADATA_KEY = "doc"


def render_annotation(annotation: Any) -> str:
    """Render a type annotation as a canonical signature string."""
    if annotation is None or annotation is type(None):
        return "None"
    if isinstance(annotation, str):
        return annotation.strip()
    if isinstance(annotation, typing.ForwardRef):
        return annotation.__forward_arg__
    if annotation is Any:
        return "Any"
    if isinstance(annotation, (list, tuple)):
        # Callable parameter lists
        return f"[{', '.join(render_annotation(arg) for arg in annotation)}]"

    origin = typing.get_origin(annotation)
    if origin is None:
        return getattr(annotation, "__name__", None) or repr(annotation)

    args = typing.get_args(annotation)
    if origin is typing.Union or origin is types.UnionType:
        outer = "Union"
    elif origin is typing.Literal:
        return f"Literal<{', '.join(repr(arg) for arg in args)}>"
    else:
        outer = getattr(origin, "__name__", None) or getattr(annotation, "_name", None) or repr(origin)
    if not args:
        return outer
    rendered = ", ".join("..." if arg is Ellipsis else render_annotation(arg) for arg in args)
    return f"{outer}<{rendered}>"


def record_from_dataclass(cls: type, localns: Optional[Dict[str, Any]] = None) -> RecordDefinition:
    """Build a :class:`RecordDefinition` from a dataclass type.

    ``localns`` supplies names the class's own module cannot resolve, such as
    sibling dataclasses defined inside a function.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass type")
    namespace = {cls.__name__: cls, **(localns or {})}
    hints = _type_hints(cls, namespace)
    fields: List[FieldDefinition] = []
    for item in dataclasses.fields(cls):
        if item.name in hints:
            annotation = hints[item.name]
        else:
            annotation = _field_hint(cls, item.name, item.type, namespace)
        fields.append(
            FieldDefinition(
                name=item.name,
                type_signature=render_annotation(annotation),
                doc_lines=_doc_lines(item.metadata.get(DOC_METADATA_KEY)),
            )
        )
    return RecordDefinition(
        type_name=cls.__name__,
        fields=tuple(fields),
        doc_lines=_class_doc_lines(cls),
    )


def registry_from_dataclasses(*classes: type) -> Registry:
    """Build a registry in which the given dataclasses can refer to each other."""
    namespace = {cls.__name__: cls for cls in classes}
    return Registry(record_from_dataclass(cls, namespace) for cls in classes)


def _type_hints(cls: type, localns: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls, localns=localns)
    except (NameError, TypeError, SyntaxError):
        # one unresolvable field; the rest are resolved one by one
        return {}


def _field_hint(cls: type, name: str, annotation: Any, localns: Dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    holder = type(
        cls.__name__,
        (),
        {"__module__": cls.__module__, "__annotations__": {name: annotation}},
    )
    try:
        return typing.get_type_hints(holder, localns=localns)[name]
    except (NameError, TypeError, SyntaxError):
        return _bracketed_to_angled(annotation)


def _bracketed_to_angled(annotation: str) -> str:
    """Rewrite an unresolvable ``Outer[A, B]`` annotation as ``Outer<A, B>``."""
    return annotation.strip().replace("[", "<").replace("]", ">")


def _doc_lines(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(inspect.cleandoc(value).splitlines())
    if isinstance(value, Iterable):
        return tuple(str(line) for line in value)
    raise TypeError(f"Unsupported doc metadata: {value!r}")


def _class_doc_lines(cls: type) -> Tuple[str, ...]:
    doc = cls.__dict__.get("__doc__")
    # dataclass() synthesises "Name(field: type, ...)" when no docstring is written
    if not doc or doc.startswith(f"{cls.__name__}("):
        return ()
    return tuple(inspect.cleandoc(doc).splitlines())


__all__ = [
    "DOC_METADATA_KEY",
    "record_from_dataclass",
    "registry_from_dataclasses",
    "render_annotation",
]
