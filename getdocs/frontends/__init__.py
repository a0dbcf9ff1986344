"""Registry front-ends and plugin discovery utilities."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Dict, List, Sequence, Type

from .base import Frontend, SchemaError
from .schema import JsonSchemaFrontend, YamlSchemaFrontend, records_from_document
from ..registry import Registry, RegistryError

_ENTRY_POINT_GROUP = "getdocs.frontends"

_BUILTIN_FRONTENDS: Dict[str, Type[Frontend]] = {
    "yaml": YamlSchemaFrontend,
    "json": JsonSchemaFrontend,
}


def discover_frontends(enabled: Sequence[str] | None = None) -> List[Frontend]:
    """Return front-ends by name: built-ins first, then ``getdocs.frontends`` plugins.

    Plugins are only imported when selected. Unknown names in ``enabled``
    raise ValueError.
    """
    entries: Dict[str, metadata.EntryPoint] = {}
    for entry in metadata.entry_points().select(group=_ENTRY_POINT_GROUP):
        key = entry.name.lower()
        if key not in _BUILTIN_FRONTENDS:
            entries.setdefault(key, entry)
    names = [*_BUILTIN_FRONTENDS, *entries]

    if enabled is not None:
        wanted = {name.lower() for name in enabled}
        missing = wanted.difference(names)
        if missing:
            raise ValueError(f"Unknown front-ends requested: {', '.join(sorted(missing))}")
        names = [name for name in names if name in wanted]

    frontends: List[Frontend] = []
    for name in names:
        if name in _BUILTIN_FRONTENDS:
            frontends.append(_BUILTIN_FRONTENDS[name]())
        else:
            frontends.append(_load_plugin(name, entries[name]))
    return frontends


def load_registry(path: Path | str, frontends: Sequence[Frontend] | None = None) -> Registry:
    """Read ``path`` with the first supporting front-end and build a registry."""
    source = Path(path).expanduser()
    if not source.is_file():
        raise SchemaError(f"Schema file not found: {source}")
    candidates = discover_frontends() if frontends is None else frontends
    for frontend in candidates:
        if frontend.supports(source):
            try:
                return Registry(frontend.load(source))
            except RegistryError as exc:
                raise SchemaError(f"{source.name}: {exc}") from exc
    names = ", ".join(frontend.name or type(frontend).__name__ for frontend in candidates)
    raise SchemaError(f"No front-end can read {source.name} (available: {names or 'none'})")


def _load_plugin(name: str, entry: metadata.EntryPoint) -> Frontend:
    try:
        loaded = entry.load()
    except Exception as exc:
        raise RuntimeError(f"Failed to load front-end entry point '{name}': {exc}") from exc
    if isinstance(loaded, Frontend):
        return loaded
    if isinstance(loaded, type) and issubclass(loaded, Frontend):
        return loaded()
    raise TypeError(f"Front-end entry point '{name}' must be a Frontend subclass or instance")


__all__ = [
    "Frontend",
    "JsonSchemaFrontend",
    "SchemaError",
    "YamlSchemaFrontend",
    "discover_frontends",
    "load_registry",
    "records_from_document",
]
