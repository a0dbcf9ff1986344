"""Configuration loading for getdocs (.getdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".getdocs.yml"
OUTPUT_FORMATS = ("json", "yaml")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Serialization settings for the CLI."""

    format: str = "json"
    indent: int = 2
    wrap_root: bool = False


@dataclass
class FrontendConfig:
    """Front-end enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class GetDocsConfig:
    """Represents the settings defined in .getdocs.yml."""

    root: Path
    schema: Optional[Path] = None
    roots: List[str] = field(default_factory=list)
    frontends: FrontendConfig = field(default_factory=FrontendConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> GetDocsConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GetDocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    schema_str = _as_str(data.get("schema"))
    schema = root / schema_str if schema_str else None

    frontend_data = _as_dict(data.get("frontends"))
    frontends = FrontendConfig()
    if frontend_data:
        frontends.enabled = _as_str_list(frontend_data.get("enabled"))

    output_data = _as_dict(data.get("output"))
    output = OutputConfig()
    if output_data:
        output_format = _as_str(output_data.get("format"))
        if output_format is not None:
            output_format = output_format.lower()
            if output_format not in OUTPUT_FORMATS:
                raise ConfigError(
                    f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}"
                )
            output.format = output_format
        indent = _as_int(output_data.get("indent"))
        if indent is not None:
            if indent < 0:
                raise ConfigError("output.indent must not be negative")
            output.indent = indent
        wrap_root = _as_bool(output_data.get("wrap_root"))
        if wrap_root is not None:
            output.wrap_root = wrap_root

    return GetDocsConfig(
        root=root,
        schema=schema,
        roots=_as_str_list(data.get("roots")),
        frontends=frontends,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "FrontendConfig",
    "GetDocsConfig",
    "OUTPUT_FORMATS",
    "OutputConfig",
    "load_config",
]
