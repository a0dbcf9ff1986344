"""CLI entrypoints for getdocs commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from .builder import DocTreeBuilder
from .config import OUTPUT_FORMATS, ConfigError, GetDocsConfig, load_config
from .frontends import SchemaError, discover_frontends, load_registry
from .logging import configure_logging, get_logger
from .models import docs_to_dicts
from .registry import Registry, UnknownType

logger = get_logger("cli")


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--schema",
        help="Schema file declaring the records (defaults to `schema` in .getdocs.yml).",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .getdocs.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="getdocs",
        description="Extract field documentation trees from record definitions.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build documentation trees for one or more root record types.",
    )
    _add_verbosity_options(build_parser, suppress_default=True)
    _add_source_options(build_parser)
    build_parser.add_argument(
        "roots",
        nargs="*",
        help="Root record types to document (defaults to `roots` in .getdocs.yml).",
    )
    build_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Serialization format for the trees.",
    )
    build_parser.add_argument(
        "--wrap-root",
        action="store_true",
        default=None,
        help="Emit a single node per root type instead of its bare field list.",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        help="Write the serialized trees to this file instead of stdout.",
    )

    types_parser = subparsers.add_parser(
        "types",
        help="List the record types known to the schema.",
    )
    _add_verbosity_options(types_parser, suppress_default=True)
    _add_source_options(types_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve documentation trees over HTTP (requires the `service` extra).",
    )
    _add_verbosity_options(serve_parser, suppress_default=True)
    _add_source_options(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for getdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    registry = _load_registry(parser, args, config)

    if args.command == "build":
        roots: List[str] = list(args.roots) or list(config.roots)
        if not roots:
            parser.exit(1, "No root types given. Pass them as arguments or set `roots` in .getdocs.yml.\n")
        output_format = args.format or config.output.format
        wrap_root = config.output.wrap_root if args.wrap_root is None else args.wrap_root
        try:
            payload = _build_payload(DocTreeBuilder(registry), roots, wrap_root=wrap_root)
        except UnknownType as exc:
            parser.exit(1, f"{exc}\nRun `getdocs types` to list known records.\n")
        text = _serialise(payload, output_format, indent=config.output.indent)
        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text, encoding="utf-8")
            logger.info("Wrote documentation for %d root type(s) to %s", len(roots), output_path)
        else:
            sys.stdout.write(text)
    elif args.command == "types":
        for type_name in registry:
            print(type_name)
    elif args.command == "serve":
        try:
            from .service import run_service
        except ModuleNotFoundError as exc:
            parser.exit(
                1,
                f"Service mode needs the `service` extra ({exc.name} is missing). "
                "Install it with `pip install getdocs[service]`.\n",
            )
        run_service(lambda: registry, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_registry(
    parser: argparse.ArgumentParser, args: argparse.Namespace, config: GetDocsConfig
) -> Registry:
    schema = Path(args.schema) if args.schema else config.schema
    if schema is None:
        parser.exit(1, "No schema given. Pass --schema or set `schema` in .getdocs.yml.\n")
    try:
        frontends = discover_frontends(config.frontends.enabled or None)
        return load_registry(schema, frontends)
    except (SchemaError, ValueError) as exc:
        parser.exit(1, f"{exc}\n")


def _build_payload(
    builder: DocTreeBuilder, roots: Sequence[str], *, wrap_root: bool
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for root in roots:
        if wrap_root:
            payload[root] = builder.build_root(root).to_dict()
        else:
            payload[root] = docs_to_dicts(builder.build(root))
    return payload


def _serialise(payload: Dict[str, Any], output_format: str, *, indent: int) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True, indent=max(indent, 2))
    return json.dumps(payload, indent=indent or None, ensure_ascii=False) + "\n"


if __name__ == "__main__":
    main(sys.argv[1:])
