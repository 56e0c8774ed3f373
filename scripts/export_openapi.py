#!/usr/bin/env python3
"""
Document export script for archespec.

Loads a ``Definitions`` registry from an importable module and writes its
OpenAPI document, or the JSON Schema document of one schema, as JSON.

Usage (from the project root):

    python -m scripts.export_openapi --definitions myapi.api:definitions

Examples:

    python -m scripts.export_openapi --definitions myapi.api:definitions \
        --version 3.0 --out build/openapi.json

    python -m scripts.export_openapi --definitions myapi.api:definitions \
        --schema Pet --indent 2

The version defaults to ARCHESPEC_OPENAPI_VERSION and the indentation to
ARCHESPEC_JSON_INDENT.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

from archespec.application.use_cases.export_documents import ExportDocumentRequest, ExportDocuments
from archespec.domain.exceptions import DomainError
from archespec.domain.meta.definitions import Definitions
from archespec.infrastructure.logging.logger import configure_root_logging, get_json_logger

logger = get_json_logger(__name__)


def load_definitions(target: str) -> Definitions:
    """Import ``module:attribute`` and return the registry it names.

    Raises:
        SystemExit: If the target can't be imported or isn't a registry.
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise SystemExit(f"--definitions must be given as module:attribute, got {target!r}")
    module = importlib.import_module(module_name)
    definitions = getattr(module, attribute, None)
    if callable(definitions) and not isinstance(definitions, Definitions):
        definitions = definitions()
    if not isinstance(definitions, Definitions):
        raise SystemExit(f"{target} isn't a Definitions registry")
    return definitions


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Args:
        argv: Optional list of argument strings. If omitted, `sys.argv[1:]`
            is used.
    """
    parser = argparse.ArgumentParser(
        description="Export the OpenAPI or JSON Schema document of an archespec registry.",
    )
    parser.add_argument(
        "--definitions",
        required=True,
        help="The registry as module:attribute, the attribute may be a factory.",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--version",
        dest="openapi_version",
        help="OpenAPI version: 2.0, 3.0, 3.1 or 3.2 (default: ARCHESPEC_OPENAPI_VERSION).",
    )
    target.add_argument(
        "--schema",
        dest="schema_name",
        help="Export the JSON Schema document of this schema instead.",
    )
    parser.add_argument(
        "--out",
        type=Path,
        help="File the document is written to (default: standard output).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        choices=range(0, 9),
        metavar="N",
        help="Indentation, 0 to 8 (default: ARCHESPEC_JSON_INDENT or compact).",
    )
    parser.add_argument(
        "--sort-keys",
        action="store_true",
        help="Sort the keys of every JSON object.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the export script.

    Args:
        argv: Optional list of argument strings. If omitted, `sys.argv[1:]`
            is used.
    """
    configure_root_logging()
    args = parse_args(argv)
    definitions = load_definitions(args.definitions)
    request = ExportDocumentRequest(
        openapi_version=args.openapi_version,
        schema_name=args.schema_name,
        out=args.out,
        indent=args.indent,
        sort_keys=args.sort_keys,
    )
    try:
        result = ExportDocuments(definitions).execute(request)
    except DomainError as exc:
        logger.error("archespec.export.failed", extra={"code": exc.code, "details": exc.details})
        raise SystemExit(f"error: {exc}") from exc

    if result.path is None:
        sys.stdout.write(result.text)


if __name__ == "__main__":
    main()
