# src/archespec/application/use_cases/export_documents.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Use case: Export an OpenAPI or JSON Schema document.

Purpose:
    Render a document of a definitions registry to deterministic JSON text
    and optionally write it to a file, e.g. to publish it or to compare it
    against a committed snapshot.

Layer:
    application

Notes:
    - Exactly one of an OpenAPI version or a schema name selects the
      document. Without either, the OpenAPI document of the configured
      default version is exported.
    - Indentation defaults to the ``json_indent`` setting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from archespec.config.settings import get_settings
from archespec.domain.exceptions.meta import InvalidArgumentError, MutuallyExclusiveError
from archespec.domain.meta.definitions import Definitions
from archespec.domain.value_objects.openapi_version import OpenAPIVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportDocumentRequest:
    """Parameters of an export.

    Attributes:
        openapi_version: The OpenAPI version of the document.
        schema_name: Export the JSON Schema document of this schema instead.
        out: The file the document is written to. Not written if None.
        indent: Indentation of the JSON text.
        sort_keys: Sort the keys of every object.
    """

    openapi_version: str | None = None
    schema_name: str | None = None
    out: Path | None = None
    indent: int | None = None
    sort_keys: bool = False


@dataclass(frozen=True)
class ExportDocumentResult:
    """Result of an export.

    Attributes:
        kind: ``openapi`` or ``json_schema``.
        text: The rendered JSON text, terminated by a newline.
        path: The file written, if any.
    """

    kind: str
    text: str
    path: Path | None = None


class ExportDocuments:
    """Render documents of a definitions registry.

    Args:
        definitions: The registry documents are rendered from.
    """

    def __init__(self, definitions: Definitions) -> None:
        self._definitions = definitions

    def execute(self, req: ExportDocumentRequest) -> ExportDocumentResult:
        """Render the requested document and write it if ``req.out`` is set.

        Raises:
            MutuallyExclusiveError: If both a version and a schema name are
                given.
            InvalidArgumentError: If the version isn't supported or there is
                no schema of the given name.
            UnresolvedReferenceError: If a reference can't be resolved.
        """
        if req.openapi_version is not None and req.schema_name is not None:
            raise MutuallyExclusiveError("openapi_version", "schema_name")

        settings = get_settings()
        document: dict[str, Any] | None
        if req.schema_name is not None:
            kind = "json_schema"
            document = self._definitions.json_schema_document(req.schema_name)
            if document is None:
                raise InvalidArgumentError(f"schema not found: {req.schema_name!r}")
        else:
            kind = "openapi"
            version = (
                OpenAPIVersion.from_value(req.openapi_version)
                if req.openapi_version is not None
                else settings.openapi_version
            )
            document = self._definitions.openapi_document(version)

        indent = req.indent if req.indent is not None else settings.json_indent
        separators = None if indent is not None else (",", ":")
        text = json.dumps(document, indent=indent, separators=separators, sort_keys=req.sort_keys) + "\n"

        if req.out is not None:
            req.out.parent.mkdir(parents=True, exist_ok=True)
            req.out.write_text(text, encoding="utf-8")

        logger.info(
            "archespec.export_documents.done",
            extra={
                "kind": kind,
                "openapi_version": req.openapi_version,
                "schema_name": req.schema_name,
                "path": str(req.out) if req.out is not None else None,
                "bytes": len(text.encode("utf-8")),
            },
        )
        return ExportDocumentResult(kind=kind, text=text, path=req.out)


__all__ = ["ExportDocumentRequest", "ExportDocumentResult", "ExportDocuments"]
