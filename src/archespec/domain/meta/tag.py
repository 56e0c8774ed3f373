# src/archespec/domain/meta/tag.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Tags grouping operations.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archespec.domain.meta.model import Extensible, ExternalDocumentation, coerce
from archespec.domain.value_objects.openapi_version import V3_2, OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class Tag(Extensible):
    """A tag. ``summary``, ``parent`` and ``kind`` are rendered from OpenAPI 3.2."""

    name: str | None = None
    summary: str | None = None
    description: str | None = None
    external_docs: ExternalDocumentation | None = None
    parent: str | None = None
    kind: str | None = None

    def __post_init__(self) -> None:
        self.external_docs = coerce(self.external_docs, ExternalDocumentation)
        super().__post_init__()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        external_docs = self.external_docs.to_openapi() if self.external_docs else None
        if version >= V3_2:
            result = {
                "name": self.name,
                "summary": self.summary,
                "description": self.description,
                "externalDocs": external_docs,
                "parent": self.parent,
                "kind": self.kind,
            }
        else:
            result = {"name": self.name, "description": self.description, "externalDocs": external_docs}
        return self._with_openapi_extensions(result)


__all__ = ["Tag"]
