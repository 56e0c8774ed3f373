# src/archespec/domain/meta/server.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Servers providing an API.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from archespec.domain.meta.model import Extensible, coerce_map, presence
from archespec.domain.value_objects.openapi_version import V3_2, OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class ServerVariable(Extensible):
    default: str | None = None
    description: str | None = None
    enum: list[str] = field(default_factory=list)

    def to_openapi(self, *_: Any) -> dict[str, Any]:
        return self._with_openapi_extensions(
            {"enum": presence(self.enum), "default": self.default, "description": self.description}
        )


@dataclass(eq=False, kw_only=True)
class Server(Extensible):
    """A server. ``name`` is rendered from OpenAPI 3.2."""

    url: str | None = None
    description: str | None = None
    name: str | None = None
    variables: dict[str, ServerVariable] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.variables = coerce_map(self.variables, ServerVariable)
        super().__post_init__()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        return self._with_openapi_extensions(
            {
                "url": self.url,
                "description": self.description,
                "name": self.name if version >= V3_2 else None,
                "variables": presence({k: v.to_openapi() for k, v in self.variables.items()}),
            }
        )


__all__ = ["Server", "ServerVariable"]
