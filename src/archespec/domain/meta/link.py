# src/archespec/domain/meta/link.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Links between responses and operations (OpenAPI 3.0 and higher).

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from archespec.domain.meta.model import Extensible, presence
from archespec.domain.meta.server import Server


@dataclass(eq=False, kw_only=True)
class Link(Extensible):
    operation_id: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    request_body: Any = None
    description: str | None = None
    server: Server | None = None

    def __post_init__(self) -> None:
        if isinstance(self.server, dict):
            self.server = Server(**self.server)
        super().__post_init__()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        return self._with_openapi_extensions(
            {
                "operationId": self.operation_id,
                "parameters": presence(self.parameters),
                "requestBody": self.request_body,
                "description": self.description,
                "server": self.server.to_openapi(version) if self.server else None,
            }
        )


__all__ = ["Link"]
