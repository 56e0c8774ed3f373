# src/archespec/domain/meta/path_item.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Path items.

Purpose:
    Group operations sharing a path into one OpenAPI path item object.

Layer:
    domain/meta

Notes:
    ``trace`` is a standard method from OpenAPI 3.0 on, ``query`` from 3.2.
    Non-standard methods are rendered as ``additionalOperations`` from 3.2
    and dropped before.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from archespec.domain.meta.model import compact, presence
from archespec.domain.value_objects.openapi_version import V3_0, V3_2, OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions
    from archespec.domain.meta.operation import Operation
    from archespec.domain.meta.server import Server

_STANDARD_METHODS = frozenset({"delete", "get", "head", "options", "patch", "post", "put"})


def is_standard_method(method: str, version: OpenAPIVersion) -> bool:
    if method in _STANDARD_METHODS:
        return True
    if method == "trace":
        return version >= V3_0
    if method == "query":
        return version >= V3_2
    return False


class PathItem:
    """The operations of a path plus their common summary, description,
    servers and parameters."""

    def __init__(
        self,
        operations: Iterable[Operation],
        *,
        description: str | None = None,
        summary: str | None = None,
        servers: list[Server] | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        self.operations = list(operations)
        self.description = description
        self.summary = summary
        self.servers = servers or []
        self.parameters = dict(parameters or {})

    def to_openapi(self, version: Any, definitions: Definitions | None = None) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        result: dict[str, Any] = {}
        if version.major > 2:
            result["summary"] = self.summary
            result["description"] = self.description
            result["servers"] = presence([server.to_openapi(version) for server in self.servers])
        result["parameters"] = presence(
            [
                item
                for parameter in self.parameters.values()
                for item in parameter.to_openapi_parameters(version, definitions)
            ]
        )
        result = compact(result)

        for operation in self.operations:
            method = operation.method.lower()
            if is_standard_method(method, version):
                result[method] = operation.to_openapi(version, definitions)
            elif version >= V3_2:
                result.setdefault("additionalOperations", {})[operation.method] = operation.to_openapi(
                    version, definitions
                )
        return result


__all__ = ["PathItem", "is_standard_method"]
