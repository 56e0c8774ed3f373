# src/archespec/domain/services/openapi_generator.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""OpenAPI document generation.

Purpose:
    Render the OpenAPI 2.0, 3.0, 3.1 or 3.2 document of a definitions
    registry. Operations sharing a full path are grouped into one path item.

Layer:
    domain/services

Notes:
    - Pure domain logic: nothing is logged and nothing is mutated.
    - OpenAPI 2.0 keeps components in flat top-level maps, 3.x nests them
      under ``components``. Empty sections are left out.
    - Components that can't be described in the target version (e.g. a
      bearer security scheme in 2.0) are left out.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from archespec.domain.meta.model import presence
from archespec.domain.meta.path_item import PathItem
from archespec.domain.meta.request_body import RequestBodyView
from archespec.domain.meta.response import ResponseView
from archespec.domain.value_objects.media import MediaRange
from archespec.domain.value_objects.openapi_version import V2_0, OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions
    from archespec.domain.meta.operation import Operation


class OpenAPIGenerator:
    """Renders the OpenAPI document of a registry."""

    def __init__(self, definitions: Definitions) -> None:
        self._definitions = definitions

    def generate(self, version: Any) -> dict[str, Any]:
        """Return the document for ``version``.

        Raises:
            InvalidArgumentError: If ``version`` isn't supported.
            UnresolvedReferenceError: If a reference can't be resolved.
        """
        version = OpenAPIVersion.from_value(version)
        definitions = self._definitions
        attributes = definitions.cached_attributes
        operations: list[Operation] = list(attributes["operations"].values())

        objects: dict[str, Any] = {
            "external_docs": self._render(attributes["external_docs"], version),
            "info": self._render(attributes["info"], version),
            "parameters": self._render(attributes["parameters"], version),
            "responses": self._render(
                {
                    name: response
                    for name, response in attributes["responses"].items()
                    if not ResponseView.wrap(response, definitions).nodoc  # type: ignore[union-attr]
                },
                version,
            ),
            "schemas": self._render(attributes["schemas"], version),
            "security_requirements": self._render(attributes["security_requirements"], version),
            "security_schemes": self._render(attributes["security_schemes"], version),
            "tags": self._render(attributes["tags"], version),
        }
        if version == V2_0:
            for key in ("base_path", "host", "schemes"):
                objects[key] = attributes[key]
        else:
            for key in ("callbacks", "examples", "headers", "links", "request_bodies", "servers"):
                objects[key] = self._render(attributes[key], version)
        objects = {key: presence(value) for key, value in objects.items()}
        if version != V2_0 and objects["servers"] is None:
            default_server = definitions.default_server
            objects["servers"] = [default_server.to_openapi(version)] if default_server is not None else None

        paths = presence(self._paths(operations, version))
        if version == V2_0:
            document = self._swagger_document(objects, paths, operations)
        else:
            document = {
                "openapi": str(version),
                "info": objects["info"],
                "servers": objects["servers"],
                "paths": paths,
                "components": presence(
                    {
                        key: value
                        for key, value in (
                            ("schemas", objects["schemas"]),
                            ("responses", objects["responses"]),
                            ("parameters", objects["parameters"]),
                            ("examples", objects["examples"]),
                            ("requestBodies", objects["request_bodies"]),
                            ("headers", objects["headers"]),
                            ("securitySchemes", objects["security_schemes"]),
                            ("links", objects["links"]),
                            ("callbacks", objects["callbacks"]),
                        )
                        if value is not None
                    }
                ),
            }
        document.update(
            {
                "security": objects["security_requirements"],
                "tags": objects["tags"],
                "externalDocs": objects["external_docs"],
            }
        )
        return definitions._with_openapi_extensions(document)

    def _swagger_document(
        self, objects: dict[str, Any], paths: dict[str, Any] | None, operations: list[Operation]
    ) -> dict[str, Any]:
        definitions = self._definitions
        servers = definitions.cached_attributes["servers"]
        server = servers[0] if servers else definitions.default_server
        url = urlsplit(server.url or "") if server is not None else None

        consumes = MediaRange.reduce(
            body.default_media_range
            for operation in operations
            if (body := RequestBodyView.wrap(self._request_body(operation), definitions)) is not None
            and body.default_media_range is not None
        )
        produces: set[str] = set()
        for operation in operations:
            for response in operation.responses.values():
                view = ResponseView.wrap(response, definitions)
                if view is not None and not view.nodoc and view.default_media_type is not None:
                    produces.add(str(view.default_media_type))

        base_path = objects["base_path"]
        return {
            "swagger": "2.0",
            "info": objects["info"],
            "host": objects["host"] or (url.hostname if url else None) or None,
            "basePath": str(base_path) if base_path is not None else (url.path if url else None) or None,
            "schemes": objects["schemes"] or ([url.scheme] if url and url.scheme else None),
            "consumes": presence([str(media_range) for media_range in consumes]),
            "produces": presence(sorted(produces)),
            "paths": paths,
            "definitions": objects["schemas"],
            "parameters": objects["parameters"],
            "responses": objects["responses"],
            "securityDefinitions": objects["security_schemes"],
        }

    def _request_body(self, operation: Operation) -> Any:
        if operation.request_body is not None:
            return operation.request_body
        return self._definitions.common_request_body(operation.full_path)

    def _paths(self, operations: list[Operation], version: OpenAPIVersion) -> dict[str, Any]:
        definitions = self._definitions
        groups: dict[Any, list[Operation]] = {}
        for operation in operations:
            groups.setdefault(operation.full_path, []).append(operation)

        paths: dict[str, Any] = {}
        for pathname, group in groups.items():
            paths[str(pathname)] = PathItem(
                group,
                description=definitions.common_description(pathname),
                summary=definitions.common_summary(pathname),
                servers=definitions.common_servers(pathname),
                parameters=definitions.common_parameters(pathname),
            ).to_openapi(version, definitions)
        return paths

    def _render(self, value: Any, version: OpenAPIVersion) -> Any:
        if isinstance(value, list):
            return [item for item in (self._render(item, version) for item in value) if item is not None]
        if isinstance(value, Mapping):
            rendered = {str(key): self._render(item, version) for key, item in value.items()}
            return {key: item for key, item in rendered.items() if item is not None}
        if hasattr(value, "to_openapi"):
            return value.to_openapi(version, self._definitions)
        return value


__all__ = ["OpenAPIGenerator"]
