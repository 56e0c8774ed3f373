# src/archespec/domain/meta/operation.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Operations.

Purpose:
    An operation is an HTTP method on a path relative to a parent path, plus
    its parameters, request body, responses and metadata. ``OperationView``
    is what the runtime works with: it merges the values common to all
    operations of a path into the operation's own ones.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.meta.model import Extensible, ExternalDocumentation, check_value, coerce, presence
from archespec.domain.meta.parameter import Parameter, ParameterView, parameter_from, parameter_map
from archespec.domain.meta.request_body import RequestBodyView, request_body_from
from archespec.domain.meta.response import (
    ResponseView,
    match_response,
    response_from,
    response_map,
)
from archespec.domain.meta.security import SecurityRequirement
from archespec.domain.meta.server import Server
from archespec.domain.value_objects.openapi_version import OpenAPIVersion
from archespec.domain.value_objects.pathname import Pathname
from archespec.domain.value_objects.status import Status, status_from

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions

SCHEMES = ("http", "https", "ws", "wss")


def server_list(values: Any) -> list[Server]:
    return [coerce(value, Server) for value in values or []]  # type: ignore[misc]


def security_requirement_list(values: Any) -> list[SecurityRequirement]:
    return [SecurityRequirement.build(value) for value in values or []]


def _callback_map(values: Any) -> dict[str, Any]:
    from archespec.domain.meta.callback import callback_from

    return {str(name): callback_from(value) for name, value in (values or {}).items()}


@dataclass(eq=False, kw_only=True)
class Operation(Extensible):
    """An API operation.

    Attributes:
        name: The name of the operation, used as ``operationId``.
        parent_path: The path the operation is scoped under.
        path: The path relative to ``parent_path``.
        method: The HTTP method, ``get`` by default.
        callbacks: Callback names mapped to callbacks or references,
            OpenAPI 3.0 and higher.
        model: The class top-level request values are wrapped by.
        parameters: Parameter names mapped to parameters or references.
        request_body: The request body or a reference to one.
        responses: Status keys mapped to responses or references.
        schemes: Transfer protocols, OpenAPI 2.0 only.
        security_requirements: The security requirements.
        servers: The servers, OpenAPI 3.0 and higher.
        tags: Tags grouping operations in documents.
    """

    name: str | None = None
    parent_path: Pathname = field(default_factory=Pathname)
    path: Pathname = field(default_factory=Pathname)
    method: str = "get"
    callbacks: dict[str, Any] = field(default_factory=dict)
    deprecated: bool = False
    description: str | None = None
    external_docs: ExternalDocumentation | None = None
    model: type | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    request_body: Any = None
    responses: dict[Status, Any] = field(default_factory=dict)
    schemes: list[str] = field(default_factory=list)
    security_requirements: list[SecurityRequirement] = field(default_factory=list)
    servers: list[Server] = field(default_factory=list)
    summary: str | None = None
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.name = None if self.name is None else str(self.name)
        self.parent_path = Pathname.from_value(self.parent_path)
        self.path = Pathname.from_value(self.path)
        self.method = str(self.method or "get")
        self.callbacks = _callback_map(self.callbacks)
        self.external_docs = coerce(self.external_docs, ExternalDocumentation)
        self.parameters = parameter_map(self.parameters)
        self.request_body = request_body_from(self.request_body)
        self.responses = response_map(self.responses)
        self.schemes = [check_value("scheme", scheme, SCHEMES) for scheme in self.schemes]
        self.security_requirements = security_requirement_list(self.security_requirements)
        self.servers = server_list(self.servers)
        self.tags = [str(tag) for tag in self.tags]
        super().__post_init__()

    @property
    def full_path(self) -> Pathname:
        return self.parent_path + self.path

    def add_callback(self, name: str, **keywords: Any) -> Any:
        from archespec.domain.meta.callback import callback_from

        with self._modifying("callbacks"):
            self.callbacks[str(name)] = callback = callback_from(keywords)
        return callback

    def add_parameter(self, name: str, **keywords: Any) -> Parameter | Any:
        with self._modifying("parameters"):
            self.parameters[str(name)] = parameter = parameter_from(str(name), keywords)
        return parameter

    def add_response(self, status: Any = None, **keywords: Any) -> Any:
        with self._modifying("responses"):
            self.responses[status_from(status)] = response = response_from(keywords)
        return response

    def add_security_requirement(self, value: Any) -> SecurityRequirement:
        with self._modifying("security_requirements"):
            self.security_requirements.append(requirement := SecurityRequirement.build(value))
        return requirement

    def to_openapi(self, version: Any, definitions: Definitions | None = None) -> dict[str, Any]:
        """Return the operation object for ``version``.

        The responses common to all operations of the path are merged in.
        ``nodoc`` responses are left out.
        """
        version = OpenAPIVersion.from_value(version)
        full_path = self.full_path

        responses: dict[Status, Any] = {}
        if definitions is not None:
            responses.update(definitions.common_responses(full_path) or {})
        responses.update(self.responses)
        responses = {
            status: response
            for status, response in responses.items()
            if not ResponseView.wrap(response, definitions).nodoc  # type: ignore[union-attr]
        }

        common_tags = definitions.common_tags(full_path) if definitions is not None else None
        tags = list(dict.fromkeys([*self.tags, *(common_tags or [])]))

        request_body = self.request_body
        if request_body is None and definitions is not None:
            request_body = definitions.common_request_body(full_path)

        parameters = [
            item
            for parameter in self.parameters.values()
            for item in parameter.to_openapi_parameters(version, definitions)
        ]
        result: dict[str, Any] = {
            "operationId": self.name,
            "tags": presence(tags),
            "summary": self.summary,
            "description": self.description,
            "externalDocs": self.external_docs.to_openapi() if self.external_docs else None,
        }
        if version.major == 2:
            body = RequestBodyView.wrap(request_body, definitions)
            produces = {
                str(media_type)
                for response in responses.values()
                if (media_type := ResponseView.wrap(response, definitions).default_media_type)  # type: ignore[union-attr]
            }
            if body is not None:
                parameters.append(body.request_body.to_openapi_parameter())
            result.update(
                {
                    "consumes": [str(body.default_media_range)] if body and body.default_media_range else None,
                    "produces": presence(sorted(produces)),
                    "schemes": presence(self.schemes),
                    "parameters": parameters,
                }
            )
        else:
            result.update(
                {
                    "servers": presence([server.to_openapi(version) for server in self.servers]),
                    "callbacks": presence(
                        {name: callback.to_openapi(version, definitions) for name, callback in self.callbacks.items()}
                    ),
                    "parameters": parameters,
                    "requestBody": request_body.to_openapi(version) if request_body is not None else None,
                }
            )
        result.update(
            {
                "responses": {
                    str(status): response.to_openapi(version, definitions) for status, response in responses.items()
                },
                "deprecated": presence(self.deprecated),
                "security": presence([requirement.to_openapi() for requirement in self.security_requirements]),
            }
        )
        return self._with_openapi_extensions(result)


class OperationView:
    """An operation seen through the registry it is defined in.

    Values not set on the operation itself are taken from the paths it
    belongs to. Parameters and responses of the operation take precedence
    over common ones of the same name or status.
    """

    def __init__(self, operation: Operation, definitions: Definitions | None) -> None:
        self._operation = operation
        self._definitions = definitions
        self._parameters: dict[str, ParameterView] | None = None
        self._responses: dict[str, ResponseView] = {}

    @property
    def operation(self) -> Operation:
        return self._operation

    @property
    def definitions(self) -> Definitions | None:
        return self._definitions

    @property
    def name(self) -> str | None:
        return self._operation.name

    @property
    def method(self) -> str:
        return self._operation.method

    @property
    def full_path(self) -> Pathname:
        return self._operation.full_path

    @property
    def model(self) -> type | None:
        if self._operation.model is not None or self._definitions is None:
            return self._operation.model
        return self._definitions.common_model(self.full_path)

    @property
    def parameters(self) -> dict[str, ParameterView]:
        if self._parameters is None:
            parameters: dict[str, Any] = {}
            if self._definitions is not None:
                parameters.update(self._definitions.common_parameters(self.full_path) or {})
            parameters.update(self._operation.parameters)
            self._parameters = {
                name: ParameterView.wrap(parameter, self._definitions)  # type: ignore[misc]
                for name, parameter in parameters.items()
            }
        return self._parameters

    @property
    def request_body(self) -> RequestBodyView | None:
        request_body = self._operation.request_body
        if request_body is None and self._definitions is not None:
            request_body = self._definitions.common_request_body(self.full_path)
        return RequestBodyView.wrap(request_body, self._definitions)

    @property
    def security_requirements(self) -> list[SecurityRequirement]:
        """Own requirements, else the common ones of the path, else the defaults."""
        if self._operation.security_requirements:
            return self._operation.security_requirements
        if self._definitions is None:
            return []
        return (
            self._definitions.common_security_requirements(self.full_path)
            or self._definitions.default_security_requirements
        )

    def response(self, status: Any) -> ResponseView | None:
        """Return the response for ``status``.

        Matches the exact code, else the containing range, else ``default``.
        The operation's own responses are searched before the common ones.
        """
        key = str(status_from(status))
        if key in self._responses:
            return self._responses[key]
        response = match_response(self._operation.responses, status)
        if response is None and self._definitions is not None:
            response = self._definitions.common_response(self.full_path, status)
        view = ResponseView.wrap(response, self._definitions)
        if view is not None:
            self._responses[key] = view
        return view


__all__ = ["SCHEMES", "Operation", "OperationView", "security_requirement_list", "server_list"]
