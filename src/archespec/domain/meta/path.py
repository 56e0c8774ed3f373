# src/archespec/domain/meta/path.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Paths.

Purpose:
    A path holds values shared by all operations whose full path starts
    with it. Each change is reported to the owning registry, which then
    drops the cached lookups of this path only.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.meta.model import MetaModel
from archespec.domain.meta.operation import security_requirement_list, server_list
from archespec.domain.meta.parameter import parameter_from, parameter_map
from archespec.domain.meta.request_body import request_body_from
from archespec.domain.meta.response import response_from, response_map
from archespec.domain.meta.security import SecurityRequirement
from archespec.domain.meta.server import Server
from archespec.domain.value_objects.pathname import Pathname
from archespec.domain.value_objects.status import Status, status_from

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


@dataclass(eq=False, kw_only=True)
class Path(MetaModel):
    """Values common to all operations in a path.

    Attributes:
        name: The relative path.
        description: The common description, OpenAPI 3.0 and higher.
        model: The class top-level request values are wrapped by.
        parameters: Parameters applying to all operations.
        request_body: The request body used by default.
        responses: Responses all operations can produce.
        security_requirements: Security requirements of all operations.
            None, unlike an empty list, leaves them to outer paths.
        servers: The servers, OpenAPI 3.0 and higher.
        summary: The common summary, OpenAPI 3.0 and higher.
        tags: Tags of all operations.
    """

    name: Pathname = field(default_factory=Pathname)
    owner: InitVar[Definitions | None] = None
    description: str | None = None
    model: type | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    request_body: Any = None
    responses: dict[Status, Any] = field(default_factory=dict)
    security_requirements: list[SecurityRequirement] | None = None
    servers: list[Server] = field(default_factory=list)
    summary: str | None = None
    tags: list[str] = field(default_factory=list)

    def __post_init__(self, owner: Definitions | None) -> None:  # type: ignore[override]
        self._owner = owner
        self.name = Pathname.from_value(self.name)
        self.parameters = parameter_map(self.parameters)
        self.request_body = request_body_from(self.request_body)
        self.responses = response_map(self.responses)
        if self.security_requirements is not None:
            self.security_requirements = security_requirement_list(self.security_requirements)
        self.servers = server_list(self.servers)
        self.tags = [str(tag) for tag in self.tags]
        super().__post_init__()

    def add_parameter(self, name: str, **keywords: Any) -> Any:
        with self._modifying("parameters"):
            self.parameters[str(name)] = parameter = parameter_from(str(name), keywords)
        return parameter

    def add_response(self, status: Any = None, **keywords: Any) -> Any:
        with self._modifying("responses"):
            self.responses[status_from(status)] = response = response_from(keywords)
        return response

    def add_security_requirement(self, value: Any) -> SecurityRequirement:
        with self._modifying("security_requirements"):
            if self.security_requirements is None:
                self.security_requirements = []
            self.security_requirements.append(requirement := SecurityRequirement.build(value))
        return requirement

    def _attribute_changed(self, name: str) -> None:
        if self._owner is not None:
            self._owner.invalidate_path_attribute(self.name, name)
        super()._attribute_changed(name)


__all__ = ["Path"]
