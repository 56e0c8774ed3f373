# src/archespec/domain/meta/reference.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""References to reusable components.

Purpose:
    A reference is a named pointer into one of the component tables of a
    ``Definitions`` registry. It resolves one hop (``deep=False``) or through
    the whole chain of references to a concrete component (``deep=True``).

Layer:
    domain/meta

Notes:
    An unresolvable reference raises ``UnresolvedReferenceError``. Callers
    propagate it unless a missing component has a defined meaning at their
    call site.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from archespec.domain.exceptions.meta import InvalidArgumentError, UnresolvedReferenceError
from archespec.domain.meta.model import MetaModel
from archespec.domain.value_objects.openapi_version import V3_1, OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


@dataclass(eq=False, kw_only=True)
class Reference(MetaModel):
    """Base class of references.

    Attributes:
        ref: The name of the referred component.
        description: Replaces the description of the referred component.
            Rendered for OpenAPI 3.1 and higher.
        summary: Replaces the summary of the referred component. Rendered for
            OpenAPI 3.1 and higher.
    """

    COMPONENT_TYPE: ClassVar[str]
    OPENAPI_COMPONENT_TYPE: ClassVar[str]

    ref: str = ""
    description: str | None = None
    summary: str | None = None

    def __post_init__(self) -> None:
        self.ref = str(self.ref)
        super().__post_init__()

    @property
    def is_reference(self) -> bool:
        return True

    def resolve(self, definitions: Definitions | None, *, deep: bool = True) -> Any:
        """Look up the referred component in ``definitions``.

        Raises:
            UnresolvedReferenceError: If there is no such component.
        """
        component = (
            None if definitions is None else definitions.find_component(self.COMPONENT_TYPE, self.ref)
        )
        if component is None:
            raise UnresolvedReferenceError(self.ref)
        return component.resolve(definitions, deep=True) if deep else component

    def resolve_lazily(self, definitions: Definitions | None) -> LazyReference:
        return LazyReference(self, definitions)

    def openapi_components_path(self, version: OpenAPIVersion) -> str:
        if version.major == 2:
            return self.OPENAPI_COMPONENT_TYPE
        return f"components/{self.OPENAPI_COMPONENT_TYPE}"

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        """Return the OpenAPI reference object."""
        version = OpenAPIVersion.from_value(version)
        result: dict[str, Any] = {"$ref": f"#/{self.openapi_components_path(version)}/{self.ref}"}
        if version >= V3_1:
            if self.summary is not None:
                result["summary"] = self.summary
            if self.description is not None:
                result["description"] = self.description
        return result


def coerce_component(value: Any, cls: Any, reference_cls: type[Reference]) -> Any:
    """Build a component or, for keywords containing ``ref``, a reference to one."""
    if value is None or isinstance(value, MetaModel):
        return value
    if isinstance(value, Mapping):
        return reference_cls(**value) if "ref" in value else cls(**value)
    raise InvalidArgumentError(f"can't build {reference_cls.COMPONENT_TYPE} from {value!r}")


def coerce_component_map(values: Mapping[Any, Any] | None, cls: Any, reference_cls: type[Reference]) -> dict[str, Any]:
    return {str(key): coerce_component(value, cls, reference_cls) for key, value in (values or {}).items()}


class LazyReference:
    """Read attributes of a reference, falling back to the referred component.

    Nothing is resolved until an attribute is read whose value isn't set on
    the reference itself. The referent is then resolved one hop at a time.
    """

    def __init__(self, reference: Reference, definitions: Definitions | None) -> None:
        self._reference = reference
        self._definitions = definitions

    @property
    def reference(self) -> Reference:
        return self._reference

    def get(self, name: str, default: Any = None) -> Any:
        """Return the attribute ``name`` of the reference or the referent."""
        value = getattr(self._reference, name, None)
        if value is not None:
            return value
        referent = self._reference.resolve(self._definitions, deep=False)
        value = referent.resolve_lazily(self._definitions)
        if isinstance(value, LazyReference):
            return value.get(name, default)
        result = getattr(value, name, None)
        return default if result is None else result


@dataclass(eq=False, kw_only=True)
class ParameterReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "parameter"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "parameters"

    def to_openapi_parameters(self, version: Any, definitions: Definitions | None) -> list[dict[str, Any]]:
        """Return the exploded parameter objects if the referred parameter is
        an object, otherwise the reference object only.

        Raises:
            UnresolvedReferenceError: If the reference can't be resolved.
        """
        version = OpenAPIVersion.from_value(version)
        parameter = self.resolve(definitions)
        schema = parameter.schema.resolve(definitions)
        if schema.type == "object":
            return parameter.to_openapi_parameters(version, definitions)
        return [self.to_openapi(version)]


@dataclass(eq=False, kw_only=True)
class RequestBodyReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "request_body"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "requestBodies"


@dataclass(eq=False, kw_only=True)
class ResponseReference(Reference):
    """Reference to a reusable response.

    ``locale`` and ``nodoc`` override the referred response.
    """

    COMPONENT_TYPE: ClassVar[str] = "response"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "responses"

    locale: str | None = None
    nodoc: bool | None = None


@dataclass(eq=False, kw_only=True)
class ExampleReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "example"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "examples"


@dataclass(eq=False, kw_only=True)
class HeaderReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "header"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "headers"


@dataclass(eq=False, kw_only=True)
class LinkReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "link"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "links"


@dataclass(eq=False, kw_only=True)
class CallbackReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "callback"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "callbacks"


@dataclass(eq=False, kw_only=True)
class SecuritySchemeReference(Reference):
    COMPONENT_TYPE: ClassVar[str] = "security_scheme"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "securitySchemes"


__all__ = [
    "CallbackReference",
    "ExampleReference",
    "HeaderReference",
    "LazyReference",
    "LinkReference",
    "ParameterReference",
    "Reference",
    "RequestBodyReference",
    "ResponseReference",
    "SecuritySchemeReference",
    "coerce_component",
    "coerce_component_map",
]
