# src/archespec/domain/meta/schema/reference.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Schema references and delegators.

Purpose:
    A schema reference may override the existence level of the referred
    schema, but only ever towards a stricter level. Resolving it yields a
    ``Delegator`` that pairs the concrete schema with the effective level
    ``max(reference.existence, schema.existence)``.

Layer:
    domain/meta/schema
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from archespec.domain.enums.existence import Existence
from archespec.domain.meta.reference import Reference
from archespec.domain.meta.schema.base import Schema
from archespec.domain.value_objects.openapi_version import OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


@dataclass(frozen=True)
class Delegator:
    """A concrete schema seen at an effective existence level."""

    schema: Schema
    existence: Existence

    @property
    def type(self) -> str:
        return self.schema.type

    @property
    def nullable(self) -> bool:
        return self.existence.nullable

    @property
    def omittable(self) -> bool:
        return self.existence.omittable


def concrete_schema(schema: Schema | Delegator) -> Schema:
    """Return the schema behind a delegator, or the schema itself."""
    return schema.schema if isinstance(schema, Delegator) else schema


@dataclass(eq=False, kw_only=True)
class SchemaReference(Reference):
    """Reference to a reusable schema."""

    COMPONENT_TYPE: ClassVar[str] = "schema"
    OPENAPI_COMPONENT_TYPE: ClassVar[str] = "schemas"

    existence: Existence = Existence.ALLOW_OMITTED

    def __post_init__(self) -> None:
        self.existence = Existence.from_value(self.existence)
        super().__post_init__()

    @property
    def type(self) -> None:
        return None

    @property
    def nullable(self) -> bool:
        return self.existence.nullable

    def resolve(self, definitions: Definitions | None, *, deep: bool = True) -> Any:
        """Resolve the reference.

        A deep resolution always returns a ``Delegator`` carrying the stricter
        of both existence levels.
        """
        resolved = super().resolve(definitions, deep=deep)
        if not deep:
            return resolved
        schema = concrete_schema(resolved)
        return Delegator(schema, max(self.existence, resolved.existence))

    def openapi_components_path(self, version: OpenAPIVersion) -> str:
        return "definitions" if version.major == 2 else super().openapi_components_path(version)

    def to_json_schema(self) -> dict[str, Any]:
        return {"$ref": f"#/definitions/{self.ref}"}


__all__ = ["Delegator", "SchemaReference", "concrete_schema"]
