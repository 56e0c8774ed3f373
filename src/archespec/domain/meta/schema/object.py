# src/archespec/domain/meta/schema/object.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Object schemas.

Purpose:
    Object schemas own properties, an optional additional-properties schema,
    ``all_of`` references to the schemas they inherit properties from and an
    optional discriminator for polymorphic dispatch.

Layer:
    domain/meta/schema

Notes:
    Properties of ``all_of`` schemas are merged depth-first: inherited
    properties first, own properties last. When two schemas declare a
    property of the same name the last one wins, no compatibility check is
    made.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from archespec.domain.exceptions.meta import CircularDependencyError
from archespec.domain.meta.model import MetaModel, coerce, compact, presence
from archespec.domain.meta.property import Property, read_member
from archespec.domain.meta.schema.base import Schema
from archespec.domain.meta.schema.discriminator import Discriminator
from archespec.domain.meta.schema.reference import SchemaReference, concrete_schema

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions
    from archespec.domain.value_objects.openapi_version import OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class AdditionalProperties(MetaModel):
    """Schema and accessor of additional properties.

    Attributes:
        schema: The schema of each additional property value.
        source: The attribute name or callable used to read the mapping of
            additional properties from an application object,
            ``additional_properties`` by default.
    """

    schema: Any = None
    source: str | Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        from archespec.domain.meta.schema.factory import schema_from

        self.schema = schema_from({} if self.schema is None else self.schema)
        super().__post_init__()

    @classmethod
    def build(cls, value: Any) -> AdditionalProperties | None:
        if value is None or isinstance(value, AdditionalProperties):
            return value
        if isinstance(value, Mapping):
            keywords = dict(value)
            source = keywords.pop("source", None)
            if "schema" in keywords and not isinstance(keywords["schema"], str):
                return cls(schema=keywords["schema"], source=source)
            return cls(schema=keywords, source=source)
        return cls(schema=value)

    @property
    def reader(self) -> Callable[[Any], Any]:
        if callable(self.source):
            return self.source
        key = self.source or "additional_properties"
        return lambda obj: read_member(obj, key)

    def to_json_schema(self) -> dict[str, Any]:
        return self.schema.to_json_schema()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        return self.schema.to_openapi(version)


def _property_map(values: Mapping[str, Any] | None) -> dict[str, Property]:
    result: dict[str, Property] = {}
    for name, value in (values or {}).items():
        if isinstance(value, Property):
            result[str(name)] = value
        else:
            result[str(name)] = Property.build(str(name), **dict(value or {}))
    return result


def _reference_list(values: Any) -> list[SchemaReference]:
    result = []
    for value in values or []:
        if isinstance(value, SchemaReference):
            result.append(value)
        elif isinstance(value, Mapping):
            result.append(SchemaReference(**value))
        else:
            result.append(SchemaReference(ref=str(value)))
    return result


@dataclass(eq=False, kw_only=True)
class ObjectSchema(Schema):
    """Schema of objects.

    Attributes:
        properties: Property name mapped to ``Property``.
        additional_properties: The schema of additional properties, if any.
        all_of: References to the schemas properties are inherited from.
        discriminator: Selects an inheriting schema at runtime.
        model: The class request values are wrapped by, ``Model`` by default.
    """

    TYPE: ClassVar[str] = "object"

    properties: dict[str, Property] = field(default_factory=dict)
    additional_properties: AdditionalProperties | None = None
    all_of: list[SchemaReference] = field(default_factory=list)
    discriminator: Discriminator | None = None
    model: type | None = None

    def __post_init__(self) -> None:
        self.properties = _property_map(self.properties)
        self.additional_properties = AdditionalProperties.build(self.additional_properties)
        self.all_of = _reference_list(self.all_of)
        self.discriminator = coerce(self.discriminator, Discriminator)
        super().__post_init__()

    def _attribute_changed(self, name: str) -> None:
        if name == "properties":
            object.__setattr__(self, "properties", _property_map(self.properties))
        elif name == "additional_properties":
            object.__setattr__(
                self, "additional_properties", AdditionalProperties.build(self.additional_properties)
            )
        elif name == "all_of":
            object.__setattr__(self, "all_of", _reference_list(self.all_of))
        elif name == "discriminator":
            object.__setattr__(self, "discriminator", coerce(self.discriminator, Discriminator))
        super()._attribute_changed(name)

    def add_property(self, name: str, **keywords: Any) -> Property:
        with self._modifying("properties"):
            self.properties[str(name)] = prop = Property.build(str(name), **keywords)
        return prop

    def add_all_of(self, ref: str, **keywords: Any) -> SchemaReference:
        with self._modifying("all_of"):
            self.all_of.append(reference := SchemaReference(ref=ref, **keywords))
        return reference

    def resolve_properties(
        self, definitions: Definitions | None, *, context: str | None = None
    ) -> dict[str, Property]:
        """Return own and inherited properties.

        Args:
            definitions: The registry ``all_of`` references are resolved in.
            context: ``"request"`` drops read-only properties, ``"response"``
                drops write-only properties.

        Raises:
            CircularDependencyError: If ``all_of`` references form a cycle.
        """
        properties = self._merge_properties(definitions, [])
        if context == "response":
            return {k: v for k, v in properties.items() if not v.write_only}
        if context == "request":
            return {k: v for k, v in properties.items() if not v.read_only}
        return properties

    def _merge_properties(self, definitions: Definitions | None, path: list[Schema]) -> dict[str, Property]:
        if not self.all_of:
            return dict(self.properties)
        properties: dict[str, Property] = {}
        for reference in self.all_of:
            schema = concrete_schema(reference.resolve(definitions))
            if schema is self or schema in path:
                raise CircularDependencyError(f"circular reference: {reference.ref}")
            if isinstance(schema, ObjectSchema):
                properties.update(schema._merge_properties(definitions, [*path, self]))
        properties.update(self.properties)
        return properties

    def to_json_schema(self) -> dict[str, Any]:
        result = super().to_json_schema()
        result.update(
            {
                "allOf": presence([reference.to_json_schema() for reference in self.all_of]),
                "properties": {name: p.to_json_schema() for name, p in self.properties.items()},
                "additionalProperties": (
                    self.additional_properties.to_json_schema() if self.additional_properties else None
                ),
                "required": [p.name for p in self.properties.values() if p.required],
            }
        )
        return compact(result)

    def _openapi_fields(self, version: OpenAPIVersion) -> dict[str, Any]:
        result = super()._openapi_fields(version)
        result.update(
            {
                "allOf": presence([reference.to_openapi(version) for reference in self.all_of]),
                "discriminator": self.discriminator.to_openapi(version) if self.discriminator else None,
                "properties": {name: p.to_openapi(version) for name, p in self.properties.items()},
                "additionalProperties": (
                    self.additional_properties.to_openapi(version) if self.additional_properties else None
                ),
                "required": [p.name for p in self.properties.values() if p.required],
            }
        )
        return result


__all__ = ["AdditionalProperties", "ObjectSchema"]
