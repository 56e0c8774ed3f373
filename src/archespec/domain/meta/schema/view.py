# src/archespec/domain/meta/schema/view.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Resolved views of schemas and properties.

Purpose:
    The runtime pipeline works on views rather than on raw schemas. A view
    pairs a concrete schema with the registry it was resolved in and with
    the effective existence level, so references never leak into callers.

Layer:
    domain/meta/schema

Notes:
    Views are cheap, built per read and never stored in the registry.
    Every attribute callers may need is an explicit accessor.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from archespec.domain.enums.existence import Existence
from archespec.domain.exceptions.meta import SchemaResolutionError, inspect_value, to_sentence
from archespec.domain.meta.property import Property
from archespec.domain.meta.schema.array import ArraySchema
from archespec.domain.meta.schema.base import Schema
from archespec.domain.meta.schema.object import AdditionalProperties, ObjectSchema
from archespec.domain.meta.schema.reference import Delegator
from archespec.domain.meta.schema.validation import Validation

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


class SchemaView:
    """A concrete schema as seen through a (possibly empty) chain of references."""

    def __init__(self, schema: Schema, definitions: Definitions | None, existence: Existence | None = None) -> None:
        self._schema = schema
        self._definitions = definitions
        self._existence = schema.existence if existence is None else existence

    @classmethod
    def wrap(cls, schema: Any, definitions: Definitions | None) -> SchemaView | None:
        """Resolve ``schema`` and return the view matching its type."""
        if schema is None:
            return None
        if isinstance(schema, SchemaView):
            return schema
        resolved = schema.resolve(definitions)
        if isinstance(resolved, Delegator):
            concrete, existence = resolved.schema, resolved.existence
        else:
            concrete, existence = resolved, resolved.existence
        if isinstance(concrete, ObjectSchema):
            return ObjectSchemaView(concrete, definitions, existence)
        if isinstance(concrete, ArraySchema):
            return ArraySchemaView(concrete, definitions, existence)
        return SchemaView(concrete, definitions, existence)

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def definitions(self) -> Definitions | None:
        return self._definitions

    @property
    def existence(self) -> Existence:
        return self._existence

    @property
    def type(self) -> str:
        return self._schema.type

    @property
    def format(self) -> str | None:
        return getattr(self._schema, "format", None)

    @property
    def typed_format(self) -> str | None:
        return getattr(self._schema, "typed_format", None)

    @property
    def default(self) -> Any:
        return self._schema.default

    @property
    def nullable(self) -> bool:
        return self._existence.nullable

    @property
    def omittable(self) -> bool:
        return self._existence.omittable

    @property
    def validations(self) -> dict[str, Validation]:
        return self._schema.validations

    def convert(self, value: Any) -> Any:
        return self._schema.convert(value)

    def cast(self, value: Any) -> Any:
        """Cast a number to ``int`` or ``float`` for numeric schemas."""
        cast = getattr(self._schema, "cast", None)
        return value if cast is None else cast(value)

    def default_value(self, *, context: str | None = None) -> Any:
        """Return the schema's default or the registry's type-level default."""
        return self._schema.default_value(self._definitions, context=context)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, SchemaView)
            and other._schema is self._schema
            and other._existence == self._existence
        )

    def __hash__(self) -> int:
        return hash((id(self._schema), self._existence))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._schema.type} existence={self._existence.name}>"


class ArraySchemaView(SchemaView):
    """View of an array schema."""

    @property
    def items(self) -> SchemaView | None:
        return SchemaView.wrap(self._schema.items, self._definitions)  # type: ignore[attr-defined]


class PropertyView:
    """View of a property whose schema is resolved."""

    def __init__(self, prop: Property, definitions: Definitions | None) -> None:
        self._property = prop
        self._definitions = definitions
        self._schema: SchemaView | None = None

    @property
    def meta_property(self) -> Property:
        return self._property

    @property
    def name(self) -> str:
        return self._property.name

    @property
    def read_only(self) -> bool:
        return self._property.read_only

    @property
    def write_only(self) -> bool:
        return self._property.write_only

    @property
    def deprecated(self) -> bool:
        return self._property.deprecated

    @property
    def required(self) -> bool:
        return self.schema.existence.required

    @property
    def reader(self) -> Callable[[Any], Any]:
        return self._property.reader

    @property
    def schema(self) -> SchemaView:
        if self._schema is None:
            self._schema = SchemaView.wrap(self._property.schema, self._definitions)
        return self._schema  # type: ignore[return-value]

    def default_value(self, *, context: str | None = None) -> Any:
        return self.schema.default_value(context=context)


class AdditionalPropertiesView:
    """View of the additional properties of an object schema."""

    def __init__(self, additional_properties: AdditionalProperties, definitions: Definitions | None) -> None:
        self._additional_properties = additional_properties
        self._definitions = definitions

    @property
    def schema(self) -> SchemaView:
        return SchemaView.wrap(self._additional_properties.schema, self._definitions)  # type: ignore[return-value]

    @property
    def reader(self) -> Callable[[Any], Any]:
        return self._additional_properties.reader


class ObjectSchemaView(SchemaView):
    """View of an object schema."""

    @property
    def model(self) -> type | None:
        return self._schema.model  # type: ignore[attr-defined]

    @property
    def additional_properties(self) -> AdditionalPropertiesView | None:
        additional_properties = self._schema.additional_properties  # type: ignore[attr-defined]
        if additional_properties is None:
            return None
        return AdditionalPropertiesView(additional_properties, self._definitions)

    def resolve_properties(self, *, context: str | None = None) -> dict[str, PropertyView]:
        """Return own and inherited properties as views."""
        schema: ObjectSchema = self._schema  # type: ignore[assignment]
        return {
            name: PropertyView(prop, self._definitions)
            for name, prop in schema.resolve_properties(self._definitions, context=context).items()
        }

    def resolve_schema(self, value: Any, *, context: str | None = None) -> ObjectSchemaView:
        """Select the inheriting schema for ``value`` by the discriminator.

        Returns the view itself if the schema has no discriminator.

        Raises:
            SchemaResolutionError: If the discriminating property doesn't
                exist, its value is missing without a default mapping, or no
                schema is found for the value.
        """
        discriminator = self._schema.discriminator  # type: ignore[attr-defined]
        if discriminator is None:
            return self

        properties = self.resolve_properties(context=context)
        discriminating_property = properties.get(discriminator.property_name)
        if discriminating_property is None:
            valid = to_sentence([inspect_value(name) for name in properties])
            raise SchemaResolutionError(
                f"discriminator property must be one of {valid}, "
                f"is {inspect_value(discriminator.property_name)}"
            )

        discriminating_value = discriminating_property.reader(value)
        if discriminating_value is None:
            discriminating_value = discriminating_property.default_value(context=context)
            if discriminating_value is None and discriminator.default_mapping is None:
                raise SchemaResolutionError("discriminating value can't be nil")

        schema_name = None
        if discriminating_value is not None:
            schema_name = discriminator.mapping(discriminating_value) or str(discriminating_value)

        definitions = self._definitions
        schema = None if schema_name is None or definitions is None else definitions.find_schema(schema_name)
        if schema is None:
            default_mapping = discriminator.default_mapping
            if default_mapping is not None and definitions is not None:
                schema = definitions.find_schema(default_mapping)
            if schema is None:
                names = [inspect_value(n) for n in (schema_name, default_mapping) if n is not None]
                raise SchemaResolutionError(
                    f"inheriting schema couldn't be found: {' or '.join(names)}",
                    details={"schema_name": schema_name, "default_mapping": default_mapping},
                )

        view = SchemaView.wrap(schema, definitions)
        if not isinstance(view, ObjectSchemaView):
            raise SchemaResolutionError(f"inheriting schema isn't an object: {inspect_value(schema_name)}")
        if view.schema is self._schema:
            return self
        return view.resolve_schema(value, context=context)


__all__ = [
    "AdditionalPropertiesView",
    "ArraySchemaView",
    "ObjectSchemaView",
    "PropertyView",
    "SchemaView",
]
