# src/archespec/domain/services/json_schema_generator.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""JSON Schema document generation.

Purpose:
    Render a reusable schema as a self-contained JSON Schema document. Every
    other schema reachable from it is embedded under ``definitions``.

Layer:
    domain/services

Notes:
    Schemas are reachable through references, properties, additional
    properties, array items, ``all_of`` and discriminator mappings.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from archespec.domain.exceptions.meta import UnresolvedReferenceError
from archespec.domain.meta.schema.array import ArraySchema
from archespec.domain.meta.schema.object import ObjectSchema
from archespec.domain.meta.schema.reference import SchemaReference

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


def referenced_schema_names(schema: Any) -> Iterator[str]:
    """Yield the names of the schemas ``schema`` refers to directly."""
    if isinstance(schema, SchemaReference):
        yield schema.ref
    elif isinstance(schema, ArraySchema):
        if schema.items is not None:
            yield from referenced_schema_names(schema.items)
    elif isinstance(schema, ObjectSchema):
        for reference in schema.all_of:
            yield reference.ref
        for prop in schema.properties.values():
            yield from referenced_schema_names(prop.schema)
        if schema.additional_properties is not None:
            yield from referenced_schema_names(schema.additional_properties.schema)
        if schema.discriminator is not None:
            yield from (str(name) for name in schema.discriminator.mappings.values())
            if schema.discriminator.default_mapping is not None:
                yield str(schema.discriminator.default_mapping)


class JSONSchemaGenerator:
    """Renders JSON Schema documents of the schemas of a registry."""

    def __init__(self, definitions: Definitions) -> None:
        self._definitions = definitions

    def generate(self, name: str) -> dict[str, Any] | None:
        """Return the document of the schema ``name``, None if there is none."""
        schema = self._definitions.find_schema(name)
        if schema is None:
            return None
        document = schema.to_json_schema()
        embedded = {
            other: self._definitions.find_schema(other).to_json_schema()
            for other in self.reachable_schema_names(str(name))
            if other != str(name)
        }
        if embedded:
            document["definitions"] = embedded
        return document

    def reachable_schema_names(self, name: str) -> list[str]:
        """Return the names of all schemas reachable from ``name``, in the
        order they are found.

        Raises:
            UnresolvedReferenceError: If a referenced schema doesn't exist.
        """
        found: list[str] = []
        pending = [name]
        while pending:
            current = pending.pop(0)
            if current in found:
                continue
            schema = self._definitions.find_schema(current)
            if schema is None:
                if current == name:
                    return found
                raise UnresolvedReferenceError(current)
            found.append(current)
            pending.extend(referenced_schema_names(schema))
        return found


__all__ = ["JSONSchemaGenerator", "referenced_schema_names"]
