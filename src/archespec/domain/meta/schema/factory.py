# src/archespec/domain/meta/schema/factory.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Schema factory.

Purpose:
    Build the schema matching a ``type`` keyword, or a reference when a
    ``ref`` keyword is given.

Layer:
    domain/meta/schema
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from archespec.domain.exceptions.meta import InvalidValueError
from archespec.domain.meta.schema.array import ArraySchema
from archespec.domain.meta.schema.base import BooleanSchema, Schema
from archespec.domain.meta.schema.numeric import IntegerSchema, NumberSchema
from archespec.domain.meta.schema.object import ObjectSchema
from archespec.domain.meta.schema.reference import SchemaReference
from archespec.domain.meta.schema.string import StringSchema

SCHEMA_TYPES: dict[str, type[Schema]] = {
    "array": ArraySchema,
    "boolean": BooleanSchema,
    "integer": IntegerSchema,
    "number": NumberSchema,
    "object": ObjectSchema,
    "string": StringSchema,
}


def new_schema(**keywords: Any) -> Schema | SchemaReference:
    """Create a schema.

    Args:
        **keywords: The attributes of the schema. ``type`` selects the schema
            class and defaults to ``"object"``. ``ref`` (or ``schema`` naming a
            reusable schema) creates a reference instead. ``example`` adds a
            single example.

    Raises:
        InvalidValueError: If ``type`` isn't one of the supported types.
    """
    if "schema" in keywords and "ref" not in keywords:
        keywords["ref"] = keywords.pop("schema")
    if "ref" in keywords:
        reference_keywords = {
            key: keywords[key] for key in ("ref", "existence", "description", "summary") if key in keywords
        }
        return SchemaReference(**reference_keywords)

    type_ = keywords.pop("type", None)
    schema_class = SCHEMA_TYPES.get("object" if type_ is None else str(type_))
    if schema_class is None:
        raise InvalidValueError("type", type_, valid_values=list(SCHEMA_TYPES))

    example = keywords.pop("example", None)
    schema = schema_class(**keywords)
    if example is not None:
        schema.examples.insert(0, example)
    return schema


def schema_from(value: Any) -> Schema | SchemaReference | None:
    """Build a schema from a mapping of keywords, pass schemas through."""
    if value is None or isinstance(value, (Schema, SchemaReference)):
        return value
    if isinstance(value, Mapping):
        return new_schema(**value)
    if isinstance(value, str):
        return new_schema(type=value)
    raise InvalidValueError("schema", value)


__all__ = ["SCHEMA_TYPES", "new_schema", "schema_from"]
