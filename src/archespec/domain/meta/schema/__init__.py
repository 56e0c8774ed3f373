# src/archespec/domain/meta/schema/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Schema package export."""

from __future__ import annotations

from .array import ArraySchema
from .base import BooleanSchema, Schema
from .discriminator import Discriminator
from .factory import SCHEMA_TYPES, new_schema, schema_from
from .numeric import Boundary, IntegerSchema, NumberSchema, NumericSchema
from .object import AdditionalProperties, ObjectSchema
from .reference import Delegator, SchemaReference, concrete_schema
from .string import StringSchema
from .view import AdditionalPropertiesView, ArraySchemaView, ObjectSchemaView, PropertyView, SchemaView

__all__ = [
    "SCHEMA_TYPES",
    "AdditionalProperties",
    "AdditionalPropertiesView",
    "ArraySchema",
    "ArraySchemaView",
    "BooleanSchema",
    "Boundary",
    "Delegator",
    "Discriminator",
    "IntegerSchema",
    "NumberSchema",
    "NumericSchema",
    "ObjectSchema",
    "ObjectSchemaView",
    "PropertyView",
    "Schema",
    "SchemaReference",
    "SchemaView",
    "StringSchema",
    "concrete_schema",
    "new_schema",
    "schema_from",
]
