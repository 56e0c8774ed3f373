# src/archespec/domain/meta/schema/discriminator.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Discriminators of polymorphic object schemas.

Layer:
    domain/meta/schema
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from archespec.domain.meta.model import Extensible, compact, presence
from archespec.domain.value_objects.openapi_version import V3_0, V3_1, V3_2, OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class Discriminator(Extensible):
    """Selects the inheriting schema by the value of a property.

    Attributes:
        property_name: The name of the discriminating property.
        mappings: Discriminating values mapped to schema names. A value
            without a mapping is taken as the schema name itself.
        default_mapping: The schema used when no schema is found.
    """

    property_name: str | None = None
    mappings: dict[Any, str] = field(default_factory=dict)
    default_mapping: str | None = None

    def add_mapping(self, value: Any, schema_name: str) -> None:
        with self._modifying("mappings"):
            self.mappings[value] = schema_name

    def mapping(self, value: Any) -> str | None:
        """Return the schema name mapped to ``value``.

        Values are compared as given and as strings, so ``{"1": "Foo"}`` maps
        ``1`` as well.
        """
        if value in self.mappings:
            return self.mappings[value]
        key = str(value)
        for candidate, schema_name in self.mappings.items():
            if str(candidate) == key:
                return schema_name
        return None

    def to_openapi(self, version: Any, *_: Any) -> Any:
        """Return the discriminator object, only the property name for 2.0."""
        version = OpenAPIVersion.from_value(version)
        if version < V3_0:
            return self.property_name
        result = {
            "propertyName": self.property_name,
            "mapping": presence({str(k): v for k, v in self.mappings.items()}),
            "defaultMapping": self.default_mapping if version >= V3_2 else None,
        }
        return self._with_openapi_extensions(result) if version >= V3_1 else compact(result)


__all__ = ["Discriminator"]
