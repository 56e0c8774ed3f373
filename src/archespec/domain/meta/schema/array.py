# src/archespec/domain/meta/schema/array.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Array schemas.

Layer:
    domain/meta/schema
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from archespec.domain.meta.schema.base import Schema
from archespec.domain.meta.schema.validation import MaxItems, MinItems, Validation

if TYPE_CHECKING:
    from archespec.domain.meta.schema.reference import SchemaReference
    from archespec.domain.value_objects.openapi_version import OpenAPIVersion


@dataclass(eq=False, kw_only=True)
class ArraySchema(Schema):
    """Schema of arrays.

    Attributes:
        items: The schema of the items, given as a schema or as keywords.
        max_items: The maximum number of items.
        min_items: The minimum number of items.
    """

    TYPE: ClassVar[str] = "array"

    items: Schema | SchemaReference | None = None
    max_items: int | None = None
    min_items: int | None = None

    def __post_init__(self) -> None:
        self.items = _items_schema(self.items)
        super().__post_init__()

    def _attribute_changed(self, name: str) -> None:
        if name == "items":
            object.__setattr__(self, "items", _items_schema(self.items))
        super()._attribute_changed(name)

    @property
    def validations(self) -> dict[str, Validation]:
        result = super().validations
        if self.max_items is not None:
            result["max_items"] = MaxItems(self.max_items)
        if self.min_items is not None:
            result["min_items"] = MinItems(self.min_items)
        return result

    def to_json_schema(self) -> dict[str, Any]:
        result = super().to_json_schema()
        result["items"] = self.items.to_json_schema() if self.items is not None else {}
        return result

    def _openapi_fields(self, version: OpenAPIVersion) -> dict[str, Any]:
        result = super()._openapi_fields(version)
        result["items"] = self.items.to_openapi(version) if self.items is not None else {}
        return result


def _items_schema(value: Any) -> Any:
    from archespec.domain.meta.schema.factory import schema_from

    return schema_from(value)


__all__ = ["ArraySchema"]
