# src/archespec/domain/meta/schema/validation.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Schema validations.

Purpose:
    Constraint objects held in a schema's ``validations`` map. Each one knows
    how to check a runtime value and how to render itself into JSON Schema
    and into each OpenAPI version.

Layer:
    domain/meta/schema

Notes:
    ``validate`` returns the error message or None. Collecting the messages
    is up to the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar

from archespec.domain.value_objects.openapi_version import V3_1, OpenAPIVersion


def _number(value: Any) -> str:
    return str(value)


class Validation:
    """Base class of validations."""

    keyword: ClassVar[str]

    def validate(self, value: Any) -> str | None:  # pragma: no cover - abstract
        raise NotImplementedError

    def to_json_schema_validation(self) -> dict[str, Any]:
        return self.to_openapi_validation(V3_1)

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:  # pragma: no cover
        raise NotImplementedError


@dataclass(frozen=True)
class EnumValidation(Validation):
    values: tuple[Any, ...]

    keyword: ClassVar[str] = "enum"

    def validate(self, value: Any) -> str | None:
        return None if value in self.values else "is not included in the list"

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"enum": list(self.values)}


@dataclass(frozen=True)
class MaxLength(Validation):
    value: int

    keyword: ClassVar[str] = "max_length"

    def validate(self, value: Any) -> str | None:
        if len(value) > self.value:
            return f"is too long (maximum is {self.value} characters)"
        return None

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"maxLength": self.value}


@dataclass(frozen=True)
class MinLength(Validation):
    value: int

    keyword: ClassVar[str] = "min_length"

    def validate(self, value: Any) -> str | None:
        if len(value) < self.value:
            return f"is too short (minimum is {self.value} characters)"
        return None

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"minLength": self.value}


@dataclass(frozen=True)
class Pattern(Validation):
    value: re.Pattern[str]

    keyword: ClassVar[str] = "pattern"

    def validate(self, value: Any) -> str | None:
        return None if self.value.search(value) else "is invalid"

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"pattern": self.value.pattern}


@dataclass(frozen=True)
class Maximum(Validation):
    value: int | float
    exclusive: bool = False

    keyword: ClassVar[str] = "maximum"

    def validate(self, value: Any) -> str | None:
        if self.exclusive:
            return f"must be less than {_number(self.value)}" if value >= self.value else None
        if value > self.value:
            return f"must be less than or equal to {_number(self.value)}"
        return None

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        if not self.exclusive:
            return {"maximum": self.value}
        if version >= V3_1:
            return {"exclusiveMaximum": self.value}
        return {"maximum": self.value, "exclusiveMaximum": True}


@dataclass(frozen=True)
class Minimum(Validation):
    value: int | float
    exclusive: bool = False

    keyword: ClassVar[str] = "minimum"

    def validate(self, value: Any) -> str | None:
        if self.exclusive:
            return f"must be greater than {_number(self.value)}" if value <= self.value else None
        if value < self.value:
            return f"must be greater than or equal to {_number(self.value)}"
        return None

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        if not self.exclusive:
            return {"minimum": self.value}
        if version >= V3_1:
            return {"exclusiveMinimum": self.value}
        return {"minimum": self.value, "exclusiveMinimum": True}


@dataclass(frozen=True)
class MultipleOf(Validation):
    value: int | float

    keyword: ClassVar[str] = "multiple_of"

    def validate(self, value: Any) -> str | None:
        try:
            remainder = Decimal(str(value)) % Decimal(str(self.value))
        except InvalidOperation:
            return f"must be a multiple of {_number(self.value)}"
        return None if remainder == 0 else f"must be a multiple of {_number(self.value)}"

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"multipleOf": self.value}


@dataclass(frozen=True)
class MaxItems(Validation):
    value: int

    keyword: ClassVar[str] = "max_items"

    def validate(self, value: Any) -> str | None:
        if len(value) > self.value:
            return f"is too long (maximum is {self.value} items)"
        return None

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"maxItems": self.value}


@dataclass(frozen=True)
class MinItems(Validation):
    value: int

    keyword: ClassVar[str] = "min_items"

    def validate(self, value: Any) -> str | None:
        if len(value) < self.value:
            return f"is too short (minimum is {self.value} items)"
        return None

    def to_openapi_validation(self, version: OpenAPIVersion) -> dict[str, Any]:
        return {"minItems": self.value}


__all__ = [
    "EnumValidation",
    "MaxItems",
    "MaxLength",
    "MinItems",
    "MinLength",
    "Maximum",
    "Minimum",
    "MultipleOf",
    "Pattern",
    "Validation",
]
