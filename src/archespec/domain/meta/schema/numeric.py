# src/archespec/domain/meta/schema/numeric.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Integer and number schemas.

Layer:
    domain/meta/schema
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from archespec.domain.exceptions.meta import InvalidArgumentError
from archespec.domain.meta.schema.base import Schema
from archespec.domain.meta.schema.validation import Maximum, Minimum, MultipleOf, Validation


@dataclass(frozen=True)
class Boundary:
    """An inclusive or exclusive boundary of a numeric range."""

    value: int | float
    exclusive: bool = False

    @classmethod
    def from_value(cls, value: Any) -> Boundary:
        """Transform a number or ``{"value": n, "exclusive": bool}``."""
        if isinstance(value, Boundary):
            return value
        if isinstance(value, Mapping):
            return cls(value["value"], bool(value.get("exclusive", False)))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls(value)
        raise InvalidArgumentError(f"invalid boundary: {value!r}")


@dataclass(eq=False, kw_only=True)
class NumericSchema(Schema):
    """Base class of integer and number schemas.

    ``maximum`` and ``minimum`` accept a number or a mapping with ``value``
    and ``exclusive`` keys.
    """

    maximum: Boundary | None = None
    minimum: Boundary | None = None
    multiple_of: int | float | None = None

    def __post_init__(self) -> None:
        self.maximum = None if self.maximum is None else Boundary.from_value(self.maximum)
        self.minimum = None if self.minimum is None else Boundary.from_value(self.minimum)
        super().__post_init__()

    def _attribute_changed(self, name: str) -> None:
        if name in ("maximum", "minimum"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, Boundary.from_value(value))
        super()._attribute_changed(name)

    def cast(self, value: Any) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError

    @property
    def validations(self) -> dict[str, Validation]:
        result = super().validations
        if self.maximum is not None:
            result["maximum"] = Maximum(self.maximum.value, exclusive=self.maximum.exclusive)
        if self.minimum is not None:
            result["minimum"] = Minimum(self.minimum.value, exclusive=self.minimum.exclusive)
        if self.multiple_of is not None:
            result["multiple_of"] = MultipleOf(self.multiple_of)
        return result


@dataclass(eq=False, kw_only=True)
class IntegerSchema(NumericSchema):
    """Schema of integers."""

    TYPE: ClassVar[str] = "integer"

    def cast(self, value: Any) -> int:
        return int(value)


@dataclass(eq=False, kw_only=True)
class NumberSchema(NumericSchema):
    """Schema of numbers."""

    TYPE: ClassVar[str] = "number"

    def cast(self, value: Any) -> float:
        return float(value)


__all__ = ["Boundary", "IntegerSchema", "NumberSchema", "NumericSchema"]
