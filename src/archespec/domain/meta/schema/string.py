# src/archespec/domain/meta/schema/string.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""String schemas.

Layer:
    domain/meta/schema
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from archespec.domain.meta.schema.base import Schema
from archespec.domain.meta.schema.validation import MaxLength, MinLength, Pattern, Validation
from archespec.domain.value_objects.openapi_version import OpenAPIVersion

# Formats whose values are parsed into dates, datetimes and durations.
TYPED_FORMATS = ("date", "date-time", "duration")


@dataclass(eq=False, kw_only=True)
class StringSchema(Schema):
    """Schema of strings.

    Attributes:
        format: The format, e.g. ``"date"``, ``"date-time"`` or ``"duration"``.
            Other formats are rendered into documents but not interpreted.
        max_length: The maximum length.
        min_length: The minimum length.
        pattern: A regular expression the whole value must match somewhere.
    """

    TYPE: ClassVar[str] = "string"

    format: str | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | re.Pattern[str] | None = None

    @property
    def typed_format(self) -> str | None:
        """The format if values of this format are parsed, else None."""
        return self.format if self.format in TYPED_FORMATS else None

    @property
    def validations(self) -> dict[str, Validation]:
        result = super().validations
        if self.max_length is not None:
            result["max_length"] = MaxLength(self.max_length)
        if self.min_length is not None:
            result["min_length"] = MinLength(self.min_length)
        if self.pattern is not None:
            pattern = self.pattern if isinstance(self.pattern, re.Pattern) else re.compile(self.pattern)
            result["pattern"] = Pattern(pattern)
        return result

    def to_json_schema(self) -> dict[str, Any]:
        result = super().to_json_schema()
        if self.format is not None:
            result["format"] = self.format
        return result

    def _openapi_fields(self, version: OpenAPIVersion) -> dict[str, Any]:
        result = super()._openapi_fields(version)
        if self.format is not None:
            result["format"] = self.format
        return result


__all__ = ["TYPED_FORMATS", "StringSchema"]
