# src/archespec/domain/meta/schema/base.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Schema base class.

Purpose:
    Attributes shared by all schema types and their rendering into JSON
    Schema and OpenAPI schema objects.

Layer:
    domain/meta/schema

Notes:
    - Constructing a schema checks its shape only. Data is validated by the
      runtime pipeline through the ``validations`` map.
    - The ``validations`` map is derived from the constraint attributes on
      every read, so it can't go stale after an attribute changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from archespec.domain.enums.existence import Existence
from archespec.domain.meta.model import Extensible, ExternalDocumentation, coerce, compact, presence
from archespec.domain.meta.schema.validation import EnumValidation, Validation
from archespec.domain.value_objects.openapi_version import OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions


@dataclass(eq=False, kw_only=True)
class Schema(Extensible):
    """Base class of all concrete schemas.

    Attributes:
        default: The default value.
        deprecated: Whether the schema is deprecated.
        description: The description of the schema.
        enum: The allowed values.
        examples: Sample values matching the schema.
        external_docs: Reference to external documentation.
        existence: The level of existence, ``ALLOW_OMITTED`` by default.
        title: The title of the schema.
        conversion: A callable, or the name of a method of the value, that is
            applied to a value after it has been cast to the schema's type.
    """

    TYPE: ClassVar[str] = "object"

    default: Any = None
    deprecated: bool = False
    description: str | None = None
    enum: list[Any] | None = None
    examples: list[Any] = field(default_factory=list)
    external_docs: ExternalDocumentation | None = None
    existence: Existence = Existence.ALLOW_OMITTED
    title: str | None = None
    conversion: Callable[[Any], Any] | str | None = None

    def __post_init__(self) -> None:
        self.existence = Existence.from_value(self.existence)
        self.external_docs = coerce(self.external_docs, ExternalDocumentation)
        self.examples = list(self.examples)
        super().__post_init__()

    def _attribute_changed(self, name: str) -> None:
        if name == "existence" and not isinstance(self.existence, Existence):
            object.__setattr__(self, "existence", Existence.from_value(self.existence))

    @property
    def type(self) -> str:
        return self.TYPE

    @property
    def nullable(self) -> bool:
        """True if values may be null."""
        return self.existence.nullable

    @property
    def omittable(self) -> bool:
        """True if values may be omitted."""
        return self.existence.omittable

    def add_example(self, value: Any) -> None:
        with self._modifying("examples"):
            self.examples.append(value)

    @property
    def validations(self) -> dict[str, Validation]:
        """The validations keyed by name."""
        result: dict[str, Validation] = {}
        if self.enum is not None:
            result["enum"] = EnumValidation(tuple(self.enum))
        return result

    def convert(self, value: Any) -> Any:
        """Apply the conversion to ``value``."""
        if self.conversion is None or value is None:
            return value
        if callable(self.conversion):
            return self.conversion(value)
        return getattr(value, self.conversion)()

    def default_value(self, definitions: Definitions | None = None, *, context: str | None = None) -> Any:
        """Return the default value within ``context``.

        Falls back to the type-level default registered in ``definitions`` for
        ``"request"`` or ``"response"``.
        """
        if self.default is not None:
            return self.default
        if definitions is None:
            return None
        return definitions.default_value(self.type, context=context)

    def to_json_schema(self) -> dict[str, Any]:
        """Return the JSON Schema object."""
        result = {
            "type": [self.type, "null"] if self.nullable else self.type,
            "title": self.title,
            "description": self.description,
            "default": self.default,
            "examples": presence(self.examples),
            "deprecated": presence(self.deprecated),
        }
        for validation in self.validations.values():
            result.update(validation.to_json_schema_validation())
        return compact(result)

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        """Return the OpenAPI schema object for ``version``.

        Extensions are merged after all other fields.
        """
        return self._with_openapi_extensions(self._openapi_fields(OpenAPIVersion.from_value(version)))

    def _openapi_fields(self, version: OpenAPIVersion) -> dict[str, Any]:
        result: dict[str, Any]
        if version.major == 2:
            result = {
                "type": self.type,
                "example": self.examples[0] if self.examples else None,
            }
        elif version.minor == 0:
            result = {
                "type": self.type,
                "nullable": presence(self.nullable),
                "examples": presence(self.examples),
                "deprecated": presence(self.deprecated),
            }
        else:
            result = {
                "type": [self.type, "null"] if self.nullable else self.type,
                "examples": presence(self.examples),
                "deprecated": presence(self.deprecated),
            }
        result["title"] = self.title
        result["description"] = self.description
        result["default"] = self.default
        result["externalDocs"] = self.external_docs.to_openapi() if self.external_docs else None
        for validation in self.validations.values():
            result.update(validation.to_openapi_validation(version))
        return result


@dataclass(eq=False, kw_only=True)
class BooleanSchema(Schema):
    """Schema of ``true``/``false`` values."""

    TYPE: ClassVar[str] = "boolean"


__all__ = ["BooleanSchema", "Schema"]
