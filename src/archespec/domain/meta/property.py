# src/archespec/domain/meta/property.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Properties of object schemas.

Purpose:
    A property names a member of an object and holds its schema. It also
    knows how to read the member from an application object when a response
    is serialized.

Layer:
    domain/meta
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.exceptions.meta import InvalidArgumentError
from archespec.domain.meta.model import MetaModel
from archespec.domain.value_objects.openapi_version import V3_0, OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.schema.base import Schema
    from archespec.domain.meta.schema.reference import SchemaReference

_PROPERTY_KEYWORDS = ("name", "deprecated", "read_only", "write_only", "source")


def read_member(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping or, failing that, from an attribute."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


@dataclass(eq=False, kw_only=True)
class Property(MetaModel):
    """A property of an object schema.

    Attributes:
        name: The name of the property, must not be blank.
        deprecated: Whether the property is deprecated.
        read_only: The property is only present in responses.
        write_only: The property is only present in requests.
        source: The attribute name or callable used to read the value of
            the property from an application object, ``name`` by default.
        schema: The schema of the property.
    """

    name: str
    deprecated: bool = False
    read_only: bool = False
    write_only: bool = False
    source: str | Callable[[Any], Any] | None = None
    schema: Schema | SchemaReference = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.name is None or not str(self.name).strip():
            raise InvalidArgumentError("property name can't be blank")
        self.name = str(self.name)
        self.schema = _schema_from({} if self.schema is None else self.schema)
        super().__post_init__()

    @classmethod
    def build(cls, name: str, **keywords: Any) -> Property:
        """Create a property from property and schema keywords mixed."""
        own = {key: keywords.pop(key) for key in _PROPERTY_KEYWORDS if key in keywords}
        own.pop("name", None)
        return cls(name=name, schema=_schema_from(keywords), **own)

    @property
    def required(self) -> bool:
        """True if the property's existence is higher than ``ALLOW_OMITTED``."""
        return self.schema.existence.required

    @property
    def reader(self) -> Callable[[Any], Any]:
        """Return a function reading the value of the property from an object."""
        source = self.source
        if callable(source):
            return source
        key = source or self.name
        return lambda obj: read_member(obj, key)

    def to_json_schema(self) -> dict[str, Any]:
        return self.schema.to_json_schema()

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        """Return the schema object of the property."""
        version = OpenAPIVersion.from_value(version)
        result = self.schema.to_openapi(version)
        if self.schema.is_reference:
            return result
        if self.read_only:
            result["readOnly"] = True
        if self.write_only and version >= V3_0:
            result["writeOnly"] = True
        if self.deprecated:
            result["deprecated"] = True
        return result


def _schema_from(value: Any) -> Any:
    from archespec.domain.meta.schema.factory import schema_from

    return schema_from(value)


__all__ = ["Property", "read_member"]
