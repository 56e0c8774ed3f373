# src/archespec/domain/meta/header.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Response headers.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from archespec.domain.exceptions.meta import InvalidArgumentError
from archespec.domain.meta.example import Example, default_example, example_map
from archespec.domain.meta.model import Extensible, presence
from archespec.domain.meta.reference import ExampleReference
from archespec.domain.meta.schema.factory import new_schema
from archespec.domain.value_objects.openapi_version import OpenAPIVersion

_HEADER_KEYWORDS = ("description", "deprecated", "examples", "example", "openapi_extensions")


@dataclass(eq=False, kw_only=True)
class Header(Extensible):
    """A response header. Its schema can be of any type except ``object``."""

    description: str | None = None
    deprecated: bool = False
    examples: dict[str, Example | ExampleReference] = field(default_factory=dict)
    schema: Any = None

    def __post_init__(self) -> None:
        self.examples = example_map(self.examples)
        if self.schema is None:
            self.schema = new_schema(type="string")
        elif isinstance(self.schema, dict):
            self.schema = new_schema(**self.schema)
        if self.schema.type == "object":
            raise InvalidArgumentError("type can't be object")
        super().__post_init__()

    @classmethod
    def build(cls, **keywords: Any) -> Header:
        """Create a header from header and schema keywords mixed."""
        own = {key: keywords.pop(key) for key in _HEADER_KEYWORDS if key in keywords}
        if "example" in own:
            own["examples"] = {**default_example(own.pop("example")), **example_map(own.get("examples"))}
        if "schema" in keywords and isinstance(keywords["schema"], str):
            keywords["ref"] = keywords.pop("schema")
        return cls(schema=new_schema(**keywords) if keywords else None, **own)

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        version = OpenAPIVersion.from_value(version)
        if version.major == 2:
            result = self.schema.to_openapi(version)
            result["description"] = self.description
            return self._with_openapi_extensions(result)
        return self._with_openapi_extensions(
            {
                "schema": self.schema.to_openapi(version),
                "description": self.description,
                "deprecated": presence(self.deprecated),
                "examples": presence({k: v.to_openapi(version) for k, v in self.examples.items()}),
            }
        )


__all__ = ["Header"]
