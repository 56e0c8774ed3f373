# src/archespec/domain/meta/content.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Contents of request bodies and responses.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.meta.example import Example, default_example, example_map
from archespec.domain.meta.model import Extensible, presence
from archespec.domain.meta.reference import ExampleReference
from archespec.domain.meta.schema.array import ArraySchema
from archespec.domain.meta.schema.factory import new_schema, schema_from
from archespec.domain.meta.schema.view import SchemaView
from archespec.domain.value_objects.media import MediaType
from archespec.domain.value_objects.openapi_version import V3_2, OpenAPIVersion

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions

_CONTENT_KEYWORDS = ("examples", "example", "openapi_extensions")


@dataclass(eq=False, kw_only=True)
class Content(Extensible):
    """Binds a schema and examples to a media type or media range."""

    schema: Any = None
    examples: dict[str, Example | ExampleReference] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.schema = schema_from({} if self.schema is None else self.schema)
        self.examples = example_map(self.examples)
        super().__post_init__()

    @classmethod
    def build(cls, **keywords: Any) -> Content:
        """Create a content from content and schema keywords mixed.

        ``schema`` names a reusable schema, ``example`` adds the example
        ``"default"``.
        """
        own = {key: keywords.pop(key) for key in _CONTENT_KEYWORDS if key in keywords}
        if "example" in own:
            own["examples"] = {**default_example(own.pop("example")), **example_map(own.get("examples"))}
        if "schema" in keywords and not isinstance(keywords["schema"], str):
            return cls(schema=keywords["schema"], **own)
        return cls(schema=new_schema(**keywords), **own)

    def add_example(self, name: str = "default", **keywords: Any) -> Example:
        with self._modifying("examples"):
            self.examples[name] = example = Example(**keywords)
        return example

    def to_openapi(self, version: Any, media_type: MediaType | None = None) -> dict[str, Any]:
        """Return the media type object, OpenAPI 3.0 and higher.

        A JSON sequence of an array schema is described by ``itemSchema``
        from 3.2 on.
        """
        version = OpenAPIVersion.from_value(version)
        if (
            media_type == MediaType.APPLICATION_JSON_SEQ
            and isinstance(self.schema, ArraySchema)
            and version >= V3_2
        ):
            result: dict[str, Any] = {
                "itemSchema": self.schema.items.to_openapi(version) if self.schema.items else {}
            }
        else:
            result = {"schema": self.schema.to_openapi(version)}
        result["examples"] = presence({k: v.to_openapi(version) for k, v in self.examples.items()})
        return self._with_openapi_extensions(result)


class ContentView:
    """A content whose schema is resolved."""

    def __init__(self, content: Content, definitions: Definitions | None) -> None:
        self._content = content
        self._definitions = definitions
        self._schema: SchemaView | None = None

    @property
    def content(self) -> Content:
        return self._content

    @property
    def examples(self) -> dict[str, Any]:
        return self._content.examples

    @property
    def schema(self) -> SchemaView:
        if self._schema is None:
            self._schema = SchemaView.wrap(self._content.schema, self._definitions)
        return self._schema  # type: ignore[return-value]


__all__ = ["Content", "ContentView"]
