# src/archespec/domain/meta/request_body.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Request bodies.

Purpose:
    A request body maps media ranges to contents. OpenAPI 2.0 has no
    request body object, the body is described by a synthesized ``body``
    parameter there.

Layer:
    domain/meta
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.enums.existence import Existence
from archespec.domain.meta.content import Content, ContentView
from archespec.domain.meta.model import Extensible
from archespec.domain.meta.reference import RequestBodyReference
from archespec.domain.value_objects.media import MediaRange
from archespec.domain.value_objects.openapi_version import V2_0

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions

_REQUEST_BODY_KEYWORDS = ("contents", "description", "openapi_extensions")


def _content_map(values: Any) -> dict[MediaRange, Content]:
    result: dict[MediaRange, Content] = {}
    for key, value in (values or {}).items():
        media_range = MediaRange.from_value(key or MediaRange.APPLICATION_JSON)
        result[media_range] = value if isinstance(value, Content) else Content.build(**dict(value or {}))
    return result


@dataclass(eq=False, kw_only=True)
class RequestBody(Extensible):
    """A request body.

    Attributes:
        contents: Media ranges mapped to contents. The first one is the
            default.
        description: The description of the request body.
    """

    contents: dict[MediaRange, Content] = field(default_factory=dict)
    description: str | None = None

    def __post_init__(self) -> None:
        self.contents = _content_map(self.contents)
        super().__post_init__()

    @classmethod
    def build(cls, **keywords: Any) -> RequestBody:
        """Create a request body.

        Keywords other than ``contents``, ``description`` and
        ``openapi_extensions`` describe the first content. ``content_type``
        selects its media range, ``application/json`` by default.
        """
        own = {key: keywords.pop(key) for key in _REQUEST_BODY_KEYWORDS if key in keywords}
        contents = _content_map(own.pop("contents", None))
        if keywords:
            content_type = MediaRange.from_value(keywords.pop("content_type", None) or MediaRange.APPLICATION_JSON)
            contents = {content_type: Content.build(**keywords), **contents}
        return cls(contents=contents, **own)

    def add_content(self, media_range: Any = None, **keywords: Any) -> Content:
        media_range = MediaRange.from_value(media_range or MediaRange.APPLICATION_JSON)
        with self._modifying("contents"):
            self.contents[media_range] = content = Content.build(**keywords)
        return content

    def freeze_attributes(self) -> None:
        if not self.contents:
            self.add_content()
        super().freeze_attributes()

    @property
    def default_media_range(self) -> MediaRange | None:
        return next(iter(self.contents), None)

    @property
    def default_content(self) -> Content | None:
        return next(iter(self.contents.values()), None)

    def content_for(self, media_type: Any) -> Content | None:
        """Return the content of the most specific range matching ``media_type``.

        Falls back to the default content.
        """
        if media_type is not None:
            for media_range in sorted(self.contents):
                if media_range.match(media_type):
                    return self.contents[media_range]
        return self.default_content

    def to_openapi_parameter(self) -> dict[str, Any]:
        """Return the ``body`` parameter object describing it in OpenAPI 2.0."""
        content = self.default_content
        schema = content.schema if content else None
        result: dict[str, Any] = {
            "name": "body",
            "in": "body",
            "description": self.description,
            "required": bool(schema is not None and schema.existence >= Existence.ALLOW_NIL),
        }
        if schema is not None:
            result.update(schema.to_openapi(V2_0))
        return self._with_openapi_extensions(result)

    def to_openapi(self, version: Any, *_: Any) -> dict[str, Any]:
        """Return the request body object, OpenAPI 3.0 and higher."""
        return self._with_openapi_extensions(
            {
                "description": self.description,
                "content": {
                    str(media_range): content.to_openapi(version)
                    for media_range, content in self.contents.items()
                },
                "required": all(
                    content.schema.existence >= Existence.ALLOW_NIL for content in self.contents.values()
                ),
            }
        )


def request_body_from(value: Any) -> RequestBody | RequestBodyReference | None:
    """Build a request body or, for keywords containing ``ref``, a reference."""
    if value is None or isinstance(value, (RequestBody, RequestBodyReference)):
        return value
    keywords = dict(value)
    if "ref" in keywords:
        return RequestBodyReference(**keywords)
    return RequestBody.build(**keywords)


class RequestBodyView:
    """A request body whose reference is resolved."""

    def __init__(self, request_body: RequestBody, definitions: Definitions | None) -> None:
        self._request_body = request_body
        self._definitions = definitions

    @classmethod
    def wrap(cls, request_body: Any, definitions: Definitions | None) -> RequestBodyView | None:
        if request_body is None:
            return None
        if isinstance(request_body, RequestBodyView):
            return request_body
        return cls(request_body.resolve(definitions), definitions)

    @property
    def request_body(self) -> RequestBody:
        return self._request_body

    @property
    def description(self) -> str | None:
        return self._request_body.description

    @property
    def default_media_range(self) -> MediaRange | None:
        return self._request_body.default_media_range

    @property
    def contents(self) -> dict[MediaRange, ContentView]:
        return {key: ContentView(content, self._definitions) for key, content in self._request_body.contents.items()}

    def content_for(self, media_type: Any) -> ContentView | None:
        content = self._request_body.content_for(media_type)
        return None if content is None else ContentView(content, self._definitions)


__all__ = ["RequestBody", "RequestBodyView", "request_body_from"]
