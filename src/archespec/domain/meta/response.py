# src/archespec/domain/meta/response.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Responses.

Purpose:
    A response maps media types to contents and carries headers, links and
    rendering hints. ``nodoc`` responses are left out of generated documents
    but remain usable at runtime.

Layer:
    domain/meta
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from archespec.domain.meta.content import Content, ContentView
from archespec.domain.meta.header import Header
from archespec.domain.meta.link import Link
from archespec.domain.meta.model import Extensible, presence
from archespec.domain.meta.reference import (
    HeaderReference,
    LinkReference,
    ResponseReference,
    coerce_component,
)
from archespec.domain.value_objects.media import MediaType
from archespec.domain.value_objects.openapi_version import V3_2, OpenAPIVersion
from archespec.domain.value_objects.status import DEFAULT, Status, StatusCode, status_from

if TYPE_CHECKING:
    from archespec.domain.meta.definitions import Definitions

_RESPONSE_KEYWORDS = (
    "contents",
    "description",
    "headers",
    "links",
    "locale",
    "nodoc",
    "summary",
    "openapi_extensions",
)


def _content_map(values: Any) -> dict[MediaType, Content]:
    result: dict[MediaType, Content] = {}
    for key, value in (values or {}).items():
        media_type = MediaType.from_value(key or MediaType.APPLICATION_JSON)
        result[media_type] = value if isinstance(value, Content) else Content.build(**dict(value or {}))
    return result


def _header(value: Any) -> Header | HeaderReference:
    if isinstance(value, Mapping) and "ref" not in value:
        return Header.build(**value)
    return coerce_component(value, Header, HeaderReference)


@dataclass(eq=False, kw_only=True)
class Response(Extensible):
    """A response.

    Attributes:
        contents: Media types mapped to contents. The first one is the
            default.
        description: The description of the response.
        headers: Header names mapped to headers or references.
        links: Link names mapped to links or references.
        locale: The locale used while the response is rendered.
        nodoc: Leaves the response out of generated documents.
        summary: A short description, rendered from OpenAPI 3.2.
    """

    contents: dict[MediaType, Content] = field(default_factory=dict)
    description: str | None = None
    headers: dict[str, Header | HeaderReference] = field(default_factory=dict)
    links: dict[str, Link | LinkReference] = field(default_factory=dict)
    locale: str | None = None
    nodoc: bool = False
    summary: str | None = None

    def __post_init__(self) -> None:
        self.contents = _content_map(self.contents)
        self.headers = {str(k): _header(v) for k, v in (self.headers or {}).items()}
        self.links = {str(k): coerce_component(v, Link, LinkReference) for k, v in (self.links or {}).items()}
        super().__post_init__()

    @classmethod
    def build(cls, **keywords: Any) -> Response:
        """Create a response.

        Keywords that aren't response attributes describe the first content,
        ``content_type`` selects its media type, ``application/json`` by
        default.
        """
        own = {key: keywords.pop(key) for key in _RESPONSE_KEYWORDS if key in keywords}
        contents = _content_map(own.pop("contents", None))
        if keywords:
            media_type = MediaType.from_value(keywords.pop("content_type", None) or MediaType.APPLICATION_JSON)
            contents = {media_type: Content.build(**keywords), **contents}
        return cls(contents=contents, **own)

    def add_content(self, media_type: Any = None, **keywords: Any) -> Content:
        media_type = MediaType.from_value(media_type or MediaType.APPLICATION_JSON)
        with self._modifying("contents"):
            self.contents[media_type] = content = Content.build(**keywords)
        return content

    def add_header(self, name: str, **keywords: Any) -> Header | HeaderReference:
        with self._modifying("headers"):
            self.headers[str(name)] = header = _header(keywords)
        return header

    def add_link(self, name: str, **keywords: Any) -> Link | LinkReference:
        with self._modifying("links"):
            self.links[str(name)] = link = coerce_component(keywords, Link, LinkReference)
        return link

    def freeze_attributes(self) -> None:
        if not self.contents:
            self.add_content()
        super().freeze_attributes()

    @property
    def default_media_type(self) -> MediaType | None:
        return next(iter(self.contents), None)

    def to_openapi(self, version: Any, definitions: Definitions | None = None) -> dict[str, Any]:
        """Return the response object for ``version``.

        OpenAPI 2.0 describes the default content only. Its first example is
        rendered keyed by the media type.
        """
        version = OpenAPIVersion.from_value(version)
        if version.major == 2:
            result: dict[str, Any] = {"description": self.description}
            if self.contents:
                media_type, content = next(iter(self.contents.items()))
                result["schema"] = content.schema.to_openapi(version)
                example = next(iter(content.examples.values()), None)
                if example is not None:
                    result["examples"] = {str(media_type): example.resolve(definitions).value}
            result["headers"] = presence(
                {
                    name: header.to_openapi(version)
                    for name, header in self.headers.items()
                    if not header.is_reference
                }
            )
            return self._with_openapi_extensions(result)

        return self._with_openapi_extensions(
            {
                "summary": self.summary if version >= V3_2 else None,
                "description": self.description,
                "headers": presence({name: h.to_openapi(version) for name, h in self.headers.items()}),
                "content": {
                    str(media_type): content.to_openapi(version, media_type)
                    for media_type, content in self.contents.items()
                },
                "links": presence({name: link.to_openapi(version) for name, link in self.links.items()}),
            }
        )


def response_from(value: Any) -> Response | ResponseReference | None:
    """Build a response or, for keywords containing ``ref``, a reference."""
    if value is None or isinstance(value, (Response, ResponseReference)):
        return value
    keywords = dict(value)
    if "ref" in keywords:
        return ResponseReference(**keywords)
    return Response.build(**keywords)


def response_map(values: Any) -> dict[Status, Response | ResponseReference]:
    """Build responses keyed by status."""
    return {status_from(status): response_from(value) for status, value in (values or {}).items()}


def match_response(responses: Mapping[Status, Any], status: Any) -> Any:
    """Return the response for ``status``.

    Prefers the exact code, then the containing range, then the default.
    """
    status = status_from(status)
    if status in responses:
        return responses[status]
    if isinstance(status, StatusCode):
        for key in sorted(responses):
            if key.match(status):
                return responses[key]
    return responses.get(DEFAULT)


class ResponseView:
    """A response whose reference is resolved.

    ``locale`` and ``nodoc`` set on a reference take precedence over the
    values of the referred response.
    """

    def __init__(
        self,
        response: Response,
        definitions: Definitions | None,
        *,
        locale: str | None = None,
        nodoc: bool | None = None,
    ) -> None:
        self._response = response
        self._definitions = definitions
        self._locale = response.locale if locale is None else locale
        self._nodoc = response.nodoc if nodoc is None else nodoc

    @classmethod
    def wrap(cls, response: Any, definitions: Definitions | None) -> ResponseView | None:
        if response is None:
            return None
        if isinstance(response, ResponseView):
            return response
        if response.is_reference:
            lazy = response.resolve_lazily(definitions)
            return cls(
                response.resolve(definitions),
                definitions,
                locale=lazy.get("locale"),
                nodoc=lazy.get("nodoc"),
            )
        return cls(response, definitions)

    @property
    def response(self) -> Response:
        return self._response

    @property
    def description(self) -> str | None:
        return self._response.description

    @property
    def locale(self) -> str | None:
        return self._locale

    @property
    def nodoc(self) -> bool:
        return bool(self._nodoc)

    @property
    def headers(self) -> dict[str, Any]:
        return self._response.headers

    @property
    def default_media_type(self) -> MediaType | None:
        return self._response.default_media_type

    @property
    def contents(self) -> dict[MediaType, ContentView]:
        return {key: ContentView(content, self._definitions) for key, content in self._response.contents.items()}


__all__ = ["Response", "ResponseView", "match_response", "response_from", "response_map"]
