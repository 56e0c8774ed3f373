# tests/unit/domain/services/test_content_negotiation.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for content negotiation."""

from __future__ import annotations

from archespec.domain.meta.definitions import Definitions
from archespec.domain.meta.response import ResponseView
from archespec.domain.services.content_negotiation import negotiate_content, parse_accept
from archespec.domain.value_objects.media import MediaRange, MediaType


def _response(*media_types: str) -> ResponseView:
    definitions = Definitions()
    definitions.add_operation(
        "get_foo",
        responses={200: {"contents": {media_type: {"type": "string"} for media_type in media_types}}},
    )
    return definitions.find_operation("get_foo").response(200)


def test_exact_range_selects_its_content() -> None:
    response = _response("application/json", "text/plain")

    media_type, content = negotiate_content(response, ["text/plain"])

    assert media_type == MediaType.TEXT_PLAIN
    assert content.schema.type == "string"


def test_wildcard_range_selects_the_first_registered_match() -> None:
    response = _response("application/json", "application/problem+json", "text/plain")

    assert negotiate_content(response, ["application/*"])[0] == MediaType.APPLICATION_JSON
    assert negotiate_content(response, ["*/*"])[0] == MediaType.APPLICATION_JSON


def test_ranges_are_tried_in_the_given_order() -> None:
    response = _response("application/json", "text/plain")

    assert negotiate_content(response, ["*/*", "text/plain"])[0] == MediaType.APPLICATION_JSON
    assert negotiate_content(response, ["text/html", "text/*"])[0] == MediaType.TEXT_PLAIN


def test_client_preference_beats_specificity() -> None:
    response = _response("application/json", "text/plain")

    ranges = parse_accept("text/*, application/json;q=0.1")

    assert negotiate_content(response, ranges)[0] == MediaType.TEXT_PLAIN


def test_no_match_gives_none() -> None:
    response = _response("application/json")

    assert negotiate_content(response, ["text/html"]) is None
    assert negotiate_content(response, ["garbage"]) is None
    assert negotiate_content(response, []) is None


def test_parse_accept_orders_by_quality() -> None:
    ranges = parse_accept("text/html;q=0.5, application/json, image/png;q=0, text/*;q=0.5")

    assert ranges == [
        MediaRange.from_value("application/json"),
        MediaRange.from_value("text/html"),
        MediaRange.from_value("text/*"),
    ]
    assert parse_accept(None) == []
    assert parse_accept("") == []
