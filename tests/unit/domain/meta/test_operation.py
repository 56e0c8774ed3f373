# tests/unit/domain/meta/test_operation.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for operations seen through their registry."""

from __future__ import annotations

from archespec.domain.meta.definitions import Definitions
from archespec.domain.value_objects.media import MediaRange, MediaType


def _definitions() -> Definitions:
    definitions = Definitions()
    definitions.add_operation(
        "get_foo",
        path="/foos/{id}",
        responses={
            200: {"type": "object", "description": "OK"},
            "4XX": {"type": "string", "description": "Client error"},
            "default": {"type": "string", "description": "Error"},
        },
    )
    return definitions


def test_response_prefers_exact_code_then_range_then_default() -> None:
    operation = _definitions().find_operation("get_foo")

    assert operation.response(200).description == "OK"
    assert operation.response("404").description == "Client error"
    assert operation.response(500).description == "Error"


def test_common_responses_and_parameters_of_paths() -> None:
    definitions = Definitions()
    definitions.add_operation("get_foo", path="/foos/{id}", responses={200: {"type": "object"}})
    path = definitions.add_path("/foos")
    path.add_parameter("locale", type="string")
    path.add_response(503, type="string", description="Unavailable")
    definitions.find_operation("get_foo").operation.add_parameter("id", **{"in": "path", "type": "integer"})

    operation = definitions.find_operation("get_foo")

    assert list(operation.parameters) == ["locale", "id"]
    assert operation.response(503).description == "Unavailable"


def test_own_parameters_take_precedence_over_common_ones() -> None:
    definitions = _definitions()
    definitions.add_path("/foos").add_parameter("id", type="string")
    definitions.find_operation("get_foo").operation.add_parameter("id", **{"in": "path", "type": "integer"})

    operation = definitions.find_operation("get_foo")

    assert operation.parameters["id"].schema.type == "integer"


def test_request_body_content_for_media_type() -> None:
    definitions = Definitions()
    definitions.add_operation(
        "create_foo",
        method="post",
        request_body={
            "contents": {
                "application/*": {"type": "string"},
                "application/json": {"type": "object"},
            }
        },
    )
    request_body = definitions.find_operation("create_foo").request_body

    assert request_body.default_media_range == MediaRange.from_value("application/*")
    assert request_body.content_for("application/json").schema.type == "object"
    assert request_body.content_for("application/xml").schema.type == "string"
    assert request_body.content_for(None).schema.type == "string"
    assert request_body.content_for("text/plain").schema.type == "string"


def test_common_request_body_is_used_when_the_operation_has_none() -> None:
    definitions = Definitions()
    definitions.add_path("/foos", request_body={"type": "object"})
    definitions.add_operation("create_foo", path="/foos", method="post")

    request_body = definitions.find_operation("create_foo").request_body

    assert request_body is not None
    assert list(request_body.contents) == [MediaRange.APPLICATION_JSON]


def test_response_contents_keep_registration_order() -> None:
    definitions = Definitions()
    definitions.add_operation(
        "get_foo",
        responses={200: {"contents": {"text/plain": {"type": "string"}, "application/json": {"type": "object"}}}},
    )

    response = definitions.find_operation("get_foo").response(200)

    assert list(response.contents) == [MediaType.TEXT_PLAIN, MediaType.APPLICATION_JSON]
    assert response.default_media_type == MediaType.TEXT_PLAIN
