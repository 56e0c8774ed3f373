# tests/e2e/test_scenarios.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""End-to-end scenarios: describe an API once, then validate requests,
serialize responses, negotiate content and render documents from it."""

from __future__ import annotations

import io
import json

from archespec.application.interfaces.request_source import StaticRequest
from archespec.application.runtime.parameters import Parameters
from archespec.application.runtime.response import ResponseSerializer
from archespec.domain.meta.definitions import Definitions
from archespec.domain.services.content_negotiation import negotiate_content, parse_accept
from archespec.domain.value_objects.media import MediaType


def test_required_string_parameter() -> None:
    definitions = Definitions()
    definitions.add_operation("foo", path="/foo", parameters={"p": {"type": "string", "existence": True}})
    operation = definitions.find_operation("foo")

    blank = Parameters({"p": ""}, StaticRequest(), operation).model
    assert not blank.is_valid()
    assert blank.errors.messages_for("p") == ["can't be blank"]

    given = Parameters({"p": "q"}, StaticRequest(), operation).model
    assert given.is_valid()
    assert given["p"] == "q"


def test_discriminator_with_default_value() -> None:
    definitions = Definitions()
    definitions.add_schema(
        "Base",
        discriminator={"property_name": "type", "mappings": {"foo": "Foo"}},
        properties={"type": {"type": "string", "default": "foo"}},
    )
    definitions.add_schema("Foo", all_of=["Base"], properties={"foo": {"type": "string"}})
    definitions.add_operation("get_foo", path="/foo", responses={200: {"schema": "Base"}})

    content = definitions.find_operation("get_foo").response(200).contents[MediaType.APPLICATION_JSON]

    assert ResponseSerializer({"foo": "bar"}, content).to_json() == json.dumps({"type": "foo", "foo": "bar"})


def test_request_body_across_openapi_versions() -> None:
    definitions = Definitions(info={"title": "Foo API", "version": "1"})
    definitions.add_operation(
        "create_foo", path="/foos", method="post", request_body={"type": "string", "existence": True}
    )

    swagger = definitions.openapi_document("2.0")["paths"]["/foos"]["post"]
    [body] = [parameter for parameter in swagger["parameters"] if parameter["in"] == "body"]
    assert body["name"] == "body"
    assert body["required"] is True
    assert body["type"] == "string"

    openapi = definitions.openapi_document("3.0")["paths"]["/foos"]["post"]
    assert openapi["requestBody"]["content"] == {"application/json": {"schema": {"type": "string"}}}
    assert openapi["requestBody"]["required"] is True


def test_json_sequence_of_an_array_response() -> None:
    definitions = Definitions()
    definitions.add_operation(
        "list_foos",
        path="/foos",
        responses={200: {"type": "array", "items": {"type": "object", "properties": {"foo": {"type": "string"}}}}},
    )
    content = definitions.find_operation("list_foos").response(200).contents[MediaType.APPLICATION_JSON]
    items = [{"foo": "bar"}, {"foo": "baz"}]
    stream = io.StringIO()

    ResponseSerializer(items, content).write_json_seq_to(stream)

    assert stream.getvalue() == "".join(f"\x1e{json.dumps(item)}\n" for item in items)


def test_content_negotiation() -> None:
    definitions = Definitions()
    definitions.add_operation(
        "get_foo",
        path="/foo",
        responses={
            200: {
                "contents": {
                    "application/json": {"type": "object"},
                    "text/plain": {"type": "string"},
                }
            }
        },
    )
    response = definitions.find_operation("get_foo").response(200)

    media_type, _ = negotiate_content(response, parse_accept("text/plain"))
    assert media_type == MediaType.from_value("text/plain")

    media_type, content = negotiate_content(response, parse_accept("application/*"))
    assert media_type == MediaType.APPLICATION_JSON
    assert content.schema.type == "object"


def test_request_values_serialize_back_to_the_same_json() -> None:
    definitions = Definitions()
    definitions.add_schema(
        "Event",
        properties={
            "name": {"type": "string", "existence": True},
            "day": {"type": "string", "format": "date", "existence": True},
            "length": {"type": "string", "format": "duration", "existence": True},
            "seats": {"type": "integer", "existence": True},
            "tags": {"type": "array", "items": {"type": "string"}, "existence": True},
        },
    )
    definitions.add_operation(
        "create_event",
        path="/events",
        method="post",
        request_body={"schema": "Event"},
        responses={201: {"schema": "Event"}},
    )
    operation = definitions.find_operation("create_event")
    raw = {"name": "Launch", "day": "2024-05-01", "length": "P1D", "seats": "40", "tags": ["a", "b"]}

    model = Parameters(raw, StaticRequest(media_type="application/json"), operation, strong=True).model
    assert model.is_valid(), model.errors.full_messages

    content = operation.response(201).contents[MediaType.APPLICATION_JSON]
    echoed = ResponseSerializer(model.attributes, content).jsonify()

    assert echoed == model.serializable_dict(jsonify_values=True)
    assert echoed == {"name": "Launch", "day": "2024-05-01", "length": "P1D", "seats": 40, "tags": ["a", "b"]}
