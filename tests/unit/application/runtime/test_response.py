# tests/unit/application/runtime/test_response.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Unit tests for response serialization."""

from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from archespec.application.runtime.response import ResponseSerializer
from archespec.domain.exceptions.meta import InvalidArgumentError
from archespec.domain.exceptions.serialization import JsonifyError
from archespec.domain.meta.content import ContentView
from archespec.domain.meta.definitions import Definitions
from archespec.domain.value_objects.media import MediaType


def _content(definitions: Definitions | None = None, **keywords: Any) -> ContentView:
    definitions = definitions or Definitions()
    definitions.add_operation("foo", path="/foos", responses={200: keywords})
    response = definitions.find_operation("foo").response(200)
    return response.contents[MediaType.APPLICATION_JSON]


def _jsonify(obj: Any, **keywords: Any) -> Any:
    omit = keywords.pop("omit", None)
    return ResponseSerializer(obj, _content(**keywords), omit=omit).jsonify()


@dataclass
class Foo:
    id: int
    name: str | None = None


def test_objects_are_read_from_mappings_and_attributes() -> None:
    schema = {"type": "object", "properties": {"id": {"type": "integer"}, "name": {"type": "string"}}}

    assert _jsonify({"id": 1, "name": "a"}, **schema) == {"id": 1, "name": "a"}
    assert _jsonify(Foo(2, "b"), **schema) == {"id": 2, "name": "b"}


def test_empty_object_is_an_empty_dict() -> None:
    assert _jsonify({}, type="object") == {}


def test_nil_property_of_a_present_schema_raises_with_its_path() -> None:
    schema = {
        "type": "object",
        "properties": {
            "foo": {
                "type": "object",
                "properties": {"bar": {"type": "string", "existence": True}},
            }
        },
    }

    with pytest.raises(JsonifyError) as exc_info:
        _jsonify({"foo": {}}, **schema)

    assert str(exc_info.value) == "foo.bar can't be nil"
    assert exc_info.value.path == ["foo", "bar"]


def test_nil_array_item_raises_with_its_index() -> None:
    with pytest.raises(JsonifyError, match=r"^\[2\] can't be nil$"):
        _jsonify([1, 2, None], type="array", items={"type": "integer", "existence": True})


def test_nil_root_raises_on_the_response_body() -> None:
    with pytest.raises(JsonifyError, match="^response body can't be nil$"):
        _jsonify(None, type="object", existence=True)


def test_jsonify_errors_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="archespec.application.runtime.response"):
        with pytest.raises(JsonifyError):
            _jsonify(["x"], type="array", items={"type": "integer"})

    assert [record.getMessage() for record in caplog.records] == ["archespec.response.jsonify_failed"]
    assert caplog.records[0].path == "[0]"


@pytest.mark.parametrize(
    ("keywords", "value", "expected"),
    [
        ({"type": "string", "format": "date"}, date(2024, 1, 2), "2024-01-02"),
        ({"type": "string", "format": "date"}, datetime(2024, 1, 2, 3, 4), "2024-01-02"),
        (
            {"type": "string", "format": "date-time"},
            datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            "2024-01-02T03:04:05Z",
        ),
        ({"type": "string", "format": "duration"}, timedelta(days=1), "P1D"),
        ({"type": "string"}, 42, "42"),
        ({"type": "integer"}, 1.0, 1),
        ({"type": "number"}, 2, 2.0),
        ({"type": "boolean"}, True, True),
    ],
)
def test_scalars(keywords: dict[str, Any], value: Any, expected: Any) -> None:
    assert _jsonify(value, **keywords) == expected


def test_invalid_date_raises() -> None:
    with pytest.raises(JsonifyError, match="isn't a valid date"):
        _jsonify("tomorrow", type="string", format="date")


def test_default_value_replaces_nil() -> None:
    schema = {"type": "object", "properties": {"status": {"type": "string", "default": "active"}}}

    assert _jsonify({}, **schema) == {"status": "active"}


def test_write_only_properties_are_left_out() -> None:
    schema = {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "password": {"type": "string", "write_only": True},
        },
    }

    assert _jsonify({"name": "a", "password": "secret"}, **schema) == {"name": "a"}


def test_additional_properties() -> None:
    schema = {"type": "object", "additional_properties": {"type": "integer"}}

    assert _jsonify({"additional_properties": {"a": 1, "b": 2}}, **schema) == {"a": 1, "b": 2}


@pytest.mark.parametrize(
    ("omit", "expected"),
    [
        (None, {"id": 1, "name": None, "tags": []}),
        ("nil", {"id": 1, "tags": []}),
        ("empty", {"id": 1}),
    ],
)
def test_omit_policies(omit: str | None, expected: dict[str, Any]) -> None:
    schema = {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "name": {"type": "string"},
            "tags": {"type": "array", "items": {"type": "string"}},
        },
    }

    assert _jsonify({"id": 1, "name": None, "tags": []}, omit=omit, **schema) == expected


def test_omit_defaults_to_the_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    from archespec.config.settings import get_settings

    monkeypatch.setenv("ARCHESPEC_RESPONSE_OMIT", "nil")
    get_settings.cache_clear()

    serializer = ResponseSerializer({}, _content(type="object"))

    assert serializer.omit == "nil"


def test_invalid_omit_raises() -> None:
    with pytest.raises(InvalidArgumentError, match="omit must be one of"):
        ResponseSerializer({}, _content(type="object"), omit="none")


def test_discriminator_selects_the_serialized_schema() -> None:
    definitions = Definitions()
    definitions.add_schema(
        "Base",
        discriminator={"property_name": "type", "mappings": {"foo": "Foo"}},
        properties={"type": {"type": "string"}},
    )
    definitions.add_schema("Foo", all_of=["Base"], properties={"foo": {"type": "string"}})

    content = _content(definitions, schema="Base")
    serializer = ResponseSerializer({"type": "foo", "foo": "bar", "other": 1}, content)

    assert serializer.jsonify() == {"type": "foo", "foo": "bar"}


def test_to_json_passes_keywords() -> None:
    serializer = ResponseSerializer({"id": 1}, _content(type="object", properties={"id": {"type": "integer"}}))

    assert serializer.to_json() == '{"id": 1}'
    assert json.loads(serializer.to_json(indent=2)) == {"id": 1}


def test_write_json_seq_writes_one_record_per_array_item() -> None:
    content = _content(type="array", items={"type": "object", "properties": {"id": {"type": "integer"}}})
    stream = io.StringIO()

    ResponseSerializer([{"id": 1}, {"id": 2}], content).write_json_seq_to(stream)

    assert stream.getvalue() == '\x1e{"id": 1}\n\x1e{"id": 2}\n'


def test_write_json_seq_writes_other_objects_as_a_single_record() -> None:
    stream = io.StringIO()

    ResponseSerializer({"id": 1}, _content(type="object", properties={"id": {"type": "integer"}})).write_json_seq_to(
        stream
    )

    assert stream.getvalue() == '\x1e{"id": 1}\n'


def test_locale() -> None:
    assert ResponseSerializer({}, _content(type="object"), locale="de").locale == "de"
